import pytest

from app.core.security import PasswordHasher

LONG_PASSWORD = "x" * 100


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def test_hash_then_verify(hasher):
    hashed = hasher.hash("correct horse")

    assert hasher.verify("correct horse", hashed)
    assert not hasher.verify("wrong horse", hashed)


def test_unknown_user_never_matches(hasher):
    assert not hasher.verify("anything", None)


def test_long_password_is_refused_for_known_and_unknown_users(hasher):
    hashed = hasher.hash("correct horse")

    assert not hasher.verify(LONG_PASSWORD, None)
    assert not hasher.verify(LONG_PASSWORD, hashed)


def test_long_password_cannot_be_hashed(hasher):
    with pytest.raises(ValueError):
        hasher.hash(LONG_PASSWORD)


def test_malformed_stored_hash_never_matches(hasher):
    assert not hasher.verify("correct horse", "not-a-bcrypt-hash")


def test_rounds_are_bounded():
    with pytest.raises(ValueError):
        PasswordHasher(rounds=3)
