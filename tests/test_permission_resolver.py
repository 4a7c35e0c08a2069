from app.models import Permission


def test_user_without_roles_resolves_to_empty_set(resolver, employee):
    assert resolver.resolve(employee.id) == frozenset()


def test_permissions_are_union_of_active_roles(resolver, employee, make_role, assign_role):
    clerk = make_role("Clerk", [Permission.LEAVE_REQUEST_READ, Permission.LEAVE_REQUEST_CREATE])
    viewer = make_role("Viewer", [Permission.LEAVE_REQUEST_READ, Permission.LEAVE_TYPE_READ])
    assign_role(employee, clerk)
    assign_role(employee, viewer)

    permissions = resolver.resolve(employee.id)

    assert isinstance(permissions, frozenset)
    assert permissions == {
        Permission.LEAVE_REQUEST_READ,
        Permission.LEAVE_REQUEST_CREATE,
        Permission.LEAVE_TYPE_READ,
    }


def test_inactive_assignment_contributes_nothing(resolver, employee, make_role, assign_role):
    assign_role(employee, make_role("Clerk", [Permission.LEAVE_REQUEST_READ]), is_active=False)

    assert resolver.resolve(employee.id) == frozenset()


def test_inactive_role_contributes_nothing(resolver, employee, make_role, assign_role):
    assign_role(employee, make_role("Retired", [Permission.ROLE_READ], is_active=False))
    assign_role(employee, make_role("Clerk", [Permission.LEAVE_REQUEST_READ]))

    assert resolver.resolve(employee.id) == {Permission.LEAVE_REQUEST_READ}


def test_deactivating_assignment_revokes_on_next_resolution(
    resolver, role_service, employee, make_role, assign_role
):
    clerk = make_role("Clerk", [Permission.LEAVE_REQUEST_READ])
    assign_role(employee, clerk)
    assert Permission.LEAVE_REQUEST_READ in resolver.resolve(employee.id)

    assert role_service.set_assignment_active(employee.id, clerk.id, False).is_success

    assert resolver.resolve(employee.id) == frozenset()
