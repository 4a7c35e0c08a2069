"""
Column type helpers shared by the models.
"""

from enum import Enum as PyEnum
from typing import Type

from sqlalchemy import Enum


def value_enum(enum_cls: Type[PyEnum], length: int = 32) -> Enum:
    """
    String-backed enum column storing member values ("Pending"), not
    member names ("PENDING").
    """
    return Enum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=length,
    )
