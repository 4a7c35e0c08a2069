"""
Base models package.

Provides the declarative base and abstract base classes for all
database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
]
