"""
Configuration package for the HR access and leave service.

This package contains environment settings and database connection
configuration.
"""

from app.config.settings import Settings, get_settings
from app.config.database import (
    create_db_engine,
    create_session_factory,
    get_db_context,
    get_db_session,
)

__all__ = [
    'Settings',
    'get_settings',
    'create_db_engine',
    'create_session_factory',
    'get_db_context',
    'get_db_session',
]
