"""
==========================
Utility Functions Package.
==========================

Reusable MySQL connectivity helpers for the add-on.

Modules:
    database_utils: Scoped connections, connection strings and existence checks
"""

__version__ = "1.0.0"
__all__ = [
    'DatabaseConnectionError',
    'build_connection_string',
    'parse_connection_string',
    'connect',
    'open_connection',
    'open_admin_connection',
    'check_database_available',
    'verify_database_exists',
    'verify_user_exists'
]

from .database_utils import (
    DatabaseConnectionError,
    build_connection_string,
    check_database_available,
    connect,
    open_admin_connection,
    open_connection,
    parse_connection_string,
    verify_database_exists,
    verify_user_exists,
)
