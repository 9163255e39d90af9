"""
================================================
SQL utilities package for tenant database setup.
================================================

Pure SQL construction functions, organized by statement type:
    - ddl.py: CREATE/GRANT/DROP statements for tenant databases and accounts
    - query_builder.py: Identifier quoting and catalogue existence queries

All functions are side-effect free. Values (account names, hosts, passwords)
are never formatted into the SQL text; they stay as ``%s`` placeholders for
the driver to bind.

Example:
    >>> from sql.ddl import create_user_sql, create_database_sql
    >>>
    >>> create_user_sql()
    'CREATE USER %s@%s IDENTIFIED BY %s;'
    >>> create_database_sql('acme__prod1')
    'CREATE DATABASE `acme__prod1`;'
"""

__version__ = "1.0.0"
__all__ = [
    # DDL functions
    'create_user_sql', 'create_database_sql', 'grant_all_privileges_sql',
    'drop_database_sql', 'drop_user_sql',
    # Query builders
    'quote_identifier', 'check_database_exists_sql', 'check_user_exists_sql'
]

from .ddl import (
    create_database_sql,
    create_user_sql,
    drop_database_sql,
    drop_user_sql,
    grant_all_privileges_sql,
)
from .query_builder import (
    check_database_exists_sql,
    check_user_exists_sql,
    quote_identifier,
)
