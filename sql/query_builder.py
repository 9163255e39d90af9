"""
============================================
Identifier quoting and metadata query builders.
============================================

Helpers shared by the DDL builders and the connectivity utilities:
identifier quoting with a strict character allow-list, and catalogue queries
used to verify that a tenant's database or account exists.

Example:
    >>> from sql.query_builder import quote_identifier, check_database_exists_sql
    >>>
    >>> quote_identifier('acme__prod1')
    '`acme__prod1`'
    >>> check_database_exists_sql()
    'SELECT 1 FROM information_schema.SCHEMATA WHERE SCHEMA_NAME = %s'
"""

import re

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')
MAX_IDENTIFIER_LENGTH = 64


def quote_identifier(identifier: str) -> str:
    """
    Quote a MySQL identifier with backticks.

    Only letters, digits, underscore and hyphen are accepted, so the quoted
    result can never break out of the identifier position.

    Args:
        identifier: Database (schema) name

    Returns:
        Backtick-quoted identifier

    Raises:
        ValueError: If the identifier is empty, too long or has other characters
    """
    if not identifier or not IDENTIFIER_PATTERN.match(identifier):
        raise ValueError(f"Invalid identifier: {identifier!r}")
    if len(identifier) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"Identifier exceeds {MAX_IDENTIFIER_LENGTH} characters: {identifier!r}"
        )
    return f"`{identifier}`"


def check_database_exists_sql() -> str:
    """
    Generate SQL to check if a database exists.

    Returns:
        SQL query with one placeholder (database name); returns 1 if it exists
    """
    return "SELECT 1 FROM information_schema.SCHEMATA WHERE SCHEMA_NAME = %s"


def check_user_exists_sql() -> str:
    """
    Generate SQL to check if an account exists.

    Returns:
        SQL query with placeholders (account name, account host)
    """
    return "SELECT 1 FROM mysql.user WHERE User = %s AND Host = %s"
