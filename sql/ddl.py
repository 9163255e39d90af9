"""
==================================================================
Data Definition Language (DDL) builders for tenant database setup.
==================================================================

Pure functions returning the MySQL statements the add-on runs against the
admin connection. Database names are emitted as backtick-quoted identifiers
(they must pass ``quote_identifier`` first); account names, account hosts and
passwords are left as positional ``%s`` placeholders for the driver to bind.

Statements and their bound parameters:
    create_user_sql:              CREATE USER %s@%s IDENTIFIED BY %s;   (name, host, password)
    create_database_sql:          CREATE DATABASE `<name>`;
    grant_all_privileges_sql:     GRANT ALL ON `<name>`.* TO %s@%s;     (name, host)
    drop_database_sql:            DROP DATABASE IF EXISTS `<name>`;
    drop_user_sql:                DROP USER IF EXISTS %s@%s;            (name, host)

Example:
    >>> from sql.ddl import create_database_sql, grant_all_privileges_sql
    >>>
    >>> create_database_sql('acme__prod1')
    'CREATE DATABASE `acme__prod1`;'
    >>> grant_all_privileges_sql('acme__prod1')
    'GRANT ALL ON `acme__prod1`.* TO %s@%s;'
"""

from sql.query_builder import quote_identifier


def create_user_sql(if_not_exists: bool = False) -> str:
    """Generate CREATE USER statement.

    Args:
        if_not_exists: Add IF NOT EXISTS clause (MySQL 5.7+)

    Returns:
        SQL with placeholders for account name, account host and password
    """
    sql_parts = ["CREATE USER"]

    if if_not_exists:
        sql_parts.append("IF NOT EXISTS")

    sql_parts.append("%s@%s IDENTIFIED BY %s")

    return " ".join(sql_parts) + ";"


def create_database_sql(database_name: str, if_not_exists: bool = False) -> str:
    """Generate CREATE DATABASE statement.

    Args:
        database_name: Name of the database to create
        if_not_exists: Add IF NOT EXISTS clause

    Returns:
        SQL CREATE DATABASE statement
    """
    sql_parts = ["CREATE DATABASE"]

    if if_not_exists:
        sql_parts.append("IF NOT EXISTS")

    sql_parts.append(quote_identifier(database_name))

    return " ".join(sql_parts) + ";"


def grant_all_privileges_sql(database_name: str) -> str:
    """Generate GRANT ALL statement on every object of one database.

    Returns:
        SQL with placeholders for account name and account host
    """
    return f"GRANT ALL ON {quote_identifier(database_name)}.* TO %s@%s;"


def drop_database_sql(database_name: str, if_exists: bool = True) -> str:
    """
    Generate DROP DATABASE statement.

    Args:
        database_name: Name of the database to drop
        if_exists: Add IF EXISTS clause

    Returns:
        SQL DROP DATABASE statement
    """
    sql_parts = ["DROP DATABASE"]

    if if_exists:
        sql_parts.append("IF EXISTS")

    sql_parts.append(quote_identifier(database_name))

    return " ".join(sql_parts) + ";"


def drop_user_sql(if_exists: bool = True) -> str:
    """Generate DROP USER statement with account name/host placeholders."""
    sql_parts = ["DROP USER"]

    if if_exists:
        sql_parts.append("IF EXISTS")

    sql_parts.append("%s@%s")

    return " ".join(sql_parts) + ";"
