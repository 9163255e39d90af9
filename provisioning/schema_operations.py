"""
====================================================
Schema operations for tenant database provisioning.
====================================================

Runs the individual remote actions of a workflow against an already open
admin connection. Each action is one statement; SQL text comes from
``sql.ddl`` and values (account name, host, password) are passed to the
driver as bound parameters.

Key Features:
    - create_user / create_database / grant_all_privileges
    - drop_database / drop_user, both safe when the target does not exist
    - Server errors re-raised as ExecutionError with the server's message
    - No connection management (the caller owns the connection)

Example:
    >>> from provisioning.schema_operations import SchemaOperations
    >>> from utils.database_utils import open_admin_connection
    >>>
    >>> with open_admin_connection(credentials) as conn:
    ...     operations = SchemaOperations(conn)
    ...     operations.create_user(derived.account, password)
    ...     operations.create_database(derived.database_name)
    ...     operations.grant_all_privileges(derived.database_name, derived.account)
"""

import logging
from typing import Optional, Sequence

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from models.addon_models import DatabaseAccount, ErrorKind
from sql.ddl import (
    create_database_sql,
    create_user_sql,
    drop_database_sql,
    drop_user_sql,
    grant_all_privileges_sql,
)
from utils.database_utils import server_message

module_logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Exception raised when a statement fails on the server.

    The message is the server's error text.
    """

    kind = ErrorKind.EXECUTION


class SchemaOperations:
    """Tenant database and account DDL over one admin connection.

    Attributes:
        connection: Open SQLAlchemy connection (AUTOCOMMIT)
        logger: Logger used for statement-level debug output

    Example:
        >>> operations = SchemaOperations(conn)
        >>> operations.drop_database('acme__prod1')
        >>> operations.drop_user(DatabaseAccount('DB_acme__prod1'))
    """

    def __init__(self, connection: Connection, logger: Optional[logging.Logger] = None):
        self.connection = connection
        self.logger = logger or module_logger

    def _execute(self, statement: str, params: Sequence = ()) -> None:
        """Execute one statement, translating driver errors into ExecutionError."""
        try:
            self.connection.exec_driver_sql(statement, tuple(params))
        except SQLAlchemyError as e:
            self.logger.debug(f"Statement failed: {statement} ({e})")
            raise ExecutionError(server_message(e)) from e

    def create_user(self, account: DatabaseAccount, password: str) -> None:
        """Create ``account`` identified by ``password``.

        Raises:
            ExecutionError: If the account already exists or creation fails
        """
        self.logger.debug(f"Creating user {account}")
        self._execute(create_user_sql(), (account.name, account.host, password))

    def create_database(self, database_name: str) -> None:
        """Create ``database_name``.

        Raises:
            ExecutionError: If the database already exists or creation fails
        """
        self.logger.debug(f"Creating database {database_name}")
        self._execute(create_database_sql(database_name))

    def grant_all_privileges(self, database_name: str, account: DatabaseAccount) -> None:
        """Grant ``account`` all privileges on every object of ``database_name``."""
        self.logger.debug(f"Granting all privileges on {database_name} to {account}")
        self._execute(grant_all_privileges_sql(database_name), (account.name, account.host))

    def drop_database(self, database_name: str) -> None:
        """Drop ``database_name``; a missing database is not an error."""
        self.logger.debug(f"Dropping database {database_name}")
        self._execute(drop_database_sql(database_name, if_exists=True))

    def drop_user(self, account: DatabaseAccount) -> None:
        """Drop ``account``; a missing account is not an error."""
        self.logger.debug(f"Dropping user {account}")
        self._execute(drop_user_sql(if_exists=True), (account.name, account.host))
