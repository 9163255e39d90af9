"""
==================================================
Database connectivity utilities for MySQL.
==================================================

Connection helpers used by the provisioning workflows: connection string
building and parsing, a scoped connection factory, a health check and
catalogue existence probes.

Every connection handed out by ``connect`` is scoped to a ``with`` block: the
connection is closed and its engine disposed on every exit path, including
exceptions raised inside the block. Nothing done on the server inside the
block is rolled back by this module (connections run in AUTOCOMMIT mode).

Example:
    >>> from utils.database_utils import open_admin_connection, verify_database_exists
    >>>
    >>> with open_admin_connection(credentials) as conn:
    ...     if verify_database_exists(conn, 'acme__prod1'):
    ...         print("Tenant database exists")
    >>>
    >>> conn_str = build_connection_string('db', 3306, 'DB_acme__prod1', 'pwd', 'acme__prod1')
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import pymysql
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import SQLAlchemyError

from core.config import AdminCredentials, config
from models.addon_models import DatabaseAccount, ErrorKind
from sql.query_builder import check_database_exists_sql, check_user_exists_sql

logger = logging.getLogger(__name__)

CONNECTION_STRING_FORMAT = "Server={host};Port={port};Uid={user};Pwd={password};Database={database};"

_CONNECTION_STRING_KEYS = {
    'server': 'host',
    'port': 'port',
    'uid': 'user',
    'pwd': 'password',
    'database': 'database',
}


class DatabaseConnectionError(Exception):
    """Exception raised when the server cannot be reached or authentication fails."""

    kind = ErrorKind.CONNECTION


def server_message(error: BaseException) -> str:
    """
    Extract the server's error text from a driver or SQLAlchemy exception.

    PyMySQL errors carry ``(code, message)`` args; SQLAlchemy wraps them in
    ``.orig``. Falls back to ``str(error)`` for anything else.
    """
    orig = getattr(error, 'orig', None) or error
    args = getattr(orig, 'args', ())
    if len(args) >= 2 and isinstance(args[1], str):
        return args[1]
    return str(orig)


def build_connection_string(
    host: str,
    port: int,
    user: str,
    password: str,
    database: str
) -> str:
    """
    Build a ``Server=...;Port=...;Uid=...;Pwd=...;Database=...;`` string.

    Example:
        >>> build_connection_string('db', 3306, 'u', 'p', 'd')
        'Server=db;Port=3306;Uid=u;Pwd=p;Database=d;'
    """
    return CONNECTION_STRING_FORMAT.format(
        host=host,
        port=port,
        user=user,
        password=password,
        database=database
    )


def parse_connection_string(connection_string: str) -> Dict[str, object]:
    """
    Parse a connection string produced by ``build_connection_string``.

    Keys are matched case-insensitively; unknown keys are ignored. Values
    cannot contain ``;``.

    Returns:
        Dictionary with keys: host, port, user, password, database

    Raises:
        ValueError: If a key is missing or the port is not an integer
    """
    params: Dict[str, object] = {}
    for part in connection_string.split(';'):
        if not part.strip():
            continue
        key, sep, value = part.partition('=')
        if not sep:
            raise ValueError(f"Malformed connection string segment: {part!r}")
        name = _CONNECTION_STRING_KEYS.get(key.strip().lower())
        if name and name not in params:
            params[name] = value

    missing = [name for name in _CONNECTION_STRING_KEYS.values() if name not in params]
    if missing:
        raise ValueError(f"Connection string is missing: {', '.join(missing)}")

    try:
        params['port'] = int(params['port'])
    except ValueError:
        raise ValueError(f"Invalid port in connection string: {params['port']!r}")

    return params


@contextmanager
def connect(
    host: str,
    port: int,
    user: str,
    password: str,
    database: str,
    connect_timeout: Optional[int] = None
) -> Iterator[Connection]:
    """
    Open one AUTOCOMMIT connection to a MySQL server.

    Args:
        host: MySQL server hostname
        port: MySQL server port
        user: Login name
        password: Login password
        database: Database to open
        connect_timeout: Seconds to wait for the handshake
            (defaults to config.connect_timeout, then the driver default)

    Yields:
        SQLAlchemy Connection, closed when the block exits

    Raises:
        DatabaseConnectionError: If the network or authentication handshake fails
    """
    if connect_timeout is None:
        connect_timeout = config.connect_timeout

    connection_url = URL.create(
        drivername='mysql+pymysql',
        username=user,
        password=password,
        host=host,
        port=port,
        database=database
    )
    engine_kwargs = {'isolation_level': 'AUTOCOMMIT', 'echo': False}
    if connect_timeout:
        engine_kwargs['connect_args'] = {'connect_timeout': connect_timeout}

    engine = create_engine(connection_url, **engine_kwargs)
    try:
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            logger.debug(f"Connection to {host}:{port}/{database} failed: {e}")
            raise DatabaseConnectionError(server_message(e)) from e

        try:
            yield connection
        finally:
            connection.close()
    finally:
        engine.dispose()


def open_connection(
    connection_string: str,
    connect_timeout: Optional[int] = None
):
    """
    Open a scoped connection described by a connection string.

    Example:
        >>> with open_connection('Server=db;Port=3306;Uid=u;Pwd=p;Database=d;') as conn:
        ...     conn.exec_driver_sql('SELECT 1')
    """
    params = parse_connection_string(connection_string)
    return connect(connect_timeout=connect_timeout, **params)


def open_admin_connection(
    credentials: AdminCredentials,
    connect_timeout: Optional[int] = None
):
    """Open a scoped connection with the request's admin credentials."""
    return connect(connect_timeout=connect_timeout, **credentials.get_connection_params())


def check_database_available(
    host: str,
    port: int,
    user: str,
    password: str,
    database: Optional[str] = None,
    timeout: int = 5
) -> bool:
    """
    Check if a MySQL server accepts the given credentials.

    Returns:
        True if a connection could be opened, False otherwise
    """
    try:
        conn = pymysql.connect(
            host=host,
            port=port,
            user=user,
            password=password,
            database=database,
            connect_timeout=timeout
        )
        conn.close()
        return True
    except pymysql.err.OperationalError as e:
        logger.debug(f"Database not available: {e}")
        return False


def verify_database_exists(connection: Connection, database_name: str) -> bool:
    """Return True if ``database_name`` exists on the connected server."""
    result = connection.exec_driver_sql(check_database_exists_sql(), (database_name,))
    return result.fetchone() is not None


def verify_user_exists(connection: Connection, account: DatabaseAccount) -> bool:
    """Return True if ``account`` exists on the connected server."""
    result = connection.exec_driver_sql(check_user_exists_sql(), (account.name, account.host))
    return result.fetchone() is not None
