"""
Shared fixtures and fakes for provisioning tests.

Key fixtures:
- fake_connection: a FakeConnection that records every statement and can fail
  on chosen statements.
- connection_factory: a FakeConnectionFactory handing out fake_connection,
  usable as MySQLAddon(connection_factory=...).
- addon_factory: builds a MySQLAddon wired to the fakes with a fixed password.
"""

from contextlib import contextmanager

import pymysql
import pytest
from sqlalchemy.exc import OperationalError as SQLAlchemyOperationalError

from utils.database_utils import DatabaseConnectionError

FIXED_PASSWORD = 'f' * 64


def server_error(code, message, statement="statement"):
    """Build the SQLAlchemy error a failing PyMySQL statement would raise."""
    return SQLAlchemyOperationalError(statement, None, pymysql.err.OperationalError(code, message))


class FakeConnection:
    """
    Simulates the SQLAlchemy Connection used by SchemaOperations.

    Attributes:
        executed: list of (statement, params) tuples in execution order
        fail_on: dict mapping a statement prefix to the exception it raises
    """
    def __init__(self, fail_on=None):
        self.executed = []
        self.fail_on = fail_on or {}
        self.closed = False

    def exec_driver_sql(self, statement, parameters=None):
        self.executed.append((statement, parameters))
        for prefix, error in self.fail_on.items():
            if statement.startswith(prefix):
                raise error
        return None

    @property
    def statements(self):
        return [statement for statement, _ in self.executed]


class FakeConnectionFactory:
    """
    Stands in for utils.database_utils.open_admin_connection.

    Records the credentials of every call, yields the configured connection
    and marks it closed when the block exits, whatever the outcome.
    """
    def __init__(self, connection=None, connect_error=None):
        self.connection = connection or FakeConnection()
        self.connect_error = connect_error
        self.calls = []

    @contextmanager
    def __call__(self, credentials, connect_timeout=None):
        self.calls.append(credentials)
        if self.connect_error:
            raise self.connect_error
        try:
            yield self.connection
        finally:
            self.connection.closed = True


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def connection_factory(fake_connection):
    return FakeConnectionFactory(connection=fake_connection)


@pytest.fixture
def addon_factory():
    """
    Factory that creates a MySQLAddon wired to a FakeConnectionFactory.

    Returns (addon, factory) so tests can inspect executed statements.
    """
    from provisioning.addon_orchestrator import MySQLAddon

    def factory(fail_on=None, connect_error=None, **overrides):
        conn_factory = FakeConnectionFactory(
            connection=FakeConnection(fail_on=fail_on),
            connect_error=connect_error
        )
        params = dict(
            connection_factory=conn_factory,
            password_generator=lambda: FIXED_PASSWORD,
            rollback_on_failure=False
        )
        params.update(overrides)
        return MySQLAddon(**params), conn_factory

    return factory


@pytest.fixture
def refused_connection():
    return DatabaseConnectionError("Can't connect to MySQL server on 'db.internal' (111)")


@pytest.fixture
def make_connection():
    """Return the FakeConnection class so tests can build failing connections."""
    return FakeConnection


@pytest.fixture(name='server_error')
def server_error_fixture():
    """Return the server_error helper."""
    return server_error
