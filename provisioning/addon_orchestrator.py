"""
=====================================================
Provision, deprovision and test workflows.
=====================================================

Coordinates one request from start to result:

    derive names -> (generate password) -> resolve admin properties ->
    open admin connection -> schema operations in fixed order ->
    close connection -> build result

Workflows:
    provision:   create user, create database, grant privileges;
                 returns the tenant's connection string
    deprovision: drop database, drop user (both IF EXISTS, so repeatable)
    test:        create user, create database, grant privileges,
                 drop database, drop user

Every failure is contained: configuration, connection and execution errors
are logged with their traceback and returned as a failed result carrying the
error kind and the underlying message. Nothing is raised to the caller.

Steps that completed before a failure are left in place unless
``rollback_on_failure`` is enabled, in which case the resources this request
created are dropped again (database first, then user).

Example:
    >>> from provisioning.addon_orchestrator import MySQLAddon
    >>> from models.addon_models import ProvisionRequest, TenantIdentity
    >>>
    >>> addon = MySQLAddon()
    >>> result = addon.provision(ProvisionRequest(
    ...     tenant=TenantIdentity('acme', 'prod1'),
    ...     properties=properties
    ... ))
    >>> if result.success:
    ...     print(result.connection_string)
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from core.config import ConfigurationError, config, resolve_admin_credentials
from core.logger import get_logger
from models.addon_models import (
    AddonRequest,
    DerivedDatabase,
    ErrorKind,
    OperationResult,
    ProvisionResult,
)
from provisioning.credentials import generate_password
from provisioning.naming import derive_for_tenant
from provisioning.schema_operations import ExecutionError, SchemaOperations
from utils.database_utils import (
    DatabaseConnectionError,
    build_connection_string,
    open_admin_connection,
)

Step = Tuple[str, Callable[[SchemaOperations], None]]

EXPECTED_ERRORS = (ConfigurationError, DatabaseConnectionError, ExecutionError)


class MySQLAddon:
    """MySQL tenant database add-on.

    Each public method handles one request synchronously and returns its
    result. Instances hold no per-request state, so one instance can serve
    any number of requests.

    Attributes:
        logger: Logger receiving workflow progress and failure diagnostics
        rollback_on_failure: Drop resources created by a request that fails midway
        connection_factory: Callable(credentials, connect_timeout=...) returning
            a context manager that yields an open admin connection
        password_generator: Callable returning a new tenant password
        connect_timeout: Optional connect timeout passed to the connection factory

    Example:
        >>> addon = MySQLAddon(logger=get_logger('addon.requests'), rollback_on_failure=True)
        >>> result = addon.deprovision(request)
        >>> print(result.success, result.message)
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        rollback_on_failure: Optional[bool] = None,
        connection_factory: Optional[Callable] = None,
        password_generator: Optional[Callable[[], str]] = None,
        connect_timeout: Optional[int] = None
    ):
        self.logger = logger or get_logger(__name__)
        self.rollback_on_failure = (
            config.rollback_on_failure if rollback_on_failure is None else rollback_on_failure
        )
        self.connection_factory = connection_factory or open_admin_connection
        self.password_generator = password_generator or generate_password
        self.connect_timeout = connect_timeout

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    def provision(self, request: AddonRequest) -> ProvisionResult:
        """Create the tenant's account and database and grant it full rights.

        Returns:
            ProvisionResult with ``connection_string`` set on success
        """
        result = ProvisionResult()
        database_name = self._describe(request)

        try:
            derived = derive_for_tenant(request.tenant)
            password = self.password_generator()

            self.logger.info(f"Creating MySQL database: {database_name}")

            credentials = self._run_steps(request, derived, [
                ('create_user', lambda ops: ops.create_user(derived.account, password)),
                ('create_database', lambda ops: ops.create_database(derived.database_name)),
                ('grant_all_privileges', lambda ops: ops.grant_all_privileges(
                    derived.database_name, derived.account)),
            ], result.steps_completed)

            result.success = True
            result.connection_string = build_connection_string(
                host=credentials.host,
                port=credentials.port,
                user=derived.account.name,
                password=password,
                database=derived.database_name
            )
            result.message = "Successfully created a MySQL database."

            self.logger.info(f"Successfully created MySQL database: {database_name}")

        except Exception as e:
            result.connection_string = ''
            self._fail(result, e, f"Failed to create MySQL database '{database_name}'")

        return result

    def deprovision(self, request: AddonRequest) -> OperationResult:
        """Drop the tenant's database and account; succeeds if they are already gone."""
        result = OperationResult()
        database_name = self._describe(request)

        try:
            derived = derive_for_tenant(request.tenant)

            self.logger.info(f"Removing MySQL database: {database_name}")

            self._run_steps(request, derived, [
                ('drop_database', lambda ops: ops.drop_database(derived.database_name)),
                ('drop_user', lambda ops: ops.drop_user(derived.account)),
            ], result.steps_completed, compensate=False)

            result.success = True
            result.message = "Successfully removed a MySQL database."

            self.logger.info(f"Successfully removed MySQL database: {database_name}")

        except Exception as e:
            self._fail(result, e, f"Failed to remove MySQL database '{database_name}'")

        return result

    def test(self, request: AddonRequest) -> OperationResult:
        """Create and immediately remove the tenant's database and account.

        Checks connectivity and admin rights; never returns a connection string.
        """
        result = OperationResult()
        database_name = self._describe(request)

        try:
            derived = derive_for_tenant(request.tenant)
            password = self.password_generator()

            self.logger.info(f"Creating and removing MySQL database: {database_name}")

            self._run_steps(request, derived, [
                ('create_user', lambda ops: ops.create_user(derived.account, password)),
                ('create_database', lambda ops: ops.create_database(derived.database_name)),
                ('grant_all_privileges', lambda ops: ops.grant_all_privileges(
                    derived.database_name, derived.account)),
                ('drop_database', lambda ops: ops.drop_database(derived.database_name)),
                ('drop_user', lambda ops: ops.drop_user(derived.account)),
            ], result.steps_completed)

            result.success = True
            result.message = "Successfully created and removed a MySQL database."

            self.logger.info(f"Successfully created and removed MySQL database: {database_name}")

        except Exception as e:
            self._fail(result, e, f"Failed to create or remove MySQL database '{database_name}'")

        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _describe(request: AddonRequest) -> str:
        """Display name used in log lines, available even when derivation fails."""
        tenant = getattr(request, 'tenant', None)
        if tenant is None:
            return '<no tenant>'
        return f"{tenant.team_alias}__{tenant.instance_alias}"

    def _run_steps(
        self,
        request: AddonRequest,
        derived: DerivedDatabase,
        steps: Sequence[Step],
        completed: List[str],
        compensate: bool = True
    ):
        """Resolve admin credentials, open the connection and run ``steps`` in order.

        Completed step names are appended to ``completed``. The connection is
        closed on every path.

        Returns:
            The resolved AdminCredentials
        """
        credentials = resolve_admin_credentials(request.properties)

        with self.connection_factory(credentials, connect_timeout=self.connect_timeout) as connection:
            operations = SchemaOperations(connection, logger=self.logger)
            try:
                for step_name, action in steps:
                    action(operations)
                    completed.append(step_name)
            except Exception:
                if compensate and self.rollback_on_failure:
                    self._compensate(operations, derived, completed)
                raise

        return credentials

    def _compensate(
        self,
        operations: SchemaOperations,
        derived: DerivedDatabase,
        completed: List[str]
    ) -> None:
        """Drop what this request created and has not dropped yet.

        Failures here are logged and never replace the original error.
        """
        undo: List[Step] = []
        if 'create_database' in completed and 'drop_database' not in completed:
            undo.append(('drop_database', lambda ops: ops.drop_database(derived.database_name)))
        if 'create_user' in completed and 'drop_user' not in completed:
            undo.append(('drop_user', lambda ops: ops.drop_user(derived.account)))

        for step_name, action in undo:
            try:
                action(operations)
                self.logger.info(f"Rolled back {step_name} for {derived.database_name}")
            except ExecutionError as e:
                self.logger.warning(f"Rollback step {step_name} failed for {derived.database_name}: {e}")

    def _fail(self, result: OperationResult, error: Exception, summary: str) -> None:
        """Turn ``error`` into a failed result and log the diagnostics."""
        result.success = False
        result.message = str(error) or error.__class__.__name__
        result.error_kind = getattr(error, 'kind', ErrorKind.EXECUTION)

        if isinstance(error, EXPECTED_ERRORS):
            self.logger.error(f"{summary}: {result.message}", exc_info=error)
        else:
            self.logger.exception(f"{summary}: unexpected error: {result.message}")
