"""
========================================
Request and result models for the add-on.
========================================

Plain dataclasses exchanged between the hosting platform and the add-on
workflows. Requests carry the tenant identity and the platform's property
list; results carry the success flag, a human-readable message and, for
provisioning, the tenant's connection string.

Example:
    >>> from models.addon_models import ProvisionRequest, TenantIdentity
    >>>
    >>> request = ProvisionRequest(
    ...     tenant=TenantIdentity('acme', 'prod1'),
    ...     properties=[AddonProperty('mysqlServer', 'db.internal')]
    ... )
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional


class ErrorKind(Enum):
    """Failure categories reported on a failed result."""

    CONFIGURATION = 'configuration'
    CONNECTION = 'connection'
    EXECUTION = 'execution'


class AddonProperty(NamedTuple):
    """One key/value entry of the platform's property list."""

    key: str
    value: Optional[str]


@dataclass(frozen=True)
class TenantIdentity:
    """Team alias and instance alias identifying one application instance."""

    team_alias: str
    instance_alias: str


class DatabaseAccount(NamedTuple):
    """MySQL account: login name plus the host it may connect from."""

    name: str
    host: str = '%'

    def __str__(self) -> str:
        return f"'{self.name}'@'{self.host}'"


@dataclass(frozen=True)
class DerivedDatabase:
    """Database name and account derived from a TenantIdentity.

    Attributes:
        database_name: ``<team>__<instance>``
        account: ``DB_<team>__<instance>`` at wildcard host
    """

    database_name: str
    account: DatabaseAccount

    @property
    def database_user(self) -> str:
        """Quoted account identifier, e.g. ``'DB_acme__prod1'@'%'``."""
        return str(self.account)


@dataclass
class AddonRequest:
    """Common shape of every add-on request."""

    tenant: TenantIdentity
    properties: List[AddonProperty] = field(default_factory=list)


@dataclass
class ProvisionRequest(AddonRequest):
    """Create a tenant database and its dedicated account."""


@dataclass
class DeprovisionRequest(AddonRequest):
    """Remove a tenant database and its dedicated account."""


@dataclass
class TestRequest(AddonRequest):
    """Create then remove a throwaway database to check connectivity and rights."""

    __test__ = False


@dataclass
class OperationResult:
    """Outcome of a deprovision or test request.

    Attributes:
        success: True when every step completed
        message: End-user message, or the underlying error text on failure
        error_kind: Failure category, None on success
        steps_completed: Schema operations that completed, in order
    """

    success: bool = False
    message: str = ''
    error_kind: Optional[ErrorKind] = None
    steps_completed: List[str] = field(default_factory=list)


@dataclass
class ProvisionResult(OperationResult):
    """Outcome of a provision request; ``connection_string`` is empty on failure."""

    connection_string: str = ''
