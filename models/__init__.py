"""
========================================
Models for the MySQL add-on
========================================

Request, result and identity types shared by the configuration layer, the
provisioning workflows and the command-line entry point.

Modules:
    addon_models: Requests, results, tenant identity and derived names

Example:
    >>> from models import ProvisionRequest, TenantIdentity
    >>>
    >>> request = ProvisionRequest(tenant=TenantIdentity('acme', 'prod1'))
"""

__version__ = "0.1.0"
__all__ = [
    # Requests
    'AddonRequest',
    'ProvisionRequest',
    'DeprovisionRequest',
    'TestRequest',
    # Results
    'OperationResult',
    'ProvisionResult',
    'ErrorKind',
    # Identity and naming
    'AddonProperty',
    'TenantIdentity',
    'DatabaseAccount',
    'DerivedDatabase',
]

from .addon_models import (
    AddonProperty,
    AddonRequest,
    DatabaseAccount,
    DeprovisionRequest,
    DerivedDatabase,
    ErrorKind,
    OperationResult,
    ProvisionRequest,
    ProvisionResult,
    TenantIdentity,
    TestRequest,
)
