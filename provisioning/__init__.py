"""
==========================================
Provisioning package for the MySQL add-on.
==========================================

Name derivation, password generation, schema operations and the three
request workflows built on them.

Modules:
    naming: Tenant database/account naming and alias validation
    credentials: Password generation for tenant accounts
    schema_operations: CREATE/GRANT/DROP actions over an admin connection
    addon_orchestrator: Provision, deprovision and test workflows

Example:
    >>> from provisioning import MySQLAddon
    >>>
    >>> addon = MySQLAddon()
    >>> result = addon.test(request)
    >>> print(result.success, result.message)

Requirements:
    - SQLAlchemy >= 2.0.0
    - PyMySQL >= 1.1.0
    - python-dotenv >= 1.0.0
"""

__version__ = "0.1.0"
__all__ = [
    'MySQLAddon',
    'SchemaOperations',
    'ExecutionError',
    'InvalidAliasError',
    'derive_names',
    'generate_password'
]

from .addon_orchestrator import MySQLAddon
from .credentials import generate_password
from .naming import InvalidAliasError, derive_names
from .schema_operations import ExecutionError, SchemaOperations
