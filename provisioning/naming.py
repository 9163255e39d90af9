"""
Tenant database and account naming.

Names are derived, never stored: the same (team alias, instance alias) pair
always maps to the same database and account.

    database name:  <team>__<instance>
    account:        'DB_<team>__<instance>'@'%'

Aliases are checked against a strict allow-list before any name is built,
because the database name ends up in an identifier position of the DDL.
"""

from typing import Optional

from core.config import ConfigurationError
from models.addon_models import DatabaseAccount, DerivedDatabase, TenantIdentity
from sql.query_builder import IDENTIFIER_PATTERN, MAX_IDENTIFIER_LENGTH

DATABASE_NAME_FORMAT = "{team}__{instance}"
USER_NAME_FORMAT = "DB_{team}__{instance}"
USER_HOST = '%'

# Aliases end up inside database names, so they share the identifier allow-list
ALIAS_PATTERN = IDENTIFIER_PATTERN

# MySQL server limits
MAX_DATABASE_NAME_LENGTH = MAX_IDENTIFIER_LENGTH
MAX_USER_NAME_LENGTH = 32


class InvalidAliasError(ConfigurationError):
    """Raised when an alias would produce an unsafe or over-long name."""


def validate_alias(alias: str, label: str) -> str:
    """Return ``alias`` unchanged if it only holds letters, digits, '_' or '-'."""
    if not isinstance(alias, str) or not ALIAS_PATTERN.match(alias):
        raise InvalidAliasError(
            f"{label} {alias!r} may only contain letters, digits, '_' and '-'"
        )
    return alias


def derive_names(team_alias: str, instance_alias: str) -> DerivedDatabase:
    """
    Derive the tenant's database name and account.

    Args:
        team_alias: Development team alias
        instance_alias: Application instance alias

    Returns:
        DerivedDatabase

    Raises:
        InvalidAliasError: If an alias is not allow-listed or a name is too long

    Example:
        >>> derived = derive_names('acme', 'prod1')
        >>> derived.database_name, derived.database_user
        ('acme__prod1', "'DB_acme__prod1'@'%'")
    """
    team = validate_alias(team_alias, 'Team alias')
    instance = validate_alias(instance_alias, 'Instance alias')

    database_name = DATABASE_NAME_FORMAT.format(team=team, instance=instance)
    user_name = USER_NAME_FORMAT.format(team=team, instance=instance)

    if len(database_name) > MAX_DATABASE_NAME_LENGTH:
        raise InvalidAliasError(
            f"Database name {database_name!r} exceeds {MAX_DATABASE_NAME_LENGTH} characters"
        )
    if len(user_name) > MAX_USER_NAME_LENGTH:
        raise InvalidAliasError(
            f"User name {user_name!r} exceeds {MAX_USER_NAME_LENGTH} characters"
        )

    return DerivedDatabase(
        database_name=database_name,
        account=DatabaseAccount(name=user_name, host=USER_HOST)
    )


def derive_for_tenant(tenant: Optional[TenantIdentity]) -> DerivedDatabase:
    """Shortcut for ``derive_names(tenant.team_alias, tenant.instance_alias)``."""
    if tenant is None:
        raise InvalidAliasError("Tenant identity is required")
    return derive_names(tenant.team_alias, tenant.instance_alias)
