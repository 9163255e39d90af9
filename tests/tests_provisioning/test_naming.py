"""
Pytest suite for provisioning/naming.py and provisioning/credentials.py.

Covers deterministic name derivation, the alias allow-list, MySQL name
length limits and password generation.
"""

import re

import pytest

from core.config import ConfigurationError
from models.addon_models import DatabaseAccount, ErrorKind, TenantIdentity
from provisioning.credentials import PASSWORD_LENGTH, generate_password
from provisioning.naming import (
    ALIAS_PATTERN,
    MAX_DATABASE_NAME_LENGTH,
    InvalidAliasError,
    derive_for_tenant,
    derive_names,
    validate_alias,
)
from sql.query_builder import IDENTIFIER_PATTERN, MAX_IDENTIFIER_LENGTH, quote_identifier

HEX_64 = re.compile(r'^[0-9a-f]{64}$')


# ===============
# 1. NAMING
# ===============

@pytest.mark.unit
def test_derive_names_acme_prod1():
    derived = derive_names('acme', 'prod1')

    assert derived.database_name == 'acme__prod1'
    assert derived.database_user == "'DB_acme__prod1'@'%'"
    assert derived.account == DatabaseAccount('DB_acme__prod1', '%')


@pytest.mark.unit
@pytest.mark.parametrize("team,instance", [
    ('acme', 'prod1'),
    ('Team-7', 'blue_green'),
    ('a', 'b'),
])
def test_derive_names_is_deterministic(team, instance):
    assert derive_names(team, instance) == derive_names(team, instance)


@pytest.mark.unit
def test_derive_names_distinct_tenants_get_distinct_names():
    first = derive_names('acme', 'prod1')
    second = derive_names('acme', 'prod2')

    assert first.database_name != second.database_name
    assert first.account != second.account


@pytest.mark.unit
def test_derive_for_tenant():
    assert derive_for_tenant(TenantIdentity('acme', 'prod1')) == derive_names('acme', 'prod1')


@pytest.mark.edge_case
def test_derive_for_missing_tenant_is_configuration_error():
    with pytest.raises(InvalidAliasError, match="Tenant identity is required") as exc_info:
        derive_for_tenant(None)

    assert exc_info.value.kind is ErrorKind.CONFIGURATION


@pytest.mark.unit
def test_alias_rules_match_identifier_quoting():
    assert ALIAS_PATTERN is IDENTIFIER_PATTERN
    assert MAX_DATABASE_NAME_LENGTH == MAX_IDENTIFIER_LENGTH

    derived = derive_names("Team-7", "blue_green")
    assert quote_identifier(derived.database_name) == f"`{derived.database_name}`"


@pytest.mark.edge_case
@pytest.mark.parametrize("alias", [
    '',
    "acme'; DROP USER root; --",
    'acme prod',
    'acme`',
    'acme.prod',
    'acme@host',
    None,
])
def test_derive_names_rejects_unsafe_aliases(alias):
    with pytest.raises(InvalidAliasError):
        derive_names(alias, 'prod1')
    with pytest.raises(InvalidAliasError):
        derive_names('acme', alias)


@pytest.mark.edge_case
def test_invalid_alias_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc_info:
        validate_alias('bad alias', 'Team alias')

    assert exc_info.value.kind is ErrorKind.CONFIGURATION
    assert 'Team alias' in str(exc_info.value)


@pytest.mark.edge_case
def test_derive_names_user_name_length_limit():
    # DB_ + 13 + __ + 14 = 32 characters, the MySQL maximum
    derived = derive_names('t' * 13, 'i' * 14)
    assert len(derived.account.name) == 32

    with pytest.raises(InvalidAliasError, match='32'):
        derive_names('t' * 13, 'i' * 15)


@pytest.mark.edge_case
def test_derive_names_database_name_length_limit():
    with pytest.raises(InvalidAliasError, match='64'):
        derive_names('t' * 40, 'i' * 40)


# ===============
# 2. CREDENTIALS
# ===============

@pytest.mark.unit
def test_generate_password_is_64_lowercase_hex():
    password = generate_password()

    assert len(password) == PASSWORD_LENGTH
    assert HEX_64.match(password)


@pytest.mark.unit
def test_generate_password_never_repeats():
    passwords = [generate_password() for _ in range(1000)]

    assert all(HEX_64.match(password) for password in passwords)
    assert len(set(passwords)) == len(passwords)
