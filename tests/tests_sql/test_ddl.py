"""
=============================================
Pytest suite for sql/ddl.py and sql/query_builder.py
=============================================

Sections:
---------
1. Unit tests - statement text for every DDL builder
2. Edge case tests - identifier allow-list and length limits

How to Execute:
---------------
All tests:          python -m pytest tests/tests_sql/test_ddl.py -v
"""

import pytest

from sql.ddl import (
    create_database_sql,
    create_user_sql,
    drop_database_sql,
    drop_user_sql,
    grant_all_privileges_sql,
)
from sql.query_builder import (
    check_database_exists_sql,
    check_user_exists_sql,
    quote_identifier,
)

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_create_user_sql_binds_account_and_password():
    assert create_user_sql() == "CREATE USER %s@%s IDENTIFIED BY %s;"


@pytest.mark.unit
def test_create_user_sql_if_not_exists():
    assert create_user_sql(if_not_exists=True) == "CREATE USER IF NOT EXISTS %s@%s IDENTIFIED BY %s;"


@pytest.mark.unit
def test_create_database_sql():
    assert create_database_sql('acme__prod1') == "CREATE DATABASE `acme__prod1`;"
    assert create_database_sql('acme__prod1', if_not_exists=True) == (
        "CREATE DATABASE IF NOT EXISTS `acme__prod1`;"
    )


@pytest.mark.unit
def test_grant_all_privileges_sql():
    assert grant_all_privileges_sql('acme__prod1') == "GRANT ALL ON `acme__prod1`.* TO %s@%s;"


@pytest.mark.unit
def test_drop_database_sql_defaults_to_if_exists():
    assert drop_database_sql('acme__prod1') == "DROP DATABASE IF EXISTS `acme__prod1`;"
    assert drop_database_sql('acme__prod1', if_exists=False) == "DROP DATABASE `acme__prod1`;"


@pytest.mark.unit
def test_drop_user_sql_defaults_to_if_exists():
    assert drop_user_sql() == "DROP USER IF EXISTS %s@%s;"
    assert drop_user_sql(if_exists=False) == "DROP USER %s@%s;"


@pytest.mark.unit
def test_existence_queries_use_placeholders():
    assert check_database_exists_sql().endswith("SCHEMA_NAME = %s")
    assert check_user_exists_sql() == "SELECT 1 FROM mysql.user WHERE User = %s AND Host = %s"


@pytest.mark.unit
def test_quote_identifier():
    assert quote_identifier('acme__prod-1') == "`acme__prod-1`"


# ==================
# 2. EDGE CASE TESTS
# ==================

@pytest.mark.edge_case
@pytest.mark.parametrize("identifier", [
    '',
    'acme`; DROP DATABASE mysql; --',
    'acme prod',
    "acme'",
    'acme.prod',
    'acme%',
])
def test_quote_identifier_rejects_unsafe_names(identifier):
    with pytest.raises(ValueError):
        quote_identifier(identifier)


@pytest.mark.edge_case
def test_quote_identifier_length_limit():
    assert quote_identifier('a' * 64) == f"`{'a' * 64}`"
    with pytest.raises(ValueError, match='64'):
        quote_identifier('a' * 65)


@pytest.mark.edge_case
def test_ddl_builders_reject_unsafe_names():
    with pytest.raises(ValueError):
        create_database_sql('x`y')
    with pytest.raises(ValueError):
        grant_all_privileges_sql('x y')
    with pytest.raises(ValueError):
        drop_database_sql('')
