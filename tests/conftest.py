"""
Shared pytest configuration and fixtures for all tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to sys.path to enable importing project modules
# This allows tests to import from 'core', 'sql', 'provisioning', etc. without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from models.addon_models import AddonProperty


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests - isolated function-level tests")
    config.addinivalue_line("markers", "integration: Integration tests - need a live MySQL server")
    config.addinivalue_line("markers", "smoke: Smoke tests - basic functionality checks")
    config.addinivalue_line("markers", "edge_case: Edge case tests - boundary conditions")
    config.addinivalue_line("markers", "system: System tests - full workflow behavior with fakes")
    config.addinivalue_line("markers", "e2e: End-to-end tests - complete workflow tests")


@pytest.fixture
def admin_properties():
    """A complete, valid admin property list."""
    return [
        AddonProperty('mysqlServer', 'db.internal'),
        AddonProperty('mysqlServerPort', '3306'),
        AddonProperty('mysqlAdminDatabase', 'mysql'),
        AddonProperty('mysqlAdminUser', 'root'),
        AddonProperty('mysqlAdminPassword', 'admin-secret'),
    ]


@pytest.fixture
def restore_root_logger():
    """Snapshot and restore root handlers so tests do not leak logging config."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
