"""
===============================================
Core infrastructure package for the MySQL add-on.
===============================================

Configuration resolution and logging infrastructure used by the provisioning
workflows and the command-line entry point.

Modules:
    config: Admin property resolution and environment settings
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import resolve_admin_credentials
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> credentials = resolve_admin_credentials(request.properties)
    >>> logger.info(f"Connecting to {credentials.host}")
"""

__version__ = "0.1.0"
__all__ = [
    'get_logger', 'setup_logging', 'setup_logging_from_config',
    'config', 'Config', 'AdminCredentials', 'ConfigurationError',
    'PropertyKeys', 'resolve_admin_credentials'
]

from core.config import (
    AdminCredentials,
    Config,
    ConfigurationError,
    PropertyKeys,
    config,
    resolve_admin_credentials,
)
from core.logger import get_logger, setup_logging, setup_logging_from_config
