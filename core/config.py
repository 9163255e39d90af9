"""
=============================================
Configuration management for the MySQL add-on.
=============================================

Two kinds of configuration live here:

1. Per-request administrative configuration. The hosting platform passes a
   list of key/value properties with every request; ``resolve_admin_credentials``
   turns that list into an ``AdminCredentials`` instance used to open the admin
   connection for that one request.

2. Process-level settings loaded from environment variables (.env file) into a
   ``Config`` singleton: logging level and file, connection timeout, the
   rollback-on-failure switch and, for command-line use, default admin
   properties.

Example:
    >>> from core.config import config, resolve_admin_credentials
    >>>
    >>> credentials = resolve_admin_credentials([
    ...     AddonProperty('mysqlServer', 'db.internal'),
    ...     AddonProperty('mysqlServerPort', '3306'),
    ...     AddonProperty('mysqlAdminDatabase', 'mysql'),
    ...     AddonProperty('mysqlAdminUser', 'root'),
    ...     AddonProperty('mysqlAdminPassword', 'secret'),
    ... ])
    >>> print(f"Host: {credentials.host}, Port: {credentials.port}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from dotenv import load_dotenv

from models.addon_models import AddonProperty, ErrorKind

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


class ConfigurationError(Exception):
    """Exception raised when administrative properties are missing or invalid."""

    kind = ErrorKind.CONFIGURATION


class PropertyKeys:
    """Recognized property keys (case-sensitive exact match)."""

    SERVER = 'mysqlServer'
    PORT = 'mysqlServerPort'
    ADMIN_DATABASE = 'mysqlAdminDatabase'
    ADMIN_USER = 'mysqlAdminUser'
    ADMIN_PASSWORD = 'mysqlAdminPassword'

    ALL = (SERVER, PORT, ADMIN_DATABASE, ADMIN_USER, ADMIN_PASSWORD)


PropertySource = Union[Iterable[AddonProperty], Mapping[str, Any]]


@dataclass
class AdminCredentials:
    """Administrative connection settings for one request.

    Attributes:
        host: MySQL server hostname or IP address
        port: MySQL server port number
        admin_user: Account with CREATE USER / CREATE DATABASE / GRANT rights
        admin_password: Password of the admin account
        admin_database: Database the admin connection opens
    """

    host: str
    port: int
    admin_user: str
    admin_password: str = field(repr=False)
    admin_database: str

    def get_connection_string(self) -> str:
        """Get the admin connection string in ``Server=...;Port=...;`` form."""
        from utils.database_utils import build_connection_string

        return build_connection_string(
            host=self.host,
            port=self.port,
            user=self.admin_user,
            password=self.admin_password,
            database=self.admin_database
        )

    def get_connection_params(self) -> dict:
        """Get connection parameters as dictionary.

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return {
            'host': self.host,
            'port': self.port,
            'user': self.admin_user,
            'password': self.admin_password,
            'database': self.admin_database
        }


def _lookup(properties: PropertySource, key: str) -> Optional[str]:
    """Return the first value stored under ``key``, or None when absent."""
    if isinstance(properties, Mapping):
        value = properties.get(key)
        return None if value is None else str(value)

    for prop in properties:
        if isinstance(prop, AddonProperty):
            prop_key, prop_value = prop.key, prop.value
        else:
            prop_key, prop_value = prop
        if prop_key == key:
            return None if prop_value is None else str(prop_value)
    return None


def resolve_admin_credentials(properties: PropertySource) -> AdminCredentials:
    """Build AdminCredentials from the request's property list.

    Keys are matched exactly against ``PropertyKeys``; unknown keys are
    ignored and the first occurrence of a repeated key wins. Host, port,
    admin user and admin database must be non-blank; the admin password
    may be empty but must be present.

    Args:
        properties: List of AddonProperty (or ``(key, value)`` pairs), or a mapping

    Returns:
        Resolved AdminCredentials

    Raises:
        ConfigurationError: If a required key is missing or the port is invalid
    """
    if properties is None:
        properties = []
    elif not isinstance(properties, Mapping):
        properties = list(properties)

    values = {key: _lookup(properties, key) for key in PropertyKeys.ALL}

    missing = []
    for key, value in values.items():
        if value is None:
            missing.append(key)
        elif key != PropertyKeys.ADMIN_PASSWORD and not value.strip():
            missing.append(key)

    if missing:
        raise ConfigurationError(
            f"Missing required add-on properties: {', '.join(missing)}"
        )

    raw_port = values[PropertyKeys.PORT].strip()
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError(
            f"Property {PropertyKeys.PORT} must be an integer, got '{raw_port}'"
        )
    if not 0 < port < 65536:
        raise ConfigurationError(
            f"Property {PropertyKeys.PORT} must be between 1 and 65535, got {port}"
        )

    return AdminCredentials(
        host=values[PropertyKeys.SERVER].strip(),
        port=port,
        admin_user=values[PropertyKeys.ADMIN_USER],
        admin_password=values[PropertyKeys.ADMIN_PASSWORD],
        admin_database=values[PropertyKeys.ADMIN_DATABASE].strip()
    )


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


class Config:
    """Process-level settings for the add-on.

    Attributes:
        log_level: Root logging level (ADDON_LOG_LEVEL)
        log_file: Optional log file name (ADDON_LOG_FILE)
        log_dir: Directory for the log file (ADDON_LOG_DIR)
        connect_timeout: Optional connect timeout in seconds (ADDON_CONNECT_TIMEOUT)
        rollback_on_failure: Drop resources created by a failed request
            (ADDON_ROLLBACK_ON_FAILURE)

    Example:
        >>> config = Config()
        >>> properties = config.default_admin_properties()
    """

    ENV_PROPERTY_MAP = {
        'MYSQL_SERVER': PropertyKeys.SERVER,
        'MYSQL_SERVER_PORT': PropertyKeys.PORT,
        'MYSQL_ADMIN_DATABASE': PropertyKeys.ADMIN_DATABASE,
        'MYSQL_ADMIN_USER': PropertyKeys.ADMIN_USER,
        'MYSQL_ADMIN_PASSWORD': PropertyKeys.ADMIN_PASSWORD,
    }

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.log_level = os.getenv('ADDON_LOG_LEVEL', 'INFO')
        self.log_file = os.getenv('ADDON_LOG_FILE') or None
        self.log_dir = os.getenv('ADDON_LOG_DIR', 'logs')
        self.connect_timeout = _env_int('ADDON_CONNECT_TIMEOUT')
        self.rollback_on_failure = _env_flag('ADDON_ROLLBACK_ON_FAILURE')

    def default_admin_properties(self) -> List[AddonProperty]:
        """Get admin properties from MYSQL_* environment variables.

        Only variables that are set are returned, so a missing one surfaces
        later as a ConfigurationError for the matching property key.
        """
        properties = []
        for env_name, key in self.ENV_PROPERTY_MAP.items():
            value = os.getenv(env_name)
            if value is not None:
                properties.append(AddonProperty(key, value))
        return properties


# Global configuration instance
config = Config()
