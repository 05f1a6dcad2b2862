"""
Configuration management for the Catalog Manager application.

This module handles:
- Database path configuration
- Environment-specific configuration (development vs. production)
- Environment variable overrides (CATALOG_*), with warnings on bad values
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import (
    APP_NAME,
    APP_VERSION,
    DATABASE_FILENAME,
    DATABASE_VERSION,
)

logger = logging.getLogger(__name__)

DEFAULT_DB_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back with a warning."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}; using default {default}")
        return default
    if value <= 0:
        logger.warning(f"Invalid {name}={raw!r} (must be positive); using default {default}")
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid {name}={raw!r}; using default {default}")
    return default


class Config:
    """
    Application configuration manager.

    Handles all configuration settings including database location,
    environment settings and logging level.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
        """
        self.environment = environment

        if environment == "development":
            # Use project data/ directory for development
            self._base_dir = Path(__file__).parent.parent.parent / "data"
        else:
            # Use a per-user application directory for production
            self._base_dir = Path.home() / ".catalog-manager"

        self._database_path = self._base_dir / DATABASE_FILENAME
        self._database_url_override = os.environ.get("CATALOG_DATABASE_URL", "").strip() or None

        self._db_timeout = _env_int("CATALOG_DB_TIMEOUT", DEFAULT_DB_TIMEOUT)
        self._echo_sql = _env_bool("CATALOG_ECHO_SQL", False)
        self._log_level = self._read_log_level()

    def _read_log_level(self) -> str:
        raw = os.environ.get("CATALOG_LOG_LEVEL", "").strip()
        if not raw:
            return DEFAULT_LOG_LEVEL
        if raw.upper() not in VALID_LOG_LEVELS:
            logger.warning(f"Invalid CATALOG_LOG_LEVEL={raw!r}; using default {DEFAULT_LOG_LEVEL}")
            return DEFAULT_LOG_LEVEL
        return raw.upper()

    def ensure_directories(self) -> None:
        """Create the database directory if it doesn't exist."""
        if self._database_url_override is None:
            self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def app_name(self) -> str:
        return APP_NAME

    @property
    def app_version(self) -> str:
        return APP_VERSION

    @property
    def database_version(self) -> str:
        """Database schema version."""
        return DATABASE_VERSION

    @property
    def database_path(self) -> Path:
        """Full path to the database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        CATALOG_DATABASE_URL wins over the environment's default SQLite file.
        """
        if self._database_url_override is not None:
            return self._database_url_override
        # Use forward slashes for SQLite URL
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def db_timeout(self) -> int:
        """Seconds SQLite waits on a locked database."""
        return self._db_timeout

    @property
    def echo_sql(self) -> bool:
        """Log every SQL statement."""
        return self._echo_sql

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def database_exists(self) -> bool:
        """
        Check if database file exists.

        Returns:
            True if database file exists, False otherwise
        """
        return self._database_path.exists()

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument - this prevents accidental database
    switching mid-session.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    CATALOG_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get("CATALOG_ENV", "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton to prevent database switching."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None


def get_database_url() -> str:
    """Get the database URL."""
    return get_config().database_url
