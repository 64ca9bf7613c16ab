# Path: ikea_api/core/config_loader.py
"""
Configuration Loader

Centralized configuration management for the IKEA API module.
Loads and validates environment variables with type safety and defaults.

This module provides a singleton ConfigLoader that reads from .env file
and provides type-safe access to all configuration values. Values can be
changed at runtime with set(); callers read region, locale, cache root and
timeouts at the start of every operation, so a change applies to the next
operation only.
"""

import os
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from ikea_api.constants import (
    DEFAULT_REGION,
    DEFAULT_LOCALE,
    DEFAULT_CACHE_DIRNAME,
    DEFAULT_POOL_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_SEARCH_PAGE_SIZE,
    DEFAULT_SEARCH_BASE_URL,
    DEFAULT_CATALOG_BASE_URL,
    DEFAULT_API_BASE_URL,
    DEFAULT_USER_AGENT,
    DEFAULT_CLIENT_ID,
    MIN_THUMBNAIL_SIZE,
    MIN_MODEL_SIZE,
    ENV_REGION,
    ENV_LOCALE,
    ENV_CACHE_DIR,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_POOL_SIZE,
    ENV_REQUEST_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_SEARCH_PAGE_SIZE,
    ENV_USER_AGENT,
    ENV_CLIENT_ID,
    ENV_SEARCH_BASE_URL,
    ENV_CATALOG_BASE_URL,
    ENV_API_BASE_URL,
    ENV_MIN_THUMBNAIL_SIZE,
    ENV_MIN_MODEL_SIZE,
)


# Keys whose values are coerced to Path on set()
PATH_KEYS: frozenset = frozenset({'cache_dir', 'log_dir'})


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults. All configuration access
    should go through this class to ensure consistency.

    Example:
        config = ConfigLoader()
        region = config.get('region')
        config.set('locale', 'fr')
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        and validates all configuration on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # config_loader.py is at: <root>/ikea_api/core/config_loader.py
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance; the next ConfigLoader() re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values with proper types
        """
        config = {
            # ================================================================
            # CATALOG LOCATION
            # ================================================================
            'region': self._get_env(ENV_REGION, DEFAULT_REGION).lower(),
            'locale': self._get_env(ENV_LOCALE, DEFAULT_LOCALE).lower(),

            # ================================================================
            # DIRECTORY PATHS
            # ================================================================
            'cache_dir': self._get_path(ENV_CACHE_DIR) or Path(DEFAULT_CACHE_DIRNAME),
            'log_dir': self._get_path(ENV_LOG_DIR),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, 'INFO'),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),

            # ================================================================
            # TRANSPORT CONFIGURATION
            # ================================================================
            'pool_size': self._get_int(ENV_POOL_SIZE, DEFAULT_POOL_SIZE),
            'request_timeout': self._get_float(ENV_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT),
            'connect_timeout': self._get_float(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            'user_agent': self._get_env(ENV_USER_AGENT, DEFAULT_USER_AGENT),
            'client_id': self._get_env(ENV_CLIENT_ID, DEFAULT_CLIENT_ID),

            # ================================================================
            # REMOTE ENDPOINTS
            # ================================================================
            'search_base_url': self._get_env(ENV_SEARCH_BASE_URL, DEFAULT_SEARCH_BASE_URL),
            'catalog_base_url': self._get_env(ENV_CATALOG_BASE_URL, DEFAULT_CATALOG_BASE_URL),
            'api_base_url': self._get_env(ENV_API_BASE_URL, DEFAULT_API_BASE_URL),
            'search_page_size': self._get_int(ENV_SEARCH_PAGE_SIZE, DEFAULT_SEARCH_PAGE_SIZE),

            # ================================================================
            # INTEGRITY THRESHOLDS
            # ================================================================
            'min_thumbnail_size': self._get_int(ENV_MIN_THUMBNAIL_SIZE, MIN_THUMBNAIL_SIZE),
            'min_model_size': self._get_int(ENV_MIN_MODEL_SIZE, MIN_MODEL_SIZE),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """
        Get boolean environment variable.

        Accepts: true, 1, yes, on (case-insensitive)
        """
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable, falling back to default when invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable, falling back to default when invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path environment variable.

        Args:
            key: Environment variable name
            required: If True, raises ValueError when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return None

        return Path(value.strip()).expanduser()

    def get(self, key: str, default=None):
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def set(self, key: str, value) -> None:
        """
        Change a configuration value for the rest of the process.

        Args:
            key: Existing configuration key
            value: New value (paths accept str or Path)

        Raises:
            KeyError: If key is not a known configuration key
        """
        if key not in self._config:
            raise KeyError(f"Unknown configuration key: {key}")

        if key in PATH_KEYS and value is not None:
            value = Path(value).expanduser()
        elif key in ('region', 'locale') and isinstance(value, str):
            value = value.strip().lower()

        self._config[key] = value

    def __getitem__(self, key: str):
        """
        Get configuration value using dictionary syntax.

        Raises:
            KeyError: If key not found
        """
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()


__all__ = ['ConfigLoader']
