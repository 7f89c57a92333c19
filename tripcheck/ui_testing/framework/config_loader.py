"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Base YAML configuration (config/config.yaml)
    - Environment-specific overlay (config/dev.yaml, config/qa.yaml)
    - Environment variable override (TIMEOUTS_ACTION overrides timeouts.action)
    - Dot notation path access
    - Validation of timeouts and URLs

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .error_handler import FrameworkError


# Default configuration directory (repo root /config)
DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"

SUPPORTED_ENVIRONMENTS = ("dev", "qa")
DEFAULT_ENVIRONMENT = "qa"
TIMEOUT_KINDS = ("action", "wait", "navigation")

# Legacy variable names still honoured by CI jobs
ENV_ALIASES: Dict[str, str] = {
    "BASE_URL": "app.base_url",
    "EASY_URL": "app.easy_url",
    "TIMEOUT_ACTION": "timeouts.action",
    "TIMEOUT_WAIT": "timeouts.wait",
    "TIMEOUT_NAVIGATION": "timeouts.navigation",
    "LOG_LEVEL": "logging.level",
}


class ConfigurationError(FrameworkError):
    """Raised when configuration loading or validation fails."""
    pass


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (TIMEOUTS_WAIT, or legacy TIMEOUT_WAIT)
        2. Environment YAML overlay (config/qa.yaml)
        3. Base YAML configuration (config/config.yaml)
        4. Default values passed to get()

    Usage:
        >>> config = ConfigLoader()
        >>> config.get_timeout("action")
        30000
        >>> config.get("app.easy_url")
        'https://www.easemytrip.com/'
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory holding config.yaml and <env>.yaml.
                        Uses DEFAULT_CONFIG_DIR if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._environment = self._resolve_environment()
        self._load_config()
        self._validate()
        self._initialized = True

    @property
    def environment(self) -> str:
        """Active environment name (dev or qa)."""
        return self._environment

    @staticmethod
    def _resolve_environment() -> str:
        raw = os.getenv("ENVIRONMENT") or os.getenv("ENV") or DEFAULT_ENVIRONMENT
        env = raw.strip().lower()
        if env not in SUPPORTED_ENVIRONMENTS:
            logger.warning(f"Unknown environment '{raw}', falling back to '{DEFAULT_ENVIRONMENT}'")
            env = DEFAULT_ENVIRONMENT
        return env

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
        logger.debug(f"Loaded configuration from: {path}")
        return data

    def _load_config(self) -> None:
        """Load base configuration and merge the environment overlay."""
        base_path = self._config_dir / "config.yaml"
        if not base_path.exists():
            logger.warning(
                f"Configuration file not found: {base_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
        else:
            self._config = self._read_yaml(base_path)

        env_path = self._config_dir / f"{self._environment}.yaml"
        if env_path.exists():
            self._config = _deep_merge(self._config, self._read_yaml(env_path))

    def _validate(self) -> None:
        problems = []
        for kind in TIMEOUT_KINDS:
            value = self.get(f"timeouts.{kind}")
            if value is None:
                continue
            if isinstance(value, str) and value.isdigit():
                value = int(value)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                problems.append(f"timeouts.{kind} must be a positive integer (got {value!r})")

        for key in ("app.base_url", "app.easy_url"):
            url = self.get(key)
            if url is not None and not str(url).startswith(("http://", "https://")):
                problems.append(f"{key} must be an http(s) URL (got {url!r})")

        if problems:
            raise ConfigurationError(
                f"Environment configuration invalid for '{self._environment}': "
                + "; ".join(problems)
            )

    def _env_override(self, key: str) -> Optional[str]:
        env_value = os.environ.get(key.upper().replace(".", "_"))
        if env_value is not None:
            return env_value
        for alias, target in ENV_ALIASES.items():
            if target == key and alias in os.environ:
                return os.environ[alias]
        return None

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "timeouts.action")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_value = self._env_override(key)
        if env_value is not None:
            yaml_value = self._lookup(key)
            reference = default if default is not None else yaml_value
            return self._convert_type(env_value, reference)

        value = self._lookup(key)
        return default if value is None else value

    def _lookup(self, key: str) -> Any:
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section, or an empty dict."""
        return self._config.get(section, {}) or {}

    def get_timeout(self, kind: str) -> int:
        """
        Get a timeout in milliseconds.

        Args:
            kind: One of "action", "wait", "navigation"
        """
        if kind not in TIMEOUT_KINDS:
            raise ConfigurationError(f"Unknown timeout kind: {kind}")
        return int(self.get(f"timeouts.{kind}", 30000))

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._environment = self._resolve_environment()
        self._load_config()
        self._validate()
        logger.info(f"Configuration reloaded from: {self._config_dir} (env={self._environment})")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """Convert an environment string to match the reference type."""
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (used by tests)."""
        cls._instance = None
        cls._config = {}


def get_config() -> ConfigLoader:
    """Return the process-wide ConfigLoader."""
    return ConfigLoader()


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
]
