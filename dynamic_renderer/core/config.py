"""
Configuration management for the Dynamic Renderer service.

This module provides a singleton `ConfigurationManager` class to load and access
configuration settings from YAML files. It supports environment-specific
configurations (e.g., development, production) and allows easy access to
nested configuration values.

Key Features:
- Loads settings from YAML files based on APP_ENV environment variable.
- Defaults to 'development' environment if APP_ENV is not set.
- Provides a global `config_manager` instance for easy access.
- Supports dot notation for accessing nested keys (e.g., "renderer.settle_delay_ms").
"""
import os
import yaml
from typing import Any, Dict, Optional

# CONFIG_DIR: Directory holding the per-environment YAML files (dynamic_renderer/config).
CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "config")

# DEFAULT_ENV: The default environment to use if APP_ENV is not set.
DEFAULT_ENV = "development"

class ConfigError(Exception):
    """Base class for all configuration-loading errors."""
    pass

class ConfigFileNotFoundError(ConfigError):
    """Raised when a specific configuration file (e.g., development.yaml) cannot be found."""
    pass

class InvalidYamlError(ConfigError):
    """Raised when a configuration file contains invalid YAML syntax or is not a dictionary."""
    pass

class ConfigurationManager:
    """
    Manages loading and accessing configuration settings from YAML files.

    This class is implemented as a singleton. The first time an instance is created,
    it loads the configuration. Subsequent instantiations return the existing instance.
    """
    CONFIG_DIR: str = CONFIG_DIR
    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}
    _current_env: str = ""

    def __new__(cls) -> 'ConfigurationManager':
        """
        Ensures that only one instance of ConfigurationManager is created (Singleton pattern).
        Loads configuration upon first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigurationManager, cls).__new__(cls)
            cls._instance.load_config()
        return cls._instance

    def load_config(self, env: Optional[str] = None) -> None:
        """
        Loads configuration from a YAML file corresponding to the specified environment.

        The environment is determined in the following order of precedence:
        1. The `env` parameter passed to this method.
        2. The `APP_ENV` environment variable.
        3. `DEFAULT_ENV` (if neither of the above is set).

        Args:
            env (Optional[str]): The specific environment name (e.g., "production") to load.
                                 If None, uses APP_ENV or DEFAULT_ENV.

        Raises:
            ConfigFileNotFoundError: If the YAML file for the target environment is not found.
            InvalidYamlError: If the YAML file is malformed or not a dictionary.
        """
        self._current_env = env or os.getenv("APP_ENV", DEFAULT_ENV)
        config_file_path = os.path.join(self.CONFIG_DIR, f"{self._current_env}.yaml")

        try:
            with open(config_file_path, "r") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileNotFoundError(
                f"Configuration file not found for environment '{self._current_env}' at '{config_file_path}'. "
                f"Ensure '{self._current_env}.yaml' exists in the '{self.CONFIG_DIR}' directory."
            )
        except yaml.YAMLError as e:
            raise InvalidYamlError(
                f"Error parsing YAML in configuration file '{config_file_path}': {e}"
            )
        if not isinstance(loaded, dict):
            raise InvalidYamlError(
                f"Configuration file '{config_file_path}' does not contain a valid YAML dictionary."
            )
        self._config = loaded

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Retrieves a configuration value for the given key.

        Supports accessing nested values using dot notation (e.g., "server.port").
        If the key is not found, returns the provided default value.

        Args:
            key (str): The configuration key to retrieve.
            default (Optional[Any]): The value to return if the key is not found.

        Returns:
            Any: The configuration value if found, otherwise the default value.
        """
        value = self._config
        try:
            for k_part in key.split("."):
                if isinstance(value, dict):
                    value = value[k_part]
                else:
                    return default
            return value
        except (KeyError, TypeError):
            return default

    def reload_config(self, env: Optional[str] = None) -> None:
        """
        Reloads the configuration, potentially for a different environment.

        Args:
            env (Optional[str]): The environment to reload. If None, reloads the
                                 currently active environment.
        """
        old_env = self._current_env
        self.load_config(env or old_env or None)
        # Imported here: core.logger imports this module at load time.
        from dynamic_renderer.core.logger import get_logger
        get_logger(__name__).info(
            f"Configuration reloaded. Previous environment: '{old_env}', active environment: '{self._current_env}'."
        )

    @property
    def current_environment(self) -> str:
        """
        Returns the name of the currently loaded configuration environment.

        Returns:
            str: The name of the current environment (e.g., "development", "production").
        """
        return self._current_env

# Global instance, created (and loaded) on first import of this module.
config_manager = ConfigurationManager()
