"""
Centralized logging setup for the Dynamic Renderer service.

This module configures the root logger from the `logging` section of the
YAML configuration (console and rotating file handlers) and hands out
module loggers.

Key Functions:
- `setup_logging()`: Initializes the logging system. Called once at startup.
- `get_logger(name)`: Returns a logger instance for the specified module name,
                      initializing logging with fallbacks if needed.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any

from dynamic_renderer.core.config import ConfigurationManager

# Relative log file paths in the configuration are resolved against the repository root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s"

_logging_initialized = False

def setup_logging(config: Optional[ConfigurationManager] = None) -> None:
    """
    Sets up centralized logging for the application using settings from the
    provided `ConfigurationManager` instance.

    Falls back to `logging.basicConfig` if no configuration is available or
    the 'logging' section is missing.

    Args:
        config (Optional[ConfigurationManager]): The application's configuration manager instance.
            If None, the global `config_manager` is used.
    """
    global _logging_initialized
    if _logging_initialized:
        logging.getLogger(__name__).debug("Logging setup_logging: Already initialized.")
        return

    current_config = config
    if current_config is None:
        from dynamic_renderer.core.config import config_manager as global_config_manager
        current_config = global_config_manager

    log_settings: Optional[Dict[str, Any]] = current_config.get("logging") if current_config else None

    if not log_settings:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logging.warning("Logging setup: 'logging' section not found in configuration. Using basicConfig.")
        _logging_initialized = True
        return

    log_level_str = str(log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()

    # Drop handlers installed earlier (basicConfig, uvicorn reload) to avoid duplicate lines.
    if root_logger.hasHandlers():
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    console_handler_settings = log_settings.get("handlers", {}).get("console", {})
    if console_handler_settings.get("enabled", False):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_handler_settings = log_settings.get("handlers", {}).get("file", {})
    log_file_path_absolute = None
    if file_handler_settings.get("enabled", False):
        log_file_path_relative = file_handler_settings.get("path", "logs/dynamic_renderer.log")
        log_file_path_absolute = os.path.join(PROJECT_ROOT, log_file_path_relative)

        max_bytes = int(file_handler_settings.get("max_bytes", 10 * 1024 * 1024))
        backup_count = int(file_handler_settings.get("backup_count", 5))

        try:
            os.makedirs(os.path.dirname(log_file_path_absolute), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path_absolute,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # File logging is optional; the service keeps running on console output.
            logging.error(f"Logging setup: Failed to configure file logging at '{log_file_path_absolute}': {e}. File logging disabled.", exc_info=True)

    _logging_initialized = True
    logging.info(f"Logging system initialized. Level: {log_level_str}. Format: '{log_format}'.")
    if log_file_path_absolute:
        logging.debug(f"File logging handler enabled at path: {log_file_path_absolute}")


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with the specified name.

    Ensures that `setup_logging()` has been called at least once before a
    logger is dispensed, so it is safe to call at import time.

    Args:
        name (str): The name for the logger, typically `__name__` of the calling module.

    Returns:
        logging.Logger: An instance of `logging.Logger`.
    """
    if not _logging_initialized:
        setup_logging()

    return logging.getLogger(name)
