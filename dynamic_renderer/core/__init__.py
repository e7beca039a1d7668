from .config import config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    DynamicRendererError,
    ConfigurationError,
    InvalidRequestError,
    ComponentError,
    RendererError,
    LaunchError,
    NavigationError,
)
from .schemas import RenderRequest, ReadinessOutcome, RenderSuccess, RenderFailure, RenderResult
from .logger import setup_logging, get_logger

__all__ = [
    # Config
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "DynamicRendererError",
    "ConfigurationError",
    "InvalidRequestError",
    "ComponentError",
    "RendererError",
    "LaunchError",
    "NavigationError",
    # Data model
    "RenderRequest",
    "ReadinessOutcome",
    "RenderSuccess",
    "RenderFailure",
    "RenderResult",
]
