"""
Custom exception classes for the Dynamic Renderer service.
"""
from typing import Optional


class DynamicRendererError(Exception):
    """
    Base class for all custom exceptions in the Dynamic Renderer service.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(DynamicRendererError):
    """
    Raised for errors related to application configuration, such as an
    unsupported browser type or an unknown page load signal.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Request Related Exceptions ---
class InvalidRequestError(DynamicRendererError):
    """
    Raised when a render request is rejected before any browser work starts
    (for example, a missing or empty URL). No browser session is created.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(DynamicRendererError):
    """
    A general base class for errors originating from within a specific component.

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """
    Raised for errors specific to the Renderer component.

    Attributes:
        reason (str): The underlying error message, unmodified. This is what the
            failure envelope reports back to the caller.
        original_exception (Optional[Exception]): The exception that caused this one, if any.
    """
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(component_name="Renderer", message=message)
        self.reason = message
        self.original_exception = original_exception


class LaunchError(RendererError):
    """Raised when the headless browser process cannot be started for a request."""
    pass


class NavigationError(RendererError):
    """Raised when loading the target URL fails (DNS, network, or navigation timeout)."""
    pass
