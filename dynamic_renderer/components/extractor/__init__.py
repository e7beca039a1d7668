"""
Extractor component for the Dynamic Renderer service.

Serializes the ready document into a success envelope, or wraps the error
that stopped the render into a failure envelope.
"""
from .response_shaper import build_success, build_failure, error_message

__all__ = [
    "build_success",
    "build_failure",
    "error_message",
]
