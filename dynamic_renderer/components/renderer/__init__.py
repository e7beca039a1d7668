"""
Renderer component for the Dynamic Renderer service.

This sub-package launches per-request headless browser sessions, presents a
desktop-browser fingerprint, and drives pages until their script-populated
content is ready to serialize.
"""
from .fingerprint import FingerprintProfile, DEFAULT_FINGERPRINT
from .readiness import ReadinessEngine, ReadinessState
from .session import BrowserSession
from .settings import RenderSettings

__all__ = [
    "BrowserSession",
    "DEFAULT_FINGERPRINT",
    "FingerprintProfile",
    "ReadinessEngine",
    "ReadinessState",
    "RenderSettings",
]
