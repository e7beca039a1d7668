"""
Components sub-package for the Dynamic Renderer service.

`renderer` owns browser sessions and page readiness; `extractor` shapes the
final document (or the error) into a render result.
"""
from .renderer import BrowserSession, FingerprintProfile, ReadinessEngine, RenderSettings

__all__ = [
    "BrowserSession",
    "FingerprintProfile",
    "ReadinessEngine",
    "RenderSettings",
]
