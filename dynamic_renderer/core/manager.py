"""
Render orchestration: the single entry point behind the HTTP boundary.

`RenderManager.render()` validates a request, opens a dedicated browser session,
drives the page to readiness, shapes the result and always releases the session.
"""
from typing import Optional, TYPE_CHECKING

from dynamic_renderer.components.extractor.response_shaper import build_failure, build_success
from dynamic_renderer.components.renderer.fingerprint import FingerprintProfile, DEFAULT_FINGERPRINT
from dynamic_renderer.components.renderer.readiness import ReadinessEngine
from dynamic_renderer.components.renderer.session import BrowserSession
from dynamic_renderer.components.renderer.settings import RenderSettings
from dynamic_renderer.core.exceptions import InvalidRequestError, RendererError
from dynamic_renderer.core.logger import get_logger
from dynamic_renderer.core.schemas import RenderRequest, RenderResult

if TYPE_CHECKING:
    from dynamic_renderer.core.config import ConfigurationManager

logger = get_logger(__name__)


class RenderManager:
    """
    Orchestrates one render per call: session -> readiness -> extraction -> release.

    The manager keeps only read-only settings and the fingerprint, so a single
    instance can serve many concurrent `render()` calls. Each call owns its own
    `BrowserSession`; nothing is pooled.
    """
    def __init__(self, config: Optional['ConfigurationManager'] = None,
                 settings: Optional[RenderSettings] = None,
                 fingerprint: FingerprintProfile = DEFAULT_FINGERPRINT):
        """
        Args:
            config (Optional[ConfigurationManager]): Source of the `renderer` section.
                Ignored when `settings` is given.
            settings (Optional[RenderSettings]): Explicit render policy.
            fingerprint (FingerprintProfile): Browser presentation applied to every session.

        Raises:
            ConfigurationError: If the configured render policy is invalid.
        """
        self.settings = settings or RenderSettings.from_config(config)
        self.fingerprint = fingerprint
        self.readiness_engine = ReadinessEngine(self.settings)
        logger.info(
            f"RenderManager configured: browser={self.settings.browser_type}, "
            f"wait_until={self.settings.wait_until}, settle={self.settings.settle_delay_ms}ms."
        )

    @staticmethod
    def build_request(url: Optional[str], wait_for_selector: Optional[str] = None) -> RenderRequest:
        """
        Validates raw inputs into a `RenderRequest`.

        A blank `wait_for_selector` is treated as absent.

        Raises:
            InvalidRequestError: If `url` is missing or blank.
        """
        if url is None or not str(url).strip():
            raise InvalidRequestError("URL is required")
        selector = wait_for_selector.strip() if wait_for_selector else None
        return RenderRequest(url=str(url), wait_for_selector=selector or None)

    async def render(self, url: Optional[str], wait_for_selector: Optional[str] = None) -> RenderResult:
        """
        Renders `url` in a fresh headless browser and returns the hydrated HTML.

        Args:
            url (Optional[str]): The page to render. Echoed unchanged in the result.
            wait_for_selector (Optional[str]): If given, poll until this element exists
                and holds content (bounded) instead of relying on fixed delays alone.

        Returns:
            RenderResult: `RenderSuccess` with the HTML, or `RenderFailure` with the
                error message if the browser could not launch or navigation failed.

        Raises:
            InvalidRequestError: If `url` is missing or blank. No session is created.
        """
        request = self.build_request(url, wait_for_selector)
        logger.info(f"Scraping: {request.url}"
                    + (f" (waiting for '{request.wait_for_selector}')" if request.wait_for_selector else ""))

        try:
            async with BrowserSession(self.settings, self.fingerprint) as session:
                outcome = await self.readiness_engine.drive(session.page, request)
                return await build_success(session.page, request, outcome)
        except RendererError as e:
            return build_failure(request, e)
        except Exception as e:
            logger.error(f"Unexpected error while rendering {request.url}: {e}", exc_info=True)
            return build_failure(request, e)
