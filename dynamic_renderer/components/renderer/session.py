"""
Per-request headless browser sessions.

This module provides `BrowserSession`, an asynchronous context manager that owns
one Playwright engine, one browser process, one context and one page for the
lifetime of a single render request. Entering the block launches everything and
applies the fingerprint; leaving it tears everything down, whatever the exit path.
Sessions are never pooled or shared between requests.
"""
from datetime import datetime
from typing import Optional

from playwright.async_api import async_playwright, Playwright, Browser, BrowserContext, Page

from dynamic_renderer.components.renderer.fingerprint import FingerprintProfile, DEFAULT_FINGERPRINT
from dynamic_renderer.components.renderer.settings import RenderSettings
from dynamic_renderer.core.exceptions import LaunchError, RendererError
from dynamic_renderer.core.logger import get_logger
from dynamic_renderer.core.schemas import utc_now

logger = get_logger(__name__)


class BrowserSession:
    """
    Exclusively-owned browser process for one request.

    Attributes:
        settings (RenderSettings): Launch flags and browser type.
        fingerprint (FingerprintProfile): Presentation applied to the context.
        playwright (Optional[Playwright]): The Playwright engine instance.
        browser (Optional[Browser]): The launched browser process.
        context (Optional[BrowserContext]): The fingerprinted browser context.
        page (Optional[Page]): The single tab used for navigation.
        created_at (Optional[datetime]): When the session finished launching (UTC).
    """

    def __init__(self, settings: Optional[RenderSettings] = None,
                 fingerprint: FingerprintProfile = DEFAULT_FINGERPRINT):
        self.settings = settings or RenderSettings()
        self.fingerprint = fingerprint
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self.created_at: Optional[datetime] = None

    async def __aenter__(self) -> 'BrowserSession':
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.release()

    @property
    def is_open(self) -> bool:
        return self.browser is not None

    async def acquire(self) -> 'BrowserSession':
        """
        Starts Playwright, launches the browser and opens a fingerprinted page.

        Returns:
            BrowserSession: The instance of itself.

        Raises:
            LaunchError: If Playwright fails to start, the browser fails to launch
                         (missing binaries, resource exhaustion) or the page cannot
                         be prepared. Anything partially started is torn down first.
        """
        if self.is_open:
            raise RendererError("Browser session is already open; sessions are single-use.")

        browser_type = self.settings.browser_type
        logger.debug(f"Launching {browser_type} browser (headless={self.settings.headless}).")
        try:
            self.playwright = await async_playwright().start()
            launcher = getattr(self.playwright, browser_type)
            self.browser = await launcher.launch(
                headless=self.settings.headless,
                args=list(self.settings.launch_args),
            )
            self.context = await self.browser.new_context(**self.fingerprint.context_options())
            await self.fingerprint.apply(self.context)
            self.page = await self.context.new_page()
        except Exception as e:
            logger.error(f"Failed to launch {browser_type} browser: {e}", exc_info=True)
            await self.release()
            raise LaunchError(str(e), original_exception=e)

        self.created_at = utc_now()
        logger.info(f"{browser_type} browser session opened.")
        return self

    async def release(self) -> None:
        """
        Closes the browser and stops the Playwright engine.

        Safe to call more than once and on a session that never finished
        launching. Teardown errors are logged, never raised, so they cannot
        mask the error that ended the request.
        """
        if self.browser:
            try:
                await self.browser.close()
                logger.debug("Browser closed.")
            except Exception as e:
                logger.error(f"Error closing browser: {e}", exc_info=True)
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.debug("Playwright stopped.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}", exc_info=True)

        self.page = None
        self.context = None
        self.browser = None
        self.playwright = None
