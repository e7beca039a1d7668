"""
Browser fingerprint presented to target pages.

The profile is a process-wide constant: a desktop user agent, the header set a
mainstream desktop browser sends, a 1920x1080 viewport, and an init script that
makes `navigator.webdriver` report false.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from playwright.async_api import BrowserContext

from dynamic_renderer.core.logger import get_logger

logger = get_logger(__name__)

WEBDRIVER_OVERRIDE_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', {
  get: () => false,
});
"""


class FingerprintProfile(BaseModel):
    """Immutable description of how the automated browser presents itself."""
    model_config = ConfigDict(frozen=True)

    user_agent: str = (
        'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )
    accept_language: str = 'en-US,en;q=0.9'
    accept_header: str = 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8'
    accept_encoding: str = 'gzip, deflate, br'
    viewport_width: int = 1920
    viewport_height: int = 1080
    suppress_automation_flag: bool = True

    def extra_http_headers(self) -> Dict[str, str]:
        return {
            'Accept-Language': self.accept_language,
            'Accept': self.accept_header,
            'Accept-Encoding': self.accept_encoding,
            'Connection': 'keep-alive',
            'Upgrade-Insecure-Requests': '1',
        }

    def context_options(self) -> Dict[str, Any]:
        """
        Keyword arguments for `Browser.new_context()`.

        Returns:
            Dict[str, Any]: user agent, viewport, locale and extra headers.
        """
        return {
            'user_agent': self.user_agent,
            'viewport': {'width': self.viewport_width, 'height': self.viewport_height},
            'locale': self.accept_language.split(',')[0],
            'extra_http_headers': self.extra_http_headers(),
        }

    def init_script(self) -> str:
        return WEBDRIVER_OVERRIDE_SCRIPT if self.suppress_automation_flag else ''

    async def apply(self, context: BrowserContext) -> None:
        """
        Installs the automation-flag override on a fresh context.

        Must run before the first navigation: init scripts only affect
        documents created after they are registered.
        """
        script = self.init_script()
        if script:
            await context.add_init_script(script)
            logger.debug("Fingerprint init script installed (navigator.webdriver -> false).")


DEFAULT_FINGERPRINT = FingerprintProfile()
