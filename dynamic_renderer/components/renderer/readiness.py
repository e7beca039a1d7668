"""
Navigation and readiness state machine.

`ReadinessEngine.drive()` loads a URL into a page and decides when the page is
"ready enough" to serialize. States run strictly in order:

    NAVIGATING -> SETTLING -> TRIGGERING -> CHECKING -> READY

Only NAVIGATING can fail the request (`NavigationError`). Every later state
degrades to "proceed with whatever content exists" and records what happened
in `ReadinessOutcome.diagnostics`. Each fixed delay sits behind its own state
method so it can later be swapped for an event-based signal.
"""
import asyncio
from enum import Enum
from typing import Optional

from playwright.async_api import Page, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from dynamic_renderer.components.renderer.settings import RenderSettings
from dynamic_renderer.core.exceptions import NavigationError
from dynamic_renderer.core.logger import get_logger
from dynamic_renderer.core.schemas import ReadinessOutcome, RenderRequest

logger = get_logger(__name__)

SCROLL_TO_BOTTOM_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"
SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"

# Row count of a results table; 0 when the table or its body is missing.
TABLE_ROW_COUNT_SCRIPT = """
(selector) => {
  const table = document.querySelector(selector);
  if (!table) return 0;
  const tbody = table.querySelector('tbody');
  if (!tbody) return 0;
  return tbody.querySelectorAll('tr').length;
}
"""

# Rows with visible text under the matched element; -1 if the element is gone.
# An element without rows counts as one row once it holds any text.
CONTENT_ROW_COUNT_SCRIPT = """
(selector) => {
  const el = document.querySelector(selector);
  if (!el) return -1;
  const rows = el.querySelectorAll('tr');
  if (rows.length) {
    return Array.from(rows).filter((row) => row.textContent.trim().length > 0).length;
  }
  return el.textContent.trim().length > 0 ? 1 : 0;
}
"""


class ReadinessState(str, Enum):
    NAVIGATING = 'navigating'
    SETTLING = 'settling'
    TRIGGERING = 'triggering'
    CHECKING = 'checking'
    READY = 'ready'


async def _pause(milliseconds: int) -> None:
    if milliseconds > 0:
        await asyncio.sleep(milliseconds / 1000)


class ReadinessEngine:
    """
    Drives one page from a bare URL to a ready-to-extract document.

    The engine holds only read-only settings, so one instance can serve any
    number of concurrent requests.
    """

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()

    async def drive(self, page: Page, request: RenderRequest) -> ReadinessOutcome:
        """
        Runs the full state sequence for one request.

        Args:
            page (Page): The session's page, already fingerprinted.
            request (RenderRequest): The URL and optional selector to wait for.

        Returns:
            ReadinessOutcome: readiness flag, observed row count and diagnostics.

        Raises:
            NavigationError: If the page fails to load within the navigation timeout.
        """
        outcome = ReadinessOutcome()

        self._enter(ReadinessState.NAVIGATING, request)
        await self.navigate(page, request.url)
        outcome.note(f"Page loaded ({self.settings.wait_until}).")

        self._enter(ReadinessState.SETTLING, request)
        await self.settle()

        self._enter(ReadinessState.TRIGGERING, request)
        await self.trigger_lazy_content(page, outcome)

        self._enter(ReadinessState.CHECKING, request)
        if request.wait_for_selector:
            await self.poll_for_content(page, request.wait_for_selector, outcome)
        else:
            await self.inspect_results_table(page, outcome)

        self._enter(ReadinessState.READY, request)
        return outcome

    def _enter(self, state: ReadinessState, request: RenderRequest) -> None:
        logger.debug(f"[{request.url}] -> {state.value}")

    async def navigate(self, page: Page, url: str) -> None:
        logger.info(f"Navigating to {url} (wait_until={self.settings.wait_until}, "
                    f"timeout={self.settings.navigation_timeout_ms}ms).")
        try:
            await page.goto(url, wait_until=self.settings.wait_until,
                            timeout=self.settings.navigation_timeout_ms)
        except PlaywrightError as e:
            logger.error(f"Navigation to {url} failed: {e.message}")
            raise NavigationError(e.message, original_exception=e)

    async def settle(self) -> None:
        # No in-page "done" signal exists; a grace period lets queued scripts run.
        await _pause(self.settings.settle_delay_ms)

    async def trigger_lazy_content(self, page: Page, outcome: ReadinessOutcome) -> None:
        """
        Scrolls to the bottom and back, then clicks the "view more" control if present.

        Best-effort: any failure is recorded as a diagnostic and swallowed.
        """
        try:
            await page.evaluate(SCROLL_TO_BOTTOM_SCRIPT)
            await _pause(self.settings.scroll_delay_ms)
            await page.evaluate(SCROLL_TO_TOP_SCRIPT)
            await _pause(self.settings.scroll_delay_ms)
            outcome.note("Scrolled page to bottom and back to top.")
        except Exception as e:
            self._record(outcome, f"Lazy-load scroll failed: {e}")

        if not self.settings.expand_selector:
            return
        try:
            button = await page.query_selector(self.settings.expand_selector)
            if button is None:
                logger.debug(f"No expand control matching '{self.settings.expand_selector}'.")
                outcome.note(f"No expand control matching '{self.settings.expand_selector}'.")
                return
            logger.info(f"Clicking expand control '{self.settings.expand_selector}'.")
            await button.click()
            await _pause(self.settings.expand_delay_ms)
            outcome.note(f"Clicked expand control '{self.settings.expand_selector}'.")
        except Exception as e:
            self._record(outcome, f"Expand control click failed: {e}")

    async def inspect_results_table(self, page: Page, outcome: ReadinessOutcome) -> None:
        """Counts rows in the known results table for logging; readiness is assumed."""
        selector = self.settings.results_table_selector
        try:
            outcome.row_count = int(await page.evaluate(TABLE_ROW_COUNT_SCRIPT, selector))
        except PlaywrightError as e:
            self._record(outcome, f"Results table inspection failed: {e.message}")
        logger.info(f"Table '{selector}' has {outcome.row_count} rows.")
        outcome.note(f"Table '{selector}' has {outcome.row_count} rows.")
        outcome.ready = True

    async def poll_for_content(self, page: Page, selector: str, outcome: ReadinessOutcome) -> None:
        """
        Waits for `selector` to exist and then to hold at least one content row.

        The whole check is bounded by `content_timeout_ms`; the existence wait is
        additionally bounded by `selector_timeout_ms`. Running out of time on
        either leaves `outcome.ready` False but never raises.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settings.content_timeout_ms / 1000

        # Playwright treats a timeout of 0 as "wait forever".
        selector_timeout = max(min(self.settings.selector_timeout_ms, self.settings.content_timeout_ms), 1)
        try:
            await page.wait_for_selector(selector, state='attached', timeout=selector_timeout)
        except PlaywrightTimeoutError:
            self._record(outcome, f"Selector '{selector}' did not appear within {selector_timeout}ms; "
                                  f"proceeding with current content.")
            return
        except PlaywrightError as e:
            self._record(outcome, f"Waiting for selector '{selector}' failed: {e.message}")
            return

        rows = -1
        while True:
            # A single check may not outlive the overall bound.
            try:
                rows = int(await asyncio.wait_for(page.evaluate(CONTENT_ROW_COUNT_SCRIPT, selector),
                                                  timeout=max(deadline - loop.time(), 0)))
            except asyncio.TimeoutError:
                self._record(outcome, f"Content check for '{selector}' did not return within "
                                      f"{self.settings.content_timeout_ms}ms.")
            except PlaywrightError as e:
                # Re-renders and client-side redirects destroy the execution context; retry.
                self._record(outcome, f"Content check for '{selector}' failed: {e.message}")
            else:
                if rows > 0:
                    outcome.row_count = rows
                    outcome.ready = True
                    outcome.note(f"Selector '{selector}' has {rows} content rows.")
                    logger.info(f"Selector '{selector}' ready with {rows} content rows.")
                    return

            remaining = deadline - loop.time()
            if remaining <= 0:
                outcome.row_count = max(rows, 0)
                self._record(outcome, f"Selector '{selector}' has no content after "
                                      f"{self.settings.content_timeout_ms}ms; proceeding with current content.")
                return
            await asyncio.sleep(min(self.settings.poll_interval_ms / 1000, remaining))

    def _record(self, outcome: ReadinessOutcome, message: str) -> None:
        logger.warning(message)
        outcome.note(message)
