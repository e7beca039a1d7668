"""
Shared fixtures: fake Playwright objects that record every launch and teardown.

`fake_playwright` patches `async_playwright` in the session module, so any
`BrowserSession` (including those opened by `RenderManager`) runs against
these doubles instead of a real browser.
"""
import asyncio
from typing import List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from dynamic_renderer.components.renderer.readiness import (
    CONTENT_ROW_COUNT_SCRIPT,
    SCROLL_TO_BOTTOM_SCRIPT,
    SCROLL_TO_TOP_SCRIPT,
    TABLE_ROW_COUNT_SCRIPT,
)
from dynamic_renderer.components.renderer.settings import RenderSettings


class FakeElement:
    def __init__(self, page: 'FakePage', click_error: Optional[Exception] = None):
        self.page = page
        self.click_error = click_error

    async def click(self):
        if self.click_error:
            raise self.click_error
        self.page.clicks += 1


class FakePage:
    """
    Minimal stand-in for `playwright.async_api.Page`.

    Args:
        goto_error: Raised from `goto()` to simulate a navigation failure.
        table_rows: Value returned for the results-table inspection.
        content_rows: Successive values for the selector content check; the last repeats.
            An exception instance in the list is raised for that check instead.
        content_check_delay: Seconds each content check takes before answering.
        selector_appears: If False, `wait_for_selector()` times out.
        expand_button: Whether the "view more" control exists.
        scroll_error: Raised from the scroll scripts.
        html: Fixed document to return; defaults to one naming the loaded URL.
    """
    def __init__(self, goto_error: Optional[Exception] = None, table_rows: int = 0,
                 content_rows: Optional[List[int]] = None, selector_appears: bool = True,
                 content_check_delay: float = 0,
                 expand_button: bool = False, click_error: Optional[Exception] = None,
                 scroll_error: Optional[Exception] = None, html: Optional[str] = None):
        self.goto_error = goto_error
        self.table_rows = table_rows
        self.content_rows = list(content_rows) if content_rows else [1]
        self.selector_appears = selector_appears
        self.content_check_delay = content_check_delay
        self.expand_button = expand_button
        self.click_error = click_error
        self.scroll_error = scroll_error
        self.html = html

        self.url: Optional[str] = None
        self.goto_calls = []
        self.scrolls = []
        self.clicks = 0
        self.content_checks = 0
        self.waited_selectors = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.goto_error:
            raise self.goto_error
        self.url = url

    async def evaluate(self, script, arg=None):
        if script in (SCROLL_TO_BOTTOM_SCRIPT, SCROLL_TO_TOP_SCRIPT):
            if self.scroll_error:
                raise self.scroll_error
            self.scrolls.append("bottom" if script == SCROLL_TO_BOTTOM_SCRIPT else "top")
            return None
        if script == TABLE_ROW_COUNT_SCRIPT:
            return self.table_rows
        if script == CONTENT_ROW_COUNT_SCRIPT:
            self.content_checks += 1
            if self.content_check_delay:
                await asyncio.sleep(self.content_check_delay)
            rows = self.content_rows.pop(0) if len(self.content_rows) > 1 else self.content_rows[0]
            if isinstance(rows, Exception):
                raise rows
            return rows
        raise AssertionError(f"Unexpected script evaluated: {script!r}")

    async def query_selector(self, selector):
        if self.expand_button:
            return FakeElement(self, self.click_error)
        return None

    async def wait_for_selector(self, selector, state=None, timeout=None):
        self.waited_selectors.append({"selector": selector, "state": state, "timeout": timeout})
        if not self.selector_appears:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        return FakeElement(self)

    async def content(self):
        if self.html is not None:
            return self.html
        return f"<html><head></head><body><h1>{self.url}</h1></body></html>"


class FakeContext:
    def __init__(self, tracker: 'BrowserTracker', options):
        self.tracker = tracker
        self.options = options
        self.init_scripts = []

    async def add_init_script(self, script):
        self.init_scripts.append(script)

    async def new_page(self):
        page = self.tracker.make_page()
        self.tracker.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self, tracker: 'BrowserTracker'):
        self.tracker = tracker
        self.contexts = []

    async def new_context(self, **options):
        context = FakeContext(self.tracker, options)
        self.contexts.append(context)
        self.tracker.contexts.append(context)
        return context

    async def close(self):
        self.tracker.closed += 1


class FakeBrowserType:
    def __init__(self, tracker: 'BrowserTracker'):
        self.tracker = tracker

    async def launch(self, **kwargs):
        self.tracker.launch_calls.append(kwargs)
        if self.tracker.launch_error:
            raise self.tracker.launch_error
        self.tracker.launched += 1
        return FakeBrowser(self.tracker)


class FakePlaywright:
    def __init__(self, tracker: 'BrowserTracker'):
        self.tracker = tracker
        self.chromium = FakeBrowserType(tracker)
        self.firefox = FakeBrowserType(tracker)
        self.webkit = FakeBrowserType(tracker)

    async def stop(self):
        self.tracker.stopped += 1


class FakePlaywrightStarter:
    def __init__(self, tracker: 'BrowserTracker'):
        self.tracker = tracker

    async def start(self):
        self.tracker.started += 1
        return FakePlaywright(self.tracker)


class BrowserTracker:
    """Counts engine starts/stops and browser launches/closes across sessions."""
    def __init__(self):
        self.started = 0
        self.stopped = 0
        self.launched = 0
        self.closed = 0
        self.launch_error: Optional[Exception] = None
        self.launch_calls = []
        self.contexts = []
        self.pages = []
        self.page_options = {}

    def make_page(self) -> FakePage:
        return FakePage(**self.page_options)

    def async_playwright(self):
        return FakePlaywrightStarter(self)


@pytest.fixture
def fake_playwright(monkeypatch):
    tracker = BrowserTracker()
    monkeypatch.setattr("dynamic_renderer.components.renderer.session.async_playwright", tracker.async_playwright)
    return tracker


@pytest.fixture
def fast_settings():
    """Render settings with no fixed delays and short polling bounds."""
    return RenderSettings(
        settle_delay_ms=0,
        scroll_delay_ms=0,
        expand_delay_ms=0,
        selector_timeout_ms=50,
        content_timeout_ms=200,
        poll_interval_ms=10,
    )


@pytest.fixture
def navigation_timeout_error():
    return PlaywrightTimeoutError("Timeout 60000ms exceeded.")


@pytest.fixture
def dns_error():
    return PlaywrightError("net::ERR_NAME_NOT_RESOLVED at http://nonexistentdomain123.invalid/")


@pytest.fixture
def make_page():
    """Factory for standalone `FakePage` objects (tests that drive a page directly)."""
    return FakePage
