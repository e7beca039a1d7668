"""
Turns a ready page, or the error that stopped it, into a `RenderResult`.

The result never carries session, browser or page handles: only the HTML or
the error message, the original URL and a UTC timestamp.
"""
from playwright.async_api import Page

from dynamic_renderer.core.exceptions import RendererError, DynamicRendererError
from dynamic_renderer.core.logger import get_logger
from dynamic_renderer.core.schemas import ReadinessOutcome, RenderFailure, RenderRequest, RenderSuccess

logger = get_logger(__name__)


async def build_success(page: Page, request: RenderRequest, outcome: ReadinessOutcome) -> RenderSuccess:
    """
    Serializes the current document, including script-made DOM changes.

    Args:
        page (Page): The page after the readiness engine reached READY.
        request (RenderRequest): The request being answered; its URL is echoed unchanged.
        outcome (ReadinessOutcome): How readiness concluded, attached for the caller.

    Returns:
        RenderSuccess: The envelope carrying the full HTML.
    """
    html = await page.content()
    size = len(html.encode('utf-8'))
    logger.info(f"Successfully scraped {request.url} ({size} bytes, {outcome.row_count} rows).")
    return RenderSuccess(html=html, url=request.url, readiness=outcome)


def error_message(error: Exception) -> str:
    """
    The message reported to the caller for `error`.

    Renderer errors report the underlying browser message verbatim, other
    application errors their plain message, and anything else `str(error)`.
    """
    if isinstance(error, RendererError):
        return error.reason
    if isinstance(error, DynamicRendererError):
        return error.message
    return str(error) or error.__class__.__name__


def build_failure(request: RenderRequest, error: Exception) -> RenderFailure:
    message = error_message(error)
    logger.error(f"Scraping error for {request.url}: {message}")
    return RenderFailure(message=message, url=request.url)
