"""
API routes for rendering pages and probing liveness.

`POST /scrape` hands one URL to the `RenderManager` and maps its result onto
the JSON envelopes in `api.models`. `GET /health` never touches the engine.
"""
from functools import lru_cache

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from dynamic_renderer.api.models import (
    ErrorResponse,
    HealthResponse,
    ScrapeFailureResponse,
    ScrapeRequest,
    ScrapeSuccessResponse,
)
from dynamic_renderer.core.config import config_manager
from dynamic_renderer.core.exceptions import InvalidRequestError
from dynamic_renderer.core.logger import get_logger
from dynamic_renderer.core.manager import RenderManager
from dynamic_renderer.core.schemas import RenderSuccess, utc_now

logger = get_logger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_render_manager() -> RenderManager:
    """
    Dependency provider for the process-wide `RenderManager`.

    The manager only holds read-only settings; every request still gets its
    own browser session inside `RenderManager.render()`.
    """
    return RenderManager(config=config_manager)


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=utc_now())


@router.post(
    "/scrape",
    response_model=ScrapeSuccessResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ScrapeFailureResponse},
    },
    summary="Render a URL in a headless browser and return its HTML",
    description="Loads the URL in a dedicated headless browser, waits for client-side "
                "content (optionally for `waitForSelector`), and returns the full rendered HTML.",
)
async def scrape(request: ScrapeRequest, manager: RenderManager = Depends(get_render_manager)):
    """
    Handles one render request.

    Returns:
        JSONResponse:
            - 200 with `{success: true, html, url, timestamp, rowCount}` on success.
            - 400 with `{error}` if the URL is missing or empty.
            - 500 with `{success: false, error, url, timestamp}` if launch or navigation failed.
    """
    try:
        result = await manager.render(request.url, request.wait_for_selector)
    except InvalidRequestError as e:
        logger.warning(f"Rejected scrape request: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=e.message).model_dump(),
        )

    if isinstance(result, RenderSuccess):
        body = ScrapeSuccessResponse(
            html=result.html,
            url=result.url,
            timestamp=result.timestamp,
            row_count=result.readiness.row_count,
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json", by_alias=True))

    body = ScrapeFailureResponse(error=result.message, url=result.url, timestamp=result.timestamp)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )
