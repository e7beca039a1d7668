"""
Main application file for the Dynamic Renderer API.

This file initializes the FastAPI application, sets up logging and CORS,
registers global exception handlers, and includes the API routers.
"""
import os
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dynamic_renderer.api.routes import render_router
from dynamic_renderer.core.config import config_manager
from dynamic_renderer.core.exceptions import DynamicRendererError
from dynamic_renderer.core.logger import setup_logging, get_logger

# --- Logging Setup ---
setup_logging(config_manager)
logger = get_logger(__name__)
logger.info(f"Loaded '{config_manager.current_environment}' configuration.")

DEFAULT_PORT = 3001


def resolve_port() -> int:
    """`PORT` from the environment, else `server.port` from configuration."""
    return int(os.getenv("PORT") or config_manager.get("server.port", DEFAULT_PORT))


def resolve_allowed_origins() -> List[str]:
    """
    Caller origins allowed by CORS.

    Read from the comma-separated `ALLOWED_ORIGINS` environment variable, else
    `server.allowed_origins`. Any `*` entry allows every origin.
    """
    raw = os.getenv("ALLOWED_ORIGINS") or config_manager.get("server.allowed_origins", "*")
    if isinstance(raw, (list, tuple)):
        origins = [str(origin).strip() for origin in raw]
    else:
        origins = [origin.strip() for origin in str(raw).split(",")]
    origins = [origin for origin in origins if origin]
    if not origins or "*" in origins:
        return ["*"]
    return origins


# --- FastAPI Application Initialization ---
app = FastAPI(
    title="Dynamic Renderer API",
    description="Renders URLs in a headless browser and returns the fully hydrated HTML, "
                "for scraping pages whose content is populated by client-side scripts.",
    version="1.0.0"
)

allowed_origins = resolve_allowed_origins()
app.add_middleware(CORSMiddleware, allow_origins=allowed_origins, allow_methods=["*"], allow_headers=["*"])
logger.info(f"CORS allowed origins: {allowed_origins}")


# --- Global Exception Handlers ---

@app.exception_handler(DynamicRendererError)
async def dynamic_renderer_exception_handler(request: Request, exc: DynamicRendererError):
    """
    Handles application exceptions that escape a route.

    Returns:
        JSONResponse: `{"error": message}` with HTTP 500.
    """
    logger.error(
        f"DynamicRendererError caught: {exc.__class__.__name__} - {exc.message} "
        f"for request: {request.method} {request.url}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message},
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handles malformed request bodies (e.g., non-JSON, wrong field types).

    Returns:
        JSONResponse: The validation failures with HTTP 422.
    """
    logger.warning(f"RequestValidationError caught for: {request.method} {request.url}. Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "Request validation failed", "details": jsonable_errors(exc)},
    )

@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all so callers always get JSON and never a stack trace."""
    logger.critical(
        f"Generic unhandled exception caught: {exc.__class__.__name__} - {str(exc)} "
        f"for request: {request.method} {request.url}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected server error occurred."},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # `ctx` may hold exception instances, which JSON cannot encode.
    return [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]


# --- API Router Inclusion ---
app.include_router(render_router, tags=["Rendering"])


@app.get("/", tags=["General"], summary="API Root Endpoint")
async def read_root():
    return {
        "message": "Dynamic Renderer API",
        "version": app.version,
        "health_url": "/health",
        "documentation_url": app.docs_url,
    }


if __name__ == "__main__":
    import uvicorn

    port = resolve_port()
    logger.info(f"Scraper service running on port {port}")
    logger.info(f"Health check: http://localhost:{port}/health")
    uvicorn.run(app, host="0.0.0.0", port=port)
