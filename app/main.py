"""
Gamepass API - FastAPI Application
Main application entry point
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from app.config import settings
from app.api import passes
from app.sources.upstream import build_http_client

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler
    Opens the shared upstream client on startup and closes it on shutdown
    """
    # Startup
    logger.info("Starting Gamepass API...")
    app.state.http_client = build_http_client(settings)
    logger.info(f"Source order: {', '.join(settings.source_order) or '(none)'}")
    if not settings.experiences_enabled:
        logger.info("OPEN_CLOUD_API_KEY not set, experiences source disabled")

    yield

    # Shutdown
    logger.info("Shutting down Gamepass API...")
    await app.state.http_client.aclose()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Aggregates a user's for-sale gamepasses",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


# Include routers
app.include_router(passes.router)


def run():
    """Serve the application with uvicorn"""
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
