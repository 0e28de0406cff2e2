"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from twitchtools import __version__
from twitchtools.core.config import get_settings
from twitchtools.core.dependencies import close_twitch_api
from twitchtools.core.exceptions import TwitchToolsError, status_for
from twitchtools.core.logging import setup_logging
from twitchtools.models import ServiceInfo
from twitchtools.routers import channels_router

logger = logging.getLogger(__name__)

# Track server start time
_start_time: float = time.time()

SERVICE_INFO = ServiceInfo(
    status="ok",
    message="TwitchTools API",
    endpoints=["/api/mods", "/api/vips", "/api/founders", "/api/user"],
    usage="/api/mods?channel=CHANNELNAME",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    global _start_time
    _start_time = time.time()

    settings = get_settings()

    # Startup
    logger.info(f"TwitchTools API running on port {settings.port}")
    if not settings.has_twitch_credentials:
        logger.warning("TWITCH_CLIENT_ID or TWITCH_CLIENT_SECRET is not set!")
        logger.warning("Set them as environment variables; Twitch requests will fail until then.")

    yield

    # Shutdown
    logger.info("Shutting down TwitchTools API")
    await close_twitch_api()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()

    # Setup logging first
    setup_logging(settings)

    app = FastAPI(
        title="TwitchTools API",
        description="Moderator, VIP and user lookups for Twitch channels",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TwitchToolsError)
    async def twitchtools_error_handler(request: Request, exc: TwitchToolsError) -> JSONResponse:
        status_code = status_for(exc, settings.strict_error_status)
        if status_code >= 500:
            logger.error(f"{request.url.path} failed: {type(exc).__name__}: {exc.message}")
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(channels_router.router)

    # Health check / usage
    @app.get("/", response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        """Service status and the list of available endpoints"""
        return SERVICE_INFO

    # Liveness probe — always 200, no upstream dependency
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "uptime_seconds": int(time.time() - _start_time),
        }

    logger.debug("FastAPI application configured")

    return app
