# FILE: backend/app.py
"""
FastAPI application entry point for Memory Lane
Memories (password-gated), playlist, shared dates, static front end
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import get_settings
from backend.errors import AppError
from backend.logging_config import configure_logging
from backend.middleware.body_limit import BodySizeLimitMiddleware
from backend.middleware.rate_limit import RateLimitMiddleware
from backend.routes import auth, dates, health, memories, songs
from backend.services.startup_verify import verify_startup

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown"""
    logger.info(f"Starting Memory Lane backend v{VERSION}")

    verify_result = verify_startup()
    if not verify_result["data_writable"]:
        logger.error("Startup verification failed: data directory not writable")
        raise RuntimeError("Data directory is not writable")

    logger.info(
        f"Startup verification passed: password_configured={verify_result['password_configured']}"
    )

    yield

    logger.info("Shutting down Memory Lane backend")


def create_app() -> FastAPI:
    """Build the application from the current settings"""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Memory Lane API",
        description="Shared memories, playlist and dates behind a single password",
        version=VERSION,
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting
    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            rpm=settings.rate_limit_rpm,
            paths=settings.rate_limit_paths
        )

    # Body size limit
    app.add_middleware(BodySizeLimitMiddleware, max_size=settings.body_size_limit_mb * 1024 * 1024)

    # Exception handlers
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(memories.router, tags=["memories"])
    app.include_router(songs.router, tags=["songs"])
    app.include_router(dates.router, tags=["dates"])

    # Static files: uploads, then the front end bundle as catch-all
    app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")
    if Path(settings.frontend_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.frontend_dir, html=True), name="frontend")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "backend.app:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        reload=settings.environment == "development"
    )
