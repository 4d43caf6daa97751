"""
BrandSpark API - FastAPI server for the logo studio.

Provides:
- The studio page (static HTML/JS) at /
- Stateless logo generation and enhancement endpoints
- Studio sessions backing the page (inputs, busy flag, results, downloads)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .routes import logos, studio
from .security import RateLimiter, verify_api_key
from .services.session_manager import SessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit configuration."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Image provider: {settings.IMAGE_PROVIDER}")
        if not settings.provider_api_key:
            logger.warning(f"No API key configured for provider '{settings.IMAGE_PROVIDER}'")
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="API for BrandSpark - AI logo generation and enhancement",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.logo_agent = None  # built on first use
    app.state.rate_limiter = RateLimiter(requests_per_minute=settings.RATE_LIMIT_PER_MINUTE)
    app.state.session_manager = SessionManager(
        max_sessions=settings.MAX_SESSIONS,
        max_upload_bytes=settings.max_upload_bytes,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    api_dependencies = [Depends(verify_api_key)]
    app.include_router(
        logos.router, prefix="/api/v1", tags=["logos"], dependencies=api_dependencies
    )
    app.include_router(
        studio.router, prefix="/api/v1", tags=["studio"], dependencies=api_dependencies
    )

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/api")
    async def api_info():
        """API info."""
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "provider": settings.IMAGE_PROVIDER,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    @app.get("/", include_in_schema=False)
    async def index():
        """The studio page."""
        return FileResponse(STATIC_DIR / "index.html")

    return app


app = create_app()
