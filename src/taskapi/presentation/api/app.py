"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Authentication:
    The request authentication gate runs as middleware, before routing
    and body parsing. Paths on the public allowlist (API_PUBLIC_PATHS) pass
    through; all others need ``Authorization: Bearer <token>``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskapi.application.services import PublicPathMatcher
from taskapi.infrastructure.persistence.sqlalchemy import create_tables
from taskapi.presentation.api.exception_handlers import setup_exception_handlers
from taskapi.presentation.api.middleware import register_auth_middleware
from taskapi.presentation.api.routers import auth_router, tasks_router
from taskapi.presentation.api.schemas.common import HealthResponse
from taskapi_auth import JWTService, PasswordHashingService, load_signing_key
from taskapi_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Sets up logging for the taskapi application with:
    - Console output with timestamps and module names
    - Configurable log level for taskapi modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("taskapi").setLevel(log_level)
    logging.getLogger("taskapi_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """User registration and login.

**Security:**
- Passwords are hashed with bcrypt
- Stateless HS256 JWT bearer tokens
- Disabled accounts cannot log in and their tokens stop working
""",
    },
    {
        "name": "Tasks",
        "description": """Personal task management.

Each task belongs to the user who created it; other users get 403.
Responses are wrapped as `{message, data}`.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


def _ensure_sqlite_directory(url: str) -> None:
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)


def _create_engine(settings: Settings) -> AsyncEngine:
    url = settings.sqlalchemy_url
    _ensure_sqlite_directory(url)
    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Task API v%s...", API_VERSION)
    engine: AsyncEngine = app.state.engine
    try:
        await create_tables(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Task API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(tasks_router, prefix="/tasks", tags=["Tasks"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Personal task management with JWT bearer authentication.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # Shared, read-only per process
    engine = _create_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    app.state.public_paths = PublicPathMatcher(settings.public_paths)
    app.state.jwt_service = JWTService(
        secret_key=load_signing_key(
            settings.jwt_secret_key.get_secret_value() if settings.jwt_secret_key else None,
        ),
        expiration_ms=settings.jwt_expiration_ms,
    )
    app.state.password_service = PasswordHashingService(rounds=settings.bcrypt_rounds)

    # Added first so CORS wraps it
    register_auth_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return HealthResponse(status="healthy", version=API_VERSION)

    @app.get("/", tags=["Health"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "tasks": f"{API_V1_PREFIX}/tasks",
            },
        }

    return app
