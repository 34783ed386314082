"""
FastAPI Application Entry Point.

Run with: `uvicorn notebook.main:app`
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notebook.api import router as api_router
from notebook.api.frontend import get_frontend_router
from notebook.core.config import find_project_root, get_app_config, get_settings
from notebook.core.database import dispose_engine, init_database
from notebook.core.exception_handlers import register_exception_handlers
from notebook.core.logging import get_logger, setup_logging
from notebook.core.middleware import (
    AccessControlMiddleware,
    RateLimitMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from notebook.core.rate_limiter import SlidingWindowRateLimiter

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager. Schema setup failure aborts startup."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    try:
        await init_database()
    except Exception:
        logger.critical("Database initialization failed", exc_info=True)
        raise

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield
    await dispose_engine()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_app_config()
    app_settings = app_config.application
    security = app_config.security
    features = app_config.features
    settings = get_settings()

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    # Added innermost first; RequestContextMiddleware ends up outermost.
    app.add_middleware(
        AccessControlMiddleware,
        auth_tokens=settings.auth_tokens,
        allowed_ips=settings.allowed_ips,
        token_protected_paths=security.access.token_protected_paths,
        bypass_paths=security.access.bypass_paths,
        trusted_proxy_count=security.access.trusted_proxy_count,
    )

    if features.api_rate_limit_enabled:
        api_limit = security.rate_limiting.api
        app.add_middleware(
            RateLimitMiddleware,
            limiter=SlidingWindowRateLimiter(
                max_requests=api_limit.max_requests,
                window_seconds=api_limit.window_seconds,
            ),
            path_prefix=api_limit.path_prefix,
            trusted_proxy_count=security.access.trusted_proxy_count,
        )

    if features.security_headers_enabled:
        app.add_middleware(SecurityHeadersMiddleware, headers=security.headers)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials="*" not in cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router)

    if features.frontend_enabled:
        frontend = app_settings.frontend
        app.include_router(
            get_frontend_router(
                find_project_root() / frontend.directory,
                frontend.index_file,
            )
        )

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn notebook.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
