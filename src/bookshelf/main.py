"""
Bookshelf API: application factory and process entry point.

`create_app()` only composes; it never reads the environment or opens connections
itself. `main()` is the composition root that does both.

Middleware, outermost first:
    CORS -> RequestID -> AccessLog -> Recoverer -> StripSlashes -> GetHead -> Throttle
    -> RateLimit -> Timeout -> routes
(Starlette wraps each `add_middleware` call around the previous ones, so they are added
in reverse.)
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bookshelf.api.v1.error_handlers import register_exception_handlers
from bookshelf.api.v1.routes import api_router
from bookshelf.config.settings import Settings, get_settings
from bookshelf.core.logging import AccessLogMiddleware, RequestIDMiddleware, setup_logging
from bookshelf.core.middleware import (
    GetHeadMiddleware,
    RateLimitMiddleware,
    RecovererMiddleware,
    StripSlashesMiddleware,
    ThrottleMiddleware,
    TimeoutMiddleware,
)
from bookshelf.database.session import create_engine, create_session_factory, init_models
from bookshelf.utils.logging import get_project_version

logger = logging.getLogger(__name__)

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
CORS_ALLOWED_HEADERS = ["Authorization", "Content-Type"]
CORS_MAX_AGE_SECONDS = 12 * 60 * 60


def create_app(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    When `engine` is given, startup creates missing tables and shutdown disposes the
    connection pool.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            await init_models(engine)
        logger.info("app.startup", extra={"env": settings.API_ENVIRONMENT})
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("app.shutdown")

    app = FastAPI(
        title="Bookshelf API",
        version=get_project_version(),
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DOCS_ENABLED else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.DOCS_ENABLED else None,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    register_exception_handlers(app)
    app.include_router(api_router)

    app.add_middleware(TimeoutMiddleware, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    app.add_middleware(
        RateLimitMiddleware,
        requests=settings.RATE_LIMIT_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.add_middleware(ThrottleMiddleware, limit=settings.THROTTLE_MAX_IN_FLIGHT)
    app.add_middleware(GetHeadMiddleware)
    app.add_middleware(StripSlashesMiddleware)
    app.add_middleware(RecovererMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        allow_credentials=False,
        max_age=CORS_MAX_AGE_SECONDS,
    )

    return app


def main() -> None:
    settings = get_settings()
    setup_logging(settings)

    engine = create_engine(settings)
    app = create_app(settings, create_session_factory(engine), engine)

    logger.info(
        "server.starting",
        extra={"host": settings.API_HOST, "port": settings.API_PORT, "env": settings.API_ENVIRONMENT},
    )
    # log_config=None: keep the dictConfig installed by setup_logging
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)


if __name__ == "__main__":
    main()
