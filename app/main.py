from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import router as api_v1_router
from app.config.database import create_db_engine, create_session_factory
from app.config.settings import Settings, get_settings
from app.core.exceptions import AUTHENTICATION_CODES, BaseAppException, ErrorCode
from app.core.logging import get_logger, get_struct_logger, setup_logging
from app.core.middleware import register_middlewares
from app.models.base import Base

logger = get_logger(__name__)
security_logger = get_struct_logger("security")


def _error_body(exc: BaseAppException) -> dict:
    return {
        "detail": {
            "code": exc.error_code.value,
            "message": exc.message,
            "details": exc.details or None,
        }
    }


async def handle_app_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """Render domain exceptions that escape the service layer."""
    if exc.error_code == ErrorCode.FORBIDDEN or exc.error_code in AUTHENTICATION_CODES:
        security_logger.warning(
            "access_rejected",
            code=exc.error_code.value,
            path=request.url.path,
            method=request.method,
        )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Builds the database engine and session factory.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema bootstrap outside production; production uses migrations
        if not settings.is_production():
            Base.metadata.create_all(bind=engine)
        logger.info(
            "Application started",
            extra={"environment": settings.ENVIRONMENT, "api_prefix": settings.API_V1_STR},
        )
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Credentials are only allowed with an explicit origin list
    wildcard = not settings.CORS_ORIGINS or settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else settings.CORS_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    app.add_exception_handler(BaseAppException, handle_app_exception)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app
