"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from exchange_log.api import auth, echo, health
from exchange_log.config import Settings, get_settings
from exchange_log.logging_config import setup_logging
from exchange_log.middleware.auth import AuthMiddleware
from exchange_log.middleware.installer import install_http_logging
from exchange_log.middleware.request_context import RequestContextMiddleware
from exchange_log.schemas.error import InternalServerError

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the process-wide instance

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="HTTP API with structured request/response payload logging",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    # Middleware order matters: each add wraps everything added before it.
    # Resulting chain, outermost first: CORS, request context, HTTP logging, auth.
    app.add_middleware(AuthMiddleware, settings=settings)
    install_http_logging(app, before=AuthMiddleware, settings=settings)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(echo.router, prefix="/api/v1", tags=["Echo"])
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        error = InternalServerError(request_id=getattr(request.state, "request_id", None))
        return JSONResponse(status_code=500, content=error.model_dump(exclude_none=True))

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.app_name}")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "exchange_log.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
