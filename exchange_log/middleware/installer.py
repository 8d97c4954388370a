"""Placement of the HTTP exchange logging middleware in an app's chain."""

from typing import Optional, Type
import logging

from starlette.applications import Starlette
from starlette.middleware import Middleware

from exchange_log.config import Settings, get_settings
from exchange_log.middleware.auth import AuthMiddleware
from exchange_log.middleware.logging import LoggingMiddleware

logger = logging.getLogger(__name__)


def install_http_logging(
    app: Starlette,
    before: Optional[Type] = AuthMiddleware,
    settings: Optional[Settings] = None,
    **options,
) -> None:
    """
    Add LoggingMiddleware to the app, directly outside ``before``.

    Starlette runs ``app.user_middleware`` outermost first, so inserting at
    the anchor's index makes the logger wrap the response before the anchor
    (and everything inside it) writes a body.

    Args:
        app: Starlette or FastAPI application, not yet started
        before: Middleware class to precede; outermost if absent from the app
        settings: Source of default options
        **options: Overrides for LoggingMiddleware keyword arguments

    Raises:
        RuntimeError: If the app's middleware stack is already built
    """
    if app.middleware_stack is not None:
        raise RuntimeError("Cannot add middleware after an application has started")

    settings = settings or get_settings()
    kwargs = {
        "api_prefix": settings.http_log_api_prefix,
        "auth_prefix": settings.http_log_auth_prefix,
        "logger_name": settings.http_log_logger_name,
        "max_body_size": settings.http_log_max_body_size,
    }
    kwargs.update(options)

    index = 0
    if before is not None:
        for position, entry in enumerate(app.user_middleware):
            if entry.cls is before:
                index = position
                break
        else:
            logger.info(f"{before.__name__} not installed; HTTP logging added as outermost middleware")

    app.user_middleware.insert(index, Middleware(LoggingMiddleware, **kwargs))
