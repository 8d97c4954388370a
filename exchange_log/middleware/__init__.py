"""Middleware package."""

from exchange_log.middleware.auth import AuthMiddleware
from exchange_log.middleware.caching import CachingRequest, CachingResponse
from exchange_log.middleware.headers import header_snapshot
from exchange_log.middleware.installer import install_http_logging
from exchange_log.middleware.logging import LoggingMiddleware, is_loggable
from exchange_log.middleware.request_context import RequestContextMiddleware

__all__ = [
    "AuthMiddleware",
    "CachingRequest",
    "CachingResponse",
    "LoggingMiddleware",
    "RequestContextMiddleware",
    "header_snapshot",
    "install_http_logging",
    "is_loggable",
]
