"""Authentication middleware."""

from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from exchange_log.config import Settings, get_settings
from exchange_log.schemas.error import AuthenticationError


class AuthMiddleware(BaseHTTPMiddleware):
    """API key authentication for all routes except health and auth."""

    def __init__(self, app: ASGIApp, settings: Optional[Settings] = None):
        super().__init__(app)
        self.settings = settings or get_settings()

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Skip auth for health checks and token exchange
        if path.startswith("/health") or path.startswith(self.settings.http_log_auth_prefix):
            return await call_next(request)

        # Skip in development or when no key is configured
        if self.settings.is_development or not self.settings.api_key:
            return await call_next(request)

        api_key = request.headers.get("x-api-key")

        if not api_key or api_key != self.settings.api_key:
            error = AuthenticationError(
                message="Invalid or missing API key",
                request_id=getattr(request.state, "request_id", None),
            )
            return JSONResponse(
                status_code=401,
                content=error.model_dump(exclude_none=True),
                headers={"WWW-Authenticate": "ApiKey"},
            )

        return await call_next(request)
