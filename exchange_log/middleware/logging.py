"""HTTP exchange logging middleware."""

from typing import Optional
import logging

import anyio
from starlette.types import ASGIApp, Receive, Scope, Send

from exchange_log.middleware.caching import CachingRequest, CachingResponse
from exchange_log.middleware.headers import header_snapshot
from exchange_log.schemas.log_record import LogRecord, RequestData, ResponseData

DEFAULT_API_PREFIX = "/api/v1/"
DEFAULT_AUTH_PREFIX = "/api/v1/auth"

logger = logging.getLogger(__name__)


def is_loggable(
    path: str,
    api_prefix: str = DEFAULT_API_PREFIX,
    auth_prefix: str = DEFAULT_AUTH_PREFIX,
) -> bool:
    """Whether a request path is captured: under the API prefix, outside the auth prefix."""
    return path.startswith(api_prefix) and not path.startswith(auth_prefix)


def decode_body(data: bytes, max_body_size: Optional[int] = None) -> str:
    """
    Render captured bytes as log text.

    Args:
        data: Captured body bytes
        max_body_size: Byte limit for the rendered text, unbounded if None

    Returns:
        UTF-8 text with invalid sequences replaced, suffixed with a
        truncation marker when bytes were cut
    """
    if max_body_size is not None and len(data) > max_body_size:
        omitted = len(data) - max_body_size
        text = data[:max_body_size].decode("utf-8", errors="replace")
        return f"{text}...[truncated {omitted} bytes]"
    return data.decode("utf-8", errors="replace")


class LoggingMiddleware:
    """
    Capture request and response payloads and log one JSON record per request.

    Only paths accepted by ``is_loggable`` are wrapped. For those, the
    response is held back until the downstream app finishes, the record is
    emitted at INFO, and the held bytes are then sent to the client
    unchanged. The record is emitted whether the app returns or raises.
    """

    def __init__(
        self,
        app: ASGIApp,
        api_prefix: str = DEFAULT_API_PREFIX,
        auth_prefix: str = DEFAULT_AUTH_PREFIX,
        logger_name: Optional[str] = None,
        max_body_size: Optional[int] = None,
    ):
        self.app = app
        self.api_prefix = api_prefix
        self.auth_prefix = auth_prefix
        self.max_body_size = max_body_size
        self.logger = logging.getLogger(logger_name) if logger_name else logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not is_loggable(scope["path"], self.api_prefix, self.auth_prefix):
            await self.app(scope, receive, send)
            return

        caching_request = CachingRequest(scope, receive)
        caching_response = CachingResponse(send)

        try:
            await self.app(scope, caching_request.receive, caching_response.send)
        finally:
            # Must complete even when the request task is being cancelled
            with anyio.CancelScope(shield=True):
                self._log_exchange(caching_request, caching_response)
                await self._copy_body(caching_request, caching_response)

    def build_record(self, caching_request: CachingRequest, caching_response: CachingResponse) -> LogRecord:
        """Assemble the log record from the captured exchange."""
        return LogRecord(
            request_id=caching_request.request_id(),
            request_data=RequestData(
                headers=header_snapshot(caching_request.headers),
                body=decode_body(caching_request.captured_bytes(), self.max_body_size),
            ),
            response_data=ResponseData(
                status_code=caching_response.status(),
                headers=header_snapshot(caching_response.headers),
                body=decode_body(caching_response.captured_bytes(), self.max_body_size),
            ),
        )

    def _log_exchange(self, caching_request: CachingRequest, caching_response: CachingResponse) -> None:
        try:
            payload = self.build_record(caching_request, caching_response).to_json()
        except (TypeError, ValueError) as e:
            self.logger.warning(
                f"Failed to serialize HTTP log record [{caching_request.request_id()}]: {e}"
            )
            return

        self.logger.info(payload)

    async def _copy_body(self, caching_request: CachingRequest, caching_response: CachingResponse) -> None:
        try:
            await caching_response.copy_body_to_response()
        except Exception as e:
            # Client went away; nothing left to deliver to
            self.logger.debug(
                f"Could not deliver buffered response [{caching_request.request_id()}]: {e}"
            )
