"""Request ID assignment and timing headers."""

from typing import Optional
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Client-supplied IDs end up in log records, so only short opaque tokens are honoured
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Use the client's ID when it is a plain token, otherwise mint one."""
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Store the exchange ID on ``request.state.request_id``.

    Must wrap the HTTP logging middleware so the log record and the
    ``X-Request-ID`` response header carry the same value.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        response.headers[PROCESS_TIME_HEADER] = f"{time.perf_counter() - started:.3f}"
        return response
