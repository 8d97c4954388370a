"""Content-caching wrappers for ASGI request and response channels."""

from typing import List, Optional, Tuple
import uuid

from starlette.datastructures import URL, Headers
from starlette.types import Message, Receive, Scope, Send


class CachingRequest:
    """
    Request adapter that keeps a copy of every body byte the app reads.

    The downstream app is handed ``receive`` in place of the server's
    receive channel. Only bytes the app actually pulls are captured, so a
    handler that never reads its body leaves ``captured_bytes()`` empty.
    """

    def __init__(self, scope: Scope, receive: Receive):
        self.scope = scope
        self._receive = receive
        self._buffer = bytearray()
        self._request_id: Optional[str] = None

    @property
    def headers(self) -> Headers:
        return Headers(scope=self.scope)

    @property
    def url(self) -> URL:
        return URL(scope=self.scope)

    @property
    def path(self) -> str:
        return self.scope["path"]

    @property
    def method(self) -> str:
        return self.scope["method"]

    async def receive(self) -> Message:
        message = await self._receive()
        if message["type"] == "http.request":
            self._buffer.extend(message.get("body", b""))
        return message

    def captured_bytes(self) -> bytes:
        return bytes(self._buffer)

    def request_id(self) -> str:
        """
        Identifier for this exchange.

        Prefers the id an outer middleware stored on ``request.state``, then
        the client's ``X-Request-ID`` header, and otherwise synthesizes one.
        """
        if self._request_id is None:
            state = self.scope.get("state") or {}
            request_id = state.get("request_id") or self.headers.get("x-request-id")
            self._request_id = request_id or uuid.uuid4().hex
        return self._request_id


class CachingResponse:
    """
    Response adapter that holds back everything the app sends.

    Messages are recorded instead of forwarded; ``copy_body_to_response``
    must be awaited to deliver them to the client.
    """

    def __init__(self, send: Send):
        self._send = send
        self._start: Optional[Message] = None
        self._status = 0
        self._headers: List[Tuple[bytes, bytes]] = []
        self._buffer = bytearray()
        self._has_body = False
        self._body_complete = False
        self._trailing: List[Message] = []
        self._flushed = False

    async def send(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self._start = message
            self._status = message["status"]
            self._headers = list(message.get("headers", []))
        elif message_type == "http.response.body":
            self._has_body = True
            self._buffer.extend(message.get("body", b""))
            self._body_complete = not message.get("more_body", False)
        else:
            self._trailing.append(message)

    def status(self) -> int:
        """Last status the app set, or 0 if it never started a response."""
        return self._status

    @property
    def headers(self) -> List[Tuple[bytes, bytes]]:
        return list(self._headers)

    def captured_bytes(self) -> bytes:
        return bytes(self._buffer)

    async def copy_body_to_response(self) -> None:
        """Release the recorded response to the real send channel once."""
        if self._flushed or self._start is None:
            return
        self._flushed = True

        await self._send(self._start)
        if self._has_body:
            await self._send(
                {
                    "type": "http.response.body",
                    "body": bytes(self._buffer),
                    "more_body": not self._body_complete,
                }
            )
        for message in self._trailing:
            await self._send(message)
