import json
import logging

import anyio
import pytest

from exchange_log.config import Settings

HTTP_LOGGER = "exchange_log.middleware.logging"


def make_scope(path, method="GET", headers=None, query_string=b"", state=None):
    """Minimal ASGI HTTP scope for driving middleware directly."""
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string,
        "headers": headers or [],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }
    if state is not None:
        scope["state"] = state
    return scope


def body_receiver(body=b""):
    """Receive callable that yields one request message, then disconnects."""
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive():
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    return receive


async def _read_body(receive):
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body", False):
            return body


async def _respond(send, status, body, headers=None, more_body=False):
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": headers if headers is not None else [(b"content-type", b"text/plain")],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": more_body})


async def scenario_app(scope, receive, send):
    """Plain ASGI app with one behavior per path."""
    path = scope["path"]

    if path == "/api/v1/users":
        await _respond(send, 200, b'{"ok":true}', headers=[(b"content-type", b"application/json")])
    elif path == "/api/v1/items":
        await _read_body(receive)
        await _respond(send, 201, b"created")
    elif path == "/api/v1/auth/login":
        await _read_body(receive)
        await _respond(send, 200, b"token")
    elif path == "/health":
        await _respond(send, 200, b"ok")
    elif path == "/api/v1/boom":
        await _respond(send, 200, b"er", more_body=True)
        raise RuntimeError("boom")
    elif path == "/api/v1/fail-early":
        raise RuntimeError("failed before responding")
    elif path == "/api/v1/echo":
        # Never reads the request body
        await _respond(send, 200, b"Y")
    elif path == "/api/v1/mirror":
        body = await _read_body(receive)
        await anyio.sleep(0)
        await _respond(send, 200, body)
    elif path == "/api/v1/chunked":
        await send({"type": "http.response.start", "status": 200, "headers": [(b"content-type", b"text/plain")]})
        for chunk in (b"a", b"b", b"c"):
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
        await send({"type": "http.response.body", "body": b"", "more_body": False})
    elif path == "/api/v1/cookies":
        await _respond(
            send,
            200,
            b"",
            headers=[(b"set-cookie", b"a=1"), (b"set-cookie", b"b=2"), (b"X-Custom", b"Value")],
        )
    elif path == "/api/v1/binary":
        await _respond(send, 200, b"\xff\xfeok", headers=[(b"content-type", b"application/octet-stream")])
    else:
        await _respond(send, 404, b"not found")


@pytest.fixture
def http_log(caplog):
    """Return a callable listing the JSON records emitted on the HTTP logger."""
    caplog.set_level(logging.DEBUG, logger=HTTP_LOGGER)

    def records(logger_name=HTTP_LOGGER):
        return [
            json.loads(record.getMessage())
            for record in caplog.records
            if record.name == logger_name and record.levelno == logging.INFO
        ]

    return records


@pytest.fixture
def production_settings():
    return Settings(app_env="production", api_key="test-key", debug=False)


@pytest.fixture
def development_settings():
    return Settings(app_env="development", api_key=None, debug=True)
