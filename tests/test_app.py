"""Integration tests for the application factory."""

import logging

import pytest
from fastapi.testclient import TestClient

from exchange_log.main import create_app
from exchange_log.middleware.auth import AuthMiddleware
from exchange_log.middleware.logging import LoggingMiddleware
from exchange_log.middleware.request_context import RequestContextMiddleware, resolve_request_id


@pytest.fixture
def dev_client(development_settings):
    return TestClient(create_app(development_settings))


@pytest.fixture
def prod_client(production_settings):
    return TestClient(create_app(production_settings))


class TestMiddlewareChain:

    def test_chain_order(self, development_settings):
        app = create_app(development_settings)

        classes = [entry.cls for entry in app.user_middleware]

        assert classes.index(RequestContextMiddleware) < classes.index(LoggingMiddleware)
        assert classes.index(LoggingMiddleware) + 1 == classes.index(AuthMiddleware)


class TestLoggingSetup:

    def test_create_app_enables_http_logger_for_info(self, development_settings):
        root = logging.getLogger()
        original = root.level
        root.setLevel(logging.WARNING)
        try:
            create_app(development_settings)

            assert logging.getLogger(development_settings.http_log_logger_name).isEnabledFor(logging.INFO)
        finally:
            root.setLevel(original)


class TestHealth:

    def test_health_not_logged(self, dev_client, http_log):
        response = dev_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert http_log() == []

    def test_liveness(self, prod_client, http_log):
        response = prod_client.get("/health/live")

        assert response.json() == {"live": True}
        assert http_log() == []


class TestEcho:

    def test_echo_logged_with_request_context_id(self, dev_client, http_log):
        response = dev_client.post("/api/v1/echo", content=b"hello", headers={"Content-Type": "text/plain"})

        assert response.status_code == 200
        assert response.content == b"hello"
        [record] = http_log()
        assert record["requestId"] == response.headers["X-Request-ID"]
        assert record["requestData"]["body"] == "hello"
        assert record["responseData"]["statusCode"] == 200
        assert record["responseData"]["body"] == "hello"
        assert record["responseData"]["headers"]["content-type"].startswith("text/plain")

    def test_client_request_id_propagated(self, dev_client, http_log):
        response = dev_client.post("/api/v1/echo", content=b"{}", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert http_log()[0]["requestId"] == "abc-123"

    def test_missing_api_key_rejected_and_logged(self, prod_client, http_log):
        response = prod_client.post("/api/v1/echo", content=b"hello")

        assert response.status_code == 401
        assert response.json()["error"] == "AuthenticationError"
        [record] = http_log()
        assert record["responseData"]["statusCode"] == 401
        assert record["responseData"]["body"] == response.text
        assert record["requestData"]["body"] == ""

    def test_valid_api_key_accepted(self, prod_client, http_log):
        response = prod_client.post("/api/v1/echo", content=b"hello", headers={"X-API-Key": "test-key"})

        assert response.status_code == 200
        assert http_log()[0]["requestData"]["body"] == "hello"


class TestTokenExchange:

    def test_token_issued_and_not_logged(self, prod_client, http_log):
        response = prod_client.post("/api/v1/auth/token", json={"api_key": "test-key"})

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"
        assert response.json()["access_token"]
        assert http_log() == []

    def test_wrong_key_rejected(self, prod_client, http_log):
        response = prod_client.post("/api/v1/auth/token", json={"api_key": "wrong"})

        assert response.status_code == 401
        assert http_log() == []


class TestUnhandledErrors:

    def test_handler_error_logged_then_rendered_by_global_handler(self, development_settings, http_log):
        app = create_app(development_settings)

        @app.get("/api/v1/explode")
        async def explode():
            raise RuntimeError("kaboom")

        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/v1/explode")

        assert response.status_code == 500
        assert response.json()["error"] == "InternalServerError"
        [record] = http_log()
        assert record["responseData"]["statusCode"] == 0
        assert record["responseData"]["body"] == ""


class TestRequestContext:

    @pytest.mark.parametrize("incoming", ["req-42", "a.b_c-D9"])
    def test_plain_token_kept(self, incoming):
        assert resolve_request_id(incoming) == incoming

    @pytest.mark.parametrize("incoming", [None, "", "has spaces", "x" * 129, "line\nbreak"])
    def test_missing_or_malformed_replaced(self, incoming):
        request_id = resolve_request_id(incoming)

        assert request_id != incoming
        assert len(request_id) == 32

    def test_malformed_client_id_replaced_in_log_and_header(self, dev_client, http_log):
        response = dev_client.post("/api/v1/echo", content=b"{}", headers={"X-Request-ID": "not a token"})

        request_id = response.headers["X-Request-ID"]
        assert request_id != "not a token"
        assert http_log()[0]["requestId"] == request_id
        assert float(response.headers["X-Process-Time"]) >= 0
