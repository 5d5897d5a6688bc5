import logging

from fastapi import FastAPI, Request

from farm_market.core.logging_config import (
    JSONFormatter,
    bind_request_context,
    request_id_ctx,
    reset_request_context,
)
from farm_market.core.middleware.logging_middleware import LoggingMiddleware
from tests.testclient import TestClient


def build_app_with_logging():
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)

    @app.get("/ok")
    async def ok():
        return {"status": "ok"}

    @app.get("/with-user")
    async def with_user(request: Request):
        request.state.user_id = "user-42"
        return {"user": True}

    return app


def test_logging_middleware_sets_request_id_and_logs(monkeypatch):
    logged = []

    def fake_log_request(**kwargs):
        logged.append(kwargs)

    monkeypatch.setattr(
        "farm_market.core.middleware.logging_middleware.log_request", fake_log_request
    )

    with TestClient(build_app_with_logging()) as client:
        resp = client.get("/ok")

    assert resp.status_code == 200
    request_id = resp.headers.get("X-Request-ID")
    assert request_id
    assert logged[0]["request_id"] == request_id
    assert logged[0]["endpoint"] == "/ok"
    assert logged[0]["status_code"] == 200
    assert logged[0]["user_id"] is None


def test_logging_middleware_reuses_client_request_id_and_user(monkeypatch):
    logged = []
    monkeypatch.setattr(
        "farm_market.core.middleware.logging_middleware.log_request",
        lambda **kwargs: logged.append(kwargs),
    )

    with TestClient(build_app_with_logging()) as client:
        resp = client.get("/with-user", headers={"X-Request-ID": "req-123"})

    assert resp.headers["X-Request-ID"] == "req-123"
    assert logged[0]["user_id"] == "user-42"


def test_bind_and_reset_request_context():
    tokens = bind_request_context(request_id="abc", ip_address="127.0.0.1")
    assert request_id_ctx.get() == "abc"
    reset_request_context(tokens)
    assert request_id_ctx.get() is None


def test_json_formatter_includes_context():
    record = logging.LogRecord("farm_market", logging.INFO, __file__, 10, "hello %s", ("x",), None)
    record.request_id = "req-1"
    output = JSONFormatter().format(record)
    assert '"message": "hello x"' in output
    assert '"request_id": "req-1"' in output
