from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from netprobe.routers.echo import EchoHandler


def _disconnected_request(path: str) -> Request:
    async def receive():
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "query_string": b"",
        "headers": [],
    }
    return Request(scope, receive)


@pytest.mark.parametrize(
    "body",
    [b"", b"ping", b"line one\nline two", "été".encode(), b"\xff\xfe raw"],
)
def test_echo_returns_body_verbatim(serving_app, body) -> None:
    client = TestClient(serving_app)
    response = client.post("/echo", content=body)
    assert response.status_code == 200
    assert response.content == b"pytest-probe echoing: " + body
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
def test_echo_accepts_any_method(serving_app, method) -> None:
    client = TestClient(serving_app)
    response = client.request(method, "/echo")
    assert response.status_code == 200
    assert response.text == "pytest-probe echoing: "


@pytest.mark.asyncio
async def test_echo_body_read_failure_still_echoes() -> None:
    handler = EchoHandler("probe-x")
    response = await handler.handle(_disconnected_request("/echo"))
    assert response.status_code == 500
    assert response.body == b"probe-x echoing: "
