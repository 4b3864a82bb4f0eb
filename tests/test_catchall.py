from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from netprobe.routers.catchall import CatchAllHandler


def test_unknown_path_hits_default_handler(serving_app) -> None:
    client = TestClient(serving_app)
    response = client.post("/some/where", content=b"hi there")
    assert response.status_code == 200
    assert response.text == 'pytest-probe default handler echoing: "hi there"'


def test_root_path_hits_default_handler(serving_app) -> None:
    client = TestClient(serving_app)
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == 'pytest-probe default handler echoing: ""'


def test_trailing_slash_is_not_the_echo_route(serving_app) -> None:
    client = TestClient(serving_app)
    response = client.post("/echo/", content=b"x", follow_redirects=False)
    assert response.status_code == 200
    assert response.text == 'pytest-probe default handler echoing: "x"'


def test_docs_routes_are_not_exposed(serving_app) -> None:
    client = TestClient(serving_app)
    for path in ("/docs", "/openapi.json", "/redoc"):
        response = client.get(path)
        assert response.text.startswith("pytest-probe default handler echoing")


def test_default_handler_quotes_control_characters(serving_app) -> None:
    client = TestClient(serving_app)
    response = client.post("/anything", content=b'a "b"\n\tc\\')
    assert response.text == 'pytest-probe default handler echoing: "a \\"b\\"\\n\\tc\\\\"'


@pytest.mark.asyncio
async def test_default_handler_body_read_failure() -> None:
    async def receive():
        return {"type": "http.disconnect"}

    request = Request(
        {"type": "http", "method": "POST", "path": "/x", "query_string": b"", "headers": []},
        receive,
    )
    response = await CatchAllHandler("probe-x").handle(request)
    assert response.status_code == 500
    assert response.body == b'probe-x default handler echoing: ""'
