from __future__ import annotations

import socket
from datetime import timedelta
from typing import Callable

import httpx
import pytest
from fastapi import FastAPI

from netprobe.config import ProbeConfig
from netprobe.main import create_apps

PROBE_ID = "pytest-probe"


@pytest.fixture(autouse=True)
def clean_probe_env(monkeypatch):
    for name in (
        "SERVER_PORT",
        "HEALTH_PORT",
        "LIVENESS_PORT",
        "HEALTHY",
        "LIVENESS_DELAY",
        "ID",
        "HOST",
        "CALL_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"NETPROBE_{name}", raising=False)


@pytest.fixture
def make_config() -> Callable[..., ProbeConfig]:
    def _make(**overrides) -> ProbeConfig:
        payload = {"id": PROBE_ID, "liveness_delay": timedelta(0)}
        payload.update(overrides)
        return ProbeConfig(**payload)

    return _make


class DownstreamRecorder:
    """Fake downstream target served through ``httpx.MockTransport``."""

    def __init__(self, status_code: int = 200, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def downstream() -> DownstreamRecorder:
    return DownstreamRecorder(status_code=201, body="hello\nworld")


@pytest.fixture
def serving_app(make_config, downstream) -> FastAPI:
    apps = create_apps(make_config(), transport=downstream.transport)
    return apps[9000]


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def free_port() -> Callable[[], int]:
    """Return a factory of local ports nothing is listening on."""

    return _unused_port
