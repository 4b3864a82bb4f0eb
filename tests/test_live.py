from __future__ import annotations

import time
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from netprobe.main import create_apps
from netprobe.routers import live


class _FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_liveness_transition_with_real_clock(make_config) -> None:
    config = make_config(liveness_delay=timedelta(milliseconds=100))
    client = TestClient(create_apps(config)[9000])

    early = client.get("/live")
    assert early.status_code == 503
    assert early.content == b""

    time.sleep(0.15)
    late = client.get("/live")
    assert late.status_code == 200
    assert late.text == "pytest-probe - live"


def test_liveness_is_monotone(make_config) -> None:
    clock = _FakeClock()
    config = make_config(liveness_delay=timedelta(seconds=5))
    client = TestClient(create_apps(config, clock=clock)[9000])

    assert client.get("/live").status_code == 503
    clock.now += 4.999
    assert client.get("/live").status_code == 503
    clock.now += 0.001
    assert client.get("/live").status_code == 200
    for step in (0.5, 60.0, 3600.0):
        clock.now += step
        response = client.get("/live")
        assert response.status_code == 200
        assert response.text == "pytest-probe - live"


def test_zero_delay_is_live_immediately(make_config) -> None:
    client = TestClient(create_apps(make_config(liveness_delay=timedelta(0)))[9000])
    assert client.get("/live").status_code == 200


@pytest.mark.parametrize("offset, expected", [(-0.1, 503), (0.0, 200), (0.1, 200)])
def test_handler_compares_against_fixed_deadline(offset, expected) -> None:
    clock = _FakeClock(now=50.0)
    app = FastAPI()
    app.include_router(live.build_router("probe-x", deadline=50.0 - offset, clock=clock))
    response = TestClient(app).get("/live")
    assert response.status_code == expected
