from __future__ import annotations

import contextlib
import logging
import time
from datetime import datetime
from typing import AsyncIterator, Callable

import httpx
from fastapi import FastAPI

from .config import ProbeConfig
from .routers import call, catchall, echo, health, live
from .util.logging import ProbeLogAdapter
from .version import APP_VERSION

logger = logging.getLogger("netprobe.startup")


@contextlib.asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    handler = getattr(app.state, "call_handler", None)
    if handler is not None:
        await handler.start()
    try:
        yield
    finally:
        if handler is not None:
            await handler.stop()


def create_listener_app(identity: str, port: int) -> FastAPI:
    # docs and openapi routes would shadow the catch-all
    return FastAPI(
        title=f"netprobe {identity} :{port}",
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=_lifespan,
    )


def setup_call_handler(app: FastAPI, handler: call.CallHandler) -> None:
    app.state.call_handler = handler
    app.include_router(call.build_router(handler))


def create_apps(
    config: ProbeConfig,
    *,
    clock: Callable[[], float] = time.monotonic,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[int, FastAPI]:
    """Build one application per distinct port.

    Roles are registered in order (serving, health, liveness) so roles that
    share a port end up on one application; every application gets the
    catch-all route last.
    """

    log = ProbeLogAdapter(logger, config.id)
    apps: dict[int, FastAPI] = {}

    def app_for(port: int) -> FastAPI:
        if port not in apps:
            apps[port] = create_listener_app(config.id, port)
        return apps[port]

    serving = app_for(config.serving_port)
    serving.include_router(echo.build_router(config.id))
    setup_call_handler(
        serving,
        call.CallHandler(config.id, timeout=config.call_timeout, transport=transport),
    )

    app_for(config.health_port).include_router(health.build_router(config.id, config.healthy))

    delay = config.liveness_delay
    deadline = clock() + delay.total_seconds()
    log.info("will be live at %s given delay %s", (datetime.now() + delay).isoformat(), delay)
    app_for(config.liveness_port).include_router(live.build_router(config.id, deadline, clock))

    for app in apps.values():
        app.include_router(catchall.build_router(config.id))
    return apps


__all__ = ["create_apps", "create_listener_app", "setup_call_handler"]
