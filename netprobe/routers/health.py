from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ..util.logging import ProbeLogAdapter
from . import ALL_METHODS, HEALTH_PATH

LOGGER = logging.getLogger("netprobe.routers.health")


class HealthHandler:
    """Reports the health state fixed at startup."""

    def __init__(self, identity: str, healthy: bool) -> None:
        self.identity = identity
        self.healthy = healthy
        self.logger = ProbeLogAdapter(LOGGER, identity)

    async def handle(self, request: Request) -> Response:
        self.logger.info("got health check request with headers: %s", dict(request.headers))
        if self.healthy:
            return PlainTextResponse(f"{self.identity} - healthy")
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def build_router(identity: str, healthy: bool) -> APIRouter:
    handler = HealthHandler(identity, healthy)
    router = APIRouter()
    router.add_api_route(HEALTH_PATH, handler.handle, methods=ALL_METHODS, include_in_schema=False)
    return router


__all__ = ["HealthHandler", "build_router"]
