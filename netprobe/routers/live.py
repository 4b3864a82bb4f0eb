from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ..util.logging import ProbeLogAdapter
from . import ALL_METHODS, LIVE_PATH

LOGGER = logging.getLogger("netprobe.routers.live")


class LivenessHandler:
    """Reports live once ``clock()`` reaches ``deadline``.

    ``deadline`` is expressed on the same scale as ``clock`` (monotonic
    seconds by default). Nothing is recorded between requests, so once the
    deadline has passed every later request is live.
    """

    def __init__(
        self,
        identity: str,
        deadline: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.identity = identity
        self.deadline = deadline
        self._clock = clock
        self.logger = ProbeLogAdapter(LOGGER, identity)

    def is_live(self) -> bool:
        return self._clock() >= self.deadline

    async def handle(self, request: Request) -> Response:
        self.logger.info("got liveness request with headers: %s", dict(request.headers))
        if self.is_live():
            return PlainTextResponse(f"{self.identity} - live")
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def build_router(
    identity: str,
    deadline: float,
    clock: Callable[[], float] = time.monotonic,
) -> APIRouter:
    handler = LivenessHandler(identity, deadline, clock)
    router = APIRouter()
    router.add_api_route(LIVE_PATH, handler.handle, methods=ALL_METHODS, include_in_schema=False)
    return router


__all__ = ["LivenessHandler", "build_router"]
