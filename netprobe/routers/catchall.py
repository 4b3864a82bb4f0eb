from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ..util.logging import ProbeLogAdapter
from ..util.text import quote_bytes
from . import ALL_METHODS, CATCHALL_PATH, read_body

LOGGER = logging.getLogger("netprobe.routers.catchall")


class CatchAllHandler:
    """Answers any path the listener has no explicit route for."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        self.logger = ProbeLogAdapter(LOGGER, identity)

    async def handle(self, request: Request) -> Response:
        self.logger.info("got catch-all request with headers: %s", dict(request.headers))
        body, ok = await read_body(request, self.logger)
        status_code = status.HTTP_200_OK if ok else status.HTTP_500_INTERNAL_SERVER_ERROR
        return PlainTextResponse(
            f"{self.identity} default handler echoing: {quote_bytes(body)}",
            status_code=status_code,
        )


def build_router(identity: str) -> APIRouter:
    """Wildcard route; include it after every other router of the listener."""

    handler = CatchAllHandler(identity)
    router = APIRouter()
    router.add_api_route(CATCHALL_PATH, handler.handle, methods=ALL_METHODS, include_in_schema=False)
    return router


__all__ = ["CatchAllHandler", "build_router"]
