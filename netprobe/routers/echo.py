from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status

from ..util.logging import ProbeLogAdapter
from . import ALL_METHODS, ECHO_PATH, read_body

LOGGER = logging.getLogger("netprobe.routers.echo")


class EchoHandler:
    def __init__(self, identity: str) -> None:
        self.identity = identity
        self.logger = ProbeLogAdapter(LOGGER, identity)

    async def handle(self, request: Request) -> Response:
        self.logger.info("got echo request with headers: %s", dict(request.headers))
        body, ok = await read_body(request, self.logger)
        status_code = status.HTTP_200_OK if ok else status.HTTP_500_INTERNAL_SERVER_ERROR
        content = f"{self.identity} echoing: ".encode() + body
        return Response(content=content, status_code=status_code, media_type="text/plain")


def build_router(identity: str) -> APIRouter:
    handler = EchoHandler(identity)
    router = APIRouter()
    router.add_api_route(ECHO_PATH, handler.handle, methods=ALL_METHODS, include_in_schema=False)
    return router


__all__ = ["EchoHandler", "build_router"]
