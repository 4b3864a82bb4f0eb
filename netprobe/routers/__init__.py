"""Request handlers registered on each probe listener."""

from __future__ import annotations

import logging

from starlette.requests import ClientDisconnect, Request

ECHO_PATH = "/echo"
CALL_PATH = "/call"
HEALTH_PATH = "/health"
LIVE_PATH = "/live"
CATCHALL_PATH = "/{path:path}"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


async def read_body(request: Request, logger: logging.LoggerAdapter) -> tuple[bytes, bool]:
    """Read the full request body.

    Returns ``(body, ok)``; on a client disconnect the error is logged and an
    empty body is returned with ``ok`` set to ``False``.
    """

    try:
        return await request.body(), True
    except ClientDisconnect as exc:
        logger.warning("got err reading body: %r", exc)
        return b"", False


__all__ = [
    "ALL_METHODS",
    "CALL_PATH",
    "CATCHALL_PATH",
    "ECHO_PATH",
    "HEALTH_PATH",
    "LIVE_PATH",
    "read_body",
]
