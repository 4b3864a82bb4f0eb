"""Outbound call relay.

``/call`` resolves a target from the ``target`` query parameter (or, when it
is absent or empty, from the request body), issues a single GET to it and
relays the downstream status and body back to the caller, framed with the
identity of this instance so chained probes can be followed hop by hop.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ..util.logging import ProbeLogAdapter
from ..util.text import indent
from . import ALL_METHODS, CALL_PATH, read_body

LOGGER = logging.getLogger("netprobe.routers.call")

MISSING_TARGET_MESSAGE = (
    "No target to call - use the ?target query parameter or pass a URL as the request body."
)

RELAY_TEMPLATE = (
    "Server:\n"
    "\t{identity}\n"
    "Called:\n"
    "\t{target}\n"
    "Response Status Code:\n"
    "\t{status_code}\n"
    "Response Body:\n"
    "{body}"
)


def normalize_target(raw: str) -> str:
    """Trim ``raw`` and prefix ``http://`` unless it already starts with ``http``.

    Returns an empty string when nothing is left after trimming. The scheme
    check is a plain prefix test, so ``https://`` and ``http://`` targets are
    kept, as is anything else starting with ``http``.
    """

    target = raw.strip()
    if not target:
        return ""
    if not target.startswith("http"):
        target = "http://" + target
    return target


def render_relay(identity: str, target: str, status_code: int, body: str) -> str:
    return RELAY_TEMPLATE.format(
        identity=identity,
        target=target,
        status_code=status_code,
        body=indent(body, "\t"),
    )


def _describe(exc: BaseException) -> str:
    # exception groups from the network stack carry the real cause inside
    nested = getattr(exc, "exceptions", None)
    if nested:
        return _describe(nested[0])
    return str(exc) or exc.__class__.__name__


class CallHandler:
    """Relays a GET to a caller-chosen target.

    The pooled ``httpx.AsyncClient`` is opened by :meth:`start` and closed by
    :meth:`stop`; requests served outside that window use a one-shot client.
    ``timeout`` of ``None`` waits for the target indefinitely.
    """

    def __init__(
        self,
        identity: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.identity = identity
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.logger = ProbeLogAdapter(LOGGER, identity)

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    async def start(self) -> None:
        if self._client is not None:
            return
        self._client = self._build_client()
        self.logger.debug("outbound HTTP client opened (timeout=%s)", self.timeout)

    async def stop(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        self.logger.debug("outbound HTTP client closed")

    async def resolve_target(self, request: Request) -> tuple[str, bool]:
        """Return ``(target, ok)``; ``ok`` is ``False`` when the body could not be read."""

        targets = request.query_params.getlist("target")
        if targets and targets[0]:
            self.logger.info("found target in URI, using %r", targets[0])
            return normalize_target(targets[0]), True
        body, ok = await read_body(request, self.logger)
        if not ok:
            return "", False
        raw = body.decode("utf-8", errors="replace")
        self.logger.info("found target in request body, using %r", raw)
        return normalize_target(raw), True

    async def fetch(self, target: str) -> tuple[int, str]:
        """GET ``target`` and return the downstream status code and body.

        Transport errors propagate (usually ``httpx.HTTPError``, but the
        network stack can raise others, e.g. for an out-of-range port);
        a failure while reading the body is folded into the returned text.
        """

        if self._client is not None:
            return await self._fetch(self._client, target)
        async with self._build_client() as client:
            return await self._fetch(client, target)

    async def _fetch(self, client: httpx.AsyncClient, target: str) -> tuple[int, str]:
        response = await client.send(client.build_request("GET", target), stream=True)
        try:
            try:
                content = await response.aread()
            except httpx.HTTPError as exc:
                body = f"could not read body: {_describe(exc)}"
            else:
                body = content.decode("utf-8", errors="replace")
        finally:
            await response.aclose()
        return response.status_code, body

    async def handle(self, request: Request) -> Response:
        self.logger.info(
            "got %s call request with URL %r and headers: %s",
            request.method,
            str(request.url),
            dict(request.headers),
        )
        target, ok = await self.resolve_target(request)
        if not ok:
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if not target:
            self.logger.info("empty target, aborting call")
            return PlainTextResponse(
                MISSING_TARGET_MESSAGE,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        self.logger.info("got call target: %r", target)
        try:
            status_code, body = await self.fetch(target)
        except Exception as exc:  # any failure of the GET is relayed to the caller
            self.logger.warning("GET %r failed: %s", target, _describe(exc))
            return PlainTextResponse(
                f'{self.identity} GET "{target}" failed: {_describe(exc)}',
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        self.logger.info("GET %r succeeded with response code %s", target, status_code)
        return PlainTextResponse(render_relay(self.identity, target, status_code, body))


def build_router(handler: CallHandler) -> APIRouter:
    router = APIRouter()
    router.add_api_route(CALL_PATH, handler.handle, methods=ALL_METHODS, include_in_schema=False)
    return router


__all__ = [
    "CallHandler",
    "MISSING_TARGET_MESSAGE",
    "RELAY_TEMPLATE",
    "build_router",
    "normalize_target",
    "render_relay",
]
