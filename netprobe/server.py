"""Run one uvicorn server per port and wait for all of them."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Iterator, Mapping

import uvicorn
from fastapi import FastAPI

from .config.schema import DEFAULT_HOST

LOGGER = logging.getLogger("netprobe.server")


class Listener(uvicorn.Server):
    """uvicorn server that leaves signal handling to :class:`ListenerSet`."""

    def install_signal_handlers(self) -> None:
        return

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class ListenerSet:
    """Independent listeners, one per port.

    A listener that fails to bind logs the failure and ends; the others keep
    serving. :meth:`run` returns once every listener has ended.
    """

    def __init__(
        self,
        apps: Mapping[int, FastAPI],
        *,
        host: str = DEFAULT_HOST,
        log_level: str = "info",
    ) -> None:
        self.host = host
        self.listeners: dict[int, Listener] = {
            port: Listener(
                uvicorn.Config(
                    app,
                    host=host,
                    port=port,
                    log_config=None,
                    log_level=log_level.lower(),
                    lifespan="on",
                )
            )
            for port, app in apps.items()
        }

    @property
    def ports(self) -> list[int]:
        return list(self.listeners)

    def shutdown(self) -> None:
        for listener in self.listeners.values():
            listener.should_exit = True

    async def _serve(self, port: int, listener: Listener) -> None:
        LOGGER.info("starting listener on port %d", port)
        try:
            await listener.serve()
        except SystemExit as exc:
            # uvicorn exits the process when it cannot bind
            LOGGER.error("listener on port %d failed to start (exit code %s)", port, exc.code)
        except Exception:
            LOGGER.exception("listener on port %d stopped with error", port)
        else:
            LOGGER.info("listener on port %d stopped", port)

    def _install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> list[signal.Signals]:
        installed: list[signal.Signals] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.shutdown)
            except (NotImplementedError, RuntimeError):  # pragma: no cover - non-unix loops
                LOGGER.debug("cannot install handler for %s", sig.name)
                continue
            installed.append(sig)
        return installed

    async def run(self, *, handle_signals: bool = True) -> None:
        loop = asyncio.get_running_loop()
        installed = self._install_signal_handlers(loop) if handle_signals else []
        try:
            await asyncio.gather(
                *(self._serve(port, listener) for port, listener in self.listeners.items())
            )
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)


__all__ = ["Listener", "ListenerSet"]
