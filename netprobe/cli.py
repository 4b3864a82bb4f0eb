"""Command line entrypoint for the probe server."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import NoReturn, Sequence

from .config import DEFAULT_PORT, ProbeConfig, ProbeConfigError, resolve_config
from .config.loader import env_default
from .main import create_apps
from .server import ListenerSet
from .util.logging import ProbeLogAdapter, setup_logging

LOGGER = logging.getLogger("netprobe.cli")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ProbeConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="netprobe",
        description="Starts the probe server: echo, call, health and liveness endpoints.",
    )
    parser.add_argument(
        "-s",
        "--server-port",
        dest="serving_port",
        default=env_default("SERVER_PORT", str(DEFAULT_PORT)),
        help="main port to serve on; always on /echo and /call",
    )
    parser.add_argument(
        "-c",
        "--health-port",
        dest="health_port",
        default=env_default("HEALTH_PORT", str(DEFAULT_PORT)),
        help="port to serve health checks on; always on /health",
    )
    parser.add_argument(
        "-l",
        "--liveness-port",
        dest="liveness_port",
        default=env_default("LIVENESS_PORT", str(DEFAULT_PORT)),
        help="port to serve liveness checks on; always on /live",
    )
    parser.add_argument(
        "--healthy",
        nargs="?",
        const="true",
        default=env_default("HEALTHY", "true"),
        help="if false, the health check will report unhealthy",
    )
    parser.add_argument(
        "--liveness-delay",
        default=env_default("LIVENESS_DELAY", "1s"),
        help="delay before the server reports being alive (e.g. 500ms, 1s, 2m)",
    )
    parser.add_argument(
        "--id",
        default=env_default("ID", ""),
        help="name that identifies this instance (returned as part of every response)",
    )
    parser.add_argument(
        "--host",
        default=env_default("HOST"),
        help="address every listener binds to",
    )
    parser.add_argument(
        "--call-timeout",
        default=env_default("CALL_TIMEOUT"),
        help="bound on outbound /call requests (e.g. 5s); unset waits indefinitely",
    )
    parser.add_argument(
        "--log-level",
        default=env_default("LOG_LEVEL", "INFO"),
        help="logging level",
    )
    return parser


def load_config(argv: Sequence[str] | None = None) -> ProbeConfig:
    args = build_parser().parse_args(argv)
    return resolve_config(vars(args))


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    try:
        config = load_config(argv)
    except ProbeConfigError as exc:
        LOGGER.error("%s", exc)
        return -1
    setup_logging(config.log_level)

    log = ProbeLogAdapter(LOGGER, config.id)
    log.info("starting with ID: %s", config.id)
    apps = create_apps(config)
    ports = config.ports_by_role()
    log.info(
        "listening for:\n/echo:     %d\n/health:   %d\n/liveness: %d",
        ports["serving"],
        ports["health"],
        ports["liveness"],
    )
    listeners = ListenerSet(apps, host=config.host, log_level=config.log_level)
    try:
        asyncio.run(listeners.run())
    except KeyboardInterrupt:  # pragma: no cover - manual interruption
        log.info("interrupted")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
