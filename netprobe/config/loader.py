"""Turn raw startup input (flags, environment) into a :class:`ProbeConfig`."""

from __future__ import annotations

import logging
import os
import re
from datetime import timedelta
from typing import Any, Mapping

from pydantic import ValidationError

from ..identity import generate_identity
from .schema import ProbeConfig, ProbeConfigError

LOGGER = logging.getLogger("netprobe.config")

ENV_PREFIX = "NETPROBE_"

_TRUE_VALUES = {"1", "t", "true", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "no", "off"}

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def env_default(name: str, default: str | None = None) -> str | None:
    """Return ``NETPROBE_<name>`` from the environment, or ``default``."""

    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ProbeConfigError(f"invalid boolean value {value!r}")


def parse_duration(value: object) -> timedelta:
    """Parse a compact duration string such as ``300ms``, ``1.5s`` or ``1h30m``.

    A bare ``0`` is accepted without a unit. A leading sign is allowed; a
    negative delay means the deadline is already in the past.
    """

    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=float(value))
    if not isinstance(value, str):
        raise ProbeConfigError(f"invalid duration {value!r}")

    text = value.strip()
    sign = 1.0
    if text[:1] in {"+", "-"}:
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ProbeConfigError(f"invalid duration {value!r}")

    total = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            raise ProbeConfigError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        position = match.end()
    return timedelta(seconds=sign * total)


def _parse_port(value: object, *, flag: str) -> int:
    try:
        port = int(str(value).strip())
    except (TypeError, ValueError):
        raise ProbeConfigError(f"{flag}: invalid port {value!r}") from None
    if not 0 <= port <= 65535:
        raise ProbeConfigError(f"{flag}: port {port} out of range 0-65535")
    return port


def _parse_timeout(value: object) -> float | None:
    if value is None or value == "":
        return None
    seconds = parse_duration(value).total_seconds()
    if seconds <= 0:
        return None
    return seconds


def resolve_config(options: Mapping[str, Any]) -> ProbeConfig:
    """Build the probe configuration from parsed command line options.

    ``options`` carries raw string values keyed by option name (the argparse
    namespace converted with ``vars``). Missing keys fall back to the model
    defaults. When no ``id`` is given a random two-word name is generated.
    """

    payload: dict[str, Any] = {}
    for key, flag in (
        ("serving_port", "--server-port"),
        ("health_port", "--health-port"),
        ("liveness_port", "--liveness-port"),
    ):
        if options.get(key) is not None:
            payload[key] = _parse_port(options[key], flag=flag)
    if options.get("healthy") is not None:
        payload["healthy"] = parse_bool(options["healthy"])
    if options.get("liveness_delay") is not None:
        payload["liveness_delay"] = parse_duration(options["liveness_delay"])
    if options.get("host"):
        payload["host"] = str(options["host"])
    payload["call_timeout"] = _parse_timeout(options.get("call_timeout"))
    if options.get("log_level"):
        payload["log_level"] = str(options["log_level"])

    identity = str(options.get("id") or "").strip()
    if not identity:
        identity = generate_identity()
        LOGGER.info("no ID provided at startup, picking a random one")
    payload["id"] = identity

    try:
        return ProbeConfig(**payload)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ProbeConfigError(f"invalid configuration: {details}") from exc


__all__ = ["ENV_PREFIX", "env_default", "parse_bool", "parse_duration", "resolve_config"]
