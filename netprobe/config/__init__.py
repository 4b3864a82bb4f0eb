from __future__ import annotations

from .loader import parse_bool, parse_duration, resolve_config
from .schema import DEFAULT_PORT, ProbeConfig, ProbeConfigError

__all__ = [
    "DEFAULT_PORT",
    "ProbeConfig",
    "ProbeConfigError",
    "parse_bool",
    "parse_duration",
    "resolve_config",
]
