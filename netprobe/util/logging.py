from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(LOG_FORMAT)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


class ProbeLogAdapter(logging.LoggerAdapter):
    """Prefix every record with the instance id so replicas can be told apart."""

    def __init__(self, logger: logging.Logger, probe_id: str) -> None:
        super().__init__(logger, {"probe_id": probe_id})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['probe_id']} {msg}", kwargs


__all__ = ["LOG_FORMAT", "ProbeLogAdapter", "setup_logging"]
