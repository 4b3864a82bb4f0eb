from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PORT = 9000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_LIVENESS_DELAY = timedelta(seconds=1)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ProbeConfigError(RuntimeError):
    """Raised when the probe cannot be configured from its startup input."""


class ProbeConfig(BaseModel):
    """Resolved startup configuration, read-only for the life of the process."""

    model_config = ConfigDict(frozen=True)

    serving_port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    health_port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    liveness_port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    healthy: bool = True
    liveness_delay: timedelta = DEFAULT_LIVENESS_DELAY
    id: str = Field(..., min_length=1)
    host: str = DEFAULT_HOST
    call_timeout: float | None = Field(default=None, gt=0)
    log_level: str = "INFO"

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("id must not be blank")
        return stripped

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    def ports_by_role(self) -> dict[str, int]:
        return {
            "serving": self.serving_port,
            "health": self.health_port,
            "liveness": self.liveness_port,
        }


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_LIVENESS_DELAY",
    "DEFAULT_PORT",
    "ProbeConfig",
    "ProbeConfigError",
]
