"""Diagnostic network probe for debugging service-to-service traffic."""

from __future__ import annotations

from .version import APP_VERSION

__all__ = ["APP_VERSION"]
