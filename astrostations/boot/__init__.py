"""Process bootstrap helpers."""

from __future__ import annotations

from .logging import configure_logging, resolve_level

__all__ = ["configure_logging", "resolve_level"]
