"""Logging bootstrap for the astrostations CLI and embedding applications."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import LoggingCfg

__all__ = ["configure_logging", "resolve_level"]

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
_FALLBACK_LEVEL = logging.WARNING


def _parse_level(value: str | int | None) -> int | None:
    """Return a numeric level for ``value`` or ``None`` when unrecognised."""

    if value is None:
        return None
    if isinstance(value, int):
        return value
    candidate = value.strip()
    if not candidate:
        return None
    if candidate.isdigit():
        return int(candidate)
    resolved = logging.getLevelName(candidate.upper())
    return resolved if isinstance(resolved, int) else None


def resolve_level(
    level: str | int | None = None,
    settings: LoggingCfg | None = None,
) -> int:
    """Pick the effective level.

    Precedence is the explicit ``level``, then ``LOG_LEVEL`` from the
    environment, then ``settings.level``, then ``WARNING``.
    """

    for candidate in (
        level,
        os.environ.get("LOG_LEVEL"),
        settings.level if settings is not None else None,
    ):
        parsed = _parse_level(candidate)
        if parsed is not None:
            return parsed
    return _FALLBACK_LEVEL


def configure_logging(
    *,
    level: str | int | None = None,
    settings: LoggingCfg | None = None,
    **kwargs: Any,
) -> int:
    """Configure the root logger and return the level that was applied.

    ``kwargs`` are forwarded to :func:`logging.basicConfig`; ``format``,
    ``datefmt`` and ``force`` default to the project conventions.
    """

    effective_level = resolve_level(level, settings)
    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )
    return effective_level
