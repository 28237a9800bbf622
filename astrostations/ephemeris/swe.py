"""Lazy access to :mod:`swisseph` so importing the package never requires it."""

from __future__ import annotations

import importlib
import importlib.util
from types import ModuleType

__all__ = ["get_swisseph", "has_swisseph"]

_swe_mod: ModuleType | None = None


def get_swisseph() -> ModuleType:
    """Import and cache :mod:`swisseph`, raising a descriptive error if missing."""

    global _swe_mod
    if _swe_mod is None:
        try:
            _swe_mod = importlib.import_module("swisseph")
        except ImportError as exc:  # pragma: no cover - depends on environment
            raise RuntimeError(
                "Swiss Ephemeris not available. Install pyswisseph "
                "(package: 'pyswisseph') or supply a custom LongitudeOracle."
            ) from exc
    return _swe_mod


def has_swisseph() -> bool:
    """Return ``True`` if pyswisseph is importable."""

    if _swe_mod is not None:
        return True
    return importlib.util.find_spec("swisseph") is not None
