"""Swiss ephemeris data directory discovery."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

__all__ = [
    "DEFAULT_ENV_KEYS",
    "iter_candidate_paths",
    "get_se_ephe_path",
]

DEFAULT_ENV_KEYS: tuple[str, ...] = (
    "SE_EPHE_PATH",
    "SWE_EPH_PATH",
    "ASTROSTATIONS_EPHEMERIS_PATH",
)
"""Environment variables checked (in order) for Swiss ephemeris paths."""

_DEFAULT_HINTS: tuple[Path, ...] = (
    Path.home() / ".sweph",
    Path("/usr/share/sweph"),
    Path("/usr/share/libswisseph"),
)


def _existing_dir(path: os.PathLike[str] | str | None) -> str | None:
    if not path:
        return None
    candidate = Path(path).expanduser()
    if candidate.is_dir():
        return str(candidate)
    return None


def iter_candidate_paths(
    default: str | os.PathLike[str] | None = None,
) -> Iterator[str]:
    """Yield existing ephemeris directories in priority order.

    The configured ``default`` comes first, then the environment variables in
    :data:`DEFAULT_ENV_KEYS`, then well-known OS locations.
    """

    seen: set[str] = set()
    candidates: list[os.PathLike[str] | str | None] = [default]
    candidates.extend(os.environ.get(key) for key in DEFAULT_ENV_KEYS)
    candidates.extend(_DEFAULT_HINTS)
    for raw in candidates:
        resolved = _existing_dir(raw)
        if resolved and resolved not in seen:
            seen.add(resolved)
            yield resolved


def get_se_ephe_path(default: str | os.PathLike[str] | None = None) -> str | None:
    """Return the Swiss ephemeris path or ``None`` when no directory exists.

    An explicitly configured ``default`` that does not exist is an error
    rather than something to silently skip.
    """

    if default and _existing_dir(default) is None:
        raise FileNotFoundError(
            f"Swiss Ephemeris path '{default}' does not exist. "
            "Set SE_EPHE_PATH or fix ephemeris.path in the settings file."
        )
    for candidate in iter_candidate_paths(default):
        return candidate
    return None
