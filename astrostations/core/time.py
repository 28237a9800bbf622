"""UTC instant helpers shared by the oracle, the detectors and the CLI."""

from __future__ import annotations

import datetime as _dt

__all__ = ["ensure_utc", "format_instant", "parse_instant"]


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC.

    Naive datetimes are interpreted as UTC rather than local time.
    """

    tzinfo = moment.tzinfo
    if tzinfo is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


def parse_instant(value: str) -> _dt.datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into a UTC datetime."""

    text = value.strip()
    if not text:
        raise ValueError("timestamp must not be empty")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = _dt.datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid ISO-8601 timestamp: {value!r}") from exc
    return ensure_utc(parsed)


def format_instant(moment: _dt.datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC string with a ``Z`` suffix."""

    return ensure_utc(moment).isoformat().replace("+00:00", "Z")
