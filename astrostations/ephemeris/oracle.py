"""Longitude oracles consumed by the station detectors.

The search engine only ever asks one question of the position engine: the
apparent geocentric ecliptic longitude of a body at a UTC instant.  This
module defines that boundary (:class:`LongitudeOracle`) together with

* :class:`SwissLongitudeOracle`, backed by pyswisseph (Swiss ephemeris files
  when available, the built-in Moshier theory otherwise),
* :class:`FunctionOracle`, which wraps plain per-body callables and is what
  the test-suite uses for synthetic motion,
* :class:`CachedOracle`, an LRU memo that any caller may put in front of an
  expensive oracle.
"""

from __future__ import annotations

import datetime as _dt
import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from ..core.angles import normalize_degrees
from ..core.time import ensure_utc
from ..observability import COMPUTE_ERRORS, ORACLE_CACHE_HITS, ORACLE_EVALUATIONS
from .swe import get_swisseph
from .utils import get_se_ephe_path

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import EphemerisCfg

__all__ = [
    "BODY_CODES",
    "BodyNotFoundError",
    "CachedOracle",
    "FunctionOracle",
    "LongitudeOracle",
    "ObserverLocation",
    "SwissLongitudeOracle",
]

LOG = logging.getLogger(__name__)

# Body key -> pyswisseph constant name.
BODY_CODES: Final[dict[str, str]] = {
    "sun": "SUN",
    "moon": "MOON",
    "mercury": "MERCURY",
    "venus": "VENUS",
    "mars": "MARS",
    "jupiter": "JUPITER",
    "saturn": "SATURN",
    "uranus": "URANUS",
    "neptune": "NEPTUNE",
    "pluto": "PLUTO",
    "chiron": "CHIRON",
}

# pyswisseph keeps topocentric state process-wide.
_SWE_LOCK = threading.Lock()


class BodyNotFoundError(KeyError):
    """Raised by an oracle asked for a body key it does not know."""

    def __init__(self, body: str) -> None:
        super().__init__(body)
        self.body = body

    def __str__(self) -> str:
        return f'Celestial body with key: "{self.body}" not found.'


@runtime_checkable
class LongitudeOracle(Protocol):
    """Anything that can report apparent longitude for a body at an instant."""

    def apparent_longitude(self, body: str, moment: _dt.datetime) -> float:
        """Return the apparent geocentric ecliptic longitude in degrees."""
        ...


@dataclass(frozen=True, slots=True)
class ObserverLocation:
    """Observer location used when topocentric longitudes are requested."""

    latitude_deg: float
    longitude_deg: float
    elevation_m: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.longitude_deg, self.latitude_deg, self.elevation_m)


def _normalise_key(body: str) -> str:
    return body.strip().lower()


class SwissLongitudeOracle:
    """Apparent longitudes computed with the Swiss Ephemeris.

    ``calc_ut`` output already includes light-time, aberration and nutation,
    which is exactly the *apparent* longitude the detectors need.
    """

    label = "swiss"

    def __init__(
        self,
        *,
        ephemeris_path: str | None = None,
        prefer_moshier: bool = False,
        observer: ObserverLocation | None = None,
    ) -> None:
        swe = get_swisseph()
        self._observer = observer
        self._ephemeris_path: str | None = None
        if not prefer_moshier:
            self._ephemeris_path = get_se_ephe_path(ephemeris_path)
        if self._ephemeris_path:
            swe.set_ephe_path(self._ephemeris_path)
            flags = swe.FLG_SWIEPH
            LOG.debug("Swiss Ephemeris path configured: %s", self._ephemeris_path)
        else:
            flags = swe.FLG_MOSEPH
            LOG.debug("Swiss Ephemeris files unavailable; using Moshier theory")
        if observer is not None:
            flags |= swe.FLG_TOPOCTR
        self._flags = int(flags)

    @classmethod
    def from_settings(cls, config: EphemerisCfg) -> SwissLongitudeOracle:
        observer = None
        if config.topocentric and config.observer is not None:
            observer = ObserverLocation(
                latitude_deg=config.observer.latitude_deg,
                longitude_deg=config.observer.longitude_deg,
                elevation_m=config.observer.elevation_m,
            )
        return cls(
            ephemeris_path=config.path,
            prefer_moshier=config.prefer_moshier,
            observer=observer,
        )

    @property
    def uses_moshier(self) -> bool:
        return self._ephemeris_path is None

    @staticmethod
    def julian_day(moment: _dt.datetime) -> float:
        """Return the Julian day (UT) for ``moment``."""

        moment_utc = ensure_utc(moment)
        hour = (
            moment_utc.hour
            + moment_utc.minute / 60.0
            + moment_utc.second / 3600.0
            + moment_utc.microsecond / 3.6e9
        )
        return get_swisseph().julday(
            moment_utc.year, moment_utc.month, moment_utc.day, hour
        )

    def body_code(self, body: str) -> int:
        try:
            attr = BODY_CODES[_normalise_key(body)]
        except KeyError:
            raise BodyNotFoundError(body) from None
        return int(getattr(get_swisseph(), attr))

    def apparent_longitude(self, body: str, moment: _dt.datetime) -> float:
        code = self.body_code(body)
        jd_ut = self.julian_day(moment)
        swe = get_swisseph()
        ORACLE_EVALUATIONS.labels(oracle=self.label, body=_normalise_key(body)).inc()
        try:
            with _SWE_LOCK:
                if self._observer is not None:
                    swe.set_topo(*self._observer.as_tuple())
                xx, ret_flag = swe.calc_ut(jd_ut, code, self._flags)
        except Exception as exc:
            COMPUTE_ERRORS.labels(
                component="swiss_oracle", error=exc.__class__.__name__
            ).inc()
            raise RuntimeError(
                f"Swiss ephemeris failed for {body!r} at JD {jd_ut}: {exc}"
            ) from exc
        if ret_flag < 0:
            raise RuntimeError(f"Swiss ephemeris returned error code {ret_flag}")
        return normalize_degrees(xx[0])


class FunctionOracle:
    """Oracle backed by one ``moment -> longitude`` callable per body."""

    def __init__(
        self,
        functions: Mapping[str, Callable[[_dt.datetime], float]],
        *,
        label: str = "function",
    ) -> None:
        self._functions = {_normalise_key(k): fn for k, fn in functions.items()}
        self.label = label

    @property
    def bodies(self) -> tuple[str, ...]:
        return tuple(self._functions)

    def apparent_longitude(self, body: str, moment: _dt.datetime) -> float:
        key = _normalise_key(body)
        try:
            fn = self._functions[key]
        except KeyError:
            raise BodyNotFoundError(body) from None
        ORACLE_EVALUATIONS.labels(oracle=self.label, body=key).inc()
        return normalize_degrees(fn(ensure_utc(moment)))


class CachedOracle:
    """LRU memo in front of another :class:`LongitudeOracle`.

    Oracles are pure functions of ``(body, instant)``, so caching never
    changes search results; it only saves repeated evaluations when searches
    are chained over the same stretch of time.
    """

    _DEFAULT_CACHE_SIZE: Final[int] = 4096

    def __init__(self, inner: LongitudeOracle, *, maxsize: int | None = None) -> None:
        self._inner = inner
        self._capacity = self._DEFAULT_CACHE_SIZE if maxsize is None else max(0, maxsize)
        self._cache: OrderedDict[tuple[str, _dt.datetime], float] = OrderedDict()
        self._lock = threading.Lock()
        self.label = f"cached:{getattr(inner, 'label', type(inner).__name__)}"

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def apparent_longitude(self, body: str, moment: _dt.datetime) -> float:
        key = (_normalise_key(body), ensure_utc(moment))
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                ORACLE_CACHE_HITS.labels(oracle=self.label).inc()
                return cached
        value = self._inner.apparent_longitude(body, moment)
        if self._capacity > 0:
            with self._lock:
                self._cache[key] = value
                if len(self._cache) > self._capacity:
                    self._cache.popitem(last=False)
        return value
