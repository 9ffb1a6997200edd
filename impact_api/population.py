"""
Coarse population-exposure heuristic.

A handful of major cities stand in for the world's population density: each
city inside the affected radius contributes a linearly-weighted share of its
headcount, and sparsely covered areas fall back to a flat rural density.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from math import pi, sqrt, floor, isfinite
from typing import Iterable, Optional

log = logging.getLogger(__name__)

KM_PER_DEGREE = 111.0           # equatorial; longitude shrinkage ignored
EXPOSURE_DAMPING = 0.3          # share of a city's population actually exposed
SPARSE_THRESHOLD = 10_000       # below this the density floor is considered
RURAL_DENSITY_PER_KM2 = 20.0


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class PopulationCenter:
    name: str
    lat: float
    lng: float
    population: int
    density: float  # people/km^2, informational


REFERENCE_CENTERS: tuple[PopulationCenter, ...] = (
    PopulationCenter("New York",  40.7128,  -74.0060,  8_400_000, 10_000),
    PopulationCenter("London",    51.5074,   -0.1278,  9_000_000,  5_600),
    PopulationCenter("Tokyo",     35.6762,  139.6503, 14_000_000,  6_200),
    PopulationCenter("Mumbai",    19.0760,   72.8777, 12_400_000, 20_700),
    PopulationCenter("São Paulo", -23.5505, -46.6333, 12_300_000,  7_900),
)


def _finite_or_none(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return x if isfinite(x) else None


def approx_distance_km(lat: float, lng: float, center: PopulationCenter) -> float:
    """Planar degree distance scaled by 111 km/deg."""
    return sqrt((lat - center.lat) ** 2 + (lng - center.lng) ** 2) * KM_PER_DEGREE


def _round_half_up(x: float) -> int:
    return int(floor(x + 0.5))


def estimate_population(lat, lng, radius_km,
                        centers: Iterable[PopulationCenter] = REFERENCE_CENTERS) -> int:
    r = _finite_or_none(radius_km)
    if r is None or r < 0.0:
        log.warning(f"[population.radius] unusable radius_km={radius_km!r}; using 0")
        r = 0.0

    la, lo = _finite_or_none(lat), _finite_or_none(lng)
    estimated = 0.0
    if la is None or lo is None:
        log.warning(f"[population.coords] unusable lat={lat!r} lng={lng!r}; skipping reference centers")
    else:
        for city in centers:
            distance = approx_distance_km(la, lo, city)
            if distance < r:
                overlap = max(0.0, 1.0 - distance / r)
                estimated += city.population * overlap * EXPOSURE_DAMPING
                log.debug(f"[population.center] {city.name} distance_km={distance:.1f} overlap={overlap:.3f}")

    if estimated < SPARSE_THRESHOLD:
        area_km2 = pi * r * r
        estimated = max(estimated, area_km2 * RURAL_DENSITY_PER_KM2)

    if not isfinite(estimated):
        log.warning(f"[population.overflow] radius_km={r} produced a non-finite estimate; using 0")
        estimated = 0.0
    return _round_half_up(estimated)
