"""
NASA NeoWs feed client plus an explicit time-to-live cache for its results.

The feed payload groups objects by date under ``near_earth_objects``; each
object is flattened into a NeoCandidate with a mean diameter (meters) and the
velocity of its first listed close approach (km/s).
"""
from __future__ import annotations
import logging
import threading
import time
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

import httpx

from .impact_model import compute_impact, ImpactResult
from .population import estimate_population

log = logging.getLogger(__name__)


class NeoFeedError(RuntimeError):
    """Feed unreachable, rejected the request, or returned something unusable."""


def mask_key(s: Optional[str]) -> Optional[str]:
    if not s:
        return s
    return s[:3] + "***" + s[-3:] if len(s) > 6 else "***"


@dataclass(frozen=True)
class NeoCandidate:
    id: str
    name: str
    diameter_m: int
    velocity_kms: float
    description: str
    nasa_jpl_url: Optional[str]
    close_approach_date: Optional[str]
    miss_distance_km: Optional[float]
    hazardous: bool

    def as_dict(self) -> dict:
        return asdict(self)


def _parse_object(obj: Dict[str, Any]) -> NeoCandidate:
    approach = obj["close_approach_data"][0]
    meters = obj["estimated_diameter"]["meters"]
    diameter_m = (float(meters["estimated_diameter_min"]) + float(meters["estimated_diameter_max"])) / 2.0
    hazardous = bool(obj.get("is_potentially_hazardous_asteroid"))
    miss = (approach.get("miss_distance") or {}).get("kilometers")
    return NeoCandidate(
        id=str(obj["id"]),
        name=str(obj.get("name", obj["id"])),
        diameter_m=int(round(diameter_m)),
        velocity_kms=float(approach["relative_velocity"]["kilometers_per_second"]),
        description="Potentially hazardous asteroid" if hazardous else "Near-Earth asteroid",
        nasa_jpl_url=obj.get("nasa_jpl_url"),
        close_approach_date=approach.get("close_approach_date"),
        miss_distance_km=float(miss) if miss is not None else None,
        hazardous=hazardous,
    )


def parse_feed(payload: Dict[str, Any]) -> List[NeoCandidate]:
    """Flatten a NeoWs feed payload; malformed objects are skipped."""
    groups = payload.get("near_earth_objects")
    if not isinstance(groups, dict):
        raise NeoFeedError("Feed payload missing 'near_earth_objects'.")

    out: List[NeoCandidate] = []
    for day in sorted(groups):
        for obj in groups[day] or []:
            try:
                out.append(_parse_object(obj))
            except (KeyError, IndexError, TypeError, ValueError) as e:
                log.warning(f"[feed.skip] day={day} id={obj.get('id') if isinstance(obj, dict) else None} error={e!r}")
    log.info(f"[feed.parse] days={len(groups)} candidates={len(out)}")
    return out


class NeoFeedClient:
    def __init__(self, api_key: str, feed_url: str, timeout_s: float = 10.0,
                 client: Optional[httpx.Client] = None, attempts: int = 3):
        self.api_key = api_key
        self.feed_url = feed_url
        self.attempts = max(1, attempts)
        self._client = client or httpx.Client(timeout=timeout_s)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def _get_with_retries(self, params: Dict[str, Any]) -> httpx.Response:
        last_exc = None
        for i in range(1, self.attempts + 1):
            try:
                log.info(f"[http.try] attempt={i} url={self.feed_url}")
                return self._client.get(self.feed_url, params=params)
            except httpx.TimeoutException as e:
                last_exc = e
                log.warning(f"[http.timeout] attempt={i} error={e}")
                if i < self.attempts:
                    time.sleep(0.8 * i)
        raise NeoFeedError(f"Feed timed out after {self.attempts} attempts: {last_exc}")

    def fetch(self, start: date, end: Optional[date] = None) -> List[NeoCandidate]:
        end = end or start
        params = {"start_date": start.isoformat(), "end_date": end.isoformat(), "api_key": self.api_key}
        printable = dict(params, api_key=mask_key(self.api_key))
        log.info(f"[feed.fetch] GET {self.feed_url} params={printable}")

        try:
            r = self._get_with_retries(params)
            log.info(f"[feed.fetch] status={r.status_code}")
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPError as e:
            raise NeoFeedError(f"Error fetching NEO feed: {e}") from e
        except ValueError as e:
            raise NeoFeedError(f"NEO feed returned non-JSON: {e}") from e

        if not isinstance(data, dict):
            raise NeoFeedError("NEO feed returned an unexpected response.")
        return parse_feed(data)


class NeoFeedCache:
    """
    Keyed cache with a time-to-live. Entries are loaded on first use, expire
    after ``ttl_s`` seconds and can be dropped explicitly. Check-and-load runs
    under one lock so concurrent misses trigger a single load.
    """

    def __init__(self, ttl_s: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, loader: Callable[[], Any], refresh: bool = False) -> Any:
        with self._lock:
            now = self._clock()
            hit = self._entries.get(key)
            if hit is not None and not refresh and now - hit[0] < self.ttl_s:
                log.debug(f"[cache.hit] key={key}")
                return hit[1]

            log.info(f"[cache.load] key={key} refresh={refresh} stale={hit is not None}")
            value = loader()
            self._entries[key] = (now, value)
            return value

    def peek(self, key: Hashable) -> Any:
        """Cached value regardless of age, or None."""
        hit = self._entries.get(key)
        return None if hit is None else hit[1]

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)


def preview_impact(candidate: NeoCandidate) -> Tuple[ImpactResult, int]:
    """Physics at the default angle and population at (0, 0), as listed in the picker."""
    physics = compute_impact(candidate.diameter_m, candidate.velocity_kms)
    return physics, estimate_population(0.0, 0.0, physics.affected_radius_km)
