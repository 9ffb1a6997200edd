from fastapi import FastAPI, Query, HTTPException, Depends
from pydantic import BaseModel, Field
from datetime import date
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional
import logging

from .config import load_settings, Settings
from .impact_model import compute_impact, DEFAULT_ANGLE_DEG
from .population import estimate_population
from .simulation import simulate
from .neo_feed import NeoFeedClient, NeoFeedCache, NeoFeedError, NeoCandidate, preview_impact
from .formatting import describe
from .geo import impact_zones

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
log = logging.getLogger(__name__)


# -------------------------------
# Collaborators (overridable in tests)
# -------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_feed_client() -> NeoFeedClient:
    s = get_settings()
    return NeoFeedClient(api_key=s.nasa_api_key, feed_url=s.nasa_api_url, timeout_s=s.http_timeout_s)


@lru_cache(maxsize=1)
def get_feed_cache() -> NeoFeedCache:
    return NeoFeedCache(ttl_s=get_settings().neo_cache_ttl_s)


def close_feed_client() -> None:
    """Close the shared feed client, if one was created, so the next use opens a fresh one."""
    if get_feed_client.cache_info().currsize:
        get_feed_client().close()
        log.info("[shutdown] feed client closed")
    get_feed_client.cache_clear()


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    close_feed_client()


app = FastAPI(title="Asteroid impact estimator", version="1.0.0", lifespan=lifespan)


# -------------------------------
# Health
# -------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


# -------------------------------
# Impact physics + population
# -------------------------------
class ImpactIn(BaseModel):
    # Lenient on purpose: missing/zero/negative values are normalized by the model
    diameter: Optional[float] = Field(None, description="Asteroid diameter in meters")
    velocity: Optional[float] = Field(None, description="Impact velocity in km/s")
    angle: Optional[float] = Field(DEFAULT_ANGLE_DEG, description="Entry angle to horizontal in degrees (15-90)")


class SimulateIn(ImpactIn):
    name: Optional[str] = Field(None, max_length=200)
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lng: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


def _simulation_payload(req_name, diameter, velocity, angle, lat, lng) -> dict:
    result = simulate(diameter, velocity, angle, lat=lat, lng=lng, name=req_name)
    physics = result.impact
    log.info(f"[simulate] name={result.name!r} lat={lat} lng={lng} "
             f"affected_km={result.affected_radius_km} population={result.population_affected}")
    return {
        **result.as_dict(),
        "display": describe(physics, result.population_affected),
        "zones": impact_zones(result.point, physics),
    }


@app.post("/impact")
def impact(req: ImpactIn):
    return compute_impact(req.diameter, req.velocity, req.angle).as_dict()


@app.get("/population")
def population(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    radius: float = Query(..., ge=0, description="Radius in kilometers"),
):
    return {"population": estimate_population(lat, lng, radius), "lat": lat, "lng": lng, "radius_km": radius}


@app.post("/simulate")
def simulate_endpoint(req: SimulateIn):
    return _simulation_payload(req.name, req.diameter, req.velocity, req.angle, req.lat, req.lng)


# -------------------------------
# Near-Earth objects
# -------------------------------
def _load_candidates(day: date, refresh: bool, client: NeoFeedClient, cache: NeoFeedCache) -> list[NeoCandidate]:
    try:
        return cache.get(day.isoformat(), lambda: client.fetch(day), refresh=refresh)
    except NeoFeedError as e:
        log.error(f"[feed.error] day={day} {e}")
        raise HTTPException(status_code=502, detail=str(e))


@app.get("/asteroids")
def asteroids(
    day: Optional[date] = Query(None, alias="date", description="Close-approach date (defaults to today)"),
    refresh: bool = Query(False, description="Bypass the cache and refetch"),
    client: NeoFeedClient = Depends(get_feed_client),
    cache: NeoFeedCache = Depends(get_feed_cache),
):
    day = day or date.today()
    out = []
    for c in _load_candidates(day, refresh, client, cache):
        physics, pop = preview_impact(c)
        out.append({**c.as_dict(), "physics": physics.as_dict(), "population": pop})
    return {"date": day.isoformat(), "count": len(out), "asteroids": out}


@app.post("/asteroids/{asteroid_id}/simulate")
def simulate_asteroid(
    asteroid_id: str,
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    angle: float = Query(DEFAULT_ANGLE_DEG, description="Entry angle to horizontal in degrees"),
    day: Optional[date] = Query(None, alias="date", description="Close-approach date (defaults to today)"),
    client: NeoFeedClient = Depends(get_feed_client),
    cache: NeoFeedCache = Depends(get_feed_cache),
):
    day = day or date.today()
    match = next((c for c in _load_candidates(day, False, client, cache) if c.id == asteroid_id), None)
    if match is None:
        raise HTTPException(status_code=404, detail=f"Asteroid {asteroid_id} not in feed for {day.isoformat()}.")
    payload = _simulation_payload(match.name, match.diameter_m, match.velocity_kms, angle, lat, lng)
    payload["asteroid"] = match.as_dict()
    return payload
