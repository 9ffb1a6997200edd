from __future__ import annotations
import logging
import math

from .impact_model import ImpactResult
from .population import GeoPoint

log = logging.getLogger(__name__)

R_EARTH_KM = 6371.0088

# Minimum drawn radii so tiny impacts stay visible on the map
MIN_CRATER_ZONE_KM = 0.1
MIN_AFFECTED_ZONE_KM = 0.5


def destination(origin: GeoPoint, bearing_rad: float, distance_km: float) -> GeoPoint:
    """Great-circle point 'distance_km' from origin along 'bearing_rad'; lng wrapped to [-180, 180)."""
    arc = distance_km / R_EARTH_KM
    lat0 = math.radians(origin.lat)
    sin_lat0, cos_lat0 = math.sin(lat0), math.cos(lat0)
    sin_arc, cos_arc = math.sin(arc), math.cos(arc)

    sin_lat = sin_lat0 * cos_arc + cos_lat0 * sin_arc * math.cos(bearing_rad)
    lat = math.asin(max(-1.0, min(1.0, sin_lat)))
    dlng = math.atan2(math.sin(bearing_rad) * sin_arc * cos_lat0, cos_arc - sin_lat0 * math.sin(lat))

    lng = (math.radians(origin.lng) + dlng + math.pi) % (2 * math.pi) - math.pi
    return GeoPoint(lat=math.degrees(lat), lng=math.degrees(lng))


def circle_feature(center: GeoPoint, radius_km: float, steps: int = 64, **properties) -> dict:
    """Closed polygon ring approximating a circle; GeoJSON order is [lng, lat]."""
    ring = []
    for i in range(steps):
        p = destination(center, 2 * math.pi * i / steps, radius_km)
        ring.append([p.lng, p.lat])
    ring.append(ring[0])
    return {
        "type": "Feature",
        "properties": {"radius_km": radius_km, **properties},
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


def circle_as_geojson(lat: float, lng: float, radius_km: float, steps: int = 64) -> dict:
    return {"type": "FeatureCollection", "features": [circle_feature(GeoPoint(lat, lng), radius_km, steps)]}


def impact_zones(point: GeoPoint, result: ImpactResult, steps: int = 64) -> dict:
    """
    Crater and affected-area rings around the impact point. The crater ring
    uses the crater radius (half its diameter).
    """
    crater_km = max(result.crater_diameter_km * 0.5, MIN_CRATER_ZONE_KM)
    affected_km = max(result.affected_radius_km, MIN_AFFECTED_ZONE_KM)
    log.debug(f"[geojson.zones] center=[{point.lng},{point.lat}] crater_km={crater_km} affected_km={affected_km}")
    return {
        "type": "FeatureCollection",
        "features": [
            circle_feature(point, crater_km, steps, zone="crater"),
            circle_feature(point, affected_km, steps, zone="affected"),
        ],
    }
