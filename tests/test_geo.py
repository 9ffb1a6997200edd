import math

import pytest

from impact_api.geo import R_EARTH_KM, circle_as_geojson, destination, impact_zones
from impact_api.impact_model import ImpactResult, compute_impact
from impact_api.population import GeoPoint


def _haversine_km(lat1, lon1, lat2, lon2):
    p1, p2 = math.radians(lat1), math.radians(lat2)
    dp, dl = p2 - p1, math.radians(lon2 - lon1)
    a = math.sin(dp / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2) ** 2
    return 2 * R_EARTH_KM * math.asin(math.sqrt(a))


def test_circle_is_closed_and_on_radius():
    gj = circle_as_geojson(40.7128, -74.0060, 25.0, steps=32)
    ring = gj["features"][0]["geometry"]["coordinates"][0]
    assert len(ring) == 33
    assert ring[0] == ring[-1]
    for lon, lat in ring:
        assert _haversine_km(40.7128, -74.0060, lat, lon) == pytest.approx(25.0, rel=1e-6)


def test_longitudes_wrap_at_antimeridian():
    ring = circle_as_geojson(0.0, 179.9, 50.0)["features"][0]["geometry"]["coordinates"][0]
    assert all(-180.0 <= lon <= 180.0 for lon, _ in ring)


def test_impact_zones_radii():
    r = compute_impact(100, 15)
    zones = impact_zones(GeoPoint(10.0, 20.0), r)["features"]
    assert [f["properties"]["zone"] for f in zones] == ["crater", "affected"]
    assert zones[0]["properties"]["radius_km"] == pytest.approx(r.crater_diameter_km / 2)
    assert zones[1]["properties"]["radius_km"] == r.affected_radius_km


def test_impact_zones_minimum_radii():
    zones = impact_zones(GeoPoint(0.0, 0.0), ImpactResult(0.0, 0.0, 0.01, 0.1, 0.0))["features"]
    assert zones[0]["properties"]["radius_km"] == 0.1
    assert zones[1]["properties"]["radius_km"] == 0.5


def test_destination_cardinal_moves():
    quarter = math.pi * R_EARTH_KM / 2
    north = destination(GeoPoint(0.0, 0.0), 0.0, 111.19)
    assert north.lat == pytest.approx(1.0, abs=1e-3)
    assert north.lng == pytest.approx(0.0, abs=1e-9)
    east = destination(GeoPoint(0.0, 0.0), math.pi / 2, quarter)
    assert east.lat == pytest.approx(0.0, abs=1e-9)
    assert east.lng == pytest.approx(90.0)


def test_destination_wraps_longitude():
    p = destination(GeoPoint(0.0, 179.5), math.pi / 2, 111.19)
    assert p.lng == pytest.approx(-179.5, abs=1e-3)
