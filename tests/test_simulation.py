from impact_api.impact_model import compute_impact
from impact_api.population import GeoPoint, estimate_population
from impact_api.simulation import simulate


def test_simulate_merges_physics_and_population():
    r = simulate(100, 15, 45, lat=40.7128, lng=-74.0060, name="Test rock")
    physics = compute_impact(100, 15, 45)
    assert r.impact == physics
    assert r.population_affected == estimate_population(40.7128, -74.0060, physics.affected_radius_km)
    assert r.name == "Test rock"
    assert (r.diameter_m, r.velocity_kms, r.angle_deg) == (100.0, 15.0, 45.0)


def test_simulate_echoes_normalized_inputs():
    r = simulate(-1, None, 200, lat=0.0, lng=0.0)
    assert (r.diameter_m, r.velocity_kms, r.angle_deg) == (1.0, 1.0, 90.0)
    assert r.name == "Custom Asteroid"


def test_as_dict_is_flat():
    d = simulate(20, 12, lat=1.0, lng=2.0).as_dict()
    assert d["lat"] == 1.0 and d["lng"] == 2.0
    assert set(compute_impact(20, 12).as_dict()) <= set(d)
    assert isinstance(d["population_affected"], int)


def test_point_is_impact_location():
    r = simulate(20, 12, lat=-23.5, lng=-46.6)
    assert r.point == GeoPoint(-23.5, -46.6)
