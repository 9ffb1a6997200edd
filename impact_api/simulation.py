from __future__ import annotations
from dataclasses import dataclass, asdict

from .impact_model import ImpactParameters, ImpactResult, compute_impact, DEFAULT_ANGLE_DEG
from .population import GeoPoint, estimate_population

DEFAULT_NAME = "Custom Asteroid"


@dataclass(frozen=True)
class SimulationResult:
    name: str
    diameter_m: float
    velocity_kms: float
    angle_deg: float
    lat: float
    lng: float
    mass_kg: float
    impact_energy_j: float
    crater_diameter_km: float
    affected_radius_km: float
    tnt_equivalent_tons: float
    population_affected: int

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)

    @property
    def impact(self) -> ImpactResult:
        return ImpactResult(
            mass_kg=self.mass_kg,
            impact_energy_j=self.impact_energy_j,
            crater_diameter_km=self.crater_diameter_km,
            affected_radius_km=self.affected_radius_km,
            tnt_equivalent_tons=self.tnt_equivalent_tons,
        )

    def as_dict(self) -> dict:
        return asdict(self)


def simulate(diameter, velocity, angle=DEFAULT_ANGLE_DEG, *, lat: float, lng: float,
             name: str | None = None) -> SimulationResult:
    """Physics first, then population over the computed affected radius."""
    params = ImpactParameters.normalized(diameter, velocity, angle)
    physics = compute_impact(diameter, velocity, angle)
    population = estimate_population(lat, lng, physics.affected_radius_km)
    return SimulationResult(
        name=name or DEFAULT_NAME,
        diameter_m=params.diameter_m,
        velocity_kms=params.velocity_kms,
        angle_deg=params.angle_deg,
        lat=lat,
        lng=lng,
        population_affected=population,
        **physics.as_dict(),
    )
