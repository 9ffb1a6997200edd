from .impact_model import ImpactParameters, ImpactResult, compute_impact
from .population import GeoPoint, PopulationCenter, REFERENCE_CENTERS, estimate_population
from .simulation import SimulationResult, simulate

__all__ = [
    "ImpactParameters", "ImpactResult", "compute_impact",
    "GeoPoint", "PopulationCenter", "REFERENCE_CENTERS", "estimate_population",
    "SimulationResult", "simulate",
]
