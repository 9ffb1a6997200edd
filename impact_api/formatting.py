"""Human-readable magnitudes for impact results. TNT figures are tons of TNT."""
from __future__ import annotations

from .impact_model import ImpactResult

_NUMBER_STEPS = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))
_ENERGY_STEPS = ((1e18, "EJ"), (1e15, "PJ"), (1e12, "TJ"), (1e9, "GJ"))

SEVERITY_LEVELS = (
    (1e9, "Extinction", 100),
    (1e7, "Global Catastrophe", 90),
    (1e5, "Regional Disaster", 75),
    (1e3, "Major Impact", 50),
)


def format_number(x: float) -> str:
    for scale, suffix in _NUMBER_STEPS:
        if x >= scale:
            return f"{x / scale:.2f} {suffix}"
    return f"{x:.0f}"


def format_energy(joules: float) -> str:
    for scale, unit in _ENERGY_STEPS:
        if joules >= scale:
            return f"{joules / scale:.2f} {unit}"
    return f"{joules / 1e6:.2f} MJ"


def severity_level(tnt_tons: float) -> dict:
    for threshold, level, severity in SEVERITY_LEVELS:
        if tnt_tons > threshold:
            return {"level": level, "severity": severity}
    return {"level": "Local Event", "severity": 25}


def describe(result: ImpactResult, population_affected: int | None = None) -> dict:
    out = {
        "energy": format_energy(result.impact_energy_j),
        "tnt": f"{format_number(result.tnt_equivalent_tons)} tons TNT",
        "crater": f"{result.crater_diameter_km:.2f} km",
        "affected_radius": f"{result.affected_radius_km:.1f} km",
        "mass": f"{format_number(result.mass_kg)} kg",
        "severity": severity_level(result.tnt_equivalent_tons),
    }
    if population_affected is not None:
        out["population"] = format_number(population_affected)
    return out
