from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from math import pi, isfinite

log = logging.getLogger(__name__)

# -----------------------------
# Physical constants & defaults
# -----------------------------
ASTEROID_DENSITY = 2600.0        # kg/m^3
CRATER_CONSTANT = 1.161
J_PER_TON_TNT = 4.184e9          # J in 1 ton TNT

MIN_DIAMETER_M = 1.0
MIN_VELOCITY_KMS = 1.0
ANGLE_MIN_DEG = 15.0
ANGLE_MAX_DEG = 90.0
DEFAULT_ANGLE_DEG = 45.0

AFFECTED_RADIUS_FACTOR = 5.0
AFFECTED_RADIUS_MIN_KM = 0.1

# Fallbacks used when a field (or the whole computation) is not usable
SAFE_CRATER_KM = 0.1
SAFE_AFFECTED_KM = 0.5


def coerce_number(value, default: float) -> float:
    """
    Explicit input validation: None, non-numeric, NaN, +/-inf, out-of-range
    ints and 0 → default.
    Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        x = float(value)
    except (TypeError, ValueError, OverflowError):
        # ints past the float range count as unusable, like inf
        return default
    if not isfinite(x) or x == 0.0:
        return default
    return x


def _usable_or(value: float, default: float) -> float:
    return value if (isfinite(value) and value != 0.0) else default


@dataclass(frozen=True)
class ImpactParameters:
    diameter_m: float
    velocity_kms: float
    angle_deg: float = DEFAULT_ANGLE_DEG  # to HORIZONTAL

    @classmethod
    def normalized(cls, diameter, velocity, angle=DEFAULT_ANGLE_DEG) -> "ImpactParameters":
        """Map raw UI input onto the domain: d, v >= 1 and angle in [15, 90]."""
        d = max(MIN_DIAMETER_M, coerce_number(diameter, MIN_DIAMETER_M))
        v = max(MIN_VELOCITY_KMS, coerce_number(velocity, MIN_VELOCITY_KMS))
        a = min(ANGLE_MAX_DEG, max(ANGLE_MIN_DEG, coerce_number(angle, DEFAULT_ANGLE_DEG)))
        return cls(diameter_m=d, velocity_kms=v, angle_deg=a)

    @property
    def radius_m(self) -> float:
        return 0.5 * self.diameter_m

    @property
    def volume_m3(self) -> float:
        return (4.0 / 3.0) * pi * self.radius_m**3

    @property
    def mass_kg(self) -> float:
        return self.volume_m3 * ASTEROID_DENSITY

    @property
    def velocity_mps(self) -> float:
        return self.velocity_kms * 1000.0


@dataclass(frozen=True)
class ImpactResult:
    mass_kg: float
    impact_energy_j: float
    crater_diameter_km: float
    affected_radius_km: float
    tnt_equivalent_tons: float

    @classmethod
    def safe_default(cls) -> "ImpactResult":
        return cls(
            mass_kg=0.0,
            impact_energy_j=0.0,
            crater_diameter_km=SAFE_CRATER_KM,
            affected_radius_km=SAFE_AFFECTED_KM,
            tnt_equivalent_tons=0.0,
        )

    def as_dict(self) -> dict:
        return asdict(self)


class ImpactModel:
    """
    Simplified scalar impact model: sphere of fixed density, kinetic energy,
    empirical crater scaling and a damage radius of five crater diameters.

    The entry angle is carried on the parameters but none of the formulas use
    it; it would shape the crater, not change these scalars.
    """

    def __init__(self, params: ImpactParameters):
        self.p = params

    # ---------- Energetics ----------
    def kinetic_energy_j(self) -> float:
        return 0.5 * self.p.mass_kg * self.p.velocity_mps**2

    def tnt_equivalent_tons(self) -> float:
        return self.kinetic_energy_j() / J_PER_TON_TNT

    # ---------- Crater & damage extent ----------
    def crater_diameter_km(self) -> float:
        return CRATER_CONSTANT * (self.p.mass_kg ** 0.333) * (self.p.velocity_mps ** 0.44) / 1000.0

    def affected_radius_km(self) -> float:
        return max(AFFECTED_RADIUS_MIN_KM, self.crater_diameter_km() * AFFECTED_RADIUS_FACTOR)

    # ---------- Convenience summary ----------
    def result(self) -> ImpactResult:
        # round first, then swap unusable values (matches 0.004 km → 0.1)
        return ImpactResult(
            mass_kg=_usable_or(round(self.p.mass_kg, 2), 0.0),
            impact_energy_j=_usable_or(self.kinetic_energy_j(), 0.0),
            crater_diameter_km=_usable_or(round(self.crater_diameter_km(), 2), SAFE_CRATER_KM),
            affected_radius_km=_usable_or(round(self.affected_radius_km(), 2), SAFE_AFFECTED_KM),
            tnt_equivalent_tons=_usable_or(round(self.tnt_equivalent_tons(), 2), 0.0),
        )


def compute_impact(diameter, velocity, angle=DEFAULT_ANGLE_DEG) -> ImpactResult:
    """
    Impact metrics for a (diameter m, velocity km/s, angle deg) triple.

    Total over any input: malformed values are normalized to the documented
    minimums, and an arithmetic failure yields ImpactResult.safe_default().
    """
    params = ImpactParameters.normalized(diameter, velocity, angle)
    try:
        return ImpactModel(params).result()
    except ArithmeticError as e:
        log.warning(f"[impact.fallback] diameter_m={params.diameter_m} velocity_kms={params.velocity_kms} error={e!r}")
        return ImpactResult.safe_default()
