import pytest

from impact_api.formatting import describe, format_energy, format_number, severity_level
from impact_api.impact_model import compute_impact


@pytest.mark.parametrize("value, text", [
    (999, "999"),
    (1_000, "1.00 K"),
    (2_520_000, "2.52 M"),
    (3.5e9, "3.50 B"),
    (1.2e13, "12.00 T"),
])
def test_format_number(value, text):
    assert format_number(value) == text


@pytest.mark.parametrize("joules, text", [
    (5e5, "0.50 MJ"),
    (6.8e8, "680.00 MJ"),
    (2e9, "2.00 GJ"),
    (1.53e17, "153.00 PJ"),
    (4e18, "4.00 EJ"),
])
def test_format_energy(joules, text):
    assert format_energy(joules) == text


def test_severity_thresholds_are_exclusive():
    assert severity_level(1e3)["level"] == "Local Event"
    assert severity_level(1e3 + 1)["level"] == "Major Impact"
    assert severity_level(1e5 + 1)["level"] == "Regional Disaster"
    assert severity_level(1e7 + 1)["level"] == "Global Catastrophe"
    assert severity_level(2e9) == {"level": "Extinction", "severity": 100}


def test_describe():
    d = describe(compute_impact(100, 15), 2_520_000)
    assert d["tnt"].endswith("tons TNT")
    assert d["energy"].endswith("PJ")
    assert d["population"] == "2.52 M"
    assert d["severity"]["level"] == "Global Catastrophe"
    assert "population" not in describe(compute_impact(100, 15))
