import pytest


def _neo(id_, name, dmin, dmax, kms, hazardous=False, approaches=True):
    obj = {
        "id": id_,
        "name": name,
        "nasa_jpl_url": f"https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr={id_}",
        "is_potentially_hazardous_asteroid": hazardous,
        "estimated_diameter": {
            "meters": {"estimated_diameter_min": dmin, "estimated_diameter_max": dmax},
        },
        "close_approach_data": [],
    }
    if approaches:
        obj["close_approach_data"].append({
            "close_approach_date": "2025-10-04",
            "relative_velocity": {"kilometers_per_second": str(kms)},
            "miss_distance": {"kilometers": "4500000.123"},
        })
    return obj


@pytest.fixture
def feed_payload():
    return {
        "element_count": 3,
        "near_earth_objects": {
            "2025-10-04": [
                _neo("3542519", "(2010 PK9)", 90.0, 110.0, 15.0, hazardous=True),
                _neo("54016834", "(2020 BB)", 20.4, 21.6, "8.25"),
                _neo("999", "(broken)", 1.0, 2.0, 1.0, approaches=False),
            ],
        },
    }
