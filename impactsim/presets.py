from __future__ import annotations
from dataclasses import dataclass

from .impact_model import AsteroidParameters, ImpactLocation

# Typical bulk densities (kg/m^3)
DENSITIES = {
    "icy": 1000.0,
    "carbonaceous": 2000.0,
    "rocky": 3000.0,
    "iron": 8000.0,
}


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    description: str
    asteroid: AsteroidParameters
    location: ImpactLocation


SCENARIOS = (
    Scenario(
        id="nyc-100m",
        name="City killer over New York",
        description="100 m rocky body striking Manhattan at 45 degrees.",
        asteroid=AsteroidParameters(diameter_m=100.0, velocity_kmps=20.0, angle_deg=45.0,
                                    density_kgpm3=DENSITIES["rocky"]),
        location=ImpactLocation(40.7128, -74.0060),
    ),
    Scenario(
        id="pacific-100m",
        name="Open Pacific strike",
        description="Same 100 m body landing in the central Pacific.",
        asteroid=AsteroidParameters(diameter_m=100.0, velocity_kmps=20.0, angle_deg=45.0,
                                    density_kgpm3=DENSITIES["rocky"]),
        location=ImpactLocation(0.0, -160.0),
    ),
    Scenario(
        id="chelyabinsk",
        name="Chelyabinsk 2013",
        description="Shallow 15 m superbolide that exploded in the air.",
        asteroid=AsteroidParameters(diameter_m=15.0, velocity_kmps=19.0, angle_deg=20.0,
                                    density_kgpm3=DENSITIES["rocky"], azimuth_deg=280.0),
        location=ImpactLocation(54.8, 61.1),
    ),
    Scenario(
        id="tunguska",
        name="Tunguska 1908",
        description="Roughly 60 m stony body over Siberia.",
        asteroid=AsteroidParameters(diameter_m=60.0, velocity_kmps=27.0, angle_deg=35.0,
                                    density_kgpm3=DENSITIES["rocky"]),
        location=ImpactLocation(60.886, 101.894),
    ),
    Scenario(
        id="chicxulub",
        name="Extinction-scale impactor",
        description="10 km body at comet-like speed, Yucatan peninsula.",
        asteroid=AsteroidParameters(diameter_m=10000.0, velocity_kmps=70.0, angle_deg=45.0,
                                    density_kgpm3=DENSITIES["rocky"]),
        location=ImpactLocation(21.4, -89.5),
    ),
)


def get_scenario(scenario_id: str) -> Scenario | None:
    return next((s for s in SCENARIOS if s.id == scenario_id), None)
