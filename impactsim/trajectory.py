"""Approach path sampling for animating an asteroid towards its impact point."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator

from .geo import EARTH_RADIUS_KM, Vector3, lat_lon_to_cartesian
from .impact_model import AsteroidParameters, ImpactLocation, InvalidParameterError

DEFAULT_START_DISTANCE_KM = 1_000_000.0
DEFAULT_STEPS = 100
GRAVITY_BIAS = 0.2


@dataclass(frozen=True)
class TrajectoryPoint:
    position: Vector3
    distance_km: float
    normalized_time: float


def approach_direction(azimuth_deg: float, angle_deg: float) -> Vector3:
    az = math.radians(azimuth_deg)
    el = math.radians(angle_deg)
    d = (math.cos(az) * math.sin(el), math.sin(az) * math.sin(el), math.cos(el))
    n = math.sqrt(d[0]**2 + d[1]**2 + d[2]**2)
    return d[0] / n, d[1] / n, d[2] / n


class Trajectory:
    """
    Finite, restartable sequence of ``steps + 1`` samples from the start distance
    down to the impact point. Each iteration recomputes the points, so iterating
    twice yields identical results.
    """

    def __init__(self, asteroid: AsteroidParameters, location: ImpactLocation, steps: int = DEFAULT_STEPS):
        self.asteroid = asteroid
        self.location = location
        self.steps = steps
        self.start_distance_km = asteroid.distance_km or DEFAULT_START_DISTANCE_KM
        self.impact_point = lat_lon_to_cartesian(location.latitude_deg, location.longitude_deg, EARTH_RADIUS_KM)
        self.direction = approach_direction(asteroid.azimuth_deg, asteroid.angle_deg)

    def __len__(self) -> int:
        return self.steps + 1

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        start = self.start_distance_km
        ix, iy, iz = self.impact_point
        dx, dy, dz = self.direction
        for i in range(self.steps + 1):
            t = i / self.steps
            distance = start * (1.0 - t) + EARTH_RADIUS_KM * t
            bias = (1.0 - t) ** 2 * GRAVITY_BIAS
            offset = distance - EARTH_RADIUS_KM + bias * start
            yield TrajectoryPoint(
                position=(ix + dx * offset, iy + dy * offset, iz + dz * offset),
                distance_km=distance,
                normalized_time=t,
            )


def generate_trajectory(asteroid: AsteroidParameters, impact_location: ImpactLocation,
                        steps: int = DEFAULT_STEPS) -> Trajectory:
    return Trajectory(asteroid, impact_location, steps)


def compute_trajectory(asteroid: AsteroidParameters, location: ImpactLocation,
                       steps: int = DEFAULT_STEPS) -> Trajectory:
    """Validated entry point used by the service layer."""
    asteroid.validate()
    location.validate()
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 1:
        raise InvalidParameterError(f"steps must be a positive integer, got {steps!r}.")
    return generate_trajectory(asteroid, location, steps)
