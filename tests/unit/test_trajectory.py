import math
import unittest

from impactsim.geo import EARTH_RADIUS_KM, lat_lon_to_cartesian
from impactsim.impact_model import AsteroidParameters, ImpactLocation, InvalidParameterError
from impactsim.trajectory import (
    DEFAULT_START_DISTANCE_KM, approach_direction, compute_trajectory, generate_trajectory,
)

NYC = ImpactLocation(40.7128, -74.0060)


class TestTrajectory(unittest.TestCase):
    def setUp(self):
        self.asteroid = AsteroidParameters(diameter_m=100.0, velocity_kmps=20.0, angle_deg=45.0,
                                           azimuth_deg=30.0)

    def test_sample_count_and_time(self):
        traj = compute_trajectory(self.asteroid, NYC, steps=10)
        points = list(traj)
        self.assertEqual(len(points), 11)
        self.assertEqual(len(traj), 11)
        self.assertEqual(points[0].normalized_time, 0.0)
        self.assertEqual(points[-1].normalized_time, 1.0)

    def test_ends_at_impact_point(self):
        points = list(compute_trajectory(self.asteroid, NYC, steps=50))
        impact = lat_lon_to_cartesian(NYC.latitude_deg, NYC.longitude_deg)
        for got, want in zip(points[-1].position, impact):
            self.assertAlmostEqual(got, want, places=6)
        self.assertAlmostEqual(points[-1].distance_km, EARTH_RADIUS_KM)

    def test_starts_at_default_distance(self):
        first = next(iter(compute_trajectory(self.asteroid, NYC)))
        self.assertEqual(first.distance_km, DEFAULT_START_DISTANCE_KM)

    def test_uses_preset_distance(self):
        asteroid = AsteroidParameters(diameter_m=100.0, velocity_kmps=20.0, angle_deg=45.0, distance_km=50000.0)
        first = next(iter(compute_trajectory(asteroid, NYC)))
        self.assertEqual(first.distance_km, 50000.0)

    def test_restartable_and_deterministic(self):
        traj = generate_trajectory(self.asteroid, NYC, steps=20)
        self.assertEqual(list(traj), list(traj))
        self.assertEqual(list(traj), list(generate_trajectory(self.asteroid, NYC, steps=20)))

    def test_distance_decreases(self):
        distances = [p.distance_km for p in compute_trajectory(self.asteroid, NYC, steps=25)]
        for a, b in zip(distances, distances[1:]):
            self.assertGreater(a, b)

    def test_points_lie_along_approach_direction(self):
        traj = compute_trajectory(self.asteroid, NYC, steps=5)
        ix, iy, iz = traj.impact_point
        dx, dy, dz = traj.direction
        for p in traj:
            off = (p.position[0] - ix, p.position[1] - iy, p.position[2] - iz)
            cross = (off[1]*dz - off[2]*dy, off[2]*dx - off[0]*dz, off[0]*dy - off[1]*dx)
            self.assertAlmostEqual(math.sqrt(sum(c*c for c in cross)), 0.0, delta=1e-3)

    def test_direction_is_unit(self):
        d = approach_direction(123.0, 33.0)
        self.assertAlmostEqual(math.sqrt(sum(c*c for c in d)), 1.0)
        self.assertEqual(approach_direction(0.0, 90.0)[2], math.cos(math.radians(90.0)))

    def test_rejects_bad_input(self):
        with self.assertRaises(InvalidParameterError):
            compute_trajectory(self.asteroid, NYC, steps=0)
        with self.assertRaises(InvalidParameterError):
            compute_trajectory(self.asteroid, ImpactLocation(-95.0, 0.0))
        bad = AsteroidParameters(diameter_m=100.0, velocity_kmps=20.0, angle_deg=0.0)
        with self.assertRaises(InvalidParameterError):
            compute_trajectory(bad, NYC)


if __name__ == '__main__':
    unittest.main()
