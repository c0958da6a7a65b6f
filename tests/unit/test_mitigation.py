import unittest

from impactsim.impact_model import AsteroidParameters, InvalidParameterError
from impactsim.mitigation import MitigationStrategy, apply_mitigation


class TestMitigation(unittest.TestCase):
    def setUp(self):
        self.asteroid = AsteroidParameters(diameter_m=300.0, velocity_kmps=17.0, angle_deg=45.0,
                                           azimuth_deg=10.0)

    def test_kinetic_impactor_defaults(self):
        out = apply_mitigation(self.asteroid, MitigationStrategy("kinetic_impactor"))
        self.assertAlmostEqual(out.velocity_kmps, 17.01)
        self.assertAlmostEqual(out.azimuth_deg, 11.0)
        self.assertEqual(out.angle_deg, 45.0)
        self.assertEqual(out.diameter_m, 300.0)

    def test_kinetic_impactor_overrides(self):
        strategy = MitigationStrategy("kinetic_impactor", delta_v_kmps=0.5, azimuth_change_deg=3.0)
        out = apply_mitigation(self.asteroid, strategy)
        self.assertAlmostEqual(out.velocity_kmps, 17.5)
        self.assertAlmostEqual(out.azimuth_deg, 13.0)

    def test_gravity_tractor(self):
        out = apply_mitigation(self.asteroid, MitigationStrategy("gravity_tractor"))
        self.assertEqual(out.velocity_kmps, 17.0)
        self.assertAlmostEqual(out.azimuth_deg, 10.5)
        self.assertAlmostEqual(out.angle_deg, 45.5)

    def test_nuclear_device(self):
        out = apply_mitigation(self.asteroid, MitigationStrategy("nuclear_device"))
        self.assertAlmostEqual(out.velocity_kmps, 17.1)
        self.assertEqual(out.azimuth_deg, 10.0)
        self.assertEqual(out.angle_deg, 45.0)

    def test_explicit_zero_is_applied(self):
        strategy = MitigationStrategy("kinetic_impactor", delta_v_kmps=0.0, azimuth_change_deg=0.0)
        out = apply_mitigation(self.asteroid, strategy)
        self.assertEqual(out.velocity_kmps, 17.0)
        self.assertEqual(out.azimuth_deg, 10.0)

    def test_rejects_fields_the_strategy_does_not_use(self):
        unused = [
            MitigationStrategy("nuclear_device", azimuth_change_deg=20.0),
            MitigationStrategy("nuclear_device", angle_change_deg=1.0),
            MitigationStrategy("gravity_tractor", delta_v_kmps=0.5),
            MitigationStrategy("kinetic_impactor", angle_change_deg=2.0),
        ]
        for strategy in unused:
            with self.assertRaises(InvalidParameterError) as ctx:
                apply_mitigation(self.asteroid, strategy)
            self.assertIn(strategy.type, str(ctx.exception))

    def test_input_is_not_mutated(self):
        apply_mitigation(self.asteroid, MitigationStrategy("nuclear_device"))
        self.assertEqual(self.asteroid.velocity_kmps, 17.0)

    def test_result_is_validated(self):
        steep = AsteroidParameters(diameter_m=300.0, velocity_kmps=17.0, angle_deg=90.0)
        with self.assertRaises(InvalidParameterError):
            apply_mitigation(steep, MitigationStrategy("gravity_tractor"))

    def test_unknown_strategy(self):
        with self.assertRaises(InvalidParameterError):
            apply_mitigation(self.asteroid, MitigationStrategy("laser_ablation"))


if __name__ == '__main__':
    unittest.main()
