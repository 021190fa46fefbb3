import unittest

import numpy as np

from neoimpact.constants import V_EARTH
from neoimpact.impact import (
    ImpactorProfile,
    TargetProperties,
    TargetType,
    crater_size,
    dispersion_length,
    projectile_mass,
    transient_crater_diameter,
)


def stony_profile(diameter=50.0, velocity=20.0, target_type=TargetType.IGNEOUS, angle=45.0):
    return ImpactorProfile(
        diameter=diameter, density=3000.0, velocity=velocity, angle=angle, target_type=target_type
    )


class TestCraterSize(unittest.TestCase):

    def test_target_types_give_distinct_craters(self):
        mass = projectile_mass(50.0, 3000.0)
        diameters = {
            crater_size(stony_profile(target_type=t), mass, 20.0).final_diameter
            for t in TargetType
        }
        self.assertEqual(len(diameters), 3)

    def test_diameter_increases_with_velocity(self):
        profile = stony_profile()
        mass = projectile_mass(50.0, 3000.0)
        diameters = [
            crater_size(profile, mass, v).final_diameter
            for v in np.linspace(11.0, 30.0, 20)
        ]
        self.assertTrue(np.all(np.diff(diameters) > 0.0))

    def test_simple_crater(self):
        profile = stony_profile()
        mass = projectile_mass(50.0, 3000.0)
        result = crater_size(profile, mass, 20.0)

        tr_diameter = transient_crater_diameter(profile, mass, 20.0)
        tr_depth = tr_diameter / 2.828
        final_diameter = 1.25 * tr_diameter
        rim_height = 0.07 * tr_diameter**4 / final_diameter**3
        breccia = 2.8 * 0.032 * final_diameter**3 * (
            (tr_depth + rim_height) / (tr_depth * final_diameter**2)
        )

        self.assertFalse(result.is_complex)
        np.testing.assert_allclose(result.transient_diameter, tr_diameter)
        np.testing.assert_allclose(result.transient_depth, tr_depth)
        np.testing.assert_allclose(result.final_diameter, final_diameter)
        np.testing.assert_allclose(result.final_depth, tr_depth + rim_height - breccia)

    def test_complex_crater(self):
        profile = stony_profile(diameter=1000.0)
        mass = projectile_mass(1000.0, 3000.0)
        result = crater_size(profile, mass, 20.0)

        self.assertTrue(result.is_complex)
        expected_diameter = 1.17 * result.transient_diameter**1.13 / 2.8554
        np.testing.assert_allclose(result.final_diameter, expected_diameter)
        np.testing.assert_allclose(result.final_depth, 37.0 * expected_diameter**0.301)

    def test_volume(self):
        profile = stony_profile()
        result = crater_size(profile, projectile_mass(50.0, 3000.0), 20.0)
        np.testing.assert_allclose(
            result.volume, np.pi / 24.0 * (result.transient_diameter / 1000.0) ** 3
        )

    def test_no_melt_below_12_km_s(self):
        profile = stony_profile(velocity=11.0)
        result = crater_size(profile, projectile_mass(50.0, 3000.0), 11.9)
        self.assertIsNone(result.melt_volume)

    def test_melt_volume(self):
        profile = stony_profile()
        mass = projectile_mass(50.0, 3000.0)
        result = crater_size(profile, mass, 20.0)
        expected = 8.9e-21 * 0.5 * mass * 20000.0**2 * np.sin(np.deg2rad(45.0))
        np.testing.assert_allclose(result.melt_volume, expected)

    def test_melt_volume_capped_at_earth_volume(self):
        profile = stony_profile()
        result = crater_size(profile, 1.0e33, 20.0)
        self.assertEqual(result.melt_volume, V_EARTH)

    def test_high_breakup_halves_transient_diameter(self):
        profile = stony_profile()
        mass = projectile_mass(50.0, 3000.0)
        intact = crater_size(profile, mass, 20.0)
        fragmented = crater_size(profile, mass, 20.0, breakup_altitude=60000.0)
        np.testing.assert_allclose(fragmented.transient_diameter, intact.transient_diameter / 2.0)

    def test_denser_target_gives_smaller_crater(self):
        profile = stony_profile()
        mass = projectile_mass(50.0, 3000.0)
        light = crater_size(profile, mass, 20.0, target=TargetProperties(density=2000.0))
        dense = crater_size(profile, mass, 20.0, target=TargetProperties(density=3000.0))
        self.assertGreater(light.final_diameter, dense.final_diameter)


class TestDispersionLength(unittest.TestCase):

    def test_no_breakup(self):
        self.assertEqual(dispersion_length(50.0, 0.0, 7160.0), 50.0)

    def test_grows_with_breakup_altitude(self):
        lengths = [dispersion_length(50.0, h, 7160.0) for h in [1000.0, 10000.0, 40000.0]]
        self.assertTrue(np.all(np.diff(lengths) > 0.0))
        self.assertGreater(lengths[0], 50.0)


if __name__ == '__main__':
    unittest.main()
