import unittest

import numpy as np

from neoimpact.constants import J_PER_MEGATON, R_EARTH
from neoimpact.impact import (
    ImpactorProfile,
    impact_energy,
    impact_frequency,
    projectile_mass,
    seafloor_velocity,
)


class TestImpactEnergy(unittest.TestCase):

    def setUp(self):
        self.profile = ImpactorProfile(diameter=1000.0, density=3000.0, velocity=20.0, angle=45.0)

    def test_reference_scenario(self):
        result = impact_energy(self.profile)
        np.testing.assert_allclose(result.mass, 1.5708e12, rtol=1e-3)
        np.testing.assert_allclose(result.kinetic_energy, 3.1416e20, rtol=1e-3)
        np.testing.assert_allclose(result.energy_megatons, result.kinetic_energy / J_PER_MEGATON)

    def test_surface_impact_delivers_kinetic_energy(self):
        result = impact_energy(self.profile)
        self.assertEqual(result.impact_energy, result.kinetic_energy)
        self.assertEqual(result.seafloor_velocity, 20.0)
        self.assertEqual(result.seafloor_energy, result.kinetic_energy)

    def test_momentum(self):
        result = impact_energy(self.profile, impact_velocity=15.0)
        mass = projectile_mass(1000.0, 3000.0)
        np.testing.assert_allclose(result.linear_momentum, mass * 15000.0)
        np.testing.assert_allclose(
            result.angular_momentum, mass * 15000.0 * np.cos(np.deg2rad(45.0)) * R_EARTH
        )

    def test_airburst_energy_is_velocity_loss(self):
        result = impact_energy(self.profile, impact_velocity=5.0, burst_altitude=12000.0)
        mass = projectile_mass(1000.0, 3000.0)
        np.testing.assert_allclose(result.impact_energy, 0.5 * mass * (20000.0**2 - 5000.0**2))
        np.testing.assert_allclose(result.impact_megatons, result.impact_energy / J_PER_MEGATON)
        # Kinetic energy still refers to the entry velocity
        np.testing.assert_allclose(result.kinetic_energy, 0.5 * mass * 20000.0**2)

    def test_ground_impact_energy_uses_impact_velocity(self):
        result = impact_energy(self.profile, impact_velocity=5.0, burst_altitude=0.0)
        mass = projectile_mass(1000.0, 3000.0)
        np.testing.assert_allclose(result.impact_energy, 0.5 * mass * 5000.0**2)

    def test_water_layer_slows_projectile(self):
        profile = ImpactorProfile(
            diameter=100.0, density=3000.0, velocity=20.0, angle=30.0,
            target_depth=500.0, target_type='water'
        )
        result = impact_energy(profile)
        expected = 20.0 * np.exp(-3.0 * 1000.0 * 0.877 * 500.0 / (2.0 * 3000.0 * 100.0 * 0.5))
        np.testing.assert_allclose(result.seafloor_velocity, expected, rtol=1e-12)
        self.assertLess(result.seafloor_energy, result.kinetic_energy)

    def test_relativistic_correction(self):
        profile = ImpactorProfile(diameter=1.0, density=1000.0, velocity=1.0e5, angle=90.0)
        result = impact_energy(profile)
        mass = projectile_mass(1.0, 1000.0)
        gamma = 1.0 / np.sqrt(1.0 - 1.0 / 9.0)
        classical = 0.5 * mass * 1.0e8**2

        np.testing.assert_allclose(result.kinetic_energy, classical * gamma)
        np.testing.assert_allclose(result.linear_momentum, mass * 1.0e8 * gamma)
        # Megatons are reported before the correction
        np.testing.assert_allclose(result.energy_megatons, classical / J_PER_MEGATON)

    def test_no_correction_below_threshold(self):
        profile = ImpactorProfile(diameter=1.0, density=1000.0, velocity=70000.0, angle=90.0)
        result = impact_energy(profile)
        mass = projectile_mass(1.0, 1000.0)
        np.testing.assert_allclose(result.kinetic_energy, 0.5 * mass * 7.0e7**2)


class TestHelpers(unittest.TestCase):

    def test_projectile_mass(self):
        np.testing.assert_allclose(projectile_mass(2.0, 3.0), np.pi * 8.0 / 6.0 * 3.0)

    def test_impact_frequency(self):
        for megatons in [1.0e-3, 0.5, 1.0, 42.0, 1.0e5]:
            np.testing.assert_allclose(impact_frequency(megatons), 110.0 * megatons**0.77, rtol=1e-12)

    def test_seafloor_velocity_without_water(self):
        profile = ImpactorProfile(diameter=10.0, density=2000.0, velocity=12.0, angle=20.0)
        self.assertEqual(seafloor_velocity(12.0, profile), 12.0)


if __name__ == '__main__':
    unittest.main()
