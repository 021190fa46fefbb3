"""Tests for the Kepler equation solver."""
import logging
import unittest

import numpy as np
import jax.numpy as jnp

from neoimpact import (
    OrbitalElementSet,
    KEPLER_MAX_ITER,
    solve_kepler,
    solve_kepler_vec,
    solve_kepler_with_iterations,
)
from neoimpact.astrodynamics import _warn_if_unconverged


class TestSolveKepler(unittest.TestCase):

    def test_residual_over_grid(self):
        """E - e*sin(E) reproduces M to 1e-12 for e in [0, 0.99]."""
        e_grid, M_grid = np.meshgrid(
            np.linspace(0.0, 0.99, 12),
            np.linspace(0.0, 2.0 * np.pi, 64, endpoint=False)
        )
        e = e_grid.ravel()
        M = M_grid.ravel()

        E = np.asarray(solve_kepler_vec(jnp.array(M), jnp.array(e)))
        residual = np.abs(E - e * np.sin(E) - M)

        self.assertLess(residual.max(), 1e-12)

    def test_circular_orbit_returns_mean_anomaly(self):
        for M in [0.0, 0.5, 3.0, 6.0]:
            self.assertAlmostEqual(float(solve_kepler(M, 0.0)), M, places=14)

    def test_mean_anomaly_is_normalized(self):
        """Negative and large mean anomalies are wrapped into [0, 2*pi)."""
        e = 0.3
        for M in [-1.0, 7.5, 4.0 * np.pi + 0.25]:
            E = float(solve_kepler(M, e))
            M_norm = np.mod(M, 2.0 * np.pi)
            self.assertGreaterEqual(E, 0.0)
            self.assertLess(E, 2.0 * np.pi + 1e-12)
            self.assertAlmostEqual(E - e * np.sin(E), M_norm, places=12)

    def test_tiny_negative_mean_anomaly_wraps_below_two_pi(self):
        for e in [0.0, 0.3]:
            E = float(solve_kepler(-1.0e-17, e))
            self.assertLess(E, 2.0 * np.pi)
            self.assertAlmostEqual(E, 0.0, places=12)

    def test_iterations_below_cap(self):
        E, iterations = solve_kepler_with_iterations(2.0, 0.9)
        self.assertGreater(int(iterations), 0)
        self.assertLess(int(iterations), KEPLER_MAX_ITER)

    def test_iteration_cap_returns_estimate(self):
        """A single permitted iteration still returns a finite estimate."""
        E, iterations = solve_kepler_with_iterations(1.0, 0.5, 1e-14, 1)
        self.assertEqual(int(iterations), 1)
        self.assertTrue(np.isfinite(float(E)))

    def test_unconverged_solution_is_logged(self):
        elements = OrbitalElementSet(a=1.0e8, e=0.5, i=0.0, Omega=0.0, omega=0.0,
                                     M0=0.0, n=0.01, epoch=0.0)
        with self.assertLogs('neoimpact.astrodynamics', level=logging.WARNING) as cm:
            _warn_if_unconverged(jnp.array(KEPLER_MAX_ITER), elements)
        self.assertIn("iteration cap", cm.output[0])


if __name__ == '__main__':
    unittest.main()
