import threading
import time
import unittest

import numpy as np

from neoimpact import (
    J2000, CatalogRecord, SimulationContext, TrackedBody, generate_orbit_path, load_planets
)


def eros_like_record():
    return CatalogRecord(
        id="2000433", name="433 Eros", semi_major_axis=1.458, eccentricity=0.2227,
        inclination=10.83, ascending_node_longitude=304.3, perihelion_argument=178.9,
        mean_anomaly=310.5, orbital_period=643.2, epoch_osculation=51544.5,
    )


class TestTrackedBody(unittest.TestCase):

    def setUp(self):
        self.body = eros_like_record().to_body()
        self.tracked = TrackedBody(self.body, path_points=40)

    def _prograde_force(self, jd, magnitude=1.0e8):
        v = np.asarray(self.tracked.state(jd).v)
        return magnitude * v / np.linalg.norm(v)

    def test_initial_snapshot(self):
        self.assertIs(self.tracked.elements, self.body.elements)
        self.assertEqual(self.tracked.path.shape, (40, 3))
        self.assertFalse(self.tracked.is_perturbed)
        self.assertEqual(self.tracked.name, "433 Eros")

    def test_apply_force_replaces_orbit(self):
        old = self.tracked.snapshot
        new = self.tracked.apply_force(self._prograde_force(J2000), 1.0e5, J2000)

        self.assertIsNot(new, old)
        self.assertIs(self.tracked.snapshot, new)
        self.assertTrue(self.tracked.is_perturbed)
        self.assertGreater(new.elements.a, old.elements.a)
        np.testing.assert_allclose(
            np.asarray(new.path), np.asarray(generate_orbit_path(new.elements, 40))
        )

    def test_zero_force_keeps_snapshot(self):
        old = self.tracked.snapshot
        new = self.tracked.apply_force([0.0, 0.0, 0.0], 1.0e5, J2000)
        self.assertIs(new, old)
        self.assertFalse(self.tracked.is_perturbed)

    def test_reset_orbit(self):
        self.tracked.apply_force(self._prograde_force(J2000), 1.0e5, J2000)
        self.tracked.reset_orbit()
        self.assertIs(self.tracked.elements, self.body.elements)
        self.assertFalse(self.tracked.is_perturbed)

    def test_catalog_body_is_not_modified(self):
        before = self.body.elements
        self.tracked.apply_force(self._prograde_force(J2000), 1.0e5, J2000)
        self.assertIs(self.body.elements, before)

    def test_concurrent_readers_see_consistent_snapshots(self):
        """A reader never observes a path that belongs to a different element set."""
        seen = []
        done = threading.Event()

        def reader():
            while not done.is_set():
                seen.append(self.tracked.snapshot)
                time.sleep(0.001)

        def writer():
            for k in range(5):
                jd = J2000 + 10.0 * k
                self.tracked.apply_force(self._prograde_force(jd), 1.0e4, jd)
            done.set()

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=120.0)

        unique = {id(s): s for s in seen}.values()
        self.assertGreater(len(unique), 0)
        for snapshot in unique:
            np.testing.assert_allclose(
                np.asarray(snapshot.path),
                np.asarray(generate_orbit_path(snapshot.elements, 40))
            )


class TestSimulationContext(unittest.TestCase):

    def setUp(self):
        planets = load_planets()
        self.context = SimulationContext()
        self.context.track(planets['earth'])
        self.context.track(planets['mars'])

    def test_defaults(self):
        context = SimulationContext()
        self.assertEqual(context.julian_date, J2000)
        self.assertEqual(context.bodies, {})
        self.assertIsNone(context.highlighted_body)

    def test_highlight_and_clear(self):
        selected = self.context.highlight("Mars")
        self.assertIs(selected, self.context.bodies["Mars"])
        self.assertEqual(self.context.highlighted, "Mars")

        self.assertIsNone(self.context.highlight(None))
        self.assertIsNone(self.context.highlighted_body)

    def test_highlight_untracked_body(self):
        with self.assertRaises(ValueError):
            self.context.highlight("Jupiter")
        self.assertIsNone(self.context.highlighted)

    def test_contexts_are_independent(self):
        other = SimulationContext()
        self.context.highlight("Earth")
        self.assertIsNone(other.highlighted)
        self.assertEqual(other.bodies, {})

    def test_advance(self):
        self.assertEqual(self.context.advance(10.5), J2000 + 10.5)
        self.assertEqual(self.context.julian_date, J2000 + 10.5)

    def test_positions(self):
        positions = self.context.positions()
        self.assertEqual(set(positions), {"Earth", "Mars"})
        expected = self.context.bodies["Earth"].position(J2000).position
        np.testing.assert_allclose(np.asarray(positions["Earth"]), np.asarray(expected))


if __name__ == '__main__':
    unittest.main()
