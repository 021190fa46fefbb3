"""
Caller-owned simulation state: tracked bodies and the highlighted selection.

Each TrackedBody holds its current orbit as one immutable OrbitSnapshot
(elements plus the cached visualization path). Perturbing the body builds a
new snapshot and swaps the single reference, so a concurrent reader always
sees a matching elements/path pair.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import jax.numpy as jnp

from .astrodynamics import generate_orbit_path, position_at_time, to_state_vectors
from .bodies import Body
from .constants import BODY_DENSITY, J2000
from .orbital_elements import OrbitalElementSet
from .perturbation import apply_impulse

logger = logging.getLogger(__name__)


class OrbitSnapshot(NamedTuple):
    """
    Orbit of a tracked body at one point of the simulation.

    Attributes:
        elements: Current orbital elements
        path: Cached orbit path of shape (num_points, 3) in km
    """
    elements: OrbitalElementSet
    path: jnp.ndarray


class TrackedBody:
    """
    A catalog body whose orbit may be perturbed during a simulation.

    Args:
        body: Catalog body supplying the initial elements and diameter
        density: Bulk density used to estimate the mass (kg/m^3)
        path_points: Number of points in the cached orbit path
    """

    def __init__(self, body: Body, density: float = BODY_DENSITY, path_points: int = 80):
        self.body = body
        self.density = density
        self.path_points = path_points
        self._write_lock = threading.Lock()
        self._snapshot = self._make_snapshot(body.elements)

    def _make_snapshot(self, elements: OrbitalElementSet) -> OrbitSnapshot:
        return OrbitSnapshot(elements=elements, path=generate_orbit_path(elements, self.path_points))

    @property
    def name(self) -> str:
        return self.body.name

    @property
    def snapshot(self) -> OrbitSnapshot:
        return self._snapshot

    @property
    def elements(self) -> OrbitalElementSet:
        return self._snapshot.elements

    @property
    def path(self) -> jnp.ndarray:
        return self._snapshot.path

    @property
    def is_perturbed(self) -> bool:
        return self._snapshot.elements != self.body.elements

    def position(self, julian_date: float):
        return position_at_time(self._snapshot.elements, julian_date)

    def state(self, julian_date: float):
        return to_state_vectors(self._snapshot.elements, julian_date)

    def apply_force(self, force, dt: float, julian_date: float) -> OrbitSnapshot:
        """
        Apply an impulsive force and replace the body's orbit.

        Args:
            force: Force vector [Fx, Fy, Fz] in N
            dt: Duration over which the force acts (s)
            julian_date: Current simulated time (Julian date)

        Returns:
            The new OrbitSnapshot (the old one if the force is zero)
        """
        with self._write_lock:
            current = self._snapshot
            new_elements = apply_impulse(
                current.elements, force, dt, julian_date,
                diameter_km=self.body.diameter, density=self.density
            )
            if new_elements is current.elements:
                return current
            self._snapshot = self._make_snapshot(new_elements)
            logger.info("Orbit of %s replaced at JD %.5f", self.name, julian_date)
            return self._snapshot

    def reset_orbit(self) -> OrbitSnapshot:
        """Restore the catalog orbit of the body."""
        with self._write_lock:
            self._snapshot = self._make_snapshot(self.body.elements)
            return self._snapshot

    def __repr__(self) -> str:
        return f"TrackedBody(name='{self.name}', perturbed={self.is_perturbed})"


@dataclass
class SimulationContext:
    """
    Simulation state owned by the caller (rendering or reporting layer).

    Attributes:
        julian_date: Current simulated time (Julian date)
        bodies: Tracked bodies keyed by name
        highlighted: Name of the currently highlighted body, if any
    """
    julian_date: float = J2000
    bodies: dict[str, TrackedBody] = field(default_factory=dict)
    highlighted: Optional[str] = None

    def track(self, body: Body, **kwargs) -> TrackedBody:
        tracked = TrackedBody(body, **kwargs)
        self.bodies[body.name] = tracked
        return tracked

    def highlight(self, name: Optional[str]) -> Optional[TrackedBody]:
        """
        Set the highlighted body; ``None`` clears the selection.

        Raises:
            ValueError: If the name is not a tracked body.
        """
        if name is not None and name not in self.bodies:
            raise ValueError(f"Cannot highlight untracked body '{name}'")
        self.highlighted = name
        return self.highlighted_body

    @property
    def highlighted_body(self) -> Optional[TrackedBody]:
        if self.highlighted is None:
            return None
        return self.bodies[self.highlighted]

    def advance(self, days: float) -> float:
        self.julian_date += days
        return self.julian_date

    def positions(self) -> dict[str, jnp.ndarray]:
        """Positions (km) of all tracked bodies at the current simulated time."""
        return {name: body.position(self.julian_date).position
                for name, body in self.bodies.items()}
