"""
Impulsive perturbation of a body's orbit.

A force applied for a short time step changes the body's velocity but not its
position; the orbit through the new state replaces the old element set.
"""
import logging

import jax.numpy as jnp

from .astrodynamics import to_state_vectors, from_state_vectors
from .orbital_elements import OrbitalElementSet
from .constants import MU_SUN, BODY_DENSITY

logger = logging.getLogger(__name__)


def spherical_mass(diameter_km: float, density: float = BODY_DENSITY) -> float:
    """
    Mass of a uniform sphere.

    Args:
        diameter_km: Diameter of the body (km)
        density: Bulk density (kg/m^3)

    Returns:
        Mass in kg
    """
    radius_m = diameter_km / 2.0 * 1000.0
    return 4.0 / 3.0 * jnp.pi * radius_m**3 * density


def apply_impulse(
    elements: OrbitalElementSet,
    force,
    dt: float,
    julian_date: float,
    diameter_km: float,
    density: float = BODY_DENSITY,
    mu: float = MU_SUN
) -> OrbitalElementSet:
    """
    Apply a constant force for a short time step and return the new orbit.

    This models one impulsive maneuver: the velocity change a*dt is added to
    the body's velocity at ``julian_date`` and the elements are rebuilt from
    the unchanged position and the new velocity, with ``julian_date`` as the
    new epoch. The input elements are not modified.

    Args:
        elements: Current orbital elements of the body
        force: Force vector [Fx, Fy, Fz] in N
        dt: Duration over which the force acts (s)
        julian_date: Current simulated time (Julian date)
        diameter_km: Body diameter used to estimate its mass (km)
        density: Body bulk density used to estimate its mass (kg/m^3)
        mu: Gravitational parameter of the central body (km^3/s^2)

    Returns:
        The new OrbitalElementSet, or ``elements`` itself for a zero force.

    Raises:
        InvalidOrbitGeometry: If the perturbed state is degenerate or unbound.
    """
    force = jnp.asarray(force, dtype=float)
    if not jnp.any(force != 0.0):
        return elements

    mass = spherical_mass(diameter_km, density)

    # a = F/m in m/s^2, converted to km/s^2
    acceleration = force / mass / 1000.0
    delta_v = acceleration * dt

    state = to_state_vectors(elements, julian_date, mu)
    new_velocity = state.v + delta_v

    new_elements = from_state_vectors(state.r, new_velocity, julian_date, mu)
    logger.debug(
        "Applied impulse dv=%s km/s (mass %.3e kg): a %.6e -> %.6e km, e %.6f -> %.6f",
        delta_v, float(mass), float(elements.a), new_elements.a,
        float(elements.e), new_elements.e
    )
    return new_elements
