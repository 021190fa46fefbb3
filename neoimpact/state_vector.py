"""
Cartesian state representation of an orbiting body.
"""
from typing import NamedTuple
import jax.numpy as jnp


class StateVector(NamedTuple):
    """
    Cartesian state of a body at one epoch.

    Position and velocity are expressed in the same inertial frame as the
    body's OrbitalElementSet (heliocentric ecliptic). The state is
    compatible with JAX transformations.

    Attributes:
        r: Position vector [x, y, z] in km
        v: Velocity vector [vx, vy, vz] in km/s
        epoch: Julian date the state refers to

    Examples:
        >>> import jax.numpy as jnp
        >>> state = StateVector(
        ...     r=jnp.array([1.496e8, 0.0, 0.0]),  # 1 AU from the Sun
        ...     v=jnp.array([0.0, 29.78, 0.0]),     # ~30 km/s orbital velocity
        ...     epoch=2451545.0
        ... )
    """
    r: jnp.ndarray  # position [x, y, z] (km)
    v: jnp.ndarray  # velocity [vx, vy, vz] (km/s)
    epoch: float  # Julian date
