"""
Two-body orbit propagation and element/state conversions.

The propagation kernels are JAX functions so that they can be jit-compiled
and vmapped over many bodies or many epochs. The Python-level wrappers add
the checks that need concrete values (solver convergence, degenerate
geometry) and the unit conversions used by callers.
"""
import logging
from datetime import datetime, timezone
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import jit

from .orbital_elements import OrbitalElementSet
from .state_vector import StateVector
from .constants import (
    MU_SUN, DAY, JD_UNIX_EPOCH, MJD_OFFSET, KEPLER_TOL, KEPLER_MAX_ITER
)

logger = logging.getLogger(__name__)

# Relative length below which h, n or e vectors are treated as zero
_DEGENERATE_TOL = 1.0e-12


class InvalidOrbitGeometry(ValueError):
    """Raised when a state vector does not define a bound, non-degenerate ellipse."""


class OrbitPosition(NamedTuple):
    """
    Position of a body on its orbit at one instant.

    Attributes:
        position: Inertial position vector [x, y, z] in km
        radius: Distance from the central body in km
        unix_time: The requested Julian date expressed as Unix time (s)
        true_anomaly: True anomaly in radians, in (-pi, pi]
    """
    position: jnp.ndarray
    radius: float
    unix_time: float
    true_anomaly: float


# ---------------------------------------------------------------------------
# Time conversions
# ---------------------------------------------------------------------------

def julian_to_unix(julian_date: float) -> float:
    """Convert a Julian date to Unix time in seconds."""
    return (julian_date - JD_UNIX_EPOCH) * DAY


def unix_to_julian(unix_time: float) -> float:
    """Convert Unix time in seconds to a Julian date."""
    return unix_time / DAY + JD_UNIX_EPOCH


def mjd_to_julian(mjd: float) -> float:
    """Convert a modified Julian date to a Julian date."""
    return mjd + MJD_OFFSET


def datetime_to_julian(dt: datetime) -> float:
    """
    Convert a datetime to a Julian date.

    Naive datetimes are interpreted as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return unix_to_julian(dt.timestamp())


# ---------------------------------------------------------------------------
# Kepler's equation
# ---------------------------------------------------------------------------

@jit
def solve_kepler_with_iterations(M: float, e: float, tol: float = KEPLER_TOL,
                                 max_iter: int = KEPLER_MAX_ITER):
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E.

    The mean anomaly is first normalized into [0, 2*pi). Newton-Raphson
    iteration starts from E0 = M + e*sin(M) and stops when the update is
    smaller than ``tol`` or after ``max_iter`` iterations. Running into the
    iteration cap is not an error; the last estimate is returned.

    Args:
        M: Mean anomaly (radians), any real value
        e: Eccentricity, 0 <= e < 1
        tol: Convergence tolerance on |delta E|
        max_iter: Iteration cap

    Returns:
        (E, iterations) where E is the eccentric anomaly in radians and
        iterations is the number of Newton steps taken.
    """
    M = jnp.mod(jnp.asarray(M, dtype=float), 2.0 * jnp.pi)
    # mod can round a tiny negative M up to exactly 2*pi
    M = jnp.where(M >= 2.0 * jnp.pi, 0.0, M)
    e = jnp.asarray(e, dtype=float)
    E0 = M + e * jnp.sin(M)

    def cond_fn(carry):
        _, dE, count = carry
        return (dE >= tol) & (count < max_iter)

    def body_fn(carry):
        E, _, count = carry
        E_new = E - (E - e * jnp.sin(E) - M) / (1.0 - e * jnp.cos(E))
        return E_new, jnp.abs(E_new - E), count + 1

    init = (E0, jnp.full_like(E0, jnp.inf), jnp.zeros((), dtype=jnp.int32))
    E, _, count = jax.lax.while_loop(cond_fn, body_fn, init)
    return E, count


def solve_kepler(M: float, e: float, tol: float = KEPLER_TOL,
                 max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E.

    See solve_kepler_with_iterations for the algorithm.
    """
    E, _ = solve_kepler_with_iterations(M, e, tol, max_iter)
    return E


# Vectorized version using vmap
# Note: vmap over first two arguments (M and e arrays), broadcast tol and max_iter
_solve_kepler_vec = jax.vmap(solve_kepler, in_axes=(0, 0, None, None))


def solve_kepler_vec(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Vectorized version of solve_kepler that handles arrays of M and e.

    Parameters
    ----------
    M : jnp.ndarray
        Array of mean anomalies
    e : jnp.ndarray
        Array of eccentricities
    tol : float, optional
        Tolerance for convergence
    max_iter : int, optional
        Maximum number of iterations

    Returns
    -------
    E : jnp.ndarray
        Array of eccentric anomalies
    """
    return _solve_kepler_vec(jnp.asarray(M, dtype=float), jnp.asarray(e, dtype=float), tol, max_iter)


def _warn_if_unconverged(iterations, elements: OrbitalElementSet):
    if int(jnp.max(iterations)) >= KEPLER_MAX_ITER:
        logger.warning(
            "Kepler solver hit the %d iteration cap (e=%.6f); using last estimate",
            KEPLER_MAX_ITER, float(elements.e)
        )


# ---------------------------------------------------------------------------
# Rotations
# ---------------------------------------------------------------------------

def _rot_z(angle):
    c, s = jnp.cos(angle), jnp.sin(angle)
    return jnp.array([[c, -s, 0.0],
                      [s, c, 0.0],
                      [0.0, 0.0, 1.0]])


def _rot_x(angle):
    c, s = jnp.cos(angle), jnp.sin(angle)
    return jnp.array([[1.0, 0.0, 0.0],
                      [0.0, c, -s],
                      [0.0, s, c]])


@jit
def perifocal_to_inertial(i: float, Omega: float, omega: float) -> jnp.ndarray:
    """
    Rotation matrix from the perifocal frame to the inertial frame.

    Composes a rotation about Z by the argument of perihelion, then about X
    by the inclination, then about Z by the ascending node:
    R = Rz(Omega) @ Rx(i) @ Rz(omega).
    """
    return _rot_z(Omega) @ _rot_x(i) @ _rot_z(omega)


# ---------------------------------------------------------------------------
# Propagation
# ---------------------------------------------------------------------------

@jit
def _propagate(elements: OrbitalElementSet, julian_date: float):
    a, e = elements.a, elements.e
    M = elements.M0 + elements.n * (julian_date - elements.epoch)
    E, iterations = solve_kepler_with_iterations(M, e)

    cos_E = jnp.cos(E)
    sin_E = jnp.sin(E)
    denom = 1.0 - e * cos_E
    sqrt_1me2 = jnp.sqrt(1.0 - e**2)

    # Position in the perifocal frame
    r_mag = a * denom
    x = r_mag * (cos_E - e) / denom
    y = r_mag * sqrt_1me2 * sin_E / denom

    R = perifocal_to_inertial(elements.i, elements.Omega, elements.omega)
    position = R @ jnp.array([x, y, 0.0])

    true_anomaly = jnp.arctan2(sqrt_1me2 * sin_E, cos_E - e)
    return position, r_mag, E, true_anomaly, iterations


_propagate_vec = jax.vmap(_propagate, in_axes=(None, 0))


def position_at_time(elements: OrbitalElementSet, julian_date: float) -> OrbitPosition:
    """
    Compute the position of a body at a given Julian date.

    Args:
        elements: Orbital elements of the body
        julian_date: Time at which the position is requested (Julian date)

    Returns:
        OrbitPosition with the inertial position (km), the radius (km), the
        Unix time of the request and the true anomaly.
    """
    position, r_mag, _, true_anomaly, iterations = _propagate(elements, julian_date)
    _warn_if_unconverged(iterations, elements)
    return OrbitPosition(
        position=position,
        radius=r_mag,
        unix_time=julian_to_unix(julian_date),
        true_anomaly=true_anomaly
    )


def orbit_over_time(elements: OrbitalElementSet, start_jd: float, end_jd: float,
                    num_steps: int = 100):
    """
    Sample a body's orbit uniformly in time.

    Returns:
        positions: Array of shape (num_steps, 3) in km
        radii: Array of shape (num_steps,) in km
        julian_dates: Array of shape (num_steps,) of sample times
    """
    if num_steps < 2:
        raise ValueError(f"num_steps must be at least 2, got {num_steps}")
    julian_dates = jnp.linspace(start_jd, end_jd, num_steps)
    positions, radii, _, _, iterations = _propagate_vec(elements, julian_dates)
    _warn_if_unconverged(iterations, elements)
    return positions, radii, julian_dates


def generate_orbit_path(elements: OrbitalElementSet, num_points: int = 80) -> jnp.ndarray:
    """
    Compute points along the orbit ellipse for visualization.

    The ellipse is sampled uniformly in the eccentric-anomaly parameter
    u in [-pi, pi] (not uniformly in time), so the first and last points
    coincide and the path forms a closed loop.

    Returns:
        Array of shape (num_points, 3) with [x, y, z] positions in km.
    """
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")
    a, e = elements.a, elements.e
    u = jnp.linspace(-jnp.pi, jnp.pi, num_points)

    x = a * (jnp.cos(u) - e)
    y = a * jnp.sqrt(1.0 - e**2) * jnp.sin(u)
    flat = jnp.stack([x, y, jnp.zeros_like(u)], axis=1)

    R = perifocal_to_inertial(elements.i, elements.Omega, elements.omega)
    return flat @ R.T


def ellipse_center(elements: OrbitalElementSet) -> jnp.ndarray:
    """Inertial position (km) of the center of the orbit ellipse."""
    R = perifocal_to_inertial(elements.i, elements.Omega, elements.omega)
    return R @ jnp.array([-elements.a * elements.e, 0.0, 0.0])


def orbital_period(elements: OrbitalElementSet, mu: float = MU_SUN) -> float:
    """
    Orbital period in seconds from Kepler's third law, T = 2*pi*sqrt(a^3/mu).
    """
    return 2.0 * jnp.pi * jnp.sqrt(elements.a**3 / mu)


# ---------------------------------------------------------------------------
# State vector conversions
# ---------------------------------------------------------------------------

@jit
def _elements_to_rv(elements: OrbitalElementSet, julian_date: float, mu: float):
    position, r_mag, E, _, iterations = _propagate(elements, julian_date)
    a, e = elements.a, elements.e

    cos_E = jnp.cos(E)
    sin_E = jnp.sin(E)
    denom = 1.0 - e * cos_E
    one_me2 = 1.0 - e**2

    # Perifocal velocity, sqrt(mu/p) * (-sin(nu), e + cos(nu)) written in E
    factor = jnp.sqrt(mu / (a * one_me2))
    vx = -factor * jnp.sqrt(one_me2) * sin_E / denom
    vy = factor * one_me2 * cos_E / denom

    R = perifocal_to_inertial(elements.i, elements.Omega, elements.omega)
    velocity = R @ jnp.array([vx, vy, 0.0])
    return position, velocity, iterations


def to_state_vectors(elements: OrbitalElementSet, julian_date: float,
                     mu: float = MU_SUN) -> StateVector:
    """
    Convert orbital elements to a Cartesian state at a given Julian date.

    Args:
        elements: Orbital elements of the body
        julian_date: Time of the requested state (Julian date)
        mu: Gravitational parameter of the central body (km^3/s^2).
            Defaults to the Sun for every body.

    Returns:
        StateVector with position in km and velocity in km/s
    """
    position, velocity, iterations = _elements_to_rv(elements, julian_date, mu)
    _warn_if_unconverged(iterations, elements)
    return StateVector(r=position, v=velocity, epoch=julian_date)


def from_state_vectors(r, v, epoch: float, mu: float = MU_SUN,
                       reset_mean_anomaly: bool = False) -> OrbitalElementSet:
    """
    Convert a Cartesian state to classical orbital elements.

    Args:
        r: Position vector [x, y, z] in km
        v: Velocity vector [vx, vy, vz] in km/s
        epoch: Julian date of the state; becomes the epoch of the elements
        mu: Gravitational parameter of the central body (km^3/s^2)
        reset_mean_anomaly: If True, set the mean anomaly at epoch to zero
            instead of deriving it from the state (places the body at
            perihelion at the epoch).

    Returns:
        OrbitalElementSet of the bound orbit through the state

    Raises:
        InvalidOrbitGeometry: If the angular momentum, node or eccentricity
            vector has zero length (rectilinear, equatorial or circular
            orbit, where the orientation angles are undefined), or if the
            state is not on a bound ellipse.
    """
    r = jnp.asarray(r, dtype=float)
    v = jnp.asarray(v, dtype=float)

    r_mag = float(jnp.linalg.norm(r))
    v_mag = float(jnp.linalg.norm(v))
    if r_mag == 0.0:
        raise InvalidOrbitGeometry("Position vector has zero length")

    # Specific angular momentum
    h = jnp.cross(r, v)
    h_mag = float(jnp.linalg.norm(h))
    if h_mag <= _DEGENERATE_TOL * r_mag * v_mag:
        raise InvalidOrbitGeometry(
            "Angular momentum vector has zero length (rectilinear orbit)"
        )

    # Node vector, z_hat x h
    n_vec = jnp.array([-h[1], h[0], 0.0])
    n_mag = float(jnp.linalg.norm(n_vec))
    if n_mag <= _DEGENERATE_TOL * h_mag:
        raise InvalidOrbitGeometry(
            "Node vector has zero length (equatorial orbit, ascending node undefined)"
        )

    # Semi-major axis from the vis-viva energy
    energy = v_mag**2 / 2.0 - mu / r_mag
    if energy >= 0.0:
        raise InvalidOrbitGeometry(
            f"State is not on a bound orbit (specific energy {energy:.6e} km^2/s^2)"
        )
    a = -mu / (2.0 * energy)

    # Eccentricity vector
    r_dot_v = jnp.dot(r, v)
    e_vec = ((v_mag**2 - mu / r_mag) * r - r_dot_v * v) / mu
    e = float(jnp.linalg.norm(e_vec))
    if e <= _DEGENERATE_TOL:
        raise InvalidOrbitGeometry(
            "Eccentricity vector has zero length (circular orbit, perihelion undefined)"
        )
    if e >= 1.0:
        raise InvalidOrbitGeometry(f"Only bound ellipses are supported, got e={e:.6f}")

    i = jnp.arccos(jnp.clip(h[2] / h_mag, -1.0, 1.0))

    Omega = jnp.arccos(jnp.clip(n_vec[0] / n_mag, -1.0, 1.0))
    Omega = jnp.where(n_vec[1] < 0.0, 2.0 * jnp.pi - Omega, Omega)

    omega = jnp.arccos(jnp.clip(jnp.dot(n_vec, e_vec) / (n_mag * e), -1.0, 1.0))
    omega = jnp.where(e_vec[2] < 0.0, 2.0 * jnp.pi - omega, omega)

    if reset_mean_anomaly:
        M0 = 0.0
    else:
        nu = jnp.arccos(jnp.clip(jnp.dot(e_vec, r) / (e * r_mag), -1.0, 1.0))
        nu = jnp.where(r_dot_v < 0.0, 2.0 * jnp.pi - nu, nu)
        E = jnp.arctan2(jnp.sqrt(1.0 - e**2) * jnp.sin(nu), e + jnp.cos(nu))
        M0 = jnp.mod(E - e * jnp.sin(E), 2.0 * jnp.pi)
        M0 = float(jnp.where(M0 >= 2.0 * jnp.pi, 0.0, M0))

    # Kepler's third law
    period_days = 2.0 * jnp.pi * jnp.sqrt(a**3 / mu) / DAY
    n = 2.0 * jnp.pi / period_days

    return OrbitalElementSet(
        a=float(a),
        e=e,
        i=float(i),
        Omega=float(Omega),
        omega=float(omega),
        M0=M0,
        n=float(n),
        epoch=float(epoch)
    )
