"""
Orbital elements representation for bodies orbiting the Sun.
"""
from typing import NamedTuple


class OrbitalElementSet(NamedTuple):
    """
    Keplerian orbital elements of a body, tied to one epoch.

    All angular quantities are in radians. The set is an immutable value:
    changing an orbit means building a new set and replacing the old one.

    Attributes:
        a: Semi-major axis (km)
        e: Eccentricity (dimensionless, 0 <= e < 1, bound ellipses only)
        i: Inclination relative to the reference plane (radians)
        Omega: Longitude of the ascending node (radians)
        omega: Argument of perihelion (radians)
        M0: Mean anomaly at epoch (radians)
        n: Mean motion (radians/day)
        epoch: Epoch of the elements (Julian date)
    """
    a: float  # semi-major axis (km)
    e: float  # eccentricity
    i: float  # inclination (rad)
    Omega: float  # longitude of ascending node (rad)
    omega: float  # argument of perihelion (rad)
    M0: float  # mean anomaly at epoch (rad)
    n: float  # mean motion (rad/day)
    epoch: float  # Julian date
