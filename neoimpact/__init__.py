# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElementSet
from .state_vector import StateVector

from .constants import (
    # Constants
    KMPAU,
    MU_SUN,
    DAY,
    YEAR,
    J2000,
    JD_UNIX_EPOCH,
    KEPLER_TOL,
    KEPLER_MAX_ITER,
)

from .astrodynamics import (
    # Functions
    InvalidOrbitGeometry,
    OrbitPosition,
    julian_to_unix,
    unix_to_julian,
    mjd_to_julian,
    datetime_to_julian,
    solve_kepler,
    solve_kepler_vec,
    solve_kepler_with_iterations,
    perifocal_to_inertial,
    position_at_time,
    orbit_over_time,
    generate_orbit_path,
    ellipse_center,
    orbital_period,
    to_state_vectors,
    from_state_vectors,
)

from .perturbation import (
    spherical_mass,
    apply_impulse,
)

from .bodies import (
    # Body class
    Body,
    CatalogRecord,
    load_planets,
    planet_elements,
)

from .tracking import (
    OrbitSnapshot,
    TrackedBody,
    SimulationContext,
)

__version__ = "0.1.0"

__all__ = [
    # Constants
    "KMPAU",
    "MU_SUN",
    "DAY",
    "YEAR",
    "J2000",
    "JD_UNIX_EPOCH",
    "KEPLER_TOL",
    "KEPLER_MAX_ITER",

    # Named tuples
    "OrbitalElementSet",
    "StateVector",
    "OrbitPosition",
    "OrbitSnapshot",

    # Errors
    "InvalidOrbitGeometry",

    # Time conversions
    "julian_to_unix",
    "unix_to_julian",
    "mjd_to_julian",
    "datetime_to_julian",

    # Propagation
    "solve_kepler",
    "solve_kepler_vec",
    "solve_kepler_with_iterations",
    "perifocal_to_inertial",
    "position_at_time",
    "orbit_over_time",
    "generate_orbit_path",
    "ellipse_center",
    "orbital_period",
    "to_state_vectors",
    "from_state_vectors",

    # Perturbation
    "spherical_mass",
    "apply_impulse",

    # Bodies
    "Body",
    "CatalogRecord",
    "load_planets",
    "planet_elements",
    "TrackedBody",
    "SimulationContext",
]
