import csv
import functools
from pathlib import Path
from typing import Optional

import numpy as np
import pydantic
from pydantic import ConfigDict, Field, field_validator

from neoimpact.orbital_elements import OrbitalElementSet


class Body(pydantic.BaseModel):
    """
    Represents a body orbiting the Sun (planet, dwarf planet or asteroid).

    Attributes:
        name: Name of the body (e.g., "Earth", "433 Eros")
        id: Catalog identifier of the body
        diameter: Mean diameter (km)
        is_potentially_hazardous: Catalog hazard flag (asteroids only)
        elements: Orbital elements of the body
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)  # Allow OrbitalElementSet (NamedTuple)

    name: str
    id: str
    diameter: float
    is_potentially_hazardous: bool = False
    elements: OrbitalElementSet

    def get_position(self, julian_date: float):
        """
        Get the heliocentric position of the body at a given Julian date.

        Returns:
            OrbitPosition with position (km), radius (km), Unix time and true anomaly
        """
        from neoimpact.astrodynamics import position_at_time
        return position_at_time(self.elements, julian_date)

    def get_state(self, julian_date: float, distance_units: str = 'km'):
        """
        Get the Cartesian state (position and velocity) of the body at a given Julian date.

        Args:
            julian_date: Time of the requested state (Julian date)
            distance_units: Units for the output position and velocity. Options:
                - 'km': position in km, velocity in km/s (default)
                - 'AU': position in AU, velocity in AU/s

        Returns:
            StateVector with position and velocity in the specified units

        Examples:
            >>> earth = load_planets()['earth']
            >>> state = earth.get_state(2451545.0)
            >>> state = earth.get_state(2451545.0, distance_units='AU')
        """
        from neoimpact.astrodynamics import to_state_vectors
        from neoimpact.constants import KMPAU

        state = to_state_vectors(self.elements, julian_date)

        if distance_units == 'km':
            return state
        elif distance_units == 'AU':
            return state._replace(r=state.r / KMPAU, v=state.v / KMPAU)
        else:
            raise ValueError(f"Invalid distance_units '{distance_units}'. Must be one of: 'km', 'AU'")

    def get_period(self, units: str = 'day') -> float:
        """
        Compute the orbital period of the body.

        The period is calculated using Kepler's third law:
        T = 2π√(a³/μ)

        Args:
            units: Units for the returned period. Options:
                - 's' or 'seconds': Period in seconds
                - 'day' or 'days': Period in days (default)
                - 'year' or 'years': Period in Julian years

        Returns:
            Orbital period in the specified units
        """
        from neoimpact.constants import MU_SUN, DAY, YEAR

        a = self.elements.a
        period_seconds = 2.0 * np.pi * np.sqrt(a**3 / MU_SUN)

        units_lower = units.lower()
        if units_lower in ('s', 'seconds'):
            return period_seconds
        elif units_lower in ('day', 'days'):
            return period_seconds / DAY
        elif units_lower in ('year', 'years'):
            return period_seconds / YEAR
        else:
            raise ValueError(f"Invalid units '{units}'. Must be one of: 's', 'day', 'year'")

    def __repr__(self) -> str:
        return f"Body(id='{self.id}', name='{self.name}')"

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id})"


class CatalogRecord(pydantic.BaseModel):
    """
    Orbital record of a small body as supplied by an external catalog.

    Angles are in degrees, distances in AU, the period in days and the
    osculation epoch as a modified Julian date.
    """
    id: str
    name: Optional[str] = None
    semi_major_axis: float = Field(..., gt=0.0, description="Semi-major axis (AU)")
    eccentricity: float = Field(..., ge=0.0, lt=1.0, description="Eccentricity ()")
    inclination: float = Field(..., description="Inclination (deg)")
    ascending_node_longitude: float = Field(..., description="Longitude of the ascending node (deg)")
    perihelion_argument: float = Field(..., description="Argument of perihelion (deg)")
    mean_anomaly: float = Field(..., description="Mean anomaly at epoch (deg)")
    orbital_period: float = Field(..., gt=0.0, description="Orbital period (days)")
    epoch_osculation: float = Field(..., description="Epoch of osculation (MJD)")
    estimated_diameter_min: Optional[float] = Field(None, description="Minimum diameter estimate (km)")
    estimated_diameter_max: Optional[float] = Field(None, description="Maximum diameter estimate (km)")
    is_potentially_hazardous_asteroid: bool = False

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    def diameter(self) -> float:
        """Mean of the diameter estimates in km, 1 km when the catalog has none."""
        if self.estimated_diameter_min and self.estimated_diameter_max:
            return (self.estimated_diameter_min + self.estimated_diameter_max) / 2.0
        return 1.0

    def to_elements(self) -> OrbitalElementSet:
        """Convert the record to an OrbitalElementSet in km, radians and Julian days."""
        from neoimpact.astrodynamics import mjd_to_julian
        from neoimpact.constants import KMPAU

        return OrbitalElementSet(
            a=self.semi_major_axis * KMPAU,
            e=self.eccentricity,
            i=np.deg2rad(self.inclination),
            Omega=np.deg2rad(self.ascending_node_longitude),
            omega=np.deg2rad(self.perihelion_argument),
            M0=np.deg2rad(self.mean_anomaly),
            n=2.0 * np.pi / self.orbital_period,
            epoch=mjd_to_julian(self.epoch_osculation)
        )

    def to_body(self) -> Body:
        return Body(
            name=self.name or f"Asteroid {self.id}",
            id=self.id,
            diameter=self.diameter(),
            is_potentially_hazardous=self.is_potentially_hazardous_asteroid,
            elements=self.to_elements()
        )


def load_planets() -> dict[str, Body]:
    """
    Load the planets (and Pluto) from the bundled J2000 element table.

    The table is read once; each call returns a new dict of the shared,
    frozen Body objects.

    Returns:
        Dictionary mapping lowercase planet name to Body object
    """
    return dict(_planet_table())


@functools.lru_cache(maxsize=None)
def _planet_table() -> dict[str, Body]:
    from neoimpact.constants import KMPAU

    # Hardcode data directory to be in the same directory as this file
    filepath = Path(__file__).parent / 'data' / 'planets.csv'
    bodies = {}

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            name = row['Name']

            # Create orbital elements; the table gives mean motion in deg/day
            elements = OrbitalElementSet(
                a=float(row['Semi-Major Axis (AU)']) * KMPAU,
                e=float(row['Eccentricity ()']),
                i=np.deg2rad(float(row['Inclination (deg)'])),
                Omega=np.deg2rad(float(row['Longitude of the Ascending Node (deg)'])),
                omega=np.deg2rad(float(row['Argument of Perihelion (deg)'])),
                M0=np.deg2rad(float(row['Mean Anomaly (deg)'])),
                n=np.deg2rad(float(row['Mean Motion (deg/day)'])),
                epoch=float(row['Epoch (JD)'])
            )

            bodies[name.lower()] = Body(
                name=name,
                id=name.lower(),
                diameter=float(row['Diameter (km)']),
                elements=elements
            )

    return bodies


def planet_elements(name: str) -> OrbitalElementSet:
    """
    Look up the J2000 orbital elements of a planet by name (case-insensitive).

    Raises:
        ValueError: If the name is not in the planet table.
    """
    planets = load_planets()
    try:
        return planets[name.lower()].elements
    except KeyError:
        raise ValueError(
            f"Unknown planet '{name}'. Must be one of: {', '.join(planets)}"
        ) from None
