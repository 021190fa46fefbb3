"""
Mass, energy, momentum and recurrence of an impact.
"""
from typing import Optional

import numpy as np

from neoimpact.constants import (
    C_KM_S, J_PER_MEGATON, R_EARTH, RELATIVISTIC_THRESHOLD, WATER_DENSITY, WATER_DRAG
)
from neoimpact.impact.profile import EnergyResult, ImpactorProfile


def projectile_mass(diameter: float, density: float) -> float:
    """Mass (kg) of a spherical projectile, (pi/6) d^3 rho."""
    return np.pi * diameter**3 / 6.0 * density


def lorentz_factor(velocity: float) -> float:
    """1/sqrt(1 - v^2/c^2) for a velocity in km/s."""
    return 1.0 / np.sqrt(1.0 - velocity**2 / C_KM_S**2)


def seafloor_velocity(velocity: float, profile: ImpactorProfile) -> float:
    """
    Velocity (km/s) after crossing the water layer over the target.

    Drag in water decays the velocity exponentially with the slant path
    length; a target depth of zero leaves it unchanged.
    """
    sin_angle = np.sin(np.deg2rad(profile.angle))
    return velocity * np.exp(
        -3.0 * WATER_DENSITY * WATER_DRAG * profile.target_depth
        / (2.0 * profile.density * profile.diameter * sin_angle)
    )


def impact_frequency(energy_megatons: float) -> float:
    """Recurrence interval scale (years) for an impact of the given energy."""
    order = np.floor(np.log10(energy_megatons))
    scaled_megatons = energy_megatons / 10.0**order
    return 110.0 * (scaled_megatons * 10.0**order) ** 0.77


def impact_energy(
    profile: ImpactorProfile,
    impact_velocity: Optional[float] = None,
    burst_altitude: float = 0.0
) -> EnergyResult:
    """
    Compute the energy and momentum budget of an impact.

    Args:
        profile: Projectile and target parameters
        impact_velocity: Velocity at impact (km/s), e.g. the surface velocity
            from the atmospheric entry model. Defaults to the entry velocity.
        burst_altitude: Airburst altitude (m). When positive, the delivered
            energy is the energy lost between entry and impact velocity.

    Returns:
        EnergyResult
    """
    v_entry = profile.velocity
    v_impact = v_entry if impact_velocity is None else impact_velocity
    cos_angle = np.cos(np.deg2rad(profile.angle))

    mass = projectile_mass(profile.diameter, profile.density)

    kinetic_energy = 0.5 * mass * (v_entry * 1000.0) ** 2
    energy_megatons = kinetic_energy / J_PER_MEGATON

    linear_momentum = mass * (v_impact * 1000.0)
    angular_momentum = mass * (v_impact * 1000.0) * cos_angle * R_EARTH

    # Relativistic correction, only reachable for unphysical entry speeds
    if v_entry > RELATIVISTIC_THRESHOLD:
        gamma = lorentz_factor(v_entry)
        kinetic_energy *= gamma
        linear_momentum *= gamma
        angular_momentum *= gamma

    if burst_altitude > 0.0:
        delivered = 0.5 * mass * ((v_entry * 1000.0) ** 2 - (v_impact * 1000.0) ** 2)
    else:
        delivered = 0.5 * mass * (v_impact * 1000.0) ** 2

    v_seafloor = seafloor_velocity(v_impact, profile)
    seafloor_energy = 0.5 * mass * (v_seafloor * 1000.0) ** 2

    return EnergyResult(
        mass=float(mass),
        kinetic_energy=float(kinetic_energy),
        energy_megatons=float(energy_megatons),
        impact_energy=float(delivered),
        impact_megatons=float(delivered / J_PER_MEGATON),
        linear_momentum=float(linear_momentum),
        angular_momentum=float(angular_momentum),
        seafloor_velocity=float(v_seafloor),
        seafloor_energy=float(seafloor_energy),
        impact_frequency=float(impact_frequency(energy_megatons)),
    )
