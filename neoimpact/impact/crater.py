"""
Crater scaling: transient and final crater geometry and melt volume.
"""
import numpy as np

from neoimpact.constants import COMPLEX_CRATER_DIAMETER, MELT_COEFF, MELT_VELOCITY, V_EARTH
from neoimpact.impact.profile import (
    CRATER_COEFFICIENTS, CraterResult, ImpactorProfile, TargetProperties
)


def dispersion_length(diameter: float, breakup_altitude: float, scale_height: float) -> float:
    """
    Lateral spread (m) of a projectile that fragmented at ``breakup_altitude``.

    Equal to the projectile diameter when there was no breakup.
    """
    altitude_scale = breakup_altitude / scale_height
    return diameter * np.sqrt(
        1.0 + 4.0 * altitude_scale**2 * (np.exp(breakup_altitude / (2.0 * scale_height)) - 1.0) ** 2
    )


def transient_crater_diameter(
    profile: ImpactorProfile,
    mass: float,
    impact_velocity: float,
    target: TargetProperties = TargetProperties()
) -> float:
    """Transient crater diameter (m) before the fragmentation correction."""
    cd, beta = CRATER_COEFFICIENTS[profile.target_type]
    anglefac = np.sin(np.deg2rad(profile.angle)) ** (1.0 / 3.0)
    return (
        cd
        * (mass / target.density) ** (1.0 / 3.0)
        * (1.61 * target.gravity * profile.diameter / (impact_velocity * 1000.0) ** 2) ** (-beta)
        * anglefac
    )


def crater_size(
    profile: ImpactorProfile,
    mass: float,
    impact_velocity: float,
    breakup_altitude: float = 0.0,
    target: TargetProperties = TargetProperties()
) -> CraterResult:
    """
    Compute transient and final crater dimensions.

    Args:
        profile: Projectile and target parameters
        mass: Projectile mass (kg)
        impact_velocity: Velocity at the target (km/s)
        breakup_altitude: Altitude of atmospheric breakup (m), 0 if intact
        target: Target density, gravity and dispersion scale height

    Returns:
        CraterResult; melt_volume is None below 12 km/s
    """
    dispersion = dispersion_length(profile.diameter, breakup_altitude, target.scale_height)

    tr_diameter = transient_crater_diameter(profile, mass, impact_velocity, target)
    if dispersion >= tr_diameter:
        # Fragmentation correction
        tr_diameter /= 2.0

    tr_depth = tr_diameter / 2.828

    if tr_diameter * 1.25 >= COMPLEX_CRATER_DIAMETER:
        # Complex crater
        final_diameter = 1.17 * tr_diameter**1.13 / 2.8554
        final_depth = 37.0 * final_diameter**0.301
    else:
        # Simple crater
        final_diameter = 1.25 * tr_diameter
        breccia_volume = 0.032 * final_diameter**3
        rim_height = 0.07 * tr_diameter**4 / final_diameter**3
        breccia_thickness = (
            2.8 * breccia_volume
            * ((tr_depth + rim_height) / (tr_depth * final_diameter**2))
        )
        final_depth = tr_depth + rim_height - breccia_thickness

    volume = (np.pi / 24.0) * (tr_diameter / 1000.0) ** 3

    melt_volume = None
    if impact_velocity >= MELT_VELOCITY:
        energy_seafloor = 0.5 * mass * (impact_velocity * 1000.0) ** 2
        melt_volume = MELT_COEFF * energy_seafloor * np.sin(np.deg2rad(profile.angle))
        melt_volume = float(min(melt_volume, V_EARTH))

    return CraterResult(
        transient_diameter=float(tr_diameter),
        transient_depth=float(tr_depth),
        final_diameter=float(final_diameter),
        final_depth=float(final_depth),
        volume=float(volume),
        melt_volume=melt_volume,
    )
