"""
Atmospheric entry of an impactor: breakup, airburst and surface velocity.

Closed-form pancake model with empirical corrections; there is no numerical
integration of the trajectory.
"""
import logging

import numpy as np

from neoimpact.constants import NEGLIGIBLE_AIR_DENSITY
from neoimpact.impact.profile import AtmosphereModel, AtmosphericEntryResult, ImpactorProfile

logger = logging.getLogger(__name__)


def yield_strength(density: float) -> float:
    """Empirical yield strength (Pa) of a projectile of the given density (kg/m^3)."""
    return 10.0 ** (2.107 + 0.0624 * np.sqrt(density))


def atmospheric_entry(
    profile: ImpactorProfile,
    atmosphere: AtmosphereModel = AtmosphereModel()
) -> AtmosphericEntryResult:
    """
    Compute the breakup altitude, burst altitude and surface velocity.

    Three regimes are distinguished:
        - negligible atmosphere: the vertical component of the entry
          velocity reaches the surface;
        - interaction factor >= 1: the projectile reaches the surface intact,
          slowed by drag but not below its terminal velocity;
        - interaction factor < 1: the projectile fragments at the breakup
          altitude, spreads as a pancake and either bursts in the air or
          reaches the ground while still dispersing.

    Args:
        profile: Projectile parameters (diameter, density, velocity, angle)
        atmosphere: Surface air density, drag coefficient, scale height,
            gravity and shape factor

    Returns:
        AtmosphericEntryResult with altitudes in m and velocity in km/s
    """
    rho_p = profile.density
    diameter = profile.diameter
    v_entry = profile.velocity * 1000.0  # m/s
    sin_angle = np.sin(np.deg2rad(profile.angle))

    rho_air = atmosphere.rho_surface
    drag = atmosphere.drag_coeff
    H = atmosphere.scale_height

    # Negligible atmosphere
    if rho_air < NEGLIGIBLE_AIR_DENSITY:
        return AtmosphericEntryResult(
            breakup_altitude=0.0,
            burst_altitude=0.0,
            surface_velocity=profile.velocity * sin_angle
        )

    # Velocity decrement factor
    av = 3.0 * rho_air * drag * H / (2.0 * rho_p * diameter * sin_angle)

    # Strength ratio and interaction factor
    r_strength = yield_strength(rho_p) / (rho_air * v_entry**2)
    i_factor = 5.437 * av * r_strength

    if i_factor >= 1.0:
        # Projectile lands intact
        v_terminal = np.sqrt(2.0 * rho_p * diameter * atmosphere.gravity / (3.0 * rho_air * drag))
        v_surface = v_entry * np.exp(-av)
        logger.debug("Intact entry: interaction factor %.4f", i_factor)
        return AtmosphericEntryResult(
            breakup_altitude=0.0,
            burst_altitude=0.0,
            surface_velocity=max(v_terminal, v_surface) / 1000.0
        )

    # Projectile breaks up
    altitude1 = -H * np.log(r_strength)
    omega = 1.308 - 0.314 * i_factor - 1.303 * np.sqrt(1.0 - i_factor)
    alt_break = altitude1 - omega * H

    v_breakup = v_entry * np.exp(-av * np.exp(-alt_break / H))

    v_fac = 1.5 * np.sqrt(drag * rho_air / (2.0 * rho_p)) * np.exp(-alt_break / (2.0 * H))
    l_disper = (
        diameter * sin_angle * np.sqrt(rho_p / (2.0 * drag * rho_air))
        * np.exp(alt_break / (2.0 * H))
    )

    alpha2 = np.sqrt(atmosphere.shape_factor**2 - 1.0)
    altitude_pen = 2.0 * H * np.log(1.0 + alpha2 * l_disper / (2.0 * H))
    alt_burst = alt_break - altitude_pen

    if alt_burst > 0.0:
        # Airburst
        expfac = (1.0 / 24.0) * alpha2 * (
            24.0
            + 8.0 * alpha2**2
            + 6.0 * alpha2 * l_disper / H
            + 3.0 * alpha2**3 * l_disper / H
        )
        v_surface = v_breakup * np.exp(-expfac * v_fac)
    else:
        # Still dispersing when it reaches the ground
        altitude_scale = H / l_disper
        integral = (altitude_scale**3 / 3.0) * (
            3.0 * (4.0 + 1.0 / altitude_scale**2) * np.exp(alt_break / H)
            + 6.0 * np.exp(2.0 * alt_break / H)
            - 16.0 * np.exp(3.0 * alt_break / (2.0 * H))
            - 3.0 / altitude_scale**2
            - 2.0
        )
        v_surface = v_breakup * np.exp(-v_fac * integral)

    logger.debug(
        "Fragmented entry: breakup %.1f m, burst %.1f m, interaction factor %.4f",
        alt_break, alt_burst, i_factor
    )
    return AtmosphericEntryResult(
        breakup_altitude=float(alt_break),
        burst_altitude=float(alt_burst),
        surface_velocity=float(v_surface / 1000.0)
    )
