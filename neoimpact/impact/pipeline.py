"""
End-to-end impact scenario: atmospheric entry, energy budget and crater.
"""
import logging
from typing import Optional

from neoimpact.impact.atmosphere import atmospheric_entry
from neoimpact.impact.crater import crater_size
from neoimpact.impact.energy import impact_energy
from neoimpact.impact.profile import (
    AtmosphereModel, ImpactorProfile, ImpactReport, TargetProperties
)

logger = logging.getLogger(__name__)


def simulate_impact(
    profile: ImpactorProfile,
    atmosphere: Optional[AtmosphereModel] = None,
    target: Optional[TargetProperties] = None
) -> ImpactReport:
    """
    Run the entry, energy and crater models for one impactor.

    The surface velocity and burst altitude of the entry model feed the
    energy model; the breakup altitude, mass and surface velocity feed the
    crater model.
    """
    atmosphere = atmosphere or AtmosphereModel()
    target = target or TargetProperties()

    entry = atmospheric_entry(profile, atmosphere)
    energy = impact_energy(
        profile,
        impact_velocity=entry.surface_velocity,
        burst_altitude=entry.burst_altitude
    )
    crater = crater_size(
        profile,
        mass=energy.mass,
        impact_velocity=entry.surface_velocity,
        breakup_altitude=entry.breakup_altitude,
        target=target
    )

    logger.info(
        "Impact d=%.1f m v=%.2f km/s: %.3e Mt, final crater %.1f m",
        profile.diameter, profile.velocity, energy.energy_megatons, crater.final_diameter
    )
    return ImpactReport(profile=profile, entry=entry, energy=energy, crater=crater)
