from .profile import (
    TargetType,
    CRATER_COEFFICIENTS,
    ImpactorProfile,
    AtmosphereModel,
    TargetProperties,
    AtmosphericEntryResult,
    EnergyResult,
    CraterResult,
    ImpactReport,
)
from .atmosphere import atmospheric_entry, yield_strength
from .energy import impact_energy, projectile_mass, seafloor_velocity, impact_frequency
from .crater import crater_size, dispersion_length, transient_crater_diameter
from .pipeline import simulate_impact

__all__ = [
    # Records
    "TargetType",
    "CRATER_COEFFICIENTS",
    "ImpactorProfile",
    "AtmosphereModel",
    "TargetProperties",
    "AtmosphericEntryResult",
    "EnergyResult",
    "CraterResult",
    "ImpactReport",

    # Models
    "atmospheric_entry",
    "yield_strength",
    "impact_energy",
    "projectile_mass",
    "seafloor_velocity",
    "impact_frequency",
    "crater_size",
    "dispersion_length",
    "transient_crater_diameter",
    "simulate_impact",
]
