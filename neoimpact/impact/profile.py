"""
Impact input and output records using Pydantic models.

The input models validate their ranges on construction, so the physics
functions can assume positive diameters, densities and velocities and an
impact angle in (0, 90] degrees.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from neoimpact import constants


class TargetType(str, Enum):
    """Surface material at the impact site."""
    WATER = 'water'
    SEDIMENTARY = 'sedimentary'
    IGNEOUS = 'igneous'


# (crater coefficient Cd, scaling exponent beta) per target type
CRATER_COEFFICIENTS = {
    TargetType.WATER: (1.88, 0.22),
    TargetType.SEDIMENTARY: (1.54, 0.165),
    TargetType.IGNEOUS: (1.6, 0.22),
}

_TARGET_ALIASES = {'w': TargetType.WATER, 's': TargetType.SEDIMENTARY, 'i': TargetType.IGNEOUS}


class ImpactorProfile(BaseModel):
    """
    Projectile and target description for one impact scenario.
    """
    model_config = ConfigDict(frozen=True)

    diameter: float = Field(..., gt=0.0, description="Projectile diameter (m)")
    density: float = Field(..., gt=0.0, description="Projectile density (kg/m^3)")
    velocity: float = Field(
        ..., gt=0.0, lt=constants.C_KM_S,
        description="Entry velocity (km/s)"
    )
    angle: float = Field(..., gt=0.0, le=90.0, description="Impact angle from horizontal (deg)")
    target_depth: float = Field(0.0, ge=0.0, description="Water depth over the target (m)")
    target_type: TargetType = Field(TargetType.IGNEOUS, description="Target material")

    @field_validator('target_type', mode='before')
    @classmethod
    def parse_target_type(cls, v):
        if isinstance(v, str) and v.lower() in _TARGET_ALIASES:
            return _TARGET_ALIASES[v.lower()]
        return v


class AtmosphereModel(BaseModel):
    """
    Atmosphere and projectile-shape parameters for the entry model.

    Defaults describe Earth at sea level and a spherical projectile.
    """
    model_config = ConfigDict(frozen=True)

    rho_surface: float = Field(constants.RHO_SURFACE, ge=0.0, description="Surface air density (kg/m^3)")
    drag_coeff: float = Field(constants.DRAG_COEFF, gt=0.0, description="Drag coefficient")
    scale_height: float = Field(constants.SCALE_HEIGHT, gt=0.0, description="Atmospheric scale height (m)")
    gravity: float = Field(constants.G_EARTH, gt=0.0, description="Gravitational acceleration (m/s^2)")
    shape_factor: float = Field(constants.SHAPE_FACTOR, ge=1.0, description="Pancake shape factor")


class TargetProperties(BaseModel):
    """Target parameters for the crater scaling model."""
    model_config = ConfigDict(frozen=True)

    density: float = Field(constants.TARGET_DENSITY, gt=0.0, description="Target density (kg/m^3)")
    gravity: float = Field(constants.G_EARTH, gt=0.0, description="Gravitational acceleration (m/s^2)")
    scale_height: float = Field(
        constants.CRATER_SCALE_HEIGHT, gt=0.0,
        description="Scale height used for the dispersion of a fragmented projectile (m)"
    )


class AtmosphericEntryResult(BaseModel):
    breakup_altitude: float = Field(..., description="Altitude of breakup (m), 0 if intact")
    burst_altitude: float = Field(..., description="Altitude of airburst (m), 0 for surface impact")
    surface_velocity: float = Field(..., description="Velocity at the surface (km/s)")

    @property
    def is_airburst(self) -> bool:
        return self.burst_altitude > 0.0


class EnergyResult(BaseModel):
    mass: float = Field(..., description="Projectile mass (kg)")
    kinetic_energy: float = Field(..., description="Kinetic energy at entry (J)")
    energy_megatons: float = Field(..., description="Kinetic energy at entry (Mt TNT)")
    impact_energy: float = Field(..., description="Energy delivered at impact or burst (J)")
    impact_megatons: float = Field(..., description="Energy delivered at impact or burst (Mt TNT)")
    linear_momentum: float = Field(..., description="Linear momentum at impact (kg m/s)")
    angular_momentum: float = Field(..., description="Angular momentum about Earth's center (kg m^2/s)")
    seafloor_velocity: float = Field(..., description="Velocity at the seafloor (km/s)")
    seafloor_energy: float = Field(..., description="Kinetic energy at the seafloor (J)")
    impact_frequency: float = Field(..., description="Recurrence interval scale (years)")


class CraterResult(BaseModel):
    transient_diameter: float = Field(..., description="Transient crater diameter (m)")
    transient_depth: float = Field(..., description="Transient crater depth (m)")
    final_diameter: float = Field(..., description="Final crater diameter (m)")
    final_depth: float = Field(..., description="Final crater depth (m)")
    volume: float = Field(..., description="Transient crater volume, (pi/24)(D/1000)^3")
    melt_volume: Optional[float] = Field(None, description="Impact melt volume (m^3)")

    @property
    def is_complex(self) -> bool:
        return self.transient_diameter * 1.25 >= constants.COMPLEX_CRATER_DIAMETER


class ImpactReport(BaseModel):
    """Combined output of the entry, energy and crater models for one scenario."""
    profile: ImpactorProfile
    entry: AtmosphericEntryResult
    energy: EnergyResult
    crater: CraterResult

    @computed_field
    @property
    def ground_radius_km(self) -> float:
        """Radius of the ground circle drawn by map layers (km)."""
        return self.crater.final_diameter / 1000.0
