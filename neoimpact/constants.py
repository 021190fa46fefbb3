"""
Physical and time constants for neoimpact.

This module contains all constants used throughout the orbit propagation and
impact modelling code.
"""

# Basic astronomical and time constants
KMPAU = 149597870.7  # km per AU
MU_SUN = 1.32712440018e11  # km^3/s^2 (gravitational parameter of the Sun)
DAY = 86400.0  # seconds per day
YEAR = 365.25 * DAY  # seconds per year

# Julian date references
J2000 = 2451545.0  # Julian date of the J2000 epoch
JD_UNIX_EPOCH = 2440587.5  # Julian date of 1970-01-01T00:00:00Z
MJD_OFFSET = 2400000.5  # JD - MJD

# Kepler solver
KEPLER_TOL = 1.0e-14
KEPLER_MAX_ITER = 100

# Physical constants for the impact models
C_KM_S = 3.0e5  # speed of light (km/s) as used by the energy model
RELATIVISTIC_THRESHOLD = 0.25 * C_KM_S  # km/s
J_PER_MEGATON = 4.186e15  # J in 1 megaton TNT
R_EARTH = 6370.0 * 1000.0  # m
V_EARTH = 1.08321e21  # m^3 (volume of the Earth)
WATER_DENSITY = 1000.0  # kg/m^3
WATER_DRAG = 0.877  # drag coefficient of a projectile in water
MELT_COEFF = 8.9e-21  # melt volume per joule of seafloor energy (m^3/J)
MELT_VELOCITY = 12.0  # km/s, minimum impact velocity for melt production
NEGLIGIBLE_AIR_DENSITY = 1.0e-8  # kg/m^3

# Default atmosphere (sea level, Earth)
RHO_SURFACE = 1.225  # kg/m^3
DRAG_COEFF = 1.0
SCALE_HEIGHT = 8500.0  # m
G_EARTH = 9.81  # m/s^2
SHAPE_FACTOR = 1.0

# Default target
TARGET_DENSITY = 2700.0  # kg/m^3
CRATER_SCALE_HEIGHT = 7160.0  # m
COMPLEX_CRATER_DIAMETER = 3200.0  # m, final-diameter threshold for complex craters

# Default bulk density used to estimate the mass of a perturbed body
BODY_DENSITY = 2000.0  # kg/m^3
