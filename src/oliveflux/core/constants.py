"""
Physical constants and published coefficients for the olive canopy models.
"""
from typing import Dict, Final, Tuple

# Physical constants
ATMOSPHERIC_PRESSURE_KPA: Final[float] = 101.4  # kPa
SPECIFIC_HEAT_AIR: Final[float] = 1012.0  # J/kg/K
PSYCHROMETRIC_CONSTANT: Final[float] = 0.067  # kPa/K
LATENT_HEAT_VAPORIZATION_MJ: Final[float] = 2.45  # MJ/kg

# Air density approximation: Ro = 3.486 * Patm / (Td + 275.3)
AIR_DENSITY_COEFFICIENT: Final[float] = 3.486
AIR_DENSITY_TEMPERATURE_OFFSET: Final[float] = 275.3  # °C

# Fraction of global radiation in the PAR waveband
PAR_FRACTION: Final[float] = 0.45

# Solar geometry
MAX_SOLAR_DECLINATION_DEG: Final[float] = 23.5
SUMMER_SOLSTICE_DOY: Final[int] = 172
DAYS_PER_YEAR: Final[float] = 365.0
HOURS_PER_DAY: Final[float] = 24.0
SECONDS_PER_HOUR: Final[float] = 3600.0

# Orgaz et al. (2007) canopy conductance: Gc ∝ (a * Td - b)
CONDUCTANCE_COEFFICIENT_A: Final[float] = 2.73
CONDUCTANCE_COEFFICIENT_B: Final[float] = 8.71

# Mariscal et al. (2000) extinction coefficient: k = a + b / cos(theta)
#   a = m - 0.0321 * LAD
#   b = 0.16 + 0.115 * LAD
EXTINCTION_A_LAD_SLOPE: Final[float] = 0.0321
EXTINCTION_B_INTERCEPT: Final[float] = 0.16
EXTINCTION_B_LAD_SLOPE: Final[float] = 0.115

# Ground area per tree (m²) is 1e4 / planting density
SPACING_AREA_NUMERATOR: Final[float] = 1e4

# Band limits on ground area per tree (m²)
SPACING_THRESHOLDS: Final[Tuple[float, float, float]] = (400.0, 278.0, 204.0)

# Shape parameter m per spacing band: (intercept, slope on Vn)
SPACING_BAND_SHAPE: Final[Dict[str, Tuple[float, float]]] = {
    "wide": (0.35, 0.0),
    "medium": (0.20, 0.0),
    "narrow": (0.32, -0.06),
    "dense": (0.23, -0.04),
}
