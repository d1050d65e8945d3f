"""
Olive Orchard Transpiration from Canopy Conductance.

Implements the Orgaz et al. (2007) big-leaf transpiration model, where
canopy conductance scales with absorbed PAR, air temperature and the
inverse of vapour pressure deficit:

    Gc    = fPAR × Rsp × (a × Td - b) / 1000 / VPD      (mm/s)
    rc    = 1000 / Gc                                    (s/m)
    LE    = Ro × Cp / Gamma × VPD / rc                   (W/m²)
    LE_mm = LE × 3600 × N / 1e6 / 2.45                   (mm/day)

with Ro = 3.486 × Patm / (Td + 275.3) and Rsp the mean daytime PAR
irradiance derived from daily solar radiation and daytime length N.

Because Gc is inversely proportional to VPD, LE does not depend on VPD
once the algebra is composed; the two VPD terms are kept as written.

References:
- Orgaz, F., Villalobos, F.J., Testi, L. and Fereres, E. (2007).
  A model of daily mean canopy conductance for calculating transpiration
  of olive canopies. Functional Plant Biology, 34:178-188.
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import Optional, Dict
import logging

from oliveflux.core import constants
from oliveflux.core.types import TranspirationMm
from oliveflux.physics.solar_geometry import solar_declination, daytime_length

logger = logging.getLogger(__name__)


# =============================================================================
# MODEL PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class TranspirationParameters:
    """
    Constants of the transpiration model.

    Cp is in J/kg/K; the numeric value 1012 is used as is.
    """
    atmospheric_pressure_kpa: float = constants.ATMOSPHERIC_PRESSURE_KPA
    specific_heat_air: float = constants.SPECIFIC_HEAT_AIR
    psychrometric_constant: float = constants.PSYCHROMETRIC_CONSTANT
    conductance_coefficient_a: float = constants.CONDUCTANCE_COEFFICIENT_A
    conductance_coefficient_b: float = constants.CONDUCTANCE_COEFFICIENT_B
    latent_heat_mj_kg: float = constants.LATENT_HEAT_VAPORIZATION_MJ
    par_fraction: float = constants.PAR_FRACTION

    @property
    def conductance_threshold_temperature(self) -> float:
        """Temperature (°C) at which a × Td - b = 0 and conductance vanishes"""
        return self.conductance_coefficient_b / self.conductance_coefficient_a

    @classmethod
    def from_config(cls, config) -> "TranspirationParameters":
        """
        Build parameters from a TranspirationConfig.

        Args:
            config: oliveflux.core.config.TranspirationConfig

        Returns:
            TranspirationParameters
        """
        return cls(**config.model_dump())


DEFAULT_PARAMETERS = TranspirationParameters()


# =============================================================================
# COMPONENT TERMS
# =============================================================================

def air_density(
    mean_temperature_c: float,
    atmospheric_pressure_kpa: float = constants.ATMOSPHERIC_PRESSURE_KPA
) -> float:
    """Air density Ro = 3.486 × Patm / (Td + 275.3) (kg/m³)."""
    return (constants.AIR_DENSITY_COEFFICIENT * atmospheric_pressure_kpa
            / (mean_temperature_c + constants.AIR_DENSITY_TEMPERATURE_OFFSET))


def par_irradiance(
    solar_radiation: float,
    daytime_length_h: float,
    par_fraction: float = constants.PAR_FRACTION
) -> float:
    """
    Mean daytime PAR irradiance (W/m²).

        Rsp = Rs × 0.45 × 1e6 / 3600 / N

    Args:
        solar_radiation: Daily solar radiation (MJ/m²/day)
        daytime_length_h: Daytime length N (hours)
        par_fraction: PAR fraction of global radiation

    Returns:
        Rsp (W/m²)
    """
    return solar_radiation * par_fraction * 10**6 / constants.SECONDS_PER_HOUR / daytime_length_h


def canopy_conductance(
    fpar: float,
    par_w_m2: float,
    mean_temperature_c: float,
    vpd_kpa: float,
    params: TranspirationParameters = DEFAULT_PARAMETERS
) -> float:
    """
    Daily mean canopy conductance (mm/s).

        Gc = fPAR × Rsp × (a × Td - b) / 1000 / VPD

    Negative below the threshold temperature b / a; Inf or NaN for VPD = 0.
    """
    temperature_term = (params.conductance_coefficient_a * mean_temperature_c
                        - params.conductance_coefficient_b)
    return fpar * par_w_m2 * temperature_term / 1000 / vpd_kpa


def latent_heat_flux(
    rho_air: float,
    vpd_kpa: float,
    canopy_resistance: float,
    params: TranspirationParameters = DEFAULT_PARAMETERS
) -> float:
    """LE = Ro × Cp / Gamma × VPD / rc (W/m²)."""
    return (rho_air * params.specific_heat_air / params.psychrometric_constant
            * vpd_kpa / canopy_resistance)


def latent_heat_to_mm(
    le_w_m2: float,
    daytime_length_h: float,
    latent_heat_mj_kg: float = constants.LATENT_HEAT_VAPORIZATION_MJ
) -> float:
    """Convert mean daytime LE (W/m²) to a daily depth of water (mm/day)."""
    return le_w_m2 * constants.SECONDS_PER_HOUR * daytime_length_h / 1000000 / latent_heat_mj_kg


# =============================================================================
# MAIN CALCULATION
# =============================================================================

@dataclass(frozen=True)
class TranspirationResult:
    """Results from the transpiration calculation"""
    transpiration_mm: float  # mm/day
    latent_heat_w_m2: float  # LE (W/m²)
    air_density: float  # Ro (kg/m³)
    declination: float  # degrees
    daytime_length_h: float  # N (hours)
    par_w_m2: float  # Rsp (W/m²)
    canopy_conductance: float  # Gc (mm/s)
    canopy_resistance: float  # rc (s/m)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_transpiration(
    fpar: float,
    rs: float,
    td: float,
    vpd: float,
    lat: float,
    doy: int,
    params: Optional[TranspirationParameters] = None
) -> TranspirationResult:
    """
    Calculate transpiration and every intermediate of the Orgaz et al. model.

    No input checks are made: VPD = 0, zero conductance and polar daylength
    propagate as Inf or NaN, and temperatures below b / a give a negative
    (sign-flipped) result.

    Args:
        fpar: Fraction of absorbed PAR
        rs: Daily solar radiation (MJ/m²/day)
        td: Mean daytime temperature (°C)
        vpd: Mean daytime vapour pressure deficit (kPa)
        lat: Latitude (degrees)
        doy: Day of year
        params: Model constants (defaults to published values)

    Returns:
        TranspirationResult
    """
    if params is None:
        params = DEFAULT_PARAMETERS

    fpar = np.float64(fpar)
    rs = np.float64(rs)
    td = np.float64(td)
    vpd = np.float64(vpd)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        ro = air_density(td, params.atmospheric_pressure_kpa)

        phi = solar_declination(doy)
        n_hours = daytime_length(lat, phi)

        rsp = par_irradiance(rs, n_hours, params.par_fraction)
        gc = canopy_conductance(fpar, rsp, td, vpd, params)
        rc = 1000 / gc
        le = latent_heat_flux(ro, vpd, rc, params)
        le_mm = latent_heat_to_mm(le, n_hours, params.latent_heat_mj_kg)

    return TranspirationResult(
        transpiration_mm=float(le_mm),
        latent_heat_w_m2=float(le),
        air_density=float(ro),
        declination=float(phi),
        daytime_length_h=float(n_hours),
        par_w_m2=float(rsp),
        canopy_conductance=float(gc),
        canopy_resistance=float(rc),
    )


def compute_transpiration(
    fpar: float,
    rs: float,
    td: float,
    vpd: float,
    lat: float,
    doy: int
) -> TranspirationMm:
    """
    Mean daytime transpiration of an olive orchard (mm/day).

    Args:
        fpar: Fraction of absorbed PAR
        rs: Daily solar radiation (MJ/m²/day)
        td: Mean daytime temperature (°C)
        vpd: Mean daytime vapour pressure deficit (kPa)
        lat: Latitude (degrees)
        doy: Day of year

    Returns:
        Transpiration (mm/day)
    """
    return calculate_transpiration(fpar, rs, td, vpd, lat, doy).transpiration_mm
