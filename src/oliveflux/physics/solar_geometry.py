"""
Solar Geometry for Daily Canopy Models.

Solar declination, the cosine-zenith path-length proxy used by the
interception model, and daytime length used by the transpiration model.

All angles are in degrees at the interface. Conversions to radians use the
explicit ``* pi / 180`` factor, evaluated left to right, so results match the
published formulas to floating-point precision.

References:
- Mariscal, M.J., Orgaz, F. and Villalobos, F.J. (2000). Modelling and
  measurement of radiation interception by olive canopies.
  Agricultural and Forest Meteorology, 100:183-197.
- Allen, R.G., Pereira, L.S., Raes, D. and Smith, M. (1998).
  Crop evapotranspiration. FAO Irrigation and drainage paper 56, Eq. 25 and 34.
"""

import numpy as np
from dataclasses import dataclass
import logging

from oliveflux.core.constants import (
    MAX_SOLAR_DECLINATION_DEG,
    SUMMER_SOLSTICE_DOY,
    DAYS_PER_YEAR,
    HOURS_PER_DAY,
)
from oliveflux.core.types import DayOfYear, DeclinationDeg, Hours, LatitudeDeg

logger = logging.getLogger(__name__)


def solar_declination(day_of_year: DayOfYear) -> DeclinationDeg:
    """
    Solar declination angle (degrees).

        Phi = 23.5 × cos((360 × (DOY - 172) / 365) × pi / 180)

    Peaks at 23.5° on the summer solstice (day 172).

    Args:
        day_of_year: Day of year (1-366)

    Returns:
        Declination in degrees
    """
    day_angle = 360 * (day_of_year - SUMMER_SOLSTICE_DOY) / DAYS_PER_YEAR
    return MAX_SOLAR_DECLINATION_DEG * np.cos(day_angle * np.pi / 180)


def cosine_zenith_proxy(latitude: float, declination: float) -> float:
    """
    Path-length proxy used by the extinction coefficient.

        cos(theta) = sin(Lat) × sin(Phi) + cos(Lat) × cos(Phi)

    Not clamped to [-1, 1].

    Args:
        latitude: Latitude (degrees)
        declination: Solar declination (degrees)

    Returns:
        cos(theta), dimensionless
    """
    lat = latitude * np.pi / 180
    phi = declination * np.pi / 180
    return np.sin(lat) * np.sin(phi) + np.cos(lat) * np.cos(phi)


def half_daylength_angle(latitude: float, declination: float) -> float:
    """
    Sunset hour angle (radians), FAO-56 Eq. 25.

        hs = acos(-tan(Lat) × tan(Phi))

    NaN when the acos argument leaves [-1, 1] (polar day or night).
    """
    lat = latitude * np.pi / 180
    phi = declination * np.pi / 180
    with np.errstate(invalid="ignore"):
        return np.arccos(-np.tan(lat) * np.tan(phi))


def daytime_length(latitude: LatitudeDeg, declination: DeclinationDeg) -> Hours:
    """
    Daytime length (hours), FAO-56 Eq. 34.

        N = 24 × hs / pi

    Args:
        latitude: Latitude (degrees)
        declination: Solar declination (degrees)

    Returns:
        Hours of daylight, NaN under polar day or night
    """
    return HOURS_PER_DAY * half_daylength_angle(latitude, declination) / np.pi


def daylength_argument(latitude: float, declination: float) -> float:
    """Argument of the acos in :func:`half_daylength_angle`."""
    return -np.tan(latitude * np.pi / 180) * np.tan(declination * np.pi / 180)


@dataclass(frozen=True)
class SolarGeometry:
    """Solar geometry of one site-day"""
    latitude: float  # degrees
    day_of_year: int
    declination: float  # degrees
    cos_zenith: float  # cos(theta) proxy
    daytime_length_h: float  # hours

    @property
    def is_polar(self) -> bool:
        """True when daytime length is undefined (polar day or night)"""
        return bool(np.isnan(self.daytime_length_h))

    @classmethod
    def for_site_day(cls, latitude: float, day_of_year: int) -> "SolarGeometry":
        """Evaluate all solar geometry terms for a location and day."""
        phi = solar_declination(day_of_year)
        n_hours = daytime_length(latitude, phi)

        if np.isnan(n_hours):
            logger.debug(
                f"Daytime length undefined at lat={latitude}, DOY={day_of_year} "
                f"(acos argument {daylength_argument(latitude, phi):.3f})")

        return cls(
            latitude=latitude,
            day_of_year=day_of_year,
            declination=float(phi),
            cos_zenith=float(cosine_zenith_proxy(latitude, phi)),
            daytime_length_h=float(n_hours),
        )
