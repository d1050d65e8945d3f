"""
Radiation Interception by Olive Canopies (fAPAR).

Implements the Mariscal et al. (2000) model of the fraction of PAR
intercepted by discontinuous olive canopies:

    fAPAR = 1 - exp(-k × Vn)
    k     = a + b / cos(theta)
    a     = m - 0.0321 × LAD
    b     = 0.16 + 0.115 × LAD
    Vn    = Vc / Pd

where the shape parameter m depends on the ground area per tree
s = 1e4 / Pd through four spacing bands.

Spacing band selection
----------------------
The published parameterisation chains the band tests as

    s > 400            -> 0.35
    s < 400 or s > 278 -> 0.20
    s < 278 or s > 204 -> 0.32 - 0.06 × Vn
    s < 204            -> 0.23 - 0.04 × Vn
    otherwise          -> undefined

Once the first test fails, the second is true for every non-NaN s, so the
narrow and dense bands can never be reached. ``SpacingRule.REFERENCE`` keeps
these conditions verbatim so results match published values.
``SpacingRule.CORRECTED`` uses non-overlapping ranges
(s > 400; 278 < s <= 400; 204 < s <= 278; s <= 204).

References:
- Mariscal, M.J., Orgaz, F. and Villalobos, F.J. (2000). Modelling and
  measurement of radiation interception by olive canopies.
  Agricultural and Forest Meteorology, 100:183-197.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Tuple, Union
import logging

from oliveflux.core.constants import (
    EXTINCTION_A_LAD_SLOPE,
    EXTINCTION_B_INTERCEPT,
    EXTINCTION_B_LAD_SLOPE,
    SPACING_AREA_NUMERATOR,
    SPACING_BAND_SHAPE,
    SPACING_THRESHOLDS,
)
from oliveflux.core.types import FaparFraction, SpacingBand, SpacingRule
from oliveflux.physics.solar_geometry import solar_declination, cosine_zenith_proxy

logger = logging.getLogger(__name__)

_WIDE_LIMIT, _MEDIUM_LIMIT, _NARROW_LIMIT = SPACING_THRESHOLDS


# =============================================================================
# SPACING BANDS
# =============================================================================

SpacingGuard = Tuple[Callable[[float], bool], SpacingBand]

# Ordered guards; the first guard that holds selects the band.
_REFERENCE_GUARDS: List[SpacingGuard] = [
    (lambda s: s > _WIDE_LIMIT, SpacingBand.WIDE),
    (lambda s: s < _WIDE_LIMIT or s > _MEDIUM_LIMIT, SpacingBand.MEDIUM),
    (lambda s: s < _MEDIUM_LIMIT or s > _NARROW_LIMIT, SpacingBand.NARROW),
    (lambda s: s < _NARROW_LIMIT, SpacingBand.DENSE),
]

_CORRECTED_GUARDS: List[SpacingGuard] = [
    (lambda s: s > _WIDE_LIMIT, SpacingBand.WIDE),
    (lambda s: _MEDIUM_LIMIT < s <= _WIDE_LIMIT, SpacingBand.MEDIUM),
    (lambda s: _NARROW_LIMIT < s <= _MEDIUM_LIMIT, SpacingBand.NARROW),
    (lambda s: s <= _NARROW_LIMIT, SpacingBand.DENSE),
]

_GUARDS = {
    SpacingRule.REFERENCE: _REFERENCE_GUARDS,
    SpacingRule.CORRECTED: _CORRECTED_GUARDS,
}


def select_spacing_band(
    ground_area_per_tree: float,
    rule: Union[SpacingRule, str] = SpacingRule.REFERENCE
) -> SpacingBand:
    """
    Select the spacing band for a ground area per tree.

    Args:
        ground_area_per_tree: s = 1e4 / Pd (m²)
        rule: Band selection rule

    Returns:
        SpacingBand; UNDEFINED when no guard holds (NaN spacing)
    """
    rule = SpacingRule(rule)
    s = float(ground_area_per_tree)

    for guard, band in _GUARDS[rule]:
        if guard(s):
            break
    else:
        return SpacingBand.UNDEFINED

    if rule is SpacingRule.REFERENCE:
        corrected = select_spacing_band(s, SpacingRule.CORRECTED)
        if corrected is not band:
            logger.debug(
                f"Spacing s={s:.1f} m² falls in the {corrected.value} band, "
                f"reference conditions select {band.value}")

    return band


def shape_parameter(band: SpacingBand, normalized_crown_volume: float) -> float:
    """
    Empirical shape parameter m for a spacing band.

    Args:
        band: Spacing band
        normalized_crown_volume: Vn = Vc / Pd (m³/m²)

    Returns:
        m, NaN for the undefined band
    """
    if band is SpacingBand.UNDEFINED:
        return np.nan

    intercept, slope = SPACING_BAND_SHAPE[band.value]
    if slope == 0.0:
        return intercept
    return intercept + slope * normalized_crown_volume


# =============================================================================
# fAPAR
# =============================================================================

@dataclass(frozen=True)
class InterceptionResult:
    """Results from the interception calculation"""
    fapar: float  # fraction of absorbed PAR
    normalized_crown_volume: float  # Vn (m³/m²)
    ground_area_per_tree: float  # s (m²)
    spacing_rule: SpacingRule
    spacing_band: SpacingBand
    m: float  # shape parameter
    a: float
    b: float
    declination: float  # degrees
    cos_zenith: float
    k: float  # extinction coefficient

    def as_dict(self) -> dict:
        return {
            "fapar": self.fapar,
            "Vn": self.normalized_crown_volume,
            "s": self.ground_area_per_tree,
            "spacing_rule": self.spacing_rule.value,
            "spacing_band": self.spacing_band.value,
            "m": self.m,
            "a": self.a,
            "b": self.b,
            "declination": self.declination,
            "cos_zenith": self.cos_zenith,
            "k": self.k,
        }


def calculate_interception(
    lad: float,
    vc: float,
    pd: float,
    doy: int,
    lat: float,
    spacing_rule: Union[SpacingRule, str] = SpacingRule.REFERENCE
) -> InterceptionResult:
    """
    Calculate fAPAR and every intermediate of the Mariscal et al. model.

    No input checks are made. Pd = 0 or extreme geometry propagates as
    Inf or NaN instead of raising.

    Args:
        lad: Leaf area density (m²/m³)
        vc: Crown volume (m³)
        pd: Planting density
        doy: Day of year
        lat: Latitude (degrees)
        spacing_rule: Spacing band selection rule

    Returns:
        InterceptionResult
    """
    spacing_rule = SpacingRule(spacing_rule)
    lad = np.float64(lad)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        vn = np.float64(vc) / np.float64(pd)
        s = SPACING_AREA_NUMERATOR / np.float64(pd)

        band = select_spacing_band(s, spacing_rule)
        m = shape_parameter(band, vn)

        a = m - EXTINCTION_A_LAD_SLOPE * lad
        b = EXTINCTION_B_INTERCEPT + EXTINCTION_B_LAD_SLOPE * lad

        phi = solar_declination(doy)
        costheta = cosine_zenith_proxy(lat, phi)

        k = a + b / costheta
        fapar = 1 - np.exp(-k * vn)

    return InterceptionResult(
        fapar=float(fapar),
        normalized_crown_volume=float(vn),
        ground_area_per_tree=float(s),
        spacing_rule=spacing_rule,
        spacing_band=band,
        m=float(m),
        a=float(a),
        b=float(b),
        declination=float(phi),
        cos_zenith=float(costheta),
        k=float(k),
    )


def compute_fapar(
    lad: float,
    vc: float,
    pd: float,
    doy: int,
    lat: float,
    spacing_rule: Union[SpacingRule, str] = SpacingRule.REFERENCE
) -> FaparFraction:
    """
    Fraction of PAR absorbed by an olive orchard canopy.

    Not clamped: values outside [0, 1) are returned as computed.

    Args:
        lad: Leaf area density (m²/m³)
        vc: Crown volume (m³)
        pd: Planting density
        doy: Day of year
        lat: Latitude (degrees)
        spacing_rule: Spacing band selection rule

    Returns:
        fAPAR (dimensionless)
    """
    return calculate_interception(lad, vc, pd, doy, lat, spacing_rule).fapar
