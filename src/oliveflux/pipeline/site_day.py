"""
Site-day estimator for oliveflux.
Chains canopy interception into transpiration for one orchard and day.
"""
import numpy as np
from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging

from oliveflux.core.config import OliveFluxConfig, get_config
from oliveflux.core.exceptions import ConfigurationError, ErrorContext
from oliveflux.core.types import (
    OrchardStructure, SiteDay, DaytimeWeather,
    SiteDayRequest, SiteDayResponse, SpacingRule,
)
from oliveflux.physics.interception import InterceptionResult, calculate_interception
from oliveflux.physics.transpiration import (
    TranspirationParameters, TranspirationResult, calculate_transpiration,
)
from oliveflux.physics.constraints import InputConstraintChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteDayResult:
    """Combined interception and transpiration for one site-day"""
    site_day: SiteDay
    interception: InterceptionResult
    transpiration: TranspirationResult

    @property
    def fapar(self) -> float:
        return self.interception.fapar

    @property
    def transpiration_mm(self) -> float:
        return self.transpiration.transpiration_mm

    @property
    def is_finite(self) -> bool:
        return bool(np.isfinite(self.fapar) and np.isfinite(self.transpiration_mm))

    def intermediates(self) -> Dict[str, Any]:
        return {
            "interception": self.interception.as_dict(),
            "transpiration": self.transpiration.as_dict(),
        }


class SiteDayEstimator:
    """
    Estimates fAPAR and transpiration for one site-day.

    fAPAR from crown structure and solar geometry feeds the conductance
    model together with the day's weather.
    """

    def __init__(self, config: Optional[OliveFluxConfig] = None):
        self.config = config or get_config()
        self.logger = logger

    def _options(self, site_id: Optional[str]) -> Dict[str, Any]:
        """Resolve spacing rule, validation and constants with site overrides"""
        overrides = self.config.get_site_config(site_id)

        try:
            spacing_rule = SpacingRule(
                overrides.get("spacing_rule", self.config.interception.spacing_rule))
        except ValueError as e:
            raise ConfigurationError(
                str(e), ErrorContext(site_id=site_id, component="site_day")) from e

        validate = bool(overrides.get("validate", self.config.validation.enabled))
        params = TranspirationParameters.from_config(self.config.transpiration)

        return {"spacing_rule": spacing_rule, "validate": validate, "params": params}

    def estimate(
        self,
        structure: OrchardStructure,
        site_day: SiteDay,
        weather: DaytimeWeather
    ) -> SiteDayResult:
        """
        Estimate interception and transpiration.

        Args:
            structure: Orchard crown and planting structure
            site_day: Location and day of year
            weather: Daytime meteorological drivers

        Returns:
            SiteDayResult

        Raises:
            InputDomainError: If validation is enabled and an input is out of domain
        """
        options = self._options(site_day.site_id)
        params = options["params"]

        if options["validate"]:
            checker = InputConstraintChecker(params)
            checker.check({
                "lad": structure.leaf_area_density,
                "vc": structure.crown_volume_m3,
                "pd": structure.planting_density,
                "doy": site_day.day_of_year,
                "lat": site_day.latitude,
                "td": weather.mean_temperature_c,
                "vpd": weather.vpd_kpa,
            }, operation="estimate")

        interception = calculate_interception(
            lad=structure.leaf_area_density,
            vc=structure.crown_volume_m3,
            pd=structure.planting_density,
            doy=site_day.day_of_year,
            lat=site_day.latitude,
            spacing_rule=options["spacing_rule"],
        )

        if options["validate"]:
            checker.check({"fpar": interception.fapar}, operation="estimate")

        transpiration = calculate_transpiration(
            fpar=interception.fapar,
            rs=weather.solar_radiation,
            td=weather.mean_temperature_c,
            vpd=weather.vpd_kpa,
            lat=site_day.latitude,
            doy=site_day.day_of_year,
            params=params,
        )

        result = SiteDayResult(
            site_day=site_day,
            interception=interception,
            transpiration=transpiration,
        )

        self.logger.debug(
            f"Site {site_day.site_id or '-'} DOY {site_day.day_of_year}: "
            f"fAPAR={result.fapar:.4f}, T={result.transpiration_mm:.3f} mm/day "
            f"({interception.spacing_band.value} band)")

        if not result.is_finite and self.config.validation.warn_on_non_finite:
            self.logger.warning(
                f"Non-finite estimate for site {site_day.site_id or '-'} "
                f"DOY {site_day.day_of_year}: fAPAR={result.fapar}, "
                f"T={result.transpiration_mm}")

        return result

    def estimate_request(self, request: SiteDayRequest) -> SiteDayResponse:
        """Estimate from a request document and build the response."""
        result = self.estimate(
            request.to_structure(),
            request.to_site_day(),
            request.to_weather(),
        )

        return SiteDayResponse(
            site_id=request.site_id,
            fapar=result.fapar,
            transpiration_mm=result.transpiration_mm,
            spacing_rule=result.interception.spacing_rule,
            spacing_band=result.interception.spacing_band,
            daytime_length_h=result.transpiration.daytime_length_h,
            intermediates=result.intermediates(),
            status="ok" if result.is_finite else "non_finite",
        )
