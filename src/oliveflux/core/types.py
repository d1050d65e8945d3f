"""
Type definitions and type aliases for the oliveflux package.
Provides strong typing throughout the codebase.
"""
from typing import Dict, Any, Literal, Optional
from enum import Enum
from dataclasses import dataclass
from typing_extensions import TypeAlias
from pydantic import BaseModel, Field

from oliveflux.core.constants import SPACING_AREA_NUMERATOR


# Type aliases for clarity
SiteID: TypeAlias = str
DayOfYear: TypeAlias = int
LatitudeDeg: TypeAlias = float
DeclinationDeg: TypeAlias = float
Hours: TypeAlias = float
FaparFraction: TypeAlias = float  # dimensionless
TranspirationMm: TypeAlias = float  # mm/day


class SpacingRule(str, Enum):
    """How the spacing band of the interception model is selected"""
    REFERENCE = "reference"  # published chained conditions, kept for numerical parity
    CORRECTED = "corrected"  # non-overlapping ranges


class SpacingBand(str, Enum):
    """Ground-area-per-tree band that fixes the shape parameter m"""
    WIDE = "wide"  # s > 400 m²
    MEDIUM = "medium"  # 278 < s <= 400 m²
    NARROW = "narrow"  # 204 < s <= 278 m²
    DENSE = "dense"  # s <= 204 m²
    UNDEFINED = "undefined"  # no guard matched (NaN spacing)


@dataclass(frozen=True)
class OrchardStructure:
    """Crown and planting structure of an orchard"""
    leaf_area_density: float  # m²/m³
    crown_volume_m3: float  # m³ per tree
    planting_density: float  # trees per unit ground area as used by Vn = Vc / Pd

    @property
    def normalized_crown_volume(self) -> float:
        """Crown volume per ground area, Vn = Vc / Pd"""
        return self.crown_volume_m3 / self.planting_density

    @property
    def ground_area_per_tree(self) -> float:
        """Spacing s = 1e4 / Pd (m²)"""
        return SPACING_AREA_NUMERATOR / self.planting_density


@dataclass(frozen=True)
class SiteDay:
    """Location and day for a single evaluation"""
    latitude: LatitudeDeg
    day_of_year: DayOfYear
    site_id: Optional[SiteID] = None


@dataclass(frozen=True)
class DaytimeWeather:
    """Daytime meteorological drivers"""
    solar_radiation: float  # MJ/m²/day
    mean_temperature_c: float  # mean daytime air temperature (°C)
    vpd_kpa: float  # mean daytime vapour pressure deficit (kPa)


# Pydantic models for serialization
class SiteDayRequest(BaseModel):
    """Input document for a single site-day estimate"""
    site_id: Optional[SiteID] = None
    latitude: float = Field(..., description="Latitude (degrees)")
    day_of_year: int = Field(..., description="Day of year (1-366)")
    leaf_area_density: float = Field(..., description="Leaf area density (m²/m³)")
    crown_volume_m3: float = Field(..., description="Crown volume (m³)")
    planting_density: float = Field(..., description="Planting density")
    solar_radiation: float = Field(..., description="Daily solar radiation (MJ/m²/day)")
    mean_temperature_c: float = Field(..., description="Mean daytime temperature (°C)")
    vpd_kpa: float = Field(..., description="Mean daytime vapour pressure deficit (kPa)")

    def to_structure(self) -> OrchardStructure:
        return OrchardStructure(
            leaf_area_density=self.leaf_area_density,
            crown_volume_m3=self.crown_volume_m3,
            planting_density=self.planting_density,
        )

    def to_site_day(self) -> SiteDay:
        return SiteDay(latitude=self.latitude, day_of_year=self.day_of_year, site_id=self.site_id)

    def to_weather(self) -> DaytimeWeather:
        return DaytimeWeather(
            solar_radiation=self.solar_radiation,
            mean_temperature_c=self.mean_temperature_c,
            vpd_kpa=self.vpd_kpa,
        )


class SiteDayResponse(BaseModel):
    """Combined interception and transpiration estimate"""
    site_id: Optional[SiteID] = None
    fapar: float
    transpiration_mm: float
    spacing_rule: SpacingRule
    spacing_band: SpacingBand
    daytime_length_h: float
    intermediates: Dict[str, Any] = Field(default_factory=dict)
    status: Literal["ok", "non_finite"] = "ok"
