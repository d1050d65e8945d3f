"""
oliveflux Pipeline Module.

Chains the canopy interception and transpiration models for a site-day.
"""
from oliveflux.pipeline.site_day import SiteDayEstimator, SiteDayResult

__all__ = [
    "SiteDayEstimator",
    "SiteDayResult",
]
