"""Physics modules for olive canopy interception and transpiration."""
from oliveflux.physics.solar_geometry import (
    SolarGeometry,
    solar_declination,
    cosine_zenith_proxy,
    daytime_length,
)
from oliveflux.physics.interception import (
    InterceptionResult,
    calculate_interception,
    compute_fapar,
    select_spacing_band,
)
from oliveflux.physics.transpiration import (
    TranspirationParameters,
    TranspirationResult,
    calculate_transpiration,
    compute_transpiration,
)
from oliveflux.physics.constraints import (
    InputConstraintChecker,
    checked_compute_fapar,
    checked_compute_transpiration,
)

__all__ = [
    "SolarGeometry",
    "solar_declination",
    "cosine_zenith_proxy",
    "daytime_length",
    # Interception
    "InterceptionResult",
    "calculate_interception",
    "compute_fapar",
    "select_spacing_band",
    # Transpiration
    "TranspirationParameters",
    "TranspirationResult",
    "calculate_transpiration",
    "compute_transpiration",
    # Validation boundary
    "InputConstraintChecker",
    "checked_compute_fapar",
    "checked_compute_transpiration",
]
