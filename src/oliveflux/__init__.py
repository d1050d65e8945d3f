"""Canopy light interception and transpiration of olive orchards."""
from oliveflux.physics.interception import compute_fapar
from oliveflux.physics.transpiration import compute_transpiration

__version__ = "0.1.0"

__all__ = ["compute_fapar", "compute_transpiration"]
