"""
Input constraints for the canopy formulas.

The bare formulas in ``interception`` and ``transpiration`` let
out-of-domain inputs propagate as NaN or Inf. The checked wrappers here
test the inputs first and then delegate, leaving in-domain output unchanged.
"""
import numpy as np
from typing import Dict, List, Optional, Callable
from dataclasses import dataclass
import logging

from oliveflux.core.exceptions import ErrorContext, InputDomainError
from oliveflux.core.types import SpacingRule
from oliveflux.physics.interception import compute_fapar
from oliveflux.physics.solar_geometry import solar_declination, daylength_argument
from oliveflux.physics.transpiration import (
    TranspirationParameters,
    DEFAULT_PARAMETERS,
    calculate_transpiration,
)

logger = logging.getLogger(__name__)


@dataclass
class InputConstraint:
    """Definition of an input constraint"""
    name: str
    description: str
    check_function: Callable[[Dict], bool]
    required_inputs: tuple
    severity: str = "error"  # "warning", "error"


@dataclass
class ConstraintViolation:
    """A failed constraint check"""
    name: str
    description: str
    severity: str
    values: Dict[str, float]


def _finite(*values) -> bool:
    return all(np.isfinite(v) for v in values)


class InputConstraintChecker:
    """
    Checks inputs of the fAPAR and transpiration formulas.
    Errors raise InputDomainError, warnings are logged.
    """

    def __init__(self, params: Optional[TranspirationParameters] = None):
        self.params = params or DEFAULT_PARAMETERS
        self.constraints = self._initialize_constraints()
        self.violation_history: List[ConstraintViolation] = []

    def _initialize_constraints(self) -> List[InputConstraint]:
        """Initialize all input constraints"""
        return [
            InputConstraint(
                name="planting_density_positive",
                description="Planting density must be positive and finite",
                check_function=lambda x: _finite(x["pd"]) and x["pd"] > 0,
                required_inputs=("pd",),
            ),
            InputConstraint(
                name="crown_volume_non_negative",
                description="Crown volume cannot be negative",
                check_function=lambda x: _finite(x["vc"]) and x["vc"] >= 0,
                required_inputs=("vc",),
            ),
            InputConstraint(
                name="leaf_area_density_non_negative",
                description="Leaf area density cannot be negative",
                check_function=lambda x: _finite(x["lad"]) and x["lad"] >= 0,
                required_inputs=("lad",),
            ),
            InputConstraint(
                name="day_of_year_range",
                description="Day of year must lie in 1-366",
                check_function=lambda x: 1 <= x["doy"] <= 366,
                required_inputs=("doy",),
            ),
            InputConstraint(
                name="latitude_range",
                description="Latitude must lie in -90 to 90 degrees",
                check_function=lambda x: _finite(x["lat"]) and -90 <= x["lat"] <= 90,
                required_inputs=("lat",),
            ),
            InputConstraint(
                name="daylength_defined",
                description="Daytime length is undefined under polar day or night",
                check_function=self._check_daylength_defined,
                required_inputs=("lat", "doy"),
            ),
            InputConstraint(
                name="vpd_positive",
                description="Vapour pressure deficit must be positive",
                check_function=lambda x: _finite(x["vpd"]) and x["vpd"] > 0,
                required_inputs=("vpd",),
            ),
            InputConstraint(
                name="fpar_unit_interval",
                description="fPAR is expected in [0, 1]",
                check_function=lambda x: 0 <= x["fpar"] <= 1,
                required_inputs=("fpar",),
                severity="warning",
            ),
            InputConstraint(
                name="conductance_positive",
                description="Temperature below the conductance threshold gives negative transpiration",
                check_function=self._check_conductance_positive,
                required_inputs=("td",),
                severity="warning",
            ),
        ]

    def _check_daylength_defined(self, inputs: Dict) -> bool:
        """Check the acos argument of the sunset hour angle stays in [-1, 1]"""
        phi = solar_declination(inputs["doy"])
        return abs(daylength_argument(inputs["lat"], phi)) <= 1

    def _check_conductance_positive(self, inputs: Dict) -> bool:
        """Check Td above the temperature where a × Td - b vanishes"""
        return inputs["td"] > self.params.conductance_threshold_temperature

    def check(self, inputs: Dict[str, float], operation: Optional[str] = None) -> List[ConstraintViolation]:
        """
        Check every constraint whose inputs are present.

        Args:
            inputs: Input values keyed by formula argument name
            operation: Name of the calling operation, used in error context

        Returns:
            Warning-level violations (error-level violations raise)

        Raises:
            InputDomainError: If an error-level constraint is violated
        """
        warnings = []
        errors = []

        for constraint in self.constraints:
            if not all(key in inputs for key in constraint.required_inputs):
                continue

            if constraint.check_function(inputs):
                continue

            violation = ConstraintViolation(
                name=constraint.name,
                description=constraint.description,
                severity=constraint.severity,
                values={key: inputs[key] for key in constraint.required_inputs},
            )
            self.violation_history.append(violation)

            if constraint.severity == "error":
                errors.append(violation)
            else:
                logger.warning(f"Constraint {constraint.name} violated: {violation.values}")
                warnings.append(violation)

        if errors:
            names = ", ".join(v.name for v in errors)
            raise InputDomainError(
                f"Violated input constraints: {names}",
                context=ErrorContext(
                    component="constraints",
                    operation=operation,
                    details={v.name: v.values for v in errors},
                ),
            )

        return warnings


def checked_compute_fapar(
    lad: float,
    vc: float,
    pd: float,
    doy: int,
    lat: float,
    spacing_rule: SpacingRule = SpacingRule.REFERENCE,
    checker: Optional[InputConstraintChecker] = None
) -> float:
    """compute_fapar behind the input validation boundary."""
    checker = checker or InputConstraintChecker()
    checker.check({"lad": lad, "vc": vc, "pd": pd, "doy": doy, "lat": lat},
                  operation="compute_fapar")
    return compute_fapar(lad, vc, pd, doy, lat, spacing_rule)


def checked_compute_transpiration(
    fpar: float,
    rs: float,
    td: float,
    vpd: float,
    lat: float,
    doy: int,
    checker: Optional[InputConstraintChecker] = None
) -> float:
    """compute_transpiration behind the input validation boundary."""
    checker = checker or InputConstraintChecker()
    checker.check({"fpar": fpar, "td": td, "vpd": vpd, "lat": lat, "doy": doy},
                  operation="compute_transpiration")
    return calculate_transpiration(fpar, rs, td, vpd, lat, doy, checker.params).transpiration_mm
