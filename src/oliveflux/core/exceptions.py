"""
Custom exception hierarchy for the oliveflux package.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass

import yaml
from pydantic import ValidationError as PydanticValidationError


@dataclass
class ErrorContext:
    """Context information for errors"""
    site_id: Optional[str] = None
    date: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class OliveFluxError(Exception):
    """Base exception for all oliveflux errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.site_id:
            context_str += f" [Site: {self.context.site_id}]"
        if self.context.date:
            context_str += f" [Date: {self.context.date}]"
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"
        if self.context.operation:
            context_str += f" [Operation: {self.context.operation}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Data-related errors
class DataError(OliveFluxError):
    """Base class for data-related errors"""
    pass


class DataValidationError(DataError):
    """Data validation failed"""
    pass


class InputDomainError(DataValidationError):
    """Input lies outside the domain where the canopy formulas are defined"""
    pass


# Physics model errors
class PhysicsModelError(OliveFluxError):
    """Base class for physics model errors"""
    pass


# Configuration errors
class ConfigurationError(OliveFluxError):
    """Configuration error"""
    pass


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> OliveFluxError:
    """
    Wrap generic exceptions in OliveFluxError hierarchy.
    Useful for catching and categorizing third-party exceptions.
    """
    if isinstance(exc, OliveFluxError):
        return exc

    # Map common third-party exceptions
    error_map = {
        PydanticValidationError: DataValidationError,
        yaml.YAMLError: DataValidationError,
        FileNotFoundError: ConfigurationError,
        ValueError: DataValidationError,
        KeyError: DataValidationError,
        ArithmeticError: PhysicsModelError,
    }

    for exc_type, oliveflux_exc_type in error_map.items():
        if isinstance(exc, exc_type):
            return oliveflux_exc_type(str(exc), context)

    # Default to generic OliveFluxError
    return OliveFluxError(str(exc), context)
