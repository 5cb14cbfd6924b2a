"""
Domain models and value objects.

Contains the parameter set of the levy model and its error taxonomy.
"""

from src.core.domain.errors import (
    BracketingError,
    InvalidParameterError,
    LevyModelError,
    ValidationError,
)
from src.core.domain.parameters import (
    RAW_INPUT_NAMES,
    ParameterSet,
    derive_parameters,
)

__all__ = [
    # Errors
    "LevyModelError",
    "ValidationError",
    "InvalidParameterError",
    "BracketingError",
    # Parameters
    "RAW_INPUT_NAMES",
    "ParameterSet",
    "derive_parameters",
]
