"""
Core math modules для модели налога на богатство

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    # NaN/Inf checks
    is_valid_float,
    is_zero,
    # Safe power
    safe_pow,
    # Validation
    validate_finite,
)

# Annuity
from src.core.math.annuity import (
    ANNUITY_KAPPA_EPS,
    annuity_factor,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    # Numerical Safeguards — NaN/Inf checks
    "is_valid_float",
    "is_zero",
    # Numerical Safeguards — Safe power
    "safe_pow",
    # Numerical Safeguards — Validation
    "validate_finite",
    # Annuity — Constants
    "ANNUITY_KAPPA_EPS",
    # Annuity — Functions
    "annuity_factor",
]
