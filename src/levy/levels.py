"""Consumption Levels — константы потребления A (до налога) и B (после)

По найденному W_T из условий первого порядка:

    B = (beta^-1 * exp(-rho*T1) * exp(-r*T2) * WT^eta)^(1/gamma)
    A = beta^(-1/gamma) * exp(-r*(T1+T2)/gamma) * (1-tau)^(-1/gamma)
        * WT^(eta/gamma)

Траектория потребления: c(t) = A * exp(g*t) до T1,
c(t) = B * exp(g*(t-T1)) после.
"""

import logging
import math
from dataclasses import dataclass

from src.core.domain.errors import InvalidParameterError
from src.core.domain.parameters import ParameterSet
from src.core.math.numerical_safeguards import safe_pow, validate_finite
from src.levy.coefficients import bequest_scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumptionLevels:
    """Уровни потребления в начале каждой фазы."""

    A: float  # c(0), фаза до налога
    B: float  # c(T1+), фаза после налога


def compute_levels(WT: float, p: ParameterSet) -> ConsumptionLevels:
    """
    Уровни потребления A, B по терминальному богатству.

    Args:
        WT: Терминальное богатство (>= 0)
        p: Набор параметров

    Returns:
        ConsumptionLevels

    Raises:
        InvalidParameterError: если beta <= 0, tau >= 1, WT < 0 или exp переполняется
        ValueError: если WT NaN/Inf
    """
    scale = bequest_scale(p)

    validate_finite(WT, "WT")
    if WT < 0:
        raise InvalidParameterError(f"Terminal wealth WT must be non-negative, got {WT}")

    keep = 1.0 - p.tau
    if keep <= 0:
        raise InvalidParameterError(
            f"Levy rate tau must be below 1 to compute consumption levels, got {p.tau}"
        )

    try:
        inner = (1.0 / p.beta) * math.exp(-p.rho * p.T1) * math.exp(-p.r * p.T2) * safe_pow(WT, p.eta)
        B = safe_pow(inner, 1.0 / p.gamma)

        A = (
            scale
            * math.exp(-p.r * p.T / p.gamma)
            * safe_pow(keep, -1.0 / p.gamma)
            * safe_pow(WT, p.eta / p.gamma)
        )
    except OverflowError as e:
        raise InvalidParameterError(
            f"Consumption levels overflow for r={p.r}, rho={p.rho}, T1={p.T1}, T2={p.T2}"
        ) from e

    logger.debug("Levels: beta=%s, A=%s, B=%s", p.beta, A, B)
    return ConsumptionLevels(A=A, B=B)
