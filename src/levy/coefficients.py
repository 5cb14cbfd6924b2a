"""Coefficients K1, K2 терминального уравнения

K1 собирает вклад потребления до налога (фаза [0, T1]), K2 — после налога
(фаза [T1, T1+T2]). Оба коэффициента масштабируют W^alpha в

    F(W) = W + (K1 + K2) * W^alpha - RHS

Формулы:
    K1 = beta^(-1/gamma) * exp(((gamma-1)/gamma) * r * (T1+T2))
         * (1-tau)^((gamma-1)/gamma) * P(T1)
    K2 = beta^(-1/gamma) * exp(((gamma-1)/gamma) * r * T2 - (rho/gamma) * T1)
         * P(T2)
"""

import logging
import math

from src.core.domain.errors import InvalidParameterError
from src.core.domain.parameters import ParameterSet
from src.core.math.numerical_safeguards import is_valid_float, safe_pow

logger = logging.getLogger(__name__)


def require_finite(value: float, label: str) -> float:
    """inf или NaN в коэффициенте → InvalidParameterError."""
    if not is_valid_float(value):
        raise InvalidParameterError(f"{label} is not finite: {value}")
    return value


def _require_positive_beta(p: ParameterSet) -> None:
    if p.beta <= 0:
        raise InvalidParameterError(
            f"Beta (bequest weight) must be positive, got {p.beta}"
        )


def bequest_scale(p: ParameterSet) -> float:
    """beta^(-1/gamma), общий множитель K1, K2 и уровня A."""
    _require_positive_beta(p)
    return safe_pow(p.beta, -1.0 / p.gamma)


def coefficient_k1(p: ParameterSet) -> float:
    """K1(tau): коэффициент фазы до налога.

    Raises:
        InvalidParameterError: если beta <= 0, tau > 1 или K1 не конечен
    """
    scale = bequest_scale(p)
    keep = 1.0 - p.tau
    if keep < 0:
        raise InvalidParameterError(
            f"Levy rate tau must not exceed 1, got {p.tau}"
        )

    curvature = (p.gamma - 1.0) / p.gamma
    try:
        result = (
            scale
            * math.exp(curvature * p.r * p.T)
            * safe_pow(keep, curvature)
            * p.annuity(p.T1)
        )
    except OverflowError as e:
        raise InvalidParameterError(
            f"K1 overflows for r={p.r}, rho={p.rho}, T1+T2={p.T}"
        ) from e
    require_finite(result, "K1")
    logger.debug("K1 calculation: beta=%s, beta^(-1/gamma)=%s, K1=%s", p.beta, scale, result)
    return result


def coefficient_k2(p: ParameterSet) -> float:
    """K2: коэффициент фазы после налога (от tau не зависит).

    Raises:
        InvalidParameterError: если beta <= 0 или K2 не конечен
    """
    scale = bequest_scale(p)
    curvature = (p.gamma - 1.0) / p.gamma
    try:
        result = (
            scale
            * math.exp(curvature * p.r * p.T2 - (p.rho / p.gamma) * p.T1)
            * p.annuity(p.T2)
        )
    except OverflowError as e:
        raise InvalidParameterError(
            f"K2 overflows for r={p.r}, rho={p.rho}, T1={p.T1}, T2={p.T2}"
        ) from e
    require_finite(result, "K2")
    logger.debug("K2 calculation: beta=%s, beta^(-1/gamma)=%s, K2=%s", p.beta, scale, result)
    return result
