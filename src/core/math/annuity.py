"""
Annuity Factor — Stabilized Present Value of a Unit Annuity

Модуль вычисляет annuity factor P(H) для эффективной ставки дисконтирования
kappa на горизонте H:

    P(H) = (1 - exp(-kappa * H)) / kappa

При kappa → 0 прямая формула теряет точность (catastrophic cancellation
в числителе и деление на почти ноль), поэтому используется предел P(H) = H.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. |kappa| < ANNUITY_KAPPA_EPS → линейная ветка P(H) = H
2. Точная ветка считается через expm1, чтобы значения по обе стороны
   порога отличались не более чем на O(kappa * H^2)
3. P(0) == 0 точно для любой kappa
"""

import math
from typing import Final

from src.core.math.numerical_safeguards import is_valid_float

# =============================================================================
# ANNUITY EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог переключения на линейное приближение P(H) = H
# Если |kappa| < ANNUITY_KAPPA_EPS → используем H
ANNUITY_KAPPA_EPS: Final[float] = 1e-10


# =============================================================================
# ANNUITY FACTOR
# =============================================================================


def annuity_factor(kappa: float, horizon: float) -> float:
    """
    Численно стабильный annuity factor P(H).

    Args:
        kappa: Эффективная ставка (rho + (gamma - 1) * r) / gamma
        horizon: Горизонт H (в годах)

    Returns:
        P(H) = (1 - exp(-kappa * H)) / kappa, либо H при |kappa| < eps

    Raises:
        ValueError: если kappa или horizon содержат NaN/Inf

    Examples:
        >>> annuity_factor(0.0, 20.0)
        20.0
        >>> round(annuity_factor(0.04, 20.0), 6)
        13.766776
        >>> annuity_factor(0.04, 0.0)
        0.0
    """
    if not is_valid_float(kappa) or not is_valid_float(horizon):
        raise ValueError(
            f"annuity_factor requires finite inputs, got kappa={kappa}, H={horizon}"
        )

    if abs(kappa) < ANNUITY_KAPPA_EPS:
        # Предел (1 - e^{-kH}) / k при k → 0
        return horizon

    # -expm1(-kH) == 1 - exp(-kH) без потери значащих цифр
    return -math.expm1(-kappa * horizon) / kappa
