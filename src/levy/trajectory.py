"""Trajectory — траектории потребления и богатства на [0, T1+T2]

Замкнутые формулы в преобразованном богатстве X = W + y/r (доход
превращается в капитализированную аннуитетную стоимость, ОДУ для X
становится линейным):

    X0      = w0 + y/r
    X(T1-)  = exp(r*T1) * (X0 - A*P(T1))
    X(T1+)  = (1-tau) * X(T1-) + tau * (y/r)

До налога (t < T1 - eps):
    c(t) = A * exp(g*t),   X(t) = exp(r*t) * (X0 - A*P(t))
После налога (dt = max(0, t - T1)):
    c(t) = B * exp(g*dt),  X(t) = exp(r*dt) * (X(T1+) - B*P(dt))

Богатство возвращается как W(t) = X(t) - y/r.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. times строго возрастают, len == n + 1, times[0] == 0, times[-1] == T1+T2
2. Отсчёт ровно в T1 относится к фазе после налога и даёт W(T1+) точно
"""

import math
from dataclasses import dataclass
from typing import Final

from src.core.domain.errors import InvalidParameterError
from src.core.domain.parameters import ParameterSet
from src.core.math.numerical_safeguards import EPS_CALC, is_zero, validate_finite

# =============================================================================
# CONSTANTS
# =============================================================================

# Число интервалов сетки по умолчанию
DEFAULT_TRAJECTORY_POINTS: Final[int] = 500

# Допуск переключения режима в окрестности T1
REGIME_SWITCH_EPS: Final[float] = EPS_CALC


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Trajectory:
    """Плотная траектория модели."""

    times: tuple[float, ...]
    consumption: tuple[float, ...]
    wealth: tuple[float, ...]

    # Богатство в момент налога
    W_at_T1_minus: float
    W_at_T1_plus: float

    # Преобразованное богатство X = W + y/r в опорных точках
    X0: float
    X_at_T1_minus: float
    X_at_T1_plus: float

    @property
    def min_wealth(self) -> float:
        return min(self.wealth)

    @property
    def terminal_wealth(self) -> float:
        return self.wealth[-1]


# =============================================================================
# GENERATOR
# =============================================================================


def generate_trajectory(
    p: ParameterSet,
    WT: float,
    A: float,
    B: float,
    n: int = DEFAULT_TRAJECTORY_POINTS,
) -> Trajectory:
    """
    Траектории c(t) и W(t) на равномерной сетке из n + 1 точки.

    WT в формулах не участвует (он уже учтён в A и B) и принимается для
    единообразия интерфейса стадий.

    Args:
        p: Набор параметров
        WT: Терминальное богатство
        A: Уровень потребления до налога
        B: Уровень потребления после налога
        n: Число интервалов сетки (>= 1)

    Returns:
        Trajectory

    Raises:
        ValueError: если n < 1 или WT, A, B не конечны
        InvalidParameterError: если T1 + T2 <= 0, r == 0 или exp переполняется
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    for name, value in (("WT", WT), ("A", A), ("B", B)):
        validate_finite(value, name)

    t_end = p.T
    if t_end <= 0:
        raise InvalidParameterError(f"Horizon T1+T2 must be positive, got {t_end}")

    if is_zero(p.r):
        raise InvalidParameterError(
            f"Interest rate r must be non-zero for y/r transform, got {p.r}"
        )

    income_pv = p.y / p.r
    x0 = p.w0 + income_pv

    try:
        # Опорные значения в момент налога
        x1_minus = math.exp(p.r * p.T1) * (x0 - A * p.annuity(p.T1))
        x1_plus = (1.0 - p.tau) * x1_minus + p.tau * income_pv

        times: list[float] = []
        consumption: list[float] = []
        wealth: list[float] = []

        for i in range(n + 1):
            t = t_end if i == n else t_end * i / n
            times.append(t)

            if t < p.T1 - REGIME_SWITCH_EPS:
                # Фаза до налога
                c_t = A * math.exp(p.g * t)
                x_t = math.exp(p.r * t) * (x0 - A * p.annuity(t))
            else:
                # Фаза после налога
                dt = max(0.0, t - p.T1)
                c_t = B * math.exp(p.g * dt)
                x_t = math.exp(p.r * dt) * (x1_plus - B * p.annuity(dt))

            consumption.append(c_t)
            wealth.append(x_t - income_pv)
    except OverflowError as e:
        raise InvalidParameterError(
            f"Trajectory overflows for r={p.r}, g={p.g}, T1+T2={t_end}"
        ) from e

    return Trajectory(
        times=tuple(times),
        consumption=tuple(consumption),
        wealth=tuple(wealth),
        W_at_T1_minus=x1_minus - income_pv,
        W_at_T1_plus=x1_plus - income_pv,
        X0=x0,
        X_at_T1_minus=x1_minus,
        X_at_T1_plus=x1_plus,
    )
