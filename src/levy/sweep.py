"""Levy Rate Sweep — сравнительная статика по ставке налога tau

Для равномерной сетки tau_i = max_tau * i / steps, i = 0..steps, модель
решается заново (K → W_T → A, B → траектория), собираются
W(T1-), W(T1+) и W_T.

Каждая точка строит собственный ParameterSet через p.with_tau(): исходный
набор параметров вызывающего кода не изменяется ни при успехе, ни при
ошибке. Ошибка в одной точке не прерывает sweep: точка пропускается и
записывается в skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import Final

from src.core.domain.errors import LevyModelError
from src.core.domain.parameters import ParameterSet
from src.levy.levels import compute_levels
from src.levy.terminal_solver import SolverConfig, solve_terminal_wealth
from src.levy.trajectory import generate_trajectory

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_SWEEP_STEPS: Final[int] = 8
DEFAULT_MAX_TAU: Final[float] = 0.8


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SweepConfig:
    """Конфигурация sweep.

    trajectory_points — разрешение траектории в каждой точке (нужны только
    W(T1-) и W(T1+), поэтому сетка грубее основной).
    """

    trajectory_points: int = 200
    solver: SolverConfig = field(default_factory=SolverConfig)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SweepResult:
    """Результат sweep: выровненные по индексу последовательности."""

    tau_values: tuple[float, ...]
    W_T1_minus: tuple[float, ...]
    W_T1_plus: tuple[float, ...]
    W_T: tuple[float, ...]

    # Пропущенные точки: (tau, сообщение об ошибке)
    skipped: tuple[tuple[float, str], ...] = ()


# =============================================================================
# SWEEP
# =============================================================================


def sweep_levy_rate(
    p: ParameterSet,
    steps: int = DEFAULT_SWEEP_STEPS,
    max_tau: float = DEFAULT_MAX_TAU,
    config: SweepConfig | None = None,
) -> SweepResult:
    """
    Sweep модели по ставке налога на [0, max_tau].

    Args:
        p: Базовый набор параметров (tau в нём игнорируется)
        steps: Число интервалов сетки (точек steps + 1)
        max_tau: Верхняя граница tau, 0 <= max_tau < 1
        config: Конфигурация sweep (опционально)

    Returns:
        SweepResult; точки с ошибкой опущены

    Raises:
        ValueError: если steps < 1 или max_tau вне [0, 1)
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    if not 0.0 <= max_tau < 1.0:
        raise ValueError(f"max_tau must be in [0, 1), got {max_tau}")

    cfg = config or SweepConfig()

    taus: list[float] = []
    w1_minus: list[float] = []
    w1_plus: list[float] = []
    wt_values: list[float] = []
    skipped: list[tuple[float, str]] = []

    for i in range(steps + 1):
        tau = max_tau * i / steps

        try:
            point = p.with_tau(tau)
            solution = solve_terminal_wealth(point, cfg.solver)
            levels = compute_levels(solution.WT, point)
            traj = generate_trajectory(
                point, solution.WT, levels.A, levels.B, cfg.trajectory_points
            )
        except (LevyModelError, ArithmeticError, ValueError) as e:
            logger.warning("Tau sweep failed at tau=%s: %s", tau, e)
            skipped.append((tau, str(e)))
            continue

        taus.append(tau)
        w1_minus.append(traj.W_at_T1_minus)
        w1_plus.append(traj.W_at_T1_plus)
        wt_values.append(solution.WT)

    return SweepResult(
        tau_values=tuple(taus),
        W_T1_minus=tuple(w1_minus),
        W_T1_plus=tuple(w1_plus),
        W_T=tuple(wt_values),
        skipped=tuple(skipped),
    )
