"""Diagnostics — предупреждения и проверки ограничений модели

Предупреждения не прерывают вычисление, они возвращаются вызывающему коду
как список сообщений:

- Параметры: почти логарифмическая полезность (gamma ≈ 1 или eta ≈ 1),
  очень высокий tau, r == 0, r <= 0
- Траектория: нарушение borrowing floor (min W(t) < zeta) и
  недопустимость налога (W(T1-) < zeta / (1 - tau))
- Терминальное уравнение: LHS/RHS/невязка в найденном W_T
"""

from dataclasses import dataclass
from typing import Final

from src.core.domain.parameters import ParameterSet
from src.core.math.numerical_safeguards import EPS_FLOAT_COMPARE_ABS, safe_pow
from src.levy.terminal_solver import SolverResult
from src.levy.trajectory import Trajectory

# =============================================================================
# CONSTANTS
# =============================================================================

# |gamma - 1| или |eta - 1| ниже порога → почти логарифмическая полезность
LOG_UTILITY_PROXIMITY: Final[float] = 1e-3

# tau >= порога → допустимость налога под вопросом
HIGH_LEVY_RATE: Final[float] = 0.95


# =============================================================================
# PARAMETER WARNINGS
# =============================================================================


def parameter_warnings(p: ParameterSet) -> list[str]:
    """Предупреждения о численно неудобных значениях параметров."""
    warnings: list[str] = []

    if abs(p.gamma - 1) < LOG_UTILITY_PROXIMITY or abs(p.eta - 1) < LOG_UTILITY_PROXIMITY:
        warnings.append(
            "Near log-utility (gamma≈1 or eta≈1): numeric stability can improve "
            "with exact log formulas."
        )

    if p.tau >= HIGH_LEVY_RATE:
        warnings.append("tau is very high; feasibility near the levy may fail.")

    if p.r == 0:
        warnings.append("r=0: the y/r transform is undefined; please pick r>0.")

    if p.r <= 0:
        warnings.append("Nonpositive r reduces numerical robustness.")

    return warnings


# =============================================================================
# CONSTRAINT WARNINGS
# =============================================================================


def constraint_warnings(p: ParameterSet, trajectory: Trajectory) -> list[str]:
    """
    Проверка ограничений на найденной траектории.

    1. Borrowing floor: min W(t) >= zeta (с допуском EPS_FLOAT_COMPARE_ABS)
    2. Допустимость налога: W(T1-) >= zeta / (1 - tau)
    """
    warnings: list[str] = []

    min_wealth = trajectory.min_wealth
    if min_wealth < p.zeta - EPS_FLOAT_COMPARE_ABS:
        warnings.append(
            f"Borrowing floor violated: min W(t)={min_wealth} < zeta={p.zeta}."
        )

    keep = 1.0 - p.tau
    if keep > 0:
        levy_floor = p.zeta / keep
        if trajectory.W_at_T1_minus < levy_floor:
            warnings.append(
                f"Levy infeasible: W(T1-)={trajectory.W_at_T1_minus} "
                f"< zeta/(1-tau)={levy_floor}."
            )
    else:
        warnings.append(f"Levy infeasible: tau={p.tau} leaves no wealth after T1.")

    return warnings


# =============================================================================
# TERMINAL EQUATION REPORT
# =============================================================================


@dataclass(frozen=True)
class TerminalEquationReport:
    """Числа терминального уравнения в найденном W_T."""

    alpha: float
    rhs: float
    lhs: float  # WT + (K1 + K2) * WT^alpha
    residual: float  # lhs - rhs
    X0: float  # w0 + y/r
    P_T1: float
    P_T2: float


def terminal_equation_report(
    p: ParameterSet, solution: SolverResult
) -> TerminalEquationReport:
    """Отчёт по терминальному уравнению для показа вызывающим кодом.

    Требует r != 0 (гарантируется успешным solve_terminal_wealth).
    """
    lhs = solution.WT + (solution.K1 + solution.K2) * safe_pow(solution.WT, p.alpha)
    return TerminalEquationReport(
        alpha=p.alpha,
        rhs=solution.rhs,
        lhs=lhs,
        residual=lhs - solution.rhs,
        X0=p.w0 + p.y / p.r,
        P_T1=p.annuity(p.T1),
        P_T2=p.annuity(p.T2),
    )
