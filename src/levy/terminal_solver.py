"""Terminal Solver — решение терминального уравнения для W_T

Терминальное условие (баланс полезности наследства и бюджетного
ограничения) сводится к одномерному нелинейному уравнению:

    F(W) = W + (K1 + K2) * W^alpha - RHS = 0
    RHS  = R * (1-tau) * (w0 + y/r) + exp(r*T2) * tau * (y/r) - y/r

Алгоритм (детерминированный, один путь):
1. Bracket: lo = 0, hi = max(tolerance, RHS); F(0) == 0 → W_T = 0;
   пока нет F(lo) < 0 <= F(hi),
   удваиваем hi (не более max_bracket_tries раз) → иначе BracketingError
2. Bisection: не более max_bisection_iterations шагов, стоп при
   |F(mid)| < tolerance
3. Если бюджет итераций исчерпан — возвращается середина последнего
   интервала (приближённый корень, converged=False)

Для W < 0 функция F возвращает большой отрицательный sentinel, поэтому
отрицательный корень не может попасть в bracket.
"""

import logging
import math
from dataclasses import dataclass
from typing import Final

from src.core.domain.errors import BracketingError, InvalidParameterError
from src.core.domain.parameters import ParameterSet
from src.core.math.numerical_safeguards import EPS_CALC, is_zero, safe_pow
from src.levy.coefficients import coefficient_k1, coefficient_k2, require_finite

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Значение F(W) для W < 0
LARGE_NEGATIVE: Final[float] = -1e99

MAX_BISECTION_ITERATIONS: Final[int] = 80
MAX_BRACKET_TRIES: Final[int] = 40


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация решателя.

    Бюджеты итераций ограничивают время решения: не более
    max_bracket_tries + max_bisection_iterations + 2 вычислений F.
    """

    tolerance: float = EPS_CALC
    max_bisection_iterations: int = MAX_BISECTION_ITERATIONS
    max_bracket_tries: int = MAX_BRACKET_TRIES
    negative_sentinel: float = LARGE_NEGATIVE


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SolverResult:
    """Результат решения терминального уравнения."""

    WT: float  # Терминальное богатство (>= 0)
    K1: float
    K2: float

    # Диагностика
    rhs: float  # Правая часть уравнения
    residual: float  # F(WT)
    iterations: int  # Шаги bisection
    bracket_expansions: int  # Удвоения hi
    converged: bool  # False → приближённый корень (бюджет исчерпан)


# =============================================================================
# TERMINAL EQUATION
# =============================================================================


def terminal_rhs(p: ParameterSet) -> float:
    """
    Правая часть терминального уравнения с потоком дохода.

    Raises:
        InvalidParameterError: если r == 0 (преобразование y/r не определено)
            или RHS выходит за диапазон float
    """
    if is_zero(p.r):
        raise InvalidParameterError(
            f"Interest rate r must be non-zero for y/r transform, got {p.r}"
        )

    income_pv = p.y / p.r
    x0 = p.w0 + income_pv
    try:
        rhs = p.R * (1.0 - p.tau) * x0 + math.exp(p.r * p.T2) * p.tau * income_pv - income_pv
    except OverflowError as e:
        raise InvalidParameterError(
            f"RHS overflows for r={p.r}, T1+T2={p.T}"
        ) from e
    return require_finite(rhs, "RHS")


def terminal_residual(
    W: float,
    p: ParameterSet,
    k1: float,
    k2: float,
    rhs: float,
    negative_sentinel: float = LARGE_NEGATIVE,
) -> float:
    """
    F(W) = W + (K1 + K2) * W^alpha - RHS.

    Для W < 0 возвращает negative_sentinel. W = 0 при alpha < 0 и
    переполнение степени дают +inf в степенном члене.
    """
    if W < 0:
        return negative_sentinel
    return W + (k1 + k2) * safe_pow(W, p.alpha) - rhs


# =============================================================================
# SOLVER
# =============================================================================


class TerminalWealthSolver:
    """Bracket-and-bisect решатель для W_T.

    Порядок:
    1. K1, K2, RHS (ошибки параметров — InvalidParameterError)
    2. Поиск bracket с удвоением hi
    3. Bisection до толерантности или исчерпания бюджета
    """

    def __init__(self, config: SolverConfig | None = None):
        """
        Args:
            config: конфигурация решателя (опционально, используется default)
        """
        self.config = config or SolverConfig()

    def solve(self, p: ParameterSet) -> SolverResult:
        """Решение F(W) = 0 для набора параметров p.

        Raises:
            InvalidParameterError: beta <= 0, tau > 1 или r == 0
            BracketingError: смена знака не найдена за max_bracket_tries
        """
        cfg = self.config
        k1 = coefficient_k1(p)
        k2 = coefficient_k2(p)
        rhs = terminal_rhs(p)

        def f(W: float) -> float:
            return terminal_residual(W, p, k1, k2, rhs, cfg.negative_sentinel)

        # 1. Bracket
        lo = 0.0
        hi = max(cfg.tolerance, rhs)
        f_lo = f(lo)
        f_hi = f(hi)

        # RHS == 0 при alpha > 0: корень W = 0
        if f_lo == 0:
            return self._result(lo, k1, k2, rhs, f_lo, 0, 0, True)

        expansions = 0
        while not (f_lo < 0 <= f_hi) and expansions < cfg.max_bracket_tries:
            hi *= 2.0
            f_hi = f(hi)
            expansions += 1

        if not (f_lo < 0 <= f_hi):
            raise BracketingError(
                f"Failed to bracket W_T solution: F(0)={f_lo}, "
                f"F({hi})={f_hi} after {expansions} expansions"
            )

        if f_hi == 0:
            return self._result(hi, k1, k2, rhs, f_hi, 0, expansions, True)

        # 2. Bisection
        for iteration in range(1, cfg.max_bisection_iterations + 1):
            mid = 0.5 * (lo + hi)
            f_mid = f(mid)

            if abs(f_mid) < cfg.tolerance:
                return self._result(mid, k1, k2, rhs, f_mid, iteration, expansions, True)

            if f_mid > 0:
                hi = mid
            else:
                lo = mid

        # 3. Бюджет исчерпан: середина последнего интервала
        mid = 0.5 * (lo + hi)
        f_mid = f(mid)
        logger.warning(
            "W_T bisection did not reach tolerance %s in %d iterations; "
            "returning approximate root %s (residual %s)",
            cfg.tolerance,
            cfg.max_bisection_iterations,
            mid,
            f_mid,
        )
        return self._result(
            mid, k1, k2, rhs, f_mid, cfg.max_bisection_iterations, expansions, False
        )

    @staticmethod
    def _result(
        wt: float,
        k1: float,
        k2: float,
        rhs: float,
        residual: float,
        iterations: int,
        expansions: int,
        converged: bool,
    ) -> SolverResult:
        return SolverResult(
            WT=wt,
            K1=k1,
            K2=k2,
            rhs=rhs,
            residual=residual,
            iterations=iterations,
            bracket_expansions=expansions,
            converged=converged,
        )


def solve_terminal_wealth(
    p: ParameterSet, config: SolverConfig | None = None
) -> SolverResult:
    """
    Терминальное богатство W_T для набора параметров.

    Args:
        p: Набор параметров
        config: Конфигурация решателя (опционально)

    Returns:
        SolverResult с WT >= 0, K1, K2

    Raises:
        InvalidParameterError: beta <= 0, tau > 1 или r == 0
        BracketingError: смена знака не найдена
    """
    return TerminalWealthSolver(config).solve(p)
