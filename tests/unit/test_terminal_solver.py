"""
Тесты для Terminal Solver — W_T из терминального уравнения

Проверяемые инварианты:
1. WT >= 0 и |F(WT)| в пределах толерантности при успешном bracket
2. r == 0 → InvalidParameterError
3. Нет смены знака → BracketingError
4. Исчерпание бюджета итераций → середина интервала, converged=False
5. Детерминизм
"""

import math

import pytest

from src.core.domain import (
    BracketingError,
    InvalidParameterError,
    LevyModelError,
    derive_parameters,
)
from src.levy.coefficients import coefficient_k1, coefficient_k2
from src.levy.terminal_solver import (
    LARGE_NEGATIVE,
    MAX_BISECTION_ITERATIONS,
    MAX_BRACKET_TRIES,
    SolverConfig,
    TerminalWealthSolver,
    solve_terminal_wealth,
    terminal_residual,
    terminal_rhs,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def raw_inputs():
    return {
        "r": 0.05,
        "rho": 0.03,
        "gamma": 2.0,
        "eta": 1.0,
        "T1": 20.0,
        "T2": 20.0,
        "beta": 1.0,
        "w0": 100.0,
        "y": 10.0,
        "zeta": -50.0,
        "tau": 0.3,
    }


@pytest.fixture
def params(raw_inputs):
    return derive_parameters(raw_inputs)


# =============================================================================
# ТЕСТЫ: терминальное уравнение
# =============================================================================


class TestTerminalEquation:
    """RHS и F(W)."""

    def test_rhs_formula(self, params):
        expected = (
            math.exp(2.0) * 0.7 * (100.0 + 200.0)
            + math.exp(1.0) * 0.3 * 200.0
            - 200.0
        )
        assert terminal_rhs(params) == pytest.approx(expected, rel=1e-12)

    def test_rhs_requires_nonzero_r(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "r": 0.0})
        with pytest.raises(InvalidParameterError, match="non-zero"):
            terminal_rhs(p)

    def test_residual_negative_sentinel(self, params):
        assert terminal_residual(-1.0, params, 1.0, 1.0, 10.0) == LARGE_NEGATIVE
        assert terminal_residual(-1e-300, params, 1.0, 1.0, 10.0) == LARGE_NEGATIVE

    def test_residual_value(self, params):
        # alpha = 0.5: 100 + (2 + 3) * 10 - 120
        assert terminal_residual(100.0, params, 2.0, 3.0, 120.0) == pytest.approx(30.0)

    def test_residual_at_zero(self, params):
        assert terminal_residual(0.0, params, 2.0, 3.0, 120.0) == -120.0

    def test_residual_at_zero_negative_alpha(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "eta": -1.0})
        assert terminal_residual(0.0, p, 2.0, 3.0, 120.0) == math.inf


# =============================================================================
# ТЕСТЫ: решение
# =============================================================================


class TestSolveTerminalWealth:
    """Основной сценарий."""

    def test_reference_scenario(self, params):
        result = solve_terminal_wealth(params)
        assert math.isfinite(result.WT)
        assert result.WT >= 0
        assert result.WT == pytest.approx(470.707, abs=0.05)
        assert result.converged
        assert result.iterations <= MAX_BISECTION_ITERATIONS
        assert result.bracket_expansions <= MAX_BRACKET_TRIES

    def test_reports_coefficients(self, params):
        result = solve_terminal_wealth(params)
        assert result.K1 == coefficient_k1(params)
        assert result.K2 == coefficient_k2(params)
        assert result.rhs == terminal_rhs(params)

    def test_residual_within_tolerance(self, params):
        result = solve_terminal_wealth(params)
        residual = terminal_residual(result.WT, params, result.K1, result.K2, result.rhs)
        assert abs(residual) < SolverConfig().tolerance
        assert residual == result.residual

    def test_closed_form_for_alpha_half(self, params):
        """alpha = 0.5: W + K*sqrt(W) = RHS решается как квадратное уравнение."""
        result = solve_terminal_wealth(params)
        k = result.K1 + result.K2
        s = (-k + math.sqrt(k * k + 4.0 * result.rhs)) / 2.0
        assert result.WT == pytest.approx(s * s, rel=1e-10)

    def test_zero_rhs_root_at_origin(self, raw_inputs):
        """w0 = y = 0 → RHS = 0, F(0) = 0 при alpha > 0: W_T = 0."""
        p = derive_parameters({**raw_inputs, "w0": 0.0, "y": 0.0})
        assert terminal_rhs(p) == 0.0
        result = solve_terminal_wealth(p)
        assert result.WT == 0.0
        assert result.residual == 0.0
        assert result.converged
        assert result.iterations == 0

    def test_deterministic(self, params):
        assert solve_terminal_wealth(params) == solve_terminal_wealth(params)

    def test_class_and_function_agree(self, params):
        assert TerminalWealthSolver().solve(params) == solve_terminal_wealth(params)

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"gamma": 0.5},
            {"gamma": 5.0},
            {"gamma": 1.0},
            {"eta": 0.5},
            {"eta": 1.5, "gamma": 3.0},
            {"rho": -0.05},  # kappa = 0
            {"r": 0.02, "rho": 0.04},
            {"tau": 0.0},
            {"tau": 0.8},
            {"beta": 0.2},
            {"y": 0.0},
            {"T1": 5.0, "T2": 35.0},
        ],
    )
    def test_nonnegative_root(self, raw_inputs, overrides):
        """WT >= 0 и малая невязка для набора валидных параметров с r > 0."""
        p = derive_parameters({**raw_inputs, **overrides})
        result = solve_terminal_wealth(p)
        assert result.WT >= 0
        assert math.isfinite(result.WT)
        assert abs(result.residual) < 1e-9 * max(1.0, abs(result.rhs))


# =============================================================================
# ТЕСТЫ: ошибки
# =============================================================================


class TestSolverErrors:
    """Ошибки решателя."""

    def test_zero_r(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "r": 0.0})
        with pytest.raises(InvalidParameterError):
            solve_terminal_wealth(p)

    def test_nonpositive_beta(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "beta": -1.0})
        with pytest.raises(InvalidParameterError):
            solve_terminal_wealth(p)

    def test_negative_rhs_cannot_be_bracketed(self, raw_inputs):
        """RHS < 0 → F(0) > 0, смены знака на [0, inf) нет."""
        p = derive_parameters({**raw_inputs, "w0": -500.0})
        assert terminal_rhs(p) < 0
        with pytest.raises(BracketingError, match="Failed to bracket"):
            solve_terminal_wealth(p)

    def test_negative_alpha_cannot_be_bracketed(self, raw_inputs):
        """alpha < 0 → F(0) = +inf."""
        p = derive_parameters({**raw_inputs, "eta": -1.0})
        with pytest.raises(BracketingError):
            solve_terminal_wealth(p)

    def test_bracketing_error_is_model_error(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "w0": -500.0})
        with pytest.raises(LevyModelError):
            solve_terminal_wealth(p)

    def test_large_r_overflow_is_parameter_error(self, raw_inputs):
        """r = 20: exp(r * (T1+T2)) = exp(800) вне диапазона float."""
        p = derive_parameters({**raw_inputs, "r": 20.0})
        with pytest.raises(InvalidParameterError, match="overflows"):
            solve_terminal_wealth(p)

    def test_overflow_error_is_model_error(self, raw_inputs):
        p = derive_parameters({**raw_inputs, "r": 20.0})
        with pytest.raises(LevyModelError):
            terminal_rhs(p)

    def test_zero_expansion_budget(self, raw_inputs):
        """hi0 = RHS уже даёт bracket для базового сценария."""
        p = derive_parameters(raw_inputs)
        result = solve_terminal_wealth(p, SolverConfig(max_bracket_tries=0))
        assert result.bracket_expansions == 0


# =============================================================================
# ТЕСТЫ: бюджет итераций
# =============================================================================


class TestIterationBudget:
    """Исчерпание бюджета bisection."""

    def test_budget_exhausted_returns_midpoint(self, params):
        config = SolverConfig(tolerance=1e-300, max_bisection_iterations=5)
        result = solve_terminal_wealth(params, config)
        assert result.converged is False
        assert result.iterations == 5
        assert result.WT >= 0

        # После 5 шагов ширина интервала RHS / 2^5
        exact = solve_terminal_wealth(params).WT
        assert abs(result.WT - exact) <= result.rhs / 2**5

    def test_budget_exhausted_logs_warning(self, params, caplog):
        config = SolverConfig(tolerance=1e-300, max_bisection_iterations=3)
        with caplog.at_level("WARNING", logger="src.levy.terminal_solver"):
            solve_terminal_wealth(params, config)
        assert "did not reach tolerance" in caplog.text
