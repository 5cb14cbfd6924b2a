"""
Тесты для Consumption Levels — A и B по W_T
"""

import math

import pytest

from src.core.domain import InvalidParameterError, derive_parameters
from src.levy.levels import ConsumptionLevels, compute_levels
from src.levy.terminal_solver import solve_terminal_wealth


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


class TestComputeLevels:
    """Значения A, B."""

    def test_formulas(self, params):
        wt = 470.0
        levels = compute_levels(wt, params)
        expected_b = math.sqrt(math.exp(-0.6) * math.exp(-1.0) * wt)
        expected_a = math.exp(-1.0) * (0.7 ** -0.5) * math.sqrt(wt)
        assert levels.B == pytest.approx(expected_b, rel=1e-12)
        assert levels.A == pytest.approx(expected_a, rel=1e-12)

    def test_reference_scenario(self, params):
        levels = compute_levels(solve_terminal_wealth(params).WT, params)
        assert isinstance(levels, ConsumptionLevels)
        assert levels.A == pytest.approx(9.5395, rel=1e-3)
        assert levels.B == pytest.approx(9.7485, rel=1e-3)

    def test_zero_terminal_wealth(self, params):
        """WT = 0 при eta > 0 → нулевое потребление."""
        levels = compute_levels(0.0, params)
        assert levels.A == 0.0
        assert levels.B == 0.0

    def test_no_levy_ratio(self, params):
        """tau = 0: B / A = exp(g * T1) — потребление непрерывно в T1."""
        p = params.with_tau(0.0)
        levels = compute_levels(300.0, p)
        assert levels.B / levels.A == pytest.approx(math.exp(p.g * p.T1), rel=1e-12)


class TestComputeLevelsErrors:
    """Недопустимые параметры."""

    @pytest.mark.parametrize("beta", [0.0, -2.0])
    def test_nonpositive_beta(self, raw_inputs, beta):
        p = derive_parameters({**raw_inputs, "beta": beta})
        with pytest.raises(InvalidParameterError, match="Beta"):
            compute_levels(100.0, p)

    def test_full_levy(self, params):
        with pytest.raises(InvalidParameterError, match="tau"):
            compute_levels(100.0, params.with_tau(1.0))

    def test_negative_terminal_wealth(self, params):
        with pytest.raises(InvalidParameterError, match="non-negative"):
            compute_levels(-1.0, params)

    def test_non_finite_terminal_wealth(self, params):
        with pytest.raises(ValueError, match="WT must be a finite number"):
            compute_levels(float("nan"), params)

    def test_overflow_is_parameter_error(self, raw_inputs):
        """rho = -40: exp(-rho * T1) = exp(800) вне диапазона float."""
        p = derive_parameters({**raw_inputs, "rho": -40.0})
        with pytest.raises(InvalidParameterError, match="overflow"):
            compute_levels(100.0, p)
