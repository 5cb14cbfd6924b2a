"""Levy — стадии решения модели с разовым налогом на богатство.

Поток данных:
    ParameterSet → K1, K2 → W_T → A, B → траектория
    sweep_levy_rate повторяет цепочку по сетке tau
"""

from .coefficients import coefficient_k1, coefficient_k2
from .diagnostics import (
    TerminalEquationReport,
    constraint_warnings,
    parameter_warnings,
    terminal_equation_report,
)
from .levels import ConsumptionLevels, compute_levels
from .pipeline import ModelConfig, ModelSolution, solve_model
from .sweep import SweepConfig, SweepResult, sweep_levy_rate
from .terminal_solver import (
    SolverConfig,
    SolverResult,
    TerminalWealthSolver,
    solve_terminal_wealth,
    terminal_residual,
    terminal_rhs,
)
from .trajectory import Trajectory, generate_trajectory

__all__ = [
    # Coefficients
    "coefficient_k1",
    "coefficient_k2",
    # Terminal solver
    "SolverConfig",
    "SolverResult",
    "TerminalWealthSolver",
    "solve_terminal_wealth",
    "terminal_residual",
    "terminal_rhs",
    # Levels
    "ConsumptionLevels",
    "compute_levels",
    # Trajectory
    "Trajectory",
    "generate_trajectory",
    # Sweep
    "SweepConfig",
    "SweepResult",
    "sweep_levy_rate",
    # Diagnostics
    "TerminalEquationReport",
    "constraint_warnings",
    "parameter_warnings",
    "terminal_equation_report",
    # Pipeline
    "ModelConfig",
    "ModelSolution",
    "solve_model",
]
