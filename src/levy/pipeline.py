"""Pipeline — полный расчёт модели по сырым входам

Порядок стадий:
1. derive_parameters (ValidationError)
2. parameter_warnings
3. Проверка r > 0 (преобразование X = W + y/r используется только при r > 0)
4. solve_terminal_wealth → compute_levels → generate_trajectory
5. constraint_warnings
6. sweep_levy_rate (отключается при sweep_steps == 0)

Отрисовка, форматирование и debounce пересчёта — ответственность
вызывающего кода.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from src.core.domain.errors import InvalidParameterError
from src.core.domain.parameters import ParameterSet, derive_parameters
from src.levy.diagnostics import (
    TerminalEquationReport,
    constraint_warnings,
    parameter_warnings,
    terminal_equation_report,
)
from src.levy.levels import ConsumptionLevels, compute_levels
from src.levy.sweep import DEFAULT_MAX_TAU, SweepConfig, SweepResult, sweep_levy_rate
from src.levy.terminal_solver import SolverConfig, SolverResult, solve_terminal_wealth
from src.levy.trajectory import Trajectory, generate_trajectory

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ModelConfig:
    """Конфигурация полного расчёта."""

    trajectory_points: int = 600
    sweep_steps: int = 140  # 0 → sweep не выполняется
    max_tau: float = DEFAULT_MAX_TAU
    solver: SolverConfig = field(default_factory=SolverConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)  # solver берётся из ModelConfig.solver


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ModelSolution:
    """Результат полного расчёта."""

    params: ParameterSet
    solution: SolverResult
    levels: ConsumptionLevels
    trajectory: Trajectory
    sweep: SweepResult | None
    equation: TerminalEquationReport
    warnings: tuple[str, ...]


# =============================================================================
# PIPELINE
# =============================================================================


def solve_model(
    raw_inputs: Mapping[str, Any], config: ModelConfig | None = None
) -> ModelSolution:
    """
    Полный расчёт: параметры → W_T → A, B → траектория → sweep.

    Args:
        raw_inputs: Плоский словарь именованных числовых входов
        config: Конфигурация расчёта (опционально)

    Returns:
        ModelSolution

    Raises:
        ValidationError: невалидные сырые входы
        InvalidParameterError: r <= 0, beta <= 0, tau > 1 или переполнение exp
        BracketingError: W_T не удалось заключить в интервал
    """
    cfg = config or ModelConfig()

    params = derive_parameters(raw_inputs)
    warnings = parameter_warnings(params)

    if params.r <= 0:
        raise InvalidParameterError(
            f"This model requires r>0 to use the X=W+y/r transform cleanly, got r={params.r}"
        )

    solution = solve_terminal_wealth(params, cfg.solver)
    levels = compute_levels(solution.WT, params)
    trajectory = generate_trajectory(
        params, solution.WT, levels.A, levels.B, cfg.trajectory_points
    )
    warnings.extend(constraint_warnings(params, trajectory))

    sweep = None
    if cfg.sweep_steps > 0:
        sweep_config = replace(cfg.sweep, solver=cfg.solver)
        sweep = sweep_levy_rate(params, cfg.sweep_steps, cfg.max_tau, sweep_config)

    logger.info(
        "Model solved: WT=%s A=%s B=%s warnings=%d",
        solution.WT,
        levels.A,
        levels.B,
        len(warnings),
    )

    return ModelSolution(
        params=params,
        solution=solution,
        levels=levels,
        trajectory=trajectory,
        sweep=sweep,
        equation=terminal_equation_report(params, solution),
        warnings=tuple(warnings),
    )
