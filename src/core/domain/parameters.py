"""
ParameterSet — Модель параметров задачи потребления с налогом на богатство

Immutable Pydantic модель: 11 сырых экономических входов и производные
величины, которые используют все стадии решения.

Производные величины:
    T     = T1 + T2
    alpha = eta / gamma
    g     = (r - rho) / gamma
    kappa = (rho + (gamma - 1) * r) / gamma
    R     = exp(r * T)
    P(H)  = annuity_factor(kappa, H)

Ограничения r != 0 и beta > 0 здесь не проверяются: их проверяют стадии,
где соответствующие формулы становятся неопределёнными
(InvalidParameterError), чтобы набор с r = 0 можно было построить.
"""

import logging
import math
from typing import Any, Final, Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import RawInputsValidator
from src.core.domain.errors import InvalidParameterError, ValidationError
from src.core.math.annuity import annuity_factor

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Порядок сырых входов (совпадает с raw_inputs.json)
RAW_INPUT_NAMES: Final[tuple[str, ...]] = (
    "r",
    "rho",
    "gamma",
    "eta",
    "T1",
    "T2",
    "beta",
    "w0",
    "y",
    "zeta",
    "tau",
)


# =============================================================================
# PARAMETER SET MODEL
# =============================================================================


class ParameterSet(BaseModel):
    """
    Полный набор параметров модели.

    Immutable модель (frozen=True). NaN/Inf отвергаются на уровне полей,
    gamma == 0 отвергается валидатором.
    """

    r: float = Field(..., allow_inf_nan=False, description="Безрисковая ставка")
    rho: float = Field(..., allow_inf_nan=False, description="Субъективная ставка дисконтирования")
    gamma: float = Field(..., allow_inf_nan=False, description="CRRA коэффициент (потребление)")
    eta: float = Field(..., allow_inf_nan=False, description="Кривизна полезности наследства")
    T1: float = Field(..., allow_inf_nan=False, description="Момент налога (годы)")
    T2: float = Field(..., allow_inf_nan=False, description="Длительность после налога (годы)")
    beta: float = Field(..., allow_inf_nan=False, description="Вес полезности наследства")
    w0: float = Field(..., allow_inf_nan=False, description="Начальное богатство")
    y: float = Field(..., allow_inf_nan=False, description="Постоянный поток дохода")
    zeta: float = Field(..., allow_inf_nan=False, description="Нижняя граница богатства (borrowing floor)")
    tau: float = Field(..., allow_inf_nan=False, description="Ставка разового налога на богатство в T1")

    model_config = {"frozen": True}

    @field_validator("gamma")
    @classmethod
    def validate_gamma_nonzero(cls, v: float) -> float:
        """gamma входит в знаменатель alpha, g и kappa."""
        if v == 0:
            raise ValueError("gamma must be non-zero (divides alpha, g and kappa)")
        return v

    # -------------------------------------------------------------------------
    # Производные величины
    # -------------------------------------------------------------------------

    @property
    def T(self) -> float:
        """Полный горизонт T1 + T2."""
        return self.T1 + self.T2

    @property
    def alpha(self) -> float:
        """Показатель степени в терминальном уравнении: eta / gamma."""
        return self.eta / self.gamma

    @property
    def g(self) -> float:
        """Темп роста потребления: (r - rho) / gamma."""
        return (self.r - self.rho) / self.gamma

    @property
    def kappa(self) -> float:
        """Эффективная ставка аннуитета: (rho + (gamma - 1) * r) / gamma."""
        return (self.rho + (self.gamma - 1) * self.r) / self.gamma

    @property
    def R(self) -> float:
        """Фактор накопления exp(r * T).

        Raises:
            InvalidParameterError: если exp(r * T) выходит за диапазон float
        """
        try:
            return math.exp(self.r * self.T)
        except OverflowError as e:
            raise InvalidParameterError(
                f"Growth factor R = exp(r*T) overflows for r={self.r}, T={self.T}"
            ) from e

    def annuity(self, horizon: float) -> float:
        """P(H) для kappa этого набора."""
        return annuity_factor(self.kappa, horizon)

    def with_tau(self, tau: float) -> "ParameterSet":
        """
        Новый набор параметров с заменённой ставкой налога.

        Исходный объект не изменяется. Новый объект проходит полную
        валидацию.

        Raises:
            ValidationError: если tau не конечное число
        """
        return _build_parameter_set({**self.model_dump(), "tau": tau})


# =============================================================================
# DERIVATION
# =============================================================================


def _build_parameter_set(values: Mapping[str, Any]) -> ParameterSet:
    try:
        return ParameterSet(**{name: values[name] for name in RAW_INPUT_NAMES})
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"Invalid numeric value for {location}: {first['msg']}") from e


def derive_parameters(raw_inputs: Mapping[str, Any]) -> ParameterSet:
    """
    Построение ParameterSet из плоского словаря сырых входов.

    Порядок проверок:
    1. Контракт raw_inputs.json (все 11 ключей, числовые значения)
    2. Pydantic валидация (конечность, gamma != 0)

    Args:
        raw_inputs: Словарь {имя: число}; лишние ключи игнорируются

    Returns:
        ParameterSet

    Raises:
        ValidationError: при нарушении контракта или невалидном значении
    """
    messages = RawInputsValidator().error_messages(raw_inputs)
    if messages:
        raise ValidationError(f"Invalid raw inputs: {'; '.join(messages)}")

    params = _build_parameter_set(raw_inputs)
    logger.debug(
        "Derived parameters: g=%s kappa=%s alpha=%s T=%s",
        params.g,
        params.kappa,
        params.alpha,
        params.T,
    )
    return params
