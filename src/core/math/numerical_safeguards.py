"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость вычислений модели:
- Проверка конечности значений (NaN/Inf не проходят во внутренние формулы)
- Epsilon-сравнения с нулём для структурных делителей (r, kappa)
- Безопасное возведение в степень для дробных показателей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Дробная степень отрицательного основания никогда не возвращает complex
2. Переполнение при возведении в степень даёт +inf, а не OverflowError
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для общих вычислений и сравнений с нулём
# Используется для проверки r != 0 и как толерантность решателя по умолчанию
EPS_CALC: Final[float] = 1e-10

# Epsilon для сравнения float (абсолютная толерантность)
# Используется в проверках ограничений траектории (borrowing floor)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-8


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_zero(value: float, tol: float = EPS_CALC) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Args:
        value: Проверяемое значение
        tol: Абсолютная толерантность (default: EPS_CALC)

    Returns:
        True если abs(value) < tol
    """
    return abs(value) < tol


# =============================================================================
# БЕЗОПАСНОЕ ВОЗВЕДЕНИЕ В СТЕПЕНЬ
# =============================================================================


def safe_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень для неотрицательного основания.

    Оператор ** в Python для отрицательного основания и дробного показателя
    возвращает complex, а для 0 ** (x < 0) бросает ZeroDivisionError.
    Здесь оба случая приводятся к вещественной семантике:

    - base < 0: ValueError (дробная степень не определена)
    - base == 0, exponent < 0: +inf
    - base == 0, exponent == 0: 1.0
    - переполнение: +inf

    Args:
        base: Основание (>= 0)
        exponent: Показатель степени

    Returns:
        base ** exponent как float

    Raises:
        ValueError: если base < 0 или аргументы содержат NaN

    Examples:
        >>> safe_pow(4.0, 0.5)
        2.0
        >>> safe_pow(0.0, -0.5)
        inf
        >>> safe_pow(0.0, 0.0)
        1.0
    """
    if math.isnan(base) or math.isnan(exponent):
        raise ValueError(f"safe_pow got NaN: base={base}, exponent={exponent}")

    if base < 0:
        raise ValueError(
            f"fractional power of a negative base is undefined: "
            f"base={base}, exponent={exponent}"
        )

    if base == 0.0:
        if exponent < 0:
            return math.inf
        if exponent == 0:
            return 1.0
        return 0.0

    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что значение конечное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a finite number, got {value}")

