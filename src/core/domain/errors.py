"""
Errors — таксономия ошибок модели

Все ошибки синхронные и фатальны только для одного вычисления.
Общего изменяемого состояния нет, поэтому ошибка не может его испортить.
Сообщения предназначены для показа пользователю без изменений.

- ValidationError: отсутствующий/нечисловой/не конечный вход,
  либо структурно недопустимый параметр (gamma == 0)
- InvalidParameterError: beta <= 0 (дробная степень не определена),
  r == 0 (преобразование X = W + y/r не определено), tau >= 1
- BracketingError: смена знака F(W) не найдена за бюджет расширений
"""


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LevyModelError(Exception):
    """Базовый класс всех ошибок модели."""
    pass


class ValidationError(LevyModelError, ValueError):
    """
    Невалидные сырые входы.

    Возникает при построении ParameterSet: отсутствует ключ, значение не
    число, NaN/Inf, либо gamma == 0 (деление в alpha/g/kappa).
    """
    pass


class InvalidParameterError(LevyModelError, ValueError):
    """
    Параметр делает формулу модели неопределённой.

    beta <= 0 или 1 - tau < 0: дробная степень неположительного основания.
    r == 0: деление на r в преобразовании дохода y/r.
    """
    pass


class BracketingError(LevyModelError, ArithmeticError):
    """
    Не найден интервал со сменой знака F(W).

    Сигнализирует о недопустимой или патологической области параметров,
    а не об ошибке в коде. Повтор имеет смысл только после изменения входов.
    """
    pass
