"""
Contract Validation Module

Модуль для валидации JSON контрактов входных данных модели.
"""

from .validators import (
    ContractValidator,
    RawInputsValidator,
    SchemaLoader,
)

__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "RawInputsValidator",
]
