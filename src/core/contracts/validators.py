"""
JSON Schema Contract Validators

Модуль для валидации входных данных модели согласно JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- raw_inputs.json (плоский словарь именованных числовых входов)
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем (схемы неизменяемы, кэш безопасен)
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'raw_inputs')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Args:
            data: Данные для валидации

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def error_messages(self, data: Mapping[str, Any]) -> list[str]:
        """
        Все ошибки валидации в виде читаемых сообщений.

        Ошибки отсортированы по пути в документе, чтобы порядок был
        детерминирован.

        Args:
            data: Данные для проверки

        Returns:
            Список сообщений (пустой, если данные валидны)
        """
        errors = sorted(
            self.validator.iter_errors(data),
            key=lambda e: [str(part) for part in e.absolute_path],
        )
        messages = []
        for error in errors:
            location = "/".join(str(part) for part in error.absolute_path)
            if location:
                messages.append(f"{location}: {error.message}")
            else:
                messages.append(error.message)
        return messages


class RawInputsValidator(ContractValidator):
    """Валидатор для raw_inputs контракта."""

    def __init__(self):
        super().__init__("raw_inputs")

