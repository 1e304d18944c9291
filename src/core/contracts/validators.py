"""
JSON Schema Contract Validators

Модуль для валидации JSON конфигурации decay согласно формальному
JSON Schema контракту. Использует библиотеку jsonschema для проверки
соответствия данных схеме.

Схемы:
- dutch_block_decay_config.json (конфигурация блочного decay одного ордера)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.decay_curve import DutchBlockDecayConfig


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта — 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'dutch_block_decay_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

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

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class DutchBlockDecayConfigValidator(ContractValidator):
    """Валидатор для dutch_block_decay_config контракта."""

    def __init__(self):
        super().__init__("dutch_block_decay_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_dutch_block_decay_config(data: Dict[str, Any]) -> None:
    """
    Валидация JSON конфигурации decay.

    Args:
        data: Данные для валидации (camelCase поля)

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DutchBlockDecayConfigValidator().validate(data)


def parse_dutch_block_decay_config(data: Dict[str, Any]) -> DutchBlockDecayConfig:
    """
    Валидация JSON конфигурации и построение DutchBlockDecayConfig.

    Строковые суммы приводятся к int моделью.

    Args:
        data: JSON конфигурация (camelCase поля)

    Returns:
        Immutable DutchBlockDecayConfig

    Raises:
        ValidationError (jsonschema): Если данные не соответствуют схеме
        ValidationError (pydantic): Если значения вне диапазона uint256/int256
        InvalidDecayCurve: Если длины relativeBlocks и relativeAmounts различаются
    """
    validate_dutch_block_decay_config(data)
    config = DutchBlockDecayConfig.model_validate(data)
    # Форма кривой проверяется при построении DecayCurve
    _ = config.curve
    return config
