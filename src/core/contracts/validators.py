"""
JSON Schema контракты автомата

Схемы поставляются вместе с пакетом (src/core/contracts/schema/) и
читаются через importlib.resources, поэтому работают и из wheel, и из
editable-установки.

Схемы:
- automaton_config.json (конфигурация автомата: Q, Σ, цена, анимация)
- run_state.json (снапшот прогона для слоя представления)

Каждая схема проходит meta-validation один раз; скомпилированный
Draft202012Validator кэшируется по имени схемы и разделяется всеми
вызывающими.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA RESOURCES
# =============================================================================

AUTOMATON_CONFIG = "automaton_config"
RUN_STATE = "run_state"

SCHEMA_NAMES = (AUTOMATON_CONFIG, RUN_STATE)


def schema_resource(schema_name: str):
    """Traversable файла схемы внутри пакета."""
    return resources.files(__package__).joinpath("schema", f"{schema_name}.json")


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка JSON Schema из ресурсов пакета.

    Args:
        schema_name: Имя схемы без расширения (например, 'run_state')

    Returns:
        Загруженная схема как dict (один и тот же объект при повторных вызовах)

    Raises:
        FileNotFoundError: Если схема не поставляется с пакетом
        ValueError: Если файл не является валидной JSON Schema
    """
    resource = schema_resource(schema_name)
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not found in package data: {schema_name}.json")

    schema = json.loads(resource.read_text(encoding="utf-8"))
    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

    return schema


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(load_schema(schema_name))


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class ContractValidator:
    """Проверка документа против одной из поставляемых схем."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.validator = _validator(schema_name)

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения в виде 'path: message', отсортированные по пути.

        Пустой список означает, что документ соответствует контракту.
        """
        messages = []
        for error in self.iter_errors(data):
            path = "/".join(str(part) for part in error.absolute_path) or "<root>"
            messages.append(f"{path}: {error.message}")
        return sorted(messages)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_automaton_config(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют automaton_config.json
    """
    ContractValidator(AUTOMATON_CONFIG).validate(data)


def validate_run_state(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют run_state.json
    """
    ContractValidator(RUN_STATE).validate(data)
