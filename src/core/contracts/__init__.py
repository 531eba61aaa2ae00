"""
Contract Validation Module

Модуль для валидации JSON контрактов автомата (конфигурация и снапшот прогона).
"""

from .validators import (
    AUTOMATON_CONFIG,
    RUN_STATE,
    SCHEMA_NAMES,
    ContractValidator,
    load_schema,
    schema_resource,
    validate_automaton_config,
    validate_run_state,
)

__all__ = [
    # Schema names
    "AUTOMATON_CONFIG",
    "RUN_STATE",
    "SCHEMA_NAMES",
    # Loading
    "load_schema",
    "schema_resource",
    # Validation
    "ContractValidator",
    "validate_automaton_config",
    "validate_run_state",
]
