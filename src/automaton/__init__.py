"""Automaton — DFA торгового аппарата.

- Функция переходов δ(q, a) = min(max(Q), q + a) и допуск q >= цены
- Движок прогона с журналом переходов, выдачей и сбросом
- Отменяемая анимация перехода (busy flag)
- Проверки предусловий для слоя представления
"""

from src.core.exceptions import (
    AutomatonError,
    ConfigurationError,
    InvalidStateError,
    InvalidSymbolError,
)

from .delay import TransitionDelay
from .engine import OperationResult, VendingAutomaton
from .guards import (
    ActionAvailability,
    GuardResult,
    check_dispense,
    check_insert,
    check_reset,
    evaluate_actions,
)
from .transition import (
    FormalDefinition,
    TransitionTableEntry,
    describe,
    is_accepting,
    run_word,
    state_label,
    transition,
    transition_table,
)

__all__ = [
    # Engine
    "VendingAutomaton",
    "OperationResult",
    "TransitionDelay",
    # Pure functions
    "transition",
    "is_accepting",
    "run_word",
    "transition_table",
    "state_label",
    "describe",
    "TransitionTableEntry",
    "FormalDefinition",
    # Guards
    "GuardResult",
    "ActionAvailability",
    "check_insert",
    "check_dispense",
    "check_reset",
    "evaluate_actions",
    # Errors
    "AutomatonError",
    "InvalidSymbolError",
    "InvalidStateError",
    "ConfigurationError",
]
