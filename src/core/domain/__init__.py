"""
Domain models and value objects.

Contains the vending automaton configuration, run snapshot models and cent units.
"""

from src.core.domain.automaton_config import DEFAULT_CONFIG, AutomatonConfig, load_config
from src.core.domain.run_state import Coin, RunState, TransitionRecord
from src.core.domain.units import (
    CENT_SYMBOL,
    ZERO_CENTS,
    change_cents,
    format_cents,
    remaining_cents,
    validate_cents,
)

__all__ = [
    # Units module
    "CENT_SYMBOL",
    "ZERO_CENTS",
    "validate_cents",
    "format_cents",
    "change_cents",
    "remaining_cents",
    # Config model
    "AutomatonConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Run models
    "Coin",
    "TransitionRecord",
    "RunState",
]
