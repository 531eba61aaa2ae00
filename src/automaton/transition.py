"""Функция переходов DFA торгового аппарата.

M = (Q, Σ, δ, q0, F):
- Q: лестница накопленных сумм из AutomatonConfig.states
- Σ: номиналы монет из AutomatonConfig.coins
- δ(q, a) = min(max(Q), q + a), монотонная и насыщающая
- q0 = 0
- F = {max(Q)}: верхнее состояние поглощающее и единственное допускающее

Все функции модуля чистые: без состояния, без побочных эффектов.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from src.core.domain.automaton_config import AutomatonConfig
from src.core.domain.run_state import Coin
from src.core.domain.units import format_cents
from src.core.exceptions import InvalidStateError, InvalidSymbolError


CoinLike = Union[Coin, int]


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class TransitionTableEntry:
    """Одна клетка таблицы δ(q, a) = q'."""

    source: int
    coin: int
    target: int

    source_label: str
    target_label: str

    def __str__(self) -> str:
        return f"δ({self.source_label}, {format_cents(self.coin)}) = {self.target_label}"


@dataclass(frozen=True)
class FormalDefinition:
    """Формальное описание M = (Q, Σ, δ, q0, F) для отображения."""

    states: Tuple[str, ...]
    alphabet: Tuple[str, ...]
    initial: str
    accepting: Tuple[str, ...]
    price: str

    # Таблица δ без строк из поглощающего состояния
    table: Tuple[TransitionTableEntry, ...]

    def __str__(self) -> str:
        return "\n".join([
            "M = (Q, Σ, δ, q0, F)",
            f"Q = {{{', '.join(self.states)}}}",
            f"Σ = {{{', '.join(self.alphabet)}}}",
            f"q0 = {self.initial}",
            f"F = {{{', '.join(self.accepting)}}} (≥{self.price})",
        ])


# =============================================================================
# SYMBOL / STATE CHECKS
# =============================================================================


def coin_value(config: AutomatonConfig, coin: CoinLike) -> int:
    """
    Номинал монеты с проверкой принадлежности алфавиту.

    Raises:
        InvalidSymbolError: Если монета не из Σ (bool и не-int тоже отклоняются)
    """
    value = coin.value if isinstance(coin, Coin) else coin
    if isinstance(value, bool) or not isinstance(value, int) or value not in config.coins:
        raise InvalidSymbolError(coin, config.coins)
    return value


def check_state(config: AutomatonConfig, state: int) -> int:
    """
    Raises:
        InvalidStateError: Если состояние не из Q
    """
    if isinstance(state, bool) or not isinstance(state, int) or state not in config.states:
        raise InvalidStateError(state, config.states)
    return state


# =============================================================================
# CORE FUNCTIONS
# =============================================================================


def transition(config: AutomatonConfig, state: int, coin: CoinLike) -> int:
    """δ(q, a) = min(max(Q), q + a).

    Тотальна на Q × Σ; аргументы вне Q или Σ считаются ошибкой программирования.
    """
    check_state(config, state)
    value = coin_value(config, coin)
    return min(config.max_level, state + value)


def is_accepting(config: AutomatonConfig, state: int) -> bool:
    """q ∈ F ⇔ q >= цены."""
    return state >= config.price


def run_word(config: AutomatonConfig, coins: Iterable[CoinLike], initial: int = 0) -> int:
    """Расширенная функция δ*(q, w): левая свёртка δ по входному слову."""
    state = check_state(config, initial)
    for coin in coins:
        state = transition(config, state, coin)
    return state


# =============================================================================
# PRESENTATION HELPERS
# =============================================================================


def state_label(config: AutomatonConfig, state: int) -> str:
    """Метка состояния по индексу в лестнице: 15 → 'q3'."""
    return f"q{config.index_of(check_state(config, state))}"


def transition_table(config: AutomatonConfig) -> List[TransitionTableEntry]:
    """
    Таблица δ для всех нефинальных состояний и всех монет.

    Порядок: по монете, затем по состоянию. Строки из max(Q) опущены:
    поглощающее состояние переходит само в себя.
    """
    entries = []
    for coin in config.coins:
        for state in config.states[:-1]:
            target = transition(config, state, coin)
            entries.append(TransitionTableEntry(
                source=state,
                coin=coin,
                target=target,
                source_label=state_label(config, state),
                target_label=state_label(config, target),
            ))
    return entries


def describe(config: AutomatonConfig) -> FormalDefinition:
    """Формальное определение автомата в виде меток."""
    return FormalDefinition(
        states=tuple(state_label(config, s) for s in config.states),
        alphabet=tuple(format_cents(c) for c in config.coins),
        initial=state_label(config, config.initial),
        accepting=tuple(
            state_label(config, s) for s in config.states if is_accepting(config, s)
        ),
        price=format_cents(config.price),
        table=tuple(transition_table(config)),
    )
