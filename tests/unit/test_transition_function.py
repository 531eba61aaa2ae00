"""Тесты функции переходов DFA.

Coverage:
- δ(q, a) == min(max(Q), q + a) на всём Q × Σ
- Допуск: q ∈ F ⇔ q == max(Q)
- Поглощающее верхнее состояние
- Монотонность δ
- Расширенная функция δ* (свёртка по слову)
- Ошибки: монета вне Σ, состояние вне Q
- Таблица переходов и формальное описание
"""

import itertools

import pytest

from src.automaton.transition import (
    describe,
    is_accepting,
    run_word,
    state_label,
    transition,
    transition_table,
)
from src.core.domain import DEFAULT_CONFIG, AutomatonConfig, Coin
from src.core.exceptions import InvalidStateError, InvalidSymbolError


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def config_40():
    """Аппарат за 40¢ с монетами 10¢ и 25¢."""
    return AutomatonConfig(
        states=(0, 10, 20, 25, 30, 35, 40),
        coins=(10, 25),
        price=40,
        animation_delay_ms=0,
    )


# =============================================================================
# CORE PROPERTIES
# =============================================================================


class TestTransitionFunction:

    def test_formula_over_full_domain(self, config):
        """δ(q, a) == min(max(Q), q + a) для всех пар."""
        for state in config.states:
            for coin in config.coins:
                assert transition(config, state, coin) == min(config.max_level, state + coin)

    def test_result_always_in_state_set(self, config_40):
        for state in config_40.states:
            for coin in config_40.coins:
                assert transition(config_40, state, coin) in config_40.states

    def test_monotone(self, config):
        for state in config.states:
            for coin in config.coins:
                assert transition(config, state, coin) >= state

    def test_top_state_absorbing(self, config):
        for coin in config.coins:
            assert transition(config, config.max_level, coin) == config.max_level

    def test_overshoot_clamped(self, config):
        # 10 + 25 = 35 → 30
        assert transition(config, 10, 25) == 30

    def test_accepts_coin_model(self, config):
        assert transition(config, 5, Coin(value=10)) == 15


class TestAcceptance:

    def test_only_top_state_accepting(self, config):
        for state in config.states:
            assert is_accepting(config, state) == (state == config.max_level)

    def test_initial_not_accepting(self, config):
        assert not is_accepting(config, config.initial)


class TestRunWord:

    def test_empty_word_stays_initial(self, config):
        assert run_word(config, []) == 0

    def test_fold_matches_stepwise_transition(self, config):
        """δ*(q0, w) равна пошаговому применению δ для всех слов длины ≤ 3."""
        for length in range(4):
            for word in itertools.product(config.coins, repeat=length):
                state = config.initial
                for coin in word:
                    state = transition(config, state, coin)
                assert run_word(config, word) == state

    def test_six_nickels_reach_price(self, config):
        assert run_word(config, [5] * 5) == 25
        assert run_word(config, [5] * 6) == 30

    def test_custom_initial_state(self, config):
        assert run_word(config, [10], initial=15) == 25


# =============================================================================
# ERRORS
# =============================================================================


class TestInvalidInput:

    @pytest.mark.parametrize("coin", [1, 7, 50, 0, -5])
    def test_coin_outside_alphabet(self, config, coin):
        with pytest.raises(InvalidSymbolError) as exc_info:
            transition(config, 0, coin)

        assert exc_info.value.coin == coin
        assert exc_info.value.alphabet == (5, 10, 25)

    def test_bool_is_not_a_coin(self, config):
        with pytest.raises(InvalidSymbolError):
            transition(config, 0, True)

    def test_coin_model_outside_alphabet(self, config):
        with pytest.raises(InvalidSymbolError):
            transition(config, 0, Coin(value=50))

    def test_state_outside_ladder(self, config):
        with pytest.raises(InvalidStateError):
            transition(config, 7, 5)

    def test_invalid_symbol_is_value_error(self, config):
        with pytest.raises(ValueError):
            run_word(config, [5, 3])


# =============================================================================
# PRESENTATION HELPERS
# =============================================================================


def test_state_labels(config):
    assert [state_label(config, s) for s in config.states] == [
        "q0", "q1", "q2", "q3", "q4", "q5", "q6",
    ]


def test_transition_table_shape(config):
    """3 монеты × 6 нефинальных состояний."""
    table = transition_table(config)

    assert len(table) == 18
    assert all(entry.source != config.max_level for entry in table)
    assert [entry.coin for entry in table[:6]] == [5] * 6


def test_transition_table_entries(config):
    table = transition_table(config)

    assert str(table[0]) == "δ(q0, 5¢) = q1"

    entry = next(e for e in table if e.source == 10 and e.coin == 25)
    assert entry.target == 30
    assert entry.target_label == "q6"


def test_describe(config):
    definition = describe(config)

    assert definition.states == ("q0", "q1", "q2", "q3", "q4", "q5", "q6")
    assert definition.alphabet == ("5¢", "10¢", "25¢")
    assert definition.initial == "q0"
    assert definition.accepting == ("q6",)
    assert definition.price == "30¢"
    assert len(definition.table) == 18
    assert "F = {q6} (≥30¢)" in str(definition)
