"""
Tests for Pydantic run models

Покрывает:
- Coin: номинал и метка
- TransitionRecord: монотонность, immutability
- RunState: инварианты согласованности журнала, суммы и флагов
- Производные значения (remaining, input_word)
"""

import pytest
from pydantic import ValidationError

from src.core.domain import Coin, RunState, TransitionRecord


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def two_coin_records():
    """Журнал 10¢ + 25¢ при цене 30¢."""
    return (
        TransitionRecord(source=0, target=10, coin=10, sequence=1, ts_ms=0.0),
        TransitionRecord(source=10, target=30, coin=25, sequence=2, ts_ms=500.0),
    )


@pytest.fixture
def valid_run_data(two_coin_records):
    return {
        "price": 30,
        "current": 30,
        "accepting": True,
        "delivered": False,
        "change": 5,
        "transitions": two_coin_records,
        "inserted_coins": (10, 25),
        "total_inserted": 35,
    }


# =============================================================================
# COIN
# =============================================================================


def test_coin_label():
    assert Coin(value=25).label == "25¢"


@pytest.mark.parametrize("value", [0, -5, 2.5, True])
def test_coin_rejects_invalid_value(value):
    with pytest.raises(ValidationError):
        Coin(value=value)


def test_coin_immutability():
    coin = Coin(value=5)

    with pytest.raises(ValidationError, match="frozen"):
        coin.value = 10  # type: ignore


def test_coins_hashable_and_comparable():
    assert Coin(value=5) == Coin(value=5)
    assert len({Coin(value=5), Coin(value=5), Coin(value=10)}) == 2


# =============================================================================
# TRANSITION RECORD
# =============================================================================


def test_transition_record_rejects_decreasing_target():
    with pytest.raises(ValidationError, match="below source"):
        TransitionRecord(source=20, target=10, coin=5, sequence=1)


def test_transition_record_timestamp_optional():
    record = TransitionRecord(source=0, target=5, coin=5, sequence=1)

    assert record.ts_ms is None


def test_transition_record_rejects_zero_sequence():
    with pytest.raises(ValidationError):
        TransitionRecord(source=0, target=5, coin=5, sequence=0)


# =============================================================================
# RUN STATE
# =============================================================================


class TestRunStateInvariants:

    def test_valid_run(self, valid_run_data):
        state = RunState(**valid_run_data)

        assert state.current == 30
        assert state.remaining == 0
        assert state.input_word == "10¢, 25¢"

    def test_initial(self):
        state = RunState.initial(30)

        assert state.current == 0
        assert state.remaining == 30
        assert state.input_word == ""
        assert not state.busy

    def test_rejects_log_and_word_length_mismatch(self, valid_run_data):
        valid_run_data["inserted_coins"] = (10,)
        valid_run_data["total_inserted"] = 10

        with pytest.raises(ValidationError, match="records"):
            RunState(**valid_run_data)

    def test_rejects_wrong_total(self, valid_run_data):
        valid_run_data["total_inserted"] = 30

        with pytest.raises(ValidationError, match="total_inserted"):
            RunState(**valid_run_data)

    def test_rejects_current_not_matching_log(self, valid_run_data):
        valid_run_data["current"] = 25
        valid_run_data["accepting"] = False

        with pytest.raises(ValidationError, match="last transition target"):
            RunState(**valid_run_data)

    def test_rejects_inconsistent_accepting_flag(self, valid_run_data):
        valid_run_data["accepting"] = False

        with pytest.raises(ValidationError, match="accepting"):
            RunState(**valid_run_data)

    def test_rejects_delivered_without_accepting(self):
        with pytest.raises(ValidationError, match="delivered"):
            RunState(price=30, delivered=True)

    def test_rejects_out_of_order_sequence(self, valid_run_data, two_coin_records):
        first, second = two_coin_records
        valid_run_data["transitions"] = (
            first,
            TransitionRecord(source=10, target=30, coin=25, sequence=3),
        )

        with pytest.raises(ValidationError, match="sequence"):
            RunState(**valid_run_data)

    def test_rejects_log_coin_mismatch(self, valid_run_data):
        valid_run_data["inserted_coins"] = (25, 10)

        with pytest.raises(ValidationError, match="consumed"):
            RunState(**valid_run_data)

    def test_rejects_busy_without_deadline(self):
        with pytest.raises(ValidationError, match="busy_until_ms"):
            RunState(price=30, busy=True)

    def test_immutability(self, valid_run_data):
        state = RunState(**valid_run_data)

        with pytest.raises(ValidationError, match="frozen"):
            state.delivered = True  # type: ignore
