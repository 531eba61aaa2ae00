"""
RunState — Снапшот прогона автомата

Immutable Pydantic модели:
- Coin: входной символ (номинал монеты)
- TransitionRecord: одна запись журнала переходов δ(source, coin) = target
- RunState: полный read model прогона для слоя представления

Полная совместимость с JSON Schema (src/core/contracts/schema/run_state.json).

ИНВАРИАНТЫ RunState (проверяются при создании):
1. len(transitions) == len(inserted_coins), sequence = 1..n
2. total_inserted == sum(inserted_coins)
3. current совпадает с target последней записи (или 0 для пустого прогона)
4. accepting == (current >= price)
5. delivered только в допускающем состоянии
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, StrictInt, model_validator

from src.core.domain.units import ZERO_CENTS, format_cents, remaining_cents


# =============================================================================
# INPUT SYMBOL
# =============================================================================


class Coin(BaseModel):
    """Монета — символ входного алфавита Σ."""

    value: StrictInt = Field(..., gt=0, description="Номинал (центы)")

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return format_cents(self.value)


# =============================================================================
# TRANSITION LOG
# =============================================================================


class TransitionRecord(BaseModel):
    """
    Запись журнала переходов.

    Создаётся ровно один раз на каждую принятую монету и не изменяется.
    """

    source: StrictInt = Field(..., ge=0, description="Исходное состояние (центы)")
    target: StrictInt = Field(..., ge=0, description="Целевое состояние (центы)")
    coin: StrictInt = Field(..., gt=0, description="Поглощённая монета (центы)")
    sequence: StrictInt = Field(..., ge=1, description="Позиция в прогоне, начиная с 1")
    ts_ms: Optional[float] = Field(
        None, ge=0, description="Время вставки по часам движка (мс)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_monotone(self) -> "TransitionRecord":
        """δ монотонна: target никогда не меньше source."""
        if self.target < self.source:
            raise ValueError(
                f"transition target {self.target} below source {self.source}"
            )
        return self

    def __str__(self) -> str:
        return (
            f"#{self.sequence} δ({format_cents(self.source)}, {format_cents(self.coin)}) "
            f"→ {format_cents(self.target)}"
        )


# =============================================================================
# RUN SNAPSHOT
# =============================================================================


class RunState(BaseModel):
    """
    Снапшот прогона.

    Движок заменяет снапшот целиком на каждой операции; слой представления
    читает только его. current — клампированное состояние (для допуска),
    total_inserted — неклампированная сумма (для сдачи). Оба поля нужны.
    """

    price: StrictInt = Field(..., gt=0, description="Цена продукта (центы)")
    current: StrictInt = Field(ZERO_CENTS, ge=0, description="Текущее состояние (центы)")
    accepting: bool = Field(False, description="current — допускающее состояние")
    delivered: bool = Field(False, description="Продукт и сдача выданы")
    change: StrictInt = Field(ZERO_CENTS, ge=0, description="Сдача (центы)")

    transitions: Tuple[TransitionRecord, ...] = Field(
        (), description="Журнал переходов в порядке поступления"
    )
    inserted_coins: Tuple[StrictInt, ...] = Field(
        (), description="Входное слово: монеты в порядке вставки"
    )
    total_inserted: StrictInt = Field(ZERO_CENTS, ge=0, description="Сумма всех монет (центы)")

    # Анимация перехода (только представление)
    busy: bool = Field(False, description="Переход ещё анимируется")
    busy_until_ms: Optional[float] = Field(None, description="Окончание анимации (мс)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_run_consistency(self) -> "RunState":
        """Проверка согласованности журнала, суммы и флагов."""
        if len(self.transitions) != len(self.inserted_coins):
            raise ValueError(
                f"transition log has {len(self.transitions)} records "
                f"but {len(self.inserted_coins)} coins were inserted"
            )

        for position, (record, coin) in enumerate(
            zip(self.transitions, self.inserted_coins), start=1
        ):
            if record.sequence != position:
                raise ValueError(
                    f"transition sequence {record.sequence} at position {position}"
                )
            if record.coin != coin:
                raise ValueError(
                    f"transition #{position} consumed {record.coin}, input word has {coin}"
                )

        if self.total_inserted != sum(self.inserted_coins):
            raise ValueError(
                f"total_inserted {self.total_inserted} != sum of coins {sum(self.inserted_coins)}"
            )

        expected_current = self.transitions[-1].target if self.transitions else ZERO_CENTS
        if self.current != expected_current:
            raise ValueError(
                f"current {self.current} does not match last transition target {expected_current}"
            )

        if self.accepting != (self.current >= self.price):
            raise ValueError(
                f"accepting={self.accepting} inconsistent with current={self.current}, price={self.price}"
            )

        if self.delivered and not self.accepting:
            raise ValueError("delivered run must be in an accepting state")

        if self.busy and self.busy_until_ms is None:
            raise ValueError("busy run must carry busy_until_ms")

        return self

    @classmethod
    def initial(cls, price: int) -> "RunState":
        """Пустой прогон в q0."""
        return cls(price=price)

    @property
    def remaining(self) -> int:
        """Сколько центов не хватает до цены (0 в допускающем состоянии)."""
        return remaining_cents(self.current, self.price)

    @property
    def input_word(self) -> str:
        """Входное слово w ∈ Σ* в виде '10¢, 25¢'."""
        return ", ".join(format_cents(coin) for coin in self.inserted_coins)

    def to_contract(self) -> Dict[str, Any]:
        """Экспорт в dict, совместимый с run_state.json."""
        return self.model_dump(mode="json")
