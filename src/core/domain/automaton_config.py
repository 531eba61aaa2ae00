"""
AutomatonConfig — Конфигурация автомата торгового аппарата

Immutable Pydantic модель с лестницей состояний Q, алфавитом монет Σ,
ценой и длительностью анимации перехода.
Полная совместимость с JSON Schema (src/core/contracts/schema/automaton_config.json).

Валидация при создании гарантирует:
- Q строго возрастает и начинается с 0
- Σ — уникальные положительные номиналы
- цена совпадает с верхним (насыщающим) состоянием
- δ(q, a) = min(max(Q), q + a) определена для всех q ∈ Q, a ∈ Σ
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator, model_validator

from src.core.contracts import AUTOMATON_CONFIG, ContractValidator
from src.core.exceptions import ConfigurationError


# =============================================================================
# CONFIG MODEL
# =============================================================================


class AutomatonConfig(BaseModel):
    """
    Конфигурация DFA торгового аппарата.

    Immutable модель (frozen=True): смена цены или номиналов требует
    нового экземпляра и нового движка.
    """

    states: Tuple[StrictInt, ...] = Field(
        ..., min_length=2, description="Упорядоченная лестница накопленных сумм (центы)"
    )
    coins: Tuple[StrictInt, ...] = Field(
        ..., min_length=1, description="Алфавит номиналов монет (центы)"
    )
    price: StrictInt = Field(..., gt=0, description="Цена продукта (центы)")
    animation_delay_ms: StrictInt = Field(
        500, ge=0, description="Длительность анимации перехода (мс), 0 отключает"
    )

    model_config = {"frozen": True}

    @field_validator("states")
    @classmethod
    def validate_states_ladder(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Лестница начинается с 0 и строго возрастает."""
        if v[0] != 0:
            raise ValueError(f"initial state must be 0, got {v[0]}")
        for lower, upper in zip(v, v[1:]):
            if upper <= lower:
                raise ValueError(f"states must be strictly increasing: {lower} then {upper}")
        return v

    @field_validator("coins")
    @classmethod
    def validate_alphabet(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Номиналы положительные и уникальные; хранятся по возрастанию."""
        for coin in v:
            if coin <= 0:
                raise ValueError(f"coin denominations must be positive, got {coin}")
        if len(set(v)) != len(v):
            raise ValueError(f"coin denominations must be unique, got {list(v)}")
        return tuple(sorted(v))

    @model_validator(mode="after")
    def validate_price_and_closure(self) -> "AutomatonConfig":
        """
        Цена = max(Q), и δ замкнута на Q.

        Если цена ниже верхнего состояния, допускающих состояний было бы
        несколько; если выше — верхнее состояние не было бы допускающим.
        """
        if self.price != self.states[-1]:
            raise ValueError(
                f"price {self.price} must equal the saturating top state {self.states[-1]}"
            )

        ladder = set(self.states)
        for state in self.states:
            for coin in self.coins:
                target = min(self.max_level, state + coin)
                if target not in ladder:
                    raise ValueError(
                        f"transition from {state} on coin {coin} lands on {target}, "
                        f"which is not in the state set"
                    )
        return self

    # -------------------------------------------------------------------------
    # Производные значения
    # -------------------------------------------------------------------------

    @property
    def initial(self) -> int:
        """Начальное состояние q0."""
        return self.states[0]

    @property
    def max_level(self) -> int:
        """Насыщающее верхнее состояние (единственное допускающее)."""
        return self.states[-1]

    def index_of(self, state: int) -> int:
        """Индекс состояния в лестнице (q-номер)."""
        return self.states.index(state)

    # -------------------------------------------------------------------------
    # JSON контракт
    # -------------------------------------------------------------------------

    def to_contract(self) -> Dict[str, Any]:
        """Экспорт в dict, совместимый с automaton_config.json."""
        return self.model_dump(mode="json")

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "AutomatonConfig":
        """
        Построение конфигурации из JSON-документа.

        Сначала документ проверяется JSON Schema контрактом, затем
        валидаторами модели (порядок состояний, замкнутость δ).

        Raises:
            ConfigurationError: Если документ не прошёл любую из проверок
        """
        violations = ContractValidator(AUTOMATON_CONFIG).error_messages(data)
        if violations:
            raise ConfigurationError(
                "automaton config violates contract: " + "; ".join(violations)
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid automaton config: {e}") from e


# =============================================================================
# DEFAULTS
# =============================================================================

# Аппарат с ценой 30¢ и монетами 5¢, 10¢, 25¢
DEFAULT_CONFIG = AutomatonConfig(
    states=(0, 5, 10, 15, 20, 25, 30),
    coins=(5, 10, 25),
    price=30,
    animation_delay_ms=500,
)


def load_config(path: Union[str, Path]) -> AutomatonConfig:
    """
    Загрузка конфигурации из JSON файла.

    Args:
        path: Путь к JSON документу

    Returns:
        Валидированная AutomatonConfig

    Raises:
        FileNotFoundError: Если файл не найден
        ConfigurationError: Если файл не является валидным JSON или нарушает контракт
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"automaton config {path} is not valid JSON: {e}") from e
    return AutomatonConfig.from_contract(data)
