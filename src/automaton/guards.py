"""Guards — проверки предусловий операций движка

Каждая проверка работает только со снапшотом RunState и возвращает
GuardResult с причиной блокировки. Движок использует их для молчаливого
отклонения операций; слой представления использует их для отключения кнопок.

Порядок проверок insert_coin:
1. Продукт уже выдан → already_delivered
2. Переход ещё в полёте → transition_in_flight

Порядок проверок dispense:
1. Переход ещё в полёте → transition_in_flight
2. Продукт уже выдан → already_delivered
3. Состояние не допускающее → not_accepting

reset разрешён всегда.
"""

from dataclasses import dataclass

from src.core.domain.run_state import RunState
from src.core.domain.units import format_cents


# =============================================================================
# BLOCK REASONS
# =============================================================================

ALREADY_DELIVERED = "already_delivered"
TRANSITION_IN_FLIGHT = "transition_in_flight"
NOT_ACCEPTING = "not_accepting"


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class GuardResult:
    """Результат проверки предусловия."""

    allowed: bool
    block_reason: str

    # Детали
    details: str


@dataclass(frozen=True)
class ActionAvailability:
    """Доступность всех операций для текущего снапшота."""

    insert: GuardResult
    dispense: GuardResult
    reset: GuardResult

    @property
    def can_insert(self) -> bool:
        return self.insert.allowed

    @property
    def can_dispense(self) -> bool:
        return self.dispense.allowed


# =============================================================================
# CHECKS
# =============================================================================


def check_insert(state: RunState) -> GuardResult:
    """Можно ли вставить монету."""
    if state.delivered:
        return GuardResult(
            allowed=False,
            block_reason=ALREADY_DELIVERED,
            details="Product already dispensed, reset required",
        )

    if state.busy:
        return GuardResult(
            allowed=False,
            block_reason=TRANSITION_IN_FLIGHT,
            details=f"Transition in flight until {state.busy_until_ms}",
        )

    return GuardResult(allowed=True, block_reason="", details="PASS")


def check_dispense(state: RunState) -> GuardResult:
    """Можно ли выдать продукт."""
    if state.busy:
        return GuardResult(
            allowed=False,
            block_reason=TRANSITION_IN_FLIGHT,
            details=f"Transition in flight until {state.busy_until_ms}",
        )

    if state.delivered:
        return GuardResult(
            allowed=False,
            block_reason=ALREADY_DELIVERED,
            details="Product already dispensed",
        )

    if not state.accepting:
        return GuardResult(
            allowed=False,
            block_reason=NOT_ACCEPTING,
            details=f"Missing {format_cents(state.remaining)} to reach the price",
        )

    return GuardResult(
        allowed=True,
        block_reason="",
        details=f"Change will be {format_cents(state.change)}",
    )


def check_reset(state: RunState) -> GuardResult:
    """reset разрешён в любом состоянии, в том числе во время анимации."""
    return GuardResult(allowed=True, block_reason="", details="PASS")


def evaluate_actions(state: RunState) -> ActionAvailability:
    return ActionAvailability(
        insert=check_insert(state),
        dispense=check_dispense(state),
        reset=check_reset(state),
    )
