"""Vending Automaton Engine — владелец прогона DFA торгового аппарата.

Движок хранит единственный снапшот RunState и заменяет его целиком на
каждой операции:
- insert_coin: δ(current, coin), запись в журнал, пересчёт сдачи
- dispense: выдача продукта в допускающем состоянии
- reset: очистка прогона и отмена анимации
- settle: завершение анимации перехода по часам движка

Ошибки использования (insert после выдачи, dispense до допуска, любые
операции во время анимации) отклоняются молча: снапшот не меняется,
OperationResult.applied == False. Монета вне алфавита поднимает
InvalidSymbolError.

Инварианты:
- current == δ*(q0, inserted_coins)
- current не убывает и не превышает max(Q)
- после выдачи журнал заморожен до reset
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from src.automaton.delay import TransitionDelay
from src.automaton.guards import ActionAvailability, check_dispense, check_insert, evaluate_actions
from src.automaton.transition import CoinLike, coin_value, is_accepting, transition
from src.core.domain.automaton_config import DEFAULT_CONFIG, AutomatonConfig
from src.core.domain.run_state import RunState, TransitionRecord
from src.core.domain.units import ZERO_CENTS, change_cents, format_cents


logger = logging.getLogger(__name__)

Listener = Callable[[RunState], None]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class OperationResult:
    """Результат операции движка."""

    applied: bool
    reason: str

    state: RunState
    previous_state: RunState

    # Для отладки
    details: str


class VendingAutomaton:
    """DFA торгового аппарата с журналом переходов.

    States: лестница накопленных сумм из config.states
    Alphabet: номиналы из config.coins
    Accepting: единственное верхнее состояние max(Q) = price
    Terminal: после dispense прогон заморожен до reset
    """

    def __init__(
        self,
        config: Optional[AutomatonConfig] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Args:
            config: конфигурация автомата (default DEFAULT_CONFIG: 0..30¢, монеты 5/10/25¢)
            clock: источник времени в миллисекундах (default monotonic)
        """
        self.config = config or DEFAULT_CONFIG
        self._clock = clock or _monotonic_ms
        self._delay = TransitionDelay(self.config.animation_delay_ms)
        self._state = RunState.initial(self.config.price)
        self._listeners: List[Listener] = []

    # -------------------------------------------------------------------------
    # Pure contract
    # -------------------------------------------------------------------------

    def transition(self, state: int, coin: CoinLike) -> int:
        return transition(self.config, state, coin)

    def is_accepting(self, state: int) -> bool:
        return is_accepting(self.config, state)

    # -------------------------------------------------------------------------
    # Read model
    # -------------------------------------------------------------------------

    def snapshot(self) -> RunState:
        """Текущий снапшот (с завершением истёкшей анимации)."""
        return self.settle()

    def available_actions(self) -> ActionAvailability:
        return evaluate_actions(self.settle())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписка на замену снапшота. Возвращает функцию отписки."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def settle(self) -> RunState:
        """Снять флаг busy, если дедлайн анимации наступил."""
        if self._delay.expired(self._clock()):
            self._delay.complete()
            self._replace(self._evolve(busy=False, busy_until_ms=None))
        return self._state

    def insert_coin(self, coin: CoinLike) -> OperationResult:
        """Вставка монеты.

        Raises:
            InvalidSymbolError: монета не из алфавита (до проверки предусловий)
        """
        value = coin_value(self.config, coin)
        previous = self.settle()

        guard = check_insert(previous)
        if not guard.allowed:
            logger.debug("insert_coin(%s) rejected: %s", value, guard.block_reason)
            return self._create_result(
                applied=False,
                reason=guard.block_reason,
                state=previous,
                previous_state=previous,
                details=guard.details
            )

        now_ms = self._clock()
        target = transition(self.config, previous.current, value)
        record = TransitionRecord(
            source=previous.current,
            target=target,
            coin=value,
            sequence=len(previous.transitions) + 1,
            ts_ms=now_ms,
        )

        total_inserted = previous.total_inserted + value
        accepting = is_accepting(self.config, target)
        # Сдача пересчитывается на каждой монете в допускающем состоянии:
        # монеты сверх цены тоже возвращаются
        change = change_cents(total_inserted, self.config.price) if accepting else ZERO_CENTS

        deadline_ms = self._delay.start(now_ms)
        new_state = RunState(
            price=self.config.price,
            current=target,
            accepting=accepting,
            delivered=False,
            change=change,
            transitions=previous.transitions + (record,),
            inserted_coins=previous.inserted_coins + (value,),
            total_inserted=total_inserted,
            busy=deadline_ms is not None,
            busy_until_ms=deadline_ms,
        )
        self._replace(new_state)

        if accepting and not previous.accepting:
            reason = "price_reached"
        else:
            reason = "transition_applied"

        logger.info(
            "Transition #%d: %s --%s--> %s (total=%s, change=%s)",
            record.sequence,
            format_cents(record.source),
            format_cents(value),
            format_cents(target),
            format_cents(total_inserted),
            format_cents(change),
        )

        return self._create_result(
            applied=True,
            reason=reason,
            state=new_state,
            previous_state=previous,
            details=str(record)
        )

    def dispense(self) -> OperationResult:
        """Выдача продукта. Фиксирует сдачу и замораживает прогон."""
        previous = self.settle()

        guard = check_dispense(previous)
        if not guard.allowed:
            logger.debug("dispense() rejected: %s", guard.block_reason)
            return self._create_result(
                applied=False,
                reason=guard.block_reason,
                state=previous,
                previous_state=previous,
                details=guard.details
            )

        new_state = self._evolve(delivered=True)
        self._replace(new_state)
        logger.info(
            "Product dispensed after %d coins, change=%s",
            len(new_state.inserted_coins),
            format_cents(new_state.change),
        )

        return self._create_result(
            applied=True,
            reason="dispensed",
            state=new_state,
            previous_state=previous,
            details=f"Word accepted: {new_state.input_word}; change {format_cents(new_state.change)}"
        )

    def reset(self) -> OperationResult:
        """Очистка прогона. Всегда успешна и идемпотентна."""
        previous = self._state
        cancelled = self._delay.cancel()

        new_state = RunState.initial(self.config.price)
        self._replace(new_state)
        logger.info(
            "Run reset (%d transitions discarded%s)",
            len(previous.transitions),
            ", pending transition cancelled" if cancelled else "",
        )

        return self._create_result(
            applied=True,
            reason="reset",
            state=new_state,
            previous_state=previous,
            details=f"Run cleared, cancelled_delay={cancelled}"
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _evolve(self, **changes) -> RunState:
        """Новый снапшот на основе текущего с валидацией инвариантов."""
        data = dict(self._state)
        data.update(changes)
        return RunState(**data)

    def _replace(self, new_state: RunState) -> None:
        self._state = new_state
        # Снапшот уже заменён: ошибка одного подписчика не должна
        # прерывать операцию и оповещение остальных
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)

    def _create_result(
        self,
        applied: bool,
        reason: str,
        state: RunState,
        previous_state: RunState,
        details: str
    ) -> OperationResult:
        """Создание результата операции."""
        return OperationResult(
            applied=applied,
            reason=reason,
            state=state,
            previous_state=previous_state,
            details=details
        )
