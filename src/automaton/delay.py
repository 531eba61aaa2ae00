"""Отложенное завершение перехода (анимация).

Переход автомата применяется мгновенно; задержка существует только для
слоя представления. Пока окно открыто, движок держит флаг busy и
отклоняет новые монеты, так что в полёте не больше одного перехода.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TransitionDelay:
    """Отменяемое окно анимации с дедлайном в миллисекундах."""

    duration_ms: int
    deadline_ms: Optional[float] = None

    def start(self, now_ms: float) -> Optional[float]:
        """Открыть окно. При duration_ms == 0 окно не открывается."""
        if self.duration_ms <= 0:
            self.deadline_ms = None
        else:
            self.deadline_ms = now_ms + self.duration_ms
        return self.deadline_ms

    @property
    def pending(self) -> bool:
        return self.deadline_ms is not None

    def is_busy(self, now_ms: float) -> bool:
        return self.deadline_ms is not None and now_ms < self.deadline_ms

    def expired(self, now_ms: float) -> bool:
        """Окно открыто и его дедлайн наступил."""
        return self.deadline_ms is not None and now_ms >= self.deadline_ms

    def complete(self) -> None:
        self.deadline_ms = None

    def cancel(self) -> bool:
        """Отменить окно. Возвращает True, если было что отменять."""
        was_pending = self.pending
        self.deadline_ms = None
        return was_pending
