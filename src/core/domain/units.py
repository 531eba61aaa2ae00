"""
Cents — Централизованный модуль денежных единиц

Вся денежная арифметика автомата ведётся в целых центах.
Дробные значения, округления и float ЗАПРЕЩЕНЫ: каждое значение
проходит через validate_cents до использования в расчётах.

Единственный допустимый способ вычислять:
- сдачу (change) по сумме внесённых монет и цене
- недостающую сумму (remaining) по текущему состоянию и цене
"""

from typing import Final


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Символ валюты для отображения
CENT_SYMBOL: Final[str] = "¢"

# Начальный уровень накопленной суммы (q0)
ZERO_CENTS: Final[int] = 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_cents(value: int, name: str = "value") -> int:
    """
    Проверка, что значение является неотрицательным целым числом центов.

    bool отклоняется явно (bool является подклассом int).

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        То же значение

    Raises:
        ValueError: Если значение не int или отрицательное
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer number of cents, got {value!r}")
    if value < ZERO_CENTS:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def format_cents(value: int) -> str:
    """Форматирование суммы: 30 → '30¢'."""
    return f"{validate_cents(value)}{CENT_SYMBOL}"


# =============================================================================
# РАСЧЁТЫ
# =============================================================================


def change_cents(total_inserted: int, price: int) -> int:
    """
    Сдача по сумме всех внесённых монет.

    Использует НЕклампированную сумму монет: состояние автомата
    насыщается на цене и не хранит величину переплаты.

    Args:
        total_inserted: Сумма всех монет текущего прогона (центы)
        price: Цена продукта (центы)

    Returns:
        max(total_inserted - price, 0)
    """
    validate_cents(total_inserted, "total_inserted")
    validate_cents(price, "price")
    return max(total_inserted - price, ZERO_CENTS)


def remaining_cents(current: int, price: int) -> int:
    """
    Сколько центов не хватает до цены.

    Returns:
        max(price - current, 0)
    """
    validate_cents(current, "current")
    validate_cents(price, "price")
    return max(price - current, ZERO_CENTS)
