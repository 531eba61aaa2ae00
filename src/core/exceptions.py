"""
Ошибки автомата

Таксономия:
- Ошибки использования (insert после выдачи, dispense до допуска) НЕ являются
  исключениями: движок отклоняет их молча, см. OperationResult.
- Ошибки программирования (монета вне алфавита, состояние вне лестницы)
  поднимаются немедленно.
- Ошибки конфигурации поднимаются при загрузке конфигурации.
"""


class AutomatonError(Exception):
    """Базовое исключение автомата."""


class InvalidSymbolError(AutomatonError, ValueError):
    """Монета не принадлежит алфавиту Σ."""

    def __init__(self, coin: object, alphabet: tuple):
        self.coin = coin
        self.alphabet = alphabet
        super().__init__(f"Coin {coin!r} is not in alphabet {list(alphabet)}")


class InvalidStateError(AutomatonError, ValueError):
    """Состояние не принадлежит множеству Q."""

    def __init__(self, state: object, states: tuple):
        self.state = state
        self.states = states
        super().__init__(f"State {state!r} is not in state set {list(states)}")


class ConfigurationError(AutomatonError, ValueError):
    """Документ конфигурации не прошёл контракт или валидацию модели."""
