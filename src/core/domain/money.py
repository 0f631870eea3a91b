"""
Money: Денежное значение с фиксированной валютой

Immutable Pydantic модель точной денежной суммы (Decimal, без float-ошибок).
Единственный допустимый способ арифметики и сравнений над суммами долгов:
- plus / minus
- is_greater_than / is_less_than / is_equal
- zero через MoneyContext (валютный контекст ledger)

ЗАПРЕЩЕНО смешивать валюты: любая операция над суммами разных валют
завершается CurrencyMismatch.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
# Валюта по умолчанию для ledger
DEFAULT_CURRENCY: Final[str] = "USD"

# Допустимые типы на входе Money.of / MoneyContext.of
AmountLike = Union[Decimal, int, float, str]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CurrencyMismatch(ValueError):
    """Операция над суммами в разных валютах."""

    pass


def to_decimal(value: AmountLike) -> Decimal:
    """
    Конверсия входного значения в Decimal.

    float конвертируется через str(), чтобы не переносить двоичную
    погрешность (0.1 → Decimal("0.1"), а не 0.1000000000000000055...).

    Raises:
        ValueError: Если значение NaN/Inf или не приводится к Decimal
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be numeric, got bool: {value}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except ArithmeticError as e:
            raise ValueError(f"Amount is not a valid decimal: {value!r}") from e
    else:
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite (not NaN/Inf), got {value}")
    return result


# =============================================================================
# MONEY MODEL
# =============================================================================


class Money(BaseModel):
    """
    Точная денежная сумма в одной валюте.

    Immutable модель (frozen=True): любая арифметика возвращает новый экземпляр.
    Сумма может быть отрицательной как промежуточный результат minus();
    ledger гарантирует, что наблюдаемые долги строго положительны.
    """

    amount: Decimal = Field(..., description="Точная сумма (Decimal)")
    currency: str = Field(
        ..., pattern=r"^[A-Z]{3}$", description="Код валюты ISO-4217 (например, 'USD')"
    )

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: AmountLike) -> Decimal:
        """Decimal без NaN/Inf; float через str()."""
        return to_decimal(v)

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, currency: str, amount: AmountLike) -> "Money":
        """Создание суммы: Money.of("USD", 1000)."""
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Нулевая сумма в валюте currency."""
        return cls(amount=Decimal("0"), currency=currency)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(
                f"Currency mismatch: {self.currency} vs {other.currency}"
            )

    def plus(self, other: "Money") -> "Money":
        """self + other (одна валюта)."""
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def minus(self, other: "Money") -> "Money":
        """self - other (одна валюта, результат может быть отрицательным)."""
        self._check_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def is_greater_than(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def is_equal(self, other: "Money") -> bool:
        """
        Равенство по значению (1000 == 1000.00).

        В отличие от ==, не учитывает экспоненту Decimal.
        """
        self._check_currency(other)
        return self.amount == other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


# =============================================================================
# ВАЛЮТНЫЙ КОНТЕКСТ
# =============================================================================


@dataclass(frozen=True)
class MoneyContext:
    """
    Валютный контекст ledger.

    Заменяет глобальную константу "ноль": каждый Ledger получает
    собственный контекст при создании.
    """

    currency: str = DEFAULT_CURRENCY

    @property
    def zero(self) -> Money:
        """Нулевая сумма в валюте контекста."""
        return Money.zero(self.currency)

    def of(self, amount: AmountLike) -> Money:
        """Сумма в валюте контекста."""
        return Money.of(self.currency, amount)

    def accepts(self, money: Money) -> bool:
        """True если сумма выражена в валюте контекста."""
        return money.currency == self.currency
