"""
Тесты для Money и MoneyContext

Проверяет:
1. Точную Decimal арифметику (plus / minus)
2. Сравнения (is_greater_than / is_less_than / is_equal)
3. Защиту от смешивания валют
4. Immutability (frozen=True)
5. Невалидные суммы и коды валют
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import CurrencyMismatch, Money, MoneyContext, to_decimal


@pytest.fixture
def usd() -> MoneyContext:
    return MoneyContext("USD")


class TestMoneyArithmetic:
    """Тесты арифметики Money"""

    def test_plus(self, usd):
        assert usd.of(1000).plus(usd.of(200)) == usd.of(1200)

    def test_minus_can_go_negative(self, usd):
        result = usd.of(100).minus(usd.of(120))
        assert result.amount == Decimal("-20")
        assert result.is_negative()

    def test_float_converted_without_binary_noise(self, usd):
        """0.1 + 0.2 == 0.3 точно (float конвертируется через str)."""
        assert usd.of(0.1).plus(usd.of(0.2)).is_equal(usd.of("0.3"))

    def test_operations_return_new_instances(self, usd):
        a = usd.of(10)
        b = a.plus(usd.of(5))
        assert a.amount == Decimal("10")
        assert b.amount == Decimal("15")


class TestMoneyComparison:
    """Тесты сравнений Money"""

    def test_greater_and_less(self, usd):
        assert usd.of(1200).is_greater_than(usd.of(1000))
        assert usd.of(1000).is_less_than(usd.of(1200))
        assert not usd.of(1000).is_greater_than(usd.of(1000))

    def test_is_equal_ignores_exponent(self, usd):
        assert usd.of(1000).is_equal(usd.of("1000.00"))

    def test_zero(self, usd):
        assert usd.zero.is_zero()
        assert not usd.zero.is_positive()
        assert not usd.zero.is_negative()
        assert usd.zero == Money.zero("USD")


class TestCurrency:
    """Тесты валютной защиты"""

    def test_mismatch_on_plus(self, usd):
        with pytest.raises(CurrencyMismatch, match="USD vs EUR"):
            usd.of(1).plus(Money.of("EUR", 1))

    def test_mismatch_on_compare(self, usd):
        with pytest.raises(CurrencyMismatch):
            usd.of(1).is_greater_than(Money.of("EUR", 1))

    def test_mismatch_is_value_error(self):
        assert issubclass(CurrencyMismatch, ValueError)

    def test_context_accepts_own_currency_only(self, usd):
        assert usd.accepts(usd.of(5))
        assert not usd.accepts(Money.of("EUR", 5))

    @pytest.mark.parametrize("code", ["usd", "US", "USDT", ""])
    def test_invalid_currency_code(self, code):
        with pytest.raises(ValidationError):
            Money.of(code, 1)


class TestMoneyValidation:
    """Тесты невалидных сумм"""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "NaN", "abc", True])
    def test_invalid_amount(self, value):
        with pytest.raises(ValidationError):
            Money.of("USD", value)

    def test_frozen(self, usd):
        m = usd.of(10)
        with pytest.raises(ValidationError):
            m.amount = Decimal("20")

    def test_to_decimal(self):
        assert to_decimal(5) == Decimal("5")
        assert to_decimal("1.50") == Decimal("1.50")
        assert to_decimal(Decimal("2")) == Decimal("2")
        with pytest.raises(ValueError):
            to_decimal(Decimal("Infinity"))

    def test_str(self, usd):
        assert str(usd.of("12.50")) == "USD 12.50"
