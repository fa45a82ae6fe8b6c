"""Unit tests for Value Objects (Money, Quantity)."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import InvalidQuantityError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class TestMoney:

    def test_create_from_string(self):
        m = Money.of("10.50")
        assert m.amount == Decimal("10.50")
        assert m.currency == "INR"

    def test_currency_is_upper_cased(self):
        assert Money.of("1", "usd").currency == "USD"

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Money.of("-1.00")

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("NaN")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_float_input_does_not_leak_binary_error(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")

    def test_addition(self):
        assert Money.of("10.00") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication(self):
        assert Money.of("15.00") * 3 == Money.of("45.00")

    def test_multiply_by_non_int_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1.00") * 1.5  # type: ignore[operator]

    def test_different_currencies_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("10", "USD") + Money.of("10", "EUR")

    def test_str(self):
        assert str(Money.of("10")) == "INR 10.00"


class TestMinorUnits:

    def test_whole_amount(self):
        assert Money.of("100").to_minor_units() == 10000

    def test_rounds_half_up(self):
        assert Money.of("10.005").to_minor_units() == 1001
        assert Money.of("10.004").to_minor_units() == 1000


class TestQuantity:

    def test_valid(self):
        assert Quantity(5).value == 5

    @pytest.mark.parametrize("value", [0, -1])
    def test_not_positive_rejected(self, value):
        with pytest.raises(InvalidQuantityError):
            Quantity(value)

    def test_bool_rejected(self):
        with pytest.raises(InvalidQuantityError):
            Quantity(True)  # type: ignore[arg-type]

    def test_str(self):
        assert str(Quantity(3)) == "3"
