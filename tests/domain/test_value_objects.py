"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from swiftpos.domain.exceptions import ValidationError
from swiftpos.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("4.50"))
        assert m.amount == Decimal("4.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("2.25").amount == Decimal("2.25")

    def test_of_factory_from_float(self):
        assert Money.of(3.0) == Money.of("3.0")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_zero_is_allowed(self):
        assert Money.zero().amount == Decimal("0")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_infinite_amount_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money(Decimal("Infinity"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("4.50") * 3 == Money.of("13.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("4.50") * 1.5

    def test_apply_rate_rounds_half_up_to_cents(self):
        assert Money.of("10.05").apply_rate(Decimal("0.10")) == Money.of("1.01")
        assert Money.of("9.99").apply_rate(Decimal("0.10")).amount == Decimal("1.00")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("3")) == "$3.00"
        assert str(Money.of("2.25")) == "$2.25"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)
