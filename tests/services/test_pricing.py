"""Tests for money normalization and Price."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from freightrate.services.pricing import Price, PriceBlame, cents_from


class _Money:
    def __init__(self, cents):
        self.cents = cents


class TestCentsFrom:
    """Money shapes normalize to integer cents."""

    @pytest.mark.parametrize(
        "money,expected",
        [
            (None, None),
            (1250, 1250),
            (12.5, 1250),
            (19.99, 1999),
            ("19.99", 1999),
            ("1999", 1999),
            (" 5.00 ", 500),
            (Decimal("12.345"), 1235),
            (Decimal("10"), 1000),
            (_Money(4200), 4200),
        ],
    )
    def test_shapes(self, money, expected):
        assert cents_from(money) == expected

    def test_garbage_string_raises(self):
        with pytest.raises(ValueError):
            cents_from("twelve dollars")


class TestPrice:
    """Price line items."""

    def test_blame_coerced_from_string(self):
        price = Price(cents=7500, description="Overlength fee", blame="tariff")
        assert price.blame is PriceBlame.TARIFF
        assert price.objects == ()

    def test_cents_must_be_int(self):
        with pytest.raises(TypeError):
            Price(cents=75.0, description="Overlength fee", blame=PriceBlame.TARIFF)

    def test_unknown_blame_rejected(self):
        with pytest.raises(ValueError):
            Price(cents=100, description="Fuel", blame="carrier")

    def test_frozen(self):
        price = Price(cents=100, description="Fuel", blame=PriceBlame.API)
        with pytest.raises(FrozenInstanceError):
            price.cents = 200


class TestNonFiniteMoney:
    @pytest.mark.parametrize(
        "money", [float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), Decimal("NaN")]
    )
    def test_rejected(self, money):
        with pytest.raises(ValueError, match="not finite"):
            cents_from(money)
