"""Money normalization and price line items."""

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any


class PriceBlame(str, Enum):
    """Where a price came from."""

    API = "api"
    LIBRARY = "library"
    TARIFF = "tariff"


@dataclass(frozen=True)
class Price:
    """A priced line item in cents.

    Attributes:
        cents: Amount in cents.
        description: Human-readable description.
        blame: Source of the amount (carrier API, this library, or a tariff).
        objects: What the price applies to (e.g., packages).
    """

    cents: int
    description: str
    blame: PriceBlame
    objects: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise TypeError("cents must be an int")
        if not isinstance(self.blame, PriceBlame):
            object.__setattr__(self, "blame", PriceBlame(self.blame))


def _dollars_to_cents(dollars: float) -> int:
    if not math.isfinite(dollars):
        raise ValueError(f"money amount {dollars!r} is not finite")
    return int(round(dollars * 100))


def cents_from(money: Any) -> int | None:
    """Normalize a money amount into integer cents.

    Floats and Decimals are dollars. Strings containing a decimal point are
    dollars; other strings and ints are already cents. Objects exposing a
    ``cents`` attribute are trusted as-is.

    Args:
        money: Amount in any of the supported shapes, or None.

    Returns:
        Amount in cents, or None when money is None.

    Raises:
        ValueError: If money is not a number or is not finite.
    """
    if money is None:
        return None
    if hasattr(money, "cents"):
        return int(money.cents)
    if isinstance(money, float):
        return _dollars_to_cents(money)
    if isinstance(money, Decimal):
        if not money.is_finite():
            raise ValueError(f"money amount {money!r} is not finite")
        return int((money * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if isinstance(money, str):
        text = money.strip()
        if "." in text:
            return _dollars_to_cents(float(text))
        return int(text)
    return int(money)
