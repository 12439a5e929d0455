"""Overlength fee tariffs.

A Tariff is an ordered table of overlength rules. Evaluation walks the
rules in declaration order and the first rule whose range contains the
package's longest side wins; the table is never sorted.

A zero fee is ambiguous on its own: the package may be under the carrier's
overlength threshold, or no rule may cover its length. evaluate_overlength_fee
reports which one happened.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from freightrate.errors import InvalidTariffError
from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.package import Package
from freightrate.services.pricing import Price, PriceBlame
from freightrate.services.units import Length, LengthUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlengthRule:
    """One row of an overlength fee schedule.

    Attributes:
        min_length: Inclusive lower bound on the longest side.
        max_length: Inclusive upper bound, or None for open-ended.
        fee_cents: Fee per handling unit, in cents.
    """

    min_length: Length
    max_length: Length | None
    fee_cents: int

    def __post_init__(self) -> None:
        if not isinstance(self.min_length, Length):
            raise InvalidTariffError("overlength rule min_length must be a Length")
        if self.max_length is not None and not isinstance(self.max_length, Length):
            raise InvalidTariffError("overlength rule max_length must be a Length or None")
        if isinstance(self.fee_cents, bool) or not isinstance(self.fee_cents, int):
            raise InvalidTariffError("overlength rule fee_cents must be an integer")
        if self.fee_cents < 0:
            raise InvalidTariffError("overlength rule fee_cents cannot be negative")

    def matches(self, length_in: float) -> bool:
        """Whether a longest side (in inches) falls inside this rule."""
        if length_in < self.min_length.to(LengthUnit.INCH):
            return False
        return self.max_length is None or length_in <= self.max_length.to(LengthUnit.INCH)


def _to_rule(rule: Any) -> OverlengthRule:
    if isinstance(rule, OverlengthRule):
        return rule
    if isinstance(rule, Mapping):
        if "min_length" not in rule:
            raise InvalidTariffError("overlength rule min_length is required")
        return OverlengthRule(
            min_length=rule["min_length"],
            max_length=rule.get("max_length"),
            fee_cents=rule.get("fee_cents"),
        )
    raise InvalidTariffError("overlength rules must be OverlengthRule or mapping entries")


class Tariff:
    """Customer or contract fee schedule, scoped to overlength rules."""

    def __init__(self, overlength_rules: Iterable[OverlengthRule | Mapping] | None = None) -> None:
        if overlength_rules is None:
            overlength_rules = []
        if isinstance(overlength_rules, (str, bytes, Mapping)) or not isinstance(
            overlength_rules, Iterable
        ):
            raise InvalidTariffError("overlength_rules must be a list")
        self._overlength_rules = tuple(_to_rule(rule) for rule in overlength_rules)

    @property
    def overlength_rules(self) -> tuple[OverlengthRule, ...]:
        return self._overlength_rules

    def matching_rule(self, length: Length | float) -> OverlengthRule | None:
        """First rule, in declaration order, covering length (bare numbers are inches)."""
        length_in = length.to(LengthUnit.INCH) if isinstance(length, Length) else float(length)
        for rule in self._overlength_rules:
            if rule.matches(length_in):
                return rule
        return None

    def covers(self, length: Length | float) -> bool:
        """Whether some rule is able to price length."""
        return self.matching_rule(length) is not None

    def __repr__(self) -> str:
        return f"Tariff(overlength_rules={len(self._overlength_rules)})"


class OverlengthOutcome(str, Enum):
    """Why an overlength fee came out the way it did."""

    BELOW_THRESHOLD = "below_threshold"
    RULE_MATCHED = "rule_matched"
    NO_RULE_MATCHED = "no_rule_matched"


@dataclass(frozen=True)
class OverlengthFeeResult:
    """Overlength fee for one package plus how it was reached.

    Attributes:
        fee_cents: Fee for the whole line (quantity x rule fee).
        outcome: Which branch of the evaluation produced the fee.
        rule: Matching rule when outcome is RULE_MATCHED.
        longest_side_in: Longest of length and width, in inches.
    """

    fee_cents: int
    outcome: OverlengthOutcome
    rule: OverlengthRule | None = None
    longest_side_in: float = 0.0


def evaluate_overlength_fee(
    capability: CarrierCapability,
    tariff: Tariff,
    package: Package,
) -> OverlengthFeeResult:
    """Evaluate a package against a tariff's overlength rules.

    Args:
        capability: Carrier limits (overlength threshold).
        tariff: Tariff whose rules are scanned in order.
        package: Package being priced.

    Returns:
        OverlengthFeeResult with the fee and the outcome.
    """
    longest = package.longest_side(LengthUnit.INCH)
    threshold = capability.minimum_length_for_overlength_fees.to(LengthUnit.INCH)
    if longest < threshold:
        return OverlengthFeeResult(0, OverlengthOutcome.BELOW_THRESHOLD, None, longest)

    rule = tariff.matching_rule(longest)
    if rule is None:
        logger.warning(
            "No overlength rule covers %.2f in for %s; fee defaults to 0",
            longest,
            capability.name or "carrier",
        )
        return OverlengthFeeResult(0, OverlengthOutcome.NO_RULE_MATCHED, None, longest)

    return OverlengthFeeResult(
        package.quantity * rule.fee_cents,
        OverlengthOutcome.RULE_MATCHED,
        rule,
        longest,
    )


def overlength_fee(capability: CarrierCapability, tariff: Tariff, package: Package) -> int:
    """Overlength fee in cents for a package; 0 when none applies or none is configured."""
    return evaluate_overlength_fee(capability, tariff, package).fee_cents


def overlength_charge(
    capability: CarrierCapability,
    tariff: Tariff,
    packages: Iterable[Package],
) -> Price | None:
    """Total overlength fee across packages as a tariff-blamed Price.

    Returns:
        Price for the charged packages, or None when nothing is charged.
    """
    total = 0
    charged: list[Package] = []
    for package in packages:
        fee = overlength_fee(capability, tariff, package)
        if fee:
            total += fee
            charged.append(package)

    if not charged:
        return None
    return Price(
        cents=total,
        description="Overlength fee",
        blame=PriceBlame.TARIFF,
        objects=tuple(charged),
    )
