"""Tests for overlength tariffs and fee evaluation."""

import logging

import pytest

from freightrate.errors import InvalidTariffError
from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.package import Package
from freightrate.services.pricing import PriceBlame
from freightrate.services.tariff import (
    OverlengthOutcome,
    OverlengthRule,
    Tariff,
    evaluate_overlength_fee,
    overlength_charge,
    overlength_fee,
)
from freightrate.services.units import Length, LengthUnit, inches


class TestOverlengthRule:
    """Rule validation and range matching."""

    def test_inclusive_bounds(self):
        rule = OverlengthRule(inches(96), inches(119.99), 7500)
        assert rule.matches(96)
        assert rule.matches(119.99)
        assert not rule.matches(95.9)
        assert not rule.matches(120)

    def test_open_ended(self):
        rule = OverlengthRule(inches(144), None, 15000)
        assert rule.matches(144)
        assert rule.matches(10_000)

    def test_metric_bounds_compare_in_inches(self):
        rule = OverlengthRule(Length(254, LengthUnit.CENTIMETRE), None, 5000)
        assert rule.matches(100.5)
        assert not rule.matches(99.5)

    def test_bare_number_bounds_rejected(self):
        with pytest.raises(InvalidTariffError, match="min_length"):
            OverlengthRule(96, None, 7500)
        with pytest.raises(InvalidTariffError, match="max_length"):
            OverlengthRule(inches(96), 120, 7500)

    @pytest.mark.parametrize("fee", [-1, 75.0, "7500", True])
    def test_invalid_fee(self, fee):
        with pytest.raises(InvalidTariffError):
            OverlengthRule(inches(96), None, fee)

    def test_zero_fee_allowed(self):
        assert OverlengthRule(inches(96), None, 0).fee_cents == 0


class TestTariff:
    """Tariff construction and rule lookup."""

    def test_empty_tariff(self):
        assert Tariff().overlength_rules == ()
        assert Tariff([]).covers(200) is False

    def test_mapping_rules(self):
        tariff = Tariff([{"min_length": inches(96), "fee_cents": 7500}])
        assert tariff.overlength_rules[0] == OverlengthRule(inches(96), None, 7500)

    def test_mapping_rule_needs_min_length(self):
        with pytest.raises(InvalidTariffError, match="min_length is required"):
            Tariff([{"fee_cents": 7500}])

    @pytest.mark.parametrize("rules", ["rules", {"min_length": 96}, 42])
    def test_non_list_rules_rejected(self, rules):
        with pytest.raises(InvalidTariffError, match="must be a list"):
            Tariff(rules)

    def test_unknown_rule_shape_rejected(self):
        with pytest.raises(InvalidTariffError):
            Tariff([(96, None, 7500)])

    def test_first_match_in_declaration_order(self):
        tariff = Tariff([
            OverlengthRule(inches(96), None, 9000),
            OverlengthRule(inches(120), None, 12000),
        ])
        assert tariff.matching_rule(130).fee_cents == 9000

    def test_lookup_accepts_length(self, tiered_tariff):
        rule = tiered_tariff.matching_rule(Length(320, LengthUnit.CENTIMETRE))
        assert rule.fee_cents == 10000

    def test_gap_between_rules(self, tiered_tariff):
        assert tiered_tariff.matching_rule(119.995) is None
        assert tiered_tariff.covers(60) is False

    def test_rules_are_immutable(self, tiered_tariff):
        assert isinstance(tiered_tariff.overlength_rules, tuple)


class TestOverlengthFee:
    """Fee evaluation against a carrier threshold."""

    @pytest.mark.parametrize("longest,fee", [(100, 7500), (130, 10000), (200, 15000)])
    def test_tiers(self, capability, tiered_tariff, long_package, longest, fee):
        assert overlength_fee(capability, tiered_tariff, long_package(longest)) == fee

    def test_fee_scales_with_quantity(self, capability, tiered_tariff, long_package):
        assert overlength_fee(capability, tiered_tariff, long_package(100, quantity=3)) == 22500

    def test_below_threshold(self, capability, tiered_tariff, long_package):
        result = evaluate_overlength_fee(capability, tiered_tariff, long_package(40))
        assert result.fee_cents == 0
        assert result.outcome is OverlengthOutcome.BELOW_THRESHOLD
        assert result.rule is None

    def test_rule_matched_reports_rule(self, capability, tiered_tariff, long_package):
        result = evaluate_overlength_fee(capability, tiered_tariff, long_package(130))
        assert result.outcome is OverlengthOutcome.RULE_MATCHED
        assert result.rule == OverlengthRule(inches(120), inches(143.99), 10000)
        assert result.longest_side_in == pytest.approx(130)

    def test_no_rule_matched_is_distinct_from_no_fee(
        self, capability, tiered_tariff, long_package, caplog
    ):
        """Zero fee from an uncovered length is reported and logged, not silent."""
        with caplog.at_level(logging.WARNING, logger="freightrate.services.tariff"):
            result = evaluate_overlength_fee(capability, tiered_tariff, long_package(60))

        assert result.fee_cents == 0
        assert result.outcome is OverlengthOutcome.NO_RULE_MATCHED
        assert "No overlength rule covers" in caplog.text

    def test_width_counts_as_longest_side(self, capability, tiered_tariff):
        pkg = Package(1, 500, [inches(40), inches(100), inches(48)], "pallet")
        assert overlength_fee(capability, tiered_tariff, pkg) == 7500

    def test_threshold_is_inclusive(self, tiered_tariff, long_package):
        capability = CarrierCapability(minimum_length_for_overlength_fees=inches(100))
        assert overlength_fee(capability, tiered_tariff, long_package(100)) == 7500
        result = evaluate_overlength_fee(capability, tiered_tariff, long_package(99))
        assert result.outcome is OverlengthOutcome.BELOW_THRESHOLD


class TestOverlengthCharge:
    """Aggregated tariff-blamed price."""

    def test_charge_sums_charged_packages(self, capability, tiered_tariff, long_package, pallet):
        long_one = long_package(100)
        price = overlength_charge(capability, tiered_tariff, [long_one, pallet])

        assert price.cents == 7500
        assert price.blame is PriceBlame.TARIFF
        assert price.objects == (long_one,)
        assert price.description == "Overlength fee"

    def test_no_charge(self, capability, tiered_tariff, pallet):
        assert overlength_charge(capability, tiered_tariff, [pallet]) is None


class TestOverlengthMonotonicity:
    """Fees never drop as the longest side grows across ascending tiers."""

    EDGES = [47, 48, 95.99, 96, 119.99, 120, 143.99, 144, 300]

    def test_fees_non_decreasing(self, capability, tiered_tariff, long_package):
        fees = [overlength_fee(capability, tiered_tariff, long_package(x)) for x in self.EDGES]

        assert fees == [0, 0, 0, 7500, 7500, 10000, 10000, 15000, 15000]
        assert all(a <= b for a, b in zip(fees, fees[1:]))

    def test_gap_between_tiers_is_not_a_fee_tier(self, capability, tiered_tariff, long_package):
        """Inside a gap the fee is 0 because no rule covers the length."""
        result = evaluate_overlength_fee(capability, tiered_tariff, long_package(119.995))

        assert result.fee_cents == 0
        assert result.outcome is OverlengthOutcome.NO_RULE_MATCHED

    def test_fees_below_first_tier_are_uncovered_not_free(
        self, capability, tiered_tariff, long_package
    ):
        outcomes = [
            evaluate_overlength_fee(capability, tiered_tariff, long_package(x)).outcome
            for x in (47, 48, 95.99)
        ]
        assert outcomes == [
            OverlengthOutcome.BELOW_THRESHOLD,
            OverlengthOutcome.NO_RULE_MATCHED,
            OverlengthOutcome.NO_RULE_MATCHED,
        ]
