"""Carrier serviceability rules.

Decides whether a carrier can physically take a shipment before any
request is sent to it. Every violation is collected (no short-circuit)
so the caller sees the full list at once.

The rules engine is deterministic and testable: carrier limits live in
CarrierCapability, not in adapter code.
"""

import logging
from collections.abc import Iterable

from freightrate.errors import UnserviceableError
from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.package import Basis, Package
from freightrate.services.tariff import Tariff
from freightrate.services.units import LengthUnit, MassUnit

logger = logging.getLogger(__name__)


def _has_usable_tariff(tariff: Tariff | None) -> bool:
    return isinstance(tariff, Tariff)


def collect_violations(
    capability: CarrierCapability,
    packages: Iterable[Package],
    tariff: Tariff | None = None,
) -> list[str]:
    """Return every reason the carrier cannot take packages.

    Args:
        capability: Carrier limits.
        packages: Packages in the shipment.
        tariff: Tariff for overlength fees, if any.

    Returns:
        Violation messages in check order; empty when serviceable.
    """
    packages = list(packages)
    if not packages:
        return ["items are required"]

    violations: list[str] = []

    max_height_in = capability.maximum_height.to(LengthUnit.INCH)
    if max(p.height(LengthUnit.INCH) for p in packages) > max_height_in:
        violations.append(f"items must be {max_height_in:g} inches tall or less")

    max_weight_lbs = capability.maximum_weight.to(MassUnit.POUND)
    if sum(p.pounds(Basis.TOTAL) for p in packages) > max_weight_lbs:
        violations.append(f"items must weigh {max_weight_lbs:g} lbs or less")

    if capability.overlength_fees_require_tariff and not _has_usable_tariff(tariff):
        if any(not p.has_dimensions() for p in packages):
            violations.append("item dimensions are required")
        else:
            threshold_in = capability.minimum_length_for_overlength_fees.to(LengthUnit.INCH)
            if max(p.longest_side(LengthUnit.INCH) for p in packages) >= threshold_in:
                violations.append("tariff must be defined to calculate overlength fees")

    return violations


def validate_packages(
    capability: CarrierCapability,
    packages: Iterable[Package],
    tariff: Tariff | None = None,
) -> bool:
    """Validate that the carrier can service packages.

    Returns:
        True when serviceable.

    Raises:
        UnserviceableError: With all violations joined and capitalized.
    """
    violations = collect_violations(capability, packages, tariff)
    if violations:
        message = ", ".join(violations).capitalize()
        logger.info("%s cannot service shipment: %s", capability.name or "Carrier", message)
        raise UnserviceableError(message, violations=violations)
    return True


def is_serviceable(
    capability: CarrierCapability,
    packages: Iterable[Package],
    tariff: Tariff | None = None,
) -> bool:
    """Boolean form of validate_packages."""
    return not collect_violations(capability, packages, tariff)
