"""Service layer for freightrate.

Provides the package model, freight classification, tariff evaluation,
and carrier serviceability checks.
"""

from freightrate.services.accessorials import map_accessorials, serviceable_accessorials
from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.freight_class import classify
from freightrate.services.freight_constants import PackagingType
from freightrate.services.package import (
    Basis,
    DimWeightMode,
    Package,
    PackageDefaults,
    WeightType,
)
from freightrate.services.serviceability import validate_packages
from freightrate.services.tariff import (
    OverlengthOutcome,
    OverlengthRule,
    Tariff,
    evaluate_overlength_fee,
    overlength_fee,
)
from freightrate.services.units import (
    Length,
    LengthUnit,
    MassUnit,
    UnitSystem,
    Weight,
    convert,
)

__all__ = [
    "Basis",
    "CarrierCapability",
    "DimWeightMode",
    "Length",
    "LengthUnit",
    "MassUnit",
    "OverlengthOutcome",
    "OverlengthRule",
    "Package",
    "PackageDefaults",
    "PackagingType",
    "Tariff",
    "UnitSystem",
    "Weight",
    "WeightType",
    "classify",
    "convert",
    "evaluate_overlength_fee",
    "map_accessorials",
    "overlength_fee",
    "serviceable_accessorials",
    "validate_packages",
]
