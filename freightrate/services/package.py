"""Freight package entity and its derived rating quantities.

A Package holds a quantity, a total weight, and three dimensions in
height x width x length order (the freight convention, not sorted). Raw
measurements keep their own units; conversion happens on read, so nothing
is truncated until a carrier payload is serialized.

Example:
    >>> pkg = Package(1, pounds(500), [inches(48), inches(40), inches(48)], "pallet")
    >>> pkg.cubic_ft()
    53.33
    >>> pkg.density
    9.38
    >>> pkg.freight_class
    100
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from freightrate.errors import InvalidPackageError
from freightrate.services.freight_class import FreightClass, classify, sanitize_freight_class
from freightrate.services.freight_constants import (
    CUBIC_INCHES_PER_CUBIC_FOOT,
    DIM_FACTOR_139,
    ROUNDING_PRECISION,
    VOLUMETRIC_CM3_PER_GRAM,
    PackagingType,
)
from freightrate.services.pricing import cents_from
from freightrate.services.units import (
    SYSTEM_LENGTH_UNITS,
    SYSTEM_MASS_UNITS,
    Length,
    LengthUnit,
    MassUnit,
    UnitSystem,
    Weight,
    parse_length_unit,
    parse_mass_unit,
)


class Basis(str, Enum):
    """Whether a quantity is per handling unit or for the whole line."""

    EACH = "each"
    TOTAL = "total"


class WeightType(str, Enum):
    """Which weight a reader returns."""

    ACTUAL = "actual"
    VOLUMETRIC = "volumetric"
    DIMENSIONAL = "dimensional"
    BILLABLE = "billable"


class DimWeightMode(str, Enum):
    """Dimensional weight formula.

    IATA: box volume in cm³ / 6 as grams (6000 cm³ per kg). Canonical.
    DIM_FACTOR_139: ceil(L) x ceil(W) x ceil(H) in inches / 139 as pounds.
    """

    IATA = "iata"
    DIM_FACTOR_139 = "dim_factor_139"


@dataclass(frozen=True)
class PackageDefaults:
    """Construction defaults applied when a Package call leaves them unset.

    Attributes:
        units: Unit system for both weight and dimensions.
        weight_units: Unit system for weight only (overrides units).
        dim_units: Unit system for dimensions only (overrides units).
        dim_weight_mode: Formula used for dimensional and billable weight.
        currency: Currency of declared values.
    """

    units: UnitSystem = UnitSystem.METRIC
    weight_units: UnitSystem | None = None
    dim_units: UnitSystem | None = None
    dim_weight_mode: DimWeightMode = DimWeightMode.IATA
    currency: str | None = None


DEFAULT_PACKAGE_DEFAULTS = PackageDefaults()


def _unit_system(value: UnitSystem | str | None, name: str) -> UnitSystem | None:
    if value is None:
        return None
    try:
        return UnitSystem(value)
    except ValueError:
        raise InvalidPackageError(f"{name} must be one of metric, imperial") from None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class Package:
    """A freight line item: quantity x identical handling units.

    Args:
        quantity: Number of handling units (>= 1).
        total_weight: Weight of the whole line, as a Weight or a bare number
            read as grams (metric) or ounces (imperial).
        dimensions: Up to three dimensions as a list in H, W, L order, or a
            mapping with height/width/length keys. Each is a Length or a bare
            number read as centimetres (metric) or inches (imperial).
        packaging: PackagingType or its value (e.g. "pallet").
        units: Unit system for bare weight and dimension numbers.
        weight_units: Unit system for a bare weight number.
        dim_units: Unit system for bare dimension numbers.
        declared_freight_class: Class override; must be canonical.
        value: Declared value (see pricing.cents_from).
        defaults: Explicit defaults for anything above left unset.

    Raises:
        InvalidPackageError: On missing/invalid quantity, packaging, or weight,
            negative measurements, too many dimensions, or a non-canonical
            declared freight class.
    """

    def __init__(
        self,
        quantity: int | None,
        total_weight: Weight | float | None,
        dimensions: list | tuple | Mapping | None = None,
        packaging: PackagingType | str | None = None,
        *,
        units: UnitSystem | str | None = None,
        weight_units: UnitSystem | str | None = None,
        dim_units: UnitSystem | str | None = None,
        declared_freight_class: FreightClass | None = None,
        hazmat: bool = False,
        cylinder: bool = False,
        tube: bool = False,
        oversized: bool = False,
        gift: bool = False,
        unpackaged: bool = False,
        value: Any = None,
        currency: str | None = None,
        nmfc: str | None = None,
        description: str | None = None,
        dim_weight_mode: DimWeightMode | str | None = None,
        defaults: PackageDefaults | None = None,
    ) -> None:
        defaults = defaults or DEFAULT_PACKAGE_DEFAULTS

        if quantity is None:
            raise InvalidPackageError("quantity is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidPackageError("quantity must be an integer")
        if quantity < 1:
            raise InvalidPackageError("quantity must be at least 1")
        self._quantity = quantity

        self._packaging = self._parse_packaging(packaging)

        system = _unit_system(units, "units")
        self._weight_system = (
            _unit_system(weight_units, "weight_units")
            or system
            or defaults.weight_units
            or defaults.units
        )
        self._dim_system = (
            _unit_system(dim_units, "dim_units")
            or system
            or defaults.dim_units
            or defaults.units
        )

        try:
            self._dim_weight_mode = DimWeightMode(dim_weight_mode or defaults.dim_weight_mode)
        except ValueError:
            raise InvalidPackageError(f"unknown dim_weight_mode {dim_weight_mode!r}") from None

        self._total_weight = self._parse_weight(total_weight)
        self._each_weight = Weight(self._total_weight.value / quantity, self._total_weight.unit)

        self._dimensions = self._parse_dimensions(dimensions)
        # Frozen per-unit views of the dimensions
        self._inches = tuple(d.to(LengthUnit.INCH) for d in self._dimensions)
        self._centimetres = tuple(d.to(LengthUnit.CENTIMETRE) for d in self._dimensions)

        self._declared_freight_class: FreightClass | None = None
        self._freight_class_read = False
        if declared_freight_class is not None:
            self._declared_freight_class = self._parse_freight_class(declared_freight_class)

        self._hazmat = hazmat is True
        self._cylinder = bool(cylinder or tube)
        self._oversized = bool(oversized)
        self._gift = bool(gift)
        self._unpackaged = bool(unpackaged)

        try:
            self._value = cents_from(value)
        except (TypeError, ValueError, OverflowError):
            raise InvalidPackageError(f"declared value {value!r} is not a money amount") from None
        self._currency = currency or getattr(value, "currency", None) or defaults.currency
        self._nmfc = _blank_to_none(nmfc)
        self._description = _blank_to_none(description)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_packaging(packaging: PackagingType | str | None) -> PackagingType:
        if packaging is None:
            raise InvalidPackageError("packaging is required")
        if isinstance(packaging, PackagingType):
            return packaging
        try:
            return PackagingType(str(packaging).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in PackagingType)
            raise InvalidPackageError(
                f"packaging {packaging!r} should be one of {valid}"
            ) from None

    def _parse_weight(self, weight: Weight | float | None) -> Weight:
        if weight is None:
            raise InvalidPackageError("weight is required")
        if isinstance(weight, Weight):
            parsed = Weight(float(weight.value), parse_mass_unit(weight.unit))
        elif _is_number(weight):
            parsed = Weight(float(weight), SYSTEM_MASS_UNITS[self._weight_system])
        else:
            raise InvalidPackageError(f"weight {weight!r} is not a number or Weight")
        if not math.isfinite(parsed.value):
            raise InvalidPackageError("weight must be finite")
        if parsed.value < 0:
            raise InvalidPackageError("weight cannot be negative")
        return parsed

    def _parse_length(self, length: Length | float) -> Length:
        if isinstance(length, Length):
            parsed = Length(float(length.value), parse_length_unit(length.unit))
        elif _is_number(length):
            parsed = Length(float(length), SYSTEM_LENGTH_UNITS[self._dim_system])
        else:
            raise InvalidPackageError(f"dimension {length!r} is not a number or Length")
        if not math.isfinite(parsed.value):
            raise InvalidPackageError("dimensions must be finite")
        if parsed.value < 0:
            raise InvalidPackageError("dimensions cannot be negative")
        return parsed

    def _parse_dimensions(self, dimensions: Any) -> tuple[Length, Length, Length]:
        if dimensions is None:
            raw: list = []
        elif isinstance(dimensions, Mapping):
            raw = [dimensions.get("height"), dimensions.get("width"), dimensions.get("length")]
        elif isinstance(dimensions, (list, tuple)):
            raw = list(dimensions)
        else:
            raise InvalidPackageError("dimensions must be a list or a height/width/length mapping")

        supplied = [self._parse_length(d) for d in raw if d is not None]
        if len(supplied) > 3:
            raise InvalidPackageError("at most three dimensions may be given")

        if not supplied:
            zero = Length(0.0, SYSTEM_LENGTH_UNITS[self._dim_system])
            return (zero, zero, zero)

        # [5] -> [5, 5, 5]; [1, 2] -> [1, 1, 2]
        while len(supplied) < 3:
            supplied.insert(0, supplied[0])
        return (supplied[0], supplied[1], supplied[2])

    @staticmethod
    def _parse_freight_class(freight_class: Any) -> FreightClass:
        sanitized = sanitize_freight_class(freight_class) if _is_number(freight_class) else None
        if sanitized is None:
            raise InvalidPackageError(f"freight class {freight_class!r} is not a valid NMFC class")
        return sanitized

    # ------------------------------------------------------------------
    # Stored attributes
    # ------------------------------------------------------------------

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def packaging(self) -> PackagingType:
        return self._packaging

    @property
    def is_pallet(self) -> bool:
        return self._packaging.is_pallet

    @property
    def total_weight(self) -> Weight:
        return self._total_weight

    @property
    def each_weight(self) -> Weight:
        return self._each_weight

    @property
    def dimensions(self) -> tuple[Length, Length, Length]:
        """Height, width, length as given (after replication)."""
        return self._dimensions

    @property
    def weight_unit_system(self) -> UnitSystem:
        return self._weight_system

    @property
    def dim_unit_system(self) -> UnitSystem:
        return self._dim_system

    @property
    def dim_weight_mode(self) -> DimWeightMode:
        return self._dim_weight_mode

    @property
    def hazmat(self) -> bool:
        return self._hazmat

    @property
    def cylinder(self) -> bool:
        return self._cylinder

    tube = cylinder

    @property
    def oversized(self) -> bool:
        return self._oversized

    @property
    def gift(self) -> bool:
        return self._gift

    @property
    def unpackaged(self) -> bool:
        return self._unpackaged

    @property
    def value(self) -> int | None:
        """Declared value in cents."""
        return self._value

    @property
    def currency(self) -> str | None:
        return self._currency

    @property
    def nmfc(self) -> str | None:
        return self._nmfc

    @property
    def description(self) -> str | None:
        return self._description

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    def _axis(self, index: int, unit: LengthUnit | str) -> float:
        unit = parse_length_unit(unit)
        if unit == LengthUnit.INCH:
            return self._inches[index]
        return self._centimetres[index]

    def height(self, unit: LengthUnit | str) -> float:
        return self._axis(0, unit)

    def width(self, unit: LengthUnit | str) -> float:
        return self._axis(1, unit)

    def length(self, unit: LengthUnit | str) -> float:
        return self._axis(2, unit)

    def inches(self) -> tuple[float, float, float]:
        """Height, width, length in inches."""
        return self._inches

    def centimetres(self) -> tuple[float, float, float]:
        """Height, width, length in centimetres."""
        return self._centimetres

    def longest_side(self, unit: LengthUnit | str) -> float:
        """Longer of length and width, the side overlength fees key on."""
        return max(self.length(unit), self.width(unit))

    def girth(self, unit: LengthUnit | str) -> float:
        """Distance around the package; circumference for cylinders."""
        height, width = self.height(unit), self.width(unit)
        if self._cylinder:
            return math.pi * (height + width) / 2
        return 2 * height + 2 * width

    def box_volume(self, unit: LengthUnit | str) -> float:
        """Height x width x length in cubic unit."""
        return self.height(unit) * self.width(unit) * self.length(unit)

    def volume(self, unit: LengthUnit | str) -> float:
        """Volume in cubic unit, treating cylinders as round."""
        if self._cylinder:
            radius = (self.height(unit) + self.width(unit)) / 4
            return math.pi * radius ** 2 * self.length(unit)
        return self.box_volume(unit)

    def has_dimensions(self) -> bool:
        """Whether every dimension is non-zero."""
        return all(self._inches)

    def cubic_ft(self, basis: Basis | str = Basis.EACH) -> float | None:
        """Cubic feet, rounded to 2 places; None without full dimensions."""
        if not self.has_dimensions():
            return None
        cubic_ft = self.box_volume(LengthUnit.INCH) / CUBIC_INCHES_PER_CUBIC_FOOT
        if Basis(basis) == Basis.TOTAL:
            cubic_ft *= self._quantity
        return round(cubic_ft, ROUNDING_PRECISION)

    # ------------------------------------------------------------------
    # Density and freight class
    # ------------------------------------------------------------------

    @property
    def density(self) -> float | None:
        """Pounds per cubic foot per handling unit, rounded to 2 places."""
        cubic_ft = self.cubic_ft(Basis.EACH)
        if not cubic_ft:
            return None
        return round(self.pounds(Basis.EACH) / cubic_ft, ROUNDING_PRECISION)

    @property
    def calculated_freight_class(self) -> FreightClass | None:
        return classify(self.density)

    @property
    def declared_freight_class(self) -> FreightClass | None:
        return self._declared_freight_class

    @declared_freight_class.setter
    def declared_freight_class(self, freight_class: FreightClass) -> None:
        if self._declared_freight_class is not None:
            raise AttributeError("declared_freight_class is already set")
        if self._freight_class_read:
            raise AttributeError("declared_freight_class cannot change after freight_class is read")
        self._declared_freight_class = self._parse_freight_class(freight_class)

    @property
    def freight_class(self) -> FreightClass | None:
        """Declared class if set, otherwise the density-derived class."""
        self._freight_class_read = True
        if self._declared_freight_class is not None:
            return self._declared_freight_class
        return self.calculated_freight_class

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def _in_weight_system(self, weight: Weight) -> Weight:
        return weight.convert_to(SYSTEM_MASS_UNITS[self._weight_system])

    def volumetric_weight(self, basis: Basis | str = Basis.EACH) -> Weight:
        """IATA volumetric weight: cm³ / 6 as grams."""
        grams = self.box_volume(LengthUnit.CENTIMETRE) / VOLUMETRIC_CM3_PER_GRAM
        if Basis(basis) == Basis.TOTAL:
            grams *= self._quantity
        return self._in_weight_system(Weight(grams, MassUnit.GRAM))

    def dimensional_weight(
        self,
        basis: Basis | str = Basis.EACH,
        mode: DimWeightMode | str | None = None,
    ) -> Weight:
        """Dimensional weight under mode (defaults to the package's mode)."""
        mode = DimWeightMode(mode or self._dim_weight_mode)
        if mode == DimWeightMode.IATA:
            return self.volumetric_weight(basis)

        height, width, length = self._inches
        lbs = math.ceil(length) * math.ceil(width) * math.ceil(height) / DIM_FACTOR_139
        if Basis(basis) == Basis.TOTAL:
            lbs *= self._quantity
        return self._in_weight_system(Weight(lbs, MassUnit.POUND))

    def billable_weight(self, basis: Basis | str = Basis.EACH) -> Weight:
        """Greater of actual and dimensional weight."""
        return max(self.weight(basis), self.dimensional_weight(basis))

    def weight(
        self,
        basis: Basis | str = Basis.EACH,
        weight_type: WeightType | str = WeightType.ACTUAL,
    ) -> Weight:
        weight_type = WeightType(weight_type)
        if weight_type == WeightType.VOLUMETRIC:
            return self.volumetric_weight(basis)
        if weight_type == WeightType.DIMENSIONAL:
            return self.dimensional_weight(basis)
        if weight_type == WeightType.BILLABLE:
            return self.billable_weight(basis)
        return self._total_weight if Basis(basis) == Basis.TOTAL else self._each_weight

    def grams(self, basis: Basis | str = Basis.EACH, weight_type: WeightType | str = WeightType.ACTUAL) -> float:
        return self.weight(basis, weight_type).to(MassUnit.GRAM)

    def ounces(self, basis: Basis | str = Basis.EACH, weight_type: WeightType | str = WeightType.ACTUAL) -> float:
        return self.weight(basis, weight_type).to(MassUnit.OUNCE)

    def pounds(self, basis: Basis | str = Basis.EACH, weight_type: WeightType | str = WeightType.ACTUAL) -> float:
        return self.weight(basis, weight_type).to(MassUnit.POUND)

    def kilograms(self, basis: Basis | str = Basis.EACH, weight_type: WeightType | str = WeightType.ACTUAL) -> float:
        return self.weight(basis, weight_type).to(MassUnit.KILOGRAM)

    def __repr__(self) -> str:
        dims = " x ".join(str(d) for d in self._dimensions)
        return (
            f"Package(quantity={self._quantity}, total_weight={self._total_weight}, "
            f"dimensions={dims}, packaging={self._packaging.value})"
        )
