"""Unit conversion for package weights and dimensions.

Every conversion is an exact multiplicative scalar against a base unit
(grams for mass, centimetres for length). Nothing here rounds; rounding
belongs to whoever serializes a value into a carrier payload.

Follows the same pattern as freight_constants.py (Enum + parallel
lookups + alias table).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnitSystem(str, Enum):
    """Unit system used to interpret bare numeric package inputs."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class MassUnit(str, Enum):
    """Supported mass units."""

    GRAM = "g"
    OUNCE = "oz"
    POUND = "lb"
    KILOGRAM = "kg"


class LengthUnit(str, Enum):
    """Supported length units."""

    CENTIMETRE = "cm"
    INCH = "in"


# Grams per unit
_GRAMS_PER: dict[MassUnit, float] = {
    MassUnit.GRAM: 1.0,
    MassUnit.OUNCE: 28.349523125,
    MassUnit.POUND: 453.59237,
    MassUnit.KILOGRAM: 1000.0,
}

# Centimetres per unit
_CENTIMETRES_PER: dict[LengthUnit, float] = {
    LengthUnit.CENTIMETRE: 1.0,
    LengthUnit.INCH: 2.54,
}

# Unit a bare number is read as, per unit system
SYSTEM_MASS_UNITS: dict[UnitSystem, MassUnit] = {
    UnitSystem.METRIC: MassUnit.GRAM,
    UnitSystem.IMPERIAL: MassUnit.OUNCE,
}
SYSTEM_LENGTH_UNITS: dict[UnitSystem, LengthUnit] = {
    UnitSystem.METRIC: LengthUnit.CENTIMETRE,
    UnitSystem.IMPERIAL: LengthUnit.INCH,
}

# Alias mapping: human-readable names → unit enum values
MASS_UNIT_ALIASES: dict[str, MassUnit] = {
    "g": MassUnit.GRAM,
    "gram": MassUnit.GRAM,
    "grams": MassUnit.GRAM,
    "oz": MassUnit.OUNCE,
    "ounce": MassUnit.OUNCE,
    "ounces": MassUnit.OUNCE,
    "lb": MassUnit.POUND,
    "lbs": MassUnit.POUND,
    "pound": MassUnit.POUND,
    "pounds": MassUnit.POUND,
    "kg": MassUnit.KILOGRAM,
    "kgs": MassUnit.KILOGRAM,
    "kilogram": MassUnit.KILOGRAM,
    "kilograms": MassUnit.KILOGRAM,
}
LENGTH_UNIT_ALIASES: dict[str, LengthUnit] = {
    "cm": LengthUnit.CENTIMETRE,
    "centimetre": LengthUnit.CENTIMETRE,
    "centimetres": LengthUnit.CENTIMETRE,
    "centimeter": LengthUnit.CENTIMETRE,
    "centimeters": LengthUnit.CENTIMETRE,
    "in": LengthUnit.INCH,
    "inch": LengthUnit.INCH,
    "inches": LengthUnit.INCH,
}


def _scale_for(unit: MassUnit | LengthUnit) -> float:
    if isinstance(unit, MassUnit):
        return _GRAMS_PER[unit]
    if isinstance(unit, LengthUnit):
        return _CENTIMETRES_PER[unit]
    raise ValueError(f"Unsupported unit: {unit!r}")


def convert(
    value: float,
    from_unit: MassUnit | LengthUnit,
    to_unit: MassUnit | LengthUnit,
) -> float:
    """Convert a scalar between two units of the same family.

    Args:
        value: Magnitude expressed in from_unit.
        from_unit: Unit the value is expressed in.
        to_unit: Unit to express the value in.

    Returns:
        The unrounded magnitude in to_unit.

    Raises:
        ValueError: If the units belong to different families (mass vs length).
    """
    if type(from_unit) is not type(to_unit):
        raise ValueError(
            f"Cannot convert between {from_unit.value!r} and {to_unit.value!r}"
        )
    if from_unit == to_unit:
        return float(value)
    return float(value) * _scale_for(from_unit) / _scale_for(to_unit)


def parse_mass_unit(name: str | MassUnit) -> MassUnit:
    """Resolve a mass unit alias such as ``lbs`` or ``kg``."""
    if isinstance(name, MassUnit):
        return name
    unit = MASS_UNIT_ALIASES.get(str(name).strip().lower())
    if unit is None:
        raise ValueError(f"Unknown mass unit: {name!r}")
    return unit


def parse_length_unit(name: str | LengthUnit) -> LengthUnit:
    """Resolve a length unit alias such as ``in`` or ``centimetres``."""
    if isinstance(name, LengthUnit):
        return name
    unit = LENGTH_UNIT_ALIASES.get(str(name).strip().lower())
    if unit is None:
        raise ValueError(f"Unknown length unit: {name!r}")
    return unit


@dataclass(frozen=True, eq=False)
class Weight:
    """A mass magnitude paired with its unit.

    Equality, ordering and hashing compare the mass itself, so
    pounds(1) == Weight(16, MassUnit.OUNCE).

    Attributes:
        value: Magnitude in unit.
        unit: Mass unit of value.
    """

    value: float
    unit: MassUnit

    def convert_to(self, unit: MassUnit) -> "Weight":
        """Return the same mass expressed in another unit."""
        return Weight(convert(self.value, self.unit, unit), unit)

    def to(self, unit: MassUnit) -> float:
        """Return the magnitude in another unit."""
        return convert(self.value, self.unit, unit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Weight):
            return NotImplemented
        return self.to(MassUnit.GRAM) == other.to(MassUnit.GRAM)

    def __hash__(self) -> int:
        return hash(self.to(MassUnit.GRAM))

    def __lt__(self, other: "Weight") -> bool:
        return self.to(MassUnit.GRAM) < other.to(MassUnit.GRAM)

    def __le__(self, other: "Weight") -> bool:
        return self.to(MassUnit.GRAM) <= other.to(MassUnit.GRAM)

    def __gt__(self, other: "Weight") -> bool:
        return self.to(MassUnit.GRAM) > other.to(MassUnit.GRAM)

    def __ge__(self, other: "Weight") -> bool:
        return self.to(MassUnit.GRAM) >= other.to(MassUnit.GRAM)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.value}"


@dataclass(frozen=True, eq=False)
class Length:
    """A length magnitude paired with its unit.

    Equality, ordering and hashing compare the length itself, so
    inches(1) == Length(2.54, LengthUnit.CENTIMETRE).

    Attributes:
        value: Magnitude in unit.
        unit: Length unit of value.
    """

    value: float
    unit: LengthUnit

    def convert_to(self, unit: LengthUnit) -> "Length":
        """Return the same length expressed in another unit."""
        return Length(convert(self.value, self.unit, unit), unit)

    def to(self, unit: LengthUnit) -> float:
        """Return the magnitude in another unit."""
        return convert(self.value, self.unit, unit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Length):
            return NotImplemented
        return self.to(LengthUnit.CENTIMETRE) == other.to(LengthUnit.CENTIMETRE)

    def __hash__(self) -> int:
        return hash(self.to(LengthUnit.CENTIMETRE))

    def __lt__(self, other: "Length") -> bool:
        return self.to(LengthUnit.CENTIMETRE) < other.to(LengthUnit.CENTIMETRE)

    def __le__(self, other: "Length") -> bool:
        return self.to(LengthUnit.CENTIMETRE) <= other.to(LengthUnit.CENTIMETRE)

    def __gt__(self, other: "Length") -> bool:
        return self.to(LengthUnit.CENTIMETRE) > other.to(LengthUnit.CENTIMETRE)

    def __ge__(self, other: "Length") -> bool:
        return self.to(LengthUnit.CENTIMETRE) >= other.to(LengthUnit.CENTIMETRE)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.value}"


def pounds(value: float) -> Weight:
    """Shorthand for a Weight in pounds."""
    return Weight(float(value), MassUnit.POUND)


def inches(value: float) -> Length:
    """Shorthand for a Length in inches."""
    return Length(float(value), LengthUnit.INCH)
