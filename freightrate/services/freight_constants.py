"""Canonical freight rating constants.

Single source of truth for packaging types, freight classes, density
breakpoints, and default carrier limits. All rating modules import from
here instead of using inline magic numbers.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Packaging types
# ---------------------------------------------------------------------------


class PackagingType(str, Enum):
    """Handling unit a freight line item ships on or in."""

    BOX = "box"
    BUNDLE = "bundle"
    CONTAINER = "container"
    CRATE = "crate"
    CYLINDER = "cylinder"
    DRUM = "drum"
    LUGGAGE = "luggage"
    PAIL = "pail"
    PALLET = "pallet"
    PIECE = "piece"
    ROLL = "roll"
    TOTE = "tote"
    TRUCKLOAD = "truckload"

    @property
    def is_pallet(self) -> bool:
        """Whether this packaging is rated as a palletized handling unit."""
        return self.value in PALLET_TYPES


# Packaging types carriers treat as pallets
PALLET_TYPES: frozenset[str] = frozenset({
    PackagingType.CRATE.value,
    PackagingType.DRUM.value,
    PackagingType.PALLET.value,
    PackagingType.TOTE.value,
})



# ---------------------------------------------------------------------------
# Freight classes
# ---------------------------------------------------------------------------

# NMFC classes accepted by LTL carriers
VALID_FREIGHT_CLASSES: frozenset[float] = frozenset({
    55, 60, 65, 70, 77.5, 85, 92.5, 100, 110, 125, 150, 175, 200, 250, 300, 400,
})

# Densities (lb/ft³) outside the table
MIN_TABLE_DENSITY = 1
MAX_TABLE_DENSITY = 30
BELOW_TABLE_FREIGHT_CLASS = 400
ABOVE_TABLE_FREIGHT_CLASS = 60

# (lower inclusive, upper exclusive, class), ascending
DENSITY_FREIGHT_CLASS_TABLE: tuple[tuple[float, float, float], ...] = (
    (1, 2, 300),
    (2, 4, 250),
    (4, 6, 175),
    (6, 8, 125),
    (8, 10, 100),
    (10, 12, 92.5),
    (12, 15, 85),
    (15, 22.5, 70),
    (22.5, 30, 65),
    (30, 35, 60),
)


# ---------------------------------------------------------------------------
# Weight / dimension defaults
# ---------------------------------------------------------------------------

CUBIC_INCHES_PER_CUBIC_FOOT = 1728
# IATA volumetric divisor: cm³ per gram (6000 cm³ per kg)
VOLUMETRIC_CM3_PER_GRAM = 6.0
# Domestic parcel divisor: in³ per pound
DIM_FACTOR_139 = 139
ROUNDING_PRECISION = 2


# ---------------------------------------------------------------------------
# Default carrier limits
# ---------------------------------------------------------------------------

DEFAULT_MAXIMUM_HEIGHT_IN = 105.0
DEFAULT_MAXIMUM_WEIGHT_LBS = 10_000.0
DEFAULT_MINIMUM_OVERLENGTH_IN = 48.0
