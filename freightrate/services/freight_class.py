"""Density-based NMFC freight classification.

Maps a shipment density (lb/ft³) to the freight class LTL carriers price
against. Densities under 1 lb/ft³ rate at class 400 and anything over
30 lb/ft³ at class 60; everything between is looked up in a fixed table
of half-open ranges.
"""

import logging

from freightrate.services.freight_constants import (
    ABOVE_TABLE_FREIGHT_CLASS,
    BELOW_TABLE_FREIGHT_CLASS,
    DENSITY_FREIGHT_CLASS_TABLE,
    MAX_TABLE_DENSITY,
    MIN_TABLE_DENSITY,
    VALID_FREIGHT_CLASSES,
)

logger = logging.getLogger(__name__)

FreightClass = int | float


def density_to_freight_class(density: float | None) -> float | None:
    """Look up the raw freight class for a density.

    Args:
        density: Pounds per cubic foot, or None when unknown.

    Returns:
        Raw class value from the density table, or None.
    """
    if density is None:
        return None
    if density < MIN_TABLE_DENSITY:
        return BELOW_TABLE_FREIGHT_CLASS
    if density > MAX_TABLE_DENSITY:
        return ABOVE_TABLE_FREIGHT_CLASS

    for lower, upper, freight_class in DENSITY_FREIGHT_CLASS_TABLE:
        if lower <= density < upper:
            return freight_class

    logger.debug("No density table row covers %s", density)
    return None


def sanitize_freight_class(freight_class: float | None) -> FreightClass | None:
    """Restrict a class value to the canonical NMFC list.

    Integral classes come back as int (100, not 100.0).
    """
    if freight_class is None or isinstance(freight_class, bool):
        return None
    if freight_class not in VALID_FREIGHT_CLASSES:
        return None
    if float(freight_class).is_integer():
        return int(freight_class)
    return float(freight_class)


def classify(density: float | None) -> FreightClass | None:
    """Return the canonical freight class for a density, or None."""
    return sanitize_freight_class(density_to_freight_class(density))
