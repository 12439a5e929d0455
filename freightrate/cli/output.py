"""CLI output formatters for Rich tables and JSON.

Provides human-readable Rich table output (default) and machine-parseable
JSON output (--json flag). All formatting goes through these functions
so the CLI commands stay clean.
"""

import json
from typing import Any

from rich.table import Table

from freightrate.services.package import Basis, Package
from freightrate.services.units import MassUnit


def format_cost(cents: int | None) -> str:
    """Format cost in cents as a dollar string.

    Args:
        cents: Cost in cents, or None.

    Returns:
        Formatted string like "$12.50" or "-" for None.
    """
    if cents is None:
        return "-"
    return f"${cents / 100:,.2f}"


def _fmt(value: float | None, suffix: str = "") -> str:
    if value is None:
        return "-"
    return f"{value:,.2f}{suffix}"


def package_summary(package: Package) -> dict[str, Any]:
    """Derived rating quantities for a package as plain data."""
    height, width, length = package.inches()
    return {
        "quantity": package.quantity,
        "packaging": package.packaging.value,
        "pallet": package.is_pallet,
        "dimensions_in": {"height": height, "width": width, "length": length},
        "pounds_each": package.pounds(Basis.EACH),
        "pounds_total": package.pounds(Basis.TOTAL),
        "cubic_ft_each": package.cubic_ft(Basis.EACH),
        "cubic_ft_total": package.cubic_ft(Basis.TOTAL),
        "density": package.density,
        "calculated_freight_class": package.calculated_freight_class,
        "freight_class": package.freight_class,
        "dimensional_weight_lbs": package.dimensional_weight(Basis.TOTAL).to(MassUnit.POUND),
        "billable_weight_lbs": package.billable_weight(Basis.TOTAL).to(MassUnit.POUND),
    }


def format_package_table(package: Package, as_json: bool = False) -> Table | str:
    """Format a package's derived quantities as a Rich table or JSON.

    Args:
        package: Package to describe.
        as_json: If True, return JSON string instead of Rich table.

    Returns:
        Rich Table, or JSON string.
    """
    summary = package_summary(package)
    if as_json:
        return json.dumps(summary, indent=2)

    dims = summary["dimensions_in"]
    table = Table(title="Package", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_row("Quantity", str(summary["quantity"]))
    table.add_row("Packaging", summary["packaging"] + (" (pallet)" if summary["pallet"] else ""))
    table.add_row(
        "H x W x L (in)",
        f"{dims['height']:g} x {dims['width']:g} x {dims['length']:g}",
    )
    table.add_row("Weight each (lb)", _fmt(summary["pounds_each"]))
    table.add_row("Weight total (lb)", _fmt(summary["pounds_total"]))
    table.add_row("Cubic ft each", _fmt(summary["cubic_ft_each"]))
    table.add_row("Cubic ft total", _fmt(summary["cubic_ft_total"]))
    table.add_row("Density (lb/ft³)", _fmt(summary["density"]))
    freight_class = summary["freight_class"]
    table.add_row("Freight class", "-" if freight_class is None else f"{freight_class:g}")
    table.add_row("Dimensional weight (lb)", _fmt(summary["dimensional_weight_lbs"]))
    table.add_row("Billable weight (lb)", _fmt(summary["billable_weight_lbs"]))
    return table
