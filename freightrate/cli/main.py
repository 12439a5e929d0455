"""freightrate CLI: freight rating checks from the shell.

Usage:
    freightrate classify 9.38               Freight class for a density
    freightrate package --weight 500 ...    Derived package quantities
    freightrate validate --carrier saia ... Check a shipment against a carrier
    freightrate config show                 Show resolved configuration
"""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from freightrate.cli.output import format_cost, format_package_table
from freightrate.config import FreightRateConfig, load_config
from freightrate.errors import FreightRateError, format_error
from freightrate.services.accessorials import map_accessorials
from freightrate.services.freight_class import classify as classify_density
from freightrate.services.freight_constants import PackagingType
from freightrate.services.package import Package
from freightrate.services.serviceability import validate_packages
from freightrate.services.tariff import OverlengthOutcome, evaluate_overlength_fee
from freightrate.services.units import Length, Weight, parse_length_unit, parse_mass_unit

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="freightrate",
    help="Freight package rating and carrier serviceability checks",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()

# --- Global state ---
_config_path: str | None = None


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to freightrate.yaml config file"
    ),
):
    """freightrate CLI."""
    global _config_path
    _config_path = config


def _load() -> FreightRateConfig:
    """Load config (or defaults) and configure logging from it."""
    try:
        cfg = load_config(config_path=_config_path) or FreightRateConfig()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if cfg.logging.file:
        handlers.append(logging.FileHandler(cfg.logging.file))
    logging.basicConfig(
        level=cfg.logging.level.upper(),
        format=cfg.logging.format,
        handlers=handlers,
        force=True,
    )
    _log.debug("Loaded %d carrier(s), %d tariff(s)", len(cfg.carriers), len(cfg.tariffs))
    return cfg


def _build_package(
    cfg: FreightRateConfig,
    quantity: int,
    weight: float,
    weight_unit: str,
    dims: str | None,
    dim_unit: str,
    packaging: str,
    freight_class: float | None,
) -> Package:
    """Build a Package from CLI options; dims look like ``48x40x48`` (H x W x L)."""
    mass_unit = parse_mass_unit(weight_unit)
    length_unit = parse_length_unit(dim_unit)
    dimensions = []
    if dims:
        dimensions = [Length(float(d), length_unit) for d in dims.lower().split("x") if d.strip()]
    return Package(
        quantity,
        Weight(weight, mass_unit),
        dimensions,
        packaging,
        declared_freight_class=freight_class,
        defaults=cfg.package_defaults.to_defaults(),
    )


# --- Version ---


@app.command()
def version():
    """Show freightrate version."""
    from importlib.metadata import version as pkg_version
    try:
        v = pkg_version("freightrate")
    except Exception:
        v = "unknown"
    console.print(f"[bold]freightrate[/bold] v{v}")


# --- Rating commands ---


@app.command()
def classify(density: float = typer.Argument(..., help="Density in lb/ft³")):
    """Print the freight class for a density."""
    freight_class = classify_density(density)
    if freight_class is None:
        console.print("[yellow]No freight class for that density.[/yellow]")
        raise typer.Exit(1)
    console.print(f"{freight_class:g}")


@app.command()
def package(
    weight: float = typer.Option(..., "--weight", help="Total weight of the line"),
    weight_unit: str = typer.Option("lb", "--weight-unit", help="lb, kg, oz, g"),
    dims: Optional[str] = typer.Option(None, "--dims", help="H x W x L, e.g. 48x40x48"),
    dim_unit: str = typer.Option("in", "--dim-unit", help="in or cm"),
    quantity: int = typer.Option(1, "--quantity", "-q", help="Handling units"),
    packaging: PackagingType = typer.Option(PackagingType.PALLET, "--packaging"),
    freight_class: Optional[float] = typer.Option(None, "--freight-class", help="Declared class"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show derived quantities (cubic feet, density, class, billable weight)."""
    cfg = _load()
    try:
        pkg = _build_package(
            cfg, quantity, weight, weight_unit, dims, dim_unit, packaging.value, freight_class
        )
    except FreightRateError as e:
        console.print(f"[red]{format_error(e)}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    output = format_package_table(pkg, as_json=as_json)
    if as_json:
        typer.echo(output)
    else:
        console.print(output)


@app.command()
def validate(
    carrier: str = typer.Option(..., "--carrier", help="Configured carrier name"),
    tariff: Optional[str] = typer.Option(None, "--tariff", help="Configured tariff name"),
    weight: float = typer.Option(..., "--weight", help="Total weight of the line"),
    weight_unit: str = typer.Option("lb", "--weight-unit", help="lb, kg, oz, g"),
    dims: Optional[str] = typer.Option(None, "--dims", help="H x W x L, e.g. 48x40x48"),
    dim_unit: str = typer.Option("in", "--dim-unit", help="in or cm"),
    quantity: int = typer.Option(1, "--quantity", "-q", help="Handling units"),
    packaging: PackagingType = typer.Option(PackagingType.PALLET, "--packaging"),
    accessorial: list[str] = typer.Option([], "--accessorial", "-a", help="Requested accessorial"),
):
    """Check whether a configured carrier can service a single-line shipment."""
    cfg = _load()
    try:
        capability = cfg.capability(carrier)
        tariff_obj = cfg.tariff(tariff) if tariff else None
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(1)

    try:
        pkg = _build_package(
            cfg, quantity, weight, weight_unit, dims, dim_unit, packaging.value, None
        )
        validate_packages(capability, [pkg], tariff_obj)
        carrier_codes = map_accessorials(capability, accessorial)
    except FreightRateError as e:
        console.print(f"[red]{format_error(e)}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]{capability.name} can service this shipment.[/green]")
    if carrier_codes:
        console.print(f"  Accessorial codes: {', '.join(carrier_codes)}")
    if tariff_obj is not None:
        result = evaluate_overlength_fee(capability, tariff_obj, pkg)
        if result.outcome == OverlengthOutcome.NO_RULE_MATCHED:
            console.print(
                f"  [yellow]Overlength: no tariff rule covers {result.longest_side_in:g} in[/yellow]"
            )
        else:
            console.print(f"  Overlength fee: {format_cost(result.fee_cents)}")


# --- Config commands ---


@config_app.command("show")
def config_show():
    """Display resolved configuration."""
    cfg = _load()
    defaults = cfg.package_defaults
    console.print("[bold]Package defaults:[/bold]")
    console.print(f"  units: {defaults.units.value}")
    console.print(f"  dim_weight_mode: {defaults.dim_weight_mode.value}")
    console.print(f"\n[bold]Logging:[/bold] {cfg.logging.level}")

    if cfg.carriers:
        console.print(f"\n[bold]Carriers ({len(cfg.carriers)}):[/bold]")
        for name in sorted(cfg.carriers):
            cap = cfg.capability(name)
            console.print(
                f"  {name}: max height {cap.maximum_height}, max weight {cap.maximum_weight}, "
                f"overlength from {cap.minimum_length_for_overlength_fees}"
            )
    if cfg.tariffs:
        console.print(f"\n[bold]Tariffs ({len(cfg.tariffs)}):[/bold]")
        for name, tariff_cfg in sorted(cfg.tariffs.items()):
            console.print(f"  {name}: {len(tariff_cfg.overlength_rules)} overlength rule(s)")


if __name__ == "__main__":
    app()
