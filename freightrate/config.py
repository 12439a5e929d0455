"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. explicit path (``--config`` on the CLI)
2. ./freightrate.yaml (working directory)
3. ~/.freightrate/config.yaml (user home)

Environment variables override YAML: FREIGHTRATE_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.

Carrier and tariff sections describe static carrier limits and fee
schedules; they convert into the immutable engine records via
``to_capability()`` / ``to_tariff()``.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.freight_constants import (
    DEFAULT_MAXIMUM_HEIGHT_IN,
    DEFAULT_MAXIMUM_WEIGHT_LBS,
    DEFAULT_MINIMUM_OVERLENGTH_IN,
)
from freightrate.services.package import DimWeightMode, PackageDefaults
from freightrate.services.tariff import OverlengthRule, Tariff
from freightrate.services.units import (
    Length,
    UnitSystem,
    Weight,
    parse_length_unit,
    parse_mass_unit,
)

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve ${VAR} references in a nested data structure."""
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class LoggingConfig(BaseModel):
    """Logging for the CLI process."""

    level: str = "warning"
    format: str = "%(levelname)s:%(name)s:%(message)s"
    file: str | None = None


class PackageDefaultsConfig(BaseModel):
    """Defaults applied to every Package built from this config."""

    units: UnitSystem = UnitSystem.METRIC
    weight_units: UnitSystem | None = None
    dim_units: UnitSystem | None = None
    dim_weight_mode: DimWeightMode = DimWeightMode.IATA
    currency: str | None = None

    def to_defaults(self) -> PackageDefaults:
        return PackageDefaults(
            units=self.units,
            weight_units=self.weight_units,
            dim_units=self.dim_units,
            dim_weight_mode=self.dim_weight_mode,
            currency=self.currency,
        )


class LengthConfig(BaseModel):
    """A length such as ``{value: 48, unit: in}``."""

    value: float = Field(ge=0)
    unit: str = "in"

    @field_validator("unit")
    @classmethod
    def known_unit(cls, unit: str) -> str:
        return parse_length_unit(unit).value

    def to_length(self) -> Length:
        return Length(self.value, parse_length_unit(self.unit))


class WeightConfig(BaseModel):
    """A weight such as ``{value: 10000, unit: lb}``."""

    value: float = Field(ge=0)
    unit: str = "lb"

    @field_validator("unit")
    @classmethod
    def known_unit(cls, unit: str) -> str:
        return parse_mass_unit(unit).value

    def to_weight(self) -> Weight:
        return Weight(self.value, parse_mass_unit(self.unit))


class AccessorialsConfig(BaseModel):
    """Accessorial sets a carrier declares."""

    mappable: dict[str, str] = {}
    unquotable: list[str] = []
    unserviceable: list[str] = []


class CarrierConfig(BaseModel):
    """Static limits for one carrier."""

    name: str = ""
    maximum_height: LengthConfig = LengthConfig(value=DEFAULT_MAXIMUM_HEIGHT_IN)
    maximum_weight: WeightConfig = WeightConfig(value=DEFAULT_MAXIMUM_WEIGHT_LBS)
    minimum_length_for_overlength_fees: LengthConfig = LengthConfig(
        value=DEFAULT_MINIMUM_OVERLENGTH_IN
    )
    overlength_fees_require_tariff: bool = True
    accessorials: AccessorialsConfig = AccessorialsConfig()

    def to_capability(self, name: str | None = None) -> CarrierCapability:
        return CarrierCapability(
            name=self.name or name or "",
            maximum_height=self.maximum_height.to_length(),
            maximum_weight=self.maximum_weight.to_weight(),
            minimum_length_for_overlength_fees=self.minimum_length_for_overlength_fees.to_length(),
            overlength_fees_require_tariff=self.overlength_fees_require_tariff,
            mappable=self.accessorials.mappable,
            unquotable=self.accessorials.unquotable,
            unserviceable=self.accessorials.unserviceable,
        )


class OverlengthRuleConfig(BaseModel):
    """One overlength fee row."""

    min_length: LengthConfig
    max_length: LengthConfig | None = None
    fee_cents: int = Field(ge=0)

    @model_validator(mode="after")
    def ordered_bounds(self) -> "OverlengthRuleConfig":
        """Reject rules whose max is below their min."""
        if self.max_length is not None and self.max_length.to_length() < self.min_length.to_length():
            raise ValueError("max_length must not be below min_length")
        return self

    def to_rule(self) -> OverlengthRule:
        return OverlengthRule(
            min_length=self.min_length.to_length(),
            max_length=self.max_length.to_length() if self.max_length else None,
            fee_cents=self.fee_cents,
        )


class TariffConfig(BaseModel):
    """A named overlength fee schedule."""

    overlength_rules: list[OverlengthRuleConfig] = []

    def to_tariff(self) -> Tariff:
        return Tariff([rule.to_rule() for rule in self.overlength_rules])


class FreightRateConfig(BaseModel):
    """Top-level configuration for freightrate."""

    logging: LoggingConfig = LoggingConfig()
    package_defaults: PackageDefaultsConfig = PackageDefaultsConfig()
    carriers: dict[str, CarrierConfig] = {}
    tariffs: dict[str, TariffConfig] = {}

    def capability(self, carrier: str) -> CarrierCapability:
        """Build the capability record for a configured carrier.

        Raises:
            KeyError: If the carrier is not configured.
        """
        if carrier not in self.carriers:
            raise KeyError(f"Carrier '{carrier}' is not configured")
        return self.carriers[carrier].to_capability(name=carrier)

    def tariff(self, name: str) -> Tariff:
        """Build a configured tariff.

        Raises:
            KeyError: If the tariff is not configured.
        """
        if name not in self.tariffs:
            raise KeyError(f"Tariff '{name}' is not configured")
        return self.tariffs[name].to_tariff()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations."""
    candidates = [
        Path.cwd() / "freightrate.yaml",
        Path.cwd() / "freightrate.yml",
        Path.home() / ".freightrate" / "config.yaml",
        Path.home() / ".freightrate" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _coerce(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        pass
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply FREIGHTRATE_<SECTION>_<KEY> env var overrides to config data.

    Only flat sections (logging, package_defaults) are overridable. Section
    names match by longest prefix so ``FREIGHTRATE_PACKAGE_DEFAULTS_UNITS``
    maps to section ``package_defaults``, field ``units``.

    Args:
        data: Parsed YAML config dict.

    Returns:
        Config dict with env var overrides applied.
    """
    prefix = "FREIGHTRATE_"
    known_sections = sorted(("logging", "package_defaults"), key=len, reverse=True)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix):].lower()
        matched_section = None
        matched_field = None
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix):
                matched_section = section
                matched_field = suffix[len(section_prefix):]
                break
        if matched_section is None or not matched_field:
            continue
        section_data = data.setdefault(matched_section, {})
        if isinstance(section_data, dict):
            section_data[matched_field] = _coerce(value)
    return data


def load_config(config_path: str | None = None) -> FreightRateConfig | None:
    """Load freightrate configuration from YAML file with env var resolution.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.freightrate/).

    Returns:
        Parsed and validated FreightRateConfig, or None if no config found.

    Raises:
        FileNotFoundError: If config_path is given but does not exist.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()
        if path is None:
            return None

    logger.info("Loading config from %s", path)

    with open(path) as f:
        raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)

    return FreightRateConfig(**data)
