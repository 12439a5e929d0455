"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- Carrier capability records
- Reference packages and tariffs
- Config file writer
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from freightrate.services.carrier_capability import CarrierCapability
from freightrate.services.package import Package
from freightrate.services.tariff import OverlengthRule, Tariff
from freightrate.services.units import inches, pounds


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def capability() -> CarrierCapability:
    """LTL carrier with default limits and a small accessorial table."""
    return CarrierCapability(
        name="Test Freight",
        mappable={"liftgate": "LGD", "residential_delivery": "RES"},
        unquotable=["appointment"],
        unserviceable=["hazmat"],
    )


@pytest.fixture
def pallet() -> Package:
    """48 x 40 x 48 in pallet weighing 500 lb (density 9.38, class 100)."""
    return Package(1, pounds(500), [inches(48), inches(40), inches(48)], "pallet")


@pytest.fixture
def tiered_tariff() -> Tariff:
    """Overlength tiers at 8-10 ft, 10-12 ft, and 12 ft and over."""
    return Tariff([
        OverlengthRule(inches(96), inches(119.99), 7500),
        OverlengthRule(inches(120), inches(143.99), 10000),
        OverlengthRule(inches(144), None, 15000),
    ])


@pytest.fixture
def long_package() -> Callable[..., Package]:
    """Return a builder for a package whose length is longest_in (width 40, height 48)."""
    def _build(longest_in: float, quantity: int = 1) -> Package:
        return Package(
            quantity,
            pounds(300),
            [inches(48), inches(40), inches(longest_in)],
            "pallet",
        )

    return _build


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict], Path]:
    """Return a function that writes a dict as freightrate.yaml."""
    def _write(data: dict) -> Path:
        path = tmp_path / "freightrate.yaml"
        path.write_text(yaml.safe_dump(data))
        return path

    return _write


@pytest.fixture
def sample_config_data() -> dict:
    """Config with one carrier and one tariff."""
    return {
        "logging": {"level": "info"},
        "package_defaults": {"units": "imperial"},
        "carriers": {
            "saia": {
                "name": "Saia",
                "maximum_height": {"value": 96, "unit": "in"},
                "maximum_weight": {"value": 20000, "unit": "lb"},
                "accessorials": {
                    "mappable": {"liftgate": "LGD"},
                    "unquotable": ["appointment"],
                    "unserviceable": ["hazmat"],
                },
            },
        },
        "tariffs": {
            "standard": {
                "overlength_rules": [
                    {"min_length": {"value": 96}, "max_length": {"value": 143.99}, "fee_cents": 7500},
                    {"min_length": {"value": 144}, "fee_cents": 15000},
                ],
            },
        },
    }
