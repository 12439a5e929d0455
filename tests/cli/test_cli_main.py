"""Tests for the freightrate CLI commands."""

import json
import logging

import pytest
from typer.testing import CliRunner

from freightrate.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep real config files out and restore logging after each command."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(write_config, sample_config_data) -> str:
    return str(write_config(sample_config_data))


class TestClassifyCommand:
    """freightrate classify."""

    @pytest.mark.parametrize("density,expected", [("9.38", "100"), ("11", "92.5"), ("0.5", "400")])
    def test_prints_class(self, density, expected):
        result = runner.invoke(app, ["classify", density])
        assert result.exit_code == 0
        assert result.stdout.strip() == expected


class TestPackageCommand:
    """freightrate package."""

    def test_json_output(self):
        result = runner.invoke(
            app, ["package", "--weight", "500", "--dims", "48x40x48", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["cubic_ft_each"] == 53.33
        assert data["density"] == 9.38
        assert data["freight_class"] == 100
        assert data["pallet"] is True

    def test_declared_class(self):
        result = runner.invoke(
            app,
            ["package", "--weight", "500", "--dims", "48x40x48", "--freight-class", "85", "--json"],
        )
        data = json.loads(result.stdout)
        assert data["freight_class"] == 85
        assert data["calculated_freight_class"] == 100

    def test_metric_units(self):
        result = runner.invoke(
            app,
            [
                "package", "--weight", "100", "--weight-unit", "kg",
                "--dims", "100x100x100", "--dim-unit", "cm", "--packaging", "crate", "--json",
            ],
        )
        data = json.loads(result.stdout)
        assert data["packaging"] == "crate"
        assert data["pounds_total"] == pytest.approx(220.462, rel=1e-4)

    def test_table_output(self):
        result = runner.invoke(app, ["package", "--weight", "500", "--dims", "48x40x48"])
        assert result.exit_code == 0
        assert "Freight class" in result.stdout

    def test_invalid_package(self):
        result = runner.invoke(app, ["package", "--weight=-5", "--dims", "48x40x48"])
        assert result.exit_code == 1
        assert "E-1001" in result.stdout

    def test_unknown_weight_unit(self):
        result = runner.invoke(app, ["package", "--weight", "5", "--weight-unit", "stone"])
        assert result.exit_code == 1
        assert "Unknown mass unit" in result.stdout


class TestValidateCommand:
    """freightrate validate."""

    def test_serviceable_with_fee(self, config_file):
        result = runner.invoke(
            app,
            [
                "--config", config_file, "validate", "--carrier", "saia", "--tariff", "standard",
                "--weight", "500", "--dims", "48x40x100", "-a", "liftgate",
            ],
        )

        assert result.exit_code == 0
        assert "Saia can service this shipment." in result.stdout
        assert "Accessorial codes: LGD" in result.stdout
        assert "Overlength fee: $75.00" in result.stdout

    def test_uncovered_length_is_reported(self, config_file):
        result = runner.invoke(
            app,
            [
                "--config", config_file, "validate", "--carrier", "saia", "--tariff", "standard",
                "--weight", "500", "--dims", "48x40x48",
            ],
        )

        assert result.exit_code == 0
        assert "no tariff rule covers 48 in" in result.stdout

    def test_missing_tariff(self, config_file):
        result = runner.invoke(
            app,
            ["--config", config_file, "validate", "--carrier", "saia", "--weight", "500",
             "--dims", "48x40x60"],
        )

        assert result.exit_code == 1
        assert "E-2001: Unserviceable Shipment" in result.stdout
        assert "Tariff must be defined" in result.stdout

    def test_overweight(self, config_file):
        result = runner.invoke(
            app,
            ["--config", config_file, "validate", "--carrier", "saia", "--tariff", "standard",
             "--weight", "25000", "--dims", "48x40x48"],
        )

        assert result.exit_code == 1
        assert "Items must weigh 20000 lbs or less" in result.stdout

    def test_unserviceable_accessorial(self, config_file):
        result = runner.invoke(
            app,
            ["--config", config_file, "validate", "--carrier", "saia", "--tariff", "standard",
             "--weight", "500", "--dims", "48x40x48", "-a", "liftgate", "-a", "tarp"],
        )

        assert result.exit_code == 1
        assert "E-2002: Unserviceable Accessorials" in result.stdout
        assert "Unable to service tarp" in result.stdout

    def test_unknown_carrier(self, config_file):
        result = runner.invoke(
            app, ["--config", config_file, "validate", "--carrier", "ups", "--weight", "500"]
        )
        assert result.exit_code == 1
        assert "Carrier 'ups' is not configured" in result.stdout

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(
            app,
            ["--config", str(tmp_path / "missing.yaml"), "validate", "--carrier", "saia",
             "--weight", "500"],
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.stdout


class TestConfigShow:
    """freightrate config show."""

    def test_shows_carriers_and_tariffs(self, config_file):
        result = runner.invoke(app, ["--config", config_file, "config", "show"])

        assert result.exit_code == 0
        assert "units: imperial" in result.stdout
        assert "saia: max height 96 in" in result.stdout
        assert "standard: 2 overlength rule(s)" in result.stdout

    def test_defaults_without_config(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "units: metric" in result.stdout
        assert "dim_weight_mode: iata" in result.stdout


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "freightrate" in result.stdout
