"""Tests for the energy disclosure builder."""

from decimal import Decimal

import pytest

from ghg_disclosure.config import DisclosureConfig
from ghg_disclosure.energy import (
    FUEL_RENEWABILITY,
    build_energy_report,
    is_renewable_fuel,
)
from ghg_disclosure.exceptions import UnknownFuelTypeError, UnsupportedUnitError
from ghg_disclosure.models import EnergyRecord

#: Stationary fuel labels as recorded upstream, with their expected flag.
STATIONARY_FUELS = [
    ("Anthracite Coal", False),
    ("Bituminous Coal", False),
    ("Sub-bituminous Coal", False),
    ("Lignite Coal", False),
    ("Mixed (Commercial Sector)", False),
    ("Mixed (Electric Power Sector)", False),
    ("Mixed (Industrial Coking)", False),
    ("Mixed (Industrial Sector)", False),
    ("Coal Coke", False),
    ("Municipal Solid Waste", False),
    ("Petroleum Coke (Solid)", False),
    ("Plastics", False),
    ("Tires", False),
    ("Agricultural Byproducts", True),
    ("Peat", True),
    ("Solid Byproducts", True),
    ("Wood and Wood Residuals", True),
    ("Natural Gas", False),
    ("Propane Gas", False),
    ("Landfill Gas", True),
    ("Butane", False),
    ("Ethane", False),
    ("Fuel Gas", False),
    ("Compressed Natural Gas (CNG)", False),
    ("Aviation Gasoline", False),
    ("Jet Fuel", False),
    ("Distillate Fuel Oil No. 2", False),
    ("Residual Fuel Oil No. 6", False),
    ("Kerosene", False),
    ("Liquefied Petroleum Gases (LPG)", False),
    ("Biodiesel (100%)", True),
    ("Ethanol (100%)", True),
    ("Rendered Animal Fat", True),
    ("Vegetable Oil", True),
    ("Diesel Fuel", False),
    ("Distillate Fuel Oil No. 1", False),
    ("Distillate Fuel Oil No. 4", False),
    ("Motor Gasoline", False),
    ("Residual Fuel Oil No. 5", False),
    ("Crude Oil", False),
    ("Heavy Gas Oils", False),
    ("Petroleum Coke (Liquid)", False),
]


class TestBuildEnergyReport:
    """Energy totals and renewable mix."""

    def test_mixed_units_and_share(self, energy_records):
        """1000 kWh plus 3600 MJ renewable gives 2 MWh at 50 percent."""
        report = build_energy_report(energy_records, reporting_period_id="2025")

        assert report.total_energy_mwh == Decimal("2.00")
        assert report.total_energy_gj == Decimal("7.20")
        assert report.breakdown.electricity_mwh == Decimal("2.00")
        assert report.renewable.total_renewable_mwh == Decimal("1.00")
        assert report.renewable.renewable_percentage == Decimal("50.0")
        assert report.renewable.renewable_electricity_mwh == Decimal("1.00")
        assert report.non_renewable.total_non_renewable_mwh == Decimal("1.00")
        assert report.non_renewable.percentage == Decimal("50.0")
        assert report.record_count == 2

    def test_breakdown_by_source(self):
        """Electricity, fuel and steam are totalled separately."""
        report = build_energy_report([
            EnergyRecord(source="electricity", quantity="1", unit="MWh"),
            EnergyRecord(source="fuel", quantity="7.2", unit="GJ", fuel_type="Natural Gas"),
            EnergyRecord(source="steam", quantity="500", unit="kWh", renewable=True),
        ])

        assert report.breakdown.electricity_mwh == Decimal("1.00")
        assert report.breakdown.fuel_mwh == Decimal("2.00")
        assert report.breakdown.steam_heating_mwh == Decimal("0.50")
        assert report.renewable.renewable_steam_mwh == Decimal("0.50")
        assert report.total_energy_mwh == Decimal("3.50")

    def test_fuel_table_overrides_flag(self):
        """A biomass fuel is renewable even when the record says otherwise."""
        report = build_energy_report([
            EnergyRecord(source="fuel", quantity="1", unit="MWh",
                         fuel_type="Wood Pellets", renewable=False),
        ])

        assert report.renewable.renewable_fuel_mwh == Decimal("1.00")
        assert any("Wood Pellets" in note for note in report.notes)

    def test_fossil_flag_overridden(self):
        """A fossil fuel flagged renewable is counted as non-renewable."""
        report = build_energy_report([
            EnergyRecord(source="fuel", quantity="1", unit="MWh",
                         fuel_type="diesel", renewable=True),
        ])

        assert report.renewable.renewable_percentage == Decimal("0.0")
        assert report.non_renewable.percentage == Decimal("100.0")

    def test_fuel_without_type_uses_flag(self):
        """Fuel records without a fuel type keep their own flag."""
        report = build_energy_report([
            EnergyRecord(source="fuel", quantity="1", unit="MWh", renewable=True),
        ])

        assert report.renewable.renewable_fuel_mwh == Decimal("1.00")
        assert report.notes == []

    def test_unknown_fuel_raises(self):
        """An unclassified fuel type is a contract violation."""
        with pytest.raises(UnknownFuelTypeError):
            build_energy_report([
                EnergyRecord(source="fuel", quantity="1", unit="MWh", fuel_type="unobtainium"),
            ])

    def test_many_small_records_sum_exactly(self):
        """3600 records of 1 MJ give exactly 1 MWh at any precision."""
        cfg = DisclosureConfig(energy_precision=12)
        records = [EnergyRecord(source="electricity", quantity="1", unit="MJ")] * 3600

        report = build_energy_report(records, config=cfg)

        assert report.total_energy_mwh == Decimal("1")
        assert str(report.total_energy_mwh) == "1." + "0" * 12
        assert report.total_energy_gj == Decimal("3.6")

    def test_empty_input(self):
        """No records give a zero report with a note."""
        report = build_energy_report([])

        assert report.total_energy_mwh == Decimal("0.00")
        assert report.renewable.renewable_percentage == Decimal("0.0")
        assert report.non_renewable.percentage == Decimal("0.0")
        assert report.notes == ["No energy records supplied for this reporting period"]

    def test_unsupported_unit(self):
        """Units outside the converter table are rejected."""
        with pytest.raises(UnsupportedUnitError):
            build_energy_report([
                EnergyRecord.model_construct(source="electricity", quantity=Decimal("1"),
                                             unit="therm", renewable=False, fuel_type=None),
            ])


class TestFuelRenewability:
    """Static fuel classification."""

    @pytest.mark.parametrize("fuel", [
        "Wood and Wood Residuals", "wood chips", "Biodiesel (100%)", "ETHANOL",
        "landfill gas", "Rendered Animal Fat", "vegetable oil",
    ])
    def test_renewable(self, fuel):
        """Biomass-derived fuels are renewable."""
        assert is_renewable_fuel(fuel) is True

    @pytest.mark.parametrize("fuel", [
        "Natural Gas", "Distillate Fuel Oil No. 2", "lignite coal", "Sub-bituminous Coal",
        "Motor Gasoline", "Municipal Solid Waste", "propane gas",
    ])
    def test_fossil(self, fuel):
        """Fossil fuels are non-renewable."""
        assert is_renewable_fuel(fuel) is False

    def test_unknown(self):
        """Unknown fuel types raise."""
        with pytest.raises(UnknownFuelTypeError) as exc_info:
            is_renewable_fuel("plasma")
        assert exc_info.value.fuel_type == "plasma"

    def test_table_is_read_only(self):
        """The table cannot be changed at runtime."""
        with pytest.raises(TypeError):
            FUEL_RENEWABILITY["plasma"] = True

    @pytest.mark.parametrize("fuel,renewable", STATIONARY_FUELS)
    def test_every_recorded_fuel(self, fuel, renewable):
        """Every recorded stationary fuel label is classified."""
        assert is_renewable_fuel(fuel) is renewable

    @pytest.mark.parametrize("fuel,renewable", STATIONARY_FUELS)
    def test_recorded_fuel_in_report(self, fuel, renewable):
        """A fuel record naming any recorded fuel builds a report."""
        report = build_energy_report([
            EnergyRecord(source="fuel", quantity="10", unit="MWh",
                         fuel_type=fuel, renewable=renewable),
        ])

        expected = Decimal("10.00") if renewable else Decimal("0.00")
        assert report.renewable.renewable_fuel_mwh == expected
        assert report.notes == []
