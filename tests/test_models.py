"""Tests for input model validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from ghg_disclosure.models import (
    ActivityCategory,
    ActivityEmissionRecord,
    ClimateTarget,
    EnergyRecord,
    EnergyUnit,
)


class TestActivityEmissionRecord:
    """Emission record validation."""

    def test_coercion(self):
        """Strings and floats become Decimals without float noise."""
        record = ActivityEmissionRecord(
            activity_category=" Electricity ",
            scope="SCOPE_2",
            co2e_total="1.10",
            co2e_market_based=0.5,
            reporting_period_id="2025",
        )

        assert record.activity_category == ActivityCategory.ELECTRICITY
        assert record.co2e_total == Decimal("1.10")
        assert record.co2e_market_based == Decimal("0.5")
        assert record.biogenic_co2 == Decimal("0")

    def test_other_scope_rejected(self):
        """Emission records cannot be filed under OTHER."""
        with pytest.raises(ValidationError):
            ActivityEmissionRecord(
                activity_category="offsets", scope="OTHER",
                co2e_total="1", reporting_period_id="2025",
            )

    def test_market_based_only_on_scope2(self):
        """Market-based values belong to Scope 2 records."""
        with pytest.raises(ValidationError):
            ActivityEmissionRecord(
                activity_category="stationary_combustion", scope="SCOPE_1",
                co2e_total="1", co2e_market_based="1", reporting_period_id="2025",
            )

    def test_frozen(self):
        """Records cannot be modified after construction."""
        record = ActivityEmissionRecord(
            activity_category="waste", scope="SCOPE_3",
            co2e_total="1", reporting_period_id="2025",
        )
        with pytest.raises(ValidationError):
            record.co2e_total = Decimal("2")

    def test_extra_fields_rejected(self):
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            ActivityEmissionRecord(
                activity_category="waste", scope="SCOPE_3", co2e_total="1",
                reporting_period_id="2025", net_of_offsets=True,
            )


class TestEnergyRecord:
    """Energy record validation."""

    def test_unit_parsed(self):
        """Unit labels are case-insensitive."""
        record = EnergyRecord(source="fuel", quantity="5", unit="MMBtu")
        assert record.unit == EnergyUnit.MMBTU

    def test_negative_quantity(self):
        """Negative quantities are rejected."""
        with pytest.raises(ValidationError):
            EnergyRecord(source="fuel", quantity="-5", unit="kWh")


class TestClimateTarget:
    """Target validation."""

    def test_requires_target_level(self):
        """A target needs a percentage or an absolute level."""
        with pytest.raises(ValidationError):
            ClimateTarget(
                base_year=2020, base_year_emissions="100", target_year=2030,
                last_measured_year=2024, last_measured_emissions="90",
            )

    def test_percentage_bounds(self):
        """Reduction percentages lie between 0 and 100."""
        with pytest.raises(ValidationError):
            ClimateTarget(
                base_year=2020, base_year_emissions="100", target_year=2030,
                target_reduction_percentage="120",
                last_measured_year=2024, last_measured_emissions="90",
            )
