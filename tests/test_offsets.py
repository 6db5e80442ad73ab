"""Tests for the removals / offsets classifier."""

from decimal import Decimal

import pytest

from ghg_disclosure.exceptions import DuplicateOffsetError
from ghg_disclosure.offsets import REMOVAL_TYPES, classify_offsets, is_removal


class TestIsRemoval:
    """Removal project types."""

    @pytest.mark.parametrize("offset_type", [
        "Reforestation", "afforestation", "Direct Air Capture",
        "carbon_sequestration", "Carbon-Sequestration", " sequestration ",
    ])
    def test_removals(self, offset_type):
        """Projects that remove CO2 are removals."""
        assert is_removal(offset_type)

    @pytest.mark.parametrize("offset_type", ["Renewable Energy", "cookstoves", "methane capture"])
    def test_avoided(self, offset_type):
        """Everything else is avoided emissions."""
        assert not is_removal(offset_type)

    def test_removal_types_frozen(self):
        """The removal set is immutable."""
        assert isinstance(REMOVAL_TYPES, frozenset)


class TestClassifyOffsets:
    """Credit classification and quality."""

    def test_split_and_totals(self, offset_factory):
        """Removals and avoided emissions are summed separately."""
        report = classify_offsets([
            offset_factory("C-1", "Reforestation", "100", cost="12.5"),
            offset_factory("C-2", "Renewable Energy", "40"),
            offset_factory("C-3", "Direct Air Capture", "10"),
        ], reporting_period_id="2025")

        assert report.total_removals_tco2e == Decimal("110.00")
        assert report.total_avoided_tco2e == Decimal("40.00")
        assert report.total_tco2e == Decimal("150.00")
        assert [e.offset_id for e in report.removals] == ["C-1", "C-3"]
        assert [e.offset_id for e in report.avoided_emissions] == ["C-2"]
        assert report.credit_count == 3
        assert report.removals[0].total_cost == Decimal("1250.00")
        assert report.certification_standards == ["Gold Standard"]
        assert report.quality.offsets_claimed is True
        assert report.quality.all_certified is True
        assert report.held_tco2e == Decimal("0.00")

    def test_quality_flags(self, offset_factory):
        """Quality flags are AND-reductions over all credits."""
        report = classify_offsets([
            offset_factory("C-1", "Reforestation", "10"),
            offset_factory("C-2", "Cookstoves", "5", certified=False, retired=False),
        ])

        assert report.quality.all_certified is False
        assert report.quality.all_verified is True
        assert report.quality.all_retired is False
        assert report.retired_count == 1
        assert report.held_tco2e == Decimal("5.00")
        assert "Retire credits to prevent double counting" in report.notes

    def test_empty_input(self):
        """No credits: vacuously true flags, but nothing claimed."""
        report = classify_offsets([])

        assert report.credit_count == 0
        assert report.total_tco2e == Decimal("0.00")
        assert report.quality.offsets_claimed is False
        assert report.quality.all_certified is True
        assert report.quality.all_retired is True

    def test_duplicate_offset_raises(self, offset_factory):
        """The same credit cannot be claimed twice."""
        with pytest.raises(DuplicateOffsetError) as exc_info:
            classify_offsets([
                offset_factory("C-1", "Reforestation", "10"),
                offset_factory("C-1", "Reforestation", "10"),
            ])
        assert exc_info.value.context["offset_ids"] == ["C-1"]

    def test_missing_ids_not_duplicates(self, offset_factory):
        """Credits without an ID are not compared."""
        report = classify_offsets([
            offset_factory(None, "Reforestation", "10"),
            offset_factory(None, "Reforestation", "10"),
        ])

        assert report.credit_count == 2
