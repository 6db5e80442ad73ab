"""Tests for the compliance validator."""

import pytest

from ghg_disclosure.aggregator import aggregate
from ghg_disclosure.compliance import INSUFFICIENT_DATA_MESSAGE, validate
from ghg_disclosure.config import DisclosureConfig
from ghg_disclosure.models import DisclosureStandard, FindingStatus
from ghg_disclosure.offsets import classify_offsets


def _statuses(report):
    return {f.check_name: f.status for f in report.findings}


class TestValidate:
    """Ordered findings and the compliance verdict."""

    def test_all_scopes_present(self, mixed_scope_records):
        """A complete report passes every scope check."""
        report = validate(aggregate(mixed_scope_records))

        assert report.is_compliant is True
        assert report.error_count == 0
        statuses = _statuses(report)
        assert statuses["SCOPE_1_calculated"] == FindingStatus.PASS
        assert statuses["SCOPE_2_calculated"] == FindingStatus.PASS
        assert statuses["SCOPE_3_calculated"] == FindingStatus.PASS
        assert statuses["biogenic_co2_separated"] == FindingStatus.PASS
        assert [f.check_name for f in report.findings][:3] == [
            "SCOPE_1_calculated", "SCOPE_2_calculated", "SCOPE_3_calculated",
        ]

    def test_scope3_only_not_compliant(self, scope3_only_records):
        """Scope 3 alone is not enough."""
        report = validate(aggregate(scope3_only_records))

        assert report.is_compliant is False
        assert report.error_count == 1
        assert report.warning_count == 2
        error = next(f for f in report.findings if f.status == FindingStatus.ERROR)
        assert error.message == INSUFFICIENT_DATA_MESSAGE
        assert "No activities recorded for SCOPE_1" in report.findings[0].message

    def test_no_activity_report(self):
        """An empty period is not compliant."""
        scope_report = aggregate([], reporting_period_id="2025", no_activity=True)

        report = validate(scope_report)

        assert report.is_compliant is False
        assert report.warning_count == 3
        assert report.error_count == 1

    def test_scope2_dual_reporting_warning(self, record_factory):
        """ESRS E1 expects market-based Scope 2 alongside location-based."""
        scope_report = aggregate([record_factory("electricity", "SCOPE_2", "5")])

        esrs = validate(scope_report, standard="ESRS_E1")
        ghg = validate(scope_report, standard=DisclosureStandard.GHG_PROTOCOL)

        assert _statuses(esrs)["scope2_dual_reporting"] == FindingStatus.WARNING
        assert "scope2_dual_reporting" not in _statuses(ghg)
        assert esrs.is_compliant is True

    def test_standard_from_config(self, mixed_scope_records):
        """The configured standard is used by default."""
        cfg = DisclosureConfig(standard="GHG_PROTOCOL")

        report = validate(aggregate(mixed_scope_records), config=cfg)

        assert report.standard == DisclosureStandard.GHG_PROTOCOL

    def test_unknown_standard(self, mixed_scope_records):
        """Unsupported standards are rejected."""
        with pytest.raises(ValueError):
            validate(aggregate(mixed_scope_records), standard="ISO_14064")

    def test_offset_quality_warnings(self, mixed_scope_records, offset_factory):
        """Each failed quality criterion produces a warning."""
        offsets = classify_offsets([
            offset_factory("C-1", "Reforestation", "10", verified=False, retired=False),
        ])

        report = validate(aggregate(mixed_scope_records), offsets)

        statuses = _statuses(report)
        assert statuses["offsets_verified"] == FindingStatus.WARNING
        assert statuses["offsets_retired"] == FindingStatus.WARNING
        assert "offsets_certified" not in statuses
        retired = next(f for f in report.findings if f.check_name == "offsets_retired")
        assert "double counting" in retired.message
        assert report.is_compliant is True

    def test_offset_quality_pass(self, mixed_scope_records, offset_factory):
        """Fully certified, verified and retired credits pass."""
        offsets = classify_offsets([offset_factory("C-1", "Reforestation", "10")])

        report = validate(aggregate(mixed_scope_records), offsets)

        assert _statuses(report)["offsets_quality"] == FindingStatus.PASS

    def test_no_offsets_claimed(self, mixed_scope_records):
        """An empty offsets report adds no findings."""
        scope_report = aggregate(mixed_scope_records)

        with_empty = validate(scope_report, classify_offsets([]))
        without = validate(scope_report)

        assert with_empty.findings == without.findings

    def test_counts_match_findings(self, scope3_only_records):
        """Status counts add up to the number of findings."""
        report = validate(aggregate(scope3_only_records))

        assert report.pass_count + report.warning_count + report.error_count == len(report.findings)

    def test_input_not_mutated(self, mixed_scope_records):
        """Validation leaves the scope report untouched."""
        scope_report = aggregate(mixed_scope_records)
        before = scope_report.model_dump()

        validate(scope_report)

        assert scope_report.model_dump() == before
