"""Tests for Prometheus metric helpers."""

from prometheus_client import REGISTRY

from ghg_disclosure.aggregator import aggregate
from ghg_disclosure.compliance import validate
from ghg_disclosure.config import DisclosureConfig
from ghg_disclosure.setup import DisclosureService


def _sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetrics:
    """Collectors are updated only when enabled."""

    def test_operation_counted(self, mixed_scope_records):
        """A successful aggregation increments the operation counter."""
        before = _sample("gl_disclosure_operations_total", operation="aggregate", result="success")
        records_before = _sample("gl_disclosure_records_processed_total", operation="aggregate")

        aggregate(mixed_scope_records)

        assert _sample(
            "gl_disclosure_operations_total", operation="aggregate", result="success",
        ) == before + 1
        assert _sample(
            "gl_disclosure_records_processed_total", operation="aggregate",
        ) == records_before + 5

    def test_findings_counted(self, scope3_only_records):
        """Each finding increments its status counter."""
        scope_report = aggregate(scope3_only_records)
        before = _sample("gl_disclosure_findings_total", status="error")

        validate(scope_report)

        assert _sample("gl_disclosure_findings_total", status="error") == before + 1

    def test_disabled(self, metrics_disabled, mixed_scope_records):
        """No collector changes when metrics are disabled."""
        before = _sample("gl_disclosure_operations_total", operation="aggregate", result="success")

        aggregate(mixed_scope_records)

        assert _sample(
            "gl_disclosure_operations_total", operation="aggregate", result="success",
        ) == before

    def test_disabled_by_call_config(self, mixed_scope_records):
        """A per-call config with metrics off leaves the collectors alone."""
        before = _sample("gl_disclosure_operations_total", operation="aggregate", result="success")

        aggregate(mixed_scope_records, config=DisclosureConfig(enable_metrics=False))

        assert _sample(
            "gl_disclosure_operations_total", operation="aggregate", result="success",
        ) == before

    def test_disabled_by_service_config(self, mixed_scope_records):
        """A service built with metrics off does not update the collectors."""
        service = DisclosureService(DisclosureConfig(enable_metrics=False))
        before = _sample(
            "gl_disclosure_operations_total", operation="build_disclosure", result="success",
        )
        gaps_before = _sample("gl_disclosure_data_gaps_total", kind="revenue_missing")

        service.build_disclosure(mixed_scope_records)

        assert _sample(
            "gl_disclosure_operations_total", operation="build_disclosure", result="success",
        ) == before
        assert _sample("gl_disclosure_data_gaps_total", kind="revenue_missing") == gaps_before

    def test_enabled_by_call_config(self, metrics_disabled, mixed_scope_records):
        """A per-call config with metrics on counts even when the global one is off."""
        before = _sample("gl_disclosure_operations_total", operation="aggregate", result="success")

        aggregate(mixed_scope_records, config=DisclosureConfig(enable_metrics=True))

        assert _sample(
            "gl_disclosure_operations_total", operation="aggregate", result="success",
        ) == before + 1
