# -*- coding: utf-8 -*-
"""
Prometheus Metrics - GHG Disclosure Engine

Process-wide collectors for engine monitoring. The collectors are
write-only from the engine's point of view: nothing in the engine reads
them back, so every report stays a pure function of its inputs.

Metrics:
    1. gl_disclosure_operations_total (Counter)
    2. gl_disclosure_operation_duration_seconds (Histogram)
    3. gl_disclosure_records_processed_total (Counter)
    4. gl_disclosure_findings_total (Counter)
    5. gl_disclosure_data_gaps_total (Counter)

All helper functions are no-ops when ``enable_metrics`` is false in the
configuration passed as ``config``, or in the global configuration when
none is passed.
"""

from __future__ import annotations

import logging
from typing import Optional

from prometheus_client import Counter, Histogram

from ghg_disclosure.config import DisclosureConfig, get_config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# 1. Operations count
disclosure_operations_total = Counter(
    "gl_disclosure_operations_total",
    "Total disclosure engine operations performed",
    labelnames=["operation", "result"],
)

# 2. Operation duration
disclosure_operation_duration_seconds = Histogram(
    "gl_disclosure_operation_duration_seconds",
    "Disclosure engine operation duration in seconds",
    labelnames=["operation"],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
)

# 3. Input records processed
disclosure_records_processed_total = Counter(
    "gl_disclosure_records_processed_total",
    "Total input records consumed by engine operations",
    labelnames=["operation"],
)

# 4. Compliance findings by status
disclosure_findings_total = Counter(
    "gl_disclosure_findings_total",
    "Total compliance findings emitted",
    labelnames=["status"],
)

# 5. Soft data gaps (null intensity, missing scope, non-reduction target)
disclosure_data_gaps_total = Counter(
    "gl_disclosure_data_gaps_total",
    "Total business-data gaps reported as nulls or findings",
    labelnames=["kind"],
)


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def _enabled(config: Optional[DisclosureConfig]) -> bool:
    return (config or get_config()).enable_metrics


def record_operation(
    operation: str,
    result: str,
    duration_seconds: float,
    config: Optional[DisclosureConfig] = None,
) -> None:
    """Record an engine operation.

    Args:
        operation: Operation name (aggregate, compute_intensity, ...).
        result: Operation result ("success" or "error").
        duration_seconds: Operation duration in seconds.
        config: Active configuration; the global config when None.
    """
    if not _enabled(config):
        return
    disclosure_operations_total.labels(operation=operation, result=result).inc()
    disclosure_operation_duration_seconds.labels(operation=operation).observe(
        duration_seconds,
    )


def record_records_processed(
    operation: str, count: int, config: Optional[DisclosureConfig] = None,
) -> None:
    """Record how many input records an operation consumed.

    Args:
        operation: Operation name.
        count: Number of records.
    """
    if not _enabled(config) or count <= 0:
        return
    disclosure_records_processed_total.labels(operation=operation).inc(count)


def record_finding(status: str, config: Optional[DisclosureConfig] = None) -> None:
    """Record a compliance finding.

    Args:
        status: Finding status ("pass", "warning" or "error").
    """
    if not _enabled(config):
        return
    disclosure_findings_total.labels(status=status).inc()


def record_data_gap(kind: str, config: Optional[DisclosureConfig] = None) -> None:
    """Record a business-data gap.

    Args:
        kind: Gap kind, e.g. "revenue_missing" or "scope2_market_based_missing".
    """
    if not _enabled(config):
        return
    disclosure_data_gaps_total.labels(kind=kind).inc()


__all__ = [
    # Metric objects
    "disclosure_operations_total",
    "disclosure_operation_duration_seconds",
    "disclosure_records_processed_total",
    "disclosure_findings_total",
    "disclosure_data_gaps_total",
    # Helper functions
    "record_operation",
    "record_records_processed",
    "record_finding",
    "record_data_gap",
]
