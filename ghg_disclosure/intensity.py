# -*- coding: utf-8 -*-
"""
Intensity Calculator - GHG intensity per business denominator

Computes total GHG emissions divided by revenue, employees (FTE), floor
area and production volume. A denominator that is absent, zero or negative
yields a null value with an explanatory note, never an exception and never
a ratio: missing business data is a reporting gap, not a contract
violation.

Example:
    >>> from ghg_disclosure.intensity import compute_intensity
    >>> report = compute_intensity(report.total_ghg, CompanyMetrics(revenue=1_000_000))
    >>> report.revenue_intensity.value
    Decimal('0.000035')
"""

from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Any, Optional

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.metrics import record_data_gap, record_operation
from ghg_disclosure.models import CompanyMetrics, IntensityMetric, IntensityReport
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import ZERO, round_decimal, safe_ratio, to_decimal

logger = logging.getLogger(__name__)

REVENUE_METRIC = "GHG intensity per net revenue"
EMPLOYEE_METRIC = "GHG intensity per employee"
FLOOR_AREA_METRIC = "GHG intensity per floor area"
PRODUCTION_METRIC = "GHG intensity per unit of production"


def compute_intensity(
    total_ghg: Any,
    metrics: Optional[CompanyMetrics] = None,
    *,
    config: Optional[DisclosureConfig] = None,
) -> IntensityReport:
    """Compute intensity ratios for a total GHG figure.

    Args:
        total_ghg: Total GHG emissions in tCO2e, non-negative.
        metrics: Company denominators; all ratios are null when None.
        config: Configuration override; the global config when None.

    Returns:
        IntensityReport with one IntensityMetric per denominator.

    Raises:
        ValueError: If total_ghg is negative.
    """
    start = time.monotonic()
    cfg = config or get_config()
    total = to_decimal(total_ghg)
    if total < ZERO:
        raise ValueError(f"total_ghg must be non-negative, got {total}")
    metrics = metrics or CompanyMetrics()

    report = IntensityReport(
        total_ghg=round_decimal(total, cfg.emissions_precision),
        revenue_intensity=_intensity(
            total, metrics.revenue,
            metric=REVENUE_METRIC,
            label="Revenue",
            unit=f"tCO2e/{metrics.revenue_currency}",
            description="Total GHG emissions divided by net revenue",
            places=cfg.revenue_intensity_precision,
            config=cfg,
        ),
        employee_intensity=_intensity(
            total, metrics.employees,
            metric=EMPLOYEE_METRIC,
            label="Employee",
            unit="tCO2e/FTE",
            description="Total GHG emissions divided by number of full-time employees",
            places=cfg.employee_intensity_precision,
            config=cfg,
        ),
        floor_area_intensity=_intensity(
            total, metrics.floor_area,
            metric=FLOOR_AREA_METRIC,
            label="Floor area",
            unit=f"tCO2e/{metrics.floor_area_unit}",
            description="Total GHG emissions divided by occupied floor area",
            places=cfg.area_intensity_precision,
            config=cfg,
        ),
        production_intensity=_intensity(
            total, metrics.production_units,
            metric=PRODUCTION_METRIC,
            label="Production",
            unit=f"tCO2e/{metrics.production_unit}",
            description="Total GHG emissions divided by units produced",
            places=cfg.production_intensity_precision,
            config=cfg,
        ),
    )

    record_operation("compute_intensity", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Computed intensity for total_ghg=%s: revenue=%s, employee=%s",
        report.total_ghg,
        report.revenue_intensity.value,
        report.employee_intensity.value,
    )
    return stamp(report)


def _intensity(
    total: Decimal,
    denominator: Any,
    *,
    metric: str,
    label: str,
    unit: str,
    description: str,
    places: int,
    config: DisclosureConfig,
) -> IntensityMetric:
    gap_kind = label.lower().replace(" ", "_")
    if denominator is None:
        record_data_gap(f"{gap_kind}_missing", config=config)
        logger.warning("%s data not provided; intensity not computed", label)
        return IntensityMetric(
            metric=metric, unit=unit, note=f"{label} data not provided",
        )

    denominator = to_decimal(denominator)
    ratio = safe_ratio(total, denominator)
    if ratio is None:
        record_data_gap(f"{gap_kind}_non_positive", config=config)
        logger.warning("%s denominator %s is not positive", label, denominator)
        return IntensityMetric(
            metric=metric,
            unit=unit,
            denominator=denominator,
            note=f"{label} must be positive; intensity not computed",
        )

    return IntensityMetric(
        metric=metric,
        value=round_decimal(ratio, places),
        unit=unit,
        denominator=denominator,
        description=description,
    )


__all__ = ["compute_intensity"]
