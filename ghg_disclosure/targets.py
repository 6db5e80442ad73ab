# -*- coding: utf-8 -*-
"""
Target Tracker - Progress towards GHG reduction targets (ESRS E1-4)

For a target set in ``base_year`` for ``target_year`` and the latest
measurement in ``last_measured_year``:

    expected = (last_measured_year - base_year) / (target_year - base_year)
    actual   = (base_emissions - last_emissions) / (base_emissions - target_emissions)
    on_track = actual >= expected

Both fractions are compared at full precision. A target whose level is not
below its base-year emissions is not a reduction target: actual progress
and ``on_track`` are null and the result carries a note explaining why.
"""

from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Iterable, List, Optional

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.exceptions import InvalidTargetRangeError
from ghg_disclosure.metrics import record_data_gap, record_operation, record_records_processed
from ghg_disclosure.models import ClimateTarget, TargetProgress, TargetsReport
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import HUNDRED, ZERO, round_decimal

logger = logging.getLogger(__name__)

_ONE = Decimal("1")


def target_emissions(target: ClimateTarget) -> Decimal:
    """Target-year emissions: the absolute level, else derived from the percentage."""
    if target.target_absolute_emissions is not None:
        return target.target_absolute_emissions
    return target.base_year_emissions * (_ONE - target.target_reduction_percentage / HUNDRED)


def track_progress(
    target: ClimateTarget,
    *,
    config: Optional[DisclosureConfig] = None,
) -> TargetProgress:
    """Compute expected and actual progress for one target.

    Args:
        target: The registered target with its latest measurement.
        config: Configuration override; the global config when None.

    Returns:
        TargetProgress with fractions, percentages and the on-track verdict.

    Raises:
        InvalidTargetRangeError: If target_year is not after base_year.
    """
    start = time.monotonic()
    cfg = config or get_config()
    if target.target_year <= target.base_year:
        raise InvalidTargetRangeError(
            f"target_year {target.target_year} must be after base_year {target.base_year}",
            base_year=target.base_year,
            target_year=target.target_year,
            context={"target_id": target.target_id} if target.target_id else None,
        )

    notes: List[str] = []
    goal = target_emissions(target)

    expected = (
        Decimal(target.last_measured_year - target.base_year)
        / Decimal(target.target_year - target.base_year)
    )

    in_range = target.base_year <= target.last_measured_year <= target.target_year
    if not in_range:
        record_data_gap("target_measurement_out_of_range", config=cfg)
        logger.warning(
            "Target %s: last measured year %d outside [%d, %d]",
            target.target_id, target.last_measured_year, target.base_year, target.target_year,
        )
        notes.append(
            f"Last measured year {target.last_measured_year} is outside the target "
            f"period {target.base_year}-{target.target_year}"
        )

    reduced = target.base_year_emissions - target.last_measured_emissions
    needed = target.base_year_emissions - goal
    actual: Optional[Decimal] = None
    on_track: Optional[bool] = None
    if needed > ZERO:
        actual = reduced / needed
        on_track = actual >= expected
    else:
        record_data_gap("target_not_a_reduction", config=cfg)
        logger.warning(
            "Target %s does not reduce emissions below base year (%s -> %s)",
            target.target_id, target.base_year_emissions, goal,
        )
        notes.append(
            "Target emissions are not below base year emissions; "
            "progress cannot be measured as a reduction"
        )

    p = cfg.progress_precision
    pct = cfg.percentage_precision
    progress = TargetProgress(
        target_id=target.target_id,
        target_type=target.target_type,
        scope_coverage=target.scope_coverage,
        base_year=target.base_year,
        base_year_emissions=target.base_year_emissions,
        target_year=target.target_year,
        target_reduction_percentage=target.target_reduction_percentage,
        target_absolute_emissions=round_decimal(goal, cfg.emissions_precision),
        last_measured_year=target.last_measured_year,
        last_measured_emissions=target.last_measured_emissions,
        emissions_reduced=round_decimal(reduced, cfg.emissions_precision),
        expected_progress_fraction=round_decimal(expected, p),
        expected_progress_percentage=round_decimal(expected * HUNDRED, pct),
        actual_progress_fraction=round_decimal(actual, p) if actual is not None else None,
        actual_progress_percentage=(
            round_decimal(actual * HUNDRED, pct) if actual is not None else None
        ),
        on_track=on_track,
        years_remaining=target.target_year - target.last_measured_year,
        measurement_in_range=in_range,
        science_based=target.science_based,
        paris_aligned=target.paris_aligned,
        notes=notes,
    )

    record_operation("track_progress", "success", time.monotonic() - start, config=cfg)
    logger.debug(
        "Target %s: expected=%s actual=%s on_track=%s",
        target.target_id, expected, actual, on_track,
    )
    return stamp(progress)


def track_targets(
    targets: Iterable[ClimateTarget],
    *,
    company_id: Optional[str] = None,
    config: Optional[DisclosureConfig] = None,
) -> TargetsReport:
    """Track every target of a company, ordered by target year.

    Raises:
        InvalidTargetRangeError: If any target has an invalid year range.
    """
    start = time.monotonic()
    ordered = sorted(targets, key=lambda t: t.target_year)
    progress = [track_progress(t, config=config) for t in ordered]

    notes: List[str] = []
    if not progress:
        record_data_gap("targets_missing", config=config)
        notes.append("No climate targets registered")

    report = TargetsReport(
        company_id=company_id,
        targets=progress,
        target_count=len(progress),
        science_based_targets=sum(1 for p in progress if p.science_based),
        paris_aligned_targets=sum(1 for p in progress if p.paris_aligned),
        on_track_count=sum(1 for p in progress if p.on_track is True),
        notes=notes,
    )

    record_records_processed("track_targets", len(progress), config=config)
    record_operation("track_targets", "success", time.monotonic() - start, config=config)
    logger.info(
        "Tracked %d targets for company %s (%d on track)",
        report.target_count, company_id, report.on_track_count,
    )
    return stamp(report)


__all__ = ["target_emissions", "track_progress", "track_targets"]
