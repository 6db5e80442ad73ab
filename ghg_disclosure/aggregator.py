# -*- coding: utf-8 -*-
"""
Emissions Aggregator - Gross Scope 1, 2, 3 and Total GHG Emissions

Consumes the per-activity emission records of one reporting period and
produces scope totals, per-category sub-totals, the separately tracked
biogenic CO2 figure and the scope distribution. ``compare_periods`` reports
the change of total GHG and of each scope between two such reports.

Rules:
    - Total GHG = Scope 1 + Scope 2 (one method, chosen by the caller) + Scope 3.
    - Biogenic CO2 is excluded from every scope total and reported only as
      a supplementary figure.
    - Location-based and market-based Scope 2 are computed independently.
      The market-based total is reported only when every Scope 2 record
      carries a market-based value; it is never proxied by location-based.
    - Zero records is an error (EmptyInputError) unless the caller passes
      an explicit no-activity marker.
    - Every record's scope must match the scope of its category.
    - Full precision internally; rounding happens when the report is built.

Example:
    >>> from ghg_disclosure.aggregator import aggregate
    >>> report = aggregate(records)
    >>> print(report.total_ghg, report.distribution.scope_1_percentage)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.exceptions import (
    EmptyInputError,
    MixedReportingPeriodError,
    Scope2MethodUnavailableError,
    ScopeCategoryMismatchError,
)
from ghg_disclosure.metrics import (
    record_data_gap,
    record_operation,
    record_records_processed,
)
from ghg_disclosure.models import (
    ActivityCategory,
    ActivityEmissionRecord,
    CategoryBreakdown,
    Scope,
    Scope2Method,
    PeriodChange,
    PeriodComparison,
    ScopeDistribution,
    ScopeReport,
    ScopeTotals,
)
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import HUNDRED, ZERO, percentage, round_decimal
from ghg_disclosure.scope_classifier import (
    EMISSION_SCOPES,
    SCOPE_DESCRIPTIONS,
    categories_for,
    classify,
)

logger = logging.getLogger(__name__)


@dataclass
class _CategoryTotals:
    """Running totals for one category, full precision."""

    location_based: Decimal = ZERO
    market_based: Decimal = ZERO
    market_missing: int = 0
    biogenic: Decimal = ZERO
    count: int = 0

    def add(self, record: ActivityEmissionRecord) -> None:
        self.location_based += record.co2e_total
        self.biogenic += record.biogenic_co2
        self.count += 1
        if record.co2e_market_based is None:
            self.market_missing += 1
        else:
            self.market_based += record.co2e_market_based


def aggregate(
    records: Iterable[ActivityEmissionRecord],
    *,
    reporting_period_id: Optional[str] = None,
    scope2_method: Optional[Union[Scope2Method, str]] = None,
    no_activity: bool = False,
    config: Optional[DisclosureConfig] = None,
) -> ScopeReport:
    """Aggregate activity emission records into a ScopeReport.

    Args:
        records: Emission records of a single reporting period.
        reporting_period_id: Expected period. Required with ``no_activity``.
        scope2_method: Scope 2 method feeding the totals. Defaults to the
            configured method.
        no_activity: Caller's explicit marker that the period genuinely had
            no activity. Only consulted when ``records`` is empty.
        config: Configuration override; the global config when None.

    Returns:
        ScopeReport with rounded totals and a provenance hash.

    Raises:
        EmptyInputError: No records and no no-activity marker.
        MixedReportingPeriodError: Records span several periods.
        ScopeCategoryMismatchError: A record's scope disagrees with its category.
        Scope2MethodUnavailableError: Market-based totals requested but missing.
    """
    start = time.monotonic()
    cfg = config or get_config()
    method = Scope2Method(scope2_method or cfg.scope2_method)
    records = list(records)

    period = _resolve_period(records, reporting_period_id, no_activity)

    totals: Dict[ActivityCategory, _CategoryTotals] = {}
    for record in records:
        _check_scope(record)
        totals.setdefault(record.activity_category, _CategoryTotals()).add(record)

    scope2_categories = [totals[c] for c in categories_for(Scope.SCOPE_2) if c in totals]
    scope2_count = sum(t.count for t in scope2_categories)
    market_missing = sum(t.market_missing for t in scope2_categories)
    scope2_location = sum((t.location_based for t in scope2_categories), ZERO)
    scope2_market: Optional[Decimal] = (
        sum((t.market_based for t in scope2_categories), ZERO) if market_missing == 0 else None
    )

    notes: List[str] = []
    if scope2_market is None:
        record_data_gap("scope2_market_based_missing", config=cfg)
        if method == Scope2Method.MARKET_BASED:
            raise Scope2MethodUnavailableError(
                f"Market-based Scope 2 requested but {market_missing} of "
                f"{scope2_count} Scope 2 records have no market-based value",
                method=method.value,
                missing_records=market_missing,
            )
        notes.append(
            f"Market-based Scope 2 values missing for {market_missing} of "
            f"{scope2_count} records; market-based total not reported"
        )

    raw_scope_totals: Dict[Scope, Decimal] = {}
    scope_models: Dict[Scope, ScopeTotals] = {}
    for scope in EMISSION_SCOPES:
        use_market = scope == Scope.SCOPE_2 and method == Scope2Method.MARKET_BASED
        breakdown: List[CategoryBreakdown] = []
        scope_raw = ZERO
        scope_biogenic = ZERO
        scope_count = 0
        for category in categories_for(scope):
            acc = totals.get(category)
            if acc is None:
                continue
            value = acc.market_based if use_market else acc.location_based
            scope_raw += value
            scope_biogenic += acc.biogenic
            scope_count += acc.count
            breakdown.append(CategoryBreakdown(
                category=category,
                co2e_tonnes=round_decimal(value, cfg.emissions_precision),
                biogenic_co2_tonnes=round_decimal(acc.biogenic, cfg.emissions_precision),
                activity_count=acc.count,
            ))
        raw_scope_totals[scope] = scope_raw
        scope_models[scope] = ScopeTotals(
            scope=scope,
            description=SCOPE_DESCRIPTIONS[scope],
            total_co2e=round_decimal(scope_raw, cfg.emissions_precision),
            biogenic_co2=round_decimal(scope_biogenic, cfg.emissions_precision),
            record_count=scope_count,
            categories=breakdown,
        )

    total_raw = sum(raw_scope_totals.values(), ZERO)
    biogenic_raw = sum((t.biogenic for t in totals.values()), ZERO)
    if biogenic_raw > ZERO:
        notes.append("Biogenic CO2 reported separately from total GHG emissions")
    if not records:
        notes.append("No activity declared for this reporting period")

    places = cfg.percentage_precision
    report = ScopeReport(
        reporting_period_id=period,
        scope2_method=method,
        scope_1=scope_models[Scope.SCOPE_1],
        scope_2=scope_models[Scope.SCOPE_2],
        scope_3=scope_models[Scope.SCOPE_3],
        scope2_location_based=round_decimal(scope2_location, cfg.emissions_precision),
        scope2_market_based=(
            round_decimal(scope2_market, cfg.emissions_precision)
            if scope2_market is not None else None
        ),
        total_ghg=round_decimal(total_raw, cfg.emissions_precision),
        biogenic_co2_total=round_decimal(biogenic_raw, cfg.emissions_precision),
        distribution=ScopeDistribution(
            scope_1_percentage=percentage(raw_scope_totals[Scope.SCOPE_1], total_raw, places),
            scope_2_percentage=percentage(raw_scope_totals[Scope.SCOPE_2], total_raw, places),
            scope_3_percentage=percentage(raw_scope_totals[Scope.SCOPE_3], total_raw, places),
        ),
        record_count=len(records),
        no_activity=not records,
        notes=notes,
    )

    record_records_processed("aggregate", len(records), config=cfg)
    record_operation("aggregate", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Aggregated %d records for period %s: total_ghg=%s tCO2e (scope2 %s)",
        len(records), period, report.total_ghg, method.value,
    )
    return stamp(report)


def _resolve_period(
    records: List[ActivityEmissionRecord],
    reporting_period_id: Optional[str],
    no_activity: bool,
) -> str:
    if not records:
        if not no_activity:
            raise EmptyInputError(
                "No emission records supplied; pass no_activity=True to report "
                "a period with no activity",
                reporting_period_id=reporting_period_id,
            )
        if not reporting_period_id:
            raise EmptyInputError(
                "A no-activity report needs an explicit reporting_period_id",
            )
        return reporting_period_id

    periods = {record.reporting_period_id for record in records}
    if reporting_period_id is not None:
        periods.add(reporting_period_id)
    if len(periods) > 1:
        raise MixedReportingPeriodError(
            f"Records span {len(periods)} reporting periods; aggregate one period at a time",
            reporting_period_ids=periods,
        )
    if no_activity:
        logger.debug("no_activity marker ignored: %d records supplied", len(records))
    return periods.pop()


def _check_scope(record: ActivityEmissionRecord) -> None:
    expected = classify(record.activity_category)
    if record.scope != expected:
        raise ScopeCategoryMismatchError(
            f"Record for '{record.activity_category.value}' declares "
            f"{record.scope.value} but the category belongs to {expected.value}",
            activity_category=record.activity_category.value,
            declared_scope=record.scope.value,
            expected_scope=expected.value,
            context={"record_id": record.record_id} if record.record_id else None,
        )


def compare_periods(
    earlier: ScopeReport,
    later: ScopeReport,
    *,
    config: Optional[DisclosureConfig] = None,
) -> PeriodComparison:
    """Compare total GHG and each scope between two scope reports.

    The change percentage is ``(later - earlier) / earlier * 100``. When the
    earlier figure is zero it is 100 if the later figure is positive and 0
    otherwise.

    Args:
        earlier: Scope report of the earlier reporting period.
        later: Scope report of the later reporting period.
        config: Configuration override; the global config when None.

    Returns:
        PeriodComparison with one PeriodChange per figure.
    """
    start = time.monotonic()
    cfg = config or get_config()
    places = cfg.percentage_precision

    def change(before: Decimal, after: Decimal) -> PeriodChange:
        if before == ZERO:
            pct = HUNDRED if after > ZERO else ZERO
        else:
            pct = (after - before) / before * HUNDRED
        return PeriodChange(
            earlier_co2e=before,
            later_co2e=after,
            change_co2e=after - before,
            change_percentage=round_decimal(pct, places),
        )

    notes: List[str] = []
    if earlier.scope2_method != later.scope2_method:
        logger.warning(
            "Comparing period %s (%s) with period %s (%s)",
            earlier.reporting_period_id, earlier.scope2_method.value,
            later.reporting_period_id, later.scope2_method.value,
        )
        notes.append(
            f"Scope 2 totals use different methods ({earlier.scope2_method.value} "
            f"vs {later.scope2_method.value})"
        )

    comparison = PeriodComparison(
        earlier_period_id=earlier.reporting_period_id,
        later_period_id=later.reporting_period_id,
        total_ghg=change(earlier.total_ghg, later.total_ghg),
        scope_1=change(earlier.scope_1.total_co2e, later.scope_1.total_co2e),
        scope_2=change(earlier.scope_2.total_co2e, later.scope_2.total_co2e),
        scope_3=change(earlier.scope_3.total_co2e, later.scope_3.total_co2e),
        notes=notes,
    )

    record_operation("compare_periods", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Compared period %s with %s: total_ghg change %s%%",
        comparison.earlier_period_id, comparison.later_period_id,
        comparison.total_ghg.change_percentage,
    )
    return stamp(comparison)


__all__ = ["aggregate", "compare_periods"]
