# -*- coding: utf-8 -*-
"""
Removals / Offsets Classifier - GHG removals and carbon credits (ESRS E1-7)

Splits purchased credits into removals (projects that take CO2 out of the
atmosphere) and avoided emissions (everything else), and reports credit
quality. Credits are disclosed next to gross emissions and are never
netted against them.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from decimal import Decimal
from typing import FrozenSet, Iterable, List, Optional

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.exceptions import DuplicateOffsetError
from ghg_disclosure.metrics import record_data_gap, record_operation, record_records_processed
from ghg_disclosure.models import (
    OffsetEntry,
    OffsetQuality,
    OffsetRecord,
    OffsetsReport,
    RetirementStatus,
)
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import ZERO, round_decimal

logger = logging.getLogger(__name__)

#: Project types that physically remove CO2 (normalized form).
REMOVAL_TYPES: FrozenSet[str] = frozenset({
    "reforestation",
    "afforestation",
    "direct_air_capture",
    "carbon_sequestration",
    "sequestration",
})

_MONEY_PLACES = 2


def normalize_offset_type(offset_type: str) -> str:
    """``"Direct Air Capture"`` -> ``"direct_air_capture"``."""
    return "_".join(offset_type.strip().lower().replace("-", " ").split())


def is_removal(offset_type: str) -> bool:
    """Whether a project type counts as a GHG removal."""
    return normalize_offset_type(offset_type) in REMOVAL_TYPES


def classify_offsets(
    offsets: Iterable[OffsetRecord],
    *,
    reporting_period_id: Optional[str] = None,
    config: Optional[DisclosureConfig] = None,
) -> OffsetsReport:
    """Classify carbon credits and summarize their quality.

    Args:
        offsets: Credits claimed in the reporting period.
        reporting_period_id: Period label carried into the report.
        config: Configuration override; the global config when None.

    Returns:
        OffsetsReport with removals and avoided emissions kept apart.

    Raises:
        DuplicateOffsetError: If the same offset_id is claimed more than once.
    """
    start = time.monotonic()
    cfg = config or get_config()
    records = list(offsets)

    counts = Counter(r.offset_id for r in records if r.offset_id is not None)
    duplicates = sorted(offset_id for offset_id, n in counts.items() if n > 1)
    if duplicates:
        raise DuplicateOffsetError(
            f"Carbon credits claimed more than once: {duplicates}",
            offset_ids=duplicates,
        )

    places = cfg.emissions_precision
    removals: List[OffsetEntry] = []
    avoided: List[OffsetEntry] = []
    total_removals = ZERO
    total_avoided = ZERO
    held = ZERO

    for record in records:
        entry = _entry(record, places)
        if entry.is_removal:
            removals.append(entry)
            total_removals += record.amount_tco2e
        else:
            avoided.append(entry)
            total_avoided += record.amount_tco2e
        if not entry.retired:
            held += record.amount_tco2e

    notes: List[str] = []
    if not records:
        notes.append("No carbon credits or removals recorded for this period")
    elif held > ZERO:
        record_data_gap("offsets_not_retired", config=cfg)
        notes.append("Retire credits to prevent double counting")

    entries = removals + avoided
    report = OffsetsReport(
        reporting_period_id=reporting_period_id,
        removals=removals,
        avoided_emissions=avoided,
        total_removals_tco2e=round_decimal(total_removals, places),
        total_avoided_tco2e=round_decimal(total_avoided, places),
        total_tco2e=round_decimal(total_removals + total_avoided, places),
        credit_count=len(entries),
        retired_count=sum(1 for e in entries if e.retired),
        held_tco2e=round_decimal(held, places),
        certification_standards=sorted({
            r.certification_standard for r in records if r.certification_standard
        }),
        quality=OffsetQuality(
            offsets_claimed=bool(records),
            all_certified=all(e.certified for e in entries),
            all_verified=all(e.verified for e in entries),
            all_retired=all(e.retired for e in entries),
        ),
        notes=notes,
    )

    record_records_processed("classify_offsets", len(records), config=cfg)
    record_operation("classify_offsets", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Classified %d credits: removals=%s tCO2e, avoided=%s tCO2e, held=%s tCO2e",
        report.credit_count, report.total_removals_tco2e,
        report.total_avoided_tco2e, report.held_tco2e,
    )
    return stamp(report)


def _entry(record: OffsetRecord, places: int) -> OffsetEntry:
    total_cost: Optional[Decimal] = None
    if record.cost_per_tco2e is not None:
        total_cost = round_decimal(record.amount_tco2e * record.cost_per_tco2e, _MONEY_PLACES)
    return OffsetEntry(
        offset_id=record.offset_id,
        offset_type=record.offset_type,
        project_name=record.project_name,
        project_location=record.project_location,
        amount_tco2e=round_decimal(record.amount_tco2e, places),
        vintage_year=record.vintage_year,
        certification_standard=record.certification_standard,
        verified_by=record.verified_by,
        retirement_status=record.retirement_status,
        cost_per_tco2e=record.cost_per_tco2e,
        total_cost=total_cost,
        is_removal=is_removal(record.offset_type),
        certified=bool(record.certification_standard),
        verified=bool(record.verified_by),
        retired=record.retirement_status == RetirementStatus.RETIRED,
    )


__all__ = [
    "REMOVAL_TYPES",
    "normalize_offset_type",
    "is_removal",
    "classify_offsets",
]
