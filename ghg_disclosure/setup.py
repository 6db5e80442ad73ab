# -*- coding: utf-8 -*-
"""
Disclosure Service Setup

Provides the ``DisclosureService`` facade that wires the engine components
(aggregator, intensity calculator, energy builder, target tracker, offsets
classifier, compliance validator) to one configuration and assembles their
outputs into a single ``DisclosureReport`` for the presentation layer.

Also exposes ``get_disclosure_service()`` and
``configure_disclosure_service(config)`` for a process-wide instance.

Usage:
    >>> from ghg_disclosure.setup import get_disclosure_service
    >>> service = get_disclosure_service()
    >>> report = service.build_disclosure(records, company_metrics=metrics)
    >>> print(report.compliance_report.is_compliant)
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from ghg_disclosure.aggregator import aggregate, compare_periods
from ghg_disclosure.compliance import validate
from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.energy import build_energy_report
from ghg_disclosure.intensity import compute_intensity
from ghg_disclosure.metrics import record_operation
from ghg_disclosure.models import (
    ActivityEmissionRecord,
    ClimateTarget,
    CompanyMetrics,
    ComplianceReport,
    DisclosureReport,
    DisclosureStandard,
    EnergyRecord,
    EnergyReport,
    IntensityReport,
    OffsetRecord,
    OffsetsReport,
    PeriodComparison,
    RequirementsChecklist,
    Scope2Method,
    ScopeReport,
    TargetsReport,
)
from ghg_disclosure.offsets import classify_offsets
from ghg_disclosure.provenance import stamp
from ghg_disclosure.requirements import get_requirements_checklist
from ghg_disclosure.targets import track_targets

logger = logging.getLogger(__name__)


# ===================================================================
# DisclosureService facade
# ===================================================================

# Thread-safe singleton lock
_singleton_lock = threading.Lock()
_singleton_instance: Optional["DisclosureService"] = None


class DisclosureService:
    """Unified facade over the disclosure engine components.

    The service holds configuration only; every call is a pure function of
    its arguments, so one instance can be shared between threads.

    Attributes:
        config: DisclosureConfig passed to every component.

    Example:
        >>> service = DisclosureService()
        >>> scope_report = service.aggregate(records)
        >>> print(scope_report.total_ghg)
    """

    def __init__(self, config: Optional[DisclosureConfig] = None) -> None:
        """Initialize the Disclosure Service facade.

        Args:
            config: Optional disclosure config. Uses global config if None.
        """
        self.config = config or get_config()
        logger.info(
            "DisclosureService facade created (standard=%s, scope2_method=%s)",
            self.config.standard, self.config.scope2_method,
        )

    # ------------------------------------------------------------------
    # Component operations
    # ------------------------------------------------------------------

    def aggregate(
        self,
        records: Iterable[ActivityEmissionRecord],
        *,
        reporting_period_id: Optional[str] = None,
        scope2_method: Optional[Union[Scope2Method, str]] = None,
        no_activity: bool = False,
    ) -> ScopeReport:
        """Aggregate emission records into scope totals."""
        return aggregate(
            records,
            reporting_period_id=reporting_period_id,
            scope2_method=scope2_method,
            no_activity=no_activity,
            config=self.config,
        )

    def compare_periods(self, earlier: ScopeReport, later: ScopeReport) -> PeriodComparison:
        """Compare two scope reports period over period."""
        return compare_periods(earlier, later, config=self.config)

    def compute_intensity(
        self, total_ghg, metrics: Optional[CompanyMetrics] = None,
    ) -> IntensityReport:
        """Compute intensity ratios for a total GHG figure."""
        return compute_intensity(total_ghg, metrics, config=self.config)

    def build_energy_report(
        self,
        energy_records: Iterable[EnergyRecord],
        *,
        reporting_period_id: Optional[str] = None,
    ) -> EnergyReport:
        """Build the energy consumption and mix report."""
        return build_energy_report(
            energy_records, reporting_period_id=reporting_period_id, config=self.config,
        )

    def track_targets(
        self,
        targets: Iterable[ClimateTarget],
        *,
        company_id: Optional[str] = None,
    ) -> TargetsReport:
        """Track progress for a company's targets."""
        return track_targets(targets, company_id=company_id, config=self.config)

    def classify_offsets(
        self,
        offsets: Iterable[OffsetRecord],
        *,
        reporting_period_id: Optional[str] = None,
    ) -> OffsetsReport:
        """Classify carbon credits into removals and avoided emissions."""
        return classify_offsets(
            offsets, reporting_period_id=reporting_period_id, config=self.config,
        )

    def validate(
        self,
        scope_report: ScopeReport,
        offsets_report: Optional[OffsetsReport] = None,
        *,
        standard: Optional[Union[DisclosureStandard, str]] = None,
    ) -> ComplianceReport:
        """Validate a scope report against minimum disclosure rules."""
        return validate(scope_report, offsets_report, standard=standard, config=self.config)

    def get_requirements_checklist(self) -> RequirementsChecklist:
        """Get the ESRS E1 requirements checklist."""
        return get_requirements_checklist()

    # ------------------------------------------------------------------
    # Report assembly
    # ------------------------------------------------------------------

    def build_disclosure(
        self,
        records: Iterable[ActivityEmissionRecord],
        *,
        reporting_period_id: Optional[str] = None,
        company_metrics: Optional[CompanyMetrics] = None,
        energy_records: Optional[Iterable[EnergyRecord]] = None,
        targets: Optional[Iterable[ClimateTarget]] = None,
        offsets: Optional[Iterable[OffsetRecord]] = None,
        company_id: Optional[str] = None,
        scope2_method: Optional[Union[Scope2Method, str]] = None,
        standard: Optional[Union[DisclosureStandard, str]] = None,
        no_activity: bool = False,
        generated_at: Optional[datetime] = None,
    ) -> DisclosureReport:
        """Run every component and bundle the results for one period.

        Energy, targets and offsets reports are None when their inputs
        are not supplied. Hard errors from any component propagate.

        Args:
            records: Activity emission records of the period.
            reporting_period_id: Expected period.
            company_metrics: Denominators for intensity ratios.
            energy_records: Energy records, if energy is disclosed.
            targets: Climate targets, if targets are disclosed.
            offsets: Carbon credits, if credits are claimed.
            company_id: Company label for the targets report.
            scope2_method: Scope 2 method feeding total GHG.
            standard: Standard checked by the compliance validator.
            no_activity: Explicit no-activity marker for an empty period.
            generated_at: Report timestamp; now (UTC) when None.

        Returns:
            DisclosureReport with a provenance hash over its content.
        """
        start = time.monotonic()
        try:
            scope_report = self.aggregate(
                records,
                reporting_period_id=reporting_period_id,
                scope2_method=scope2_method,
                no_activity=no_activity,
            )
            period = scope_report.reporting_period_id
            intensity_report = self.compute_intensity(scope_report.total_ghg, company_metrics)
            energy_report = (
                self.build_energy_report(energy_records, reporting_period_id=period)
                if energy_records is not None else None
            )
            targets_report = (
                self.track_targets(targets, company_id=company_id)
                if targets is not None else None
            )
            offsets_report = (
                self.classify_offsets(offsets, reporting_period_id=period)
                if offsets is not None else None
            )
            compliance_report = self.validate(scope_report, offsets_report, standard=standard)
        except Exception:
            record_operation(
                "build_disclosure", "error", time.monotonic() - start, config=self.config,
            )
            raise

        report = DisclosureReport(
            reporting_period_id=period,
            standard=compliance_report.standard,
            generated_at=generated_at or datetime.now(timezone.utc),
            scope_report=scope_report,
            intensity_report=intensity_report,
            energy_report=energy_report,
            targets_report=targets_report,
            offsets_report=offsets_report,
            compliance_report=compliance_report,
            compliance_notes=self._compliance_notes(scope_report),
        )

        record_operation(
            "build_disclosure", "success", time.monotonic() - start, config=self.config,
        )
        logger.info(
            "Built disclosure for period %s: total_ghg=%s, compliant=%s",
            period, scope_report.total_ghg, compliance_report.is_compliant,
        )
        return stamp(report)

    @staticmethod
    def _compliance_notes(scope_report: ScopeReport) -> List[str]:
        checklist = get_requirements_checklist()
        outstanding = [r.code for r in checklist.requirements if r.code not in checklist.implemented]
        notes = [
            f"This report covers ESRS {', '.join(checklist.implemented)} disclosure requirements",
            f"Qualitative disclosures ({', '.join(outstanding)}) required for full CSRD compliance",
        ]
        if scope_report.scope_2.record_count > 0 and scope_report.scope2_market_based is None:
            notes.append("Scope 2 market-based values missing")
        notes.append("Third-party verification recommended for CSRD submission")
        return notes


# ===================================================================
# Thread-safe singleton access
# ===================================================================


def get_disclosure_service() -> DisclosureService:
    """Get or create the singleton DisclosureService instance.

    Returns:
        The singleton DisclosureService.
    """
    global _singleton_instance
    if _singleton_instance is None:
        with _singleton_lock:
            if _singleton_instance is None:
                _singleton_instance = DisclosureService()
    return _singleton_instance


def configure_disclosure_service(
    config: Optional[DisclosureConfig] = None,
) -> DisclosureService:
    """Create a DisclosureService and install it as the singleton.

    Args:
        config: Optional disclosure config.

    Returns:
        DisclosureService instance.
    """
    global _singleton_instance
    service = DisclosureService(config=config)
    with _singleton_lock:
        _singleton_instance = service
    logger.info("Disclosure service configured")
    return service


def reset_disclosure_service() -> None:
    """Drop the singleton (primarily for test teardown)."""
    global _singleton_instance
    with _singleton_lock:
        _singleton_instance = None


__all__ = [
    "DisclosureService",
    "get_disclosure_service",
    "configure_disclosure_service",
    "reset_disclosure_service",
]
