# -*- coding: utf-8 -*-
"""
Compliance Validator - Minimum disclosure checks

Runs an ordered list of checks over an aggregated ScopeReport (and,
optionally, an OffsetsReport) and returns findings with a status of
``pass``, ``warning`` or ``error``. Incomplete business data never raises
here: it becomes a warning or error finding.

Checks, in order:
    1. Scope 1, 2 and 3 each have at least one record
    2. Scope 1 or Scope 2 is present (otherwise an error)
    3. Biogenic CO2 reported separately
    4. ESRS E1 only: market-based Scope 2 available alongside location-based
    5. Claimed carbon credits are certified, verified and retired

The report is compliant when there is no error finding and Scope 1 or
Scope 2 is present.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Union

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.metrics import record_finding, record_operation
from ghg_disclosure.models import (
    ComplianceFinding,
    ComplianceReport,
    DisclosureStandard,
    FindingStatus,
    OffsetsReport,
    ScopeReport,
)
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import ZERO

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGE = (
    "Insufficient data for compliance reporting: at minimum, Scope 1 or "
    "Scope 2 emissions must be calculated"
)


def validate(
    scope_report: ScopeReport,
    offsets_report: Optional[OffsetsReport] = None,
    *,
    standard: Optional[Union[DisclosureStandard, str]] = None,
    config: Optional[DisclosureConfig] = None,
) -> ComplianceReport:
    """Validate an aggregated report against minimum disclosure rules.

    Args:
        scope_report: Output of the aggregator.
        offsets_report: Output of the offsets classifier, if credits are claimed.
        standard: Standard to check against; the configured one when None.
        config: Configuration override; the global config when None.

    Returns:
        ComplianceReport with ordered findings and the overall verdict.

    Raises:
        ValueError: If the standard is not supported.
    """
    start = time.monotonic()
    cfg = config or get_config()
    std = DisclosureStandard(standard or cfg.standard)

    findings: List[ComplianceFinding] = []

    for totals in (scope_report.scope_1, scope_report.scope_2, scope_report.scope_3):
        name = totals.scope.value
        if totals.record_count > 0:
            findings.append(_finding(f"{name}_calculated", FindingStatus.PASS, f"{name} calculated"))
        else:
            findings.append(_finding(
                f"{name}_missing",
                FindingStatus.WARNING,
                f"No activities recorded for {name}. If applicable, this scope must be reported.",
            ))

    has_direct_or_energy = (
        scope_report.scope_1.record_count > 0 or scope_report.scope_2.record_count > 0
    )
    if not has_direct_or_energy:
        findings.append(_finding(
            "minimum_scope_coverage", FindingStatus.ERROR, INSUFFICIENT_DATA_MESSAGE,
        ))

    if scope_report.biogenic_co2_total > ZERO:
        findings.append(_finding(
            "biogenic_co2_separated",
            FindingStatus.PASS,
            "Biogenic CO2 reported separately from gross emissions",
        ))

    if (
        std == DisclosureStandard.ESRS_E1
        and scope_report.scope_2.record_count > 0
        and scope_report.scope2_market_based is None
    ):
        findings.append(_finding(
            "scope2_dual_reporting",
            FindingStatus.WARNING,
            "Scope 2 market-based values missing; ESRS E1-6 requires both "
            "location-based and market-based Scope 2",
        ))

    if offsets_report is not None and offsets_report.quality.offsets_claimed:
        findings.extend(_offset_findings(offsets_report))

    errors = sum(1 for f in findings if f.status == FindingStatus.ERROR)
    report = ComplianceReport(
        standard=std,
        reporting_period_id=scope_report.reporting_period_id,
        is_compliant=errors == 0 and has_direct_or_energy,
        findings=findings,
        pass_count=sum(1 for f in findings if f.status == FindingStatus.PASS),
        warning_count=sum(1 for f in findings if f.status == FindingStatus.WARNING),
        error_count=errors,
    )

    for finding in findings:
        record_finding(finding.status.value, config=cfg)
    record_operation("validate", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Validated period %s against %s: compliant=%s (%d pass, %d warning, %d error)",
        report.reporting_period_id, std.value, report.is_compliant,
        report.pass_count, report.warning_count, report.error_count,
    )
    return stamp(report)


def _finding(check_name: str, status: FindingStatus, message: str) -> ComplianceFinding:
    return ComplianceFinding(check_name=check_name, status=status, message=message)


def _offset_findings(offsets_report: OffsetsReport) -> List[ComplianceFinding]:
    quality = offsets_report.quality
    findings: List[ComplianceFinding] = []
    if not quality.all_certified:
        findings.append(_finding(
            "offsets_certified",
            FindingStatus.WARNING,
            "Not all carbon credits are certified by a recognized standard",
        ))
    if not quality.all_verified:
        findings.append(_finding(
            "offsets_verified",
            FindingStatus.WARNING,
            "Not all carbon credits are verified by a third party",
        ))
    if not quality.all_retired:
        findings.append(_finding(
            "offsets_retired",
            FindingStatus.WARNING,
            "Not all carbon credits are retired; retire credits to prevent double counting",
        ))
    if not findings:
        findings.append(_finding(
            "offsets_quality",
            FindingStatus.PASS,
            "All carbon credits are certified, verified and retired",
        ))
    return findings


__all__ = ["INSUFFICIENT_DATA_MESSAGE", "validate"]
