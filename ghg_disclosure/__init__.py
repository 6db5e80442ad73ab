# -*- coding: utf-8 -*-
"""
GHG Disclosure Engine
=====================

Turns per-activity emission records, energy records, reduction targets and
carbon credits into the quantitative climate disclosures required by
ESRS E1 and the GHG Protocol. It supports:

- Scope 1, 2, 3 aggregation with biogenic CO2 tracked separately
- Parallel location-based and market-based Scope 2 totals
- Period-over-period change of total GHG and each scope
- GHG intensity per revenue, employee, floor area and production unit
- Energy consumption and renewable mix (ESRS E1-5)
- Reduction target progress tracking (ESRS E1-4)
- GHG removals and carbon credit classification (ESRS E1-7)
- Minimum disclosure compliance validation
- SHA-256 provenance hashes on every report
- Prometheus metrics and thread-safe configuration with GL_DISCLOSURE_ prefix

Key Components:
    - unit_converter: Deterministic energy/mass/volume conversion
    - scope_classifier: Closed category -> scope table
    - aggregator: Scope totals and distribution, period-over-period change
    - intensity: Intensity ratios with null-on-missing semantics
    - energy: Energy mix report
    - targets: Target progress tracking
    - offsets: Removals vs avoided emissions
    - compliance: Ordered compliance findings
    - requirements: ESRS E1 requirements checklist
    - setup: DisclosureService facade

Example:
    >>> from ghg_disclosure import ActivityEmissionRecord, aggregate, validate
    >>> report = aggregate([
    ...     ActivityEmissionRecord(activity_category="stationary_combustion",
    ...         scope="SCOPE_1", co2e_total="10", reporting_period_id="2025"),
    ... ])
    >>> validate(report).is_compliant
    True
"""

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from ghg_disclosure.config import (
    DisclosureConfig,
    get_config,
    set_config,
    reset_config,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
from ghg_disclosure.exceptions import (
    DisclosureEngineError,
    InputContractError,
    DataIntegrityError,
    UnsupportedUnitError,
    UnknownActivityCategoryError,
    UnknownFuelTypeError,
    EmptyInputError,
    InvalidTargetRangeError,
    Scope2MethodUnavailableError,
    ScopeCategoryMismatchError,
    MixedReportingPeriodError,
    DuplicateOffsetError,
)

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
from ghg_disclosure.models import (
    # Enumerations
    Scope,
    ActivityCategory,
    Scope2Method,
    EnergySource,
    EnergyUnit,
    RetirementStatus,
    FindingStatus,
    DisclosureStandard,
    RequirementStatus,
    # Inputs
    ActivityEmissionRecord,
    CompanyMetrics,
    EnergyRecord,
    ClimateTarget,
    OffsetRecord,
    # Results
    ScopeReport,
    PeriodComparison,
    IntensityReport,
    EnergyReport,
    TargetProgress,
    TargetsReport,
    OffsetsReport,
    ComplianceFinding,
    ComplianceReport,
    RequirementsChecklist,
    DisclosureReport,
)

# ---------------------------------------------------------------------------
# Core engine
# ---------------------------------------------------------------------------
from ghg_disclosure.unit_converter import convert_energy, convert_mass, convert_volume
from ghg_disclosure.scope_classifier import SCOPE_MAP, classify
from ghg_disclosure.aggregator import aggregate, compare_periods
from ghg_disclosure.intensity import compute_intensity
from ghg_disclosure.energy import FUEL_RENEWABILITY, build_energy_report, is_renewable_fuel
from ghg_disclosure.targets import track_progress, track_targets
from ghg_disclosure.offsets import REMOVAL_TYPES, classify_offsets, is_removal
from ghg_disclosure.compliance import validate
from ghg_disclosure.requirements import get_requirements_checklist
from ghg_disclosure.provenance import compute_hash, verify

# ---------------------------------------------------------------------------
# Service setup facade
# ---------------------------------------------------------------------------
from ghg_disclosure.setup import (
    DisclosureService,
    get_disclosure_service,
    configure_disclosure_service,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DisclosureConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Exceptions
    "DisclosureEngineError",
    "InputContractError",
    "DataIntegrityError",
    "UnsupportedUnitError",
    "UnknownActivityCategoryError",
    "UnknownFuelTypeError",
    "EmptyInputError",
    "InvalidTargetRangeError",
    "Scope2MethodUnavailableError",
    "ScopeCategoryMismatchError",
    "MixedReportingPeriodError",
    "DuplicateOffsetError",
    # Enumerations
    "Scope",
    "ActivityCategory",
    "Scope2Method",
    "EnergySource",
    "EnergyUnit",
    "RetirementStatus",
    "FindingStatus",
    "DisclosureStandard",
    "RequirementStatus",
    # Inputs
    "ActivityEmissionRecord",
    "CompanyMetrics",
    "EnergyRecord",
    "ClimateTarget",
    "OffsetRecord",
    # Results
    "ScopeReport",
    "PeriodComparison",
    "IntensityReport",
    "EnergyReport",
    "TargetProgress",
    "TargetsReport",
    "OffsetsReport",
    "ComplianceFinding",
    "ComplianceReport",
    "RequirementsChecklist",
    "DisclosureReport",
    # Core engine
    "convert_energy",
    "convert_mass",
    "convert_volume",
    "SCOPE_MAP",
    "classify",
    "aggregate",
    "compare_periods",
    "compute_intensity",
    "FUEL_RENEWABILITY",
    "build_energy_report",
    "is_renewable_fuel",
    "track_progress",
    "track_targets",
    "REMOVAL_TYPES",
    "classify_offsets",
    "is_removal",
    "validate",
    "get_requirements_checklist",
    "compute_hash",
    "verify",
    # Service
    "DisclosureService",
    "get_disclosure_service",
    "configure_disclosure_service",
]
