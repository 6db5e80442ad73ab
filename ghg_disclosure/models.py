# -*- coding: utf-8 -*-
"""
GHG Disclosure Data Models

Pydantic v2 data models for the emissions aggregation and disclosure
compliance engine. Input models are frozen: once handed to the engine they
are never modified. Result models are plain serializable structures for the
report-assembly layer; every tonne/percentage field is already rounded to
the configured presentation precision.

Models:
    - Enums: Scope, ActivityCategory, Scope2Method, EnergySource,
             EnergyUnit, RetirementStatus, FindingStatus,
             DisclosureStandard, RequirementStatus
    - Inputs: ActivityEmissionRecord, CompanyMetrics, EnergyRecord,
              ClimateTarget, OffsetRecord
    - Results: ScopeReport, PeriodComparison, IntensityReport,
               EnergyReport, TargetProgress, TargetsReport, OffsetsReport,
               ComplianceReport,
               RequirementsChecklist, DisclosureReport
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ghg_disclosure.exceptions import (
    UnknownActivityCategoryError,
    UnsupportedUnitError,
)


# =============================================================================
# Enumerations
# =============================================================================


class Scope(str, Enum):
    """GHG Protocol scope of an activity."""
    SCOPE_1 = "SCOPE_1"
    SCOPE_2 = "SCOPE_2"
    SCOPE_3 = "SCOPE_3"
    OTHER = "OTHER"


class ActivityCategory(str, Enum):
    """Closed set of activity categories recorded by the platform."""
    STATIONARY_COMBUSTION = "stationary_combustion"
    MOBILE_SOURCES = "mobile_sources"
    REFRIGERATION_AC = "refrigeration_ac"
    REFRIGERATION_AC_MATERIAL_BALANCE = "refrigeration_ac_material_balance"
    REFRIGERATION_AC_SIMPLIFIED_MATERIAL_BALANCE = "refrigeration_ac_simplified_material_balance"
    REFRIGERATION_AC_SCREENING_METHOD = "refrigeration_ac_screening_method"
    FIRE_SUPPRESSION = "fire_suppression"
    FIRE_SUPPRESSION_MATERIAL_BALANCE = "fire_suppression_material_balance"
    FIRE_SUPPRESSION_SIMPLIFIED_MATERIAL_BALANCE = "fire_suppression_simplified_material_balance"
    FIRE_SUPPRESSION_SCREENING_METHOD = "fire_suppression_screening_method"
    PURCHASED_GASES = "purchased_gases"
    ELECTRICITY = "electricity"
    STEAM = "steam"
    BUSINESS_TRAVEL_AIR = "business_travel_air"
    BUSINESS_TRAVEL_RAIL = "business_travel_rail"
    BUSINESS_TRAVEL_ROAD = "business_travel_road"
    BUSINESS_TRAVEL_HOTEL = "business_travel_hotel"
    BUSINESS_TRAVEL_PERSONAL_CAR = "business_travel_personal_car"
    BUSINESS_TRAVEL_RAIL_BUS = "business_travel_rail_bus"
    COMMUTING = "commuting"
    EMPLOYEE_COMMUTING_PERSONAL_CAR = "employee_commuting_personal_car"
    EMPLOYEE_COMMUTING_PUBLIC_TRANSPORT = "employee_commuting_public_transport"
    TRANSPORTATION_DISTRIBUTION = "transportation_distribution"
    UPSTREAM_TRANS_DIST_VEHICLE_MILES = "upstream_trans_dist_vehicle_miles"
    UPSTREAM_TRANS_DIST_TON_MILES = "upstream_trans_dist_ton_miles"
    WASTE = "waste"
    OFFSETS = "offsets"

    @classmethod
    def parse(cls, value: Any) -> ActivityCategory:
        """Resolve an enum member or its exact string value.

        Matching is exact after trimming and lower-casing; there is no
        fuzzy matching on free text.

        Raises:
            UnknownActivityCategoryError: If the value is not a known category.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownActivityCategoryError(
            f"Unknown activity category: {value!r}",
            activity_category=str(value),
            context={"known_categories": [c.value for c in cls]},
        )


class Scope2Method(str, Enum):
    """Scope 2 attribution method."""
    LOCATION_BASED = "location_based"
    MARKET_BASED = "market_based"


class EnergySource(str, Enum):
    """Source of consumed energy."""
    ELECTRICITY = "electricity"
    FUEL = "fuel"
    STEAM = "steam"


class EnergyUnit(str, Enum):
    """Energy units accepted by the converter."""
    KWH = "kwh"
    MWH = "mwh"
    MMBTU = "mmbtu"
    GJ = "gj"
    MJ = "mj"

    @classmethod
    def parse(cls, value: Any) -> EnergyUnit:
        """Resolve a unit label such as ``"kWh"`` or ``" MMBtu "``.

        Raises:
            UnsupportedUnitError: If the unit is not supported.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedUnitError(
            f"Unsupported energy unit: {value!r}",
            unit=str(value),
            supported=[u.value for u in cls],
        )


class RetirementStatus(str, Enum):
    """Registry status of a purchased carbon credit."""
    RETIRED = "retired"
    HELD = "held"


class FindingStatus(str, Enum):
    """Outcome of a single compliance check."""
    PASS = "pass"
    WARNING = "warning"
    ERROR = "error"


class DisclosureStandard(str, Enum):
    """Disclosure standards the validator knows how to check."""
    ESRS_E1 = "ESRS_E1"
    GHG_PROTOCOL = "GHG_PROTOCOL"


class RequirementStatus(str, Enum):
    """Coverage of a disclosure requirement by this engine."""
    IMPLEMENTED = "implemented"
    PARTIALLY_IMPLEMENTED = "partially_implemented"
    NOT_IMPLEMENTED = "not_implemented"


_FROZEN = {"extra": "forbid", "frozen": True}


# =============================================================================
# Input Models
# =============================================================================


class ActivityEmissionRecord(BaseModel):
    """Per-activity emissions, already converted to CO2e upstream."""
    activity_category: ActivityCategory = Field(..., description="Activity category")
    scope: Scope = Field(..., description="Declared GHG Protocol scope")
    co2e_total: Decimal = Field(
        ..., ge=0, description="CO2e in tonnes (location-based for Scope 2)",
    )
    biogenic_co2: Decimal = Field(
        default=Decimal("0"), ge=0, description="Biogenic CO2 in tonnes",
    )
    reporting_period_id: str = Field(..., min_length=1, description="Reporting period")
    co2e_market_based: Optional[Decimal] = Field(
        None, ge=0, description="Market-based CO2e in tonnes (Scope 2 only)",
    )
    record_id: Optional[str] = Field(None, description="Upstream calculation ID")

    model_config = _FROZEN

    @field_validator("activity_category", mode="before")
    @classmethod
    def parse_category(cls, v: Any) -> ActivityCategory:
        """Reject categories outside the closed table."""
        return ActivityCategory.parse(v)

    @field_validator("scope")
    @classmethod
    def reject_other_scope(cls, v: Scope) -> Scope:
        """Emission records belong to Scope 1, 2 or 3."""
        if v == Scope.OTHER:
            raise ValueError("emission records must be SCOPE_1, SCOPE_2 or SCOPE_3")
        return v

    @model_validator(mode="after")
    def check_market_based_scope(self) -> ActivityEmissionRecord:
        """Market-based values only exist for Scope 2 activities."""
        if self.co2e_market_based is not None and self.scope != Scope.SCOPE_2:
            raise ValueError("co2e_market_based is only valid on SCOPE_2 records")
        return self


class CompanyMetrics(BaseModel):
    """Company denominators for intensity ratios.

    Any field may be absent. Zero or negative values are accepted here and
    treated as absent by the intensity calculator.
    """
    revenue: Optional[Decimal] = Field(None, description="Net revenue")
    employees: Optional[int] = Field(None, description="Full-time equivalents")
    floor_area: Optional[Decimal] = Field(None, description="Floor area")
    production_units: Optional[Decimal] = Field(None, description="Units produced")
    revenue_currency: str = Field(default="EUR", description="Revenue currency")
    floor_area_unit: str = Field(default="m2", description="Floor area unit")
    production_unit: str = Field(default="unit", description="Production unit label")

    model_config = _FROZEN


class EnergyRecord(BaseModel):
    """Energy consumed from one source in one unit."""
    source: EnergySource = Field(..., description="Energy source")
    quantity: Decimal = Field(..., ge=0, description="Quantity in ``unit``")
    unit: EnergyUnit = Field(..., description="Energy unit")
    renewable: bool = Field(default=False, description="Renewable flag from the source data")
    fuel_type: Optional[str] = Field(None, description="Fuel type for fuel records")
    record_id: Optional[str] = Field(None, description="Upstream activity ID")

    model_config = _FROZEN

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, v: Any) -> EnergyUnit:
        """Reject units the converter cannot handle."""
        return EnergyUnit.parse(v)


class ClimateTarget(BaseModel):
    """A registered GHG reduction target with its latest measurement."""
    target_id: Optional[str] = Field(None, description="Target identifier")
    target_type: Optional[str] = Field(None, description="e.g. absolute, intensity")
    scope_coverage: Optional[str] = Field(None, description="Scopes covered")
    base_year: int = Field(..., description="Base year")
    base_year_emissions: Decimal = Field(..., ge=0, description="Base year tCO2e")
    target_year: int = Field(..., description="Target year")
    target_reduction_percentage: Optional[Decimal] = Field(
        None, ge=0, le=100, description="Reduction versus base year, percent",
    )
    target_absolute_emissions: Optional[Decimal] = Field(
        None, ge=0, description="Target year tCO2e",
    )
    last_measured_year: int = Field(..., description="Most recent measured year")
    last_measured_emissions: Decimal = Field(..., ge=0, description="Most recent tCO2e")
    science_based: bool = Field(default=False, description="Validated science-based target")
    paris_aligned: bool = Field(default=False, description="Aligned with the Paris Agreement")

    model_config = _FROZEN

    @model_validator(mode="after")
    def require_target_level(self) -> ClimateTarget:
        """A target needs an absolute level or a reduction percentage."""
        if self.target_absolute_emissions is None and self.target_reduction_percentage is None:
            raise ValueError(
                "either target_absolute_emissions or target_reduction_percentage is required"
            )
        return self


class OffsetRecord(BaseModel):
    """A purchased carbon credit claimed in a reporting period."""
    offset_id: Optional[str] = Field(None, description="Registry or internal credit ID")
    offset_type: str = Field(..., min_length=1, description="Project type")
    project_name: Optional[str] = Field(None, description="Project name")
    project_location: Optional[str] = Field(None, description="Project location")
    amount_tco2e: Decimal = Field(..., ge=0, description="Credited tCO2e")
    vintage_year: int = Field(..., description="Vintage year")
    certification_standard: Optional[str] = Field(None, description="e.g. Gold Standard, VCS")
    verified_by: Optional[str] = Field(None, description="Verification body")
    retirement_status: RetirementStatus = Field(..., description="Registry status")
    cost_per_tco2e: Optional[Decimal] = Field(None, ge=0, description="Price per tCO2e")

    model_config = _FROZEN


# =============================================================================
# Scope Report (E1-6)
# =============================================================================


class CategoryBreakdown(BaseModel):
    """Sub-total for one activity category within a scope."""
    category: ActivityCategory
    co2e_tonnes: Decimal
    biogenic_co2_tonnes: Decimal
    activity_count: int

    model_config = _FROZEN


class ScopeTotals(BaseModel):
    """Totals for one scope."""
    scope: Scope
    description: str
    total_co2e: Decimal
    biogenic_co2: Decimal
    record_count: int
    categories: List[CategoryBreakdown] = Field(default_factory=list)

    model_config = _FROZEN


class ScopeDistribution(BaseModel):
    """Share of each scope in total GHG, in percent."""
    scope_1_percentage: Decimal
    scope_2_percentage: Decimal
    scope_3_percentage: Decimal

    model_config = _FROZEN


class ScopeReport(BaseModel):
    """Gross Scope 1, 2, 3 and total GHG emissions for a reporting period."""
    reporting_period_id: str
    scope2_method: Scope2Method = Field(..., description="Method feeding total_ghg")
    scope_1: ScopeTotals
    scope_2: ScopeTotals
    scope_3: ScopeTotals
    scope2_location_based: Decimal
    scope2_market_based: Optional[Decimal] = Field(
        None, description="None when market-based values are incomplete",
    )
    total_ghg: Decimal
    biogenic_co2_total: Decimal = Field(..., description="Excluded from total_ghg")
    distribution: ScopeDistribution
    record_count: int
    no_activity: bool = False
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


class PeriodChange(BaseModel):
    """Change of one emissions figure between two reporting periods."""
    earlier_co2e: Decimal
    later_co2e: Decimal
    change_co2e: Decimal
    change_percentage: Decimal = Field(
        ..., description="100 when the earlier figure is 0 and the later one is positive",
    )

    model_config = _FROZEN


class PeriodComparison(BaseModel):
    """Period-over-period change of total GHG and of each scope."""
    earlier_period_id: str
    later_period_id: str
    total_ghg: PeriodChange
    scope_1: PeriodChange
    scope_2: PeriodChange
    scope_3: PeriodChange
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Intensity Report
# =============================================================================


class IntensityMetric(BaseModel):
    """One intensity ratio, or a null value with an explanatory note."""
    metric: str
    value: Optional[Decimal] = None
    unit: str
    denominator: Optional[Decimal] = None
    description: Optional[str] = None
    note: Optional[str] = None

    model_config = _FROZEN


class IntensityReport(BaseModel):
    """GHG intensity per business denominator."""
    total_ghg: Decimal
    revenue_intensity: IntensityMetric
    employee_intensity: IntensityMetric
    floor_area_intensity: IntensityMetric
    production_intensity: IntensityMetric
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Energy Report (E1-5)
# =============================================================================


class EnergyBreakdown(BaseModel):
    """Energy consumption by source, in MWh."""
    electricity_mwh: Decimal
    fuel_mwh: Decimal
    steam_heating_mwh: Decimal

    model_config = _FROZEN


class RenewableEnergy(BaseModel):
    """Renewable share of energy consumption."""
    total_renewable_mwh: Decimal
    renewable_percentage: Decimal
    renewable_electricity_mwh: Decimal
    renewable_fuel_mwh: Decimal
    renewable_steam_mwh: Decimal

    model_config = _FROZEN


class NonRenewableEnergy(BaseModel):
    """Non-renewable share of energy consumption."""
    total_non_renewable_mwh: Decimal
    percentage: Decimal

    model_config = _FROZEN


class EnergyReport(BaseModel):
    """Energy consumption and mix."""
    reporting_period_id: Optional[str] = None
    total_energy_mwh: Decimal
    total_energy_gj: Decimal
    breakdown: EnergyBreakdown
    renewable: RenewableEnergy
    non_renewable: NonRenewableEnergy
    record_count: int
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Target Progress (E1-4)
# =============================================================================


class TargetProgress(BaseModel):
    """Expected versus actual progress towards one reduction target."""
    target_id: Optional[str] = None
    target_type: Optional[str] = None
    scope_coverage: Optional[str] = None
    base_year: int
    base_year_emissions: Decimal
    target_year: int
    target_reduction_percentage: Optional[Decimal] = None
    target_absolute_emissions: Decimal
    last_measured_year: int
    last_measured_emissions: Decimal
    emissions_reduced: Decimal
    expected_progress_fraction: Decimal
    expected_progress_percentage: Decimal
    actual_progress_fraction: Optional[Decimal] = None
    actual_progress_percentage: Optional[Decimal] = None
    on_track: Optional[bool] = None
    years_remaining: int
    measurement_in_range: bool
    science_based: bool = False
    paris_aligned: bool = False
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


class TargetsReport(BaseModel):
    """Progress for every active target of a company."""
    company_id: Optional[str] = None
    targets: List[TargetProgress] = Field(default_factory=list)
    target_count: int
    science_based_targets: int
    paris_aligned_targets: int
    on_track_count: int
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Offsets Report (E1-7)
# =============================================================================


class OffsetEntry(BaseModel):
    """A classified carbon credit with its quality criteria."""
    offset_id: Optional[str] = None
    offset_type: str
    project_name: Optional[str] = None
    project_location: Optional[str] = None
    amount_tco2e: Decimal
    vintage_year: int
    certification_standard: Optional[str] = None
    verified_by: Optional[str] = None
    retirement_status: RetirementStatus
    cost_per_tco2e: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    is_removal: bool
    certified: bool
    verified: bool
    retired: bool

    model_config = _FROZEN


class OffsetQuality(BaseModel):
    """AND-reductions of credit quality over all claimed credits.

    With ``offsets_claimed`` false the three flags are vacuously true and
    mean "nothing claimed", not "perfect quality".
    """
    offsets_claimed: bool
    all_certified: bool
    all_verified: bool
    all_retired: bool

    model_config = _FROZEN


class OffsetsReport(BaseModel):
    """GHG removals and carbon credits, kept apart from gross emissions."""
    reporting_period_id: Optional[str] = None
    removals: List[OffsetEntry] = Field(default_factory=list)
    avoided_emissions: List[OffsetEntry] = Field(default_factory=list)
    total_removals_tco2e: Decimal
    total_avoided_tco2e: Decimal
    total_tco2e: Decimal
    credit_count: int
    retired_count: int
    held_tco2e: Decimal = Field(..., description="Credited tCO2e not yet retired")
    certification_standards: List[str] = Field(default_factory=list)
    quality: OffsetQuality
    notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Compliance Report
# =============================================================================


class ComplianceFinding(BaseModel):
    """Result of a single compliance check."""
    check_name: str
    status: FindingStatus
    message: str

    model_config = _FROZEN


class ComplianceReport(BaseModel):
    """Ordered findings and the overall compliance verdict."""
    standard: DisclosureStandard
    reporting_period_id: str
    is_compliant: bool
    findings: List[ComplianceFinding] = Field(default_factory=list)
    pass_count: int
    warning_count: int
    error_count: int
    provenance_hash: str = ""

    model_config = _FROZEN


# =============================================================================
# Requirements checklist and disclosure bundle
# =============================================================================


class DisclosureRequirement(BaseModel):
    """One disclosure requirement of a standard."""
    code: str
    title: str
    description: str
    status: RequirementStatus
    engine_component: Optional[str] = None

    model_config = _FROZEN


class RequirementsChecklist(BaseModel):
    """Disclosure requirements of a standard and the engine's coverage."""
    standard: str
    requirements: List[DisclosureRequirement] = Field(default_factory=list)
    implemented: List[str] = Field(default_factory=list)
    next_priorities: List[str] = Field(default_factory=list)

    model_config = _FROZEN


class DisclosureReport(BaseModel):
    """All engine outputs for one reporting period."""
    reporting_period_id: str
    standard: DisclosureStandard
    generated_at: datetime
    scope_report: ScopeReport
    intensity_report: IntensityReport
    energy_report: Optional[EnergyReport] = None
    targets_report: Optional[TargetsReport] = None
    offsets_report: Optional[OffsetsReport] = None
    compliance_report: ComplianceReport
    compliance_notes: List[str] = Field(default_factory=list)
    provenance_hash: str = ""

    model_config = _FROZEN


__all__ = [
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
    # Scope report
    "CategoryBreakdown",
    "ScopeTotals",
    "ScopeDistribution",
    "ScopeReport",
    "PeriodChange",
    "PeriodComparison",
    # Intensity
    "IntensityMetric",
    "IntensityReport",
    # Energy
    "EnergyBreakdown",
    "RenewableEnergy",
    "NonRenewableEnergy",
    "EnergyReport",
    # Targets
    "TargetProgress",
    "TargetsReport",
    # Offsets
    "OffsetEntry",
    "OffsetQuality",
    "OffsetsReport",
    # Compliance
    "ComplianceFinding",
    "ComplianceReport",
    # Bundle
    "DisclosureRequirement",
    "RequirementsChecklist",
    "DisclosureReport",
]
