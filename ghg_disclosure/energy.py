# -*- coding: utf-8 -*-
"""
Energy Disclosure Builder - Energy consumption and mix (ESRS E1-5)

Converts energy records to MWh and splits them by source (electricity,
fuel, steam/heating) and by renewability.

Renewability of a fuel is decided by a static table, not by free-text
matching. For fuel records that name a ``fuel_type`` the table wins over
the record's own ``renewable`` flag; a conflict is logged and noted in the
report. Electricity, steam and fuel records without a ``fuel_type`` use
the record's flag.

Example:
    >>> from ghg_disclosure.energy import build_energy_report
    >>> report = build_energy_report([
    ...     EnergyRecord(source="electricity", quantity=1000, unit="kWh"),
    ...     EnergyRecord(source="electricity", quantity=3600, unit="MJ", renewable=True),
    ... ])
    >>> report.total_energy_mwh, report.renewable.renewable_percentage
    (Decimal('2.00'), Decimal('50.0'))
"""

from __future__ import annotations

import logging
import re
import time
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from ghg_disclosure.config import DisclosureConfig, get_config
from ghg_disclosure.exceptions import UnknownFuelTypeError
from ghg_disclosure.metrics import record_data_gap, record_operation, record_records_processed
from ghg_disclosure.models import (
    EnergyBreakdown,
    EnergyRecord,
    EnergyReport,
    EnergySource,
    NonRenewableEnergy,
    RenewableEnergy,
)
from ghg_disclosure.provenance import stamp
from ghg_disclosure.rounding import HUNDRED, ZERO, percentage, round_decimal
from ghg_disclosure.unit_converter import ENERGY_DENOMINATOR, GJ_PER_MWH, energy_numerator

logger = logging.getLogger(__name__)

#: Fuel type (normalized) -> renewable. Covers every stationary fuel the
#: platform records plus common aliases. Biomass-derived fuels are renewable.
FUEL_RENEWABILITY: Mapping[str, bool] = MappingProxyType({
    # Biomass
    "agricultural byproducts": True,
    "peat": True,
    "solid byproducts": True,
    "wood and wood residuals": True,
    "landfill gas": True,
    "biodiesel": True,
    "ethanol": True,
    "rendered animal fat": True,
    "vegetable oil": True,
    "wood pellets": True,
    "wood logs": True,
    "wood chips": True,
    "biogas": True,
    # Coal and coke
    "anthracite coal": False,
    "bituminous coal": False,
    "sub-bituminous coal": False,
    "lignite coal": False,
    "mixed (commercial sector)": False,
    "mixed (electric power sector)": False,
    "mixed (industrial coking)": False,
    "mixed (industrial sector)": False,
    "coal coke": False,
    "petroleum coke (solid)": False,
    "petroleum coke (liquid)": False,
    "petroleum coke": False,
    # Fossil-derived solid waste
    "municipal solid waste": False,
    "plastics": False,
    "tires": False,
    # Gaseous fuels
    "natural gas": False,
    "propane gas": False,
    "propane": False,
    "butane": False,
    "ethane": False,
    "fuel gas": False,
    "compressed natural gas (cng)": False,
    "cng": False,
    # Petroleum products
    "aviation gasoline": False,
    "jet fuel": False,
    "distillate fuel oil no. 1": False,
    "distillate fuel oil no. 2": False,
    "distillate fuel oil no. 4": False,
    "residual fuel oil no. 5": False,
    "residual fuel oil no. 6": False,
    "kerosene": False,
    "liquefied petroleum gases (lpg)": False,
    "lpg": False,
    "diesel fuel": False,
    "diesel": False,
    "motor gasoline": False,
    "gasoline": False,
    "crude oil": False,
    "heavy gas oils": False,
})

_PERCENT_SUFFIX = re.compile(r"\s*\(100%\)$")
_WHITESPACE = re.compile(r"\s+")


def normalize_fuel_type(fuel_type: str) -> str:
    """Trim, lower-case, collapse whitespace and drop a ``(100%)`` suffix."""
    value = _WHITESPACE.sub(" ", fuel_type.strip().lower())
    return _PERCENT_SUFFIX.sub("", value)


def is_renewable_fuel(fuel_type: str) -> bool:
    """Return whether a fuel type is renewable.

    Raises:
        UnknownFuelTypeError: If the fuel type is not in the table.
    """
    key = normalize_fuel_type(fuel_type) if isinstance(fuel_type, str) else None
    if key is None or key not in FUEL_RENEWABILITY:
        raise UnknownFuelTypeError(
            f"Unknown fuel type: {fuel_type!r}",
            fuel_type=str(fuel_type),
            context={"known_fuel_types": sorted(FUEL_RENEWABILITY)},
        )
    return FUEL_RENEWABILITY[key]


def build_energy_report(
    energy_records: Iterable[EnergyRecord],
    *,
    reporting_period_id: Optional[str] = None,
    config: Optional[DisclosureConfig] = None,
) -> EnergyReport:
    """Build the energy consumption and mix report.

    Args:
        energy_records: Energy records of one reporting period.
        reporting_period_id: Period label carried into the report.
        config: Configuration override; the global config when None.

    Returns:
        EnergyReport with totals in MWh and GJ and the renewable share.

    Raises:
        UnsupportedUnitError: A record uses an unknown unit.
        UnknownFuelTypeError: A fuel record names an unknown fuel type.
    """
    start = time.monotonic()
    cfg = config or get_config()
    records = list(energy_records)

    by_source: Dict[EnergySource, Decimal] = {source: ZERO for source in EnergySource}
    renewable_by_source: Dict[EnergySource, Decimal] = {source: ZERO for source in EnergySource}
    notes: List[str] = []

    # Sums are kept in parts of 1/ENERGY_DENOMINATOR MWh and divided once.
    for record in records:
        parts = energy_numerator(record.quantity, record.unit)
        renewable = _resolve_renewable(record, notes)
        by_source[record.source] += parts
        if renewable:
            renewable_by_source[record.source] += parts
        logger.debug(
            "Energy record %s: %s %s (renewable=%s)",
            record.record_id, record.quantity, record.unit.value, renewable,
        )

    if not records:
        record_data_gap("energy_records_missing", config=cfg)
        notes.append("No energy records supplied for this reporting period")

    total = sum(by_source.values(), ZERO)
    total_renewable = sum(renewable_by_source.values(), ZERO)
    places = cfg.percentage_precision
    renewable_pct = percentage(total_renewable, total, places)
    non_renewable_pct = (
        round_decimal(HUNDRED - renewable_pct, places) if total > ZERO
        else round_decimal(ZERO, places)
    )

    e = cfg.energy_precision

    def mwh(parts: Decimal) -> Decimal:
        return round_decimal(parts / ENERGY_DENOMINATOR, e)

    report = EnergyReport(
        reporting_period_id=reporting_period_id,
        total_energy_mwh=mwh(total),
        total_energy_gj=round_decimal(total * GJ_PER_MWH / ENERGY_DENOMINATOR, e),
        breakdown=EnergyBreakdown(
            electricity_mwh=mwh(by_source[EnergySource.ELECTRICITY]),
            fuel_mwh=mwh(by_source[EnergySource.FUEL]),
            steam_heating_mwh=mwh(by_source[EnergySource.STEAM]),
        ),
        renewable=RenewableEnergy(
            total_renewable_mwh=mwh(total_renewable),
            renewable_percentage=renewable_pct,
            renewable_electricity_mwh=mwh(renewable_by_source[EnergySource.ELECTRICITY]),
            renewable_fuel_mwh=mwh(renewable_by_source[EnergySource.FUEL]),
            renewable_steam_mwh=mwh(renewable_by_source[EnergySource.STEAM]),
        ),
        non_renewable=NonRenewableEnergy(
            total_non_renewable_mwh=mwh(total - total_renewable),
            percentage=non_renewable_pct,
        ),
        record_count=len(records),
        notes=notes,
    )

    record_records_processed("build_energy_report", len(records), config=cfg)
    record_operation("build_energy_report", "success", time.monotonic() - start, config=cfg)
    logger.info(
        "Built energy report from %d records: %s MWh, %s%% renewable",
        len(records), report.total_energy_mwh, report.renewable.renewable_percentage,
    )
    return stamp(report)


def _resolve_renewable(record: EnergyRecord, notes: List[str]) -> bool:
    if record.source != EnergySource.FUEL or record.fuel_type is None:
        return record.renewable

    renewable = is_renewable_fuel(record.fuel_type)
    if record.renewable != renewable:
        logger.warning(
            "Renewable flag %s on fuel '%s' conflicts with fuel classification; using %s",
            record.renewable, record.fuel_type, renewable,
        )
        notes.append(
            f"Renewable flag on fuel '{record.fuel_type}' overridden by fuel "
            f"classification ({'renewable' if renewable else 'non-renewable'})"
        )
    return renewable


__all__ = [
    "FUEL_RENEWABILITY",
    "normalize_fuel_type",
    "is_renewable_fuel",
    "build_energy_report",
]
