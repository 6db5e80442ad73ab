# -*- coding: utf-8 -*-
"""
Unit Conversion

All conversions are deterministic Decimal operations against fixed
constant tables. Unknown units fail loudly with UnsupportedUnitError; no
default unit is ever assumed.

Supports:
- Energy -> MWh: kWh, MWh, MMBtu, GJ, MJ
- Mass -> metric tonnes: g, kg, tonne, short ton, lb
- Volume -> litres: litre, US gallon, m3, scf, ccf, mcf

Energy factors are stored as (multiplier, divisor) pairs, and every divisor
divides ENERGY_DENOMINATOR. ``energy_numerator`` expresses a quantity as an
exact multiple of 1/ENERGY_DENOMINATOR MWh, so totals over any mix of units
are summed without rounding and divided once. ``convert_energy`` performs
that single division, which is exact for kWh, MWh, MMBtu and GJ and rounds
only to the Decimal context for MJ quantities that are not multiples of 3.6.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

from ghg_disclosure.exceptions import UnsupportedUnitError
from ghg_disclosure.models import EnergyUnit
from ghg_disclosure.rounding import ZERO, to_decimal


_ONE = Decimal("1")

#: MWh <-> GJ factor.
GJ_PER_MWH = Decimal("3.6")

#: Energy conversions to MWh as (multiplier, divisor).
ENERGY_TO_MWH: Mapping[EnergyUnit, Tuple[Decimal, Decimal]] = MappingProxyType({
    EnergyUnit.KWH: (_ONE, Decimal("1000")),
    EnergyUnit.MWH: (_ONE, _ONE),
    EnergyUnit.MMBTU: (Decimal("0.293071"), _ONE),  # 1 MMBtu = 0.293071 MWh
    EnergyUnit.GJ: (_ONE, GJ_PER_MWH),
    EnergyUnit.MJ: (_ONE, Decimal("3600")),
})

#: Common denominator of every energy divisor, in parts per MWh.
ENERGY_DENOMINATOR = Decimal("18000")

for _unit, _factor in ENERGY_TO_MWH.items():
    if ENERGY_DENOMINATOR % _factor[1]:
        raise RuntimeError(f"ENERGY_DENOMINATOR is not a multiple of the {_unit.value} divisor")
del _unit, _factor

#: Mass conversions to metric tonnes.
MASS_TO_TONNES: Mapping[str, Decimal] = MappingProxyType({
    "g": Decimal("0.000001"),
    "gram": Decimal("0.000001"),
    "grams": Decimal("0.000001"),
    "kg": Decimal("0.001"),
    "kilogram": Decimal("0.001"),
    "kilograms": Decimal("0.001"),
    "t": _ONE,
    "tonne": _ONE,
    "tonnes": _ONE,
    "metric_ton": _ONE,
    "metric_tons": _ONE,
    "short_ton": Decimal("0.907185"),
    "short_tons": Decimal("0.907185"),
    "ton": Decimal("0.907185"),  # US short ton
    "tons": Decimal("0.907185"),
    "lb": Decimal("0.000453592"),
    "lbs": Decimal("0.000453592"),
    "pound": Decimal("0.000453592"),
    "pounds": Decimal("0.000453592"),
})

#: Volume conversions to litres.
VOLUME_TO_LITRES: Mapping[str, Decimal] = MappingProxyType({
    "l": _ONE,
    "liter": _ONE,
    "liters": _ONE,
    "litre": _ONE,
    "litres": _ONE,
    "gal": Decimal("3.78541"),  # US gallon
    "gallon": Decimal("3.78541"),
    "gallons": Decimal("3.78541"),
    "m3": Decimal("1000"),
    "cubic_meter": Decimal("1000"),
    "cubic_meters": Decimal("1000"),
    "scf": Decimal("28.3168"),  # standard cubic foot
    "ccf": Decimal("2831.68"),  # 100 cubic feet
    "mcf": Decimal("28316.8"),  # 1000 cubic feet
})


def _normalize(unit: str) -> str:
    return unit.strip().lower().replace(" ", "_")


def _check_quantity(quantity: Any) -> Decimal:
    value = to_decimal(quantity)
    if value < ZERO:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return value


def convert_energy(quantity: Any, unit: Union[EnergyUnit, str]) -> Decimal:
    """
    Convert an energy quantity to MWh.

    Args:
        quantity: Non-negative amount in ``unit``
        unit: EnergyUnit or label such as "kWh", "MMBtu"

    Returns:
        Energy in MWh at full precision

    Raises:
        UnsupportedUnitError: If the unit is not kWh, MWh, MMBtu, GJ or MJ
        ValueError: If the quantity is negative
    """
    return energy_numerator(quantity, unit) / ENERGY_DENOMINATOR


def energy_numerator(quantity: Any, unit: Union[EnergyUnit, str]) -> Decimal:
    """
    Express an energy quantity in parts of 1/ENERGY_DENOMINATOR MWh.

    Only multiplications are involved, so the result is exact and can be
    summed across units before a single division by ENERGY_DENOMINATOR.

    Raises:
        UnsupportedUnitError: If the unit is not kWh, MWh, MMBtu, GJ or MJ
        ValueError: If the quantity is negative
    """
    energy_unit = EnergyUnit.parse(unit)
    value = _check_quantity(quantity)
    multiplier, divisor = ENERGY_TO_MWH[energy_unit]
    return value * multiplier * (ENERGY_DENOMINATOR / divisor)


def mwh_to_gj(mwh: Any) -> Decimal:
    """Convert MWh to GJ (x3.6)."""
    return to_decimal(mwh) * GJ_PER_MWH


def convert_mass(quantity: Any, unit: str) -> Decimal:
    """
    Convert a mass to metric tonnes.

    Raises:
        UnsupportedUnitError: If the unit is not a known mass unit
    """
    factor = _lookup(MASS_TO_TONNES, unit, "mass")
    return _check_quantity(quantity) * factor


def convert_volume(quantity: Any, unit: str) -> Decimal:
    """
    Convert a volume to litres.

    Raises:
        UnsupportedUnitError: If the unit is not a known volume unit
    """
    factor = _lookup(VOLUME_TO_LITRES, unit, "volume")
    return _check_quantity(quantity) * factor


def supported_units(kind: str) -> List[str]:
    """
    List accepted units for ``energy``, ``mass`` or ``volume``.

    Raises:
        ValueError: If the kind is unknown
    """
    tables: Dict[str, List[str]] = {
        "energy": [u.value for u in ENERGY_TO_MWH],
        "mass": list(MASS_TO_TONNES),
        "volume": list(VOLUME_TO_LITRES),
    }
    if kind not in tables:
        raise ValueError(f"Unknown unit kind: {kind}")
    return tables[kind]


def _lookup(table: Mapping[str, Decimal], unit: Any, kind: str) -> Decimal:
    if isinstance(unit, str):
        factor = table.get(_normalize(unit))
        if factor is not None:
            return factor
    raise UnsupportedUnitError(
        f"Unsupported {kind} unit: {unit!r}",
        unit=str(unit),
        supported=table.keys(),
    )


__all__ = [
    "GJ_PER_MWH",
    "ENERGY_TO_MWH",
    "ENERGY_DENOMINATOR",
    "MASS_TO_TONNES",
    "VOLUME_TO_LITRES",
    "convert_energy",
    "energy_numerator",
    "mwh_to_gj",
    "convert_mass",
    "convert_volume",
    "supported_units",
]
