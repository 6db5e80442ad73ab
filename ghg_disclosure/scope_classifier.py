# -*- coding: utf-8 -*-
"""
Scope Classifier

Maps every activity category to exactly one GHG Protocol scope through a
single, closed lookup table. There is no pattern matching on free text and
no default scope: an unrecognized category raises
UnknownActivityCategoryError, because a silently misclassified activity is
the most damaging failure a compliance engine can have.

Market-based and location-based Scope 2 are two parallel values of the same
``electricity``/``steam`` activity (see ``Scope2Method``), never two scopes.

Example:
    >>> from ghg_disclosure.scope_classifier import classify
    >>> classify("electricity")
    <Scope.SCOPE_2: 'SCOPE_2'>
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple, Union

from ghg_disclosure.models import ActivityCategory, Scope

#: Category -> scope. Read-only, built once at import.
SCOPE_MAP: Mapping[ActivityCategory, Scope] = MappingProxyType({
    # Scope 1: direct emissions from owned or controlled sources
    ActivityCategory.STATIONARY_COMBUSTION: Scope.SCOPE_1,
    ActivityCategory.MOBILE_SOURCES: Scope.SCOPE_1,
    ActivityCategory.REFRIGERATION_AC: Scope.SCOPE_1,
    ActivityCategory.REFRIGERATION_AC_MATERIAL_BALANCE: Scope.SCOPE_1,
    ActivityCategory.REFRIGERATION_AC_SIMPLIFIED_MATERIAL_BALANCE: Scope.SCOPE_1,
    ActivityCategory.REFRIGERATION_AC_SCREENING_METHOD: Scope.SCOPE_1,
    ActivityCategory.FIRE_SUPPRESSION: Scope.SCOPE_1,
    ActivityCategory.FIRE_SUPPRESSION_MATERIAL_BALANCE: Scope.SCOPE_1,
    ActivityCategory.FIRE_SUPPRESSION_SIMPLIFIED_MATERIAL_BALANCE: Scope.SCOPE_1,
    ActivityCategory.FIRE_SUPPRESSION_SCREENING_METHOD: Scope.SCOPE_1,
    ActivityCategory.PURCHASED_GASES: Scope.SCOPE_1,
    # Scope 2: purchased electricity, steam, heating and cooling
    ActivityCategory.ELECTRICITY: Scope.SCOPE_2,
    ActivityCategory.STEAM: Scope.SCOPE_2,
    # Scope 3: other value-chain emissions
    ActivityCategory.BUSINESS_TRAVEL_AIR: Scope.SCOPE_3,
    ActivityCategory.BUSINESS_TRAVEL_RAIL: Scope.SCOPE_3,
    ActivityCategory.BUSINESS_TRAVEL_ROAD: Scope.SCOPE_3,
    ActivityCategory.BUSINESS_TRAVEL_HOTEL: Scope.SCOPE_3,
    ActivityCategory.BUSINESS_TRAVEL_PERSONAL_CAR: Scope.SCOPE_3,
    ActivityCategory.BUSINESS_TRAVEL_RAIL_BUS: Scope.SCOPE_3,
    ActivityCategory.COMMUTING: Scope.SCOPE_3,
    ActivityCategory.EMPLOYEE_COMMUTING_PERSONAL_CAR: Scope.SCOPE_3,
    ActivityCategory.EMPLOYEE_COMMUTING_PUBLIC_TRANSPORT: Scope.SCOPE_3,
    ActivityCategory.TRANSPORTATION_DISTRIBUTION: Scope.SCOPE_3,
    ActivityCategory.UPSTREAM_TRANS_DIST_VEHICLE_MILES: Scope.SCOPE_3,
    ActivityCategory.UPSTREAM_TRANS_DIST_TON_MILES: Scope.SCOPE_3,
    ActivityCategory.WASTE: Scope.SCOPE_3,
    # Purchased credits are disclosed separately, never as emissions
    ActivityCategory.OFFSETS: Scope.OTHER,
})

_missing = set(ActivityCategory) - set(SCOPE_MAP)
if _missing:
    raise RuntimeError(f"SCOPE_MAP is missing categories: {sorted(c.value for c in _missing)}")
del _missing

#: GHG Protocol description per reported scope.
SCOPE_DESCRIPTIONS: Mapping[Scope, str] = MappingProxyType({
    Scope.SCOPE_1: "Direct GHG emissions from sources owned or controlled by the company",
    Scope.SCOPE_2: (
        "Indirect GHG emissions from consumption of purchased electricity, "
        "steam, heating and cooling"
    ),
    Scope.SCOPE_3: (
        "All other indirect emissions in the value chain (upstream and downstream)"
    ),
    Scope.OTHER: "Carbon credits and offsets, disclosed separately from emissions",
})

#: Scopes that carry emissions, in reporting order.
EMISSION_SCOPES: Tuple[Scope, ...] = (Scope.SCOPE_1, Scope.SCOPE_2, Scope.SCOPE_3)


def classify(activity_category: Union[ActivityCategory, str]) -> Scope:
    """Return the scope of an activity category.

    Args:
        activity_category: ActivityCategory member or its string value.

    Returns:
        The single scope the category belongs to.

    Raises:
        UnknownActivityCategoryError: If the category is not in the table.
    """
    return SCOPE_MAP[ActivityCategory.parse(activity_category)]


def categories_for(scope: Scope) -> Tuple[ActivityCategory, ...]:
    """Categories belonging to ``scope``, in declaration order."""
    return tuple(category for category, mapped in SCOPE_MAP.items() if mapped == scope)


__all__ = [
    "SCOPE_MAP",
    "SCOPE_DESCRIPTIONS",
    "EMISSION_SCOPES",
    "classify",
    "categories_for",
]
