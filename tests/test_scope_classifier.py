"""Tests for the category -> scope table."""

import pytest

from ghg_disclosure.exceptions import UnknownActivityCategoryError
from ghg_disclosure.models import ActivityCategory, Scope
from ghg_disclosure.scope_classifier import SCOPE_MAP, categories_for, classify


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("category,scope", [
        ("stationary_combustion", Scope.SCOPE_1),
        ("mobile_sources", Scope.SCOPE_1),
        ("refrigeration_ac", Scope.SCOPE_1),
        ("refrigeration_ac_material_balance", Scope.SCOPE_1),
        ("refrigeration_ac_simplified_material_balance", Scope.SCOPE_1),
        ("refrigeration_ac_screening_method", Scope.SCOPE_1),
        ("fire_suppression", Scope.SCOPE_1),
        ("fire_suppression_material_balance", Scope.SCOPE_1),
        ("fire_suppression_simplified_material_balance", Scope.SCOPE_1),
        ("fire_suppression_screening_method", Scope.SCOPE_1),
        ("purchased_gases", Scope.SCOPE_1),
        ("electricity", Scope.SCOPE_2),
        ("steam", Scope.SCOPE_2),
        ("business_travel_air", Scope.SCOPE_3),
        ("business_travel_rail", Scope.SCOPE_3),
        ("business_travel_road", Scope.SCOPE_3),
        ("business_travel_hotel", Scope.SCOPE_3),
        ("business_travel_personal_car", Scope.SCOPE_3),
        ("business_travel_rail_bus", Scope.SCOPE_3),
        ("commuting", Scope.SCOPE_3),
        ("employee_commuting_personal_car", Scope.SCOPE_3),
        ("employee_commuting_public_transport", Scope.SCOPE_3),
        ("transportation_distribution", Scope.SCOPE_3),
        ("upstream_trans_dist_vehicle_miles", Scope.SCOPE_3),
        ("upstream_trans_dist_ton_miles", Scope.SCOPE_3),
        ("waste", Scope.SCOPE_3),
        ("offsets", Scope.OTHER),
    ])
    def test_every_category(self, category, scope):
        """Every category maps to exactly one scope."""
        assert classify(category) == scope

    def test_accepts_enum_member(self):
        """Enum members classify like their values."""
        assert classify(ActivityCategory.STEAM) == Scope.SCOPE_2

    def test_table_is_complete(self):
        """No category is left out of the table."""
        assert set(SCOPE_MAP) == set(ActivityCategory)

    def test_table_is_read_only(self):
        """The table cannot be modified at runtime."""
        with pytest.raises(TypeError):
            SCOPE_MAP[ActivityCategory.WASTE] = Scope.SCOPE_1

    @pytest.mark.parametrize("value", ["Electric power", "grid", "", None, 42])
    def test_unknown_category_raises(self, value):
        """There is no pattern matching and no default scope."""
        with pytest.raises(UnknownActivityCategoryError):
            classify(value)


class TestCategoriesFor:
    """Tests for categories_for()."""

    def test_declaration_order(self):
        """Scope 2 categories come back in declaration order."""
        assert categories_for(Scope.SCOPE_2) == (
            ActivityCategory.ELECTRICITY,
            ActivityCategory.STEAM,
        )

    def test_partition(self):
        """Scopes partition the category set."""
        total = sum(len(categories_for(scope)) for scope in Scope)
        assert total == len(ActivityCategory)
