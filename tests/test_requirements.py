"""Tests for the ESRS E1 requirements checklist."""

from ghg_disclosure.models import RequirementStatus
from ghg_disclosure.requirements import get_requirements_checklist


class TestRequirementsChecklist:
    """Coverage of ESRS E1 disclosure requirements."""

    def test_all_requirements_listed(self):
        """E1-1 through E1-9 are present in order."""
        checklist = get_requirements_checklist()

        assert [r.code for r in checklist.requirements] == [f"E1-{i}" for i in range(1, 10)]

    def test_quantitative_requirements_implemented(self):
        """Energy, targets, emissions and removals are covered."""
        checklist = get_requirements_checklist()

        assert checklist.implemented == ["E1-4", "E1-5", "E1-6", "E1-7"]
        by_code = {r.code: r for r in checklist.requirements}
        assert by_code["E1-6"].engine_component == "ghg_disclosure.aggregator"
        assert by_code["E1-1"].status == RequirementStatus.NOT_IMPLEMENTED

    def test_next_priorities(self):
        """Outstanding requirements are listed as priorities."""
        checklist = get_requirements_checklist()

        assert len(checklist.next_priorities) == 5
        assert checklist.next_priorities[0].startswith("E1-1:")
