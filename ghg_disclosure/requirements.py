# -*- coding: utf-8 -*-
"""
ESRS E1 disclosure requirements and this engine's coverage of them.

Quantitative requirements are produced by engine components; qualitative
ones (transition plan, policies, actions, carbon pricing, financial
effects) are narrative disclosures outside the engine.
"""

from __future__ import annotations

from typing import Tuple

from ghg_disclosure.models import (
    DisclosureRequirement,
    RequirementStatus,
    RequirementsChecklist,
)

STANDARD_NAME = "CSRD - ESRS E1 (Climate)"

ESRS_E1_REQUIREMENTS: Tuple[DisclosureRequirement, ...] = (
    DisclosureRequirement(
        code="E1-1",
        title="Transition plan for climate change mitigation",
        description=(
            "Describe the plan to ensure business model and strategy are compatible "
            "with limiting global warming to 1.5C"
        ),
        status=RequirementStatus.NOT_IMPLEMENTED,
    ),
    DisclosureRequirement(
        code="E1-2",
        title="Policies related to climate change mitigation and adaptation",
        description=(
            "Describe policies to manage material climate impacts, dependencies, "
            "risks and opportunities"
        ),
        status=RequirementStatus.NOT_IMPLEMENTED,
    ),
    DisclosureRequirement(
        code="E1-3",
        title="Actions and resources for climate change mitigation",
        description="Describe climate action plans and resources allocated",
        status=RequirementStatus.NOT_IMPLEMENTED,
    ),
    DisclosureRequirement(
        code="E1-4",
        title="Targets for climate change mitigation and adaptation",
        description=(
            "Describe GHG emission reduction targets and their alignment with the "
            "Paris Agreement"
        ),
        status=RequirementStatus.IMPLEMENTED,
        engine_component="ghg_disclosure.targets",
    ),
    DisclosureRequirement(
        code="E1-5",
        title="Energy consumption and mix",
        description="Disclose total energy consumption and renewable energy percentage",
        status=RequirementStatus.IMPLEMENTED,
        engine_component="ghg_disclosure.energy",
    ),
    DisclosureRequirement(
        code="E1-6",
        title="Gross Scopes 1, 2, 3 and Total GHG emissions",
        description="Report absolute GHG emissions by scope and intensity metrics",
        status=RequirementStatus.IMPLEMENTED,
        engine_component="ghg_disclosure.aggregator",
    ),
    DisclosureRequirement(
        code="E1-7",
        title="GHG removals and GHG mitigation projects",
        description="Disclose carbon removal activities and carbon credits",
        status=RequirementStatus.IMPLEMENTED,
        engine_component="ghg_disclosure.offsets",
    ),
    DisclosureRequirement(
        code="E1-8",
        title="Internal carbon pricing",
        description="Explain if and how internal carbon pricing is used",
        status=RequirementStatus.NOT_IMPLEMENTED,
    ),
    DisclosureRequirement(
        code="E1-9",
        title="Anticipated financial effects from material climate risks",
        description=(
            "Disclose financial impacts from climate-related risks and opportunities"
        ),
        status=RequirementStatus.NOT_IMPLEMENTED,
    ),
)


def get_requirements_checklist() -> RequirementsChecklist:
    """Return the ESRS E1 requirements with the engine's coverage status."""
    return RequirementsChecklist(
        standard=STANDARD_NAME,
        requirements=list(ESRS_E1_REQUIREMENTS),
        implemented=[
            r.code for r in ESRS_E1_REQUIREMENTS if r.status == RequirementStatus.IMPLEMENTED
        ],
        next_priorities=[
            f"{r.code}: {r.title}"
            for r in ESRS_E1_REQUIREMENTS
            if r.status != RequirementStatus.IMPLEMENTED
        ],
    )


__all__ = ["STANDARD_NAME", "ESRS_E1_REQUIREMENTS", "get_requirements_checklist"]
