"""
Action catalog.

The hand-authored list of actions. The registry and the dispatcher's handler
map are both built from it, so every registered action has a handler.
"""

from dataclasses import dataclass
from typing import Dict, List, Type

from advisory_mcp.contracts.action_spec import ActionContract
from advisory_mcp.core.registry import ContractRegistry
from advisory_mcp.handlers import (
    ActionHandler,
    AgeInclusiveDesignHandler,
    CognitiveAccessibilityHandler,
    CulturalContextHandler,
    DeescalationPlanHandler,
    DepressionSensitiveRewriteHandler,
    EmpatheticReframeHandler,
    GriefSupportHandler,
    NeurodiversityDesignHandler,
    SupportiveReplyHandler,
    WcagCheckHandler,
)


@dataclass(frozen=True)
class ActionBinding:
    """One catalog row: the skill, its boundary, and the serving handler."""
    skill: str
    safety_boundary: str
    handler: Type[ActionHandler]

    @property
    def action(self) -> str:
        return self.handler.action

    def contract(self) -> ActionContract:
        return ActionContract(
            skill=self.skill,
            action=self.action,
            input_schema_path=f"schemas/{self.skill}.input.json",
            output_schema_path=f"schemas/{self.skill}.output.json",
            safety_boundary=self.safety_boundary,
        )


ACTION_CATALOG: List[ActionBinding] = [
    ActionBinding(
        skill="wcag-aaa-accessibility",
        safety_boundary="Compliance guidance only; does not replace legal review",
        handler=WcagCheckHandler,
    ),
    ActionBinding(
        skill="depression-sensitive-content",
        safety_boundary="Non-clinical UX/content guidance only",
        handler=DepressionSensitiveRewriteHandler,
    ),
    ActionBinding(
        skill="supportive-conversation",
        safety_boundary="Non-clinical support; must provide escalation cues when risk is elevated",
        handler=SupportiveReplyHandler,
    ),
    ActionBinding(
        skill="cognitive-accessibility",
        safety_boundary="Design guidance only",
        handler=CognitiveAccessibilityHandler,
    ),
    ActionBinding(
        skill="cultural-sensitivity",
        safety_boundary="Context-sensitive recommendations with uncertainty disclosure",
        handler=CulturalContextHandler,
    ),
    ActionBinding(
        skill="conflict-de-escalation",
        safety_boundary="No coercive tactics",
        handler=DeescalationPlanHandler,
    ),
    ActionBinding(
        skill="empathetic-communication",
        safety_boundary="No manipulation or deceptive empathy",
        handler=EmpatheticReframeHandler,
    ),
    ActionBinding(
        skill="grief-loss-support",
        safety_boundary="Non-clinical bereavement support only",
        handler=GriefSupportHandler,
    ),
    ActionBinding(
        skill="neurodiversity-aware-design",
        safety_boundary="Inclusive design guidance only",
        handler=NeurodiversityDesignHandler,
    ),
    ActionBinding(
        skill="age-inclusive-design",
        safety_boundary="Inclusive design guidance only",
        handler=AgeInclusiveDesignHandler,
    ),
]


def build_registry(catalog: List[ActionBinding] = ACTION_CATALOG) -> ContractRegistry:
    return ContractRegistry(binding.contract() for binding in catalog)


def build_handlers(catalog: List[ActionBinding] = ACTION_CATALOG) -> Dict[str, ActionHandler]:
    return {binding.action: binding.handler() for binding in catalog}
