"""Action handlers, one per registered action."""

from advisory_mcp.handlers.accessibility import (
    AgeInclusiveDesignHandler,
    CognitiveAccessibilityHandler,
    NeurodiversityDesignHandler,
    WcagCheckHandler,
)
from advisory_mcp.handlers.base import ActionHandler
from advisory_mcp.handlers.communication import (
    CulturalContextHandler,
    DeescalationPlanHandler,
    EmpatheticReframeHandler,
)
from advisory_mcp.handlers.wellbeing import (
    DepressionSensitiveRewriteHandler,
    GriefSupportHandler,
    SupportiveReplyHandler,
)

__all__ = [
    "ActionHandler",
    "AgeInclusiveDesignHandler",
    "CognitiveAccessibilityHandler",
    "CulturalContextHandler",
    "DeescalationPlanHandler",
    "DepressionSensitiveRewriteHandler",
    "EmpatheticReframeHandler",
    "GriefSupportHandler",
    "NeurodiversityDesignHandler",
    "SupportiveReplyHandler",
    "WcagCheckHandler",
]
