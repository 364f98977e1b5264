"""
Emotional wellbeing handlers.

``supportive_reply`` and ``grief_support_response`` receive sensitive user
messages; their output never contains the message text.
"""

import re
from typing import Any, List, Mapping, Tuple

from advisory_mcp.contracts.action_spec import InvokeResponse
from advisory_mcp.handlers.base import ActionHandler, text_field


CRISIS_LINES = "In the UK: Samaritans 116 123 | US: 988 Suicide & Crisis Lifeline | International: findahelpline.com"


class DepressionSensitiveRewriteHandler(ActionHandler):
    """Audit or rewrite content for readers experiencing depression."""

    action = "rewrite_depression_sensitive_content"

    SHAME_PATTERNS = ["you failed", "you must", "you should have", "try harder", "your fault"]
    URGENCY_PATTERNS = ["last chance", "act now", "don't miss out", "limited time"]
    COGNITIVE_LOAD_PATTERNS = ["please complete all", "required steps", "do not proceed unless"]

    # Applied in order; earlier rules can consume text later rules would match.
    REWRITES: List[Tuple[str, str]] = [
        (r"you (failed|must|should have)", "let's"),
        (r"last chance|act now", "when you are ready"),
        (r"limited time", "available for a period"),
        (r"please complete all", "complete"),
        (r"required steps", "the following steps"),
        (r"do not proceed unless", "when you are ready, you can"),
        (r"you must", "you can"),
        (r"you need to", "when ready, you can"),
    ]

    def detect(self, text: str) -> List[str]:
        lowered = text.lower()
        flags = [f'Shame/blame language detected: "{p}"' for p in self.SHAME_PATTERNS if p in lowered]
        flags += [f'Urgency pressure detected: "{p}"' for p in self.URGENCY_PATTERNS if p in lowered]
        flags += [
            f'High cognitive load pattern detected: "{p}"' for p in self.COGNITIVE_LOAD_PATTERNS if p in lowered
        ]
        return flags

    def rewrite(self, text: str) -> str:
        for pattern, replacement in self.REWRITES:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        text = text_field(data, "text")
        mode = text_field(data, "mode", "rewrite")
        domain = text_field(data, "domain", "general")

        safety_flags = self.detect(text)

        if mode == "audit":
            if safety_flags:
                result = (
                    f"Audit complete. Found {len(safety_flags)} pattern(s) that may cause emotional friction "
                    "or cognitive overload for users experiencing depression. See safety_flags for details."
                )
            else:
                result = (
                    "Audit complete. No high-risk patterns detected. "
                    "Content appears emotionally safe and cognitively accessible."
                )
        else:
            result = self.rewrite(text)

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Mode: {mode}",
                f"Domain: {domain}",
                "Pattern matching is heuristic; human review recommended for production content",
                "Non-clinical tool; does not assess clinical risk of content",
            ],
            output={
                "result": result,
                "safety_flags": safety_flags,
                "pattern_count": len(safety_flags),
                "review_recommended": bool(safety_flags),
            },
        )


class SupportiveReplyHandler(ActionHandler):
    """Non-clinical supportive reply with risk-scaled escalation cues."""

    action = "supportive_reply"

    REPLY = (
        "I hear you, and I am glad you reached out. It makes sense that things feel heavy right now. "
        "You do not have to have it all figured out; let us focus on one small step at a time."
    )

    ESCALATION = {
        "high": [
            "If you or someone else may be in immediate danger, contact emergency services now",
            "Contact a local crisis line; trained counsellors are available 24/7",
            CRISIS_LINES,
            "Reach out to a trusted person nearby",
        ],
        "medium": [
            "If things feel harder over time, consider speaking with a mental health professional",
            "You can contact a support line any time, even just to talk",
        ],
        "low": [
            "Professional support is available any time you need it",
        ],
    }

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        risk_level = text_field(data, "risk_level", "low")
        escalation = self.ESCALATION.get(risk_level, self.ESCALATION["low"])

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Risk level: {risk_level} (self-reported or system-assessed)",
                "Non-clinical support only; not a substitute for professional mental health care",
            ],
            output={
                "reply": self.REPLY,
                "escalation_guidance": list(escalation),
                "boundaries_notice": boundary_notice,
            },
        )


class GriefSupportHandler(ActionHandler):
    """Bereavement support reply in one of three modes."""

    action = "grief_support_response"

    REPLIES = {
        "presence": (
            "I am here with you. There is no need to have the right words or to be okay right now. "
            "Grief has its own pace, and whatever you are feeling is valid.",
            [
                "Presence-first response; prioritises being heard over problem-solving",
                "Avoid offering silver linings or comparisons to others' experiences",
                "Hold space; short, warm responses often feel safer than long explanations",
            ],
        ),
        "practical": (
            "I am sorry for what you are going through. If it helps to think about one small thing, "
            "I am here to assist with whatever feels manageable right now. "
            "There is no pressure to do more than that.",
            [
                "Practical mode; offers help without imposing a to-do list",
                "Keep any suggested actions small, concrete, and optional",
                "Check in before offering advice: ask 'Would it help if I suggested some options?' first",
            ],
        ),
        "reflection": (
            "Grief often does not follow a straight line. What you are feeling, even if it surprises you, "
            "is part of how we process loss. There is no right or wrong way to grieve.",
            [
                "Reflection mode; validates the non-linear nature of grief",
                "Avoid timelines or stages; grief does not follow a fixed sequence",
                "Normalising unexpected emotions (relief, anger, numbness) can reduce shame",
            ],
        ),
    }

    ESCALATION = [
        "If the person expresses thoughts of self-harm, contact emergency services or a crisis line immediately",
        "This skill provides non-clinical support patterns only; "
        "do not use as a substitute for professional grief counselling",
    ]

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        support_mode = text_field(data, "support_mode", "presence")
        reply, notes = self.REPLIES.get(support_mode, self.REPLIES["reflection"])

        care_notes = list(notes) + [
            "Never use platitudes: 'they are in a better place', 'time heals all wounds', 'at least...'",
            "Cultural variation in grieving is significant; follow the person's lead on ritual and meaning",
        ]

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Support mode: {support_mode}",
                "Non-clinical tool; not a substitute for professional grief counselling",
                "Cultural context of grief varies significantly; adapt to cues from the person",
            ],
            output={
                "reply": reply,
                "care_notes": care_notes,
                "escalation_guidance": list(self.ESCALATION),
            },
        )
