"""Communication handlers: cultural context, de-escalation, empathetic reframing."""

import re
from typing import Any, Dict, List, Mapping, Tuple

from advisory_mcp.contracts.action_spec import InvokeResponse
from advisory_mcp.handlers.base import ActionHandler, text_field
from advisory_mcp.handlers.wellbeing import CRISIS_LINES


class CulturalContextHandler(ActionHandler):
    """Region and audience adaptation notes for a message."""

    action = "cultural_context_check"

    REGION_NOTES: List[Tuple[Tuple[str, ...], List[str]]] = [
        (
            ("china", "apac", "japan", "korea"),
            [
                "Hierarchy and collective framing are typically valued; address the group benefit before "
                "individual benefit",
                "Indirect communication is often preferred; soften direct refusals or negative framing",
                "Colours: red may be positive (luck) rather than negative (error) in East Asian contexts",
                "Formal titles and organisation names carry significant weight; use them",
            ],
        ),
        (
            ("middle east", "arabic", "gulf"),
            [
                "Right-to-left reading order affects layout; ensure UI supports RTL text direction",
                "Religious calendar events (Ramadan, Eid) affect availability; build scheduling flexibility",
                "Relationship and trust-building language before transactional content is culturally expected",
            ],
        ),
        (
            ("india",),
            [
                "Language diversity is significant; consider regional language support beyond English and Hindi",
                "Formal address and credentials carry weight; acknowledge expertise and qualifications",
                "Family and community framing often resonates; individual-first messaging may underperform",
            ],
        ),
    ]

    OLDER_AUDIENCE_TERMS = ("elder", "senior", "older")

    DEFAULT_NOTES = [
        "No region-specific adaptation rules triggered; review message for cultural neutrality",
        "Avoid idioms and metaphors that may not translate well across cultures",
        "Use concrete, action-oriented language that works in direct translation",
    ]

    CASUAL_TERMS = re.compile(r"\b(guys|dude|hey)\b", re.IGNORECASE)

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        audience = text_field(data, "audience", "general")
        region = text_field(data, "region", "global")
        message = text_field(data, "message")

        lowered_region = region.lower()
        lowered_audience = audience.lower()

        notes: List[str] = []
        for terms, region_notes in self.REGION_NOTES:
            if any(term in lowered_region for term in terms):
                notes.extend(region_notes)

        if any(term in lowered_audience for term in self.OLDER_AUDIENCE_TERMS):
            notes.append("Avoid generational jargon and digital-native shorthand")
            notes.append("Formal, respectful tone is preferred over casual or playful register")

        if not notes:
            notes.extend(self.DEFAULT_NOTES)

        if message:
            adapted = f"[Adapted for {audience} audience, {region}]: {self.CASUAL_TERMS.sub('', message).strip()}"
        else:
            adapted = "No message provided; please include a 'message' field in your input"

        return self.respond(
            boundary_notice,
            uncertainty="high",
            assumptions=[
                f"Audience: {audience}",
                f"Region: {region}",
                "Cultural guidance is generalised; individual variation is significant within any group",
                "Human localisation review is strongly recommended for production content",
            ],
            output={
                "adapted_message": adapted,
                "notes": notes,
                "uncertainty": "Cultural guidance represents tendencies, not rules; context always varies",
            },
        )


class DeescalationPlanHandler(ActionHandler):
    """Step plan for calming a conflict at a given intensity."""

    action = "deescalation_plan"

    OPENING_STEPS = [
        "Pause and allow a moment of silence before responding; rushing escalates tension",
        "Acknowledge the emotion without judgment: 'I can hear this is important to you'",
        "Ask one clarifying question to show genuine interest: "
        "'Can you help me understand what you need most right now?'",
        "Validate the concern explicitly before moving to solutions: 'That sounds genuinely frustrating'",
    ]

    INTENSITY_STEPS: Dict[str, Tuple[List[str], List[str]]] = {
        "high": (
            [
                "Offer a structured break: 'Let us take 10 minutes and come back to this. What time works for you?'",
                "Narrow the scope: 'Let us focus on one issue at a time. What is the most urgent thing for you "
                "right now?'",
            ],
            [
                "High intensity: avoid defending positions or escalating with counter-arguments",
                "High intensity: if safety is a concern, follow your organisation's safety escalation "
                "procedure immediately",
                "High intensity: consider involving a neutral third party or mediator",
            ],
        ),
        "medium": (
            [
                "Offer two concrete options for resolution to restore a sense of control",
                "Summarise what you heard before proposing next steps",
            ],
            ["Medium intensity: watch for escalation triggers; avoid ultimatums and time pressure"],
        ),
        "low": (
            ["Confirm shared goals: 'We both want this to work. Here is what I can do'"],
            ["Low intensity: maintain calm, collaborative tone throughout"],
        ),
    }

    CLOSING_STEP = "End with a clear, agreed next step and timeline; ambiguity sustains conflict"

    ALERT_TERMS = ("threat", "harm", "legal")

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        situation = text_field(data, "situation").lower()
        intensity = text_field(data, "intensity", "medium")

        steps, risk = self.INTENSITY_STEPS.get(intensity, self.INTENSITY_STEPS["low"])
        plan = self.OPENING_STEPS + steps + [self.CLOSING_STEP]
        risk_notes = list(risk)

        if any(term in situation for term in self.ALERT_TERMS):
            risk_notes.append(
                "ALERT: Situation description contains potential safety/legal signals; "
                "involve qualified personnel immediately"
            )

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Intensity level: {intensity}",
                "Steps are general communication patterns; not a substitute for trained mediation",
                "Safety-critical situations require qualified personnel",
            ],
            output={"plan": plan, "risk_notes": risk_notes},
        )


class EmpatheticReframeHandler(ActionHandler):
    """Reframe a message in a warm, neutral, or formal tone."""

    action = "empathetic_reframe"

    TONE_RULES: Dict[str, Tuple[List[Tuple[str, str]], List[str]]] = {
        "warm": (
            [
                (r"\byou failed\b", "this did not work out this time"),
                (r"\byou must\b", "it would really help if you could"),
                (r"\bunfortunately\b", "here is what I can tell you"),
                (r"\bwe cannot\b", "what we are able to do is"),
                (r"\bwe don'?t\b", "we are not currently able to"),
                (r"\byour (issue|problem|complaint)\b", "your concern"),
                (r"\bas per our policy\b", "to make sure things go smoothly for you"),
            ],
            [
                "Replaced blame/failure language with neutral outcome language",
                "Converted restrictive 'we cannot' to possibility-focused 'what we can do'",
                "Softened formal policy references to user-benefit framing",
            ],
        ),
        "formal": (
            [
                (r"\bsorry\b", "I apologise"),
                (r"\bthanks\b", "thank you"),
                (r"\bhi\b", "Dear"),
                (r"\byou guys\b", "your team"),
            ],
            [
                "Elevated register to formal professional tone",
                "Standardised informal greetings and closings",
            ],
        ),
    }

    NEUTRAL_RATIONALE = ["Neutral tone applied; minimal reframing, content structure preserved"]

    CRISIS_TERMS = ("suicid", "self-harm", "end my life", "no point")

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        tone = text_field(data, "tone", "warm")
        message = text_field(data, "message")

        rules, rationale = self.TONE_RULES.get(tone, ([], self.NEUTRAL_RATIONALE))
        reframed = message
        for pattern, replacement in rules:
            reframed = re.sub(pattern, replacement, reframed, flags=re.IGNORECASE)

        escalation_guidance: List[str] = []
        lowered = message.lower()
        if any(term in lowered for term in self.CRISIS_TERMS):
            escalation_guidance = [
                "Message contains potential crisis indicators; do not respond with automated content",
                "Route immediately to a trained human responder or crisis line",
                CRISIS_LINES,
            ]

        return self.respond(
            boundary_notice,
            uncertainty="low",
            assumptions=[
                f"Tone: {tone}",
                "Reframe applies pattern-based rules; human review recommended for high-stakes communications",
                "Does not modify factual content or commitments",
            ],
            output={
                "reframed_message": reframed,
                "rationale": list(rationale),
                "escalation_guidance": escalation_guidance,
            },
        )
