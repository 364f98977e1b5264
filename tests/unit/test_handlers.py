"""Unit tests for the rule-based action handlers."""

import pytest

from advisory_mcp.catalog import ACTION_CATALOG
from advisory_mcp.handlers import (
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
from advisory_mcp.handlers.base import list_field, text_field

BOUNDARY = "Test boundary"
SENTINEL = "SENTINEL-7f3a private words"


class TestFieldHelpers:
    """Test input extraction helpers."""

    def test_text_field_trims_strings(self):
        assert text_field({"a": "  hi  "}, "a") == "hi"

    def test_text_field_fallback_for_non_strings(self):
        assert text_field({"a": 3}, "a", "none") == "none"
        assert text_field({}, "a") == ""

    def test_list_field_keeps_strings_only(self):
        assert list_field({"a": ["x", 1, None, "y"]}, "a") == ["x", "y"]
        assert list_field({"a": "x"}, "a") == []


class TestOutputContracts:
    """Every handler output satisfies its declared output schema."""

    @pytest.mark.parametrize("binding", ACTION_CATALOG, ids=lambda b: b.action)
    def test_output_matches_output_schema(self, binding, validator, valid_inputs):
        response = binding.handler().invoke(valid_inputs[binding.action], binding.safety_boundary)
        contract = binding.contract()

        result = validator.validate(contract.output_schema_path, response.output)
        assert result.valid, result.errors
        assert validator.load(contract.output_schema_path) is not None

    @pytest.mark.parametrize("binding", ACTION_CATALOG, ids=lambda b: b.action)
    def test_boundary_notice_passed_through(self, binding, valid_inputs):
        response = binding.handler().invoke(valid_inputs[binding.action], BOUNDARY)
        assert response.boundary_notice == BOUNDARY
        assert response.action == binding.action


class TestWcagCheck:

    def test_five_findings_at_requested_level(self):
        response = WcagCheckHandler().invoke({"target": "https://example.com", "level": "AA"}, BOUNDARY)
        assert len(response.output["findings"]) == 5
        assert "WCAG 2.2 AA compliance" in response.output["summary"]
        assert "Target: https://example.com" in response.assumptions

    def test_defaults(self):
        response = WcagCheckHandler().invoke({"target": "x"}, BOUNDARY)
        assert "Compliance level: WCAG 2.2 AAA" in response.assumptions
        assert "No additional context provided" in response.assumptions
        assert response.uncertainty == "medium"

    def test_findings_are_copies(self):
        response = WcagCheckHandler().invoke({"target": "x"}, BOUNDARY)
        response.output["findings"][0]["severity"] = "changed"
        assert WcagCheckHandler.FINDINGS[0]["severity"] == "high"


class TestDepressionSensitiveRewrite:

    def test_rewrite_mode_replaces_blame_and_urgency(self):
        response = DepressionSensitiveRewriteHandler().invoke(
            {"text": "You must act now. Last chance!", "mode": "rewrite"}, BOUNDARY
        )
        output = response.output
        assert output["result"] == "let's when you are ready. when you are ready!"
        assert output["pattern_count"] == 3
        assert output["review_recommended"] is True

    def test_audit_mode_reports_patterns(self):
        response = DepressionSensitiveRewriteHandler().invoke(
            {"text": "Please complete all required steps.", "mode": "audit"}, BOUNDARY
        )
        output = response.output
        assert output["result"].startswith("Audit complete. Found 2 pattern(s)")
        assert 'High cognitive load pattern detected: "required steps"' in output["safety_flags"]

    def test_audit_clean_text(self):
        response = DepressionSensitiveRewriteHandler().invoke({"text": "Welcome back.", "mode": "audit"}, BOUNDARY)
        assert response.output["result"].startswith("Audit complete. No high-risk patterns detected.")
        assert response.output["review_recommended"] is False

    def test_clean_text_unchanged_in_rewrite_mode(self):
        response = DepressionSensitiveRewriteHandler().invoke({"text": "Take your time."}, BOUNDARY)
        assert response.output["result"] == "Take your time."
        assert "Mode: rewrite" in response.assumptions
        assert "Domain: general" in response.assumptions


class TestSupportiveReply:

    def test_message_never_echoed(self):
        response = SupportiveReplyHandler().invoke({"message": SENTINEL, "risk_level": "high"}, BOUNDARY)
        assert SENTINEL not in str(response.to_wire())

    def test_high_risk_includes_crisis_lines(self):
        response = SupportiveReplyHandler().invoke({"message": "x", "risk_level": "high"}, BOUNDARY)
        guidance = " ".join(response.output["escalation_guidance"])
        assert "116 123" in guidance
        assert "988" in guidance

    @pytest.mark.parametrize("risk_level,count", [("low", 1), ("medium", 2), ("high", 4)])
    def test_escalation_scales_with_risk(self, risk_level, count):
        response = SupportiveReplyHandler().invoke({"message": "x", "risk_level": risk_level}, BOUNDARY)
        assert len(response.output["escalation_guidance"]) == count

    def test_boundaries_notice_in_output(self):
        response = SupportiveReplyHandler().invoke({"message": "x", "risk_level": "low"}, BOUNDARY)
        assert response.output["boundaries_notice"] == BOUNDARY


class TestCognitiveAccessibility:

    def test_short_content_has_no_findings(self):
        response = CognitiveAccessibilityHandler().invoke({"content": "Short and clear."}, BOUNDARY)
        assert response.output["findings"] == [
            "No major cognitive accessibility issues detected in this content sample"
        ]
        assert len(response.output["recommendations"]) == 2

    def test_long_sentences_and_jargon(self):
        content = " ".join(["word"] * 25) + " pursuant herein."
        response = CognitiveAccessibilityHandler().invoke({"content": content}, BOUNDARY)
        findings = response.output["findings"]
        assert findings[0] == "Average sentence length is 27 words and may strain working memory"
        assert findings[1] == "Legal/technical jargon detected: pursuant, herein"
        assert "Word count: 27" in response.assumptions

    def test_long_unnumbered_content_suggests_numbering(self):
        content = ". ".join(["Step text here now"] * 20)
        response = CognitiveAccessibilityHandler().invoke({"content": content}, BOUNDARY)
        assert "Consider numbering sequential steps to reduce sequencing burden" in response.output["recommendations"]


class TestCulturalContext:

    def test_region_notes_and_casual_terms_removed(self):
        response = CulturalContextHandler().invoke(
            {"message": "Hey guys, welcome", "audience": "enterprise", "region": "Japan"}, BOUNDARY
        )
        output = response.output
        assert output["adapted_message"] == "[Adapted for enterprise audience, Japan]: , welcome"
        assert len(output["notes"]) == 4
        assert response.uncertainty == "high"

    def test_older_audience_notes(self):
        response = CulturalContextHandler().invoke({"message": "Hi", "audience": "seniors"}, BOUNDARY)
        assert "Avoid generational jargon and digital-native shorthand" in response.output["notes"]
        assert "Region: global" in response.assumptions

    def test_default_notes(self):
        response = CulturalContextHandler().invoke({"message": "Hi", "audience": "developers"}, BOUNDARY)
        assert response.output["notes"] == CulturalContextHandler.DEFAULT_NOTES


class TestDeescalationPlan:

    @pytest.mark.parametrize("intensity,steps", [("low", 6), ("medium", 7), ("high", 7)])
    def test_plan_length_by_intensity(self, intensity, steps):
        response = DeescalationPlanHandler().invoke({"situation": "dispute", "intensity": intensity}, BOUNDARY)
        plan = response.output["plan"]
        assert len(plan) == steps
        assert plan[-1] == DeescalationPlanHandler.CLOSING_STEP

    def test_high_intensity_risk_notes(self):
        response = DeescalationPlanHandler().invoke({"situation": "dispute", "intensity": "high"}, BOUNDARY)
        assert len(response.output["risk_notes"]) == 3

    def test_alert_on_safety_terms(self):
        response = DeescalationPlanHandler().invoke(
            {"situation": "Customer threatens Legal action", "intensity": "low"}, BOUNDARY
        )
        assert response.output["risk_notes"][-1].startswith("ALERT:")


class TestEmpatheticReframe:

    def test_warm_reframe(self):
        response = EmpatheticReframeHandler().invoke(
            {"message": "Unfortunately we cannot refund your complaint.", "tone": "warm"}, BOUNDARY
        )
        assert response.output["reframed_message"] == (
            "here is what I can tell you what we are able to do is refund your concern."
        )
        assert response.output["escalation_guidance"] == []
        assert response.uncertainty == "low"

    def test_formal_reframe(self):
        response = EmpatheticReframeHandler().invoke({"message": "hi, sorry and thanks", "tone": "formal"}, BOUNDARY)
        assert response.output["reframed_message"] == "Dear, I apologise and thank you"

    def test_neutral_keeps_message(self):
        response = EmpatheticReframeHandler().invoke({"message": "We cannot help.", "tone": "neutral"}, BOUNDARY)
        assert response.output["reframed_message"] == "We cannot help."
        assert response.output["rationale"] == EmpatheticReframeHandler.NEUTRAL_RATIONALE

    def test_crisis_indicators_escalate(self):
        response = EmpatheticReframeHandler().invoke({"message": "There is no point anymore"}, BOUNDARY)
        guidance = response.output["escalation_guidance"]
        assert len(guidance) == 3
        assert "988" in guidance[2]


class TestGriefSupport:

    @pytest.mark.parametrize("mode", ["presence", "practical", "reflection"])
    def test_message_never_echoed(self, mode):
        response = GriefSupportHandler().invoke({"message": SENTINEL, "support_mode": mode}, BOUNDARY)
        assert SENTINEL not in str(response.to_wire())

    def test_default_mode_is_presence(self):
        response = GriefSupportHandler().invoke({"message": "x"}, BOUNDARY)
        assert response.output["reply"] == GriefSupportHandler.REPLIES["presence"][0]
        assert len(response.output["care_notes"]) == 5

    def test_unknown_mode_uses_reflection_reply(self):
        response = GriefSupportHandler().invoke({"message": "x", "support_mode": "other"}, BOUNDARY)
        assert response.output["reply"] == GriefSupportHandler.REPLIES["reflection"][0]


class TestNeurodiversityDesign:

    def test_focus_limits_recommendations(self):
        response = NeurodiversityDesignHandler().invoke(
            {"ui_description": "settings page", "focus": ["dyslexia"]}, BOUNDARY
        )
        assert len(response.output["recommendations"]) == 4
        assert "Focus areas: dyslexia" in response.assumptions

    def test_no_focus_covers_every_area(self):
        response = NeurodiversityDesignHandler().invoke({"ui_description": "settings page"}, BOUNDARY)
        assert len(response.output["recommendations"]) == 14
        assert len(response.output["tradeoffs"]) == 5
        assert "Focus areas: all" in response.assumptions

    def test_fallback_when_nothing_matches(self):
        response = NeurodiversityDesignHandler().invoke(
            {"ui_description": "plain page", "focus": ["colour"]}, BOUNDARY
        )
        assert len(response.output["recommendations"]) == 2
        assert len(response.output["tradeoffs"]) == 1


class TestAgeInclusiveDesign:

    def test_older_adults_with_financial_flow(self):
        response = AgeInclusiveDesignHandler().invoke(
            {"flow_description": "Banking signup", "age_groups": ["older adults"]}, BOUNDARY
        )
        output = response.output
        assert len(output["recommendations"]) == 7
        assert "Financial flows require the highest trust and clarity standards across all age groups" in (
            output["access_notes"]
        )
        assert response.uncertainty == "low"

    def test_unmatched_group_gets_baseline(self):
        response = AgeInclusiveDesignHandler().invoke(
            {"flow_description": "profile edit", "age_groups": ["adults"]}, BOUNDARY
        )
        assert len(response.output["recommendations"]) == 4
        assert len(response.output["access_notes"]) == 2

    def test_no_groups_means_all_ages(self):
        response = AgeInclusiveDesignHandler().invoke({"flow_description": "profile edit"}, BOUNDARY)
        assert len(response.output["recommendations"]) == 8
        assert "Age groups: all ages" in response.assumptions
