"""Accessibility and inclusive design handlers."""

import re
from typing import Any, Dict, List, Mapping

from advisory_mcp.contracts.action_spec import InvokeResponse
from advisory_mcp.handlers.base import ActionHandler, list_field, text_field


class WcagCheckHandler(ActionHandler):
    """WCAG 2.2 checklist for a target page or component."""

    action = "wcagaaa_check"

    FINDINGS: List[Dict[str, str]] = [
        {
            "severity": "high",
            "issue": "Missing skip navigation link: keyboard users cannot bypass repeated navigation",
            "fix": "Add <a href='#main-content' class='skip-link'>Skip to main content</a> as first focusable element",
        },
        {
            "severity": "high",
            "issue": "Interactive elements may lack sufficient colour contrast for Level AAA (7:1 for normal text)",
            "fix": "Verify all text/background combinations meet 7:1 contrast ratio using a colour contrast analyser",
        },
        {
            "severity": "medium",
            "issue": "Form inputs should include visible labels associated via for/id or aria-labelledby",
            "fix": "Add <label for='field-id'> or aria-labelledby pointing to visible label element",
        },
        {
            "severity": "medium",
            "issue": "Images and icons require descriptive alt text; decorative images require alt=''",
            "fix": "Audit all <img> elements: add meaningful alt text or alt='' for decorative usage",
        },
        {
            "severity": "low",
            "issue": "External links should indicate they open in a new tab for Level AAA compliance",
            "fix": "Add rel='noopener noreferrer' and a screen-reader announcement such as '(opens in new tab)'",
        },
    ]

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        target = text_field(data, "target", "(no target provided)")
        level = text_field(data, "level", "AAA")
        context = text_field(data, "context")
        findings = [dict(finding) for finding in self.FINDINGS]

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Target: {target}",
                f"Compliance level: WCAG 2.2 {level}",
                f"Context: {context}" if context else "No additional context provided",
                "Automated checks cover ~40% of WCAG criteria; manual review required for full compliance",
            ],
            output={
                "summary": (
                    f"Found {len(findings)} potential issues. "
                    f"Manual audit required for full WCAG 2.2 {level} compliance."
                ),
                "findings": findings,
                "next_step": "Run manual keyboard-only navigation and screen reader test against each finding",
            },
        )


class CognitiveAccessibilityHandler(ActionHandler):
    """Readability audit of a content sample."""

    action = "cognitive_accessibility_audit"

    JARGON_TERMS = ["pursuant", "notwithstanding", "thereto", "heretofore", "aforementioned", "herein"]
    MAX_SENTENCE_WORDS = 20
    MAX_CONTENT_WORDS = 150

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        content = text_field(data, "content")
        target_context = text_field(data, "target_context", "general digital interface")

        word_count = len(content.split())
        sentence_count = len([part for part in re.split(r"[.!?]+", content) if part])
        avg_words = int(word_count / sentence_count + 0.5) if sentence_count else 0

        findings: List[str] = []
        recommendations: List[str] = []

        if avg_words > self.MAX_SENTENCE_WORDS:
            findings.append(f"Average sentence length is {avg_words} words and may strain working memory")
            recommendations.append("Break sentences longer than 20 words into two shorter sentences")

        if word_count > self.MAX_CONTENT_WORDS:
            findings.append(f"Content is {word_count} words; consider chunking into sections with clear headings")
            recommendations.append("Use headings and bullet points to reduce linear reading demand")

        lowered = content.lower()
        jargon = [term for term in self.JARGON_TERMS if term in lowered]
        if jargon:
            findings.append(f"Legal/technical jargon detected: {', '.join(jargon)}")
            recommendations.append("Replace jargon with plain language equivalents")

        if not re.search(r"\d+\.\s", content) and word_count > 50:
            recommendations.append("Consider numbering sequential steps to reduce sequencing burden")

        if not findings:
            findings.append("No major cognitive accessibility issues detected in this content sample")

        recommendations.append("Test content with users who have varied cognitive profiles")
        recommendations.append("Provide a summary at the top for users who cannot read the full content")

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Target context: {target_context}",
                f"Word count: {word_count}",
                f"Estimated sentences: {sentence_count}",
                "Automated analysis; human review recommended for sensitive contexts",
            ],
            output={"findings": findings, "recommendations": recommendations},
        )


class NeurodiversityDesignHandler(ActionHandler):
    """Design recommendations for neurodivergent users."""

    action = "neurodiversity_design_check"

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        description = text_field(data, "ui_description").lower()
        focus = list_field(data, "focus")
        focus_terms = [item.lower() for item in focus]

        def in_focus(term: str) -> bool:
            return not focus_terms or any(term in item for item in focus_terms)

        recommendations: List[str] = []
        tradeoffs: List[str] = []

        if in_focus("adhd") or in_focus("attention") or "notification" in description or "alert" in description:
            recommendations.extend([
                "Batch notifications; avoid interrupting flow with real-time alerts for non-urgent events",
                "Provide a focus/do-not-disturb mode that suppresses non-critical UI elements",
                "Use progress indicators for multi-step tasks to maintain orientation and momentum",
            ])
            tradeoffs.append("Focus mode may hide useful ambient information; offer opt-in rather than opt-out")

        if in_focus("autism") or in_focus("sensory") or "animation" in description or "motion" in description:
            recommendations.extend([
                "Respect the prefers-reduced-motion media query; disable or reduce animations for users who set it",
                "Avoid auto-playing audio, video, or scrolling content; always provide user controls",
                "Use predictable layouts; avoid reorganising navigation or controls between sessions",
            ])
            tradeoffs.append("Removing animations may reduce perceived polish; consider a user-toggled motion preference")

        if in_focus("dyslexia") or in_focus("reading") or "text" in description or "font" in description:
            recommendations.extend([
                "Use a minimum 16px body font size and 1.5x line height to improve readability",
                "Avoid fully justified text; ragged-right alignment is easier for dyslexic readers",
                "Sans-serif fonts (e.g. Open Sans, Atkinson Hyperlegible) are generally preferred over serif",
                "Offer a reading mode or high-contrast mode toggle",
            ])
            tradeoffs.append("Larger text and wider spacing increases scroll depth; test with real content volume")

        if in_focus("executive function") or in_focus("memory") or "form" in description or "step" in description:
            recommendations.extend([
                "Show one task or decision at a time; avoid presenting all steps simultaneously",
                "Auto-save progress in multi-step forms; never lose data on accidental navigation",
                "Provide undo and recovery paths for all destructive actions",
                "Summarise what was completed at the end of each step to reduce memory burden",
            ])
            tradeoffs.append("Single-step flows increase page count; ensure navigation remains orientation-friendly")

        if not recommendations:
            recommendations.extend([
                "Review against WCAG 2.2 AAA and COGA (Cognitive Accessibility Guidance) for comprehensive coverage",
                "Conduct usability testing with neurodivergent participants; there is no substitute for real feedback",
            ])

        tradeoffs.append(
            "Neurodiversity encompasses a wide spectrum and no single design choice works for all users; "
            "provide options and settings where possible"
        )

        return self.respond(
            boundary_notice,
            uncertainty="medium",
            assumptions=[
                f"Focus areas: {', '.join(focus) if focus else 'all'}",
                "Recommendations are general design patterns; individual needs vary significantly",
                "No diagnostic claims about users are made or implied",
            ],
            output={"recommendations": recommendations, "tradeoffs": tradeoffs},
        )


class AgeInclusiveDesignHandler(ActionHandler):
    """Design recommendations across age groups."""

    action = "age_inclusive_design_check"

    FINANCIAL_TERMS = ("payment", "banking", "financial")

    def invoke(self, data: Mapping[str, Any], boundary_notice: str) -> InvokeResponse:
        flow = text_field(data, "flow_description").lower()
        age_groups = list_field(data, "age_groups")
        groups = [group.lower() for group in age_groups]

        def includes_group(*terms: str) -> bool:
            return not groups or any(term in group for group in groups for term in terms)

        recommendations: List[str] = []
        access_notes: List[str] = []

        if includes_group("older", "senior", "elder", "60"):
            recommendations.extend([
                "Minimum touch target size of 44x44px; larger is better for reduced motor precision",
                "Avoid time-limited sessions or actions; older users may need more time to read and decide",
                "Provide large, high-contrast text options with a default minimum of 18px for body text",
                "Use plain language and avoid jargon, acronyms, and digital-native shorthand",
                "Offer telephone or in-person alternatives alongside digital flows",
            ])
            access_notes.extend([
                "Motor, vision, and cognitive changes with age vary widely; do not assume impairment, provide options",
                "Trust signals matter more for older users: show security indicators, human support contacts, "
                "and clear data policies",
            ])

        if includes_group("young", "child", "teen", "youth"):
            recommendations.extend([
                "Use engaging, conversational language; avoid bureaucratic or overly formal tone",
                "Provide clear error recovery with specific, actionable correction guidance",
                "Consider parental controls and age-gating for sensitive content or transactions",
            ])
            access_notes.extend([
                "Younger users often prefer mobile-first flows with gesture navigation",
                "Attention span and task persistence vary; keep flows short and celebrate completion",
            ])

        if not recommendations:
            recommendations.extend([
                "Apply WCAG 2.2 AA as the baseline; it covers many age-related access needs",
                "Provide flexible text resizing without loss of content or functionality",
                "Avoid fixed viewport sizes; responsive layouts benefit all age groups",
                "Label all interactive elements clearly; never rely on icons alone",
            ])

        if any(term in flow for term in self.FINANCIAL_TERMS):
            recommendations.extend([
                "Add explicit confirmation steps before irreversible financial actions",
                "Display amounts clearly with currency and totals to avoid ambiguity",
            ])
            access_notes.append("Financial flows require the highest trust and clarity standards across all age groups")

        access_notes.extend([
            "Age is not a homogeneous category; test with real users from each target group",
            "Avoid ageist assumptions in language and imagery; design for capability, not limitation",
        ])

        return self.respond(
            boundary_notice,
            uncertainty="low",
            assumptions=[
                f"Age groups: {', '.join(age_groups) if age_groups else 'all ages'}",
                "Recommendations are design patterns; individual ability varies within any age group",
                "No age stereotypes are intended; guidance is based on design research",
            ],
            output={"recommendations": recommendations, "access_notes": access_notes},
        )
