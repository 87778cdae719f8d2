"""Deterministic keyword rules used when the model path is unavailable."""
from __future__ import annotations

from dataclasses import dataclass
import re

from ..core.assessment import RiskAssessment, RiskLevel


@dataclass(frozen=True)
class AssessmentTemplate:
    """Fixed assessment content returned by a rule."""

    title: str
    summary: str
    reasons: tuple[str, ...]
    precautions: tuple[str, ...]
    next_action: str
    specialist: str | None = None
    map_query: str | None = None

    def build(self, risk_level: RiskLevel) -> RiskAssessment:
        return RiskAssessment(
            risk_level=risk_level,
            title=self.title,
            summary=self.summary,
            reasons=self.reasons,
            precautions=self.precautions,
            next_action=self.next_action,
            hospital_required=risk_level is RiskLevel.RED,
            specialist=self.specialist,
            map_query_required=self.map_query is not None,
            map_query=self.map_query,
        )


@dataclass(frozen=True)
class FallbackRule:
    """Keyword set mapped to a fixed assessment."""

    rule_id: str
    risk_level: RiskLevel
    keywords: tuple[str, ...]
    template: AssessmentTemplate


@dataclass(frozen=True)
class FallbackMatch:
    """Result payload returned by rule evaluation."""

    rule_id: str
    risk_level: RiskLevel
    matched_terms: tuple[str, ...]
    assessment: RiskAssessment


NEXT_ACTION_HOME = "Continue home care and monitor"
NEXT_ACTION_DOCTOR = "Visit a nearby doctor or health center"
NEXT_ACTION_HOSPITAL = "Go to the nearest hospital immediately"

EMERGENCY_MAP_QUERY = "emergency hospital near me"
DOCTOR_MAP_QUERY = "doctor clinic near me"

RED_TEMPLATE = AssessmentTemplate(
    title="Emergency",
    summary="This problem looks serious.",
    reasons=("Your description mentions a sign of a possible emergency.",),
    precautions=(),
    next_action=NEXT_ACTION_HOSPITAL,
    specialist="Emergency medicine",
    map_query=EMERGENCY_MAP_QUERY,
)

YELLOW_TEMPLATE = AssessmentTemplate(
    title="Caution Advised",
    summary="This problem needs attention.",
    reasons=("Your description mentions a symptom that a doctor should check.",),
    precautions=(
        "Take rest",
        "Drink enough water",
        "Avoid heavy work",
        "Monitor symptoms",
    ),
    next_action=NEXT_ACTION_DOCTOR,
    specialist="General physician",
    map_query=DOCTOR_MAP_QUERY,
)

GREEN_TEMPLATE = AssessmentTemplate(
    title="Minor Problem",
    summary="The problem appears to be minor.",
    reasons=("No warning signs were found in your description.",),
    precautions=(
        "Take rest",
        "Keep the area clean",
        "Drink warm water",
        "Avoid strain",
    ),
    next_action=NEXT_ACTION_HOME,
)

INSUFFICIENT_INFORMATION_TEMPLATE = AssessmentTemplate(
    title="More Information Needed",
    summary="Not enough information provided.",
    reasons=("The problem could not be assessed from the information given.",),
    precautions=(
        "Try to describe the problem clearly",
        "Upload a photo if possible",
    ),
    next_action=NEXT_ACTION_DOCTOR,
    specialist="General physician",
    map_query=DOCTOR_MAP_QUERY,
)

# Evaluated top-down, first match wins; keep ordered by descending severity.
FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule(
        rule_id="red_flags",
        risk_level=RiskLevel.RED,
        keywords=(
            "chest pain",
            "difficulty breathing",
            "breathing difficulty",
            "trouble breathing",
            "not breathing",
            "no breathing",
            "can't breathe",
            "cannot breathe",
            "unconscious",
            "heavy bleeding",
            "severe bleeding",
            "bleeding heavily",
            "accident",
            "poison",
            "heart attack",
            "seizure",
            "fracture",
        ),
        template=RED_TEMPLATE,
    ),
    FallbackRule(
        rule_id="yellow_flags",
        risk_level=RiskLevel.YELLOW,
        keywords=(
            "fever",
            "headache",
            "vomiting",
            "stomach pain",
            "swelling",
            "rash",
            "cut",
            "deep cut",
            "bleeding",
            "sprain",
            "injury",
            "injured",
            "injuries",
        ),
        template=YELLOW_TEMPLATE,
    ),
)

DEFAULT_RULE_ID = "default_green"

# Inflections a keyword may carry: "poisoning", "cuts", "fractured".
_WORD_SUFFIX = r"(?:s|es|d|ed|ing|ting|ish|ness|ous|ly)?"


def _normalize_text(text: str) -> str:
    lowered = text.lower().replace("\u2019", "'")
    normalized_spaces = re.sub(r"\s+", " ", lowered)
    return normalized_spaces.strip()


def _phrase_pattern(phrase: str) -> re.Pattern[str]:
    token_pattern = r"\s+".join(re.escape(token) for token in phrase.split())
    return re.compile(rf"\b{token_pattern}{_WORD_SUFFIX}\b")


def _matched_keywords(normalized_text: str, keywords: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(
        keyword for keyword in keywords if _phrase_pattern(keyword).search(normalized_text)
    )


def insufficient_information_assessment() -> RiskAssessment:
    """Fixed Yellow answer for input with nothing to assess."""
    return INSUFFICIENT_INFORMATION_TEMPLATE.build(RiskLevel.YELLOW)


def evaluate_fallback_rules(
    description: str,
    rules: tuple[FallbackRule, ...] = FALLBACK_RULES,
) -> FallbackMatch:
    """
    Classify a description with the keyword rule table.

    Pure function of its input: identical text gives an identical result.
    """
    normalized_text = _normalize_text(description)

    for rule in rules:
        matched_terms = _matched_keywords(normalized_text, rule.keywords)
        if matched_terms:
            return FallbackMatch(
                rule_id=rule.rule_id,
                risk_level=rule.risk_level,
                matched_terms=matched_terms,
                assessment=rule.template.build(rule.risk_level),
            )

    return FallbackMatch(
        rule_id=DEFAULT_RULE_ID,
        risk_level=RiskLevel.GREEN,
        matched_terms=(),
        assessment=GREEN_TEMPLATE.build(RiskLevel.GREEN),
    )
