import pytest

from health_guide.core import RiskLevel
from health_guide.triage import FALLBACK_RULES, evaluate_fallback_rules
from health_guide.triage.fallback_rules import (
    DOCTOR_MAP_QUERY,
    EMERGENCY_MAP_QUERY,
    NEXT_ACTION_DOCTOR,
    NEXT_ACTION_HOSPITAL,
    NEXT_ACTION_HOME,
)


def test_severe_bleeding_is_red_with_hospital_instruction():
    result = evaluate_fallback_rules("severe bleeding after a fall")

    assessment = result.assessment
    assert result.rule_id == "red_flags"
    assert assessment.risk_level is RiskLevel.RED
    assert assessment.precautions == ()
    assert assessment.hospital_required is True
    assert assessment.next_action == NEXT_ACTION_HOSPITAL
    assert assessment.map_query_required is True
    assert assessment.map_query == EMERGENCY_MAP_QUERY
    assert "severe bleeding" in result.matched_terms


def test_mild_headache_is_yellow_with_precautions():
    assessment = evaluate_fallback_rules("mild headache since morning").assessment

    assert assessment.risk_level is RiskLevel.YELLOW
    assert 3 <= len(assessment.precautions) <= 5
    assert assessment.next_action == NEXT_ACTION_DOCTOR
    assert assessment.hospital_required is False
    assert assessment.map_query == DOCTOR_MAP_QUERY


def test_fever_is_yellow():
    assessment = evaluate_fallback_rules("I have a fever").assessment

    assert assessment.risk_level is RiskLevel.YELLOW
    assert assessment.precautions


def test_no_keyword_defaults_to_green():
    result = evaluate_fallback_rules("feeling a bit tired")

    assert result.rule_id == "default_green"
    assert result.matched_terms == ()
    assert result.assessment.risk_level is RiskLevel.GREEN
    assert result.assessment.next_action == NEXT_ACTION_HOME
    assert result.assessment.map_query_required is False
    assert result.assessment.map_query is None


def test_red_keyword_wins_over_yellow_keyword():
    assessment = evaluate_fallback_rules("I have a fever and chest pain").assessment

    assert assessment.risk_level is RiskLevel.RED
    assert assessment.precautions == ()


def test_matching_ignores_case_and_extra_whitespace():
    assert evaluate_fallback_rules("CHEST    PAIN\nsince noon").risk_level is RiskLevel.RED
    assert evaluate_fallback_rules("Possible POISONING").risk_level is RiskLevel.RED


def test_keyword_must_start_at_word_boundary():
    assert evaluate_fallback_rules("I can't execute my plans").risk_level is RiskLevel.GREEN
    assert evaluate_fallback_rules("two small cuts on my hand").risk_level is RiskLevel.YELLOW


def test_fallback_is_deterministic():
    first = evaluate_fallback_rules("vomiting since last night")
    second = evaluate_fallback_rules("vomiting since last night")

    assert first.assessment.model_dump_json() == second.assessment.model_dump_json()
    assert first == second


def test_rule_table_is_ordered_by_descending_severity():
    severities = [rule.risk_level.severity for rule in FALLBACK_RULES]
    assert severities == sorted(severities, reverse=True)


def test_every_outcome_respects_assessment_invariants():
    for text in ("heart attack", "sprain", "sore muscles", ""):
        assessment = evaluate_fallback_rules(text).assessment
        assert (assessment.map_query is not None) == assessment.map_query_required
        if assessment.risk_level is RiskLevel.RED:
            assert assessment.hospital_required is True


@pytest.mark.parametrize(
    "text",
    ["feeling cute today", "the cutlery fell on the floor"],
)
def test_keyword_must_end_at_word_boundary(text):
    assert evaluate_fallback_rules(text).risk_level is RiskLevel.GREEN


@pytest.mark.parametrize(
    "text",
    [
        "breathing difficulty since morning",
        "trouble breathing after running",
        "I can't breathe",
        "I can’t breathe properly",
        "cannot breathe lying down",
        "my nose is bleeding heavily",
        "fractured my wrist",
        "had a seizure yesterday",
    ],
)
def test_red_symptom_variants(text):
    assert evaluate_fallback_rules(text).risk_level is RiskLevel.RED


@pytest.mark.parametrize(
    "text",
    ["cutting my finger", "feverish all night", "two rashes on my back", "injured my knee"],
)
def test_yellow_symptom_inflections(text):
    assert evaluate_fallback_rules(text).risk_level is RiskLevel.YELLOW
