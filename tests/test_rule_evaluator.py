from __future__ import annotations

import pytest

from inference_engine.services import ConfigurationError, KnowledgeBase, Rule, evaluate_rule
from inference_engine.services.rule_evaluator import rule_score, to_percent


def _rule(kb: KnowledgeBase, rule_id: str) -> Rule:
    return next(r for r in kb.rules if r.id == rule_id)


def test_full_match_with_half_the_optional_symptoms_scores_90(reference_kb) -> None:
    result = evaluate_rule(_rule(reference_kb, "R1"), {"S8", "S12", "S7"}, reference_kb)

    assert result.disease_id == "D1"
    assert result.disease_name == "Common Cold"
    assert result.match_count == 2
    assert result.missing_count == 0
    assert result.optional_matches == 1
    assert result.confidence == 90
    assert result.satisfied is True
    assert result.conflicting == ()
    assert result.reason.startswith("Common Cold diagnosis requires")
    assert result.trace == (
        "Checking requirements for Common Cold: 2/2 found.",
        "Bonus matches (optional): 1",
    )


def test_exclusion_suppresses_confidence_and_marks_conflict(reference_kb) -> None:
    result = evaluate_rule(_rule(reference_kb, "R1"), {"S8", "S12", "S1"}, reference_kb)

    assert result.conflicting == ("High Fever",)
    assert result.confidence == 8
    assert result.satisfied is False
    assert result.trace[0] == "Rule R1 invalidated by exclusion: High Fever"


def test_missing_requirements_follow_declaration_order(reference_kb) -> None:
    result = evaluate_rule(_rule(reference_kb, "R5"), {"S2"}, reference_kb)

    assert result.match_count == 1
    assert result.missing_required == ("High Fever", "Shortness of Breath", "Chest Pain")
    assert result.missing_count == 3
    assert result.confidence == 20
    assert "Missing: High Fever, Shortness of Breath, Chest Pain" in result.trace


def test_partial_match_ignores_optional_bonus_in_score(reference_kb) -> None:
    # S7 is optional for R4 but only counts once every requirement holds
    result = evaluate_rule(_rule(reference_kb, "R4"), {"S12", "S8", "S7"}, reference_kb)

    assert result.confidence == 53
    assert result.optional_matches == 1
    assert "Bonus matches (optional): 1" in result.trace


def test_full_match_without_optional_symptoms_is_exactly_80() -> None:
    kb = KnowledgeBase.from_dict(
        {
            "symptoms": [{"id": "A", "name": "Alpha"}, {"id": "B", "name": "Beta"}],
            "diseases": [{"id": "X", "name": "Xeno"}],
            "rules": [{"id": "R", "conclusion": "X", "requirements": ["A", "B"]}],
        }
    )
    result = evaluate_rule(kb.rules[0], {"A", "B"}, kb)

    assert result.confidence == 80
    assert result.satisfied is True


def test_all_optional_symptoms_reach_100(reference_kb) -> None:
    result = evaluate_rule(
        _rule(reference_kb, "R5"), {"S1", "S2", "S3", "S9", "S4"}, reference_kb
    )
    assert result.confidence == 100


@pytest.mark.parametrize(
    "match_count, total_required, optional_matches, total_optional",
    [(0, 3, 0, 2), (1, 3, 0, 2), (2, 2, 0, 0), (2, 2, 1, 2), (2, 2, 2, 2), (3, 4, 1, 1)],
)
def test_exclusion_is_a_tenth_of_the_unsuppressed_score(
    match_count, total_required, optional_matches, total_optional
) -> None:
    plain = rule_score(match_count, total_required, optional_matches, total_optional, False)
    suppressed = rule_score(match_count, total_required, optional_matches, total_optional, True)

    assert suppressed == pytest.approx(plain * 0.1)
    assert 0 <= to_percent(suppressed) <= to_percent(plain) <= 100


def test_to_percent_rounds_half_up() -> None:
    assert to_percent(0.085) == 9
    assert to_percent(0.0849) == 8
    assert to_percent(0.0) == 0
    assert to_percent(1.0) == 100


def test_rule_without_requirements_fails_fast(reference_kb) -> None:
    empty = Rule(id="R0", conclusion="D1", requirements=())

    with pytest.raises(ConfigurationError):
        evaluate_rule(empty, {"S1"}, reference_kb)
    with pytest.raises(ConfigurationError):
        rule_score(0, 0, 0, 0, False)
