from __future__ import annotations

import pytest

from inference_engine.services import ConfigurationError, KnowledgeBase, Severity


def test_reference_catalogue_is_valid(reference_kb) -> None:
    reference_kb.validate()

    assert len(reference_kb.symptoms) == 14
    assert reference_kb.get_disease("D3").severity is Severity.HIGH
    assert reference_kb.rules[4].exclusions == ()


def test_symptom_name_falls_back_to_id(reference_kb) -> None:
    assert reference_kb.symptom_name("S5") == "Loss of Taste/Smell"
    assert reference_kb.symptom_name("NOPE") == "NOPE"


def test_validate_collects_every_problem() -> None:
    kb = KnowledgeBase.from_dict(
        {
            "symptoms": [{"id": "A", "name": "Alpha"}, {"id": "A", "name": "Again"}],
            "diseases": [{"id": "X", "name": "Xeno"}],
            "rules": [
                {"id": "R1", "conclusion": "Y", "requirements": ["A"]},
                {"id": "R2", "conclusion": "X", "requirements": ["A"], "optional": ["B"]},
                {"id": "R3", "conclusion": "X", "requirements": []},
            ],
        }
    )
    with pytest.raises(ConfigurationError) as excinfo:
        kb.validate()

    problems = excinfo.value.problems
    assert "duplicate symptom id 'A'" in problems
    assert "rule 'R1' concludes unknown disease 'Y'" in problems
    assert "rule 'R2' optional references unknown symptom 'B'" in problems
    assert "rule 'R3' has no requirements" in problems
    assert excinfo.value.details == {"problems": problems}


def test_from_dict_rejects_missing_fields_and_bad_severity() -> None:
    with pytest.raises(ConfigurationError):
        KnowledgeBase.from_dict({"rules": [{"id": "R1"}]})
    with pytest.raises(ConfigurationError):
        KnowledgeBase.from_dict({"diseases": [{"id": "X", "name": "Xeno", "severity": "mild"}]})


def test_relevant_symptoms_exclude_exclusion_only_ids(reference_kb) -> None:
    relevant = reference_kb.relevant_symptom_ids()

    assert "S10" not in relevant
    assert "S14" not in relevant
    assert {"S1", "S7", "S13"} <= relevant


def test_lookups_by_id(reference_kb) -> None:
    assert reference_kb.get_symptom("S9").category == "Cardiovascular"
    assert reference_kb.get_symptom("S99") is None
    assert reference_kb.get_disease("D4").name == "Allergic Rhinitis"
    assert reference_kb.get_disease("D9") is None
