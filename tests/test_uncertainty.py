from __future__ import annotations

from inference_engine.services import AMBIGUITY_THRESHOLD, KnowledgeBase, UncertaintyAnalyzer

from tests.conftest import make_result


def test_noise_lists_symptoms_no_rule_relies_on(service) -> None:
    symptoms = ["S8", "S10", "S14", "X99"]
    report = service.analyze_uncertainty(service.evaluate(symptoms), symptoms)

    assert report.noise == ("Skin Rash", "Rapid Heart Rate", "X99")


def test_noise_only_symptom_lands_in_no_other_category(service) -> None:
    report = service.analyze_uncertainty(service.evaluate(["S10"]), ["S10"])

    assert report.noise == ("Skin Rash",)
    assert report.incomplete == ()
    assert report.conflicting == ()


def test_exclusion_only_symptom_still_counts_as_noise() -> None:
    kb = KnowledgeBase.from_dict(
        {
            "symptoms": [{"id": "A", "name": "Alpha"}, {"id": "Z", "name": "Zeta"}],
            "diseases": [{"id": "X", "name": "Xeno"}],
            "rules": [
                {"id": "R1", "conclusion": "X", "requirements": ["A"], "exclusions": ["Z"]}
            ],
        }
    )
    analyzer = UncertaintyAnalyzer(kb)

    assert analyzer.analyze([], ["A", "Z"]).noise == ("Zeta",)


def test_conflicts_incomplete_and_ambiguity_for_contradicting_fever(service) -> None:
    symptoms = ["S8", "S12", "S1"]
    report = service.analyze_uncertainty(service.evaluate(symptoms), symptoms)

    assert [r.disease_id for r in report.conflicting] == ["D1", "D4", "D3"]
    assert [r.disease_id for r in report.incomplete] == ["D2", "D5"]
    # 27 vs 20
    assert [r.disease_id for r in report.ambiguous] == ["D2", "D5"]
    assert report.noise == ()
    assert report.is_clear is False


def test_excluded_rule_without_matches_is_not_a_conflict(service) -> None:
    symptoms = ["S8", "S12", "S7"]
    report = service.analyze_uncertainty(service.evaluate(symptoms), symptoms)

    # R3 is excluded by sneezing but none of its requirements matched
    assert report.conflicting == ()
    assert [r.disease_id for r in report.incomplete] == ["D4"]
    assert report.ambiguous == ()


def test_full_matches_are_not_incomplete(service) -> None:
    symptoms = ["S1", "S2", "S3", "S9", "S4"]
    report = service.analyze_uncertainty(service.evaluate(symptoms), symptoms)

    assert "D5" not in [r.disease_id for r in report.incomplete]


def test_ambiguity_threshold(reference_kb) -> None:
    analyzer = UncertaintyAnalyzer(reference_kb)
    close = [make_result("D1", 61), make_result("D2", 50)]
    apart = [make_result("D1", 61), make_result("D2", 40)]
    edge = [make_result("D1", 61), make_result("D2", 61 - AMBIGUITY_THRESHOLD)]

    assert analyzer.analyze(close, []).ambiguous == tuple(close)
    assert analyzer.analyze(apart, []).ambiguous == ()
    assert analyzer.analyze(edge, []).ambiguous == ()


def test_ambiguity_needs_two_results(reference_kb) -> None:
    analyzer = UncertaintyAnalyzer(reference_kb)

    assert analyzer.analyze([make_result("D1", 40)], []).ambiguous == ()
    assert analyzer.analyze([], []).is_clear is True


def test_report_serialises_results(service) -> None:
    symptoms = ["S8", "S12", "S1"]
    payload = service.analyze_uncertainty(service.evaluate(symptoms), symptoms).to_dict()

    assert payload["conflicting"][0]["conflicting"] == ["High Fever"]
    assert len(payload["ambiguous"]) == 2
