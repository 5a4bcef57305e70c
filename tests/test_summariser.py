from __future__ import annotations

import pytest
import requests

from explanations.summariser import (
    FALLBACK_EXPLANATION,
    ExplanationSummariser,
    build_prompt,
)


class FakeResponse:
    def __init__(self, body, status_code: int = 200) -> None:
        self._body = body
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._body


@pytest.fixture
def diagnosis(service):
    symptoms = ["S8", "S12", "S1", "S10"]
    results = service.evaluate(symptoms)
    report = service.analyze_uncertainty(results, symptoms)
    names = [service.knowledge_base.symptom_name(s) for s in symptoms]
    return names, results, report


def test_prompt_carries_top_result_trace_and_uncertainty(diagnosis) -> None:
    prompt = build_prompt(*diagnosis)

    assert "Selected Symptoms: Runny Nose, Sneezing, High Fever, Skin Rash" in prompt
    assert "Top Diagnosis: Influenza (Flu) (Confidence: 27%)" in prompt
    assert "Checking requirements for Influenza (Flu): 1/3 found." in prompt
    assert "Noise (irrelevant symptoms): Skin Rash" in prompt
    assert "Common Cold inhibited by High Fever" in prompt
    assert "Multiple possibilities detected" in prompt


def test_summary_text_is_returned(monkeypatch, diagnosis) -> None:
    calls: list[dict] = []

    def fake_post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        return FakeResponse({"candidates": [{"content": {"parts": [{"text": " Looks like flu. "}]}}]})

    monkeypatch.setattr("explanations.summariser.requests.post", fake_post)
    summariser = ExplanationSummariser({"API_KEY": "test-key", "MODEL": "m1", "TIMEOUT": 2})

    summary = summariser.summarise(*diagnosis)

    assert summary.text == "Looks like flu."
    assert summary.fallback is False
    assert calls[0]["url"].endswith("/models/m1:generateContent")
    assert calls[0]["params"] == {"key": "test-key"}
    assert calls[0]["timeout"] == 2.0
    assert "Top Diagnosis" in calls[0]["json"]["contents"][0]["parts"][0]["text"]


@pytest.mark.parametrize(
    "outcome",
    [
        requests.ConnectionError("unreachable"),
        requests.Timeout("slow"),
        FakeResponse({"error": "quota"}, status_code=429),
        FakeResponse({"candidates": []}),
        FakeResponse({"candidates": [{"content": {"parts": [{"text": "   "}]}}]}),
        FakeResponse({"candidates": [{"content": {"parts": [{"text": 42}]}}]}),
        FakeResponse({"candidates": [{"content": {"parts": [{"text": {"nested": "x"}}]}}]}),
        FakeResponse(["not", "an", "object"]),
    ],
)
def test_failures_degrade_to_fallback(monkeypatch, diagnosis, outcome) -> None:
    def fake_post(url, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr("explanations.summariser.requests.post", fake_post)

    summary = ExplanationSummariser({"API_KEY": "test-key"}).summarise(*diagnosis)

    assert summary.text == FALLBACK_EXPLANATION
    assert summary.fallback is True


def test_missing_api_key_skips_the_request(monkeypatch, diagnosis) -> None:
    def fail_post(url, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr("explanations.summariser.requests.post", fail_post)

    summary = ExplanationSummariser({"API_KEY": ""}).summarise(*diagnosis)

    assert summary.fallback is True
