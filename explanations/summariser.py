"""
explanations/summariser.py
==========================
Optional natural-language summary of a diagnosis, produced by an
external generative-text service.

The summariser sits outside the inference engine: it only reads the
results and the uncertainty report.  Any failure of the remote call
degrades to :data:`FALLBACK_EXPLANATION` and is never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import requests
from django.conf import settings

from inference_engine.services.knowledge import DiagnosticResult, UncertaintyReport

logger: logging.Logger = logging.getLogger(__name__)

FALLBACK_EXPLANATION: str = (
    "Failed to generate AI explanation. Please check your logic trace."
)


@dataclass(frozen=True)
class Summary:
    """Text returned to the caller and whether it is the fallback."""

    text: str
    fallback: bool = False


def build_prompt(
    symptom_names: Sequence[str],
    results: Sequence[DiagnosticResult],
    report: UncertaintyReport,
) -> str:
    """Render the free-text prompt sent to the summary service."""
    top: DiagnosticResult | None = results[0] if results else None
    conflicts: str = "; ".join(
        f"{r.disease_name} inhibited by {', '.join(r.conflicting)}"
        for r in report.conflicting
    )
    lines: list[str] = [
        "As a senior clinical diagnostic assistant using first-order logic, "
        "explain the current diagnostic findings.",
        "",
        f"Selected Symptoms: {', '.join(symptom_names) or 'None'}",
    ]
    if top is not None:
        lines.append(f"Top Diagnosis: {top.disease_name} (Confidence: {top.confidence}%)")
        lines.append("")
        lines.append("Logic Trace for top diagnosis:")
        lines.extend(top.trace)
    lines.extend(
        [
            "",
            "Uncertainty Report:",
            f"- Noise (irrelevant symptoms): {', '.join(report.noise) or 'None'}",
            f"- Conflicts: {conflicts or 'None'}",
            "- Ambiguity: "
            + ("Multiple possibilities detected" if report.ambiguous else "Clear logic path"),
            "",
            "Provide a concise, professional summary that bridges formal logic "
            "with clinical reasoning.",
        ]
    )
    return "\n".join(lines)


class ExplanationSummariser:
    """Client for a ``generateContent``-style text generation endpoint.

    Settings (``MEDILOGIC_SUMMARY``):
        API_KEY: Key sent as the ``key`` query parameter.  No key means
            no request is made and the fallback is returned.
        MODEL: Model name substituted into ``ENDPOINT``.
        ENDPOINT: URL template with a ``{model}`` placeholder.
        TIMEOUT: Request timeout in seconds.
    """

    def __init__(self, config: dict | None = None) -> None:
        cfg: dict = dict(getattr(settings, "MEDILOGIC_SUMMARY", {}))
        cfg.update(config or {})
        self.api_key: str = cfg.get("API_KEY") or ""
        self.model: str = cfg.get("MODEL", "gemini-2.0-flash")
        self.endpoint: str = cfg.get(
            "ENDPOINT",
            "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        )
        self.timeout: float = float(cfg.get("TIMEOUT", 15))

    def summarise(
        self,
        symptom_names: Sequence[str],
        results: Sequence[DiagnosticResult],
        report: UncertaintyReport,
    ) -> Summary:
        """Request a summary, falling back to a fixed message on failure."""
        if not self.api_key:
            logger.info("summary service not configured, using fallback text")
            return Summary(text=FALLBACK_EXPLANATION, fallback=True)

        prompt: str = build_prompt(symptom_names, results, report)
        payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = requests.post(
                self.endpoint.format(model=self.model),
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
            if not isinstance(text, str):
                raise TypeError(f"expected text, got {type(text).__name__}")
        except requests.RequestException as exc:
            logger.warning("summary service request failed: %s", exc)
            return Summary(text=FALLBACK_EXPLANATION, fallback=True)
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("summary service returned an unexpected body: %s", exc)
            return Summary(text=FALLBACK_EXPLANATION, fallback=True)

        if not text or not text.strip():
            return Summary(text=FALLBACK_EXPLANATION, fallback=True)
        return Summary(text=text.strip())
