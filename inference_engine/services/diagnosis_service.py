"""
inference_engine/services/diagnosis_service.py
==============================================
Orchestration service that ties together the inference strategies
and the uncertainty analyzer for one knowledge base.

The service is a plain value: construct one per knowledge base and
call it as often as needed.  Every call is a pure function of the
knowledge base and the supplied symptom ids.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Sequence

from .backward_chaining import BackwardChainingStrategy
from .forward_chaining import ForwardChainingStrategy
from .knowledge import DiagnosticResult, KnowledgeBase, UncertaintyReport
from .uncertainty import UncertaintyAnalyzer

logger: logging.Logger = logging.getLogger(__name__)


class DiagnosisService:
    """High-level diagnostic orchestrator.

    Typical usage::

        from inference_engine.services import DiagnosisService

        svc = DiagnosisService(knowledge_base)
        results = svc.evaluate(["S8", "S12"])
        report = svc.analyze_uncertainty(results, ["S8", "S12"])
    """

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        """Validate the knowledge base and bind the strategies to it.

        Args:
            knowledge_base: Read-only catalogue to evaluate against.

        Raises:
            ConfigurationError: If the knowledge base is malformed.
        """
        knowledge_base.validate()
        self.knowledge_base: KnowledgeBase = knowledge_base
        self._forward: ForwardChainingStrategy = ForwardChainingStrategy(knowledge_base)
        self._backward: BackwardChainingStrategy = BackwardChainingStrategy(knowledge_base)
        self._analyzer: UncertaintyAnalyzer = UncertaintyAnalyzer(knowledge_base)

    @staticmethod
    def _normalise(symptoms: Iterable[str]) -> list[str]:
        # drop duplicates, keep first occurrence
        return list(dict.fromkeys(symptoms))

    def evaluate(self, symptoms: Iterable[str]) -> list[DiagnosticResult]:
        """Evaluate every rule and rank the results by confidence."""
        return self._forward.execute_inference(self._normalise(symptoms))

    def evaluate_goal(
        self, disease_id: str, symptoms: Iterable[str]
    ) -> DiagnosticResult | None:
        """Return the result for ``disease_id``, or ``None`` if no rule concludes it."""
        return self._backward.execute_inference(
            self._normalise(symptoms), target_disease_id=disease_id
        )

    def analyze_uncertainty(
        self,
        results: Sequence[DiagnosticResult],
        symptoms: Iterable[str],
    ) -> UncertaintyReport:
        """Classify noise, conflicts, partial matches and ambiguity."""
        return self._analyzer.analyze(results, self._normalise(symptoms))

    def diagnose(self, symptoms: Iterable[str]) -> dict:
        """Run evaluation and uncertainty analysis in one go.

        Args:
            symptoms: Observed symptom ids.

        Returns:
            JSON-ready dict::

                {
                    "symptom_ids": [...],
                    "results": [ ... ],        # ranked DiagnosticResult dicts
                    "uncertainty": { ... },    # UncertaintyReport dict
                    "execution_time_ms": int,
                }
        """
        start: float = time.perf_counter()
        symptom_ids: list[str] = self._normalise(symptoms)

        results = self.evaluate(symptom_ids)
        report = self.analyze_uncertainty(results, symptom_ids)

        elapsed_ms: int = int((time.perf_counter() - start) * 1000)
        logger.info(
            "diagnosis complete for %d symptoms: top %s in %dms",
            len(symptom_ids),
            results[0].disease_id if results else "none",
            elapsed_ms,
        )
        return {
            "symptom_ids": symptom_ids,
            "results": [r.to_dict() for r in results],
            "uncertainty": report.to_dict(),
            "execution_time_ms": elapsed_ms,
        }

    def explain(self, symptoms: Iterable[str]) -> str:
        """Render the ranked results and the uncertainty report as text."""
        symptom_ids: list[str] = self._normalise(symptoms)
        results = self.evaluate(symptom_ids)
        report = self.analyze_uncertainty(results, symptom_ids)

        names: list[str] = [self.knowledge_base.symptom_name(s) for s in symptom_ids]
        lines: list[str] = [
            f"selected symptoms: {', '.join(names) or 'none'}",
            "",
            self._forward.explain_result(results),
            "",
            "--- uncertainty ---",
            f"noise: {', '.join(report.noise) or 'none'}",
            "conflicts: "
            + (
                "; ".join(
                    f"{r.disease_name} inhibited by {', '.join(r.conflicting)}"
                    for r in report.conflicting
                )
                or "none"
            ),
            "incomplete: "
            + (", ".join(r.disease_name for r in report.incomplete) or "none"),
            "ambiguity: "
            + (
                " vs ".join(r.disease_name for r in report.ambiguous)
                if report.ambiguous
                else "clear logic path"
            ),
        ]
        return "\n".join(lines)

    def explain_goal(self, disease_id: str, symptoms: Iterable[str]) -> str:
        """Render the goal lookup for ``disease_id`` as text."""
        return self._backward.explain_result(self.evaluate_goal(disease_id, symptoms))
