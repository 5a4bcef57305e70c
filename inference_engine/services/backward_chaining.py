"""
inference_engine/services/backward_chaining.py
==============================================
Goal-driven lookup of a single conclusion.

Algorithm:
    1. Start from a *target disease* the clinician wants to verify.
    2. If no rule concludes that disease, report "not found" (``None``).
    3. Otherwise run forward chaining and select the best-ranked result
       for the target.

Note:
    This is a simplified stand-in for backward chaining.  A full
    backward chainer would treat each requirement as a sub-goal and try
    to prove it recursively from other rules.  Here requirements are
    only ever checked against the observed facts, so the outcome is
    identical to filtering the forward chaining output.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .base_strategy import InferenceStrategy
from .forward_chaining import ForwardChainingStrategy
from .knowledge import DiagnosticResult, KnowledgeBase

logger: logging.Logger = logging.getLogger(__name__)


class BackwardChainingStrategy(InferenceStrategy):
    """Verify whether a *specific* disease is supported by the facts.

    Unlike forward chaining this strategy is **goal-driven**: the
    clinician picks the hypothesis and the engine checks it.
    """

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        super().__init__(knowledge_base)
        self._forward: ForwardChainingStrategy = ForwardChainingStrategy(knowledge_base)

    def execute_inference(
        self, symptoms: Iterable[str], **kwargs: Any
    ) -> DiagnosticResult | None:
        """Look up the result for a target disease.

        Args:
            symptoms: Observed symptom ids.
            **kwargs:
                target_disease_id (str): **Required.** Id of the
                    disease to verify.

        Returns:
            The :class:`DiagnosticResult` for the target, or ``None``
            when no rule concludes it.

        Raises:
            ValueError: If ``target_disease_id`` is not provided.
            ConfigurationError: If the knowledge base is malformed.
        """
        target_disease_id: str | None = kwargs.get("target_disease_id")
        if target_disease_id is None:
            raise ValueError("target_disease_id is required for backward chaining")

        if not self.knowledge_base.rules_for(target_disease_id):
            logger.info("no rule concludes disease %s", target_disease_id)
            return None

        for result in self._forward.execute_inference(symptoms):
            if result.disease_id == target_disease_id:
                logger.info(
                    "backward chaining complete for disease %s: confidence %d",
                    target_disease_id,
                    result.confidence,
                )
                return result
        return None

    def explain_result(self, result: DiagnosticResult | None) -> str:
        """Format a goal lookup result into a human-readable report.

        Args:
            result: Value returned by :meth:`execute_inference`.

        Returns:
            Multi-line explanation string.
        """
        if result is None:
            return "=== backward chaining verification report ===\nno rule concludes the target disease"

        status = "SATISFIED" if result.satisfied else "NOT SATISFIED"
        lines: list[str] = [
            "=== backward chaining verification report ===",
            f"target disease: {result.disease_name}",
            f"status: {status} (confidence: {result.confidence}%)",
            "",
        ]

        if result.missing_required:
            lines.append(
                f"missing symptoms to investigate: {', '.join(result.missing_required)}"
            )
        else:
            lines.append("all required symptoms are present")
        if result.conflicting:
            lines.append(f"contradicted by: {', '.join(result.conflicting)}")

        lines.append("")
        lines.append("--- trace ---")
        lines.extend(f"- {step}" for step in result.trace)
        return "\n".join(lines)
