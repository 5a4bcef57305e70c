"""
inference_engine/services/forward_chaining.py
=============================================
Data-driven **forward chaining** inference strategy.

Algorithm:
    1. Evaluate every rule of the knowledge base independently against
       the observed facts (single layer: no rule consumes another
       rule's conclusion).
    2. Emit exactly one result per rule, even when nothing matched.
    3. Rank results by confidence descending; ties keep rule
       declaration order.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable

from .base_strategy import InferenceStrategy
from .knowledge import DiagnosticResult
from .rule_evaluator import evaluate_rule

logger: logging.Logger = logging.getLogger(__name__)


class ForwardChainingStrategy(InferenceStrategy):
    """Forward chaining: score every rule against the reported facts.

    This is the primary diagnostic strategy.  It fans out from the
    reported symptoms and returns *all* conclusions, ranked by
    confidence.
    """

    def execute_inference(
        self, symptoms: Iterable[str], **kwargs: Any
    ) -> list[DiagnosticResult]:
        """Run forward chaining against the knowledge base.

        Args:
            symptoms: Observed symptom ids.  Order and duplicates are
                irrelevant.

        Returns:
            One :class:`DiagnosticResult` per rule, sorted by
            ``confidence`` descending.

        Raises:
            ConfigurationError: If a rule is malformed.
        """
        start: float = time.perf_counter()
        facts: frozenset[str] = frozenset(symptoms)

        results: list[DiagnosticResult] = [
            evaluate_rule(rule, facts, self.knowledge_base)
            for rule in self.knowledge_base.rules
        ]
        # sorted() is stable, so equal confidences keep declaration order
        ranked: list[DiagnosticResult] = sorted(
            results, key=lambda r: r.confidence, reverse=True
        )

        elapsed_ms: int = int((time.perf_counter() - start) * 1000)
        logger.info(
            "forward chaining complete: %d rules evaluated, %d satisfied in %dms",
            len(results),
            sum(1 for r in results if r.satisfied),
            elapsed_ms,
        )
        return ranked

    def explain_result(self, result: list[DiagnosticResult]) -> str:
        """Format a ranked result list into a human-readable report.

        Args:
            result: List returned by :meth:`execute_inference`.

        Returns:
            Multi-line explanation string.
        """
        lines: list[str] = [
            "=== forward chaining diagnosis report ===",
            f"total rules evaluated: {len(result)}",
            f"rules satisfied: {sum(1 for r in result if r.satisfied)}",
            "",
            "--- ranked diseases ---",
        ]

        for idx, diagnosis in enumerate(result, start=1):
            status = "SATISFIED" if diagnosis.satisfied else "PARTIAL"
            if diagnosis.conflicting:
                status = "CONFLICT"
            lines.append(
                f"{idx}. {diagnosis.disease_name} [{status}] "
                f"(confidence: {diagnosis.confidence}%)"
            )
            for step in diagnosis.trace:
                lines.append(f"   - {step}")
            lines.append(f"     reason: {diagnosis.reason}")

        return "\n".join(lines)
