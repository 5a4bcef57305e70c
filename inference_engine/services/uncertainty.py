"""
inference_engine/services/uncertainty.py
========================================
Post-hoc classification of a ranked result set.

Categories:
    - noise: observed symptoms that no rule requires or lists as
      optional (appearing only as an exclusion does not count).
    - conflicting: an exclusion fired while some requirement matched.
    - incomplete: some, but not all, requirements matched and no
      exclusion fired.
    - ambiguous: the top two results are less than
      :data:`AMBIGUITY_THRESHOLD` points apart.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .knowledge import DiagnosticResult, KnowledgeBase, UncertaintyReport

logger: logging.Logger = logging.getLogger(__name__)

AMBIGUITY_THRESHOLD: int = 15


class UncertaintyAnalyzer:
    """Classify the quality of a forward chaining result set."""

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        self.knowledge_base: KnowledgeBase = knowledge_base
        self._relevant: frozenset[str] = knowledge_base.relevant_symptom_ids()

    def analyze(
        self,
        results: Sequence[DiagnosticResult],
        symptoms: Iterable[str],
    ) -> UncertaintyReport:
        """Build an :class:`UncertaintyReport`.

        Args:
            results: Results ranked by confidence descending, as
                returned by forward chaining.
            symptoms: The observed symptom ids the results came from.

        Returns:
            The uncertainty report.  ``ambiguous`` holds either no
            result or exactly the top two.
        """
        noise: tuple[str, ...] = tuple(
            self.knowledge_base.symptom_name(sid)
            for sid in dict.fromkeys(symptoms)
            if sid not in self._relevant
        )

        conflicting = tuple(
            r for r in results if r.conflicting and r.match_count > 0
        )
        incomplete = tuple(
            r
            for r in results
            if 0 < r.match_count < r.match_count + r.missing_count
            and not r.conflicting
        )

        ambiguous: tuple[DiagnosticResult, ...] = ()
        if len(results) >= 2:
            gap: int = abs(results[0].confidence - results[1].confidence)
            if gap < AMBIGUITY_THRESHOLD:
                ambiguous = (results[0], results[1])

        report = UncertaintyReport(
            incomplete=incomplete,
            conflicting=conflicting,
            ambiguous=ambiguous,
            noise=noise,
        )
        logger.debug(
            "uncertainty: %d incomplete, %d conflicting, %d ambiguous, %d noise",
            len(incomplete),
            len(conflicting),
            len(ambiguous),
            len(noise),
        )
        return report
