"""
inference_engine/services/rule_evaluator.py
===========================================
Evaluation of a single diagnostic rule against a set of observed facts.

Scoring:
    1. Exclusions found in the facts are recorded as conflicts.
    2. Requirements are checked in declaration order.
    3. Partial match:  ``matched / required * 0.8``.
       Full match:     ``0.8 + optional_matched / max(len(optional), 1) * 0.2``.
    4. Any conflict multiplies the score by ``0.1``.
    5. The score is reported as a rounded integer percentage.
"""

from __future__ import annotations

import logging
import math
from typing import AbstractSet

from .exceptions import ConfigurationError
from .knowledge import DiagnosticResult, KnowledgeBase, Rule

logger: logging.Logger = logging.getLogger(__name__)

REQUIRED_WEIGHT: float = 0.8
OPTIONAL_WEIGHT: float = 0.2
EXCLUSION_PENALTY: float = 0.1
# a rule without optional symptoms still divides by one, which pins a
# full match at exactly REQUIRED_WEIGHT
EMPTY_OPTIONAL_DENOMINATOR: int = 1


def to_percent(score: float) -> int:
    """Convert a ``[0, 1]`` score to an integer percentage, rounding half up."""
    return int(math.floor(score * 100 + 0.5))


def rule_score(
    match_count: int,
    total_required: int,
    optional_matches: int,
    total_optional: int,
    excluded: bool,
) -> float:
    """Return the unrounded confidence of a rule in ``[0, 1]``.

    Raises:
        ConfigurationError: If ``total_required`` is zero.
    """
    if total_required <= 0:
        raise ConfigurationError(["rule has no requirements"])

    if match_count < total_required:
        score: float = (match_count / total_required) * REQUIRED_WEIGHT
    else:
        denominator: int = total_optional or EMPTY_OPTIONAL_DENOMINATOR
        score = REQUIRED_WEIGHT + (optional_matches / denominator) * OPTIONAL_WEIGHT

    if excluded:
        score *= EXCLUSION_PENALTY
    return score


def evaluate_rule(
    rule: Rule,
    facts: AbstractSet[str],
    knowledge_base: KnowledgeBase,
) -> DiagnosticResult:
    """Evaluate ``rule`` against the observed ``facts``.

    Args:
        rule: The rule to evaluate.
        facts: Set of observed symptom ids.
        knowledge_base: Catalogue used to resolve ids to names.

    Returns:
        Exactly one :class:`DiagnosticResult` for the rule's conclusion.

    Raises:
        ConfigurationError: If the rule has no requirements or
            concludes a disease missing from the catalogue.
    """
    if not rule.requirements:
        raise ConfigurationError([f"rule {rule.id!r} has no requirements"])

    disease = knowledge_base.get_disease(rule.conclusion)
    if disease is None:
        raise ConfigurationError(
            [f"rule {rule.id!r} concludes unknown disease {rule.conclusion!r}"]
        )

    trace: list[str] = []

    conflicting: list[str] = [
        knowledge_base.symptom_name(sid) for sid in rule.exclusions if sid in facts
    ]
    if conflicting:
        trace.append(
            f"Rule {rule.id} invalidated by exclusion: {', '.join(conflicting)}"
        )

    match_count: int = 0
    missing_required: list[str] = []
    for symptom_id in rule.requirements:
        if symptom_id in facts:
            match_count += 1
        else:
            missing_required.append(knowledge_base.symptom_name(symptom_id))

    total_required: int = len(rule.requirements)
    optional_matches: int = sum(1 for sid in rule.optional if sid in facts)

    score: float = rule_score(
        match_count=match_count,
        total_required=total_required,
        optional_matches=optional_matches,
        total_optional=len(rule.optional),
        excluded=bool(conflicting),
    )

    trace.append(
        f"Checking requirements for {disease.name}: "
        f"{match_count}/{total_required} found."
    )
    if missing_required:
        trace.append(f"Missing: {', '.join(missing_required)}")
    if optional_matches > 0:
        trace.append(f"Bonus matches (optional): {optional_matches}")

    result = DiagnosticResult(
        disease_id=disease.id,
        disease_name=disease.name,
        confidence=to_percent(score),
        match_count=match_count,
        missing_count=len(missing_required),
        satisfied=match_count == total_required and not conflicting,
        conflicting=tuple(conflicting),
        missing_required=tuple(missing_required),
        trace=tuple(trace),
        reason=rule.description,
        rule_id=rule.id,
        optional_matches=optional_matches,
    )
    logger.debug(
        "rule %s -> %s: %d/%d matched, confidence %d",
        rule.id,
        disease.id,
        match_count,
        total_required,
        result.confidence,
    )
    return result
