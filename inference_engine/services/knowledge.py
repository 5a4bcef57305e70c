"""
inference_engine/services/knowledge.py
======================================
Immutable value types consumed and produced by the inference engine.

Contains:
    - Symptom, Disease, Rule: catalogue entries of the knowledge base.
    - KnowledgeBase: read-only container with id lookups built once.
    - DiagnosticResult: outcome of evaluating one rule.
    - UncertaintyReport: quality classification of a result set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .exceptions import ConfigurationError


class Severity(str, Enum):
    """Clinical severity of a disease."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Symptom:
    """An observable boolean fact."""

    id: str
    name: str
    category: str


@dataclass(frozen=True)
class Disease:
    """A conclusion that rules gather evidence towards."""

    id: str
    name: str
    description: str
    severity: Severity = Severity.MEDIUM


@dataclass(frozen=True)
class Rule:
    """A weighted implication ``requirements -> conclusion``.

    Attributes:
        id: Rule identifier (e.g. ``"R1"``).
        conclusion: Id of the :class:`Disease` this rule concludes.
        requirements: Symptom ids that must all be present. Never empty
            in a valid knowledge base.
        optional: Symptom ids that raise confidence once all
            requirements hold.
        exclusions: Symptom ids whose presence contradicts the rule.
        description: Authored justification, reported verbatim.
    """

    id: str
    conclusion: str
    requirements: tuple[str, ...]
    optional: tuple[str, ...] = ()
    exclusions: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class KnowledgeBase:
    """Read-only catalogue of symptoms, diseases and rules.

    The id -> entity maps are built once at construction so lookups
    during evaluation never scan the catalogue.
    """

    symptoms: tuple[Symptom, ...]
    diseases: tuple[Disease, ...]
    rules: tuple[Rule, ...]
    _symptoms_by_id: dict[str, Symptom] = field(
        init=False, repr=False, compare=False
    )
    _diseases_by_id: dict[str, Disease] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ for the derived indexes
        object.__setattr__(
            self, "_symptoms_by_id", {s.id: s for s in self.symptoms}
        )
        object.__setattr__(
            self, "_diseases_by_id", {d.id: d for d in self.diseases}
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KnowledgeBase:
        """Build a knowledge base from a plain mapping.

        Args:
            data: Mapping with ``symptoms``, ``diseases`` and ``rules``
                lists, e.g. loaded from a JSON/YAML file or a fixture.
                ``optional`` and ``exclusions`` may be omitted.

        Returns:
            A new, unvalidated :class:`KnowledgeBase`.

        Raises:
            ConfigurationError: If a mandatory key is missing.
        """
        try:
            symptoms = tuple(
                Symptom(id=s["id"], name=s["name"], category=s.get("category", ""))
                for s in data.get("symptoms", [])
            )
            diseases = tuple(
                Disease(
                    id=d["id"],
                    name=d["name"],
                    description=d.get("description", ""),
                    severity=Severity(d.get("severity", Severity.MEDIUM.value)),
                )
                for d in data.get("diseases", [])
            )
            rules = tuple(
                Rule(
                    id=r["id"],
                    conclusion=r["conclusion"],
                    requirements=tuple(r.get("requirements") or ()),
                    optional=tuple(r.get("optional") or ()),
                    exclusions=tuple(r.get("exclusions") or ()),
                    description=r.get("description", ""),
                )
                for r in data.get("rules", [])
            )
        except KeyError as exc:
            raise ConfigurationError([f"missing field {exc.args[0]!r}"]) from exc
        except ValueError as exc:
            raise ConfigurationError([str(exc)]) from exc
        return cls(symptoms=symptoms, diseases=diseases, rules=rules)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_symptom(self, symptom_id: str) -> Symptom | None:
        return self._symptoms_by_id.get(symptom_id)

    def get_disease(self, disease_id: str) -> Disease | None:
        return self._diseases_by_id.get(disease_id)

    def symptom_name(self, symptom_id: str) -> str:
        """Resolve a symptom id to its name, falling back to the id."""
        symptom = self.get_symptom(symptom_id)
        return symptom.name if symptom is not None else symptom_id

    def rules_for(self, disease_id: str) -> list[Rule]:
        """Return every rule concluding ``disease_id``, in declaration order."""
        return [rule for rule in self.rules if rule.conclusion == disease_id]

    def relevant_symptom_ids(self) -> frozenset[str]:
        """Ids appearing in any rule's requirements or optional list."""
        relevant: set[str] = set()
        for rule in self.rules:
            relevant.update(rule.requirements)
            relevant.update(rule.optional)
        return frozenset(relevant)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Check the referential invariants of the catalogue.

        Raises:
            ConfigurationError: Listing every violation found.
        """
        problems: list[str] = []

        for label, ids in (
            ("symptom", [s.id for s in self.symptoms]),
            ("disease", [d.id for d in self.diseases]),
            ("rule", [r.id for r in self.rules]),
        ):
            seen: set[str] = set()
            for entity_id in ids:
                if entity_id in seen:
                    problems.append(f"duplicate {label} id {entity_id!r}")
                seen.add(entity_id)

        for rule in self.rules:
            if rule.conclusion not in self._diseases_by_id:
                problems.append(
                    f"rule {rule.id!r} concludes unknown disease {rule.conclusion!r}"
                )
            if not rule.requirements:
                problems.append(f"rule {rule.id!r} has no requirements")
            for group in ("requirements", "optional", "exclusions"):
                for symptom_id in getattr(rule, group):
                    if symptom_id not in self._symptoms_by_id:
                        problems.append(
                            f"rule {rule.id!r} {group} references unknown "
                            f"symptom {symptom_id!r}"
                        )

        if problems:
            raise ConfigurationError(problems)


@dataclass(frozen=True)
class DiagnosticResult:
    """Outcome of evaluating one rule against a fact set.

    ``confidence`` is an integer percentage in ``[0, 100]``.
    ``conflicting`` and ``missing_required`` hold symptom *names*.
    """

    disease_id: str
    disease_name: str
    confidence: int
    match_count: int
    missing_count: int
    satisfied: bool
    conflicting: tuple[str, ...]
    missing_required: tuple[str, ...]
    trace: tuple[str, ...]
    reason: str
    rule_id: str = ""
    optional_matches: int = 0

    def to_dict(self) -> dict:
        return {
            "disease_id": self.disease_id,
            "disease_name": self.disease_name,
            "confidence": self.confidence,
            "match_count": self.match_count,
            "missing_count": self.missing_count,
            "satisfied": self.satisfied,
            "conflicting": list(self.conflicting),
            "missing_required": list(self.missing_required),
            "trace": list(self.trace),
            "reason": self.reason,
            "rule_id": self.rule_id,
            "optional_matches": self.optional_matches,
        }


@dataclass(frozen=True)
class UncertaintyReport:
    """Quality classification of a ranked result set.

    Attributes:
        incomplete: Partially matched results with no exclusion hit.
        conflicting: Results with an exclusion hit and at least one
            matched requirement.
        ambiguous: Either empty or exactly the top two results when
            their confidences are near-tied.
        noise: Names of observed symptoms no rule relies on.
    """

    incomplete: tuple[DiagnosticResult, ...] = ()
    conflicting: tuple[DiagnosticResult, ...] = ()
    ambiguous: tuple[DiagnosticResult, ...] = ()
    noise: tuple[str, ...] = ()

    @property
    def is_clear(self) -> bool:
        return not (self.incomplete or self.conflicting or self.ambiguous or self.noise)

    def to_dict(self) -> dict:
        return {
            "incomplete": [r.to_dict() for r in self.incomplete],
            "conflicting": [r.to_dict() for r in self.conflicting],
            "ambiguous": [r.to_dict() for r in self.ambiguous],
            "noise": list(self.noise),
        }
