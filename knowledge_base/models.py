"""
knowledge_base/models.py
========================
Storage models for the medical knowledge base.

Contains:
    - SymptomModel: An observable symptom, keyed by its code (e.g. "S1").
    - DiseaseModel: A diagnosable condition with a severity level.
    - DiagnosticRuleModel: IF-THEN rules mapping required, optional and
      excluding symptom codes to a disease.

The rows are read once into an immutable
:class:`inference_engine.services.knowledge.KnowledgeBase` by the
repository; the engine never touches the ORM.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class SymptomModel(models.Model):
    """A single symptom used as input for diagnostic inference.

    Attributes:
        code: Stable symptom identifier referenced by rules.
        name: Unique human-readable symptom name (e.g. "High Fever").
        category: Free-form category label (e.g. "Respiratory").
    """

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------
    code: str = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="Symptom identifier referenced by rules.",
    )
    name: str = models.CharField(
        max_length=200,
        unique=True,
        help_text="Unique symptom name.",
    )
    category: str = models.CharField(
        max_length=50,
        default="General",
        help_text="Broad medical category this symptom belongs to.",
    )

    # ------------------------------------------------------------------
    # Meta
    # ------------------------------------------------------------------
    class Meta:
        ordering: list[str] = ["category", "name"]
        verbose_name: str = "Symptom"
        verbose_name_plural: str = "Symptoms"

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"{self.name} ({self.category})"


class DiseaseModel(models.Model):
    """A disease / condition that the system can diagnose.

    Attributes:
        code: Stable disease identifier referenced by rules.
        name: Unique disease name.
        description: Short clinical description.
        severity: Clinical severity drawn from :class:`Severity`.
    """

    class Severity(models.TextChoices):
        """Allowed severity levels."""

        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        CRITICAL = "critical", "Critical"

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------
    code: str = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="Disease identifier referenced by rules.",
    )
    name: str = models.CharField(
        max_length=200,
        unique=True,
        help_text="Unique disease name.",
    )
    description: str = models.TextField(
        blank=True,
        default="",
        help_text="Clinical description of the disease.",
    )
    severity: str = models.CharField(
        max_length=10,
        choices=Severity.choices,
        default=Severity.MEDIUM,
        help_text="Clinical severity level.",
    )

    # ------------------------------------------------------------------
    # Meta
    # ------------------------------------------------------------------
    class Meta:
        ordering: list[str] = ["code"]
        verbose_name: str = "Disease"
        verbose_name_plural: str = "Diseases"

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"{self.name} (Severity: {self.get_severity_display()})"


class DiagnosticRuleModel(models.Model):
    """An IF-THEN diagnostic rule.

    Symptom codes are kept as ordered JSON lists because the order of
    ``requirements`` drives the order of the reported missing symptoms.

    Attributes:
        code: Rule identifier (e.g. "R1").
        conclusion: The disease this rule concludes.
        requirements: Symptom codes that must all be present.
        optional: Symptom codes that raise confidence on a full match.
        exclusions: Symptom codes that contradict the rule.
        description: Authored justification shown with every result.
        position: Declaration order, used as the ranking tie-break.
    """

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------
    code: str = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="Rule identifier.",
    )
    conclusion: models.ForeignKey = models.ForeignKey(
        DiseaseModel,
        on_delete=models.CASCADE,
        related_name="diagnostic_rules",
        help_text="Disease concluded when this rule holds.",
    )
    requirements = models.JSONField(
        default=list,
        help_text='Ordered list of required symptom codes, e.g. ["S8", "S12"].',
    )
    optional = models.JSONField(
        default=list,
        blank=True,
        help_text="Symptom codes that add supporting evidence.",
    )
    exclusions = models.JSONField(
        default=list,
        blank=True,
        help_text="Symptom codes whose presence contradicts the rule.",
    )
    description: str = models.TextField(
        help_text="Human-readable justification reported with the result.",
    )
    position: int = models.PositiveIntegerField(
        default=0,
        help_text="Declaration order of the rule.",
    )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def clean(self) -> None:
        """Validate that the rule has requirements and known symptom codes."""
        super().clean()
        errors: dict[str, str] = {}

        if not self.requirements:
            errors["requirements"] = "A diagnostic rule must have at least one requirement."

        known: set[str] = set(SymptomModel.objects.values_list("code", flat=True))
        for group in ("requirements", "optional", "exclusions"):
            unknown = [c for c in (getattr(self, group) or []) if c not in known]
            if unknown and group not in errors:
                errors[group] = f"Unknown symptom codes: {unknown}"

        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Meta
    # ------------------------------------------------------------------
    class Meta:
        ordering: list[str] = ["position", "code"]
        verbose_name: str = "Diagnostic Rule"
        verbose_name_plural: str = "Diagnostic Rules"

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"{self.code} → {self.conclusion.name}"
