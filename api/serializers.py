"""
api/serializers.py
==================
DRF serializers for the MediLogic REST API.

Contains:
    - SymptomSerializer: Read-only representation of symptoms.
    - DiseaseSerializer: Read-only representation of diseases.
    - DiagnosisRequestSerializer: Input validation for /diagnose.
    - GoalRequestSerializer: Input validation for /diagnose/goal.
"""

from __future__ import annotations

from rest_framework import serializers

from knowledge_base.models import DiseaseModel, SymptomModel


# ─────────────────────────────────────────────────────────────────────
# Read-only serializers
# ─────────────────────────────────────────────────────────────────────


class SymptomSerializer(serializers.ModelSerializer):
    """Serializer for :class:`SymptomModel`.

    Exposes the symptom code as ``id`` since that is the value callers
    send back in ``symptom_ids``.
    """

    id = serializers.CharField(source="code", read_only=True)

    class Meta:
        model = SymptomModel
        fields = ["id", "name", "category"]
        read_only_fields = fields


class DiseaseSerializer(serializers.ModelSerializer):
    """Serializer for :class:`DiseaseModel`."""

    id = serializers.CharField(source="code", read_only=True)
    severity_display = serializers.CharField(
        source="get_severity_display",
        read_only=True,
    )

    class Meta:
        model = DiseaseModel
        fields = ["id", "name", "description", "severity", "severity_display"]
        read_only_fields = fields


# ─────────────────────────────────────────────────────────────────────
# Input serializers
# ─────────────────────────────────────────────────────────────────────


class DiagnosisRequestSerializer(serializers.Serializer):
    """Input validation for the diagnosis endpoints.

    An empty list is valid: every disease is then reported with zero
    confidence.  Unknown codes are accepted and show up as noise.
    """

    symptom_ids = serializers.ListField(
        child=serializers.CharField(max_length=20),
        allow_empty=True,
        help_text="Observed symptom codes, e.g. [\"S8\", \"S12\"].",
    )


class GoalRequestSerializer(DiagnosisRequestSerializer):
    """Input validation for the goal lookup endpoint."""

    disease_id = serializers.CharField(
        max_length=20,
        help_text="Code of the disease to verify.",
    )
