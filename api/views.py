"""
api/views.py
============
DRF views for the MediLogic REST API.

Contains:
    - SymptomListAPIView: ListAPIView with category filtering and search.
    - DiseaseListAPIView: ListAPIView with severity filtering.
    - DiagnosisAPIView: POST endpoint ranking every disease.
    - GoalAPIView: POST endpoint verifying a single disease.
    - ExplanationAPIView: POST endpoint for a natural-language summary.
"""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from explanations.summariser import ExplanationSummariser
from inference_engine.services import (
    DiagnosisService,
    InferenceEngineError,
    KnowledgeBaseRepository,
)
from knowledge_base.models import DiseaseModel, SymptomModel

from .serializers import (
    DiagnosisRequestSerializer,
    DiseaseSerializer,
    GoalRequestSerializer,
    SymptomSerializer,
)

logger = logging.getLogger(__name__)


def _engine_error_response(exc: InferenceEngineError) -> Response:
    logger.error("inference engine failure: %s", exc.message)
    return Response(
        {"error": exc.message, "details": exc.details},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# ─────────────────────────────────────────────────────────────────────
# Catalogue listing
# ─────────────────────────────────────────────────────────────────────


class SymptomListAPIView(generics.ListAPIView):
    """List all symptoms with optional filtering.

    **Filters** (query params):
        - ``category``: exact match (e.g. ``?category=Respiratory``)
        - ``search``: partial match on ``name``
        - ``ordering``: sort by ``code``, ``name`` or ``category``
    """

    queryset = SymptomModel.objects.all()
    serializer_class = SymptomSerializer
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]
    filterset_fields = ["category"]
    search_fields = ["name"]
    ordering_fields = ["code", "name", "category"]
    ordering = ["category", "name"]


class DiseaseListAPIView(generics.ListAPIView):
    """List all diseases, optionally filtered by ``?severity=high``."""

    queryset = DiseaseModel.objects.all()
    serializer_class = DiseaseSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["severity"]


# ─────────────────────────────────────────────────────────────────────
# Diagnosis endpoints
# ─────────────────────────────────────────────────────────────────────


class DiagnosisAPIView(APIView):
    """Rank every disease against the observed symptoms.

    **POST** ``/api/v1/diagnose/``

    Request body::

        {"symptom_ids": ["S8", "S12", "S7"]}

    Returns the ranked results and the uncertainty report.
    """

    def post(self, request):
        serializer = DiagnosisRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        symptom_ids: list[str] = serializer.validated_data["symptom_ids"]

        try:
            service = DiagnosisService(KnowledgeBaseRepository().load())
            result: dict = service.diagnose(symptom_ids)
        except InferenceEngineError as exc:
            return _engine_error_response(exc)
        return Response(result, status=status.HTTP_200_OK)


class GoalAPIView(APIView):
    """Verify a single disease against the observed symptoms.

    **POST** ``/api/v1/diagnose/goal/``

    Request body::

        {"disease_id": "D1", "symptom_ids": ["S8", "S12"]}

    Returns the result for that disease, or 404 when no rule
    concludes it.
    """

    def post(self, request):
        serializer = GoalRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        disease_id: str = serializer.validated_data["disease_id"]
        symptom_ids: list[str] = serializer.validated_data["symptom_ids"]

        try:
            service = DiagnosisService(KnowledgeBaseRepository().load())
            result = service.evaluate_goal(disease_id, symptom_ids)
        except InferenceEngineError as exc:
            return _engine_error_response(exc)

        if result is None:
            return Response(
                {"error": f"no rule concludes disease {disease_id!r}."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(result.to_dict(), status=status.HTTP_200_OK)


# ─────────────────────────────────────────────────────────────────────
# Explanation endpoint
# ─────────────────────────────────────────────────────────────────────


class ExplanationAPIView(APIView):
    """Ask the external summary service to explain a diagnosis.

    **POST** ``/api/v1/explanation/``

    Request body::

        {"symptom_ids": ["S1", "S2", "S5"]}

    Always answers 200 once the diagnosis itself succeeded; a failing
    summary service yields the fallback text with ``"fallback": true``.
    """

    def post(self, request):
        serializer = DiagnosisRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        symptom_ids: list[str] = serializer.validated_data["symptom_ids"]

        try:
            service = DiagnosisService(KnowledgeBaseRepository().load())
            results = service.evaluate(symptom_ids)
            report = service.analyze_uncertainty(results, symptom_ids)
        except InferenceEngineError as exc:
            return _engine_error_response(exc)

        names: list[str] = [
            service.knowledge_base.symptom_name(s) for s in dict.fromkeys(symptom_ids)
        ]
        summary = ExplanationSummariser().summarise(names, results, report)
        return Response(
            {"explanation": summary.text, "fallback": summary.fallback},
            status=status.HTTP_200_OK,
        )
