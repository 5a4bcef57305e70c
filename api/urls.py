"""
api/urls.py
===========
URL configuration for the MediLogic REST API.

All endpoints are prefixed with ``/api/v1/`` by the project-level router.
"""

from django.urls import path

from . import views

app_name = "api"

urlpatterns = [
    path(
        "symptoms/",
        views.SymptomListAPIView.as_view(),
        name="symptom-list",
    ),
    path(
        "diseases/",
        views.DiseaseListAPIView.as_view(),
        name="disease-list",
    ),
    path(
        "diagnose/",
        views.DiagnosisAPIView.as_view(),
        name="diagnose",
    ),
    path(
        "diagnose/goal/",
        views.GoalAPIView.as_view(),
        name="diagnose-goal",
    ),
    path(
        "explanation/",
        views.ExplanationAPIView.as_view(),
        name="explanation",
    ),
]
