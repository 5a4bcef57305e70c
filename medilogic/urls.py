"""
URL configuration for medilogic project.

Routes:
    /api/v1/    → REST API (api app)
"""

from django.urls import include, path

urlpatterns = [
    # REST API (DRF)
    path("api/v1/", include("api.urls", namespace="api")),
]
