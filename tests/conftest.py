from __future__ import annotations

from io import StringIO

import pytest
from django.core.cache import cache
from django.core.management import call_command

from inference_engine.services import DiagnosisService, DiagnosticResult, KnowledgeBase
from knowledge_base.catalogue import REFERENCE_KNOWLEDGE_BASE


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def reference_kb() -> KnowledgeBase:
    return KnowledgeBase.from_dict(REFERENCE_KNOWLEDGE_BASE)


@pytest.fixture
def service(reference_kb: KnowledgeBase) -> DiagnosisService:
    return DiagnosisService(reference_kb)


@pytest.fixture
def seeded_db(db) -> None:
    call_command("seed_data", stdout=StringIO())


def make_result(disease_id: str, confidence: int, **overrides) -> DiagnosticResult:
    fields: dict = {
        "disease_id": disease_id,
        "disease_name": disease_id,
        "confidence": confidence,
        "match_count": 0,
        "missing_count": 1,
        "satisfied": False,
        "conflicting": (),
        "missing_required": (),
        "trace": (),
        "reason": "",
    }
    fields.update(overrides)
    return DiagnosticResult(**fields)
