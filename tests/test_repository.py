from __future__ import annotations

from io import StringIO

import pytest
from django.core.exceptions import ValidationError
from django.core.management import call_command

from inference_engine.services import ConfigurationError, KnowledgeBaseRepository
from knowledge_base.models import DiagnosticRuleModel, DiseaseModel, SymptomModel


@pytest.mark.django_db
def test_seeded_rows_load_as_reference_catalogue(seeded_db, reference_kb) -> None:
    kb = KnowledgeBaseRepository().load()

    assert kb.rules == reference_kb.rules
    assert kb.diseases == reference_kb.diseases
    assert set(kb.symptoms) == set(reference_kb.symptoms)


@pytest.mark.django_db
def test_seeding_twice_updates_in_place(seeded_db) -> None:
    out = StringIO()
    call_command("seed_data", stdout=out)

    assert "[UPDATED] Rule" in out.getvalue()
    assert SymptomModel.objects.count() == 14
    assert DiagnosticRuleModel.objects.count() == 5


@pytest.mark.django_db
def test_load_is_cached_until_invalidated(seeded_db) -> None:
    repository = KnowledgeBaseRepository()
    first = repository.load()

    DiagnosticRuleModel.objects.filter(code="R5").delete()
    assert len(repository.load().rules) == len(first.rules)

    repository.invalidate()
    assert len(repository.load().rules) == len(first.rules) - 1


@pytest.mark.django_db
def test_invalid_rows_raise_configuration_error(seeded_db) -> None:
    DiagnosticRuleModel.objects.create(
        code="R9",
        conclusion=DiseaseModel.objects.get(code="D1"),
        requirements=[],
        description="broken",
        position=9,
    )
    with pytest.raises(ConfigurationError):
        KnowledgeBaseRepository().load()


@pytest.mark.django_db
def test_model_clean_rejects_bad_rules(seeded_db) -> None:
    rule = DiagnosticRuleModel(
        code="R9",
        conclusion=DiseaseModel.objects.get(code="D1"),
        requirements=["S1", "S99"],
        exclusions=["S42"],
        description="broken",
    )
    with pytest.raises(ValidationError) as excinfo:
        rule.full_clean()

    assert set(excinfo.value.message_dict) == {"requirements", "exclusions"}


@pytest.mark.django_db
def test_unknown_stored_severity_raises_configuration_error(seeded_db) -> None:
    DiseaseModel.objects.filter(code="D2").update(severity="catastrophic")

    with pytest.raises(ConfigurationError) as excinfo:
        KnowledgeBaseRepository().load()

    assert excinfo.value.problems == ["disease 'D2' has unknown severity 'catastrophic'"]
