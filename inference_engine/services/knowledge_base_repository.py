"""
inference_engine/services/knowledge_base_repository.py
=====================================================
Repository layer turning the knowledge base tables into an immutable
:class:`KnowledgeBase` value.

All database interaction for symptoms, diseases, and diagnostic
rules is centralised here so the engine never builds querysets
itself.  The application only reads the knowledge base; rows are
written by the ``seed_data`` management command.
"""

from __future__ import annotations

import logging

from django.core.cache import cache
from django.db import DatabaseError

from knowledge_base.models import DiagnosticRuleModel, DiseaseModel, SymptomModel

from .exceptions import ConfigurationError, InferenceEngineError
from .knowledge import Disease, KnowledgeBase, Rule, Severity, Symptom

logger: logging.Logger = logging.getLogger(__name__)

# cache key and ttl for the assembled knowledge base
_KB_CACHE_KEY: str = "kb:knowledge_base"
_KB_CACHE_TTL: int = 300  # 5 minutes


class KnowledgeBaseRepository:
    """Centralised, read-only access to the knowledge base tables.

    :meth:`load` is served from the Django cache when available so a
    request never rebuilds the catalogue it already validated.
    """

    def load(self) -> KnowledgeBase:
        """Return the validated knowledge base.

        Returns:
            An immutable :class:`KnowledgeBase`.

        Raises:
            ConfigurationError: If the stored rows violate an invariant.
            InferenceEngineError: On database errors.
        """
        cached: KnowledgeBase | None = cache.get(_KB_CACHE_KEY)
        if cached is not None:
            logger.debug("serving knowledge base from cache")
            return cached

        try:
            knowledge_base: KnowledgeBase = self._build()
        except DatabaseError as exc:
            logger.exception("database error while loading the knowledge base")
            raise InferenceEngineError(
                message="Database error while loading the knowledge base.",
                details={"original_error": str(exc)},
            ) from exc

        knowledge_base.validate()
        cache.set(_KB_CACHE_KEY, knowledge_base, _KB_CACHE_TTL)
        logger.info(
            "knowledge base loaded: %d symptoms, %d diseases, %d rules",
            len(knowledge_base.symptoms),
            len(knowledge_base.diseases),
            len(knowledge_base.rules),
        )
        return knowledge_base

    def invalidate(self) -> None:
        """Drop the cached knowledge base."""
        cache.delete(_KB_CACHE_KEY)
        logger.debug("knowledge base cache invalidated")

    def _build(self) -> KnowledgeBase:
        symptoms: tuple[Symptom, ...] = tuple(
            Symptom(id=s.code, name=s.name, category=s.category)
            for s in SymptomModel.objects.order_by("code")
        )
        diseases: tuple[Disease, ...] = tuple(
            Disease(
                id=d.code,
                name=d.name,
                description=d.description,
                severity=self._severity(d),
            )
            for d in DiseaseModel.objects.all()
        )
        rules: tuple[Rule, ...] = tuple(
            Rule(
                id=r.code,
                conclusion=r.conclusion_id,
                requirements=tuple(r.requirements or ()),
                optional=tuple(r.optional or ()),
                exclusions=tuple(r.exclusions or ()),
                description=r.description,
            )
            for r in DiagnosticRuleModel.objects.order_by("position", "code")
        )
        return KnowledgeBase(symptoms=symptoms, diseases=diseases, rules=rules)

    @staticmethod
    def _severity(disease: DiseaseModel) -> Severity:
        # choices are not enforced by the database
        try:
            return Severity(disease.severity)
        except ValueError as exc:
            raise ConfigurationError(
                [f"disease {disease.code!r} has unknown severity {disease.severity!r}"]
            ) from exc
