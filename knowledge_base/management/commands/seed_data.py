"""
knowledge_base/management/commands/seed_data.py
================================================
Management command to seed the database with the reference knowledge base.

Usage:
    python manage.py seed_data
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from inference_engine.services import (
    ConfigurationError,
    KnowledgeBase,
    KnowledgeBaseRepository,
)
from knowledge_base.catalogue import REFERENCE_KNOWLEDGE_BASE
from knowledge_base.models import DiagnosticRuleModel, DiseaseModel, SymptomModel


class Command(BaseCommand):
    help = "Seed the knowledge base with the reference symptoms, diseases, and diagnostic rules."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("\n=== Seeding Knowledge Base ===\n"))

        try:
            KnowledgeBase.from_dict(REFERENCE_KNOWLEDGE_BASE).validate()
        except ConfigurationError as exc:
            raise CommandError(exc.message) from exc

        # ------------------------------------------------------------------
        # 1. Symptoms
        # ------------------------------------------------------------------
        for data in REFERENCE_KNOWLEDGE_BASE["symptoms"]:
            symptom, created = SymptomModel.objects.update_or_create(
                code=data["id"],
                defaults={"name": data["name"], "category": data["category"]},
            )
            status = "CREATED" if created else "UPDATED"
            self.stdout.write(f"  [{status}] Symptom: {symptom}")

        # ------------------------------------------------------------------
        # 2. Diseases
        # ------------------------------------------------------------------
        for data in REFERENCE_KNOWLEDGE_BASE["diseases"]:
            disease, created = DiseaseModel.objects.update_or_create(
                code=data["id"],
                defaults={
                    "name": data["name"],
                    "description": data["description"],
                    "severity": data["severity"],
                },
            )
            status = "CREATED" if created else "UPDATED"
            self.stdout.write(f"  [{status}] Disease: {disease}")

        # ------------------------------------------------------------------
        # 3. Diagnostic rules
        # ------------------------------------------------------------------
        for position, data in enumerate(REFERENCE_KNOWLEDGE_BASE["rules"]):
            rule, created = DiagnosticRuleModel.objects.update_or_create(
                code=data["id"],
                defaults={
                    "conclusion_id": data["conclusion"],
                    "requirements": data["requirements"],
                    "optional": data.get("optional", []),
                    "exclusions": data.get("exclusions", []),
                    "description": data["description"],
                    "position": position,
                },
            )
            status = "CREATED" if created else "UPDATED"
            self.stdout.write(f"  [{status}] Rule: {rule}")

        KnowledgeBaseRepository().invalidate()

        # ------------------------------------------------------------------
        # Summary
        # ------------------------------------------------------------------
        self.stdout.write(
            self.style.SUCCESS(
                f"\n✔ Seeding complete: "
                f"{SymptomModel.objects.count()} symptoms, "
                f"{DiseaseModel.objects.count()} diseases, "
                f"{DiagnosticRuleModel.objects.count()} rules.\n"
            )
        )
