"""
knowledge_base/management/commands/diagnose.py
==============================================
Run the inference engine from the command line.

Usage:
    python manage.py diagnose S8 S12 S7
    python manage.py diagnose S1 S6 --goal D2
    python manage.py diagnose S1 S2 S5 --explain
    python manage.py diagnose S8 S12 --reference
"""

from django.core.management.base import BaseCommand, CommandError

from explanations.summariser import ExplanationSummariser
from inference_engine.services import (
    DiagnosisService,
    InferenceEngineError,
    KnowledgeBase,
    KnowledgeBaseRepository,
)
from knowledge_base.catalogue import REFERENCE_KNOWLEDGE_BASE


class Command(BaseCommand):
    help = "Rank every disease of the knowledge base against the given symptom codes."

    def add_arguments(self, parser):
        parser.add_argument("symptoms", nargs="*", help="Observed symptom codes, e.g. S1 S2.")
        parser.add_argument(
            "--goal",
            metavar="DISEASE",
            help="Only verify this disease code instead of ranking all of them.",
        )
        parser.add_argument(
            "--reference",
            action="store_true",
            help="Use the built-in reference catalogue instead of the database.",
        )
        parser.add_argument(
            "--explain",
            action="store_true",
            help="Also request a natural-language summary from the summary service.",
        )

    def handle(self, *args, **options):
        symptoms: list[str] = list(dict.fromkeys(options["symptoms"]))
        goal: str | None = options["goal"]
        if goal and options["explain"]:
            raise CommandError("--explain summarises the full ranking and cannot be combined with --goal.")

        try:
            if options["reference"]:
                knowledge_base = KnowledgeBase.from_dict(REFERENCE_KNOWLEDGE_BASE)
            else:
                knowledge_base = KnowledgeBaseRepository().load()
            service = DiagnosisService(knowledge_base)
        except InferenceEngineError as exc:
            raise CommandError(exc.message) from exc

        if goal:
            self.stdout.write(service.explain_goal(goal, symptoms))
            return

        self.stdout.write(service.explain(symptoms))

        if options["explain"]:
            results = service.evaluate(symptoms)
            report = service.analyze_uncertainty(results, symptoms)
            summary = ExplanationSummariser().summarise(
                [knowledge_base.symptom_name(s) for s in symptoms],
                results,
                report,
            )
            self.stdout.write("")
            self.stdout.write(self.style.MIGRATE_HEADING("--- summary ---"))
            self.stdout.write(summary.text)
