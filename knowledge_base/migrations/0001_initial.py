import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DiseaseModel",
            fields=[
                ("code", models.CharField(help_text="Disease identifier referenced by rules.", max_length=20, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Unique disease name.", max_length=200, unique=True)),
                ("description", models.TextField(blank=True, default="", help_text="Clinical description of the disease.")),
                ("severity", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")], default="medium", help_text="Clinical severity level.", max_length=10)),
            ],
            options={
                "verbose_name": "Disease",
                "verbose_name_plural": "Diseases",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="SymptomModel",
            fields=[
                ("code", models.CharField(help_text="Symptom identifier referenced by rules.", max_length=20, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Unique symptom name.", max_length=200, unique=True)),
                ("category", models.CharField(default="General", help_text="Broad medical category this symptom belongs to.", max_length=50)),
            ],
            options={
                "verbose_name": "Symptom",
                "verbose_name_plural": "Symptoms",
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="DiagnosticRuleModel",
            fields=[
                ("code", models.CharField(help_text="Rule identifier.", max_length=20, primary_key=True, serialize=False)),
                ("requirements", models.JSONField(default=list, help_text='Ordered list of required symptom codes, e.g. ["S8", "S12"].')),
                ("optional", models.JSONField(blank=True, default=list, help_text="Symptom codes that add supporting evidence.")),
                ("exclusions", models.JSONField(blank=True, default=list, help_text="Symptom codes whose presence contradicts the rule.")),
                ("description", models.TextField(help_text="Human-readable justification reported with the result.")),
                ("position", models.PositiveIntegerField(default=0, help_text="Declaration order of the rule.")),
                ("conclusion", models.ForeignKey(help_text="Disease concluded when this rule holds.", on_delete=django.db.models.deletion.CASCADE, related_name="diagnostic_rules", to="knowledge_base.diseasemodel")),
            ],
            options={
                "verbose_name": "Diagnostic Rule",
                "verbose_name_plural": "Diagnostic Rules",
                "ordering": ["position", "code"],
            },
        ),
    ]
