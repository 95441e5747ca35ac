import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("assignments", "0001_initial"),
        ("questionnaires", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AssignmentQuestionnaire",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                (
                    "questionnaire_weight",
                    models.PositiveSmallIntegerField(
                        default=0,
                        help_text="Percentage of the assignment's score contributed by this questionnaire.",
                        validators=[django.core.validators.MaxValueValidator(100)],
                    ),
                ),
                (
                    "used_in_round",
                    models.PositiveSmallIntegerField(
                        blank=True, help_text="Review round this questionnaire is used in, if rounds vary.", null=True
                    ),
                ),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_questionnaires",
                        to="assignments.assignment",
                    ),
                ),
                (
                    "questionnaire",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_questionnaires",
                        to="questionnaires.questionnaire",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("assignment", "questionnaire"), name="unique_assignment_questionnaire"
                    )
                ],
            },
        ),
    ]
