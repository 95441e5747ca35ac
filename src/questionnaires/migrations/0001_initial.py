import django.db.models.deletion
import django.utils.timezone
import simple_history.models
from django.conf import settings
from django.db import migrations, models

QUESTIONNAIRE_TYPES = [
    ("ReviewQuestionnaire", "Review"),
    ("MetareviewQuestionnaire", "Metareview"),
    ("AuthorFeedbackQuestionnaire", "Author Feedback"),
    ("TeammateReviewQuestionnaire", "Teammate Review"),
    ("SurveyQuestionnaire", "Survey"),
    ("AssignmentSurveyQuestionnaire", "Assignment Survey"),
    ("GlobalSurveyQuestionnaire", "Global Survey"),
    ("CourseSurveyQuestionnaire", "Course Survey"),
    ("BookmarkratingQuestionnaire", "Bookmarkrating"),
    ("QuizQuestionnaire", "Quiz"),
]

QUESTION_TYPES = [
    ("Criterion", "Criterion"),
    ("Scale", "Scale"),
    ("Dropdown", "Dropdown"),
    ("Checkbox", "Checkbox"),
    ("SectionHeader", "Section Header"),
    ("TextResponse", "Text Response"),
    ("TextArea", "Text Area"),
    ("TextField", "Text Field"),
    ("MultipleChoiceCheckbox", "Multiple Choice Checkbox"),
    ("MultipleChoiceRadio", "Multiple Choice Radio"),
    ("TrueFalse", "True False"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("assignments", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Questionnaire",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("questionnaire_type", models.CharField(choices=QUESTIONNAIRE_TYPES, db_index=True, max_length=64)),
                (
                    "min_question_score",
                    models.IntegerField(default=0, help_text="The lowest score a reviewer can give any question."),
                ),
                (
                    "max_question_score",
                    models.IntegerField(default=5, help_text="The highest score a reviewer can give any question."),
                ),
                ("private", models.BooleanField(default=False)),
                ("display_type", models.CharField(blank=True, default="", max_length=64)),
                (
                    "instruction_loc",
                    models.CharField(blank=True, default="http://www.courses.ncsu.edu/csc517", max_length=255),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questionnaires",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("name", "owner"), name="unique_questionnaire_name_per_owner")
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalQuestionnaire",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, db_index=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, db_index=True, editable=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("questionnaire_type", models.CharField(choices=QUESTIONNAIRE_TYPES, db_index=True, max_length=64)),
                (
                    "min_question_score",
                    models.IntegerField(default=0, help_text="The lowest score a reviewer can give any question."),
                ),
                (
                    "max_question_score",
                    models.IntegerField(default=5, help_text="The highest score a reviewer can give any question."),
                ),
                ("private", models.BooleanField(default=False)),
                ("display_type", models.CharField(blank=True, default="", max_length=64)),
                (
                    "instruction_loc",
                    models.CharField(blank=True, default="http://www.courses.ncsu.edu/csc517", max_length=255),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical questionnaire",
                "verbose_name_plural": "historical questionnaires",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("seq", models.DecimalField(db_index=True, decimal_places=2, default=0, max_digits=6)),
                ("txt", models.TextField(blank=True, default="")),
                ("question_type", models.CharField(choices=QUESTION_TYPES, max_length=32)),
                ("weight", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "size",
                    models.CharField(
                        blank=True, help_text="Display size hint, e.g. '50, 3'.", max_length=32, null=True
                    ),
                ),
                (
                    "alternatives",
                    models.CharField(
                        blank=True, help_text="Dropdown alternatives separated by '|'.", max_length=255, null=True
                    ),
                ),
                ("break_before", models.BooleanField(default=True)),
                ("max_label", models.CharField(blank=True, max_length=255, null=True)),
                ("min_label", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "questionnaire",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="questionnaires.questionnaire",
                    ),
                ),
            ],
            options={
                "ordering": ["seq", "id"],
            },
        ),
        migrations.CreateModel(
            name="QuizQuestionChoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("txt", models.TextField(blank=True, default="")),
                ("is_correct", models.BooleanField(default=False)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="quiz_question_choices",
                        to="questionnaires.question",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="QuestionAdvice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("score", models.IntegerField(blank=True, null=True)),
                ("advice", models.TextField()),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="advices",
                        to="questionnaires.question",
                    ),
                ),
            ],
            options={
                "ordering": ["question_id", "-score"],
            },
        ),
        migrations.CreateModel(
            name="QuestionnaireResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("round", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("submitted_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "assignment",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="responses",
                        to="assignments.assignment",
                    ),
                ),
                (
                    "questionnaire",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responses",
                        to="questionnaires.questionnaire",
                    ),
                ),
                (
                    "respondent",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questionnaire_responses",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-submitted_at"],
            },
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("answer", models.IntegerField(blank=True, null=True)),
                ("comments", models.TextField(blank=True, default="")),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="questionnaires.question",
                    ),
                ),
                (
                    "response",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="questionnaires.questionnaireresponse",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("response", "question"), name="unique_answer_per_response_question"
                    )
                ],
            },
        ),
    ]
