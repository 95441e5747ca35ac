from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models

from common.models import TimeStampedModel


class Assignment(TimeStampedModel):
    name = models.CharField(max_length=255, db_index=True)
    instructor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="assignments")
    require_quiz = models.BooleanField(default=False, help_text="Authors must write a quiz about their submission.")
    num_quiz_questions = models.PositiveIntegerField(
        default=0, help_text="How many questions every quiz written for this assignment has."
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class AssignmentQuestionnaire(TimeStampedModel):
    """Links a questionnaire to an assignment with its share of the assignment's score."""

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="assignment_questionnaires")
    questionnaire = models.ForeignKey(
        "questionnaires.Questionnaire", on_delete=models.CASCADE, related_name="assignment_questionnaires"
    )
    questionnaire_weight = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text="Percentage of the assignment's score contributed by this questionnaire.",
    )
    used_in_round = models.PositiveSmallIntegerField(
        null=True, blank=True, help_text="Review round this questionnaire is used in, if rounds vary."
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["assignment", "questionnaire"], name="unique_assignment_questionnaire"),
        ]
