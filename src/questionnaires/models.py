import typing as t

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Prefetch, Q, Sum
from django.utils import timezone
from simple_history.models import HistoricalRecords

from common.models import TimeStampedModel

if t.TYPE_CHECKING:
    from accounts.identity import ActingUser
    from assignments.models import Assignment

# Average scores per questionnaire symbol, e.g. {"review1": {"scores": {"avg": 0.8}}}
Scores = t.Mapping[str, t.Mapping[str, t.Mapping[str, float | None]]]

DEFAULT_MIN_QUESTION_SCORE = 0
DEFAULT_MAX_QUESTION_SCORE = 5
DEFAULT_QUESTIONNAIRE_URL = "http://www.courses.ncsu.edu/csc517"

# ---- Questionnaire model ----


class QuestionnaireQueryset(models.QuerySet["Questionnaire"]):
    """Questionnaire queryset."""

    def with_questions(self) -> t.Self:
        """With questions and their quiz choices."""
        return self.prefetch_related(
            Prefetch("questions", queryset=Question.objects.prefetch_related("quiz_question_choices", "advices"))
        )

    def for_user(self, actor: "ActingUser") -> t.Self:
        """Questionnaires the user may see: public ones and the ones owned on their behalf."""
        if actor.is_administrator:
            return self.all()
        owner_ids = {actor.id}
        if actor.supervisor_id is not None:
            owner_ids.add(actor.supervisor_id)
        return self.filter(Q(private=False) | Q(owner_id__in=owner_ids))


class QuestionnaireManager(models.Manager["Questionnaire"]):
    def get_queryset(self) -> QuestionnaireQueryset:
        """Get questionnaire queryset."""
        return QuestionnaireQueryset(self.model)

    def with_questions(self) -> QuestionnaireQueryset:
        """With questions."""
        return self.get_queryset().with_questions()

    def for_user(self, actor: "ActingUser") -> QuestionnaireQueryset:
        """Questionnaires visible to the user."""
        return self.get_queryset().for_user(actor)


class Questionnaire(TimeStampedModel):
    class Type(models.TextChoices):
        # The label is the display category used to place the questionnaire in the navigation tree.
        REVIEW = "ReviewQuestionnaire", "Review"
        METAREVIEW = "MetareviewQuestionnaire", "Metareview"
        AUTHOR_FEEDBACK = "AuthorFeedbackQuestionnaire", "Author Feedback"
        TEAMMATE_REVIEW = "TeammateReviewQuestionnaire", "Teammate Review"
        SURVEY = "SurveyQuestionnaire", "Survey"
        ASSIGNMENT_SURVEY = "AssignmentSurveyQuestionnaire", "Assignment Survey"
        GLOBAL_SURVEY = "GlobalSurveyQuestionnaire", "Global Survey"
        COURSE_SURVEY = "CourseSurveyQuestionnaire", "Course Survey"
        BOOKMARK_RATING = "BookmarkratingQuestionnaire", "Bookmarkrating"
        QUIZ = "QuizQuestionnaire", "Quiz"

    class QuizState(models.TextChoices):
        PUBLISHED = "published"
        EDITED = "edited"
        LOCKED = "locked"

    SYMBOLS: t.ClassVar[dict[str, str]] = {
        Type.REVIEW: "review",
        Type.METAREVIEW: "metareview",
        Type.AUTHOR_FEEDBACK: "feedback",
        Type.TEAMMATE_REVIEW: "teammate",
        Type.SURVEY: "survey",
        Type.ASSIGNMENT_SURVEY: "assignment_survey",
        Type.GLOBAL_SURVEY: "global_survey",
        Type.COURSE_SURVEY: "course_survey",
        Type.BOOKMARK_RATING: "bookmark",
        Type.QUIZ: "quiz",
    }

    name = models.CharField(max_length=255, db_index=True)
    questionnaire_type = models.CharField(choices=Type.choices, max_length=64, db_index=True)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="questionnaires")
    min_question_score = models.IntegerField(
        default=DEFAULT_MIN_QUESTION_SCORE, help_text="The lowest score a reviewer can give any question."
    )
    max_question_score = models.IntegerField(
        default=DEFAULT_MAX_QUESTION_SCORE, help_text="The highest score a reviewer can give any question."
    )
    private = models.BooleanField(default=False)
    display_type = models.CharField(max_length=64, blank=True, default="")
    instruction_loc = models.CharField(max_length=255, blank=True, default=DEFAULT_QUESTIONNAIRE_URL)
    assignments = models.ManyToManyField(
        "assignments.Assignment",
        through="assignments.AssignmentQuestionnaire",
        related_name="questionnaires",
        blank=True,
    )

    history = HistoricalRecords()

    objects = QuestionnaireManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["name", "owner"], name="unique_questionnaire_name_per_owner"),
        ]
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Validate the score bounds and the per-owner uniqueness of the name."""
        super().clean()
        errors: dict[str, str] = {}
        if self.max_question_score is not None and self.max_question_score < 1:
            errors["max_question_score"] = "The maximum question score must be a positive integer."
        if (
            self.min_question_score is not None
            and self.max_question_score is not None
            and self.min_question_score >= self.max_question_score
        ):
            errors["min_question_score"] = "The minimum question score must be less than the maximum"
        if (
            self.owner_id is not None
            and Questionnaire.objects.filter(name=self.name, owner_id=self.owner_id).exclude(pk=self.pk).exists()
        ):
            errors["name"] = "Questionnaire names must be unique."
        if errors:
            raise ValidationError(errors)

    @classmethod
    def display_type_for(cls, questionnaire_type: str) -> str:
        """The navigation folder name for a questionnaire type."""
        return str(cls.Type(questionnaire_type).label)

    @property
    def symbol(self) -> str:
        return self.SYMBOLS[self.questionnaire_type]

    @property
    def is_quiz(self) -> bool:
        return self.questionnaire_type == self.Type.QUIZ

    def taken_by_anyone(self) -> bool:
        """Whether any respondent has submitted a response to this questionnaire."""
        return self.responses.exists()

    def has_answers(self) -> bool:
        """Whether any of this questionnaire's questions has a recorded answer."""
        return Answer.objects.filter(question__questionnaire=self).exists()

    @property
    def quiz_state(self) -> "Questionnaire.QuizState":
        if self.taken_by_anyone():
            return self.QuizState.LOCKED
        if self.history.count() > 1:
            return self.QuizState.EDITED
        return self.QuizState.PUBLISHED

    # ---- Scoring ----

    def get_weighted_score(self, assignment: "Assignment", scores: Scores) -> float:
        """This questionnaire's contribution to the assignment's score.

        Questionnaires used in a specific round are looked up under their symbol
        suffixed with the round number, e.g. ``review2``.
        """
        link = self.assignment_questionnaires.get(assignment_id=assignment.pk)
        if link.used_in_round is not None:
            symbol = f"{self.symbol}{link.used_in_round}"
        else:
            symbol = self.symbol
        return self.compute_weighted_score(symbol, assignment, scores)

    def compute_weighted_score(self, symbol: str, assignment: "Assignment", scores: Scores) -> float:
        """Scale the average score stored under ``symbol`` by the questionnaire's weight in the assignment."""
        link = self.assignment_questionnaires.get(assignment_id=assignment.pk)
        average = scores.get(symbol, {}).get("scores", {}).get("avg")
        if average is None:
            return 0
        return average * link.questionnaire_weight / 100.0

    def max_possible_score(self) -> int:
        """Sum of all question weights times the highest score a question can get."""
        total_weight = self.questions.aggregate(total=Sum("weight"))["total"]
        if total_weight is None:
            return 0
        return int(total_weight * self.max_question_score)


# ---- Question model ----


class QuestionQueryset(models.QuerySet["Question"]):
    """Question queryset."""

    def for_questionnaire(self, questionnaire_id: int) -> t.Self:
        """Questions of one questionnaire in display order."""
        return self.filter(questionnaire_id=questionnaire_id).order_by("seq", "id")


class QuestionManager(models.Manager["Question"]):
    def get_queryset(self) -> QuestionQueryset:
        """Get question queryset."""
        return QuestionQueryset(self.model)

    def for_questionnaire(self, questionnaire_id: int) -> QuestionQueryset:
        """Questions of one questionnaire in display order."""
        return self.get_queryset().for_questionnaire(questionnaire_id)


class Question(TimeStampedModel):
    class Type(models.TextChoices):
        CRITERION = "Criterion"
        SCALE = "Scale"
        DROPDOWN = "Dropdown"
        CHECKBOX = "Checkbox"
        SECTION_HEADER = "SectionHeader"
        TEXT_RESPONSE = "TextResponse"
        TEXT_AREA = "TextArea"
        TEXT_FIELD = "TextField"
        MULTIPLE_CHOICE_CHECKBOX = "MultipleChoiceCheckbox"
        MULTIPLE_CHOICE_RADIO = "MultipleChoiceRadio"
        TRUE_FALSE = "TrueFalse"

    questionnaire = models.ForeignKey(Questionnaire, on_delete=models.CASCADE, related_name="questions")
    seq = models.DecimalField(max_digits=6, decimal_places=2, default=0, db_index=True)
    txt = models.TextField(blank=True, default="")
    question_type = models.CharField(choices=Type.choices, max_length=32)
    weight = models.PositiveIntegerField(null=True, blank=True)
    size = models.CharField(max_length=32, null=True, blank=True, help_text="Display size hint, e.g. '50, 3'.")
    alternatives = models.CharField(
        max_length=255, null=True, blank=True, help_text="Dropdown alternatives separated by '|'."
    )
    break_before = models.BooleanField(default=True)
    max_label = models.CharField(max_length=255, null=True, blank=True)
    min_label = models.CharField(max_length=255, null=True, blank=True)

    objects = QuestionManager()

    class Meta:
        ordering = ["seq", "id"]

    def __str__(self) -> str:
        return f"{self.question_type} #{self.seq}: {self.txt[:50]}"


# ---- QuizQuestionChoice model ----


class QuizQuestionChoice(TimeStampedModel):
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="quiz_question_choices")
    txt = models.TextField(blank=True, default="")
    is_correct = models.BooleanField(default=False)

    class Meta:
        ordering = ["id"]


# ---- QuestionAdvice model ----


class QuestionAdvice(TimeStampedModel):
    """Guidance shown to reviewers for a question, optionally tied to one score."""

    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="advices")
    score = models.IntegerField(null=True, blank=True)
    advice = models.TextField()

    class Meta:
        ordering = ["question_id", "-score"]


# ---- Responses ----


class QuestionnaireResponse(TimeStampedModel):
    questionnaire = models.ForeignKey(Questionnaire, on_delete=models.CASCADE, related_name="responses")
    respondent = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="questionnaire_responses"
    )
    assignment = models.ForeignKey(
        "assignments.Assignment", on_delete=models.SET_NULL, null=True, blank=True, related_name="responses"
    )
    round = models.PositiveSmallIntegerField(null=True, blank=True)
    submitted_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-submitted_at"]


class Answer(TimeStampedModel):
    response = models.ForeignKey(QuestionnaireResponse, on_delete=models.CASCADE, related_name="answers")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="answers")
    answer = models.IntegerField(null=True, blank=True)
    comments = models.TextField(blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["response", "question"], name="unique_answer_per_response_question"),
        ]

    def clean(self) -> None:
        """The answered question must belong to the responded questionnaire."""
        super().clean()
        if self.response_id and self.question_id and self.question.questionnaire_id != self.response.questionnaire_id:
            raise ValidationError({"question": "The question does not belong to the responded questionnaire."})
