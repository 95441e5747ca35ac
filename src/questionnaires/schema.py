from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from common.schema import StrippedString
from questionnaires.models import (
    DEFAULT_MAX_QUESTION_SCORE,
    DEFAULT_MIN_QUESTION_SCORE,
    Question,
    Questionnaire,
    QuizQuestionChoice,
)

# ---- Questions ----


class QuestionSchema(ModelSchema):
    class Meta:
        model = Question
        fields = [
            "id",
            "seq",
            "txt",
            "question_type",
            "weight",
            "size",
            "alternatives",
            "break_before",
            "max_label",
            "min_label",
        ]


class QuestionUpdateSchema(Schema):
    """Patch of the editable fields of one question. A blank ``txt`` deletes the question."""

    txt: str | None = None
    weight: int | None = Field(default=None, ge=0)
    seq: Decimal | None = None
    size: str | None = None
    alternatives: str | None = None
    break_before: bool | None = None
    max_label: str | None = None
    min_label: str | None = None


class NewQuestionSchema(Schema):
    question_type: str
    txt: str = ""


class QuestionBatchSchema(Schema):
    questions: list[NewQuestionSchema] = Field(min_length=1, max_length=100)


class ItemErrorSchema(Schema):
    index: int
    kind: str
    message: str


class BatchResultSchema(Schema):
    """Questions created by a batch operation and the items that failed."""

    created: list[QuestionSchema] = Field(default_factory=list)
    errors: list[ItemErrorSchema] = Field(default_factory=list)


class RemoveQuestionsSchema(Schema):
    ids: list[int] = Field(min_length=1)


# ---- Questionnaires ----


class QuestionnaireInListSchema(ModelSchema):
    class Meta:
        model = Questionnaire
        fields = ["id", "name", "questionnaire_type", "owner", "private", "display_type", "updated_at"]


class QuestionnaireSchema(ModelSchema):
    questions: list[QuestionSchema] = Field(default_factory=list)

    class Meta:
        model = Questionnaire
        fields = [
            "id",
            "name",
            "questionnaire_type",
            "owner",
            "min_question_score",
            "max_question_score",
            "private",
            "display_type",
            "instruction_loc",
            "created_at",
            "updated_at",
        ]

    @staticmethod
    def resolve_questions(obj: Questionnaire) -> list[Question]:
        return list(obj.questions.all())


class QuestionnaireCreateSchema(Schema):
    """A missing name is reported by the service rather than by validation."""

    name: StrippedString = ""
    questionnaire_type: Questionnaire.Type
    private: bool = False
    min_question_score: int = DEFAULT_MIN_QUESTION_SCORE
    max_question_score: int = DEFAULT_MAX_QUESTION_SCORE
    instruction_loc: str | None = None


class QuestionnaireUpdateSchema(Schema):
    name: StrippedString | None = None
    private: bool | None = None
    min_question_score: int | None = None
    max_question_score: int | None = None
    display_type: str | None = None
    instruction_loc: str | None = None
    questions: dict[int, QuestionUpdateSchema] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_score_bounds(self) -> "QuestionnaireUpdateSchema":
        """Reject bounds that contradict each other within the same patch."""
        if (
            self.min_question_score is not None
            and self.max_question_score is not None
            and self.min_question_score >= self.max_question_score
        ):
            raise PydanticCustomError(
                "invalid_score_bounds",
                "The minimum question score must be less than the maximum",
            )
        return self


class MaxScoreSchema(Schema):
    max_possible_score: int


# ---- Quizzes ----


class QuizChoiceSchema(Schema):
    txt: str = ""
    is_correct: bool = False


class QuizChoicePayloadSchema(Schema):
    """Answer choices of one quiz question.

    Checkbox questions mark each choice; radio and other questions name the
    1-based position of the correct choice; true/false questions only state
    whether the statement is true.
    """

    choices: list[QuizChoiceSchema] = Field(default_factory=list)
    correct_index: int | None = None
    statement_is_true: bool | None = None


class QuizQuestionCreateSchema(Schema):
    txt: str = ""
    question_type: str | None = None
    choices: QuizChoicePayloadSchema | None = None


class QuizCreateSchema(Schema):
    name: StrippedString = ""
    private: bool = False
    questions: list[QuizQuestionCreateSchema] = Field(default_factory=list)


class QuizQuestionUpdateSchema(Schema):
    txt: str | None = None
    choices: QuizChoicePayloadSchema | None = None


class QuizUpdateSchema(Schema):
    name: StrippedString | None = None
    private: bool | None = None
    questions: dict[int, QuizQuestionUpdateSchema] = Field(default_factory=dict)


class QuizChoiceResponseSchema(ModelSchema):
    class Meta:
        model = QuizQuestionChoice
        fields = ["id", "txt", "is_correct"]


class QuizQuestionSchema(ModelSchema):
    choices: list[QuizChoiceResponseSchema] = Field(default_factory=list)

    class Meta:
        model = Question
        fields = ["id", "seq", "txt", "question_type", "weight"]

    @staticmethod
    def resolve_choices(obj: Question) -> list[QuizQuestionChoice]:
        return list(obj.quiz_question_choices.all())


class QuizSchema(Schema):
    id: int
    name: str
    private: bool
    owner_id: int
    state: Questionnaire.QuizState
    questions: list[QuizQuestionSchema] = Field(default_factory=list)

    @staticmethod
    def resolve_state(obj: Questionnaire) -> str:
        return obj.quiz_state

    @staticmethod
    def resolve_questions(obj: Questionnaire) -> list[Question]:
        return list(obj.questions.all())
