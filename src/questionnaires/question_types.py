"""Question variants.

Every question type tag resolves to exactly one variant. A variant knows the
defaults a freshly added question of its type gets, and how quiz answer
choices of its type are validated, created and edited.
"""

import typing as t

from .exceptions import ConfigurationError, QuizValidationError
from .models import Question, QuizQuestionChoice

if t.TYPE_CHECKING:
    from .schema import QuizChoicePayloadSchema

QUESTION_MAX_LABEL = "Strongly agree"
QUESTION_MIN_LABEL = "Strongly disagree"
CRITERION_QUESTION_SIZE = "50, 3"
DROPDOWN_SCALE = "0|1|2|3|4|5"
TEXT_AREA_SIZE = "60, 5"
TEXT_FIELD_SIZE = "30"
COPIED_QUESTION_SIZE = "50,3"

MISSING_TEXT = "Please make sure all questions have text"
MISSING_OPTION_TEXT = "Please make sure every question has text for all options"
MISSING_CORRECT_ANSWER = "Please select a correct answer for all questions"


class QuestionVariant:
    """Behaviour shared by every question type.

    Quiz choices default to a single correct choice selected by its 1-based
    position in the submitted list.
    """

    tag: t.ClassVar[Question.Type]
    scored: t.ClassVar[bool] = False
    # Copies of these questions get a display size when the original has none.
    sized_on_copy: t.ClassVar[bool] = False

    def apply_defaults(self, question: Question) -> None:
        """Set the type-specific defaults of a freshly added question."""
        if self.scored:
            question.weight = 1
            # The labels are stored swapped.
            question.max_label = QUESTION_MIN_LABEL
            question.min_label = QUESTION_MAX_LABEL

    def validate_choices(self, txt: str, payload: "QuizChoicePayloadSchema") -> None:
        """Raise QuizValidationError with a user facing message if the quiz question is incomplete."""
        if not txt.strip():
            raise QuizValidationError(MISSING_TEXT)
        if any(not choice.txt.strip() for choice in payload.choices):
            raise QuizValidationError(MISSING_OPTION_TEXT)
        if payload.correct_index is None or not 1 <= payload.correct_index <= len(payload.choices):
            raise QuizValidationError(MISSING_CORRECT_ANSWER)

    def synthesize_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        """Build the unsaved choice rows for a new quiz question."""
        return [
            QuizQuestionChoice(question=question, txt=choice.txt, is_correct=position == payload.correct_index)
            for position, choice in enumerate(payload.choices, start=1)
        ]

    def update_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        """Apply the payload to the question's existing choices, matched by position."""
        existing = list(question.quiz_question_choices.all())
        for position, (choice, submitted) in enumerate(zip(existing, payload.choices, strict=False), start=1):
            choice.txt = submitted.txt
            choice.is_correct = position == payload.correct_index
            choice.save()
        return existing


class CriterionVariant(QuestionVariant):
    tag = Question.Type.CRITERION
    scored = True
    sized_on_copy = True

    def apply_defaults(self, question: Question) -> None:
        """Scored defaults plus the criterion display size."""
        super().apply_defaults(question)
        question.size = CRITERION_QUESTION_SIZE


class ScaleVariant(QuestionVariant):
    tag = Question.Type.SCALE
    scored = True


class DropdownVariant(QuestionVariant):
    tag = Question.Type.DROPDOWN

    def apply_defaults(self, question: Question) -> None:
        question.alternatives = DROPDOWN_SCALE


class CheckboxVariant(QuestionVariant):
    tag = Question.Type.CHECKBOX


class SectionHeaderVariant(QuestionVariant):
    tag = Question.Type.SECTION_HEADER


class TextResponseVariant(QuestionVariant):
    tag = Question.Type.TEXT_RESPONSE
    sized_on_copy = True


class TextAreaVariant(TextResponseVariant):
    tag = Question.Type.TEXT_AREA

    def apply_defaults(self, question: Question) -> None:
        question.size = TEXT_AREA_SIZE


class TextFieldVariant(TextResponseVariant):
    tag = Question.Type.TEXT_FIELD

    def apply_defaults(self, question: Question) -> None:
        question.size = TEXT_FIELD_SIZE


class MultipleChoiceCheckboxVariant(QuestionVariant):
    """Any number of correct choices, at least one."""

    tag = Question.Type.MULTIPLE_CHOICE_CHECKBOX

    def validate_choices(self, txt: str, payload: "QuizChoicePayloadSchema") -> None:
        if not txt.strip():
            raise QuizValidationError(MISSING_TEXT)
        if any(not choice.txt.strip() for choice in payload.choices):
            raise QuizValidationError(MISSING_OPTION_TEXT)
        if not any(choice.is_correct for choice in payload.choices):
            raise QuizValidationError(MISSING_CORRECT_ANSWER)

    def synthesize_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        return [
            QuizQuestionChoice(question=question, txt=choice.txt, is_correct=choice.is_correct)
            for choice in payload.choices
        ]

    def update_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        existing = list(question.quiz_question_choices.all())
        for choice, submitted in zip(existing, payload.choices, strict=False):
            choice.txt = submitted.txt
            choice.is_correct = submitted.is_correct
            choice.save()
        return existing


class MultipleChoiceRadioVariant(QuestionVariant):
    """Exactly one correct choice, selected by position."""

    tag = Question.Type.MULTIPLE_CHOICE_RADIO


class TrueFalseVariant(QuestionVariant):
    """Two fixed choices; the payload only says whether the statement is true."""

    tag = Question.Type.TRUE_FALSE

    def validate_choices(self, txt: str, payload: "QuizChoicePayloadSchema") -> None:
        if not txt.strip():
            raise QuizValidationError(MISSING_TEXT)
        if payload.statement_is_true is None:
            raise QuizValidationError(MISSING_CORRECT_ANSWER)

    def synthesize_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        statement_is_true = bool(payload.statement_is_true)
        return [
            QuizQuestionChoice(question=question, txt="True", is_correct=statement_is_true),
            QuizQuestionChoice(question=question, txt="False", is_correct=not statement_is_true),
        ]

    def update_choices(self, question: Question, payload: "QuizChoicePayloadSchema") -> list[QuizQuestionChoice]:
        existing = list(question.quiz_question_choices.all())
        for choice in existing:
            choice.is_correct = (choice.txt == "True") == payload.statement_is_true
            choice.save()
        return existing


def resolve_variant(tag: str | None) -> QuestionVariant:
    """Resolve a question type tag to its variant.

    Raises:
        ConfigurationError: if the tag is not one of the known question types.
    """
    if tag not in Question.Type.values:
        raise ConfigurationError(f"Unknown question type '{tag}'.")
    match Question.Type(tag):
        case Question.Type.CRITERION:
            return CriterionVariant()
        case Question.Type.SCALE:
            return ScaleVariant()
        case Question.Type.DROPDOWN:
            return DropdownVariant()
        case Question.Type.CHECKBOX:
            return CheckboxVariant()
        case Question.Type.SECTION_HEADER:
            return SectionHeaderVariant()
        case Question.Type.TEXT_RESPONSE:
            return TextResponseVariant()
        case Question.Type.TEXT_AREA:
            return TextAreaVariant()
        case Question.Type.TEXT_FIELD:
            return TextFieldVariant()
        case Question.Type.MULTIPLE_CHOICE_CHECKBOX:
            return MultipleChoiceCheckboxVariant()
        case Question.Type.MULTIPLE_CHOICE_RADIO:
            return MultipleChoiceRadioVariant()
        case Question.Type.TRUE_FALSE:
            return TrueFalseVariant()
    raise ConfigurationError(f"Unknown question type '{tag}'.")  # pragma: no cover


def build_question(tag: str | None, **fields: t.Any) -> Question:
    """Build an unsaved question of the given type with its variant defaults applied first."""
    variant = resolve_variant(tag)
    question = Question(question_type=variant.tag)
    variant.apply_defaults(question)
    for name, value in fields.items():
        setattr(question, name, value)
    return question
