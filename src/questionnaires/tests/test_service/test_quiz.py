"""Tests for QuizService."""

import pytest

from accounts.identity import ActingUser
from accounts.models import User
from assignments.models import Assignment
from questionnaires import csv_exchange
from questionnaires.exceptions import (
    AssignmentQuizError,
    ConfigurationError,
    LockedStateError,
    QuestionIntegrityError,
    QuizValidationError,
)
from questionnaires.models import Question, Questionnaire, QuestionnaireResponse, QuizQuestionChoice
from questionnaires.schema import (
    NewQuestionSchema,
    QuestionnaireUpdateSchema,
    QuizChoicePayloadSchema,
    QuizChoiceSchema,
    QuizCreateSchema,
    QuizQuestionCreateSchema,
    QuizQuestionUpdateSchema,
    QuizUpdateSchema,
)
from questionnaires.service import QuestionnaireService, QuizService

pytestmark = pytest.mark.django_db


def _true_false(statement_is_true: bool = True) -> QuizQuestionCreateSchema:
    return QuizQuestionCreateSchema(
        txt="Python is dynamically typed.",
        question_type="TrueFalse",
        choices=QuizChoicePayloadSchema(statement_is_true=statement_is_true),
    )


def _checkbox() -> QuizQuestionCreateSchema:
    return QuizQuestionCreateSchema(
        txt="Which of these are prime?",
        question_type="MultipleChoiceCheckbox",
        choices=QuizChoicePayloadSchema(
            choices=[
                QuizChoiceSchema(txt="2", is_correct=True),
                QuizChoiceSchema(txt="4"),
                QuizChoiceSchema(txt="5", is_correct=True),
            ]
        ),
    )


def _radio(correct_index: int | None = 2) -> QuizQuestionCreateSchema:
    return QuizQuestionCreateSchema(
        txt="Which keyword defines a function?",
        question_type="MultipleChoiceRadio",
        choices=QuizChoicePayloadSchema(
            choices=[QuizChoiceSchema(txt="func"), QuizChoiceSchema(txt="def"), QuizChoiceSchema(txt="fn")],
            correct_index=correct_index,
        ),
    )


@pytest.fixture
def student_actor(student: User) -> ActingUser:
    return ActingUser.from_user(student)


@pytest.fixture
def quiz(student_actor: ActingUser, quiz_assignment: Assignment) -> Questionnaire:
    payload = QuizCreateSchema(name="Program 2 quiz", questions=[_true_false(), _checkbox()])
    return QuizService.create_quiz(student_actor, quiz_assignment, payload)


# --- Tests for create_quiz ---


def test_create_quiz_stores_questions_and_choices(quiz: Questionnaire, student: User) -> None:
    """Test the stored quiz, its questions and the synthesized choices."""
    assert quiz.questionnaire_type == Questionnaire.Type.QUIZ
    assert quiz.owner == student
    assert quiz.min_question_score == 0
    assert quiz.max_question_score == 1
    assert quiz.display_type == "Quiz"

    true_false, checkbox = quiz.questions.all()
    assert true_false.question_type == Question.Type.TRUE_FALSE
    assert true_false.weight == 1
    assert [(c.txt, c.is_correct) for c in true_false.quiz_question_choices.all()] == [
        ("True", True),
        ("False", False),
    ]
    assert [(c.txt, c.is_correct) for c in checkbox.quiz_question_choices.all()] == [
        ("2", True),
        ("4", False),
        ("5", True),
    ]


def test_create_quiz_radio_marks_the_selected_position(student_actor: ActingUser, quiz_assignment: Assignment) -> None:
    payload = QuizCreateSchema(name="Quiz", questions=[_radio(), _true_false(False)])

    quiz = QuizService.create_quiz(student_actor, quiz_assignment, payload)

    radio = quiz.questions.get(question_type=Question.Type.MULTIPLE_CHOICE_RADIO)
    assert [c.is_correct for c in radio.quiz_question_choices.all()] == [False, True, False]


def test_create_quiz_is_not_linked_to_the_assignment(quiz: Questionnaire, quiz_assignment: Assignment) -> None:
    assert not quiz.assignments.exists()
    assert quiz.quiz_state == Questionnaire.QuizState.PUBLISHED


# --- Tests for validate_quiz ---


def test_assignment_without_quizzes(student_actor: ActingUser, assignment: Assignment) -> None:
    payload = QuizCreateSchema(name="Quiz", questions=[_true_false()])

    with pytest.raises(AssignmentQuizError, match="This assignment does not support the quizzing feature."):
        QuizService.create_quiz(student_actor, assignment, payload)


@pytest.mark.parametrize(
    "payload, message",
    [
        (
            QuizCreateSchema(name="", questions=[_true_false(), _checkbox()]),
            "Please specify quiz name (please do not use your name or id).",
        ),
        (
            QuizCreateSchema(name="Quiz", questions=[_true_false()]),
            "Please select a type for each question",
        ),
        (
            QuizCreateSchema(name="Quiz", questions=[_true_false(), QuizQuestionCreateSchema(txt="Untyped")]),
            "Please select a type for each question",
        ),
        (
            QuizCreateSchema(
                name="Quiz",
                questions=[_true_false(), QuizQuestionCreateSchema(txt="Q", question_type="MultipleChoiceRadio")],
            ),
            "Please select a correct answer for all questions",
        ),
        (
            QuizCreateSchema(name="Quiz", questions=[_true_false(), _radio(correct_index=None)]),
            "Please select a correct answer for all questions",
        ),
    ],
)
def test_invalid_quiz_stores_nothing(
    student_actor: ActingUser, quiz_assignment: Assignment, payload: QuizCreateSchema, message: str
) -> None:
    """Test that the first problem is reported with its message and nothing is created."""
    with pytest.raises(QuizValidationError) as exc_info:
        QuizService.create_quiz(student_actor, quiz_assignment, payload)

    assert str(exc_info.value) == message
    assert not Questionnaire.objects.exists()


def test_unknown_quiz_question_type(student_actor: ActingUser, quiz_assignment: Assignment) -> None:
    bogus = QuizQuestionCreateSchema(txt="Q", question_type="Essay", choices=QuizChoicePayloadSchema())
    payload = QuizCreateSchema(name="Quiz", questions=[_true_false(), bogus])

    with pytest.raises(ConfigurationError):
        QuizService.create_quiz(student_actor, quiz_assignment, payload)

    assert not Questionnaire.objects.exists()


# --- Tests for update_quiz ---


def test_update_quiz_edits_in_place(quiz: Questionnaire) -> None:
    """Test that texts and choices are edited on the existing rows and the quiz is marked edited."""
    true_false, checkbox = quiz.questions.all()
    choice_ids = set(QuizQuestionChoice.objects.values_list("id", flat=True))
    payload = QuizUpdateSchema(
        name="Program 2 quiz, revised",
        questions={
            true_false.pk: QuizQuestionUpdateSchema(choices=QuizChoicePayloadSchema(statement_is_true=False)),
            checkbox.pk: QuizQuestionUpdateSchema(
                txt="Which of these are even?",
                choices=QuizChoicePayloadSchema(
                    choices=[
                        QuizChoiceSchema(txt="2", is_correct=True),
                        QuizChoiceSchema(txt="4", is_correct=True),
                        QuizChoiceSchema(txt="5"),
                    ]
                ),
            ),
        },
    )

    updated = QuizService(quiz.pk).update_quiz(payload)

    assert updated.name == "Program 2 quiz, revised"
    assert updated.quiz_state == Questionnaire.QuizState.EDITED
    assert set(QuizQuestionChoice.objects.values_list("id", flat=True)) == choice_ids
    assert [c.is_correct for c in true_false.quiz_question_choices.all()] == [False, True]
    checkbox.refresh_from_db()
    assert checkbox.txt == "Which of these are even?"
    assert [c.is_correct for c in checkbox.quiz_question_choices.all()] == [True, True, False]


def test_update_quiz_validates_choices(quiz: Questionnaire) -> None:
    checkbox = quiz.questions.get(question_type=Question.Type.MULTIPLE_CHOICE_CHECKBOX)
    payload = QuizUpdateSchema(
        questions={
            checkbox.pk: QuizQuestionUpdateSchema(
                choices=QuizChoicePayloadSchema(choices=[QuizChoiceSchema(txt="2"), QuizChoiceSchema(txt="4")])
            )
        }
    )

    with pytest.raises(QuizValidationError):
        QuizService(quiz.pk).update_quiz(payload)


def test_update_quiz_rejects_foreign_questions(quiz: Questionnaire, questionnaire: Questionnaire) -> None:
    foreign = Question.objects.create(questionnaire=questionnaire, seq=1, question_type=Question.Type.CRITERION)

    with pytest.raises(QuestionIntegrityError):
        QuizService(quiz.pk).update_quiz(QuizUpdateSchema(questions={foreign.pk: QuizQuestionUpdateSchema(txt="x")}))


def test_taken_quiz_is_locked(quiz: Questionnaire, other_instructor: User) -> None:
    """Test that a quiz somebody answered can no longer be edited."""
    QuestionnaireResponse.objects.create(questionnaire=quiz, respondent=other_instructor)

    with pytest.raises(LockedStateError, match="Your quiz has been taken by some other students"):
        QuizService(quiz.pk).update_quiz(QuizUpdateSchema(name="Too late"))

    quiz.refresh_from_db()
    assert quiz.name == "Program 2 quiz"
    assert quiz.quiz_state == Questionnaire.QuizState.LOCKED


@pytest.fixture
def taken_quiz(quiz: Questionnaire, other_instructor: User) -> Questionnaire:
    QuestionnaireResponse.objects.create(questionnaire=quiz, respondent=other_instructor)
    return quiz


def test_taken_quiz_cannot_be_patched_as_a_questionnaire(taken_quiz: Questionnaire) -> None:
    """Test that the generic questionnaire operations refuse a locked quiz as well."""
    service = QuestionnaireService(taken_quiz.pk)
    question_ids = list(taken_quiz.questions.values_list("id", flat=True))

    with pytest.raises(LockedStateError):
        service.update(QuestionnaireUpdateSchema(name="Renamed"))
    with pytest.raises(LockedStateError):
        service.add_new_questions([NewQuestionSchema(question_type="Criterion")])
    with pytest.raises(LockedStateError):
        service.remove_questions(question_ids[:1])
    with pytest.raises(LockedStateError):
        service.toggle_access()
    with pytest.raises(LockedStateError):
        csv_exchange.import_questions(taken_quiz, "txt,type\nExtra,Criterion\n")

    taken_quiz.refresh_from_db()
    assert taken_quiz.name == "Program 2 quiz"
    assert taken_quiz.private is False
    assert list(taken_quiz.questions.values_list("id", flat=True)) == question_ids


def test_untaken_quiz_can_still_be_patched(quiz: Questionnaire) -> None:
    result = QuestionnaireService(quiz.pk).add_new_questions([NewQuestionSchema(question_type="TrueFalse")])

    assert len(result.created) == 1
    assert quiz.questions.count() == 3
