"""test_models.py: Unit tests for the questionnaire models."""

import pytest
from django.core.exceptions import ValidationError

from accounts.identity import ActingUser
from accounts.models import User
from assignments.models import Assignment, AssignmentQuestionnaire
from questionnaires.models import Answer, Question, Questionnaire, QuestionnaireResponse, QuizQuestionChoice

pytestmark = pytest.mark.django_db


def test_questionnaire_creation_and_manager(questionnaire: Questionnaire) -> None:
    """Test that a Questionnaire can be created successfully."""
    assert questionnaire.pk is not None
    assert questionnaire.min_question_score == 0
    assert questionnaire.max_question_score == 5
    assert Questionnaire.objects.with_questions().count() == 1


def test_max_question_score_must_be_positive(instructor: User) -> None:
    with pytest.raises(ValidationError) as exc_info:
        Questionnaire.objects.create(
            name="Broken",
            questionnaire_type=Questionnaire.Type.REVIEW,
            owner=instructor,
            min_question_score=-1,
            max_question_score=0,
        )

    assert exc_info.value.message_dict["max_question_score"] == [
        "The maximum question score must be a positive integer."
    ]


def test_min_question_score_below_max(instructor: User) -> None:
    """Test that equal bounds are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        Questionnaire.objects.create(
            name="Broken",
            questionnaire_type=Questionnaire.Type.REVIEW,
            owner=instructor,
            min_question_score=5,
            max_question_score=5,
        )

    assert "min_question_score" in exc_info.value.message_dict


def test_names_are_unique_per_owner(questionnaire: Questionnaire, other_instructor: User) -> None:
    """Test that the same name is rejected for the same owner and accepted for another."""
    with pytest.raises(ValidationError) as exc_info:
        Questionnaire.objects.create(
            name=questionnaire.name, questionnaire_type=Questionnaire.Type.SURVEY, owner=questionnaire.owner
        )
    assert "Questionnaire names must be unique." in exc_info.value.message_dict["name"]

    other = Questionnaire.objects.create(
        name=questionnaire.name, questionnaire_type=Questionnaire.Type.SURVEY, owner=other_instructor
    )
    assert other.pk is not None


def test_display_type_for_each_type() -> None:
    assert Questionnaire.display_type_for(Questionnaire.Type.AUTHOR_FEEDBACK) == "Author Feedback"
    assert Questionnaire.display_type_for("QuizQuestionnaire") == "Quiz"


def test_for_user_hides_private_questionnaires_of_others(
    questionnaire: Questionnaire, other_instructor: User, teaching_assistant: User, administrator: User
) -> None:
    """Test visibility of a private questionnaire."""
    questionnaire.private = True
    questionnaire.save()

    assert not Questionnaire.objects.for_user(ActingUser.from_user(other_instructor)).exists()
    assert Questionnaire.objects.for_user(ActingUser.from_user(teaching_assistant)).get() == questionnaire
    assert Questionnaire.objects.for_user(ActingUser.from_user(administrator)).get() == questionnaire


def test_answer_must_belong_to_the_responded_questionnaire(
    questionnaire: Questionnaire, student: User, instructor: User
) -> None:
    other = Questionnaire.objects.create(name="Other", questionnaire_type=Questionnaire.Type.SURVEY, owner=instructor)
    foreign_question = Question.objects.create(questionnaire=other, seq=1, question_type=Question.Type.CRITERION)
    response = QuestionnaireResponse.objects.create(questionnaire=questionnaire, respondent=student)

    with pytest.raises(ValidationError):
        Answer.objects.create(response=response, question=foreign_question, answer=3)


# --- Scoring ---


def test_weighted_score_scales_average_by_weight(assignment: Assignment, questionnaire: Questionnaire) -> None:
    """Test that an average of 0.8 at 40 percent contributes 0.32."""
    AssignmentQuestionnaire.objects.create(assignment=assignment, questionnaire=questionnaire, questionnaire_weight=40)

    score = questionnaire.get_weighted_score(assignment, {"review": {"scores": {"avg": 0.8}}})

    assert score == pytest.approx(0.32)


def test_weighted_score_without_average_is_zero(assignment: Assignment, questionnaire: Questionnaire) -> None:
    AssignmentQuestionnaire.objects.create(assignment=assignment, questionnaire=questionnaire, questionnaire_weight=40)

    assert questionnaire.get_weighted_score(assignment, {}) == 0
    assert questionnaire.get_weighted_score(assignment, {"review": {"scores": {"avg": None}}}) == 0


def test_weighted_score_uses_round_symbol(assignment: Assignment, questionnaire: Questionnaire) -> None:
    """Test that a questionnaire used in round 2 reads the scores stored under its round symbol."""
    AssignmentQuestionnaire.objects.create(
        assignment=assignment, questionnaire=questionnaire, questionnaire_weight=50, used_in_round=2
    )
    scores = {"review": {"scores": {"avg": 1.0}}, "review2": {"scores": {"avg": 0.6}}}

    assert questionnaire.get_weighted_score(assignment, scores) == pytest.approx(0.3)


def test_max_possible_score(questionnaire: Questionnaire) -> None:
    """Test that weights are summed and multiplied by the maximum question score."""
    assert questionnaire.max_possible_score() == 0

    Question.objects.create(questionnaire=questionnaire, seq=1, question_type=Question.Type.CRITERION, weight=1)
    Question.objects.create(questionnaire=questionnaire, seq=2, question_type=Question.Type.SCALE, weight=2)
    Question.objects.create(questionnaire=questionnaire, seq=3, question_type=Question.Type.SECTION_HEADER)

    assert questionnaire.max_possible_score() == 15


# --- Quiz state ---


def test_quiz_state_follows_edits_and_responses(instructor: User, student: User) -> None:
    """Test that a quiz moves from published to edited to locked."""
    quiz = Questionnaire.objects.create(
        name="Quiz", questionnaire_type=Questionnaire.Type.QUIZ, owner=instructor, max_question_score=1
    )
    assert quiz.quiz_state == Questionnaire.QuizState.PUBLISHED

    quiz.name = "Quiz, revised"
    quiz.save()
    assert quiz.quiz_state == Questionnaire.QuizState.EDITED

    QuestionnaireResponse.objects.create(questionnaire=quiz, respondent=student)
    assert quiz.taken_by_anyone()
    assert quiz.quiz_state == Questionnaire.QuizState.LOCKED


def test_with_questions_prefetches_questions_and_choices(
    questionnaire: Questionnaire, instructor: User, django_assert_num_queries  # type: ignore[no-untyped-def]
) -> None:
    """Test that reading the questions and their choices needs no further queries."""
    for seq in range(1, 4):
        question = Question.objects.create(
            questionnaire=questionnaire, seq=seq, question_type=Question.Type.MULTIPLE_CHOICE_RADIO
        )
        QuizQuestionChoice.objects.create(question=question, txt="A", is_correct=True)
    fetched = Questionnaire.objects.for_user(ActingUser.from_user(instructor)).with_questions().get(pk=questionnaire.pk)

    with django_assert_num_queries(0):
        choices = [choice.txt for q in fetched.questions.all() for choice in q.quiz_question_choices.all()]

    assert choices == ["A", "A", "A"]
