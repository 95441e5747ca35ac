"""Tests for adding questions in batches."""

import pytest

from questionnaires.models import Question, Questionnaire
from questionnaires.schema import NewQuestionSchema
from questionnaires.service import QuestionnaireService

pytestmark = pytest.mark.django_db


def test_add_new_questions_applies_type_defaults(questionnaire: Questionnaire) -> None:
    result = QuestionnaireService(questionnaire.pk).add_new_questions(
        [NewQuestionSchema(question_type="Criterion"), NewQuestionSchema(question_type="TextField", txt="Name?")]
    )

    assert result.errors == []
    criterion, text_field = result.created
    assert criterion.weight == 1
    assert criterion.size == "50, 3"
    assert criterion.max_label == "Strongly disagree"
    assert text_field.size == "30"
    assert text_field.txt == "Name?"
    assert [q.seq for q in Question.objects.for_questionnaire(questionnaire.pk)] == [1, 2]


def test_failed_item_keeps_the_questions_before_it(questionnaire: Questionnaire) -> None:
    """Test that an unknown type is reported and the other items are still stored."""
    result = QuestionnaireService(questionnaire.pk).add_new_questions(
        [
            NewQuestionSchema(question_type="Criterion"),
            NewQuestionSchema(question_type="Bogus"),
            NewQuestionSchema(question_type="Dropdown"),
        ]
    )

    assert len(result.created) == 2
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.index == 1
    assert error.kind == "ConfigurationError"
    assert "Bogus" in error.message
    assert questionnaire.questions.count() == 2


def test_new_questions_follow_existing_ones(questionnaire: Questionnaire) -> None:
    Question.objects.create(questionnaire=questionnaire, seq=1, question_type=Question.Type.SECTION_HEADER)

    result = QuestionnaireService(questionnaire.pk).add_new_questions([NewQuestionSchema(question_type="Scale")])

    assert result.created[0].seq == 2
