import pytest

from accounts.models import User
from questionnaires.models import Answer, Question, QuestionAdvice, Questionnaire, QuestionnaireResponse


@pytest.fixture
def criterion(questionnaire: Questionnaire) -> Question:
    return Question.objects.create(
        questionnaire=questionnaire,
        seq=1,
        txt="Is the design clear?",
        question_type=Question.Type.CRITERION,
        weight=1,
    )


@pytest.fixture
def populated_questionnaire(questionnaire: Questionnaire, criterion: Question) -> Questionnaire:
    """Three questions, two pieces of advice on the criterion."""
    Question.objects.create(
        questionnaire=questionnaire, seq=2, txt="What would you change?", question_type=Question.Type.TEXT_AREA
    )
    Question.objects.create(
        questionnaire=questionnaire,
        seq=3,
        txt="Overall grade",
        question_type=Question.Type.DROPDOWN,
        alternatives="0|1|2|3|4|5",
    )
    QuestionAdvice.objects.create(question=criterion, score=1, advice="Explain the main classes.")
    QuestionAdvice.objects.create(question=criterion, score=5, advice="Keep it up.")
    return questionnaire


@pytest.fixture
def answered(questionnaire: Questionnaire, criterion: Question, student: User) -> Answer:
    response = QuestionnaireResponse.objects.create(questionnaire=questionnaire, respondent=student)
    return Answer.objects.create(response=response, question=criterion, answer=4)
