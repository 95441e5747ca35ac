"""Questionnaire service layer."""

from .questionnaire_service import BatchResult, ItemError, QuestionnaireService
from .quiz_service import QuizService
from .scoring_service import assignment_total_score

__all__ = [
    "BatchResult",
    "ItemError",
    "QuestionnaireService",
    "QuizService",
    "assignment_total_score",
]
