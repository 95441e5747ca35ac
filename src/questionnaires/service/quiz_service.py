"""Quiz authoring.

A quiz is written by an author for an assignment that requires one. The
whole submission is validated before anything is stored, and a quiz can no
longer be edited once somebody has taken it.
"""

import structlog
from django.db import transaction

from accounts.identity import ActingUser
from assignments.models import Assignment
from questionnaires.models import Question, Questionnaire

from ..exceptions import AssignmentQuizError, QuestionIntegrityError, QuizValidationError
from ..question_types import MISSING_CORRECT_ANSWER, QuestionVariant, resolve_variant
from ..schema import QuizChoicePayloadSchema, QuizCreateSchema, QuizQuestionCreateSchema, QuizUpdateSchema
from .questionnaire_service import ensure_unlocked

logger = structlog.get_logger(__name__)

QUIZ_MIN_QUESTION_SCORE = 0
QUIZ_MAX_QUESTION_SCORE = 1

ValidatedQuestion = tuple[QuestionVariant, QuizQuestionCreateSchema, QuizChoicePayloadSchema]


class QuizService:
    def __init__(self, questionnaire_id: int) -> None:
        """Initialize quiz service."""
        self.questionnaire = Questionnaire.objects.get(pk=questionnaire_id, questionnaire_type=Questionnaire.Type.QUIZ)

    @staticmethod
    def validate_quiz(assignment: Assignment, payload: QuizCreateSchema) -> list[ValidatedQuestion]:
        """Check a quiz submission against the assignment's quiz settings.

        Stops at the first problem and raises it with the message meant for the author.

        Raises:
            AssignmentQuizError: if the assignment does not use quizzes.
            QuizValidationError: if the name, a question type, or a question's choices are missing or incomplete.
            ConfigurationError: if a question type is unknown.
        """
        if not assignment.require_quiz:
            raise AssignmentQuizError("This assignment does not support the quizzing feature.")
        if not payload.name:
            raise QuizValidationError("Please specify quiz name (please do not use your name or id).")

        validated: list[ValidatedQuestion] = []
        for position in range(assignment.num_quiz_questions):
            item = payload.questions[position] if position < len(payload.questions) else None
            if item is None or not item.question_type:
                raise QuizValidationError("Please select a type for each question")
            variant = resolve_variant(item.question_type)
            if item.choices is None:
                raise QuizValidationError(MISSING_CORRECT_ANSWER)
            variant.validate_choices(item.txt, item.choices)
            validated.append((variant, item, item.choices))
        return validated

    @classmethod
    def create_quiz(cls, actor: ActingUser, assignment: Assignment, payload: QuizCreateSchema) -> Questionnaire:
        """Validate the submission and store the quiz with its questions and choices."""
        validated = cls.validate_quiz(assignment, payload)
        owner_id = actor.resolve_owner_id()

        with transaction.atomic():
            quiz = Questionnaire.objects.create(
                name=payload.name,
                questionnaire_type=Questionnaire.Type.QUIZ,
                owner_id=owner_id,
                private=payload.private,
                min_question_score=QUIZ_MIN_QUESTION_SCORE,
                max_question_score=QUIZ_MAX_QUESTION_SCORE,
                display_type=Questionnaire.display_type_for(Questionnaire.Type.QUIZ),
            )
            for seq, (variant, item, choices) in enumerate(validated, start=1):
                question = Question.objects.create(
                    questionnaire=quiz,
                    seq=seq,
                    txt=item.txt,
                    question_type=variant.tag,
                    weight=1,
                    break_before=True,
                )
                for choice in variant.synthesize_choices(question, choices):
                    choice.save()

        logger.info(
            "quiz_created",
            questionnaire_id=quiz.pk,
            assignment_id=assignment.pk,
            owner_id=owner_id,
            questions=len(validated),
        )
        return quiz

    @transaction.atomic
    def update_quiz(self, payload: QuizUpdateSchema) -> Questionnaire:
        """Edit the quiz name, question texts and choices in place.

        Raises:
            LockedStateError: if somebody has already taken the quiz.
            QuestionIntegrityError: if a question id does not belong to the quiz.
            QuizValidationError: if an edited question's choices are incomplete.
        """
        quiz = self.questionnaire
        ensure_unlocked(quiz)

        questions = {q.pk: q for q in quiz.questions.filter(pk__in=payload.questions.keys())}
        if foreign_ids := set(payload.questions) - set(questions):
            raise QuestionIntegrityError(f"Questions {sorted(foreign_ids)} do not belong to quiz {quiz.pk}.")

        if payload.name is not None:
            if not payload.name:
                raise QuizValidationError("Please specify quiz name (please do not use your name or id).")
            quiz.name = payload.name
        if payload.private is not None:
            quiz.private = payload.private
        quiz.save()

        for question_id, patch in payload.questions.items():
            question = questions[question_id]
            if patch.txt is not None:
                question.txt = patch.txt
                question.save()
            if patch.choices is not None:
                variant = resolve_variant(question.question_type)
                variant.validate_choices(question.txt, patch.choices)
                variant.update_choices(question, patch.choices)

        logger.info("quiz_updated", questionnaire_id=quiz.pk, questions=len(payload.questions))
        return quiz
