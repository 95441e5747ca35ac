import typing as t
from dataclasses import dataclass, field

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from accounts.identity import ActingUser
from navigation.exceptions import NavigationException
from navigation.models import QuestionnaireNode
from navigation.service import register_questionnaire
from questionnaires.models import DEFAULT_QUESTIONNAIRE_URL, Question, QuestionAdvice, Questionnaire

from ..exceptions import (
    CopyError,
    LockedStateError,
    MissingNameError,
    QuestionIntegrityError,
    QuestionnaireException,
    ReferentialIntegrityError,
)
from ..question_types import COPIED_QUESTION_SIZE, build_question, resolve_variant
from ..schema import NewQuestionSchema, QuestionnaireCreateSchema, QuestionnaireUpdateSchema

logger = structlog.get_logger(__name__)

COPY_FAILED_MESSAGE = (
    "The questionnaire was not able to be copied. Please check the original course for missing information."
)
LOCKED_QUIZ_MESSAGE = "Your quiz has been taken by some other students, you cannot edit it anymore."

# Fields copied verbatim when a question is duplicated.
QUESTION_COPY_FIELDS = (
    "seq",
    "txt",
    "question_type",
    "weight",
    "size",
    "alternatives",
    "break_before",
    "max_label",
    "min_label",
)


@dataclass
class ItemError:
    """A single failed item of a batch operation. ``index`` is the item's position in the batch."""

    index: int
    kind: str
    message: str


@dataclass
class BatchResult:
    created: list[Question] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)


def ensure_unlocked(questionnaire: Questionnaire) -> None:
    """Refuse changes to a quiz that somebody has already taken."""
    if questionnaire.is_quiz and questionnaire.taken_by_anyone():
        logger.warning("quiz_edit_refused_taken", questionnaire_id=questionnaire.pk)
        raise LockedStateError(LOCKED_QUIZ_MESSAGE)


class QuestionnaireService:
    def __init__(self, questionnaire_id: int) -> None:
        """Initialize questionnaire service."""
        self.questionnaire = Questionnaire.objects.get(pk=questionnaire_id)

    @classmethod
    @transaction.atomic
    def create_questionnaire(cls, actor: ActingUser, payload: QuestionnaireCreateSchema) -> Questionnaire:
        """Create a questionnaire owned on behalf of the actor and place it in the navigation tree.

        Raises:
            MissingNameError: if the payload has no name.
            OwnershipResolutionError: if the actor cannot own questionnaires.
            PlacementError: if there is no folder for the questionnaire's display category.
        """
        if not payload.name:
            raise MissingNameError("A rubric or survey must have a title.")
        questionnaire = Questionnaire.objects.create(
            name=payload.name,
            questionnaire_type=payload.questionnaire_type,
            owner_id=actor.resolve_owner_id(),
            private=payload.private,
            min_question_score=payload.min_question_score,
            max_question_score=payload.max_question_score,
            display_type=Questionnaire.display_type_for(payload.questionnaire_type),
            instruction_loc=payload.instruction_loc or DEFAULT_QUESTIONNAIRE_URL,
        )
        register_questionnaire(questionnaire)
        logger.info(
            "questionnaire_created",
            questionnaire_id=questionnaire.pk,
            questionnaire_type=questionnaire.questionnaire_type,
            owner_id=questionnaire.owner_id,
            actor_id=actor.id,
        )
        return questionnaire

    @transaction.atomic
    def update(self, payload: QuestionnaireUpdateSchema) -> Questionnaire:
        """Patch the questionnaire and its questions.

        Only the fields present in the payload change. A question whose text is
        patched to blank is deleted.

        Raises:
            LockedStateError: if the questionnaire is a quiz somebody has taken.
            QuestionIntegrityError: if a question id does not belong to the questionnaire.
        """
        questionnaire = self.questionnaire
        ensure_unlocked(questionnaire)
        questions = {q.pk: q for q in questionnaire.questions.filter(pk__in=payload.questions.keys())}
        if foreign_ids := set(payload.questions) - set(questions):
            raise QuestionIntegrityError(
                f"Questions {sorted(foreign_ids)} do not belong to questionnaire {questionnaire.pk}."
            )

        for name, value in payload.model_dump(exclude_unset=True, exclude={"questions"}).items():
            setattr(questionnaire, name, value)
        questionnaire.save()

        for question_id, question_patch in payload.questions.items():
            question = questions[question_id]
            changes = question_patch.model_dump(exclude_unset=True)
            if "txt" in changes and not (changes["txt"] or "").strip():
                question.delete()
                logger.info("question_deleted_blank_text", questionnaire_id=questionnaire.pk, question_id=question_id)
                continue
            for name, value in changes.items():
                setattr(question, name, value)
            question.save()

        logger.info("questionnaire_updated", questionnaire_id=questionnaire.pk)
        return questionnaire

    def add_new_questions(self, items: t.Sequence[NewQuestionSchema]) -> BatchResult:
        """Add questions of the requested types with their type defaults.

        Each item is saved on its own: a failing item is reported and the
        questions created before it are kept.
        """
        questionnaire = self.questionnaire
        ensure_unlocked(questionnaire)
        first_seq = questionnaire.questions.count() + 1
        result = BatchResult()
        for index, item in enumerate(items):
            try:
                question = build_question(
                    item.question_type,
                    questionnaire=questionnaire,
                    seq=first_seq + index,
                    txt=item.txt,
                    break_before=True,
                )
                question.save()
            except (QuestionnaireException, ValidationError) as e:
                logger.warning(
                    "question_add_failed",
                    questionnaire_id=questionnaire.pk,
                    index=index,
                    question_type=item.question_type,
                    error=str(e),
                )
                result.errors.append(ItemError(index=index, kind=type(e).__name__, message=_message(e)))
                continue
            result.created.append(question)
        logger.info(
            "questions_added",
            questionnaire_id=questionnaire.pk,
            created=len(result.created),
            failed=len(result.errors),
        )
        return result

    @transaction.atomic
    def remove_questions(self, question_ids: t.Iterable[int]) -> int:
        """Delete the given questions together with their advice. Returns the number of removed questions."""
        ensure_unlocked(self.questionnaire)
        ids = set(question_ids)
        questions = self.questionnaire.questions.filter(pk__in=ids)
        if questions.count() != len(ids):
            raise QuestionIntegrityError(f"Some questions do not belong to questionnaire {self.questionnaire.pk}.")
        QuestionAdvice.objects.filter(question__in=questions).delete()
        Question.objects.filter(pk__in=ids).delete()
        logger.info("questions_removed", questionnaire_id=self.questionnaire.pk, question_ids=sorted(ids))
        return len(ids)

    def toggle_access(self) -> Questionnaire:
        """Flip the questionnaire between private and public."""
        questionnaire = self.questionnaire
        ensure_unlocked(questionnaire)
        questionnaire.private = not questionnaire.private
        questionnaire.save(update_fields=["private", "updated_at"])
        logger.info("questionnaire_access_toggled", questionnaire_id=questionnaire.pk, private=questionnaire.private)
        return questionnaire

    @transaction.atomic
    def delete(self) -> None:
        """Delete the questionnaire with its questions and navigation node.

        Raises:
            ReferentialIntegrityError: if an assignment uses the questionnaire or its questions have answers.
        """
        questionnaire = self.questionnaire
        link = questionnaire.assignment_questionnaires.select_related("assignment").first()
        if link is not None:
            raise ReferentialIntegrityError(
                f"The assignment {link.assignment.name} uses this questionnaire. "
                "Are sure you want to delete the assignment?"
            )
        if questionnaire.has_answers():
            raise ReferentialIntegrityError(
                "There are responses based on this rubric, we suggest you do not delete it."
            )

        questionnaire_id = questionnaire.pk
        questionnaire.questions.all().delete()
        QuestionnaireNode.objects.filter(questionnaire=questionnaire).delete()
        questionnaire.delete()
        logger.info("questionnaire_deleted", questionnaire_id=questionnaire_id)

    def copy(self, actor: ActingUser) -> Questionnaire:
        """Duplicate the questionnaire, its questions and their advice under the actor's ownership.

        Rows are created one by one; if anything fails the rows created so far
        remain and a CopyError is raised.
        """
        original = self.questionnaire
        owner_id = actor.resolve_owner_id()
        try:
            clone = Questionnaire.objects.create(
                name=f"Copy of {original.name}",
                questionnaire_type=original.questionnaire_type,
                owner_id=owner_id,
                private=original.private,
                min_question_score=original.min_question_score,
                max_question_score=original.max_question_score,
                display_type=original.display_type,
                instruction_loc=original.instruction_loc,
            )
            for question in original.questions.prefetch_related("advices"):
                new_question = Question(
                    questionnaire=clone, **{name: getattr(question, name) for name in QUESTION_COPY_FIELDS}
                )
                if new_question.size is None and resolve_variant(question.question_type).sized_on_copy:
                    new_question.size = COPIED_QUESTION_SIZE
                new_question.save()
                for advice in question.advices.all():
                    QuestionAdvice.objects.create(question=new_question, score=advice.score, advice=advice.advice)
            register_questionnaire(clone)
        except (QuestionnaireException, NavigationException, ValidationError, DatabaseError) as e:
            logger.exception("questionnaire_copy_failed", questionnaire_id=original.pk, actor_id=actor.id)
            raise CopyError(COPY_FAILED_MESSAGE) from e
        logger.info("questionnaire_copied", questionnaire_id=original.pk, copy_id=clone.pk, owner_id=owner_id)
        return clone


def _message(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(error.messages)
    return str(error)
