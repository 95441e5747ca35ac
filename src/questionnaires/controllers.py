import typing as t

from django.db.models import QuerySet
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from ninja.files import UploadedFile
from ninja.params import File
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from assignments.models import Assignment
from common.controllers import UserAwareController
from common.schema import DetailResponse, ValidationErrorResponse
from common.throttling import ImportThrottle, UserDefaultThrottle, WriteThrottle

from . import csv_exchange
from . import schema as questionnaire_schema
from .exceptions import CsvFormatError
from .models import Questionnaire
from .permissions import CanEditQuestionnaire, CanEditQuiz, HasRole
from .service import BatchResult, QuestionnaireService, QuizService


@api_controller(
    "/questionnaires",
    auth=JWTAuth(),
    tags=["Questionnaires"],
    permissions=[HasRole],
    throttle=WriteThrottle(),
)
class QuestionnaireController(UserAwareController):
    def get_queryset(self) -> QuerySet[Questionnaire]:
        """Questionnaires visible to the user."""
        return Questionnaire.objects.for_user(self.acting_user()).with_questions()

    def get_editable(self, questionnaire_id: int) -> Questionnaire:
        """Fetch a questionnaire and check that the user may edit it."""
        return t.cast(Questionnaire, self.get_object_or_exception(Questionnaire, pk=questionnaire_id))

    @route.post(
        "/",
        url_name="create_questionnaire",
        response={200: questionnaire_schema.QuestionnaireSchema, 400: ValidationErrorResponse | DetailResponse},
    )
    def create_questionnaire(self, payload: questionnaire_schema.QuestionnaireCreateSchema) -> Questionnaire:
        """Create a rubric or survey and file it under the folder of its type."""
        return QuestionnaireService.create_questionnaire(self.acting_user(), payload)

    @route.get(
        "/",
        url_name="list_questionnaires",
        response=PaginatedResponseSchema[questionnaire_schema.QuestionnaireInListSchema],
        throttle=UserDefaultThrottle(),
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["name", "display_type"])
    def list_questionnaires(self) -> QuerySet[Questionnaire]:
        """List public questionnaires and the ones you own."""
        return Questionnaire.objects.for_user(self.acting_user())

    @route.get(
        "/{questionnaire_id}",
        url_name="get_questionnaire",
        response=questionnaire_schema.QuestionnaireSchema,
        throttle=UserDefaultThrottle(),
    )
    def get_questionnaire(self, questionnaire_id: int) -> Questionnaire:
        """Get a questionnaire with its questions."""
        return t.cast(Questionnaire, self.get_object_or_exception(self.get_queryset(), pk=questionnaire_id))

    @route.put(
        "/{questionnaire_id}",
        url_name="update_questionnaire",
        response={
            200: questionnaire_schema.QuestionnaireSchema,
            400: ValidationErrorResponse | DetailResponse,
            409: DetailResponse,
        },
        permissions=[CanEditQuestionnaire],
    )
    def update_questionnaire(
        self, questionnaire_id: int, payload: questionnaire_schema.QuestionnaireUpdateSchema
    ) -> Questionnaire:
        """Update the questionnaire and its questions. Questions updated with a blank text are removed."""
        questionnaire = self.get_editable(questionnaire_id)
        return QuestionnaireService(questionnaire.pk).update(payload)

    @route.delete(
        "/{questionnaire_id}",
        url_name="delete_questionnaire",
        response={204: None, 409: DetailResponse},
        permissions=[CanEditQuestionnaire],
    )
    def delete_questionnaire(self, questionnaire_id: int) -> tuple[int, None]:
        """Delete a questionnaire that no assignment uses and nobody answered."""
        questionnaire = self.get_editable(questionnaire_id)
        QuestionnaireService(questionnaire.pk).delete()
        return 204, None

    @route.post(
        "/{questionnaire_id}/copy",
        url_name="copy_questionnaire",
        response={200: questionnaire_schema.QuestionnaireSchema, 400: DetailResponse},
    )
    def copy_questionnaire(self, questionnaire_id: int) -> Questionnaire:
        """Copy a questionnaire with its questions and advice into your own questionnaires."""
        questionnaire = t.cast(Questionnaire, self.get_object_or_exception(self.get_queryset(), pk=questionnaire_id))
        return QuestionnaireService(questionnaire.pk).copy(self.acting_user())

    @route.post(
        "/{questionnaire_id}/toggle-access",
        url_name="toggle_questionnaire_access",
        response=questionnaire_schema.QuestionnaireInListSchema,
        permissions=[CanEditQuestionnaire],
    )
    def toggle_access(self, questionnaire_id: int) -> Questionnaire:
        """Switch the questionnaire between private and public."""
        questionnaire = self.get_editable(questionnaire_id)
        return QuestionnaireService(questionnaire.pk).toggle_access()

    @route.post(
        "/{questionnaire_id}/questions",
        url_name="add_questions",
        response={200: questionnaire_schema.BatchResultSchema, 409: DetailResponse},
        permissions=[CanEditQuestionnaire],
    )
    def add_questions(self, questionnaire_id: int, payload: questionnaire_schema.QuestionBatchSchema) -> BatchResult:
        """Add empty questions of the given types.

        Questions are added one by one; the response lists the created questions and the items that failed.
        """
        questionnaire = self.get_editable(questionnaire_id)
        return QuestionnaireService(questionnaire.pk).add_new_questions(payload.questions)

    @route.post(
        "/{questionnaire_id}/questions/remove",
        url_name="remove_questions",
        response={200: questionnaire_schema.QuestionnaireSchema, 400: DetailResponse, 409: DetailResponse},
        permissions=[CanEditQuestionnaire],
    )
    def remove_questions(
        self, questionnaire_id: int, payload: questionnaire_schema.RemoveQuestionsSchema
    ) -> Questionnaire:
        """Remove questions and their advice from the questionnaire."""
        questionnaire = self.get_editable(questionnaire_id)
        service = QuestionnaireService(questionnaire.pk)
        service.remove_questions(payload.ids)
        return service.questionnaire

    @route.get(
        "/{questionnaire_id}/export",
        url_name="export_questionnaire",
        response={200: None},
        throttle=UserDefaultThrottle(),
    )
    def export_questionnaire(self, questionnaire_id: int) -> HttpResponse:
        """Download the questions as CSV."""
        questionnaire = t.cast(Questionnaire, self.get_object_or_exception(self.get_queryset(), pk=questionnaire_id))
        response = HttpResponse(content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="questionnaire_{questionnaire.pk}.csv"'
        csv_exchange.export_questions(questionnaire, response)
        return response

    @route.post(
        "/{questionnaire_id}/import",
        url_name="import_questionnaire",
        response={200: questionnaire_schema.BatchResultSchema, 400: DetailResponse, 409: DetailResponse},
        permissions=[CanEditQuestionnaire],
        throttle=ImportThrottle(),
    )
    def import_questionnaire(self, questionnaire_id: int, file: File[UploadedFile]) -> BatchResult:
        """Add questions from a CSV file with the columns of the export."""
        questionnaire = self.get_editable(questionnaire_id)
        try:
            content = file.read().decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CsvFormatError("The CSV file must be UTF-8 encoded.") from e
        return csv_exchange.import_questions(questionnaire, content)

    @route.get(
        "/{questionnaire_id}/max-score",
        url_name="questionnaire_max_score",
        response=questionnaire_schema.MaxScoreSchema,
        throttle=UserDefaultThrottle(),
    )
    def max_score(self, questionnaire_id: int) -> questionnaire_schema.MaxScoreSchema:
        """The highest total score the questionnaire can give."""
        questionnaire = t.cast(Questionnaire, self.get_object_or_exception(self.get_queryset(), pk=questionnaire_id))
        return questionnaire_schema.MaxScoreSchema(max_possible_score=questionnaire.max_possible_score())


@api_controller(
    "/quizzes",
    auth=JWTAuth(),
    tags=["Quizzes"],
    permissions=[HasRole],
    throttle=WriteThrottle(),
)
class QuizController(UserAwareController):
    def get_queryset(self) -> QuerySet[Questionnaire]:
        """Quizzes visible to the user."""
        return (
            Questionnaire.objects.for_user(self.acting_user())
            .filter(questionnaire_type=Questionnaire.Type.QUIZ)
            .with_questions()
        )

    @route.post(
        "/assignments/{assignment_id}",
        url_name="create_quiz",
        response={200: questionnaire_schema.QuizSchema, 400: DetailResponse | ValidationErrorResponse},
    )
    def create_quiz(self, assignment_id: int, payload: questionnaire_schema.QuizCreateSchema) -> Questionnaire:
        """Write a quiz for an assignment.

        The submission must contain as many complete questions as the assignment asks for.
        """
        assignment = get_object_or_404(Assignment, pk=assignment_id)
        return QuizService.create_quiz(self.acting_user(), assignment, payload)

    @route.get(
        "/{quiz_id}",
        url_name="get_quiz",
        response=questionnaire_schema.QuizSchema,
        throttle=UserDefaultThrottle(),
    )
    def get_quiz(self, quiz_id: int) -> Questionnaire:
        """Get a quiz with its choices and whether it can still be edited."""
        return t.cast(Questionnaire, self.get_object_or_exception(self.get_queryset(), pk=quiz_id))

    @route.put(
        "/{quiz_id}",
        url_name="update_quiz",
        response={200: questionnaire_schema.QuizSchema, 400: DetailResponse, 409: DetailResponse},
        permissions=[CanEditQuiz],
    )
    def update_quiz(self, quiz_id: int, payload: questionnaire_schema.QuizUpdateSchema) -> Questionnaire:
        """Edit a quiz nobody has taken yet."""
        quiz = t.cast(
            Questionnaire,
            self.get_object_or_exception(Questionnaire, pk=quiz_id, questionnaire_type=Questionnaire.Type.QUIZ),
        )
        return QuizService(quiz.pk).update_quiz(payload)
