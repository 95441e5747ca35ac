from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.identity import ActingUser
from accounts.models import User

from .models import Questionnaire


def can_edit(actor: ActingUser, questionnaire: Questionnaire) -> bool:
    """Administrators, the owning instructor, and teaching assistants supervised by the owner may edit."""
    if actor.is_administrator:
        return True
    if actor.role == User.Role.INSTRUCTOR:
        return questionnaire.owner_id == actor.id
    if actor.is_teaching_assistant:
        return actor.supervisor_id is not None and questionnaire.owner_id == actor.supervisor_id
    return False


class HasRole(BasePermission):
    """Any user holding one of the platform roles."""

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check the role of the authenticated user."""
        return getattr(request.user, "role", None) in User.Role.values


class CanEditQuestionnaire(HasRole):
    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: Questionnaire) -> bool:
        """Can edit questionnaire."""
        return can_edit(ActingUser.from_user(request.user), obj)  # type: ignore[arg-type]


def can_edit_quiz(actor: ActingUser, quiz: Questionnaire) -> bool:
    """Quiz authors may edit their own quizzes on top of the usual editors."""
    return quiz.owner_id == actor.id or can_edit(actor, quiz)


class CanEditQuiz(HasRole):
    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: Questionnaire) -> bool:
        """Can edit quiz."""
        return can_edit_quiz(ActingUser.from_user(request.user), obj)  # type: ignore[arg-type]
