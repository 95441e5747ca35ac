import pytest
from django.core.exceptions import ValidationError

from accounts.models import User

pytestmark = pytest.mark.django_db


def test_new_users_are_students(user_factory) -> None:  # type: ignore[no-untyped-def]
    user = user_factory()

    assert user.role == User.Role.STUDENT
    assert not user.is_administrator


def test_only_teaching_assistants_have_a_supervisor(instructor: User, student: User) -> None:
    """Test that a supervisor on any other role is rejected."""
    student.supervising_instructor = instructor

    with pytest.raises(ValidationError) as exc_info:
        student.full_clean()

    assert "supervising_instructor" in exc_info.value.message_dict


def test_nobody_supervises_themselves(teaching_assistant: User) -> None:
    teaching_assistant.supervising_instructor = teaching_assistant

    with pytest.raises(ValidationError):
        teaching_assistant.full_clean()


def test_instructors_queryset(instructor: User, administrator: User, student: User, teaching_assistant: User) -> None:
    """Test that only roles that own questionnaires in their own right are listed."""
    instructors = set(User.objects.instructors())

    assert instructors == {instructor, administrator}
