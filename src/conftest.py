"""Fixtures shared by the tests of every app."""

import secrets
import string
import typing as t

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.identity import ActingUser
from accounts.models import User
from assignments.models import Assignment
from navigation.models import TreeFolder
from questionnaires.models import Questionnaire


@pytest.fixture(autouse=True)
def clear_cache() -> t.Iterator[None]:
    """Throttle counters live in the cache; start every test with a clean one."""
    cache.clear()
    yield
    cache.clear()


class UserFactory:
    """Factory for creating User instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> User:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@example.test")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> User:
        return self.create_user(**kwargs)


@pytest.fixture
def user_factory() -> UserFactory:
    return UserFactory()


@pytest.fixture
def administrator(user_factory: UserFactory) -> User:
    return user_factory(role=User.Role.ADMINISTRATOR)


@pytest.fixture
def instructor(user_factory: UserFactory) -> User:
    return user_factory(role=User.Role.INSTRUCTOR)


@pytest.fixture
def other_instructor(user_factory: UserFactory) -> User:
    return user_factory(role=User.Role.INSTRUCTOR)


@pytest.fixture
def teaching_assistant(user_factory: UserFactory, instructor: User) -> User:
    """A teaching assistant supervised by ``instructor``."""
    return user_factory(role=User.Role.TEACHING_ASSISTANT, supervising_instructor=instructor)


@pytest.fixture
def student(user_factory: UserFactory) -> User:
    return user_factory(role=User.Role.STUDENT)


@pytest.fixture
def instructor_actor(instructor: User) -> ActingUser:
    return ActingUser.from_user(instructor)


@pytest.fixture
def tree_folders() -> dict[str, TreeFolder]:
    """One navigation folder per questionnaire display category."""
    return {label: TreeFolder.objects.create(name=str(label)) for label in Questionnaire.Type.labels}


@pytest.fixture
def questionnaire(instructor: User) -> Questionnaire:
    """A review rubric owned by ``instructor``."""
    return Questionnaire.objects.create(
        name="Design Review",
        questionnaire_type=Questionnaire.Type.REVIEW,
        owner=instructor,
        display_type="Review",
    )


@pytest.fixture
def assignment(instructor: User) -> Assignment:
    return Assignment.objects.create(name="Program 1", instructor=instructor)


@pytest.fixture
def quiz_assignment(instructor: User) -> Assignment:
    """An assignment whose authors write two-question quizzes."""
    return Assignment.objects.create(name="Program 2", instructor=instructor, require_quiz=True, num_quiz_questions=2)


def _client_for(user: User) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def instructor_client(instructor: User) -> Client:
    """API client for ``instructor``."""
    return _client_for(instructor)


@pytest.fixture
def other_instructor_client(other_instructor: User) -> Client:
    return _client_for(other_instructor)


@pytest.fixture
def teaching_assistant_client(teaching_assistant: User) -> Client:
    return _client_for(teaching_assistant)


@pytest.fixture
def administrator_client(administrator: User) -> Client:
    return _client_for(administrator)


@pytest.fixture
def student_client(student: User) -> Client:
    return _client_for(student)
