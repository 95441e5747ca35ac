import typing as t

from django.contrib.auth.models import AbstractUser, UserManager
from django.core.exceptions import ValidationError
from django.db import models


class UserQueryset(models.QuerySet["User"]):
    """Queryset for User."""

    def instructors(self) -> t.Self:
        """Users who can own questionnaires in their own right."""
        return self.filter(role__in=User.OWNER_ROLES)


class UserManagerWithRoles(UserManager["User"]):
    def get_queryset(self) -> UserQueryset:
        """Get queryset for User."""
        return UserQueryset(self.model)

    def instructors(self) -> UserQueryset:
        """Users who can own questionnaires in their own right."""
        return self.get_queryset().instructors()


class User(AbstractUser):
    class Role(models.TextChoices):
        SUPER_ADMINISTRATOR = "Super-Administrator"
        ADMINISTRATOR = "Administrator"
        INSTRUCTOR = "Instructor"
        TEACHING_ASSISTANT = "Teaching Assistant"
        STUDENT = "Student"

    ADMIN_ROLES = (Role.SUPER_ADMINISTRATOR, Role.ADMINISTRATOR)
    OWNER_ROLES = (Role.SUPER_ADMINISTRATOR, Role.ADMINISTRATOR, Role.INSTRUCTOR)

    role = models.CharField(choices=Role.choices, max_length=32, default=Role.STUDENT, db_index=True)
    supervising_instructor = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="teaching_assistants",
        help_text="The instructor a teaching assistant works for. Owns whatever the assistant creates.",
    )

    objects = UserManagerWithRoles()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    def clean(self) -> None:
        """Only teaching assistants report to a supervising instructor."""
        super().clean()
        if self.supervising_instructor_id and self.role != self.Role.TEACHING_ASSISTANT:
            raise ValidationError({"supervising_instructor": "Only teaching assistants have a supervising instructor."})
        if self.supervising_instructor_id and self.supervising_instructor_id == self.pk:
            raise ValidationError({"supervising_instructor": "A user cannot supervise themselves."})

    @property
    def is_administrator(self) -> bool:
        return self.role in self.ADMIN_ROLES
