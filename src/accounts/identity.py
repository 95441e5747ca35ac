"""Role-aware identity of the user performing an operation.

Services never read the request or session. Callers build an ``ActingUser``
once and pass it to every operation that resolves ownership or checks roles.
"""

from pydantic import BaseModel, ConfigDict

from .exceptions import OwnershipResolutionError
from .models import User


class ActingUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    role: User.Role
    supervisor_id: int | None = None

    @classmethod
    def from_user(cls, user: User) -> "ActingUser":
        """Build the identity from a persisted user."""
        return cls(id=user.pk, role=user.role, supervisor_id=user.supervising_instructor_id)

    @property
    def is_administrator(self) -> bool:
        return self.role in User.ADMIN_ROLES

    @property
    def is_teaching_assistant(self) -> bool:
        return self.role == User.Role.TEACHING_ASSISTANT

    def resolve_owner_id(self) -> int:
        """Return the id of the user who owns what this user creates.

        Teaching assistants create on behalf of their supervising instructor.
        """
        if not self.is_teaching_assistant:
            return self.id
        if self.supervisor_id is None:
            raise OwnershipResolutionError("This teaching assistant has no supervising instructor.")
        return self.supervisor_id
