import typing as t

from ninja_extra import ControllerBase

from accounts.identity import ActingUser
from accounts.models import User


class UserAwareController(ControllerBase):
    def user(self) -> User:
        """Get the user for this request."""
        return t.cast(User, self.context.request.user)  # type: ignore[union-attr]

    def acting_user(self) -> ActingUser:
        """Get the role-aware identity of the user for this request."""
        return ActingUser.from_user(self.user())
