"""In-memory user repository for testing."""

from typing import Optional

from sso.domain.error import ConflictError
from sso.domain.model.user import BasicUser
from sso.domain.repository.user import UserRepository
from sso.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Stores copies so callers mutating a returned user don't change the
    stored record until they save it, like a real database.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, BasicUser] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[BasicUser]:
        """Find a user by ID."""
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def find_by_name(self, name: str) -> Optional[BasicUser]:
        """Find a user by login name."""
        for user in self._users.values():
            if user.name == name:
                return user.model_copy(deep=True)
        return None

    async def add(self, user: BasicUser) -> BasicUser:
        """Insert a new user, rejecting duplicate names."""
        if user.id in self._users or self._name_taken(user):
            raise ConflictError("User", user.name)
        self._users[user.id] = user.model_copy(deep=True)
        return user

    async def save(self, user: BasicUser) -> BasicUser:
        """Save or update a user."""
        if self._name_taken(user):
            raise ConflictError("User", user.name)
        self._users[user.id] = user.model_copy(deep=True)
        return user

    def count(self) -> int:
        """Number of stored users."""
        return len(self._users)

    def _name_taken(self, user: BasicUser) -> bool:
        return any(
            existing.name == user.name and existing.id != user.id
            for existing in self._users.values()
        )
