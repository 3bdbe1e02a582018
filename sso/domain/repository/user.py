"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.model.user import BasicUser
from sso.domain.value import UserId


class UserRepository(ABC):
    """Repository for local user accounts.

    Implementations must enforce uniqueness of ``name`` and report a
    violation as ``ConflictError`` instead of silently inserting a
    duplicate.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[BasicUser]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[BasicUser]:
        """Find a user by login name.

        Args:
            name: The user's unique login name

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, user: BasicUser) -> BasicUser:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The inserted user

        Raises:
            ConflictError: If the name is already taken
        """
        pass

    @abstractmethod
    async def save(self, user: BasicUser) -> BasicUser:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            ConflictError: If the name is taken by another user
        """
        pass
