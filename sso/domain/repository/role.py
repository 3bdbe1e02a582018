"""Role repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.model.role import Role
from sso.domain.value import RoleId


class RoleRepository(ABC):
    """Repository for roles. Role names are unique."""

    @abstractmethod
    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by ID.

        Args:
            role_id: The role's identifier

        Returns:
            The role if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Role]:
        """Find a role by name.

        Args:
            name: The role's unique name

        Returns:
            The role if found, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, name: str) -> Role:
        """Insert a new role and assign its ID.

        Args:
            name: The role name

        Returns:
            The created role

        Raises:
            ConflictError: If a role with that name already exists
        """
        pass
