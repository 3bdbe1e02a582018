"""In-memory role repository for testing."""

from typing import Optional

from sso.domain.error import ConflictError
from sso.domain.model.role import Role
from sso.domain.repository.role import RoleRepository
from sso.domain.value import RoleId


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[RoleId, Role] = {}
        self._next_id = 1

    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by ID."""
        return self._roles.get(role_id)

    async def find_by_name(self, name: str) -> Optional[Role]:
        """Find a role by name."""
        for role in self._roles.values():
            if role.name == name:
                return role
        return None

    async def add(self, name: str) -> Role:
        """Insert a role with the next sequential ID."""
        if await self.find_by_name(name):
            raise ConflictError("Role", name)

        role = Role(id=RoleId(self._next_id), name=name)
        self._roles[role.id] = role
        self._next_id += 1
        return role
