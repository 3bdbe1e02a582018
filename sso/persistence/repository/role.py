"""Role repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.error import ConflictError
from sso.domain.model.role import Role
from sso.domain.repository.role import RoleRepository
from sso.domain.value import RoleId
from sso.persistence.mappers import row_to_role
from sso.persistence.tables import roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by ID."""
        stmt = select(roles_table).where(roles_table.c.id == role_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_role(dict(row)) if row else None

    async def find_by_name(self, name: str) -> Optional[Role]:
        """Find a role by name."""
        stmt = select(roles_table).where(roles_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_role(dict(row)) if row else None

    async def add(self, name: str) -> Role:
        """Insert a role; the database assigns its ID.

        Raises:
            ConflictError: If the name is already taken
        """
        stmt = roles_table.insert().values(name=name).returning(roles_table)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().one()
        except IntegrityError:
            raise ConflictError("Role", name)

        return row_to_role(dict(row))
