"""User repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.error import ConflictError
from sso.domain.model.user import BasicUser
from sso.domain.repository.user import UserRepository
from sso.domain.value import UserId
from sso.persistence.mappers import row_to_user, user_to_dict
from sso.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Writes run inside a SAVEPOINT so a unique violation on ``name`` can be
    reported as ``ConflictError`` without aborting the request transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[BasicUser]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user(dict(row))

    async def find_by_name(self, name: str) -> Optional[BasicUser]:
        """Find a user by login name."""
        stmt = select(users_table).where(users_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user(dict(row))

    async def add(self, user: BasicUser) -> BasicUser:
        """Insert a new user.

        Raises:
            ConflictError: If the name (or ID) is already taken
        """
        stmt = users_table.insert().values(**user_to_dict(user))
        await self._write(stmt, user.name)
        return user

    async def save(self, user: BasicUser) -> BasicUser:
        """Save user to database (create or update).

        Raises:
            ConflictError: If the name is taken by another user
        """
        user_dict = user_to_dict(user)

        existing = await self.session.execute(
            select(users_table.c.id).where(users_table.c.id == user.id)
        )
        if existing.first():
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self._write(stmt, user.name)
        return user

    async def _write(self, stmt, name: str) -> None:
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError:
            raise ConflictError("User", name)
