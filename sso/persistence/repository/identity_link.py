"""IdentityLink repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository.identity_link import IdentityLinkRepository
from sso.persistence.mappers import identity_link_to_dict, row_to_identity_link
from sso.persistence.tables import identity_links_table

# Columns never touched when an existing row is updated
_IMMUTABLE_COLUMNS = {"id", "provider", "open_id", "created_at"}


class PostgresIdentityLinkRepository(IdentityLinkRepository):
    """PostgreSQL implementation of IdentityLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: str, open_id: str
    ) -> Optional[IdentityLink]:
        """Get link by provider and external subject id."""
        stmt = select(identity_links_table).where(
            identity_links_table.c.provider == provider,
            identity_links_table.c.open_id == open_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity_link(dict(row))

    async def save(self, link: IdentityLink) -> IdentityLink:
        """Upsert link on (provider, open_id).

        A concurrent first login for the same identity may have inserted
        the row already; that row is updated and its ID returned.
        """
        link_dict = identity_link_to_dict(link)

        stmt = insert(identity_links_table).values(**link_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                identity_links_table.c.provider,
                identity_links_table.c.open_id,
            ],
            set_={
                key: stmt.excluded[key]
                for key in link_dict
                if key not in _IMMUTABLE_COLUMNS
            },
        ).returning(identity_links_table)

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()

        return row_to_identity_link(dict(row))
