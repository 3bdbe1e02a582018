"""Role domain service."""

import logfire

from sso.domain.error import ConflictError
from sso.domain.model.role import Role
from sso.domain.repository import RoleRepository
from sso.domain.value import NO_ROLE, ExternalIdentity, RoleId

from .base import Service


def _parse_role_id(value: str) -> RoleId:
    try:
        return RoleId(int(value.strip()))
    except ValueError:
        return NO_ROLE


class RoleService(Service):
    """Maps provider claims to local roles."""

    def __init__(self, role_repository: RoleRepository) -> None:
        """Initialize role service.

        Args:
            role_repository: Role repository
        """
        self.role_repository = role_repository

    async def resolve_role(
        self, identity: ExternalIdentity, allow_create: bool
    ) -> RoleId:
        """Resolve the role an identity's claims ask for.

        Precedence:
        1. ``RoleName`` claim naming an existing role -> that role's id.
           When the role is missing and ``allow_create`` is set, it is created.
        2. ``RoleID`` claim parsed as an integer, returned as-is.
        3. Otherwise 0 (no role).

        Args:
            identity: External identity carrying the claims
            allow_create: Create unknown roles named by ``RoleName``

        Returns:
            Role ID, or 0 if nothing resolvable
        """
        with logfire.span(
            "role_service.resolve_role",
            provider=identity.provider,
            allow_create=allow_create,
        ):
            role_name = identity.claim("RoleName")
            if role_name:
                role = await self.role_repository.find_by_name(role_name)
                if role:
                    logfire.info("Role resolved by name", name=role_name, role_id=role.id)
                    return role.id

                if allow_create:
                    role = await self.get_or_create(role_name)
                    return role.id

            raw_id = identity.claim("RoleID")
            if raw_id is not None:
                role_id = _parse_role_id(raw_id)
                logfire.info("Role resolved by id claim", role_id=role_id)
                return role_id

            logfire.info("No role claim present", provider=identity.provider)
            return NO_ROLE

    async def get_or_create(self, name: str) -> Role:
        """Get a role by name, creating it if missing.

        A concurrent creator winning the insert is read back instead of
        producing a duplicate.

        Args:
            name: Role name

        Returns:
            Existing or newly created role
        """
        with logfire.span("role_service.get_or_create", name=name):
            existing = await self.role_repository.find_by_name(name)
            if existing:
                return existing

            try:
                role = await self.role_repository.add(name)
            except ConflictError:
                role = await self.role_repository.find_by_name(name)
                if role is None:
                    raise
                logfire.warn("Role creation lost race", name=name, role_id=role.id)
                return role

            logfire.info("Role created", name=name, role_id=role.id)
            return role

    async def get_role_name(self, role_id: RoleId) -> str | None:
        """Get a role's name.

        Args:
            role_id: Role ID

        Returns:
            Role name, or None when the role is unset or unknown
        """
        if role_id <= 0:
            return None
        role = await self.role_repository.find_by_id(role_id)
        return role.name if role else None
