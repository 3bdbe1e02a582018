"""User domain service."""

from uuid import uuid4

import bcrypt
import logfire

from sso.domain.error import ConflictError, NotFoundError
from sso.domain.model.user import BasicUser, ExtendedUser
from sso.domain.repository import UserRepository
from sso.domain.value import RoleId, UserId

from .base import Service

# bcrypt cost factor for password hashing
_BCRYPT_ROUNDS = 12


class UserService(Service):
    """Account provider: look up, register and save local users."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> BasicUser:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        user = await self.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def find_by_id(self, user_id: UserId) -> BasicUser | None:
        """Find user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.find_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user:
                logfire.info("User found", user_id=str(user_id), name=user.name)
            else:
                logfire.warn("User not found", user_id=str(user_id))
            return user

    async def find_by_name(self, name: str) -> BasicUser | None:
        """Find user by login name.

        Args:
            name: Login name

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.find_by_name", name=name):
            user = await self.user_repository.find_by_name(name)
            logfire.info("User lookup by name", name=name, found=user is not None)
            return user

    async def register(
        self, name: str, password: str, role_id: RoleId, enable: bool
    ) -> BasicUser:
        """Register a new local account.

        Name uniqueness is enforced by the repository. When a concurrent
        registration wins the race for ``name``, the winner is returned
        instead of failing.

        Args:
            name: Login name
            password: Plain-text password, hashed before storage
            role_id: Initial role (0 for none)
            enable: Whether the account can sign in

        Returns:
            The registered (or concurrently registered) user

        Raises:
            ConflictError: If the name is taken but the owner can't be read back
        """
        with logfire.span("user_service.register", name=name, role_id=role_id):
            password_hash = bcrypt.hashpw(
                password.encode(), bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)
            ).decode()
            user = ExtendedUser(
                id=UserId(uuid4()),
                name=name,
                enable=enable,
                role_id=role_id,
                password_hash=password_hash,
            )
            try:
                saved = await self.user_repository.add(user)
            except ConflictError:
                existing = await self.user_repository.find_by_name(name)
                if existing is None:
                    raise
                logfire.warn(
                    "Registration lost race, using existing account",
                    name=name,
                    user_id=str(existing.id),
                )
                return existing

            logfire.info("User registered", user_id=str(saved.id), name=saved.name)
            return saved

    async def save(self, user: BasicUser) -> BasicUser:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span("user_service.save", user_id=str(user.id), name=user.name):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), name=saved.name)
            return saved
