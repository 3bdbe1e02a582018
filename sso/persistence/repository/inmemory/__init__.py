"""In-memory repository implementations for testing."""

from .identity_link import InMemoryIdentityLinkRepository
from .role import InMemoryRoleRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryIdentityLinkRepository",
    "InMemoryRoleRepository",
    "InMemoryUserRepository",
]
