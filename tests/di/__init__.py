"""Mock providers for testing."""

from .avatar import MockAvatarProvider
from .oauth import (
    MOCK_CLIENT_ID,
    MOCK_CLIENT_SECRET,
    MOCK_PROVIDER,
    MOCK_REDIRECT_URI,
    MOCK_REDIRECT_URI_WITH_QUERY,
    MockOAuthProvider,
)
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MOCK_CLIENT_ID",
    "MOCK_CLIENT_SECRET",
    "MOCK_PROVIDER",
    "MOCK_REDIRECT_URI",
    "MOCK_REDIRECT_URI_WITH_QUERY",
    "MockAvatarProvider",
    "MockOAuthProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
