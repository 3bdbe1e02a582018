"""Infrastructure providers."""

# Import bases
from .avatar import AvatarProvider
from .oauth import OAuthProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .avatar import ProdAvatarProvider  # noqa: F401
from .oauth import ProdOAuthProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "AvatarProvider",
    "OAuthProvider",
    "PersistenceProvider",
    "ProdAvatarProvider",
    "ProdOAuthProvider",
    "ProdPersistenceProvider",
]
