"""Domain services."""

from .account_link_service import AccountLinkService, fallback_account_name
from .auth_service import AuthService, OAuthClient, OAuthServer
from .avatar_service import AVATAR_FETCH_TIMEOUT, AvatarClient, AvatarService
from .base import Service
from .identity_link_service import IdentityLinkService
from .jwt_service import JWTService
from .profile_service import ProfileService
from .role_service import RoleService
from .user_service import UserService

__all__ = [
    "AVATAR_FETCH_TIMEOUT",
    "AccountLinkService",
    "AuthService",
    "AvatarClient",
    "AvatarService",
    "IdentityLinkService",
    "JWTService",
    "OAuthClient",
    "OAuthServer",
    "ProfileService",
    "RoleService",
    "Service",
    "UserService",
    "fallback_account_name",
]
