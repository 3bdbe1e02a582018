"""Single-sign-on use cases."""

from .access_token import GetAccessTokenUseCase
from .authorize import AuthorizeUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .session import GetSessionUseCase
from .user_info import GetUserInfoUseCase

__all__ = [
    "AuthorizeUseCase",
    "GetAccessTokenUseCase",
    "GetSessionUseCase",
    "GetUserInfoUseCase",
    "LoginUseCase",
    "LogoutUseCase",
]
