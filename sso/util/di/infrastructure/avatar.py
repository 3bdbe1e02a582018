"""Avatar infrastructure providers."""

from dishka import Scope, provide

from sso.adapter.avatar import HttpxAvatarClient
from sso.domain.service.avatar_service import AvatarClient
from sso.util.di.base import ProviderBase


class AvatarProvider(ProviderBase):
    """Avatar component base."""

    __mock_component__ = "avatar"


class ProdAvatarProvider(AvatarProvider):
    """Production avatar provider downloading over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_avatar_client(self) -> AvatarClient:
        """Provide avatar download client."""
        return HttpxAvatarClient()
