"""Get access token use case (identity provider role)."""

import logfire
from pydantic import BaseModel

from sso.domain.service import OAuthServer

# Scope granted to every downstream token
TOKEN_SCOPE = "basic,UserInfo"


class GetAccessTokenRequest(BaseModel):
    """Code exchange request, authenticated with the client's credentials."""

    code: str
    client_id: str
    client_secret: str
    redirect_uri: str | None = None


class GetAccessTokenResponse(BaseModel):
    """Code exchange response."""

    access_token: str
    expires_in: int
    scope: str


class GetAccessTokenUseCase:
    """Use case exchanging an authorization code for an access token."""

    def __init__(self, oauth_server: OAuthServer) -> None:
        """Initialize get access token use case.

        Args:
            oauth_server: OAuth server
        """
        self.oauth_server = oauth_server

    async def execute(self, request: GetAccessTokenRequest) -> GetAccessTokenResponse:
        """Exchange the code.

        Raises:
            TokenError: If the client credentials are wrong, or the code is
                invalid, expired, already used or issued to another client
        """
        with logfire.span("get_access_token", client_id=request.client_id):
            token = self.oauth_server.get_token(
                request.code,
                request.client_id,
                request.client_secret,
                request.redirect_uri,
            )
            return GetAccessTokenResponse(
                access_token=token,
                expires_in=self.oauth_server.expire,
                scope=TOKEN_SCOPE,
            )
