"""Authorize use case (identity provider role)."""

from urllib.parse import urlencode

import logfire
from pydantic import BaseModel

from sso.domain.model.user import BasicUser
from sso.domain.service import OAuthServer


class AuthorizeRequest(BaseModel):
    """Authorization request from a downstream application."""

    client_id: str
    redirect_uri: str
    state: str | None = None


class AuthorizeResponse(BaseModel):
    """Where to send the browser with the issued code."""

    redirect_url: str


class AuthorizeUseCase:
    """Use case issuing an authorization code to a signed-in user."""

    def __init__(self, oauth_server: OAuthServer) -> None:
        """Initialize authorize use case.

        Args:
            oauth_server: OAuth server issuing codes
        """
        self.oauth_server = oauth_server

    def check(self, request: AuthorizeRequest) -> None:
        """Reject an unregistered client or redirect URI.

        Raises:
            ClientError: If the client or redirect URI is not registered
        """
        self.oauth_server.check_client(request.client_id, request.redirect_uri)

    async def execute(
        self, request: AuthorizeRequest, user: BasicUser
    ) -> AuthorizeResponse:
        """Issue a code for ``user`` and build the client redirect.

        Args:
            request: Client id, redirect URI and state
            user: Signed-in user

        Returns:
            Client redirect URL carrying ``code`` and ``state``

        Raises:
            ClientError: If the client or redirect URI is not registered
        """
        with logfire.span(
            "authorize", user_id=str(user.id), client_id=request.client_id
        ):
            code = self.oauth_server.issue_code(
                user.id, request.client_id, request.redirect_uri
            )
            params = {"code": code}
            if request.state:
                params["state"] = request.state

            separator = "&" if "?" in request.redirect_uri else "?"
            return AuthorizeResponse(
                redirect_url=f"{request.redirect_uri}{separator}{urlencode(params)}"
            )
