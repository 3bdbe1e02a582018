"""Generic OAuth 2.0 client implementation.

Works with any provider exposing the authorization code flow and a JSON
userinfo endpoint. Field names differ per provider and are mapped via
``OAuthProviderSettings``.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
import logfire

from sso.adapter.error import ProviderError
from sso.config import OAuthProviderSettings
from sso.domain.service.auth_service import OAuthClient
from sso.domain.value import ExternalIdentity

# Token response keys some providers (QQ, WeChat style) use for the subject id
_TOKEN_SUBJECT_KEYS = ("openid", "uid", "user_id")


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _expires_in(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ProviderError(f"Token response has a malformed expires_in: {value!r}")


def _token_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a token response, JSON or form-encoded (QQ style)."""
    try:
        body = response.json()
    except ValueError:
        return dict(httpx.QueryParams(response.text))

    if not isinstance(body, dict):
        raise ProviderError("Token response is not an object")
    return body


class GenericOAuthClient(OAuthClient):
    """OAuth 2.0 authorization code client over httpx."""

    def __init__(
        self,
        name: str,
        settings: OAuthProviderSettings,
        redirect_uri: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize OAuth client.

        Args:
            name: Provider key, used as ``ExternalIdentity.provider``
            settings: Provider endpoints, credentials and field mapping
            redirect_uri: Callback URL registered with the provider
            timeout: HTTP timeout in seconds
        """
        self.name = name
        self.settings = settings
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.settings.scope,
            "state": state,
        }

        logfire.info(
            "OAuth authorization initiated",
            provider=self.name,
            redirect_uri=self.redirect_uri,
        )
        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Exchange the code and read the user's profile.

        Args:
            code: Authorization code from provider callback
            state: State parameter (verified by the caller)

        Returns:
            Identity reported by the provider

        Raises:
            ProviderError: If the token exchange or userinfo request fails
        """
        token = await self._exchange_code_for_token(code)

        access_token = _text(token.get("access_token"))
        if not access_token:
            raise ProviderError(f"{self.name} token response has no access_token")

        info: dict[str, Any] = {}
        if self.settings.userinfo_url:
            info = await self._get_user_info(access_token)

        open_id = _text(info.get(self.settings.id_field))
        if not open_id:
            open_id = next(
                (_text(token.get(key)) for key in _TOKEN_SUBJECT_KEYS if token.get(key)),
                None,
            )

        identity = ExternalIdentity(
            provider=self.name,
            open_id=open_id,
            username=_text(info.get(self.settings.username_field)),
            nickname=_text(info.get(self.settings.nickname_field)),
            access_token=access_token,
            refresh_token=_text(token.get("refresh_token")),
            expires_in=_expires_in(token.get("expires_in")),
            avatar=_text(info.get(self.settings.avatar_field)),
            claims=info,
        )

        logfire.info(
            "OAuth authorization completed",
            provider=self.name,
            open_id=identity.open_id,
            username=identity.username,
        )
        return identity

    async def _exchange_code_for_token(self, code: str) -> dict[str, Any]:
        """Exchange authorization code for a token response.

        Raises:
            ProviderError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.settings.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "OAuth token exchange failed",
                        provider=self.name,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"{self.name} token exchange failed: {response.status_code}"
                    )

                return _token_body(response)

        except httpx.HTTPError as e:
            logfire.error("OAuth token exchange HTTP error", provider=self.name, error=str(e))
            raise ProviderError(f"HTTP error during token exchange: {e}")

    async def _get_user_info(self, access_token: str) -> dict[str, Any]:
        """Fetch the userinfo document.

        Raises:
            ProviderError: If the request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.settings.userinfo_url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "OAuth userinfo request failed",
                        provider=self.name,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"{self.name} userinfo request failed: {response.status_code}"
                    )

                try:
                    result = response.json()
                except ValueError:
                    raise ProviderError(f"{self.name} userinfo response is not JSON")
                if not isinstance(result, dict):
                    raise ProviderError(f"{self.name} userinfo response is not an object")

                # Some providers wrap the profile in a "data" envelope
                if isinstance(result.get("data"), dict):
                    return result["data"]
                return result

        except httpx.HTTPError as e:
            logfire.error("OAuth userinfo HTTP error", provider=self.name, error=str(e))
            raise ProviderError(f"HTTP error fetching user info: {e}")


class MockOAuthClient(OAuthClient):
    """Mock OAuth client for testing.

    Returns the configured identity without making real API calls.
    """

    def __init__(self, name: str = "mock", identity: ExternalIdentity | None = None):
        """Initialize mock client.

        Args:
            name: Provider key
            identity: Identity to return from every callback
        """
        self.name = name
        self.identity = identity or ExternalIdentity(
            provider=name,
            open_id="mock-openid-123",
            username="mockuser",
            nickname="Mock User",
            access_token="mock-access-token",
            avatar="https://example.com/avatar.jpg",
            claims={"email": "mock@example.com"},
        )

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://auth.example.com/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Return the configured identity."""
        return self.identity
