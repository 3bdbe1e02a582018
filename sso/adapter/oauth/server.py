"""JWT-backed OAuth server.

Acts as an identity provider for downstream applications. Codes and
access tokens are signed JWTs, so no token table is needed. A code names
the client and redirect URI it was issued for, and only that client,
authenticated with its secret, can exchange it.
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import logfire

from sso.adapter.error import ClientError, TokenError
from sso.config import OAuthServerSettings
from sso.domain.service.auth_service import OAuthServer
from sso.domain.value import UserId
from sso.util.jwt import JWTError, create_token, decode_token

_CODE = "code"
_ACCESS = "access"


class JWTOAuthServer(OAuthServer):
    """OAuth server issuing JWT codes and access tokens."""

    def __init__(self, settings: OAuthServerSettings) -> None:
        """Initialize OAuth server.

        Args:
            settings: Signing secret, lifetimes and registered clients
        """
        self.settings = settings
        # Exchanged code ids mapped to their expiry timestamp
        self._used_codes: dict[str, float] = {}

    @property
    def expire(self) -> int:
        return self.settings.token_expiry_seconds

    def check_client(self, client_id: str, redirect_uri: str) -> None:
        client = self.settings.clients.get(client_id)
        if client is None:
            logfire.warn("Unknown OAuth client", client_id=client_id)
            raise ClientError(f"Unknown client: {client_id}")

        if redirect_uri not in client.redirect_uris:
            logfire.warn(
                "Unregistered redirect URI",
                client_id=client_id,
                redirect_uri=redirect_uri,
            )
            raise ClientError(f"Redirect URI not registered for {client_id}")

    def issue_code(self, user_id: UserId, client_id: str, redirect_uri: str) -> str:
        self.check_client(client_id, redirect_uri)

        code = create_token(
            {
                "sub": str(user_id),
                "typ": _CODE,
                "jti": secrets.token_hex(8),
                "cid": client_id,
                "ruri": redirect_uri,
            },
            self.settings.jwt_secret,
            self.settings.jwt_algorithm,
            timedelta(seconds=self.settings.code_expiry_seconds),
        )
        logfire.info(
            "Authorization code issued", user_id=str(user_id), client_id=client_id
        )
        return code

    def get_token(
        self,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str | None = None,
    ) -> str:
        self._authenticate(client_id, client_secret)
        payload = self._decode(code, _CODE)

        if payload.get("cid") != client_id:
            logfire.warn(
                "Authorization code presented by another client",
                client_id=client_id,
                issued_to=payload.get("cid"),
            )
            raise TokenError("Authorization code was issued to another client")
        if redirect_uri is not None and payload.get("ruri") != redirect_uri:
            raise TokenError("Redirect URI does not match the authorization request")

        self._prune_used_codes()
        jti = payload.get("jti", "")
        if jti in self._used_codes:
            logfire.warn("Authorization code reused", user_id=payload["sub"])
            raise TokenError("Authorization code already used")
        self._used_codes[jti] = float(payload["exp"])

        token = create_token(
            {"sub": payload["sub"], "typ": _ACCESS, "cid": client_id},
            self.settings.jwt_secret,
            self.settings.jwt_algorithm,
            timedelta(seconds=self.expire),
        )
        logfire.info(
            "Access token issued",
            user_id=payload["sub"],
            client_id=client_id,
            expires_in=self.expire,
        )
        return token

    def get_user_id(self, token: str) -> UserId:
        payload = self._decode(token, _ACCESS)
        return UserId(UUID(payload["sub"]))

    def _authenticate(self, client_id: str, client_secret: str) -> None:
        client = self.settings.clients.get(client_id)
        if client is None or not secrets.compare_digest(
            client.client_secret.encode(), client_secret.encode()
        ):
            logfire.warn("OAuth client authentication failed", client_id=client_id)
            raise TokenError("Invalid client credentials")

    def _prune_used_codes(self) -> None:
        # Expired codes are rejected on decode, their ids are no longer needed
        now = datetime.now(timezone.utc).timestamp()
        expired = [jti for jti, exp in self._used_codes.items() if exp <= now]
        for jti in expired:
            del self._used_codes[jti]

    def _decode(self, token: str, kind: str) -> dict:
        try:
            payload = decode_token(
                token, self.settings.jwt_secret, self.settings.jwt_algorithm
            )
        except JWTError as e:
            raise TokenError(str(e))

        if payload.get("typ") != kind or not payload.get("sub"):
            raise TokenError(f"Not a valid {kind} token")

        try:
            UUID(payload["sub"])
        except ValueError:
            raise TokenError(f"Not a valid {kind} token")

        return payload
