"""Unit tests for JWTOAuthServer."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from sso.adapter.error import ClientError, TokenError
from sso.adapter.oauth import JWTOAuthServer
from sso.config import OAuthClientRegistration, OAuthServerSettings
from sso.domain.value import UserId
from sso.util.jwt import create_token

WIKI_CB = "https://wiki.example.com/sso"
FORUM_CB = "https://forum.example.com/sso"


def _settings(**overrides) -> OAuthServerSettings:
    fields = {
        "jwt_secret": "server-secret",
        "token_expiry_seconds": 600,
        "clients": {
            "wiki": OAuthClientRegistration(client_secret="wiki-secret", redirect_uris=[WIKI_CB]),
            "forum": OAuthClientRegistration(client_secret="forum-secret", redirect_uris=[FORUM_CB]),
        },
    }
    fields.update(overrides)
    return OAuthServerSettings(**fields)


@pytest.fixture
def server() -> JWTOAuthServer:
    return JWTOAuthServer(_settings())


def _wiki_code(server: JWTOAuthServer, user_id: UserId | None = None) -> str:
    return server.issue_code(user_id or UserId(uuid4()), "wiki", WIKI_CB)


class TestJWTOAuthServer:
    """Tests for the code and token lifecycle."""

    def test_code_exchange_resolves_user(self, server):
        user_id = UserId(uuid4())

        token = server.get_token(_wiki_code(server, user_id), "wiki", "wiki-secret")

        assert server.get_user_id(token) == user_id
        assert server.expire == 600

    def test_code_reuse_rejected(self, server):
        code = _wiki_code(server)
        server.get_token(code, "wiki", "wiki-secret")

        with pytest.raises(TokenError):
            server.get_token(code, "wiki", "wiki-secret")

    def test_access_token_is_not_a_code(self, server):
        token = server.get_token(_wiki_code(server), "wiki", "wiki-secret")

        with pytest.raises(TokenError):
            server.get_token(token, "wiki", "wiki-secret")

    def test_foreign_signature_rejected(self, server):
        other = JWTOAuthServer(_settings(jwt_secret="other-secret"))

        with pytest.raises(TokenError):
            server.get_token(_wiki_code(other), "wiki", "wiki-secret")

    def test_expired_code_rejected(self):
        server = JWTOAuthServer(_settings(code_expiry_seconds=-1))

        with pytest.raises(TokenError):
            server.get_token(_wiki_code(server), "wiki", "wiki-secret")

    def test_non_uuid_subject_rejected(self, server):
        token = create_token(
            {"sub": "alice", "typ": "access"},
            server.settings.jwt_secret,
            server.settings.jwt_algorithm,
            timedelta(minutes=5),
        )

        with pytest.raises(TokenError):
            server.get_user_id(token)


class TestClientRegistration:
    """Tests for binding codes to registered clients."""

    def test_unknown_client_gets_no_code(self, server):
        with pytest.raises(ClientError):
            server.issue_code(UserId(uuid4()), "stranger", WIKI_CB)

    def test_unregistered_redirect_uri_gets_no_code(self, server):
        with pytest.raises(ClientError):
            server.issue_code(UserId(uuid4()), "wiki", "https://evil.example/steal")

    def test_other_clients_redirect_uri_gets_no_code(self, server):
        with pytest.raises(ClientError):
            server.issue_code(UserId(uuid4()), "wiki", FORUM_CB)

    def test_wrong_secret_rejected(self, server):
        with pytest.raises(TokenError):
            server.get_token(_wiki_code(server), "wiki", "forum-secret")

    def test_code_issued_to_another_client_rejected(self, server):
        with pytest.raises(TokenError):
            server.get_token(_wiki_code(server), "forum", "forum-secret")

    def test_redirect_uri_must_match_when_given(self, server):
        with pytest.raises(TokenError):
            server.get_token(_wiki_code(server), "wiki", "wiki-secret", FORUM_CB)

        token = server.get_token(_wiki_code(server), "wiki", "wiki-secret", WIKI_CB)
        assert server.get_user_id(token)

    def test_failed_authentication_does_not_burn_code(self, server):
        code = _wiki_code(server)

        with pytest.raises(TokenError):
            server.get_token(code, "wiki", "guess")

        assert server.get_token(code, "wiki", "wiki-secret")


class TestUsedCodeBookkeeping:
    """Tests for forgetting exchanged codes once they expire."""

    def test_exchanged_code_is_remembered_until_expiry(self, server):
        server.get_token(_wiki_code(server), "wiki", "wiki-secret")

        assert len(server._used_codes) == 1
        (exp,) = server._used_codes.values()
        assert exp > datetime.now(timezone.utc).timestamp()

    def test_expired_entries_are_pruned_on_exchange(self, server):
        past = (datetime.now(timezone.utc) - timedelta(minutes=1)).timestamp()
        server._used_codes["stale-1"] = past
        server._used_codes["stale-2"] = past

        server.get_token(_wiki_code(server), "wiki", "wiki-secret")

        assert "stale-1" not in server._used_codes
        assert "stale-2" not in server._used_codes
        assert len(server._used_codes) == 1
