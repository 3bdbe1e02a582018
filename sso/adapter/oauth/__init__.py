"""OAuth adapters: upstream provider client and downstream server."""

from .client import GenericOAuthClient, MockOAuthClient
from .server import JWTOAuthServer

__all__ = ["GenericOAuthClient", "JWTOAuthServer", "MockOAuthClient"]
