"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    name: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    claims: dict, secret: str, algorithm: str, expires_in: timedelta
) -> str:
    """Sign a JWT carrying ``claims`` and an expiry.

    Args:
        claims: Payload fields
        secret: Signing secret
        algorithm: Signing algorithm
        expires_in: Lifetime from now

    Returns:
        Encoded JWT token
    """
    payload = {**claims, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str) -> dict:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        secret: Signing secret
        algorithm: Expected signing algorithm

    Returns:
        Decoded payload

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")


def verify_token(token: str, secret: str, algorithm: str) -> TokenPayload:
    """Verify a session token and parse its payload.

    Raises:
        JWTError: If token is invalid, expired or lacks session fields
    """
    payload = decode_token(token, secret, algorithm)
    try:
        return TokenPayload(**payload)
    except ValueError:
        raise JWTError("Invalid token payload")
