"""Domain value objects for SSO account reconciliation."""

from enum import IntEnum
from typing import Any, Optional

from pydantic import Field, field_validator

from sso.domain.value.common import ValueObject


def is_remote_url(value: str | None) -> bool:
    """Whether a stored reference points at a remote HTTP(S) resource."""
    return bool(value) and value.lower().startswith(("http://", "https://"))


class Sex(IntEnum):
    """Sex code reported by identity providers."""

    UNKNOWN = 0
    MALE = 1
    FEMALE = 2

    @classmethod
    def parse(cls, value: Any) -> "Sex":
        """Parse a claim value, falling back to UNKNOWN for anything unusable."""
        try:
            return cls(int(str(value).strip()))
        except (TypeError, ValueError):
            return cls.UNKNOWN


class ExternalIdentity(ValueObject):
    """Identity assertion produced by an upstream OAuth provider.

    Created once per login attempt after the OAuth collaborator has
    verified the provider's response. Never persisted as-is; its fields
    are copied onto the IdentityLink snapshot.
    """

    provider: str  # Provider key, e.g. "github"
    open_id: Optional[str] = None  # Stable subject id; some providers omit it
    username: Optional[str] = None  # Login name; QQ/WeChat style providers omit it
    nickname: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None  # Seconds
    avatar: Optional[str] = None
    claims: dict[str, str] = Field(default_factory=dict)

    @field_validator("claims", mode="before")
    @classmethod
    def stringify_claims(cls, v: Any) -> dict[str, str]:
        """Providers return mixed JSON scalars; claims are compared as text."""
        if not v:
            return {}
        return {
            str(key): str(value)
            for key, value in dict(v).items()
            if value is not None and not isinstance(value, (dict, list))
        }

    @property
    def subject_id(self) -> str:
        """Key used for the identity link: open id, else username."""
        return self.open_id or self.username or ""

    def claim(self, *names: str) -> Optional[str]:
        """Look up the first non-empty claim among ``names``.

        Claim names are matched case-insensitively.
        """
        lowered = {key.lower(): value for key, value in self.claims.items()}
        for name in names:
            value = lowered.get(name.lower())
            if value:
                return value
        return None
