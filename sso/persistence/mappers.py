"""Mappers for converting between database rows and domain models."""

from typing import Any, Dict
from uuid import UUID

from sso.domain.model import BasicUser, ExtendedProfile, ExtendedUser, IdentityLink, Role
from sso.domain.value import IdentityLinkId, RoleId, Sex, UserId

USER_KIND_BASIC = "basic"
USER_KIND_EXTENDED = "extended"

_BASIC_COLUMNS = (
    "name",
    "display_name",
    "enable",
    "password_hash",
    "created_at",
    "updated_at",
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> BasicUser:
    """Convert database row to a user of the stored kind.

    Args:
        row: Database row as dict

    Returns:
        BasicUser or ExtendedUser, depending on ``kind``
    """
    fields = {column: row[column] for column in _BASIC_COLUMNS}
    fields["id"] = UserId(_uuid(row["id"]))

    if row.get("kind") == USER_KIND_BASIC:
        return BasicUser(**fields)

    return ExtendedUser(
        **fields,
        mail=row.get("mail"),
        mobile=row.get("mobile"),
        code=row.get("code"),
        sex=Sex.parse(row.get("sex")),
        role_id=RoleId(row.get("role_id") or 0),
        avatar=row.get("avatar"),
        logins=row.get("logins") or 0,
        last_login=row.get("last_login"),
        last_login_ip=row.get("last_login_ip"),
    )


def user_to_dict(user: BasicUser) -> Dict[str, Any]:
    """Convert user domain model to database dict.

    Args:
        user: BasicUser or ExtendedUser

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    if isinstance(user, ExtendedProfile):
        data["kind"] = USER_KIND_EXTENDED
        data["sex"] = int(user.sex)
    else:
        data["kind"] = USER_KIND_BASIC
    return data


def row_to_role(row: Dict[str, Any]) -> Role:
    """Convert database row to Role domain model."""
    return Role(id=RoleId(row["id"]), name=row["name"], created_at=row["created_at"])


def row_to_identity_link(row: Dict[str, Any]) -> IdentityLink:
    """Convert database row to IdentityLink domain model.

    Args:
        row: Database row as dict

    Returns:
        IdentityLink domain model
    """
    return IdentityLink(
        id=IdentityLinkId(_uuid(row["id"])),
        provider=row["provider"],
        open_id=row["open_id"],
        user_id=UserId(_uuid(row["user_id"])) if row.get("user_id") else None,
        enable=row["enable"],
        username=row.get("username"),
        nickname=row.get("nickname"),
        avatar=row.get("avatar"),
        access_token=row.get("access_token"),
        refresh_token=row.get("refresh_token"),
        expires_at=row.get("expires_at"),
        claims=row.get("claims") or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def identity_link_to_dict(link: IdentityLink) -> Dict[str, Any]:
    """Convert IdentityLink domain model to database dict."""
    return link.model_dump()
