"""Avatar caching domain service."""

import asyncio
from pathlib import Path
from uuid import uuid4

import logfire

from sso.domain.error import MalformedInputError
from sso.domain.model.user import BasicUser, ExtendedProfile
from sso.domain.value import UserId, is_remote_url

from .base import Service

# Upper bound on a single avatar download, in seconds
AVATAR_FETCH_TIMEOUT = 5.0


class AvatarClient:
    """Transfers a remote avatar image to a local file."""

    async def download(self, url: str, destination: Path) -> None:
        """Download ``url`` into ``destination``.

        Args:
            url: Remote image URL
            destination: File to write

        Raises:
            Exception: Any transfer failure
        """
        raise NotImplementedError


class AvatarService(Service):
    """Best-effort local cache of users' remote avatars.

    The cache file is named after the user id with no extension. The
    user's stored avatar reference is never rewritten; cached files are
    only used for local serving.
    """

    def __init__(
        self,
        avatar_client: AvatarClient,
        avatar_path: str,
        timeout: float = AVATAR_FETCH_TIMEOUT,
    ) -> None:
        """Initialize avatar service.

        Args:
            avatar_client: Client performing the transfer
            avatar_path: Cache root directory, empty disables caching
            timeout: Seconds to wait for a download before giving up
        """
        self.avatar_client = avatar_client
        self.avatar_path = avatar_path
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.avatar_path)

    def cache_path(self, user_id: UserId) -> Path | None:
        """Local cache file for a user's avatar, or None when caching is off."""
        if not self.enabled:
            return None
        return (Path(self.avatar_path) / str(user_id)).resolve()

    async def fetch_avatar(self, user: BasicUser) -> bool:
        """Download the user's remote avatar into the local cache.

        Args:
            user: User whose avatar to fetch

        Returns:
            True if a file was downloaded; False when there was nothing to
            do (not a URL, caching off, already cached) or the download
            failed or timed out.

        Raises:
            MalformedInputError: If the user has no avatar reference at all
        """
        avatar = user.avatar if isinstance(user, ExtendedProfile) else None
        if not avatar:
            raise MalformedInputError(f"User has no avatar: {user.name}")

        if not is_remote_url(avatar):
            return False

        path = self.cache_path(user.id)
        if path is None:
            return False

        with logfire.span(
            "avatar_service.fetch_avatar", user_id=str(user.id), url=avatar
        ):
            if path.exists():
                logfire.debug("Avatar already cached", user_id=str(user.id))
                return False

            path.parent.mkdir(parents=True, exist_ok=True)

            # Download next to the target and rename, so an abandoned
            # transfer never leaves a half-written cache file behind.
            partial = path.with_name(f"{path.name}.{uuid4().hex}.part")
            try:
                await asyncio.wait_for(
                    self.avatar_client.download(avatar, partial),
                    timeout=self.timeout,
                )
                partial.replace(path)
            except asyncio.TimeoutError:
                logfire.warn(
                    "Avatar download timed out",
                    user_id=str(user.id),
                    url=avatar,
                    timeout=self.timeout,
                )
                return False
            except Exception as e:
                logfire.warn(
                    "Avatar download failed",
                    user_id=str(user.id),
                    url=avatar,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False
            finally:
                partial.unlink(missing_ok=True)

            logfire.info("Avatar cached", user_id=str(user.id), path=str(path))
            return True
