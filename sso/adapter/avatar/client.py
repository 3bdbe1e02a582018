"""Avatar download clients."""

import asyncio
from pathlib import Path

import httpx
import logfire

from sso.adapter.error import AdapterError
from sso.domain.service.avatar_service import AvatarClient


class HttpxAvatarClient(AvatarClient):
    """Fetches a remote image with httpx and writes it from a worker thread."""

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize avatar client.

        Args:
            timeout: Per-request HTTP timeout in seconds. The caller bounds
                the whole transfer separately.
        """
        self.timeout = timeout

    async def download(self, url: str, destination: Path) -> None:
        """Download ``url`` into ``destination``.

        Raises:
            AdapterError: If the server answers with a non-2xx status
            httpx.HTTPError: On transport failures
        """
        async with httpx.AsyncClient(follow_redirects=True) as client:
            async with client.stream("GET", url, timeout=self.timeout) as response:
                if response.status_code // 100 != 2:
                    raise AdapterError(
                        f"Avatar download failed: {response.status_code}"
                    )

                content = bytearray()
                async for chunk in response.aiter_bytes():
                    content.extend(chunk)

        await asyncio.to_thread(destination.write_bytes, bytes(content))

        logfire.debug("Avatar downloaded", url=url, destination=str(destination))


class MockAvatarClient(AvatarClient):
    """Mock avatar client for testing.

    Records every requested URL and writes fixed bytes instead of
    touching the network. ``delay`` and ``error`` simulate slow and
    failing transfers.
    """

    def __init__(
        self,
        content: bytes = b"\x89PNG mock avatar",
        delay: float = 0.0,
        error: Exception | None = None,
    ):
        self.content = content
        self.delay = delay
        self.error = error
        self.calls: list[str] = []

    async def download(self, url: str, destination: Path) -> None:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        destination.write_bytes(self.content)
