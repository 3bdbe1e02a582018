"""Avatar download adapter."""

from .client import HttpxAvatarClient, MockAvatarClient

__all__ = ["HttpxAvatarClient", "MockAvatarClient"]
