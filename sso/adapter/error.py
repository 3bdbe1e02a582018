"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """Upstream OAuth provider error."""

    pass


class TokenError(AdapterError):
    """Invalid or expired code/token presented to our OAuth server."""

    pass


class ClientError(AdapterError):
    """Unregistered downstream client or redirect URI."""

    pass
