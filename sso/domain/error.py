"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when an insert violates a uniqueness constraint."""

    def __init__(self, resource: str, key: str):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} already exists: {key}")


class AccountDisabledError(DomainError):
    """Raised when login resolves to a local account that is disabled."""

    def __init__(self, user_name: str):
        self.user_name = user_name
        super().__init__(f"User account is disabled: {user_name}")


class LoginRequiredError(DomainError):
    """Raised when binding needs a signed-in local account.

    Happens when no user is active in the session and automatic
    registration is turned off.
    """

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"Binding a {provider} identity requires a signed-in local account"
        )


class MalformedInputError(DomainError):
    """Raised when required input data is missing or unusable."""

    pass
