"""Shared base for domain services."""


class Service:
    """Marker base for domain services.

    A service owns one step of SSO reconciliation (role lookup, profile
    merge, binding) and talks to repositories or collaborators; entities
    stay plain data.
    """
