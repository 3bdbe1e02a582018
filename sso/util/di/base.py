"""Provider base class carrying mock metadata."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components a test container can swap for mocks
Component = Literal["persistence", "oauth", "avatar"]


class ProviderBase(Provider):
    """Provider tagged with the component it implements.

    Attributes:
        __mock_component__: Mockable component name, None for providers
            that always use their production implementation
        __is_mock__: Whether the subclass is the mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
