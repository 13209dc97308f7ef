"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure pieces tests can swap for in-memory versions
Component = Literal["persistence", "profiles"]


class ProviderBase(Provider):
    """Base for all Arena DI providers.

    A mockable component is declared as a base provider carrying
    `__mock_component__`, with one production and one mock subclass told
    apart by `__is_mock__`. Concrete providers (config, domain, application)
    have no subclasses and are always used as-is.

    Attributes:
        __mock_component__: Component name, None for concrete providers
        __is_mock__: Whether this is the in-memory implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
