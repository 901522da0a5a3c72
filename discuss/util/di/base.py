"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests can swap: storage and caller identity
Component = Literal["persistence", "session"]


class ProviderBase(Provider):
    """Common base for every provider in the container.

    Concrete providers (config, domain, application) leave both markers at
    their defaults. A mockable component declares ``__mock_component__`` on
    an abstract base; its production and mock subclasses differ only in
    ``__is_mock__``, which ``get_provider`` uses to choose between them.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
