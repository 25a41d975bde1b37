"""Custom Dishka scopes for deltaindex."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (registry, service, executor)
    - UOW: Unit of work (a request or a batch job)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
