"""Service base class for the delta domain."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(eq_default=False)
class _ServiceMeta(type):
    """Turns every Service subclass into an identity-compared dataclass."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if not any(isinstance(b, mcs) for b in bases):
            return cls
        return dataclass(cls, eq=False)


class Service(metaclass=_ServiceMeta):
    """Base class for domain services.

    Dependencies are declared as annotated class attributes and become
    dataclass fields, so services can be built by hand in tests or by the
    DI container in the application.
    """
