"""Base class for domain ports."""

from typing import Protocol


class Port(Protocol):
    """Marker for interfaces the domain consumes and infrastructure implements."""
