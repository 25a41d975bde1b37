"""Index definition adapters."""

from deltaindex.infrastructure.index.definitions import StaticIndexDefinitions

__all__ = ["StaticIndexDefinitions"]
