"""In-memory IndexDefinitionProvider, optionally built from configuration."""

import importlib
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from deltaindex.domain.index.model.descriptor import IndexDescriptor
from deltaindex.domain.index.port.definitions import IndexDefinitionProvider
from deltaindex.domain.shared.error import ConfigurationError

if TYPE_CHECKING:
    from deltaindex.config import IndexConfig

logger = logging.getLogger(__name__)


def resolve_record_type(path: str) -> type:
    """Import a record class from a ``"package.module:ClassName"`` path."""
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigurationError(
            f"Invalid record type '{path}': expected 'package.module:ClassName'"
        )
    try:
        target: object = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}' for '{path}'") from e
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigurationError(f"'{path}' does not name an attribute") from e
    if not isinstance(target, type):
        raise ConfigurationError(f"'{path}' is not a class")
    return target


class StaticIndexDefinitions(IndexDefinitionProvider):
    """Index descriptors declared up front, keyed by record class."""

    def __init__(self, definitions: Mapping[type, Sequence[IndexDescriptor]] | None = None) -> None:
        self._definitions: dict[type, list[IndexDescriptor]] = {
            record_type: list(descriptors)
            for record_type, descriptors in (definitions or {}).items()
        }

    @classmethod
    def from_config(cls, indexes: Iterable["IndexConfig"]) -> "StaticIndexDefinitions":
        provider = cls()
        for idx in indexes:
            provider.add(resolve_record_type(idx.model), idx.to_descriptor())
        return provider

    def add(self, record_type: type, descriptor: IndexDescriptor) -> None:
        self._definitions.setdefault(record_type, []).append(descriptor)
        logger.debug(f"Declared index '{descriptor.name}' for {record_type.__name__}")

    def definitions(self, record_type: type) -> Sequence[IndexDescriptor]:
        return tuple(self._definitions.get(record_type, ()))
