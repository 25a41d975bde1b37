"""IndexRegistry - record type to index definitions and delta trackers."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from deltaindex.domain.index.model.descriptor import DeltaKind, IndexDescriptor
from deltaindex.domain.index.model.tracker import (
    DEFAULT_DELTA_COLUMN,
    DeltaTracker,
    FlagDeltaTracker,
    ScheduledDeltaTracker,
)
from deltaindex.domain.index.port.definitions import IndexDefinitionProvider
from deltaindex.domain.index.port.rebuild import RebuildExecutor
from deltaindex.domain.shared.error import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexDefinition:
    """A realised index: its descriptor plus the delta tracker built for it."""

    descriptor: IndexDescriptor
    tracker: DeltaTracker | None


class IndexRegistry:
    """Explicit registry of the indexes defined for each record type.

    Definitions are realised lazily: the first delta operation for a record
    type asks the IndexDefinitionProvider for its descriptors and builds one
    delta tracker per delta-enabled descriptor. A record type without
    definitions of its own inherits those of its nearest base class.
    """

    def __init__(
        self,
        provider: IndexDefinitionProvider,
        executor: RebuildExecutor,
        column: str = DEFAULT_DELTA_COLUMN,
    ) -> None:
        self._provider = provider
        self._executor = executor
        self._column = column
        self._definitions: dict[type, tuple[IndexDefinition, ...]] = {}
        self._unindexed: set[type] = set()

    def register(self, record_type: type, descriptors: Sequence[IndexDescriptor]) -> None:
        """Define the indexes of a record type explicitly, replacing any earlier ones."""
        names = [d.name for d in descriptors]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(
                f"Duplicate index names for {record_type.__name__}: {duplicates}",
                field="name",
            )
        self._definitions[record_type] = tuple(
            IndexDefinition(descriptor=d, tracker=self._build_tracker(d)) for d in descriptors
        )
        # A new base definition may now cover types resolved as unindexed.
        self._unindexed.clear()
        logger.debug(f"Registered {len(descriptors)} index(es) for {record_type.__name__}")

    def ensure_defined(self, record_type: type) -> tuple[IndexDefinition, ...]:
        """Realise the index definitions of a record type.

        Raises:
            ConfigurationError: If no descriptor is resolvable for the type.
        """
        definitions = self._resolve(record_type)
        if not definitions:
            raise ConfigurationError(f"No index defined for record type {record_type.__name__}")
        return definitions

    def has_indexes(self, record_type: type) -> bool:
        """Whether any index is resolvable for the record type."""
        return bool(self._resolve(record_type))

    def _resolve(self, record_type: type) -> tuple[IndexDefinition, ...]:
        definitions = self._definitions.get(record_type)
        if definitions:
            return definitions
        if record_type in self._unindexed:
            return ()

        for candidate in record_type.__mro__:
            if candidate is object:
                break
            if self._definitions.get(candidate):
                definitions = self._definitions[candidate]
                break
            descriptors = self._provider.definitions(candidate)
            if descriptors:
                self.register(candidate, descriptors)
                definitions = self._definitions[candidate]
                break

        if not definitions:
            self._unindexed.add(record_type)
            return ()
        self._definitions[record_type] = definitions
        return definitions

    def descriptors(self, record_type: type) -> tuple[IndexDescriptor, ...]:
        return tuple(d.descriptor for d in self.ensure_defined(record_type))

    def trackers(self, record_type: type) -> tuple[DeltaTracker, ...]:
        """Delta trackers of a record type, in declaration order."""
        return tuple(d.tracker for d in self.ensure_defined(record_type) if d.tracker is not None)

    def is_defined(self, record_type: type) -> bool:
        return record_type in self._definitions

    def __iter__(self) -> Iterator[type]:
        return iter(self._definitions)

    def _build_tracker(self, descriptor: IndexDescriptor) -> DeltaTracker | None:
        if descriptor.delta is DeltaKind.FLAG:
            return FlagDeltaTracker(descriptor.name, self._executor, column=self._column)
        if descriptor.delta is DeltaKind.SCHEDULED:
            return ScheduledDeltaTracker(descriptor.name, self._executor)
        return None
