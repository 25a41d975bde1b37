"""DeltaService - decides when records are dirty and when delta indexes are rebuilt."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, TypeVar

import logfire

from deltaindex.domain.index.model.descriptor import IndexDescriptor
from deltaindex.domain.index.model.registry import IndexRegistry
from deltaindex.domain.index.model.suspension import SuspensionState
from deltaindex.domain.index.model.tracker import DeltaTracker
from deltaindex.domain.index.port.change_oracle import ChangeOracle
from deltaindex.domain.shared.service import Service

if TYPE_CHECKING:
    from deltaindex.domain.index.service.record_type import RecordTypeDeltas

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeltaService(Service):
    """Coordinates dirty tracking and delta rebuilds for indexed record types.

    The record store calls before_save() while a record is being written and
    after_commit() once the write is committed. Bulk writers wrap their work
    in suspended_delta() so the delta index is rebuilt once at the end
    instead of once per record.

    Attributes:
        indexes: Registry of index definitions and delta trackers per record type.
        oracle: Change detection for record values.
        suspension: Execution-context scoped suspension flag.
        enabled: Global switch; when False, flags are still toggled but no
            rebuild is ever issued.
    """

    indexes: IndexRegistry
    oracle: ChangeOracle
    suspension: SuspensionState
    enabled: bool = True

    # --- Dirty tracking ---

    def is_dirty(
        self, record: Any, descriptors: Sequence[IndexDescriptor] | None = None
    ) -> bool:
        """Whether the record needs to be re-indexed.

        A record is dirty when it is new, when any declared field changed, or
        when any public attribute that cannot be updated in place changed.
        """
        if descriptors is None:
            descriptors = self.indexes.descriptors(type(record))
        if self.oracle.is_new(record):
            return True
        return any(d.indexed_data_changed(record, self.oracle) for d in descriptors)

    def toggle_delta(self, record: Any) -> bool:
        """Flag the record as pending re-index if it is dirty.

        Returns:
            True if the record's delta trackers were toggled.
        """
        trackers = self.delta_trackers(type(record))
        if not trackers or not self.is_dirty(record):
            return False
        for tracker in trackers:
            tracker.toggle(record)
        return True

    def is_toggled(self, record: Any) -> bool:
        """Whether any delta tracker reports the record as pending."""
        return any(t.toggled(record) for t in self.delta_trackers(type(record)))

    def delta_trackers(self, record_type: type) -> tuple[DeltaTracker, ...]:
        return self.indexes.trackers(record_type)

    # --- Rebuild triggering ---

    async def index_delta(self, record_type: type, instance: Any | None = None) -> bool:
        """Trigger the delta rebuild for a record type.

        Without an instance the rebuild is unconditional. With an instance it
        only happens when the instance is pending and deltas are not
        suspended; a suspended trigger is deferred to the end of the
        suspended block, and the record's flag stays set.

        Returns:
            True if a rebuild was issued.
        """
        trackers = self.delta_trackers(record_type)
        if not trackers:
            return False

        if instance is not None:
            if not any(t.toggled(instance) for t in trackers):
                return False
            if self.suspension.suspended:
                logger.debug(f"Delta rebuild deferred for {record_type.__name__} (suspended)")
                return False

        if not self.enabled:
            logger.debug(f"Deltas disabled, skipping rebuild for {record_type.__name__}")
            return False

        for tracker in trackers:
            await tracker.index(record_type, instance)
        return True

    # --- Scoped suspension ---

    @asynccontextmanager
    async def suspended_delta(
        self, record_type: type, reindex_after: bool = True
    ) -> AsyncIterator[None]:
        """Defer delta rebuilds for the duration of the block.

        Useful when writing batches of records: with ten creates inside the
        block the delta index is rebuilt once, not ten times.

            async with deltas.suspended_delta(Article):
                for title in titles:
                    await store.create(Article(title=title))

        Suspension is restored to its previous value on every exit path
        before the closing rebuild runs, and the closing rebuild runs even
        when the block raises; the block's exception then propagates.
        """
        self.indexes.ensure_defined(record_type)
        with logfire.span("suspended delta {record_type}", record_type=record_type.__name__):
            try:
                with self.suspension.suspend():
                    yield
            finally:
                if reindex_after:
                    await self.index_delta(record_type)

    async def run_suspended(
        self,
        record_type: type,
        work: Callable[[], Awaitable[T]],
        reindex_after: bool = True,
    ) -> T:
        """Run ``work`` inside suspended_delta() and return its result."""
        async with self.suspended_delta(record_type, reindex_after=reindex_after):
            return await work()

    # --- Record lifecycle hooks ---

    def before_save(self, record: Any) -> bool:
        """Hook for the store, called while a record is written."""
        return self.toggle_delta(record)

    async def after_commit(self, record: Any) -> bool:
        """Hook for the store, called once a record's write is committed."""
        return await self.index_delta(type(record), record)

    async def record_committed(self, record: Any) -> bool:
        """Run both lifecycle hooks for a committed create or update."""
        self.before_save(record)
        return await self.after_commit(record)

    def for_type(self, record_type: type) -> "RecordTypeDeltas":
        """Delta operations bound to one record type."""
        from deltaindex.domain.index.service.record_type import RecordTypeDeltas

        return RecordTypeDeltas(record_type=record_type, deltas=self)
