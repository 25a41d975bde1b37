"""RecordTypeDeltas - delta operations bound to a single record type."""

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, TypeVar

from deltaindex.domain.index.model.tracker import DeltaTracker
from deltaindex.domain.shared.error import DomainError
from deltaindex.domain.shared.service import Service

if TYPE_CHECKING:
    from deltaindex.domain.index.service.delta import DeltaService

T = TypeVar("T")


class RecordTypeDeltas(Service):
    """The per-model delta surface, e.g. ``deltas.for_type(Article)``."""

    record_type: type
    deltas: "DeltaService"

    async def index_delta(self, instance: Any | None = None) -> bool:
        """Rebuild the delta index for the whole type, or for one pending instance."""
        if instance is not None:
            self._check_instance(instance)
        return await self.deltas.index_delta(self.record_type, instance)

    def delta_trackers(self) -> tuple[DeltaTracker, ...]:
        return self.deltas.delta_trackers(self.record_type)

    def suspended(self, reindex_after: bool = True) -> AbstractAsyncContextManager[None]:
        return self.deltas.suspended_delta(self.record_type, reindex_after=reindex_after)

    async def run_suspended(
        self, work: Callable[[], Awaitable[T]], reindex_after: bool = True
    ) -> T:
        return await self.deltas.run_suspended(
            self.record_type, work, reindex_after=reindex_after
        )

    def is_toggled(self, instance: Any) -> bool:
        self._check_instance(instance)
        return self.deltas.is_toggled(instance)

    def toggle_delta(self, instance: Any) -> bool:
        self._check_instance(instance)
        return self.deltas.toggle_delta(instance)

    def _check_instance(self, instance: Any) -> None:
        if not isinstance(instance, self.record_type):
            raise DomainError(
                f"Expected a {self.record_type.__name__} instance, "
                f"got {type(instance).__name__}"
            )
