"""Delta trackers - per-index toggle and rebuild trigger behavior."""

import logging
from abc import abstractmethod
from typing import Any, Protocol

import logfire

from deltaindex.domain.index.port.rebuild import RebuildExecutor
from deltaindex.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DELTA_COLUMN = "delta"


class DeltaTracker(Protocol):
    """Toggle/trigger behavior of one delta-enabled index.

    Trackers are stateless; the pending flag lives on the record itself.
    """

    index_name: str

    @abstractmethod
    def toggle(self, record: Any) -> None:
        """Mark the record as pending re-index."""
        ...

    @abstractmethod
    def toggled(self, record: Any) -> bool:
        """Whether the record is pending re-index."""
        ...

    @abstractmethod
    async def index(self, record_type: type, instance: Any | None = None) -> None:
        """Trigger the delta rebuild for the record type."""
        ...


class FlagDeltaTracker:
    """Tracks pending records through a boolean attribute on the record.

    The attribute is persisted with the record by the store; clearing it after
    a rebuild is the rebuild process's job.
    """

    def __init__(
        self,
        index_name: str,
        executor: RebuildExecutor,
        column: str = DEFAULT_DELTA_COLUMN,
    ) -> None:
        self.index_name = index_name
        self.column = column
        self._executor = executor

    def toggle(self, record: Any) -> None:
        self._require_column(record)
        setattr(record, self.column, True)

    def toggled(self, record: Any) -> bool:
        self._require_column(record)
        return bool(getattr(record, self.column))

    def _require_column(self, record: Any) -> None:
        # A flag that is not a persisted attribute would be lost on save.
        if not hasattr(record, self.column):
            raise ConfigurationError(
                f"{type(record).__name__} has no delta column {self.column!r} "
                f"for index {self.index_name}"
            )

    async def index(self, record_type: type, instance: Any | None = None) -> None:
        # Another index of the same type may have asked for this instance.
        if instance is not None and not self.toggled(instance):
            return
        with logfire.span(
            "delta rebuild {index}", index=self.index_name, record_type=record_type.__name__
        ):
            await self._executor.rebuild(record_type, instance, index=self.index_name)
        logger.debug(
            f"Delta rebuild issued: index={self.index_name} "
            f"type={record_type.__name__} instance={'yes' if instance is not None else 'no'}"
        )

    def __repr__(self) -> str:
        return f"FlagDeltaTracker(index_name={self.index_name!r}, column={self.column!r})"


class ScheduledDeltaTracker:
    """Delta for indexes rebuilt periodically from an updated-at timestamp.

    Records carry no flag: the store's timestamp column already says what
    changed, so every record counts as toggled and per-record triggers are
    ignored. Only type-level rebuilds (a scheduled job, or the end of a
    suspended block) reach the executor.
    """

    def __init__(self, index_name: str, executor: RebuildExecutor) -> None:
        self.index_name = index_name
        self._executor = executor

    def toggle(self, record: Any) -> None:
        pass

    def toggled(self, record: Any) -> bool:
        return True

    async def index(self, record_type: type, instance: Any | None = None) -> None:
        if instance is not None:
            return
        with logfire.span(
            "scheduled delta rebuild {index}",
            index=self.index_name,
            record_type=record_type.__name__,
        ):
            await self._executor.rebuild(record_type, None, index=self.index_name)

    def __repr__(self) -> str:
        return f"ScheduledDeltaTracker(index_name={self.index_name!r})"
