"""RebuildExecutor port - performs the actual (re)build of an index."""

from abc import abstractmethod
from typing import Any, Protocol

from deltaindex.domain.shared.port import Port


class RebuildExecutor(Port, Protocol):
    """Runs or enqueues an index rebuild.

    The executor may rebuild synchronously or hand the work to a queue; either
    way a failure to trigger the rebuild is raised as RebuildError.
    """

    @abstractmethod
    async def rebuild(self, record_type: type, instance: Any | None, *, index: str) -> None:
        """Rebuild ``index`` for ``record_type``.

        Args:
            record_type: The record class whose index is rebuilt.
            instance: The record that triggered the rebuild, or None for a
                type-level rebuild.
            index: Name of the index to rebuild.
        """
        ...
