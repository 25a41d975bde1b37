"""SuspensionState - execution-context scoped deferral of delta rebuilds."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from itertools import count

logger = logging.getLogger(__name__)

_ids = count()


class SuspensionState:
    """Whether automatic delta rebuilds are currently deferred.

    The flag lives in a ContextVar, so each thread and each asyncio task sees
    its own value: a suspended block in one unit of work never masks rebuild
    triggers in another. Tasks created inside a suspended block inherit the
    value current at creation time.

    Contexts hold strong references to their ContextVars, so create one
    SuspensionState per process (the container provides it at APP scope)
    rather than one per unit of work.
    """

    def __init__(self, name: str = "deltas_suspended") -> None:
        self._var: ContextVar[bool] = ContextVar(f"{name}_{next(_ids)}", default=False)

    @property
    def suspended(self) -> bool:
        return self._var.get()

    @contextmanager
    def suspend(self) -> Iterator[bool]:
        """Suspend delta rebuilds for the duration of the block.

        Yields the value that was in effect before entering. The previous value
        is restored on every exit path, so nested blocks leave the outer block
        suspended.
        """
        original = self._var.get()
        token = self._var.set(True)
        try:
            yield original
        finally:
            self._var.reset(token)
            logger.debug("Delta suspension restored to %s", original)

    def __repr__(self) -> str:
        return f"SuspensionState(suspended={self.suspended})"
