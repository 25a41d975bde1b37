"""Session hooks that feed record writes into the DeltaService."""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, sessionmaker

from deltaindex.domain.index.service.delta import DeltaService

logger = logging.getLogger(__name__)

WRITTEN_KEY = "deltaindex.written"
COMMITTED_KEY = "deltaindex.committed"


def install_delta_hooks(
    target: type[Session] | sessionmaker[Any] | Session, service: DeltaService
) -> None:
    """Toggle deltas on every flush of ``target`` and remember the written records.

    ``target`` is anything SQLAlchemy accepts for session events: a Session
    subclass, a sessionmaker, or a single Session (``AsyncSession.sync_session``
    for async code). Records written in a transaction are held under
    WRITTEN_KEY until it ends. A commit replaces COMMITTED_KEY with them, which
    commit_with_deltas() hands to DeltaService.after_commit(); a rollback drops
    them.

    Sessions should use ``expire_on_commit=False`` so delta flags can be read
    after the commit without another round trip.
    """

    @event.listens_for(target, "before_flush")
    def _toggle_deltas(session: Session, flush_context: Any, instances: Any) -> None:
        written = session.info.setdefault(WRITTEN_KEY, [])
        seen = {id(r) for r in written}
        for record in [*session.new, *session.dirty]:
            if not service.indexes.has_indexes(type(record)):
                continue
            service.before_save(record)
            if id(record) not in seen:
                written.append(record)
                seen.add(id(record))

    @event.listens_for(target, "after_commit")
    def _mark_committed(session: Session) -> None:
        # Only the latest transaction's records are ever pending after_commit.
        session.info[COMMITTED_KEY] = session.info.pop(WRITTEN_KEY, [])

    @event.listens_for(target, "after_rollback")
    def _forget_written(session: Session) -> None:
        session.info.pop(WRITTEN_KEY, None)


async def commit_with_deltas(session: AsyncSession, service: DeltaService) -> int:
    """Commit the session, then trigger delta rebuilds for the written records.

    Returns:
        Number of records for which a rebuild was issued.
    """
    # Drop records left over from a commit made without this function.
    session.sync_session.info.pop(COMMITTED_KEY, None)
    await session.commit()
    committed = session.sync_session.info.pop(COMMITTED_KEY, [])
    triggered = 0
    for record in committed:
        if await service.after_commit(record):
            triggered += 1
    logger.debug(f"Committed {len(committed)} indexed record(s), {triggered} rebuild(s) issued")
    return triggered
