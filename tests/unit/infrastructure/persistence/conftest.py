"""Fixtures for the SQLAlchemy adapter tests (in-memory SQLite)."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from deltaindex.domain.index.model.descriptor import (
    AttributeRef,
    DeltaKind,
    FieldRef,
    IndexDescriptor,
)
from deltaindex.domain.index.model.registry import IndexRegistry
from deltaindex.domain.index.model.suspension import SuspensionState
from deltaindex.domain.index.service.delta import DeltaService
from deltaindex.infrastructure.index.definitions import StaticIndexDefinitions
from deltaindex.infrastructure.persistence.change_oracle import SqlAlchemyChangeOracle
from tests.unit.domain.index.fakes import RecordingExecutor
from tests.unit.infrastructure.persistence.models import Article, Base

ARTICLES = IndexDescriptor(
    name="articles",
    fields=(FieldRef(name="title"),),
    attributes=(AttributeRef(name="view_count", public=True, updatable=True),),
    delta=DeltaKind.FLAG,
)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def executor() -> RecordingExecutor:
    # Flags are cleared by the indexer in production; keep them to assert on.
    return RecordingExecutor(clear_flags=False)


@pytest.fixture
def deltas(executor: RecordingExecutor) -> DeltaService:
    registry = IndexRegistry(StaticIndexDefinitions({Article: [ARTICLES]}), executor)
    return DeltaService(
        indexes=registry, oracle=SqlAlchemyChangeOracle(), suspension=SuspensionState()
    )
