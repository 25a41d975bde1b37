"""Fixtures shared by the index domain tests."""

import pytest

from deltaindex.domain.index.model.registry import IndexRegistry
from deltaindex.domain.index.model.suspension import SuspensionState
from deltaindex.domain.index.service.delta import DeltaService
from deltaindex.infrastructure.index.definitions import StaticIndexDefinitions
from tests.unit.domain.index.fakes import ARTICLE_INDEX, Article, FakeOracle, RecordingExecutor


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def definitions() -> StaticIndexDefinitions:
    return StaticIndexDefinitions({Article: [ARTICLE_INDEX]})


@pytest.fixture
def registry(definitions: StaticIndexDefinitions, executor: RecordingExecutor) -> IndexRegistry:
    return IndexRegistry(definitions, executor)


@pytest.fixture
def suspension() -> SuspensionState:
    return SuspensionState()


@pytest.fixture
def service(
    registry: IndexRegistry, oracle: FakeOracle, suspension: SuspensionState
) -> DeltaService:
    return DeltaService(indexes=registry, oracle=oracle, suspension=suspension)
