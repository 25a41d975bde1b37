"""Dependency injection provider for delta tracking."""

from collections.abc import AsyncIterable

import httpx
from dishka import Provider, from_context, provide

from deltaindex.config import Config
from deltaindex.domain.index.model.registry import IndexRegistry
from deltaindex.domain.index.model.suspension import SuspensionState
from deltaindex.domain.index.port.change_oracle import ChangeOracle
from deltaindex.domain.index.port.definitions import IndexDefinitionProvider
from deltaindex.domain.index.port.rebuild import RebuildExecutor
from deltaindex.domain.index.service.delta import DeltaService
from deltaindex.infrastructure.http.rebuild_executor import HttpRebuildExecutor
from deltaindex.infrastructure.index.definitions import StaticIndexDefinitions
from deltaindex.infrastructure.persistence.change_oracle import SqlAlchemyChangeOracle
from deltaindex.util.di.scope import Scope


class DeltaProvider(Provider):
    """Provides the delta service and its collaborators as APP-scoped singletons."""

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            base_url=config.rebuild.url, timeout=config.rebuild.timeout
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_rebuild_executor(self, client: httpx.AsyncClient, config: Config) -> RebuildExecutor:
        return HttpRebuildExecutor(client=client, id_attribute=config.rebuild.id_attribute)

    @provide(scope=Scope.APP)
    def get_index_definitions(self, config: Config) -> IndexDefinitionProvider:
        return StaticIndexDefinitions.from_config(config.indexes)

    @provide(scope=Scope.APP)
    def get_registry(
        self,
        definitions: IndexDefinitionProvider,
        executor: RebuildExecutor,
        config: Config,
    ) -> IndexRegistry:
        return IndexRegistry(definitions, executor, column=config.delta.column)

    @provide(scope=Scope.APP)
    def get_change_oracle(self) -> ChangeOracle:
        return SqlAlchemyChangeOracle()

    @provide(scope=Scope.APP)
    def get_suspension(self) -> SuspensionState:
        return SuspensionState()

    @provide(scope=Scope.APP)
    def get_delta_service(
        self,
        indexes: IndexRegistry,
        oracle: ChangeOracle,
        suspension: SuspensionState,
        config: Config,
    ) -> DeltaService:
        return DeltaService(
            indexes=indexes,
            oracle=oracle,
            suspension=suspension,
            enabled=config.delta.enabled,
        )
