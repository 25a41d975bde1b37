from dishka import AsyncContainer, make_async_container

from deltaindex.config import Config
from deltaindex.infrastructure.di import DeltaProvider
from deltaindex.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        DeltaProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
