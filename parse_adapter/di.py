from dishka import AsyncContainer, Provider, from_context, make_async_container

from parse_adapter.config import Config
from parse_adapter.domain.session.di import SessionProvider
from parse_adapter.infrastructure.http.di import HttpProvider
from parse_adapter.infrastructure.storage.di import StorageProvider
from parse_adapter.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        HttpProvider(),
        StorageProvider(),
        SessionProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
