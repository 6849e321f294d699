"""DI provider for session storage."""

from pathlib import Path

from dishka import Provider, provide

from parse_adapter.config import Config
from parse_adapter.domain.session.port.storage import SessionStorage
from parse_adapter.infrastructure.storage.file import FileSessionStorage
from parse_adapter.util.di.scope import Scope


class StorageProvider(Provider):
    """DI provider for the durable session store."""

    @provide(scope=Scope.APP, provides=SessionStorage)
    def get_session_storage(self, config: Config) -> FileSessionStorage:
        return FileSessionStorage(Path(config.session.directory).expanduser())
