"""DI provider for the session domain."""

from dishka import Provider, provide

from parse_adapter.config import Config
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.domain.session.port.storage import SessionStorage
from parse_adapter.domain.session.service import SessionManager
from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.util.di.scope import Scope


class SessionProvider(Provider):
    """Provides the SessionManager with any stored session already restored."""

    @provide(scope=Scope.APP)
    def get_session_manager(
        self,
        config: Config,
        store: Store,
        adapter: ParseAdapter,
        storage: SessionStorage,
        auth: AuthContext,
    ) -> SessionManager:
        manager = SessionManager(store, adapter, storage, auth, config.session.storage_key)
        manager.restore()
        return manager
