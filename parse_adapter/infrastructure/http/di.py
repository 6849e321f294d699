"""DI provider for HTTP infrastructure."""

from typing import AsyncIterable

import httpx
import logfire
from dishka import Provider, provide

from parse_adapter.config import Config
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.infrastructure.serializer.parse import ParseSerializer
from parse_adapter.util.di.scope import Scope


class HttpProvider(Provider):
    """DI provider for the Parse adapter, its HTTP client and the store."""

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        """Shared HTTP client (connection pooling), closed with the container."""
        timeout = httpx.Timeout(
            connect=config.http.connect_timeout,
            read=config.http.read_timeout,
            write=config.http.write_timeout,
            pool=config.http.pool_timeout,
        )
        async with httpx.AsyncClient(timeout=timeout) as client:
            if config.logging.logfire:
                logfire.instrument_httpx(client)
            yield client

    @provide(scope=Scope.APP)
    def get_auth_context(self, config: Config) -> AuthContext:
        config.parse.require_credentials()
        return AuthContext(
            application_id=config.parse.application_id,
            rest_api_key=config.parse.rest_api_key,
        )

    @provide(scope=Scope.APP)
    def get_serializer(self) -> ParseSerializer:
        # Bound to the store when the store is created
        return ParseSerializer()

    @provide(scope=Scope.APP)
    def get_adapter(
        self,
        config: Config,
        http_client: httpx.AsyncClient,
        auth: AuthContext,
        serializer: ParseSerializer,
    ) -> ParseAdapter:
        return ParseAdapter(config.parse, http_client, auth, serializer)

    @provide(scope=Scope.APP)
    def get_store(self, adapter: ParseAdapter, serializer: ParseSerializer) -> Store:
        return Store(adapter, serializer)
