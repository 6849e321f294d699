"""Tests for the DI container wiring."""

from pathlib import Path

import httpx
import pytest

from parse_adapter.config import Config, ParseConfig, SessionConfig
from parse_adapter.di import create_container
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.domain.session.model import Session
from parse_adapter.domain.session.port.storage import SessionStorage
from parse_adapter.domain.session.service import SessionManager
from parse_adapter.domain.shared.error import ConfigurationError
from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.infrastructure.serializer.parse import ParseSerializer
from parse_adapter.infrastructure.storage.file import FileSessionStorage


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Config:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("PARSE_CONFIG_FILE", raising=False)
    return Config(
        parse=ParseConfig(application_id="app", rest_api_key="key"),
        session=SessionConfig(directory=str(tmp_path / "session")),
    )


class TestContainer:
    @pytest.mark.asyncio
    async def test_resolves_shared_instances(self, config: Config) -> None:
        container = create_container(config)
        try:
            manager = await container.get(SessionManager)
            adapter = await container.get(ParseAdapter)
            store = await container.get(Store)
            serializer = await container.get(ParseSerializer)

            assert isinstance(await container.get(httpx.AsyncClient), httpx.AsyncClient)
            assert store.adapter is adapter
            assert serializer._query_executor == store.find_query
            assert await container.get(AuthContext) is await container.get(AuthContext)
            assert manager.current_session() is None
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_storage_uses_session_directory(self, config: Config, tmp_path: Path) -> None:
        container = create_container(config)
        try:
            storage = await container.get(SessionStorage)
            assert isinstance(storage, FileSessionStorage)
            assert storage.directory == tmp_path / "session"
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_stored_session_is_restored(self, config: Config, tmp_path: Path) -> None:
        FileSessionStorage(tmp_path / "session").set(
            "parse_user", Session(session_token="r:abc", user_id="u1").to_json()
        )
        container = create_container(config)
        try:
            await container.get(SessionManager)
            auth = await container.get(AuthContext)
            assert auth.session_token == "r:abc"
            assert auth.headers()["X-Parse-Session-Token"] == "r:abc"
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_missing_credentials(self, tmp_path: Path) -> None:
        config = Config(
            parse=ParseConfig(application_id="", rest_api_key=""),
            session=SessionConfig(directory=str(tmp_path)),
        )
        container = create_container(config)
        try:
            with pytest.raises(ConfigurationError):
                await container.get(AuthContext)
        finally:
            await container.close()
