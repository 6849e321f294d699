"""Tests for the user and record CLI commands."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from parse_adapter.cli.commands import record, user
from parse_adapter.domain.record.model.user import ParseUser
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.model import Session, SessionResult
from parse_adapter.domain.session.service import SessionManager
from parse_adapter.domain.shared.error import TransportError
from parse_adapter.infrastructure.storage.file import FileSessionStorage


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("PARSE_PARSE__APPLICATION_ID", "app")
    monkeypatch.setenv("PARSE_PARSE__REST_API_KEY", "key")
    monkeypatch.setenv("PARSE_SESSION__DIRECTORY", str(tmp_path / "session"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("PARSE_CONFIG_FILE", raising=False)
    monkeypatch.delenv("PARSE_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)


def _fake_client(monkeypatch: pytest.MonkeyPatch, module, **instances) -> None:
    """Replace open_client in ``module`` with a container serving ``instances``."""
    by_type = {
        SessionManager: instances.get("manager"),
        Store: instances.get("store"),
    }
    container = MagicMock()
    container.get = AsyncMock(side_effect=lambda dependency: by_type[dependency])

    @asynccontextmanager
    async def fake_open_client(config=None):
        yield container

    monkeypatch.setattr(module, "open_client", fake_open_client)


class TestLogout:
    def test_logout_removes_stored_session(self, cli_env: Path, capsys) -> None:
        storage = FileSessionStorage(cli_env / "session")
        storage.set("parse_user", Session(session_token="r:abc", user_id="u1").to_json())

        user.logout()

        assert storage.get("parse_user") is None
        assert "Logged out" in capsys.readouterr().out

    def test_logout_without_session(self, capsys) -> None:
        user.logout()
        assert "No active session" in capsys.readouterr().out


class TestWhoami:
    def test_not_logged_in(self, capsys) -> None:
        user.whoami()
        assert "Not logged in" in capsys.readouterr().out


class TestLogin:
    def test_login_success(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        manager = MagicMock()
        manager.login = AsyncMock(return_value=SessionResult(data={"objectId": "u1"}))
        store = MagicMock()
        store.create_record.return_value = ParseUser()
        _fake_client(monkeypatch, user, manager=manager, store=store)

        user.login("clint", "loveyou")

        manager.login.assert_awaited_once()
        assert manager.login.await_args.kwargs == {"username": "clint", "password": "loveyou"}
        assert "Logged in as clint" in capsys.readouterr().out

    def test_login_failure_shows_parse_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        error = TransportError(
            "Parse request failed: 404",
            payload={"code": 101, "error": "invalid login parameters"},
            status_code=404,
        )
        manager = MagicMock()
        manager.login = AsyncMock(return_value=SessionResult(error=error))
        store = MagicMock()
        store.create_record.return_value = ParseUser()
        _fake_client(monkeypatch, user, manager=manager, store=store)

        with pytest.raises(SystemExit) as exc_info:
            user.login("clint", "wrong")

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Login failed" in err
        assert "invalid login parameters" in err


class TestResetPassword:
    def test_reset_password(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        manager = MagicMock()
        manager.request_password_reset = AsyncMock(return_value=SessionResult(data={}))
        _fake_client(monkeypatch, user, manager=manager)

        user.reset_password("clint@example.com")

        args = manager.request_password_reset.await_args.args
        assert args[1] == "clint@example.com"
        assert "clint@example.com" in capsys.readouterr().out


class TestRecordQuery:
    def test_invalid_where_exits_before_request(self, capsys) -> None:
        with pytest.raises(SystemExit):
            record.query("GameScore", where="{not json")
        assert "not valid JSON" in capsys.readouterr().err
