"""Global test fixtures."""

import json
from typing import Any

import httpx
import pytest

from parse_adapter.config import ParseConfig
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.infrastructure.serializer.parse import ParseSerializer

APP_ID = "test-app-id"
REST_KEY = "test-rest-key"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records requests and answers from a queue.

    Each queued reply is ``(status_code, json_body)``; ``None`` bodies produce
    an empty response. When the queue is empty every request gets ``200 {}``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.replies: list[tuple[int, Any]] = []
        super().__init__(self._handle)

    def reply(self, status_code: int, body: Any = None) -> None:
        self.replies.append((status_code, body))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.replies.pop(0) if self.replies else (200, {})
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def parse_config() -> ParseConfig:
    return ParseConfig(application_id=APP_ID, rest_api_key=REST_KEY)


@pytest.fixture
def auth() -> AuthContext:
    return AuthContext(application_id=APP_ID, rest_api_key=REST_KEY)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def http_client(transport: RecordingTransport) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=transport)


@pytest.fixture
def serializer() -> ParseSerializer:
    return ParseSerializer()


@pytest.fixture
def adapter(
    parse_config: ParseConfig,
    http_client: httpx.AsyncClient,
    auth: AuthContext,
    serializer: ParseSerializer,
) -> ParseAdapter:
    return ParseAdapter(parse_config, http_client, auth, serializer)


@pytest.fixture
def store(adapter: ParseAdapter, serializer: ParseSerializer) -> Store:
    return Store(adapter, serializer)

