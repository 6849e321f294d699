"""HTTP adapter for the Parse REST API."""

import json
import logging
from typing import Any

import httpx

from parse_adapter.config import ParseConfig
from parse_adapter.domain.record.model.record import Model
from parse_adapter.domain.record.port.serializer import RecordSerializer
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.domain.shared.error import TransportError
from parse_adapter.infrastructure.http.path import resolve_path
from parse_adapter.infrastructure.serializer.parse import ParseSerializer

logger = logging.getLogger(__name__)


class ParseAdapter:
    """RecordAdapter and SessionTransport implementation over httpx.

    Every request carries the headers of the shared ``AuthContext``. The
    adapter never writes to it.
    """

    def __init__(
        self,
        config: ParseConfig,
        http_client: httpx.AsyncClient,
        auth: AuthContext,
        serializer: RecordSerializer | None = None,
    ) -> None:
        self._config = config
        self._http = http_client
        self._auth = auth
        self._serializer = serializer or ParseSerializer()

    @property
    def headers(self) -> dict[str, str]:
        return self._auth.headers()

    # -------------------------------------------------------------------------
    # URLs
    # -------------------------------------------------------------------------

    def path_for_type(self, record_type: type[Model] | str) -> str:
        return resolve_path(record_type, self._config.classes_path)

    def build_url(self, record_type: type[Model] | str, id: str | None = None) -> str:
        parts = [self._config.host.rstrip("/")]
        if self._config.namespace:
            parts.append(self._config.namespace.strip("/"))
        parts.append(self.path_for_type(record_type))
        if id is not None:
            parts.append(id)
        return "/".join(parts)

    # -------------------------------------------------------------------------
    # Request primitive
    # -------------------------------------------------------------------------

    async def ajax(
        self, url: str, method: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON body.

        GET sends ``data`` as query parameters (dicts and lists JSON-encoded,
        as Parse expects for ``where``); other methods send it as a JSON body.

        Raises:
            TransportError: Non-2xx status (payload is the decoded error body),
                a 2xx body that is not a JSON object, or no response at all
                (payload is None)
        """
        kwargs: dict[str, Any] = {"headers": self._auth.headers()}
        if data is not None:
            if method == "GET":
                kwargs["params"] = _encode_params(data)
            else:
                kwargs["json"] = data

        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error("Parse request failed: %s %s: %s", method, url, e)
            raise TransportError(f"Request to {url} failed: {e}") from e

        body = _decode_body(response)
        if response.is_error:
            logger.debug(
                "Parse request rejected: %s %s status=%d", method, url, response.status_code
            )
            raise TransportError(
                f"Parse request failed: {response.status_code}",
                payload=body,
                status_code=response.status_code,
            )
        if body is None:
            return {}
        if not isinstance(body, dict):
            logger.debug("Parse response is not an object: %s %s", method, url)
            raise TransportError(
                f"Unexpected response body from {url}",
                payload=body,
                status_code=response.status_code,
                code="unexpected_response",
            )
        return body

    # -------------------------------------------------------------------------
    # Record operations
    # -------------------------------------------------------------------------

    async def create(self, model: type[Model], record: Model) -> dict[str, Any]:
        data = self._serializer.serialize(record)
        return await self.ajax(self.build_url(model), "POST", data)

    async def read(self, model: type[Model], id: str) -> dict[str, Any]:
        return await self.ajax(self.build_url(model, id), "GET")

    async def update(self, model: type[Model], id: str, record: Model) -> dict[str, Any]:
        """PUT the record and merge the response onto what was sent.

        Parse answers updates with only ``updatedAt``, so resolving with the
        raw response would drop every other field.
        """
        data: dict[str, Any] = {}
        self._serializer.serialize_into_hash(data, model, record)
        response = await self.ajax(self.build_url(model, id), "PUT", data)
        return {**data, **response}

    async def delete(self, model: type[Model], id: str) -> dict[str, Any]:
        return await self.ajax(self.build_url(model, id), "DELETE")

    async def query(self, model: type[Model], query: dict[str, Any]) -> dict[str, Any]:
        return await self.ajax(self.build_url(model), "GET", query)


def _encode_params(data: dict[str, Any]) -> dict[str, Any]:
    return {
        key: json.dumps(value) if isinstance(value, (dict, list)) else value
        for key, value in data.items()
        if value is not None
    }


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
