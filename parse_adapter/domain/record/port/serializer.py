"""RecordSerializer port - wire format conversion."""

from enum import StrEnum
from typing import Any, Protocol

from parse_adapter.domain.record.model.record import Model
from parse_adapter.domain.record.query import QueryExecutor


class RequestType(StrEnum):
    """The store operation a payload is the response to."""

    FIND = "find"
    FIND_QUERY = "findQuery"
    CREATE = "createRecord"
    UPDATE = "updateRecord"
    DELETE = "deleteRecord"


class RecordSerializer(Protocol):
    """Converts records to outgoing JSON and responses to normalized hashes."""

    def bind_query_executor(self, executor: QueryExecutor) -> None:
        """Set the callable that runs the lazy queries built for to-many relations."""
        ...

    def extract(
        self,
        model: type[Model],
        payload: dict[str, Any],
        id: str | None,
        request_type: RequestType,
    ) -> dict[str, Any]:
        """Normalize a response into ``{type_key: hash}`` or ``{type_key: [hash, ...]}``."""
        ...

    def normalize(self, model: type[Model], hash: dict[str, Any]) -> dict[str, Any]:
        """Normalize one object hash from the wire."""
        ...

    def serialize(self, record: Model) -> dict[str, Any]:
        """Build the outgoing JSON body for a record."""
        ...

    def serialize_into_hash(
        self, hash: dict[str, Any], model: type[Model], record: Model
    ) -> None:
        """Merge the serialized record into a caller-supplied hash."""
        ...
