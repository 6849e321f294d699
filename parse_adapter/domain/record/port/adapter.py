"""RecordAdapter port - transport for record CRUD."""

from typing import Any, Protocol

from parse_adapter.domain.record.model.record import Model


class RecordAdapter(Protocol):
    """Issues record requests against the backend.

    Every method returns the decoded response body and raises
    ``TransportError`` on failure.
    """

    async def create(self, model: type[Model], record: Model) -> dict[str, Any]:
        """POST a new record."""
        ...

    async def read(self, model: type[Model], id: str) -> dict[str, Any]:
        """GET a single record by id."""
        ...

    async def update(self, model: type[Model], id: str, record: Model) -> dict[str, Any]:
        """PUT the record and return the sent hash merged with the response."""
        ...

    async def delete(self, model: type[Model], id: str) -> dict[str, Any]:
        """DELETE a record by id."""
        ...

    async def query(self, model: type[Model], query: dict[str, Any]) -> dict[str, Any]:
        """GET the records matching ``query`` (``{"where": {...}, ...}``)."""
        ...
