"""Store - the entry point for record operations.

The store owns no records: it builds them from responses and hands them back.
All network access goes through the adapter, all wire conversion through the
serializer.
"""

import logging
from typing import Any, TypeVar

from parse_adapter.domain.record.model import registry
from parse_adapter.domain.record.model.record import Model, RecordState
from parse_adapter.domain.record.port.adapter import RecordAdapter
from parse_adapter.domain.record.port.serializer import RecordSerializer, RequestType
from parse_adapter.domain.shared.error import RecordStateError, TransportError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)


class Store:
    """Routes record lifecycle operations to the adapter and serializer."""

    def __init__(self, adapter: RecordAdapter, serializer: RecordSerializer) -> None:
        self.adapter = adapter
        self.serializer = serializer
        # Lazy relation queries built by the serializer execute through the store
        serializer.bind_query_executor(self.find_query)

    def model_for(self, model: type[M] | str) -> type[M]:
        if isinstance(model, str):
            return registry.lookup(model)  # type: ignore[return-value]
        return model

    def create_record(self, model: type[M] | str, **values: Any) -> M:
        """Create a new, unsaved record."""
        return self.model_for(model)(**values)

    def load(self, model: type[M] | str, payload: dict[str, Any]) -> M:
        """Materialize a record from a raw wire payload without a request."""
        model_cls = self.model_for(model)
        hash = self.serializer.normalize(model_cls, dict(payload))
        record = model_cls()
        record.load_data(hash)
        return record

    async def find(self, model: type[M] | str, id: str) -> M:
        """Fetch a record by id."""
        model_cls = self.model_for(model)
        record = model_cls()
        record.id = id
        record.transition_to(RecordState.LOADING)
        payload = await self.adapter.read(model_cls, id)
        extracted = self.serializer.extract(model_cls, payload, id, RequestType.FIND)
        record.load_data(extracted[model_cls.type_key])
        return record

    async def find_query(self, model: type[M] | str, query: dict[str, Any]) -> list[M]:
        """Fetch every record matching a Parse query."""
        model_cls = self.model_for(model)
        payload = await self.adapter.query(model_cls, query)
        extracted = self.serializer.extract(model_cls, payload, None, RequestType.FIND_QUERY)
        hashes = extracted[model_cls.type_key]
        if isinstance(hashes, dict):
            hashes = [hashes]
        records = []
        for hash in hashes:
            record = model_cls()
            record.load_data(hash)
            records.append(record)
        return records

    async def save(self, record: M) -> M:
        """Create the record if it is new, otherwise update it."""
        if record.is_deleted:
            raise RecordStateError("Cannot save a deleted record", code="record_deleted")

        model_cls = type(record)
        previous = record.state
        record.transition_to(RecordState.SAVING)
        try:
            if previous is RecordState.NEW:
                payload = await self.adapter.create(model_cls, record)
                request_type = RequestType.CREATE
            else:
                if record.id is None:
                    raise RecordStateError(
                        "Cannot update a record without an id", code="missing_id"
                    )
                payload = await self.adapter.update(model_cls, record.id, record)
                request_type = RequestType.UPDATE
        except (TransportError, RecordStateError):
            record.transition_to(previous)
            raise

        extracted = self.serializer.extract(model_cls, payload, record.id, request_type)
        record.load_data(extracted[model_cls.type_key])
        logger.debug("Saved %s id=%s", model_cls.parse_class_name(), record.id)
        return record

    async def delete_record(self, record: Model) -> None:
        """Delete a saved record on the server."""
        if record.id is None:
            raise RecordStateError("Cannot delete an unsaved record", code="missing_id")
        await self.adapter.delete(type(record), record.id)
        record.transition_to(RecordState.DELETED)
