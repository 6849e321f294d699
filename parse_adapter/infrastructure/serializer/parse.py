"""Serializer for the Parse REST wire format.

Outgoing: dates become ``{"__type": "Date", "iso": ...}``, to-one relationships
become Pointers, server-managed fields are dropped, to-many relationships are
never sent.

Incoming: ``objectId`` becomes ``id``, date objects collapse to canonical ISO
strings, Pointers collapse to ids, and to-many relationships become lazy
``$relatedTo`` queries.
"""

from __future__ import annotations

from typing import Any

from parse_adapter.domain.record.model.field import AttributeMeta, RelationshipMeta
from parse_adapter.domain.record.model.record import Model
from parse_adapter.domain.record.model.transform import canonical_iso, transform_for
from parse_adapter.domain.record.port.serializer import RequestType
from parse_adapter.domain.record.query import QueryExecutor, RelatedQuery

# Parse reserved properties, set by the server only
RESERVED_KEYS = frozenset({"createdAt", "updatedAt", "emailVerified", "sessionToken"})
TIMESTAMP_KEYS = frozenset({"createdAt", "updatedAt"})

TYPE_MARKER = "__type"


def date_value(iso: str | None) -> dict[str, Any]:
    return {TYPE_MARKER: "Date", "iso": iso}


def pointer(class_name: str, object_id: str | None) -> dict[str, Any]:
    return {TYPE_MARKER: "Pointer", "className": class_name, "objectId": object_id}


class ParseSerializer:
    """Converts between records and Parse REST JSON."""

    primary_key = "objectId"

    def __init__(self, query_executor: QueryExecutor | None = None) -> None:
        self._query_executor = query_executor

    def bind_query_executor(self, executor: QueryExecutor) -> None:
        self._query_executor = executor

    # -------------------------------------------------------------------------
    # Incoming
    # -------------------------------------------------------------------------

    def extract(
        self,
        model: type[Model],
        payload: dict[str, Any],
        id: str | None,
        request_type: RequestType,
    ) -> dict[str, Any]:
        payload = self.extract_id(dict(payload), id, request_type)
        normalized = self.normalize_payload(model, payload)
        value = normalized[model.type_key]
        if isinstance(value, list):
            normalized[model.type_key] = [self.normalize(model, dict(h)) for h in value]
        else:
            normalized[model.type_key] = self.normalize(model, value)
        return normalized

    def extract_id(
        self, payload: dict[str, Any], id: str | None, request_type: RequestType
    ) -> dict[str, Any]:
        """Parse does not echo the objectId on updates, so put the known id back."""
        if id is not None and request_type == RequestType.UPDATE:
            payload[self.primary_key] = id
        return payload

    def normalize_payload(self, model: type[Model], payload: dict[str, Any]) -> dict[str, Any]:
        """Wrap single-object and ``results`` list responses under the type key."""
        if "results" in payload:
            return {model.type_key: payload["results"]}
        return {model.type_key: payload}

    def normalize(self, model: type[Model], hash: dict[str, Any]) -> dict[str, Any]:
        if self.primary_key in hash:
            hash["id"] = hash.pop(self.primary_key)
        self.normalize_attributes(model, hash)
        self.normalize_relationships(model, hash)
        return hash

    def normalize_attributes(self, model: type[Model], hash: dict[str, Any]) -> None:
        for key, meta in model.each_attribute():
            if meta.type != "date":
                continue
            value = hash.get(key)
            if isinstance(value, dict):
                hash[key] = value.get("iso")
            elif isinstance(value, str):
                hash[key] = canonical_iso(value)

    def normalize_relationships(self, model: type[Model], hash: dict[str, Any]) -> None:
        for key, relationship in model.each_relationship():
            if relationship.kind == "belongsTo":
                value = hash.get(key)
                if isinstance(value, dict):
                    hash[key] = value.get(self.primary_key)
            elif relationship.kind == "hasMany":
                hash[key] = self._related_query(model, hash.get("id"), relationship)

    def _related_query(
        self, model: type[Model], id: str | None, relationship: RelationshipMeta
    ) -> RelatedQuery:
        query = {
            "where": {
                "$relatedTo": {
                    "object": pointer(model.parse_class_name(), id),
                    "key": relationship.key,
                }
            }
        }
        return RelatedQuery(
            target=relationship.target, query=query, executor=self._query_executor
        )

    # -------------------------------------------------------------------------
    # Outgoing
    # -------------------------------------------------------------------------

    def serialize(self, record: Model) -> dict[str, Any]:
        json: dict[str, Any] = {}
        for key, meta in record.each_attribute():
            self.serialize_attribute(record, json, key, meta)
        for _, relationship in record.each_relationship():
            if relationship.kind == "belongsTo":
                self.serialize_belongs_to(record, json, relationship)
            else:
                self.serialize_has_many(record, json, relationship)
        return json

    def serialize_into_hash(
        self, hash: dict[str, Any], model: type[Model], record: Model
    ) -> None:
        hash.update(self.serialize(record))

    def serialize_attribute(
        self, record: Model, json: dict[str, Any], key: str, meta: AttributeMeta
    ) -> None:
        if key in RESERVED_KEYS:
            json.pop(key, None)
        elif meta.type == "date" and key not in TIMESTAMP_KEYS:
            iso = transform_for("date").serialize(record.get(key))
            json[key] = None if iso is None else date_value(iso)
        else:
            json[key] = transform_for(meta.type).serialize(record.get(key))

    def serialize_belongs_to(
        self, record: Model, json: dict[str, Any], relationship: RelationshipMeta
    ) -> None:
        related = record.get(relationship.key)
        if not related:
            return
        if isinstance(related, Model):
            json[relationship.key] = pointer(related.parse_class_name(), related.id)
        else:
            json[relationship.key] = pointer(
                relationship.related_model.parse_class_name(), related
            )

    def serialize_has_many(
        self, record: Model, json: dict[str, Any], relationship: RelationshipMeta
    ) -> None:
        # Parse relations are read back through $relatedTo queries, never embedded
        pass
