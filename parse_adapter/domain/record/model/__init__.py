"""Record models and field declarations."""

from parse_adapter.domain.record.model.field import (
    AttributeMeta,
    RelationshipMeta,
    attr,
    belongs_to,
    has_many,
)
from parse_adapter.domain.record.model.record import Model, ParseModel, RecordState
from parse_adapter.domain.record.model.user import ParseUser, SessionState

__all__ = [
    "AttributeMeta",
    "Model",
    "ParseModel",
    "ParseUser",
    "RecordState",
    "RelationshipMeta",
    "SessionState",
    "attr",
    "belongs_to",
    "has_many",
]
