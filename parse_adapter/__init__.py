"""parse-adapter - record and session client for the Parse REST API."""

from parse_adapter.domain.record.model import (
    Model,
    ParseModel,
    ParseUser,
    RecordState,
    SessionState,
    attr,
    belongs_to,
    has_many,
)
from parse_adapter.domain.record.query import RelatedQuery
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.domain.session.model import Session, SessionResult
from parse_adapter.domain.session.service import SessionManager
from parse_adapter.infrastructure.http.adapter import ParseAdapter
from parse_adapter.infrastructure.serializer.parse import ParseSerializer

__all__ = [
    "AuthContext",
    "Model",
    "ParseAdapter",
    "ParseModel",
    "ParseSerializer",
    "ParseUser",
    "RecordState",
    "RelatedQuery",
    "Session",
    "SessionManager",
    "SessionResult",
    "SessionState",
    "Store",
    "attr",
    "belongs_to",
    "has_many",
]
