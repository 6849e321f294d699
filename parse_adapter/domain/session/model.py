"""Session value objects."""

from dataclasses import dataclass
from typing import Any

from pydantic import ConfigDict, Field

from parse_adapter.domain.shared.error import TransportError
from parse_adapter.domain.shared.model.value import ValueObject


class Session(ValueObject):
    """The persisted current session.

    Stored as ``{"session": <token>, "userId": <objectId>}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    session_token: str = Field(alias="session")
    user_id: str = Field(alias="userId")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class SessionResult:
    """Outcome of a session operation: the success payload or the error."""

    data: dict[str, Any] | None = None
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def payload(self) -> Any:
        """Success body, or the backend's raw error body on failure."""
        if self.error is not None:
            return self.error.payload
        return self.data
