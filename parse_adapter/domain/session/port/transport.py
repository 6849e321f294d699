"""SessionTransport port - the raw request primitive used by session flows."""

from typing import Any, Protocol

from parse_adapter.domain.record.model.record import Model

LOGIN = "login"
REQUEST_PASSWORD_RESET = "requestPasswordReset"


class SessionTransport(Protocol):
    """Builds endpoint URLs and sends requests outside the record CRUD path."""

    def build_url(self, record_type: type[Model] | str, id: str | None = None) -> str:
        """Full URL for a model or one of the pseudo-types ``login`` / ``requestPasswordReset``."""
        ...

    async def ajax(
        self, url: str, method: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send one request and return the decoded body; raises ``TransportError``."""
        ...
