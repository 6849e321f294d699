"""Parse user model."""

from enum import StrEnum

from parse_adapter.domain.record.model.field import attr
from parse_adapter.domain.record.model.record import ParseModel


class SessionState(StrEnum):
    """Authentication state of a user record.

    anonymous -> authenticating -> authenticated | anonymous
    authenticated -> resetting_password -> authenticated
    authenticated -> anonymous (logout)
    """

    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    RESETTING_PASSWORD = "resetting_password"


class ParseUser(ParseModel, type_key="user"):
    """A Parse ``_User``; any subclass is routed to the ``users`` endpoint.

    Session fields (``is_current``, ``session_state``) are written only by
    ``SessionManager``.
    """

    username = attr("string")
    password = attr("string")
    email = attr("string")
    email_verified = attr("boolean", key="emailVerified")
    session_token = attr("string", key="sessionToken")

    def __init__(self, **values) -> None:
        super().__init__(**values)
        self.current_user = False
        self.session_state = SessionState.ANONYMOUS

    @property
    def is_current(self) -> bool:
        return bool(self.current_user)
