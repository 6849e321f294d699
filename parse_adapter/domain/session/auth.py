"""Authentication context shared by every request."""

APPLICATION_ID_HEADER = "X-Parse-Application-Id"
REST_API_KEY_HEADER = "X-Parse-REST-API-Key"
SESSION_TOKEN_HEADER = "X-Parse-Session-Token"


class AuthContext:
    """Credentials attached to each request.

    The adapter reads it through ``headers()``; only ``SessionManager`` calls
    ``authenticate`` and ``clear``.
    """

    def __init__(
        self,
        application_id: str,
        rest_api_key: str,
        session_token: str | None = None,
    ) -> None:
        self._application_id = application_id
        self._rest_api_key = rest_api_key
        self._session_token = session_token

    @property
    def application_id(self) -> str:
        return self._application_id

    @property
    def session_token(self) -> str | None:
        return self._session_token

    def headers(self) -> dict[str, str]:
        """Return a fresh header dict for one request."""
        headers = {
            APPLICATION_ID_HEADER: self._application_id,
            REST_API_KEY_HEADER: self._rest_api_key,
        }
        if self._session_token:
            headers[SESSION_TOKEN_HEADER] = self._session_token
        return headers

    def authenticate(self, session_token: str | None) -> None:
        self._session_token = session_token

    def clear(self) -> None:
        self._session_token = None
