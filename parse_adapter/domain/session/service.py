"""Session manager for the current-user lifecycle."""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from parse_adapter.domain.record.model.record import RecordState
from parse_adapter.domain.record.model.user import ParseUser, SessionState
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.auth import AuthContext
from parse_adapter.domain.session.model import Session, SessionResult
from parse_adapter.domain.session.port.storage import SessionStorage
from parse_adapter.domain.session.port.transport import (
    LOGIN,
    REQUEST_PASSWORD_RESET,
    SessionTransport,
)
from parse_adapter.domain.shared.error import AuthenticationFailure, TransportError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "parse_user"


@dataclass
class SessionManager:
    """Owns the current session.

    - sign_up / login: authenticate a user record and persist its session
    - logout: forget the session locally (no request)
    - request_password_reset: ask Parse to email a reset link
    - save: save a user record authenticated as its own session

    Session state lives in exactly two places, durable storage and the
    AuthContext. Both are updated together with no await in between.
    """

    _store: Store
    _transport: SessionTransport
    _storage: SessionStorage
    _auth: AuthContext
    _storage_key: str = DEFAULT_STORAGE_KEY

    def current_session(self) -> Session | None:
        """Read the stored session, or None if there is none."""
        raw = self._storage.get(self._storage_key)
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring corrupt session entry under key=%s", self._storage_key)
            return None

    def restore(self) -> Session | None:
        """Authenticate subsequent requests with the stored session, if any."""
        session = self.current_session()
        if session is not None:
            self._auth.authenticate(session.session_token)
            logger.debug("Restored session for user_id=%s", session.user_id)
        return session

    async def sign_up(
        self,
        user: ParseUser,
        *,
        username: str | None = None,
        password: str | None = None,
        email: str | None = None,
    ) -> SessionResult:
        """Create the user on Parse and make it the current user.

        Args:
            user: A new user record; other attributes are sent alongside
            username, password, email: Override the record's credentials

        Returns:
            SessionResult with the signup response, or an AuthenticationFailure
        """
        self._apply_credentials(user, username=username, password=password, email=email)

        body = self._store.serializer.serialize(user)
        body.update(username=user.username, password=user.password, email=user.email)

        previous = user.state
        user.transition_to(RecordState.SAVING)
        url = self._transport.build_url(type(user))
        return await self._authenticate(user, url, "POST", body, previous)

    async def login(
        self,
        user: ParseUser,
        *,
        username: str | None = None,
        password: str | None = None,
    ) -> SessionResult:
        """Log in with username/password and make ``user`` the current user.

        Parse's login endpoint is a GET with the credentials as query parameters.
        """
        self._apply_credentials(user, username=username, password=password)
        params = {"username": user.username, "password": user.password}
        url = self._transport.build_url(LOGIN)
        return await self._authenticate(user, url, "GET", params, user.state)

    def logout(self, user: ParseUser) -> None:
        """Forget the current session. No request is sent."""
        self._clear(user)
        logger.info("Logged out user_id=%s", user.id)

    async def request_password_reset(
        self, user: ParseUser, email: str | None = None
    ) -> SessionResult:
        """Ask Parse to send a password reset email. Session state is untouched."""
        previous = user.session_state
        user.session_state = SessionState.RESETTING_PASSWORD
        url = self._transport.build_url(REQUEST_PASSWORD_RESET)
        try:
            data = await self._transport.ajax(url, "POST", {"email": email or user.email})
        except TransportError as e:
            logger.warning("Password reset request failed: status=%s", e.status_code)
            return SessionResult(error=e)
        finally:
            user.session_state = previous
        return SessionResult(data=data)

    async def save(self, user: ParseUser) -> ParseUser:
        """Save a user, sending its session token when it is the current user."""
        session = self.current_session()
        if session is not None and user.id == session.user_id:
            self._auth.authenticate(user.session_token or session.session_token)
        return await self._store.save(user)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _apply_credentials(user: ParseUser, **credentials: str | None) -> None:
        user.set_properties({k: v for k, v in credentials.items() if v is not None})

    async def _authenticate(
        self,
        user: ParseUser,
        url: str,
        method: str,
        data: dict[str, Any],
        previous: RecordState,
    ) -> SessionResult:
        user.session_state = SessionState.AUTHENTICATING
        try:
            response = await self._transport.ajax(url, method, data)
            if (
                not isinstance(response, dict)
                or not response.get("sessionToken")
                or not response.get("objectId")
            ):
                raise TransportError("Response did not include a session", payload=response)
        except TransportError as e:
            user.transition_to(previous)
            self._clear(user)
            logger.warning(
                "Authentication failed for username=%s: status=%s",
                user.username,
                e.status_code,
            )
            return SessionResult(error=AuthenticationFailure.from_transport(e))

        self._persist(user, response)
        logger.info("Authenticated user_id=%s", user.id)
        return SessionResult(data=response)

    def _persist(self, user: ParseUser, response: dict[str, Any]) -> None:
        hash = self._store.serializer.normalize(type(user), dict(response))
        hash["password"] = None
        user.load_data(hash)

        session = Session(session_token=response["sessionToken"], user_id=response["objectId"])
        self._storage.set(self._storage_key, session.to_json())
        self._auth.authenticate(session.session_token)
        user.current_user = True
        user.session_state = SessionState.AUTHENTICATED

    def _clear(self, user: ParseUser) -> None:
        self._storage.remove(self._storage_key)
        self._auth.clear()
        user.current_user = False
        user.session_state = SessionState.ANONYMOUS
