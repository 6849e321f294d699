"""User session commands (signup/login/logout/whoami/reset-password)."""

import asyncio
import sys

import cyclopts

from parse_adapter.cli.console import get_console
from parse_adapter.cli.util.client import open_client
from parse_adapter.domain.record.model.user import ParseUser
from parse_adapter.domain.record.store import Store
from parse_adapter.domain.session.model import SessionResult
from parse_adapter.domain.session.service import SessionManager
from parse_adapter.domain.shared.error import ParseAdapterError, TransportError

app = cyclopts.App(name="user", help="Sign up, log in and manage the current user")


def _fail(message: str, payload: object = None) -> None:
    console = get_console()
    hint = None
    if isinstance(payload, dict) and "error" in payload:
        hint = f"Parse error {payload.get('code', '?')}: {payload['error']}"
    console.error(message, hint=hint)
    sys.exit(1)


def _report(result: SessionResult, success: str, failure: str) -> None:
    if result.ok:
        get_console().success(success)
    else:
        _fail(failure, result.payload)


@app.command
def signup(username: str, password: str, /, email: str | None = None) -> None:
    """Create a Parse user and store its session.

    Args:
        username: Username for the new account.
        password: Password for the new account.
        email: Optional email address.
    """

    async def run() -> SessionResult:
        async with open_client() as container:
            manager = await container.get(SessionManager)
            store = await container.get(Store)
            user = store.create_record(ParseUser)
            return await manager.sign_up(user, username=username, password=password, email=email)

    try:
        result = asyncio.run(run())
    except ParseAdapterError as e:
        _fail(e.message)
        return
    _report(result, f"Signed up as {username}", "Signup failed")


@app.command
def login(username: str, password: str, /) -> None:
    """Log in and store the session for later commands.

    Args:
        username: Account username.
        password: Account password.
    """

    async def run() -> SessionResult:
        async with open_client() as container:
            manager = await container.get(SessionManager)
            store = await container.get(Store)
            user = store.create_record(ParseUser)
            return await manager.login(user, username=username, password=password)

    try:
        result = asyncio.run(run())
    except ParseAdapterError as e:
        _fail(e.message)
        return
    _report(result, f"Logged in as {username}", "Login failed")


@app.command
def logout() -> None:
    """Forget the stored session. Nothing is sent to Parse."""

    async def run() -> bool:
        async with open_client() as container:
            manager = await container.get(SessionManager)
            session = manager.current_session()
            if session is None:
                return False
            user = ParseUser()
            user.id = session.user_id
            manager.logout(user)
            return True

    try:
        logged_out = asyncio.run(run())
    except ParseAdapterError as e:
        _fail(e.message)
        return
    if logged_out:
        get_console().success("Logged out")
    else:
        get_console().info("No active session")


@app.command
def whoami() -> None:
    """Show the user of the stored session."""

    async def run() -> ParseUser | None:
        async with open_client() as container:
            manager = await container.get(SessionManager)
            session = manager.current_session()
            if session is None:
                return None
            store = await container.get(Store)
            return await store.find(ParseUser, session.user_id)

    try:
        user = asyncio.run(run())
    except TransportError as e:
        _fail("Could not fetch the current user", e.payload)
        return
    except ParseAdapterError as e:
        _fail(e.message)
        return

    if user is None:
        get_console().info("Not logged in")
        return
    get_console().fields(
        {
            "objectId": user.id,
            "username": user.username,
            "email": user.email,
            "createdAt": user.created_at,
        },
        title="Current user",
    )


@app.command(name="reset-password")
def reset_password(email: str, /) -> None:
    """Ask Parse to email a password reset link.

    Args:
        email: Email address of the account.
    """

    async def run() -> SessionResult:
        async with open_client() as container:
            manager = await container.get(SessionManager)
            return await manager.request_password_reset(ParseUser(), email)

    try:
        result = asyncio.run(run())
    except ParseAdapterError as e:
        _fail(e.message)
        return
    _report(result, f"Password reset email requested for {email}", "Password reset failed")
