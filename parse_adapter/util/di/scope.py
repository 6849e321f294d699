"""Custom Dishka scopes for parse-adapter."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    - APP: Client lifetime (HTTP client, auth context, session manager)
    """

    APP = new_scope("APP")
