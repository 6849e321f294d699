"""Manages parse-adapter directories following the XDG Base Directory spec.

Directory layout:
    ~/.config/parse-adapter/
        config.yaml         # User configuration

    ~/.local/state/parse-adapter/
        session/
            parse_user.json # Current session (token + user id)
"""

import os
from pathlib import Path

APP_NAME = "parse-adapter"


class ParsePaths:
    """Manages parse-adapter paths.

    Honors XDG_CONFIG_HOME / XDG_STATE_HOME and supports overriding each
    directory for testing.
    """

    def __init__(
        self,
        *,
        config_dir: Path | None = None,
        state_dir: Path | None = None,
    ) -> None:
        home = Path.home()
        config_home = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
        state_home = Path(os.environ.get("XDG_STATE_HOME") or home / ".local" / "state")
        self._config_dir = config_dir or config_home / APP_NAME
        self._state_dir = state_dir or state_home / APP_NAME

    @property
    def config_dir(self) -> Path:
        """Config directory (~/.config/parse-adapter)."""
        return self._config_dir

    @property
    def state_dir(self) -> Path:
        """State directory (~/.local/state/parse-adapter)."""
        return self._state_dir

    @property
    def config_file(self) -> Path:
        """Main config file."""
        return self._config_dir / "config.yaml"

    @property
    def session_dir(self) -> Path:
        """Directory holding persisted sessions."""
        return self._state_dir / "session"
