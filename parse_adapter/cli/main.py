"""Main CLI application using Cyclopts.

The CLI talks to Parse directly; the stored session is shared between
invocations through the session directory.
"""

import cyclopts

from parse_adapter.cli.commands import record, user

app = cyclopts.App(
    name="parse-adapter",
    help="Parse REST API client",
)

app.command(user.app, name="user")
app.command(record.app, name="record")


def main() -> None:
    app()
