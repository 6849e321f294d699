"""Raw object commands for any Parse class."""

import asyncio
import json
import sys
from typing import Any

import cyclopts

from parse_adapter.cli.console import get_console
from parse_adapter.cli.util.client import open_client
from parse_adapter.domain.shared.error import ParseAdapterError, TransportError
from parse_adapter.infrastructure.http.adapter import ParseAdapter

app = cyclopts.App(name="record", help="Read objects of any Parse class")

DEFAULT_COLUMNS = ["objectId", "createdAt", "updatedAt"]


def _run(request: Any) -> dict[str, Any]:
    """Run a request coroutine, exiting with an error on failure."""
    console = get_console()
    try:
        return asyncio.run(request)
    except TransportError as e:
        payload = e.payload if isinstance(e.payload, dict) else {}
        hint = None
        if "code" in payload:
            hint = f"Parse error {payload['code']}: {payload.get('error')}"
        console.error(e.message, hint=hint)
    except ParseAdapterError as e:
        console.error(e.message)
    sys.exit(1)


@app.command
def get(class_name: str, object_id: str, /) -> None:
    """Fetch one object by id.

    Args:
        class_name: Parse class (e.g. 'GameScore').
        object_id: The object's objectId.
    """

    async def run() -> dict[str, Any]:
        async with open_client() as container:
            adapter = await container.get(ParseAdapter)
            return await adapter.ajax(adapter.build_url(class_name, object_id), "GET")

    obj = _run(run())
    get_console().fields(obj, title=f"{class_name} {object_id}")


@app.command
def query(class_name: str, /, where: str | None = None, limit: int = 20) -> None:
    """List objects of a class, optionally filtered.

    Args:
        class_name: Parse class (e.g. 'GameScore').
        where: Parse query constraints as JSON, e.g. '{"score": {"$gt": 100}}'.
        limit: Maximum number of objects to return.
    """
    params: dict[str, Any] = {"limit": limit}
    if where:
        try:
            params["where"] = json.loads(where)
        except json.JSONDecodeError as e:
            get_console().error(f"--where is not valid JSON: {e}")
            sys.exit(1)

    async def run() -> dict[str, Any]:
        async with open_client() as container:
            adapter = await container.get(ParseAdapter)
            return await adapter.ajax(adapter.build_url(class_name), "GET", params)

    results = _run(run()).get("results", [])
    if not results:
        get_console().info(f"No {class_name} objects found")
        return

    extra = [key for key in results[0] if key not in DEFAULT_COLUMNS][:4]
    get_console().table(results, DEFAULT_COLUMNS + extra, title=class_name)
