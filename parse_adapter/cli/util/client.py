"""Container lifecycle for CLI commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer

from parse_adapter.config import Config, configure_logging
from parse_adapter.di import create_container


@asynccontextmanager
async def open_client(config: Config | None = None) -> AsyncIterator[AsyncContainer]:
    """Yield a DI container for one command and close it (and its HTTP client) after."""
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    container = create_container(config)
    try:
        yield container
    finally:
        await container.close()
