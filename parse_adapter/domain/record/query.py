"""Deferred relation query produced when normalizing to-many relationships."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Generator
from dataclasses import dataclass, field
from typing import Any

from parse_adapter.domain.record.model import registry
from parse_adapter.domain.record.model.record import Model
from parse_adapter.domain.shared.error import RecordStateError

QueryExecutor = Callable[[type[Model], dict[str, Any]], Awaitable[list[Model]]]


@dataclass(frozen=True)
class RelatedQuery:
    """A not-yet-executed query for the records on the other side of a relation.

    Nothing is sent until the query is awaited or iterated; each await issues
    a fresh request. The related model is looked up by type key only then, so
    an unregistered target breaks this relation and not the owning record.

        comments = await post.comments
        async for comment in post.comments: ...
    """

    target: str  # type key of the related model
    query: dict[str, Any]
    executor: QueryExecutor | None = field(default=None, repr=False, compare=False)

    @property
    def model(self) -> type[Model]:
        return registry.lookup(self.target)

    async def execute(self) -> list[Model]:
        if self.executor is None:
            raise RecordStateError(
                f"Query for {self.target} is not bound to a store",
                code="unbound_query",
            )
        return await self.executor(self.model, self.query)

    def __await__(self) -> Generator[Any, None, list[Model]]:
        return self.execute().__await__()

    async def __aiter__(self) -> AsyncIterator[Model]:
        for record in await self.execute():
            yield record
