"""SessionStorage implementations."""

from parse_adapter.infrastructure.storage.file import FileSessionStorage
from parse_adapter.infrastructure.storage.memory import InMemorySessionStorage

__all__ = ["FileSessionStorage", "InMemorySessionStorage"]
