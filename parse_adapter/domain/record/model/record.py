"""Record base classes and lifecycle state."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from enum import StrEnum
from typing import Any, ClassVar

from parse_adapter.domain.record.model import registry
from parse_adapter.domain.record.model.field import (
    Attribute,
    AttributeMeta,
    Relationship,
    RelationshipMeta,
    attr,
)
from parse_adapter.domain.record.model.transform import transform_for


class RecordState(StrEnum):
    """Lifecycle state of a record."""

    NEW = "new"  # Created locally, never saved
    LOADING = "loading"  # Find in flight
    LOADED = "loaded"  # Matches the server as of the last response
    SAVING = "saving"  # Create/update in flight
    DELETED = "deleted"


def capitalize(name: str) -> str:
    """Upper-case the first letter and leave the rest unchanged."""
    return name[:1].upper() + name[1:]


class Model:
    """Base class for records synchronised with Parse.

    Subclasses declare fields with ``attr``, ``belongs_to`` and ``has_many``::

        class Post(ParseModel):
            title = attr("string")
            author = belongs_to("user")
            comments = has_many()

    Class keywords ``type_key`` and ``class_name`` override the derived names.
    """

    type_key: ClassVar[str] = "model"
    parse_class: ClassVar[str] = "Model"
    attributes: ClassVar[dict[str, AttributeMeta]] = {}
    relationships: ClassVar[dict[str, RelationshipMeta]] = {}

    def __init_subclass__(
        cls,
        type_key: str | None = None,
        class_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        cls.type_key = type_key or cls.__name__[:1].lower() + cls.__name__[1:]
        cls.parse_class = class_name or capitalize(cls.type_key)

        attributes: dict[str, AttributeMeta] = {}
        relationships: dict[str, RelationshipMeta] = {}
        for klass in reversed(cls.__mro__):
            for value in vars(klass).values():
                if isinstance(value, Attribute):
                    attributes[value.meta.key] = value.meta
                elif isinstance(value, Relationship):
                    relationships[value.meta.key] = value.meta
        cls.attributes = attributes
        cls.relationships = relationships

        registry.register(cls)

    def __init__(self, **values: Any) -> None:
        self.id: str | None = None
        self.state = RecordState.NEW
        # Defaults are copied so a mutable default is never shared between records
        self._data: dict[str, Any] = {
            key: copy.deepcopy(meta.default) for key, meta in self.attributes.items()
        }
        self._dirty: set[str] = set()
        for name, value in values.items():
            self._assign(name, value)

    # -------------------------------------------------------------------------
    # Type metadata
    # -------------------------------------------------------------------------

    @classmethod
    def parse_class_name(cls) -> str:
        """Class name of this model on the Parse backend."""
        return cls.parse_class

    @classmethod
    def each_attribute(cls) -> Iterator[tuple[str, AttributeMeta]]:
        yield from cls.attributes.items()

    @classmethod
    def each_relationship(cls) -> Iterator[tuple[str, RelationshipMeta]]:
        yield from cls.relationships.items()

    # -------------------------------------------------------------------------
    # Field access (by wire key)
    # -------------------------------------------------------------------------

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        if key not in self.attributes and key not in self.relationships:
            raise AttributeError(f"{type(self).__name__} has no field '{key}'")
        if key in self.attributes:
            value = transform_for(self.attributes[key].type).coerce(value)
        if self._data.get(key) != value or key not in self._data:
            self._data[key] = value
            self._dirty.add(key)

    def set_properties(self, values: dict[str, Any]) -> None:
        for key, value in values.items():
            self.set(key, value)

    def _assign(self, name: str, value: Any) -> None:
        """Set a field by Python attribute name or wire key."""
        declared = getattr(type(self), name, None)
        if isinstance(declared, (Attribute, Relationship)):
            setattr(self, name, value)
        else:
            self.set(name, value)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_new(self) -> bool:
        return self.state is RecordState.NEW

    @property
    def is_loading(self) -> bool:
        return self.state is RecordState.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.state is RecordState.LOADED

    @property
    def is_saving(self) -> bool:
        return self.state is RecordState.SAVING

    @property
    def is_deleted(self) -> bool:
        return self.state is RecordState.DELETED

    @property
    def is_dirty(self) -> bool:
        return self.state is RecordState.NEW or bool(self._dirty)

    @property
    def changed_keys(self) -> frozenset[str]:
        return frozenset(self._dirty)

    def transition_to(self, state: RecordState) -> None:
        self.state = state

    def load_data(self, data: dict[str, Any]) -> None:
        """Apply a normalized hash from the server and mark the record clean.

        Only keys present in ``data`` are touched; declared attributes are run
        through their transform (ISO strings become datetimes).
        """
        if data.get("id") is not None:
            self.id = data["id"]
        for key, meta in self.attributes.items():
            if key in data:
                self._data[key] = transform_for(meta.type).deserialize(data[key])
        for key in self.relationships:
            if key in data:
                self._data[key] = data[key]
        self._dirty.clear()
        self.state = RecordState.LOADED

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} state={self.state.value}>"


class ParseModel(Model, type_key="parseModel"):
    """Model with the timestamps every Parse object carries."""

    created_at = attr("date", key="createdAt")
    updated_at = attr("date", key="updatedAt")
