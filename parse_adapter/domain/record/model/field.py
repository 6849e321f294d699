"""Attribute and relationship declarations for models.

Declarations are descriptors: the Python attribute name is what application
code uses (``post.created_at``), while ``key`` is the wire name Parse uses
(``createdAt``). Serializers only ever see wire keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from parse_adapter.domain.record.model import registry

if TYPE_CHECKING:
    from parse_adapter.domain.record.model.record import Model

RelationshipKind = Literal["belongsTo", "hasMany"]


@dataclass(frozen=True)
class AttributeMeta:
    """Declared attribute: wire key, type name and default value."""

    key: str
    type: str | None = None
    default: Any = None


@dataclass(frozen=True)
class RelationshipMeta:
    """Declared relationship to another model."""

    key: str
    kind: RelationshipKind
    target: str  # type key of the related model

    @property
    def related_model(self) -> type[Model]:
        return registry.lookup(self.target)


_IRREGULAR_PLURALS = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
}


def singularize(word: str) -> str:
    """Singular form of an English plural, preserving any camelCase prefix.

    Covers regular plurals (``comments``), ``-ies`` (``categories``), sibilant
    ``-es`` (``classes``, ``boxes``, ``matches``) and a few irregular nouns.
    """
    lowered = word.lower()
    for plural, singular in _IRREGULAR_PLURALS.items():
        if lowered.endswith(plural):
            head = word[: len(word) - len(plural)]
            tail = word[len(head) :]
            return head + (singular.capitalize() if tail[:1].isupper() else singular)
    if lowered.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if lowered.endswith(("sses", "shes", "ches", "xes", "zzes")):
        return word[:-2]
    if lowered.endswith(("ss", "us", "is")) or not lowered.endswith("s"):
        return word
    return word[:-1]


def _target_key(target: type[Model] | str) -> str:
    if isinstance(target, str):
        return target
    return target.type_key


class Attribute:
    """Descriptor for a typed attribute."""

    def __init__(self, type: str | None = None, *, key: str | None = None, default: Any = None):
        self._type = type
        self._key = key
        self._default = default
        self.name = ""
        self.meta: AttributeMeta

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.meta = AttributeMeta(key=self._key or name, type=self._type, default=self._default)

    def __get__(self, record: Model | None, owner: type | None = None) -> Any:
        if record is None:
            return self
        return record.get(self.meta.key)

    def __set__(self, record: Model, value: Any) -> None:
        record.set(self.meta.key, value)


class Relationship:
    """Descriptor for a to-one or to-many relationship."""

    def __init__(
        self,
        kind: RelationshipKind,
        target: type[Model] | str | None = None,
        *,
        key: str | None = None,
    ):
        self._kind = kind
        self._target = target
        self._key = key
        self.name = ""
        self.meta: RelationshipMeta

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        key = self._key or name
        if self._target is None:
            # comments -> comment, categories -> category
            target = singularize(key) if self._kind == "hasMany" else key
        else:
            target = _target_key(self._target)
        self.meta = RelationshipMeta(key=key, kind=self._kind, target=target)

    def __get__(self, record: Model | None, owner: type | None = None) -> Any:
        if record is None:
            return self
        return record.get(self.meta.key)

    def __set__(self, record: Model, value: Any) -> None:
        record.set(self.meta.key, value)


def attr(type: str | None = None, *, key: str | None = None, default: Any = None) -> Any:
    """Declare an attribute (``"string"``, ``"number"``, ``"boolean"``, ``"date"``)."""
    return Attribute(type, key=key, default=default)


def belongs_to(target: type[Model] | str | None = None, *, key: str | None = None) -> Any:
    """Declare a to-one relationship, sent to Parse as a Pointer."""
    return Relationship("belongsTo", target, key=key)


def has_many(target: type[Model] | str | None = None, *, key: str | None = None) -> Any:
    """Declare a to-many relationship, loaded lazily through a ``$relatedTo`` query."""
    return Relationship("hasMany", target, key=key)
