"""Global model registry keyed by type key.

Models register themselves when their class is created, so relationships can
name their target by string before the target class exists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse_adapter.domain.shared.error import UnknownModelError

if TYPE_CHECKING:
    from parse_adapter.domain.record.model.record import Model

_models: dict[str, type[Model]] = {}


def register(model: type[Model]) -> None:
    """Register a model under its type key. A later class with the same key wins."""
    _models[model.type_key] = model


def lookup(type_key: str) -> type[Model]:
    """Return the model registered under ``type_key``."""
    try:
        return _models[type_key]
    except KeyError:
        raise UnknownModelError(
            f"No model registered for type key '{type_key}'",
            code="unknown_model",
        ) from None


def is_registered(type_key: str) -> bool:
    return type_key in _models
