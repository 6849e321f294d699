"""Attribute transforms between wire scalars and local Python values.

Parse stores dates as UTC ISO-8601 strings with millisecond precision
(``2011-11-07T20:58:34.448Z``). Every date leaving this package is rendered in
exactly that form. Date attributes are truncated to whole milliseconds when
assigned, so ``parse_iso(to_iso(d)) == d`` holds for every stored value.
"""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from parse_adapter.domain.shared.error import InvalidValueError


def to_millis(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime truncated to whole milliseconds.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


def to_iso(value: datetime) -> str:
    """Render a datetime in Parse's canonical ISO-8601 form.

    Naive datetimes are taken to be UTC. Sub-millisecond digits are truncated.
    """
    value = to_millis(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 (or RFC 2822 / HTTP-date) string into an aware UTC datetime.

    Raises:
        InvalidValueError: The string is not a recognised date format
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            raise InvalidValueError(
                f"Not a valid date string: {value!r}", code="invalid_date"
            ) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def canonical_iso(value: str) -> str:
    """Re-encode any accepted date string into the canonical form."""
    return to_iso(parse_iso(value))


class Transform:
    """Identity transform used for untyped attributes."""

    def deserialize(self, value: Any) -> Any:
        return value

    def serialize(self, value: Any) -> Any:
        return value

    def coerce(self, value: Any) -> Any:
        """Normalize a locally assigned value before it is stored on a record."""
        return value


class StringTransform(Transform):
    def deserialize(self, value: Any) -> str | None:
        return None if value is None else str(value)

    def serialize(self, value: Any) -> str | None:
        return None if value is None else str(value)


class NumberTransform(Transform):
    def deserialize(self, value: Any) -> int | float | None:
        if value is None or value == "":
            return None
        if isinstance(value, (int, float)):
            return value
        number = float(value)
        return int(number) if number.is_integer() else number


class BooleanTransform(Transform):
    def deserialize(self, value: Any) -> bool:
        if isinstance(value, str):
            return value.lower() in ("true", "t", "1")
        return bool(value)

    def serialize(self, value: Any) -> bool:
        return bool(value)


class DateTransform(Transform):
    def deserialize(self, value: Any) -> datetime | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            return to_millis(value)
        return parse_iso(value)

    def serialize(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            return canonical_iso(value)
        return to_iso(value)

    def coerce(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return to_millis(value)
        return value


TRANSFORMS: dict[str, Transform] = {
    "string": StringTransform(),
    "number": NumberTransform(),
    "boolean": BooleanTransform(),
    "date": DateTransform(),
}

_IDENTITY = Transform()


def transform_for(attr_type: str | None) -> Transform:
    """Look up the transform for an attribute type (identity when untyped)."""
    if attr_type is None:
        return _IDENTITY
    return TRANSFORMS.get(attr_type, _IDENTITY)
