"""Path resolution from record types to Parse REST paths."""

from parse_adapter.domain.record.model import registry
from parse_adapter.domain.record.model.record import Model, capitalize
from parse_adapter.domain.record.model.user import ParseUser
from parse_adapter.domain.session.port.transport import LOGIN, REQUEST_PASSWORD_RESET

USERS_PATH = "users"
ENDPOINT_TYPES = frozenset({LOGIN, REQUEST_PASSWORD_RESET})


def resolve_path(record_type: type[Model] | str, classes_path: str = "classes") -> str:
    """Return the path segment for a record type.

    ParseUser and its subclasses live under ``users``; ``login`` and
    ``requestPasswordReset`` are endpoints of their own; everything else is
    ``<classes_path>/<ClassName>``. Type keys may be given as strings.
    """
    if isinstance(record_type, str):
        if record_type in ENDPOINT_TYPES:
            return record_type
        if not registry.is_registered(record_type):
            return f"{classes_path}/{capitalize(record_type)}"
        record_type = registry.lookup(record_type)

    if issubclass(record_type, ParseUser):
        return USERS_PATH
    return f"{classes_path}/{record_type.parse_class_name()}"
