"""Error hierarchy for parse-adapter.

Error layers:
- ParseAdapterError: Base class for all parse-adapter errors
- DomainError: Misuse of records or models (invalid state, unknown type, bad value)
- InfrastructureError: Transport, storage and configuration failures

Transport errors carry the backend's decoded error body unchanged so callers can
inspect Parse's own ``{"code": ..., "error": ...}`` payload.
"""

from typing import Any


class ParseAdapterError(Exception):
    """Base class for all parse-adapter errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (record/model misuse)
# =============================================================================


class DomainError(ParseAdapterError):
    """Base class for domain errors."""


class RecordStateError(DomainError):
    """Operation not allowed in the record's current lifecycle state."""


class UnknownModelError(DomainError):
    """No model is registered under the requested type key."""


class InvalidValueError(DomainError):
    """A wire value could not be decoded into its attribute type."""


# =============================================================================
# Infrastructure Errors (network, storage, configuration)
# =============================================================================


class InfrastructureError(ParseAdapterError):
    """Base class for infrastructure/system errors."""


class TransportError(InfrastructureError):
    """HTTP request failed.

    ``payload`` is the decoded response body exactly as the backend sent it
    (``None`` when the request never produced a response).
    """

    def __init__(
        self,
        message: str,
        payload: Any = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.payload = payload
        self.status_code = status_code


class AuthenticationFailure(TransportError):
    """Signup or login rejected by the backend."""

    @classmethod
    def from_transport(cls, error: TransportError) -> "AuthenticationFailure":
        return cls(
            error.message,
            payload=error.payload,
            status_code=error.status_code,
            code="authentication_failed",
        )


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
