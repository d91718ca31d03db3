"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP API and the CLI can catch them uniformly.  The HTTP layer maps
each subclass to a status code; nothing in the domain knows about HTTP.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` optionally maps a field name to a field-level message.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: dict[str, str] = dict(errors or {})

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        return cls(message, {field: message})


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The caller does not own the resource or lacks the required role."""


class AuthenticationError(DomainException):
    """The operation requires an authenticated user."""


class ConflictError(DomainException):
    """The operation would duplicate an existing entity."""
