"""
Errors
------

The failures a service operation can end in. Every guard in the
managers raises one of these, so callers can tell a rejected
request apart from a legitimate result (such as a zero fee).
"""


class ServiceError(Exception):
    """Base class for all service failures."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class NotFoundError(ServiceError):
    """Raised when an identifier does not resolve to a record."""


class InvalidStateError(ServiceError):
    """Raised when an operation is attempted from the wrong lifecycle state."""


class ValidationError(ServiceError):
    """Raised when the supplied values break a business rule (eg. a non-positive amount or too few parts)."""


class PersistenceError(ServiceError):
    """Raised when a write did not take effect."""
