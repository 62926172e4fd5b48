"""Error taxonomy for the registry client.

Every failure that originates in the client derives from :class:`MpakError`
so callers can catch SDK failures uniformly, then branch on the concrete
class (or ``code``) to tell an ordinary miss from a security incident.

:class:`InvalidNameError` is deliberately outside that hierarchy: it is a
local precondition failure raised before any request is issued.
"""

from __future__ import annotations


class MpakError(Exception):
    """Base class for all registry client errors."""

    def __init__(self, message: str, code: str, status_code: int | None = None) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class MpakNotFoundError(MpakError):
    """The requested resource, version, or archive entry does not exist."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Resource not found: {resource}", "NOT_FOUND", 404)


class MpakIntegrityError(MpakError):
    """Downloaded content does not hash to the expected digest.

    Raised fail-closed: the content that failed verification is discarded
    and is never attached to this exception.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Integrity mismatch: expected {expected}, got {actual}",
            "INTEGRITY_MISMATCH",
        )


class MpakNetworkError(MpakError):
    """Transport failure, timeout, or an unexpected HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, "NETWORK_ERROR", status_code)


class InvalidNameError(ValueError):
    """A resource name is not namespace-scoped (``@scope/name``)."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Package name must be scoped (e.g., @scope/package-name)")
