"""Local name checks performed before any request is issued."""

from __future__ import annotations

from mpak.errors import InvalidNameError

SCOPE_MARKER = "@"


def validate_scoped_name(name: str) -> None:
    """Raise :class:`InvalidNameError` unless ``name`` looks like ``@scope/name``."""
    if not name.startswith(SCOPE_MARKER):
        raise InvalidNameError(name)
