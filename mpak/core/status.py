"""HTTP status to error translation, applied uniformly by every endpoint."""

from __future__ import annotations

import httpx

from mpak.errors import MpakNetworkError, MpakNotFoundError


def check_response(
    response: httpx.Response,
    *,
    action: str,
    resource: str | None = None,
) -> None:
    """Raise the taxonomy error for a non-2xx ``response``.

    Parameters
    ----------
    action:
        Short description used in the network error message, e.g.
        ``"get bundle"`` -> ``"Failed to get bundle: HTTP 500"``.
    resource:
        Identifier reported on 404.  When ``None`` a 404 is treated like
        any other failing status (used by search, which addresses no
        named resource).
    """
    if response.is_success:
        return
    if response.status_code == 404 and resource is not None:
        raise MpakNotFoundError(resource)
    raise MpakNetworkError(
        f"Failed to {action}: HTTP {response.status_code}",
        status_code=response.status_code,
    )
