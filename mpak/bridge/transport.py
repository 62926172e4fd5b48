"""Transport bridge — the only module that talks to httpx.

Bridge boundary
---------------
Every request the client makes goes through :meth:`HttpTransport.get`.
Each call opens its own ``httpx.Client`` and streams the body against a
wall-clock deadline fixed at construction.  The deadline covers the whole
request (connect, headers and every body chunk), not each phase on its
own, so a server dripping bytes cannot hold a call open past it.  Concurrent
calls share nothing but immutable settings.

Failures below HTTP are normalized here:

* deadline expiry -> :class:`MpakNetworkError` naming the configured
  duration (``"Request timeout after 5000ms"``)
* any other transport failure -> :class:`MpakNetworkError` carrying the
  underlying message

HTTP status codes are *not* interpreted here; the caller maps them, since
404 means different things on different endpoints.

Tests inject an ``httpx.MockTransport`` through ``transport=``.
"""

from __future__ import annotations

import logging
import time

import httpx

from mpak.config import DEFAULT_TIMEOUT_MS
from mpak.errors import MpakNetworkError

logger = logging.getLogger(__name__)

_BODY_FRAMING_HEADERS = ("content-encoding", "content-length", "transfer-encoding")


class HttpTransport:
    """Deadline-bound GET requests with normalized failures.

    Parameters
    ----------
    timeout_ms:
        Deadline for each request, in milliseconds.
    user_agent:
        Value of the ``User-Agent`` header sent with every request.
    transport:
        Optional ``httpx.BaseTransport`` (e.g. ``httpx.MockTransport``)
        used instead of the network.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        user_agent: str = "mpak-client",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout_ms = timeout_ms
        self._user_agent = user_agent
        self._transport = transport

    @property
    def timeout_ms(self) -> int:
        """The per-request deadline in milliseconds."""
        return self._timeout_ms

    @property
    def timeout_seconds(self) -> float:
        """The deadline in seconds, as httpx expects it."""
        return self._timeout_ms / 1000

    def get(self, url: str, *, accept: str | None = None) -> httpx.Response:
        """Issue a GET and return the fully-read response.

        Raises
        ------
        MpakNetworkError
            On timeout or any transport-level failure.
        """
        headers = {"User-Agent": self._user_agent}
        if accept:
            headers["Accept"] = accept

        deadline = time.monotonic() + self.timeout_seconds
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                return self._read_before(deadline, client, url, headers)
        except httpx.TimeoutException as exc:
            raise self._expired() from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise MpakNetworkError(str(exc) or "Network error") from exc

    def _read_before(
        self,
        deadline: float,
        client: httpx.Client,
        url: str,
        headers: dict[str, str],
    ) -> httpx.Response:
        remaining = deadline - time.monotonic()
        with client.stream("GET", url, headers=headers, timeout=max(remaining, 0.001)) as response:
            chunks: list[bytes] = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    logger.debug("Deadline of %sms passed while reading %s", self._timeout_ms, url)
                    raise self._expired()

        # iter_bytes already undid any content-encoding
        kept = [
            (key, value)
            for key, value in response.headers.multi_items()
            if key.lower() not in _BODY_FRAMING_HEADERS
        ]
        return httpx.Response(
            response.status_code,
            headers=kept,
            content=b"".join(chunks),
            request=response.request,
        )

    def _expired(self) -> MpakNetworkError:
        return MpakNetworkError(f"Request timeout after {self._timeout_ms}ms")
