"""Shared test fixtures for the mpak client."""

from __future__ import annotations

import io
import json
import os
import time
import zipfile
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from mpak.bridge.transport import HttpTransport
from mpak.client import MpakClient
from mpak.core.hasher import sha256_text
from mpak.core.resolver import SourceResolver

REGISTRY = "https://api.mpak.dev"


# ---------------------------------------------------------------------------
# Fake HTTP layer
# ---------------------------------------------------------------------------


class FakeRegistry:
    """Routes requests to canned responses and records every request.

    Unrouted URLs answer 404.  A route may instead raise an exception
    (e.g. ``httpx.ReadTimeout``) to simulate transport failures.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self._fallback: Callable[[httpx.Request], httpx.Response] | None = None

    # -- route registration -------------------------------------------------

    def add(
        self,
        url: str,
        *,
        status: int = 200,
        text: str | None = None,
        content: bytes | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status, json=json_body, headers=headers)
            if text is not None:
                return httpx.Response(status, text=text, headers=headers)
            return httpx.Response(status, content=content or b"", headers=headers)

        self._routes[url] = _respond

    def drip(self, url: str, chunks: list[bytes], *, delay: float) -> None:
        self._routes[url] = lambda request: httpx.Response(200, stream=DripStream(chunks, delay))

    def fail(self, url: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._routes[url] = _raise

    def respond_to_all(self, *, status: int = 200, text: str = "") -> None:
        self._fallback = lambda request: httpx.Response(status, text=text)

    def fail_all(self, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._fallback = _raise

    # -- httpx integration --------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(str(request.url))
        if route is not None:
            return route(request)
        if self._fallback is not None:
            return self._fallback(request)
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


class DripStream(httpx.SyncByteStream):
    """Response body that sleeps before yielding each chunk."""

    def __init__(self, chunks: list[bytes], delay: float) -> None:
        self.chunks = chunks
        self.delay = delay

    def __iter__(self):
        for chunk in self.chunks:
            time.sleep(self.delay)
            yield chunk


def sha256(text: str) -> str:
    """Digest helper mirroring the client's own hashing."""
    return sha256_text(text)


def make_zip(entries: dict[str, str | bytes]) -> bytes:
    """Build an in-memory zip archive from ``{path: content}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for path, data in entries.items():
            archive.writestr(path, data)
    return buffer.getvalue()


class DictArchiveReader:
    """In-memory :class:`ArchiveReader` fake that ignores the payload."""

    def __init__(self, entries: dict[str, bytes]) -> None:
        self.entries = entries
        self.opened: list[bytes] = []

    def open(self, data: bytes) -> Callable[[str], bytes | None]:
        self.opened.append(data)
        return self.entries.get


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MPAK_* variables from the host environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("MPAK_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def registry() -> FakeRegistry:
    """Provide a fresh fake registry with no routes."""
    return FakeRegistry()


@pytest.fixture
def make_client(registry: FakeRegistry) -> Callable[..., MpakClient]:
    """Factory fixture: build an MpakClient wired to the fake registry."""

    def _factory(**kwargs: Any) -> MpakClient:
        kwargs.setdefault("transport", registry.transport)
        return MpakClient(**kwargs)

    return _factory


@pytest.fixture
def client(make_client: Callable[..., MpakClient]) -> MpakClient:
    """Convenience: a client with default settings and the fake registry."""
    return make_client()


@pytest.fixture
def resolver(registry: FakeRegistry) -> SourceResolver:
    """Provide a SourceResolver wired to the fake registry."""
    return SourceResolver(HttpTransport(transport=registry.transport))


@pytest.fixture
def bundle_json() -> dict[str, Any]:
    """A representative bundle detail payload."""
    return json.loads(
        """
        {
          "name": "@nimblebraininc/echo",
          "display_name": "Echo",
          "description": "Echoes its input",
          "latest_version": "1.2.0",
          "license": "MIT",
          "downloads": 42,
          "versions": [
            {"version": "1.2.0", "published_at": "2025-06-01T12:00:00Z", "downloads": 30},
            {"version": "1.1.0", "published_at": "2025-05-01T12:00:00Z", "downloads": 12}
          ],
          "homepage": "https://example.com/echo",
          "server_type": "node"
        }
        """
    )
