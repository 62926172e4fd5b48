"""Source resolver — fetch referenced content and gate it on integrity.

Dispatch
--------
=============  ==========================================================
source         request
=============  ==========================================================
registry       ``{registry}/v1/skills/{name}/versions/{version}/download``
vcs-release    ``{github}/{repo}/releases/download/{version}/{path}``
direct-url     ``{url}`` verbatim
=============  ==========================================================

A registry payload may be plain text or a packaged archive; archives are
opened through the injected :class:`~mpak.core.archive.ArchiveReader` and
the skill document is read from ``name/SKILL.md`` or ``SKILL.md``.

Fail-closed
-----------
A :class:`ResolvedContent` is only ever constructed in :meth:`_release`,
after the integrity gate.  When a descriptor is present and does not
match, the fetched text goes out of scope with the raised
:class:`MpakIntegrityError`; no object holding it is returned.
"""

from __future__ import annotations

import logging
from typing import assert_never

from mpak.bridge.transport import HttpTransport
from mpak.config import DEFAULT_GITHUB_URL, DEFAULT_REGISTRY_URL
from mpak.core.archive import ArchiveReader, ZipArchiveReader, find_skill_entry, is_archive
from mpak.core.integrity import verify_or_raise
from mpak.core.names import validate_scoped_name
from mpak.core.status import check_response
from mpak.errors import MpakNotFoundError
from mpak.models.references import (
    ContentReference,
    DirectUrlReference,
    RegistryReference,
    ResolvedContent,
    SourceKind,
    VcsReleaseReference,
)

logger = logging.getLogger(__name__)


def decode_text(data: bytes) -> str:
    """Decode a downloaded document as UTF-8.

    Undecodable bytes are replaced rather than raised on; a document that
    carries a descriptor then fails verification instead of slipping
    through as a decoding error.
    """
    return data.decode("utf-8", errors="replace")


class SourceResolver:
    """Resolve a :data:`ContentReference` to verified content.

    Parameters
    ----------
    transport:
        The HTTP bridge used for every fetch.
    registry_url:
        Base URL of the registry API (no trailing slash).
    github_url:
        Host serving release assets for ``vcs-release`` references.
    archive_reader:
        Backend used to open packaged registry payloads.
    """

    def __init__(
        self,
        transport: HttpTransport,
        *,
        registry_url: str = DEFAULT_REGISTRY_URL,
        github_url: str = DEFAULT_GITHUB_URL,
        archive_reader: ArchiveReader | None = None,
    ) -> None:
        self._transport = transport
        self._registry_url = registry_url.rstrip("/")
        self._github_url = github_url.rstrip("/")
        self._archive_reader = archive_reader or ZipArchiveReader()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, ref: ContentReference) -> ResolvedContent:
        """Fetch, extract, and verify the content ``ref`` points at.

        Raises
        ------
        InvalidNameError
            Registry reference with an unscoped name (no request issued).
        MpakNotFoundError
            Missing resource, failed release/URL fetch, or archive without
            a skill document.
        MpakIntegrityError
            Descriptor supplied and the content does not match it.
        MpakNetworkError
            Transport failure, timeout, or unexpected registry status.
        """
        if isinstance(ref, RegistryReference):
            kind = SourceKind.REGISTRY
            content = self._fetch_registry(ref)
        elif isinstance(ref, VcsReleaseReference):
            kind = SourceKind.VCS_RELEASE
            content = self._fetch_vcs_release(ref)
        elif isinstance(ref, DirectUrlReference):
            kind = SourceKind.DIRECT_URL
            content = self._fetch_direct_url(ref)
        else:
            assert_never(ref)

        return self._release(ref, kind, content)

    def vcs_release_url(self, ref: VcsReleaseReference) -> str:
        """Release-asset URL for a ``vcs-release`` reference."""
        return f"{self._github_url}/{ref.repo}/releases/download/{ref.version}/{ref.path}"

    def registry_download_url(self, ref: RegistryReference) -> str:
        """Versioned download URL for a ``registry`` reference."""
        return f"{self._registry_url}/v1/skills/{ref.name}/versions/{ref.version}/download"

    # ------------------------------------------------------------------
    # Per-source fetches
    # ------------------------------------------------------------------

    def _fetch_registry(self, ref: RegistryReference) -> str:
        validate_scoped_name(ref.name)
        logger.debug("Resolving %s@%s from registry.", ref.name, ref.version)

        response = self._transport.get(self.registry_download_url(ref))
        check_response(response, action="fetch skill", resource=f"{ref.name}@{ref.version}")

        payload = response.content
        if not is_archive(payload, response.headers.get("content-type", "")):
            return decode_text(payload)

        lookup = self._archive_reader.open(payload)
        entry, data = find_skill_entry(lookup, ref.name)
        logger.debug("Extracted '%s' from archive for %s.", entry, ref.name)
        return decode_text(data)

    def _fetch_vcs_release(self, ref: VcsReleaseReference) -> str:
        url = self.vcs_release_url(ref)
        logger.debug("Resolving %s from release asset %s.", ref.name, url)

        response = self._transport.get(url)
        if not response.is_success:
            raise MpakNotFoundError(f"vcs-release:{ref.repo}/{ref.path}@{ref.version}")
        return decode_text(response.content)

    def _fetch_direct_url(self, ref: DirectUrlReference) -> str:
        logger.debug("Resolving %s from %s.", ref.name, ref.url)

        response = self._transport.get(ref.url)
        if not response.is_success:
            raise MpakNotFoundError(f"direct-url:{ref.url}")
        return decode_text(response.content)

    # ------------------------------------------------------------------
    # Integrity gate
    # ------------------------------------------------------------------

    @staticmethod
    def _release(ref: ContentReference, kind: SourceKind, content: str) -> ResolvedContent:
        if ref.integrity is None:
            return ResolvedContent(content=content, version=ref.version, source=kind, verified=False)

        verify_or_raise(content, ref.integrity, label=f"{ref.name}@{ref.version}")
        return ResolvedContent(content=content, version=ref.version, source=kind, verified=True)
