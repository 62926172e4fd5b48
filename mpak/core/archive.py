"""Archive capability — open a packaged skill and read a named entry.

The resolver depends only on the :class:`ArchiveReader` protocol, so tests
(and callers with their own archive formats) can inject an in-memory fake.
:class:`ZipArchiveReader` is the default and covers what the registry
serves today.

Entry lookup for a skill named ``@scope/name``:

1. ``name/SKILL.md`` (folder named after the last path segment)
2. ``SKILL.md`` at the archive root
"""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from mpak.errors import MpakNetworkError, MpakNotFoundError

logger = logging.getLogger(__name__)

SKILL_ENTRY = "SKILL.md"

_ZIP_MAGIC = b"PK\x03\x04"
_ARCHIVE_CONTENT_TYPES = ("application/zip", "application/x-zip-compressed", "application/octet-stream")

# what zipfile raises when a listed entry cannot be read back
_UNREADABLE_ENTRY = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)

EntryLookup = Callable[[str], "bytes | None"]


@runtime_checkable
class ArchiveReader(Protocol):
    """Protocol for archive backends.

    ``open`` receives the raw payload and returns a lookup function that
    maps an entry path to its bytes, or ``None`` if the entry is absent.
    """

    def open(self, data: bytes) -> EntryLookup:
        ...


class ZipArchiveReader:
    """Default :class:`ArchiveReader` backed by :mod:`zipfile`."""

    def open(self, data: bytes) -> EntryLookup:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                names = set(archive.namelist())
        except zipfile.BadZipFile as exc:
            raise MpakNetworkError(f"Invalid skill archive: {exc}") from exc

        def lookup(path: str) -> bytes | None:
            if path not in names:
                return None
            try:
                with zipfile.ZipFile(io.BytesIO(data)) as archive:
                    return archive.read(path)
            except _UNREADABLE_ENTRY as exc:
                raise MpakNetworkError(f"Invalid skill archive: {exc}") from exc

        return lookup


def is_archive(data: bytes, content_type: str = "") -> bool:
    """Whether a download payload is a packaged archive rather than plain text."""
    if data.startswith(_ZIP_MAGIC):
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in _ARCHIVE_CONTENT_TYPES


def skill_folder(name: str) -> str:
    """``@scope/name`` -> ``name``."""
    return name.rsplit("/", 1)[-1]


def find_skill_entry(lookup: EntryLookup, name: str) -> tuple[str, bytes]:
    """Locate the skill document inside an opened archive.

    Returns ``(entry_path, entry_bytes)``.  Raises
    :class:`MpakNotFoundError` when neither candidate entry exists.
    """
    scoped_path = f"{skill_folder(name)}/{SKILL_ENTRY}"
    data = lookup(scoped_path)
    if data is not None:
        return scoped_path, data

    data = lookup(SKILL_ENTRY)
    if data is not None:
        logger.warning(
            "Archive for %s has no '%s'; using top-level %s.",
            name,
            scoped_path,
            SKILL_ENTRY,
        )
        return SKILL_ENTRY, data

    raise MpakNotFoundError(f"{SKILL_ENTRY} not found in bundle for {name}")
