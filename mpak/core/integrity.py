"""Integrity verifier — digest computation and descriptor comparison.

An integrity descriptor is accepted in three textual forms::

    sha256:<hex>     registry form
    sha256-<hex>     subresource-integrity form
    <hex>            bare digest

Parsing is forgiving: a descriptor with any other prefix is compared as if
it were bare hex, which can only ever produce a mismatch.  ``verify`` never
raises; callers decide what a mismatch means.  ``verify_or_raise`` is the
fail-closed policy every download path in this package goes through.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict

from mpak.core.hasher import sha256_hex
from mpak.errors import MpakIntegrityError

logger = logging.getLogger(__name__)

_RECOGNIZED_PREFIXES = ("sha256:", "sha256-")
_ALGORITHM_PREFIX = re.compile(r"^([A-Za-z][A-Za-z0-9]*)[:\-]")


class IntegrityVerdict(BaseModel):
    """Outcome of comparing computed content against an expected digest."""

    model_config = ConfigDict(frozen=True)

    matched: bool
    expected: str
    actual: str


def compute_digest(content: str | bytes) -> str:
    """SHA-256 hex digest of ``content``; strings are hashed as UTF-8."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return sha256_hex(content)


def parse_descriptor(descriptor: str) -> str:
    """Strip a recognized ``sha256:`` / ``sha256-`` prefix and lowercase.

    Anything else is treated as an already-bare digest.
    """
    for prefix in _RECOGNIZED_PREFIXES:
        if descriptor.startswith(prefix):
            return descriptor[len(prefix):].lower()

    match = _ALGORITHM_PREFIX.match(descriptor)
    if match:
        logger.warning(
            "Integrity descriptor uses unsupported algorithm '%s'; "
            "comparing it literally as a sha256 digest.",
            match.group(1),
        )
    return descriptor.lower()


def verify(content: str | bytes, descriptor: str) -> IntegrityVerdict:
    """Hash ``content`` and compare it with the digest ``descriptor`` encodes."""
    expected = parse_descriptor(descriptor)
    actual = compute_digest(content)
    return IntegrityVerdict(matched=actual == expected, expected=expected, actual=actual)


def verify_or_raise(content: str | bytes, descriptor: str, *, label: str = "") -> IntegrityVerdict:
    """Return the verdict on a match, raise :class:`MpakIntegrityError` otherwise.

    The exception carries both digests and nothing derived from the content.
    """
    verdict = verify(content, descriptor)
    if not verdict.matched:
        logger.warning(
            "Integrity check failed for %s: expected %s, got %s",
            label or "content",
            verdict.expected,
            verdict.actual,
        )
        raise MpakIntegrityError(verdict.expected, verdict.actual)
    logger.info("Integrity verified for %s (sha256:%s)", label or "content", verdict.actual[:12])
    return verdict
