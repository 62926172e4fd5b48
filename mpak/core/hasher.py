"""SHA-256 helpers shared by the integrity verifier and the CLI.

Text is always hashed as its UTF-8 encoding so a digest published by the
registry for a document matches the digest computed on the decoded string.
"""

from __future__ import annotations

import hashlib


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def sha256_text(text: str) -> str:
    """Return the SHA-256 hex digest of ``text`` encoded as UTF-8."""
    return sha256_hex(text.encode("utf-8"))


def content_address(data: bytes) -> str:
    """Return ``"sha256:<hex>"`` for raw bytes, the registry's descriptor form."""
    return f"sha256:{sha256_hex(data)}"
