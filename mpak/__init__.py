"""mpak: client for the mpak registry of bundles and skills.

  - Typed catalog access: search, details, versions, download info
  - Skill reference resolution from the registry, GitHub releases, or a URL
  - Fail-closed SHA-256 integrity verification on every download path
  - Env-driven configuration (``MPAK_*``) via pydantic-settings
  - ``mpak`` command-line front end (Typer + Rich)
"""

__version__ = "0.2.0"
__description__ = "Python client for the mpak registry with fail-closed integrity verification"

from mpak.client import MpakClient
from mpak.errors import (
    InvalidNameError,
    MpakError,
    MpakIntegrityError,
    MpakNetworkError,
    MpakNotFoundError,
)
from mpak.models.references import (
    ContentReference,
    DirectUrlReference,
    RegistryReference,
    ResolvedContent,
    SourceKind,
    VcsReleaseReference,
    parse_reference,
)

__all__ = [
    "MpakClient",
    "MpakError",
    "MpakNotFoundError",
    "MpakIntegrityError",
    "MpakNetworkError",
    "InvalidNameError",
    "ContentReference",
    "RegistryReference",
    "VcsReleaseReference",
    "DirectUrlReference",
    "ResolvedContent",
    "SourceKind",
    "parse_reference",
    "__version__",
]
