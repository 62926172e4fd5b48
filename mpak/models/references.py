"""Content references and resolution results.

A content reference says where a skill document lives and, optionally, what
it must hash to.  Exactly one of three source kinds is active per reference;
the union is discriminated on the ``source`` field so a raw mapping from
server metadata validates straight into the right variant.

Results are frozen.  ``verified`` is ``True`` only when an integrity
descriptor was supplied and matched; when a descriptor does not match no
result object exists at all (see :mod:`mpak.core.resolver`).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class SourceKind(str, Enum):
    """Where a referenced document is fetched from."""

    REGISTRY = "registry"
    VCS_RELEASE = "vcs-release"
    DIRECT_URL = "direct-url"


LATEST = "latest"


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------

class ReferenceBase(BaseModel):
    """Fields shared by every reference variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    version: str = LATEST
    integrity: str | None = None  # "sha256:<hex>", "sha256-<hex>" or bare hex


class RegistryReference(ReferenceBase):
    """Resolved through the registry's versioned download endpoint."""

    source: Literal["registry"] = "registry"


class VcsReleaseReference(ReferenceBase):
    """Resolved from a GitHub-style release asset.

    URL template: ``https://<host>/<repo>/releases/download/<version>/<path>``
    """

    source: Literal["vcs-release"] = "vcs-release"
    repo: str = Field(min_length=1)  # "owner/repo"
    path: str = Field(min_length=1)


class DirectUrlReference(ReferenceBase):
    """Resolved by fetching ``url`` verbatim."""

    source: Literal["direct-url"] = "direct-url"
    url: str = Field(min_length=1)


ContentReference = Annotated[
    Union[RegistryReference, VcsReleaseReference, DirectUrlReference],
    Field(discriminator="source"),
]

_REFERENCE_ADAPTER: TypeAdapter[ContentReference] = TypeAdapter(ContentReference)


def parse_reference(data: dict[str, Any]) -> ContentReference:
    """Validate a raw mapping into the matching reference variant.

    Raises ``pydantic.ValidationError`` for an unknown ``source`` tag or
    for fields that belong to a different variant.
    """
    return _REFERENCE_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ResolvedContent(BaseModel):
    """Content obtained from a reference, after the integrity gate.

    An empty-string ``integrity`` counts as a supplied descriptor and fails
    verification.  Server metadata that writes ``"integrity": ""`` to mean
    "no digest" therefore fails here instead of resolving unverified; only
    ``None`` means no descriptor.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    version: str
    source: SourceKind
    verified: bool


class SkillContentResult(BaseModel):
    """Raw skill text fetched from the registry content endpoint."""

    model_config = ConfigDict(frozen=True)

    content: str
    version: str
    verified: bool


class DownloadedContent(BaseModel):
    """Text fetched from a pre-signed download URL."""

    model_config = ConfigDict(frozen=True)

    content: str
    verified: bool
