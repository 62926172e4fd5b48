"""Bundle catalog records, decoded from registry JSON.

These are pass-through shapes: the fields the client relies on are typed,
anything else the server sends is kept as extra attributes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mpak.models.platform import Platform


class CatalogModel(BaseModel):
    """Frozen base that keeps unknown server fields."""

    model_config = ConfigDict(frozen=True, extra="allow")


class Pagination(CatalogModel):
    limit: int = 0
    offset: int = 0
    has_more: bool = False


class BundleSummary(CatalogModel):
    """A bundle as it appears in search results."""

    name: str
    display_name: str | None = None
    description: str | None = None
    author: dict[str, Any] | None = None
    latest_version: str | None = None
    icon: str | None = None
    server_type: str | None = None
    tools: list[dict[str, Any]] = Field(default_factory=list)
    downloads: int = 0
    published_at: datetime | None = None
    verified: bool = False


class BundleSearchResponse(CatalogModel):
    bundles: list[BundleSummary] = Field(default_factory=list)
    total: int = 0
    pagination: Pagination = Field(default_factory=Pagination)


class BundleVersionRef(CatalogModel):
    version: str
    published_at: datetime | None = None
    downloads: int = 0


class BundleDetailResponse(BundleSummary):
    """Full bundle record returned by ``GET /v1/bundles/{name}``."""

    homepage: str | None = None
    license: str | None = None
    versions: list[BundleVersionRef] = Field(default_factory=list)


class BundleVersionInfo(CatalogModel):
    version: str
    artifacts_count: int = 0
    platforms: list[Platform] = Field(default_factory=list)
    published_at: datetime | None = None
    downloads: int = 0
    publish_method: str | None = None


class BundleVersionsResponse(CatalogModel):
    name: str
    latest: str
    versions: list[BundleVersionInfo] = Field(default_factory=list)


class BundleArtifact(CatalogModel):
    """One platform-specific artifact listed in a version manifest."""

    platform: Platform
    digest: str
    size: int = 0
    download_url: str | None = None


class BundleVersionResponse(CatalogModel):
    name: str
    version: str
    published_at: datetime | None = None
    downloads: int = 0
    artifacts: list[BundleArtifact] = Field(default_factory=list)
    manifest: dict[str, Any] = Field(default_factory=dict)


class BundleDownloadArtifact(CatalogModel):
    name: str
    version: str
    platform: Platform = Field(default_factory=Platform)
    sha256: str
    size: int = 0


class BundleDownloadResponse(CatalogModel):
    """Pre-signed download location plus the digest it must match."""

    url: str
    bundle: BundleDownloadArtifact
    expires_at: datetime | None = None
