"""Skill catalog records, decoded from registry JSON."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from mpak.models.bundles import CatalogModel, Pagination


class SkillSummary(CatalogModel):
    """A skill as it appears in search results."""

    name: str
    description: str | None = None
    latest_version: str | None = None
    version: str | None = None
    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    author: dict[str, Any] | str | None = None
    downloads: int = 0
    published_at: datetime | None = None


class SkillSearchResponse(CatalogModel):
    skills: list[SkillSummary] = Field(default_factory=list)
    total: int = 0
    pagination: Pagination | None = None


class SkillVersionRef(CatalogModel):
    version: str
    published_at: datetime | None = None
    downloads: int = 0


class SkillDetailResponse(SkillSummary):
    """Full skill record returned by ``GET /v1/skills/{name}``."""

    license: str | None = None
    compatibility: str | None = None
    triggers: list[str] = Field(default_factory=list)
    surfaces: list[str] = Field(default_factory=list)
    versions: list[SkillVersionRef] = Field(default_factory=list)


class SkillDownloadArtifact(CatalogModel):
    name: str
    version: str
    sha256: str
    size: int = 0


class SkillDownloadResponse(CatalogModel):
    """Pre-signed download location plus the digest it must match."""

    url: str
    skill: SkillDownloadArtifact
    expires_at: datetime | None = None
