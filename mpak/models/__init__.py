"""mpak data models — all Pydantic v2, all frozen (immutable)."""

from mpak.models.bundles import (
    BundleArtifact,
    BundleDetailResponse,
    BundleDownloadArtifact,
    BundleDownloadResponse,
    BundleSearchResponse,
    BundleSummary,
    BundleVersionInfo,
    BundleVersionResponse,
    BundleVersionsResponse,
    Pagination,
)
from mpak.models.platform import Architecture, OperatingSystem, Platform
from mpak.models.references import (
    ContentReference,
    DirectUrlReference,
    DownloadedContent,
    RegistryReference,
    ResolvedContent,
    SkillContentResult,
    SourceKind,
    VcsReleaseReference,
    parse_reference,
)
from mpak.models.skills import (
    SkillDetailResponse,
    SkillDownloadArtifact,
    SkillDownloadResponse,
    SkillSearchResponse,
    SkillSummary,
)

__all__ = [
    # platform
    "Architecture",
    "OperatingSystem",
    "Platform",
    # references
    "SourceKind",
    "ContentReference",
    "RegistryReference",
    "VcsReleaseReference",
    "DirectUrlReference",
    "ResolvedContent",
    "SkillContentResult",
    "DownloadedContent",
    "parse_reference",
    # bundles
    "Pagination",
    "BundleSummary",
    "BundleSearchResponse",
    "BundleDetailResponse",
    "BundleVersionInfo",
    "BundleVersionsResponse",
    "BundleArtifact",
    "BundleVersionResponse",
    "BundleDownloadArtifact",
    "BundleDownloadResponse",
    # skills
    "SkillSummary",
    "SkillSearchResponse",
    "SkillDetailResponse",
    "SkillDownloadArtifact",
    "SkillDownloadResponse",
]
