"""Registry client — request building, response decoding, and resolution.

``MpakClient`` maps each catalog operation to one GET against
``{registry_url}/v1/...``, translates the HTTP status into the error
taxonomy, and decodes the JSON body into a frozen model.  Reference
resolution is delegated to :class:`~mpak.core.resolver.SourceResolver`.

The client holds only immutable configuration after construction and is
safe to share between threads.

Examples
--------
>>> client = MpakClient(timeout=5000)
>>> client.timeout
5000
>>> client.registry_url
'https://api.mpak.dev'
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from mpak.bridge.transport import HttpTransport
from mpak.config import ClientSettings
from mpak.core.archive import ArchiveReader
from mpak.core.integrity import verify_or_raise
from mpak.core.names import validate_scoped_name
from mpak.core.platform import detect_platform
from mpak.core.resolver import SourceResolver, decode_text
from mpak.core.status import check_response
from mpak.errors import MpakNetworkError
from mpak.models.bundles import (
    BundleDetailResponse,
    BundleDownloadResponse,
    BundleSearchResponse,
    BundleVersionResponse,
    BundleVersionsResponse,
)
from mpak.models.platform import Platform
from mpak.models.references import (
    LATEST,
    ContentReference,
    DownloadedContent,
    ResolvedContent,
    SkillContentResult,
)
from mpak.models.skills import (
    SkillDetailResponse,
    SkillDownloadResponse,
    SkillSearchResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_JSON = "application/json"


def build_query(params: dict[str, Any]) -> str:
    """Encode only the parameters that were actually supplied.

    Falsy values (``None``, ``""``, ``0``) are omitted.  Returns ``""``
    when nothing is left, otherwise ``"?k=v&..."``.
    """
    supplied = {key: str(value) for key, value in params.items() if value}
    if not supplied:
        return ""
    return f"?{urlencode(supplied)}"


class MpakClient:
    """Client for the mpak registry.

    Parameters
    ----------
    registry_url:
        Base URL of the registry API.  Overrides ``settings.registry_url``.
    timeout:
        Per-request deadline in milliseconds.  Overrides
        ``settings.timeout_ms``.
    settings:
        Full :class:`ClientSettings`; read from the environment when omitted.
    transport:
        Optional ``httpx.BaseTransport`` used in place of the network.
    archive_reader:
        Optional archive backend for packaged registry payloads.
    """

    def __init__(
        self,
        registry_url: str | None = None,
        timeout: int | None = None,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.BaseTransport | None = None,
        archive_reader: ArchiveReader | None = None,
    ) -> None:
        base = settings or ClientSettings()
        overrides: dict[str, Any] = {}
        if registry_url is not None:
            overrides["registry_url"] = registry_url
        if timeout is not None:
            overrides["timeout_ms"] = timeout
        if overrides:
            base = ClientSettings(**{**base.model_dump(), **overrides})
        self._settings = base

        self._http = HttpTransport(
            base.timeout_ms,
            user_agent=base.user_agent,
            transport=transport,
        )
        self._resolver = SourceResolver(
            self._http,
            registry_url=base.registry_url,
            github_url=base.github_url,
            archive_reader=archive_reader,
        )

    def __enter__(self) -> MpakClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def registry_url(self) -> str:
        return self._settings.registry_url

    @property
    def timeout(self) -> int:
        """Per-request deadline in milliseconds."""
        return self._settings.timeout_ms

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Bundle API
    # ------------------------------------------------------------------

    def search_bundles(
        self,
        q: str | None = None,
        *,
        type: str | None = None,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> BundleSearchResponse:
        """Search for bundles."""
        query = build_query({"q": q, "type": type, "sort": sort, "limit": limit, "offset": offset})
        response = self._http.get(f"{self.registry_url}/v1/bundles/search{query}")
        check_response(response, action="search bundles")
        return self._decode(response, BundleSearchResponse, "bundle search")

    def get_bundle(self, name: str) -> BundleDetailResponse:
        """Get bundle details."""
        validate_scoped_name(name)
        response = self._http.get(f"{self.registry_url}/v1/bundles/{name}")
        check_response(response, action="get bundle", resource=name)
        return self._decode(response, BundleDetailResponse, name)

    def get_bundle_versions(self, name: str) -> BundleVersionsResponse:
        """Get all published versions of a bundle."""
        validate_scoped_name(name)
        response = self._http.get(f"{self.registry_url}/v1/bundles/{name}/versions")
        check_response(response, action="get bundle versions", resource=name)
        return self._decode(response, BundleVersionsResponse, name)

    def get_bundle_version(self, name: str, version: str) -> BundleVersionResponse:
        """Get one version of a bundle, including its artifact manifest."""
        validate_scoped_name(name)
        response = self._http.get(f"{self.registry_url}/v1/bundles/{name}/versions/{version}")
        check_response(response, action="get bundle version", resource=f"{name}@{version}")
        return self._decode(response, BundleVersionResponse, f"{name}@{version}")

    def get_bundle_download(
        self,
        name: str,
        version: str,
        platform: Platform | None = None,
    ) -> BundleDownloadResponse:
        """Get download info for a bundle, optionally for a specific platform."""
        validate_scoped_name(name)
        params: dict[str, Any] = {}
        if platform is not None:
            params = {"os": platform.os, "arch": platform.arch}
        query = build_query(params)
        response = self._http.get(
            f"{self.registry_url}/v1/bundles/{name}/versions/{version}/download{query}",
            accept=_JSON,
        )
        check_response(response, action="get bundle download", resource=f"{name}@{version}")
        return self._decode(response, BundleDownloadResponse, f"{name}@{version}")

    # ------------------------------------------------------------------
    # Skill API
    # ------------------------------------------------------------------

    def search_skills(
        self,
        q: str | None = None,
        *,
        tags: str | None = None,
        category: str | None = None,
        surface: str | None = None,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> SkillSearchResponse:
        """Search for skills."""
        query = build_query(
            {
                "q": q,
                "tags": tags,
                "category": category,
                "surface": surface,
                "sort": sort,
                "limit": limit,
                "offset": offset,
            }
        )
        response = self._http.get(f"{self.registry_url}/v1/skills/search{query}")
        check_response(response, action="search skills")
        return self._decode(response, SkillSearchResponse, "skill search")

    def get_skill(self, name: str) -> SkillDetailResponse:
        """Get skill details."""
        validate_scoped_name(name)
        response = self._http.get(f"{self.registry_url}/v1/skills/{name}")
        check_response(response, action="get skill", resource=name)
        return self._decode(response, SkillDetailResponse, name)

    def get_skill_download(self, name: str) -> SkillDownloadResponse:
        """Get download info for the latest version of a skill."""
        validate_scoped_name(name)
        response = self._http.get(f"{self.registry_url}/v1/skills/{name}/download", accept=_JSON)
        check_response(response, action="get skill download", resource=name)
        return self._decode(response, SkillDownloadResponse, name)

    def get_skill_version_download(self, name: str, version: str) -> SkillDownloadResponse:
        """Get download info for a specific skill version."""
        validate_scoped_name(name)
        response = self._http.get(
            f"{self.registry_url}/v1/skills/{name}/versions/{version}/download",
            accept=_JSON,
        )
        check_response(response, action="get skill download", resource=f"{name}@{version}")
        return self._decode(response, SkillDownloadResponse, f"{name}@{version}")

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def get_skill_content(
        self,
        name: str,
        version: str = LATEST,
        integrity: str | None = None,
    ) -> SkillContentResult:
        """Fetch raw skill text from the registry content endpoint.

        Fails closed with :class:`MpakIntegrityError` when ``integrity`` is
        supplied and does not match.
        """
        validate_scoped_name(name)
        url = f"{self.registry_url}/v1/skills/{name}/versions/{version}/content"
        response = self._http.get(url)
        check_response(response, action="get skill content", resource=f"{name}@{version}")

        content = decode_text(response.content)
        if integrity is None:
            return SkillContentResult(content=content, version=version, verified=False)

        verify_or_raise(content, integrity, label=f"{name}@{version}")
        return SkillContentResult(content=content, version=version, verified=True)

    def download_skill_content(
        self,
        download_url: str,
        expected_sha256: str | None = None,
    ) -> DownloadedContent:
        """Fetch a pre-signed download URL and verify it against ``expected_sha256``.

        ``expected_sha256`` accepts any integrity descriptor encoding.
        """
        response = self._http.get(download_url)
        check_response(response, action="download skill")

        content = decode_text(response.content)
        if expected_sha256 is None:
            return DownloadedContent(content=content, verified=False)

        verify_or_raise(content, expected_sha256, label=download_url)
        return DownloadedContent(content=content, verified=True)

    def resolve_skill_ref(self, ref: ContentReference) -> ResolvedContent:
        """Resolve a content reference from any supported source.

        See :meth:`SourceResolver.resolve` for the error contract.
        """
        return self._resolver.resolve(ref)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    @staticmethod
    def detect_platform() -> Platform:
        """Detect the platform of the running interpreter."""
        return detect_platform()

    @staticmethod
    def _decode(response: httpx.Response, model: type[ModelT], label: str) -> ModelT:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise MpakNetworkError(
                f"Invalid response for {label}: {exc.error_count()} validation error(s)",
                status_code=response.status_code,
            ) from exc
