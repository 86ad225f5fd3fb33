"""Package registry metadata collector for npm and PyPI."""

import asyncio
import logging
import urllib.parse

from deptrust.collectors.base import (
    BaseCollector,
    encode_npm_name,
    extract_repository_url,
    parse_datetime,
)
from deptrust.models.schemas import Ecosystem, RegistryData

logger = logging.getLogger(__name__)


class RegistryCollector(BaseCollector[RegistryData]):
    """Collects publish history, deprecation and download counts.

    Data sources:
    - npm packument: https://registry.npmjs.org/{package}
    - npm downloads: https://api.npmjs.org/downloads/point/last-week/{package}
    - PyPI metadata: https://pypi.org/pypi/{package}/json
    - PyPI downloads: https://pypistats.org/api/packages/{package}/recent
    """

    name = "registry"
    data_model = RegistryData

    NPM_DOWNLOADS_URL = "https://api.npmjs.org/downloads/point"
    PYPISTATS_URL = "https://pypistats.org/api/packages"

    async def _collect(self, package_name: str, version: str) -> RegistryData:
        if self.ecosystem == Ecosystem.PYPI:
            return await self._collect_pypi(package_name, version)
        return await self._collect_npm(package_name, version)

    async def _collect_npm(self, package_name: str, version: str) -> RegistryData:
        packument, weekly = await asyncio.gather(
            self._fetch_registry_document(package_name),
            self._fetch_npm_weekly_downloads(package_name),
        )

        versions = packument.get("versions") or {}
        resolved = version
        if version == "latest" or version not in versions:
            resolved = (packument.get("dist-tags") or {}).get("latest", version)

        # The time map also holds "created" and "modified" bookkeeping keys
        publish_dates = [
            parsed
            for key, value in (packument.get("time") or {}).items()
            if key not in ("created", "modified")
            if (parsed := parse_datetime(value)) is not None
        ]

        version_info = versions.get(resolved) or {}
        deprecated = version_info.get("deprecated")

        return RegistryData(
            package_name=package_name,
            version=resolved,
            description=packument.get("description") or "",
            last_publish_date=max(publish_dates) if publish_dates else None,
            version_count=len(versions),
            deprecated=str(deprecated) if deprecated else None,
            weekly_downloads=weekly,
            license=read_license_field(packument.get("license")),
            repository_url=extract_repository_url(packument, Ecosystem.NPM),
        )

    async def _collect_pypi(self, package_name: str, version: str) -> RegistryData:
        document, weekly = await asyncio.gather(
            self._fetch_registry_document(package_name),
            self._fetch_pypi_weekly_downloads(package_name),
        )

        info = document.get("info") or {}
        releases = document.get("releases") or {}
        resolved = info.get("version", version) if version == "latest" else version

        upload_dates = [
            parsed
            for files in releases.values()
            for file in files
            if (parsed := parse_datetime(file.get("upload_time_iso_8601") or file.get("upload_time")))
            is not None
        ]

        return RegistryData(
            package_name=package_name,
            version=resolved,
            description=info.get("summary") or "",
            last_publish_date=max(upload_dates) if upload_dates else None,
            version_count=len(releases),
            deprecated=_yank_reason(releases.get(resolved) or []),
            weekly_downloads=weekly,
            license=info.get("license") or None,
            repository_url=extract_repository_url(document, Ecosystem.PYPI),
        )

    async def _fetch_npm_weekly_downloads(self, package_name: str) -> int:
        url = f"{self.NPM_DOWNLOADS_URL}/last-week/{encode_npm_name(package_name)}"
        data = await self._get_json_or_none(url, self.rate_limiters.downloads(self.ecosystem.value))
        if not isinstance(data, dict):
            return 0
        return int(data.get("downloads") or 0)

    async def _fetch_pypi_weekly_downloads(self, package_name: str) -> int:
        url = f"{self.PYPISTATS_URL}/{urllib.parse.quote(package_name.lower(), safe='')}/recent"
        data = await self._get_json_or_none(url, self.rate_limiters.downloads(self.ecosystem.value))
        if not isinstance(data, dict):
            return 0
        return int((data.get("data") or {}).get("last_week") or 0)


def read_license_field(value: object) -> str | None:
    """Read an npm license field, which may be a string or {"type": ...}."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return value.get("type") or None
    return None


def _yank_reason(files: list[dict]) -> str | None:
    """Return the yank reason if any file of a PyPI release is yanked."""
    for file in files:
        if file.get("yanked"):
            return file.get("yanked_reason") or "This version has been yanked"
    return None
