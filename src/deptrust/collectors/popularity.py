"""Download volume and trend collector."""

import asyncio
import logging
import urllib.parse

from deptrust.collectors.base import BaseCollector, CollectorError, encode_npm_name
from deptrust.models.schemas import DownloadTrend, Ecosystem, PopularityData

logger = logging.getLogger(__name__)

# Weekly downloads relative to the monthly weekly average
RISING_RATIO = 1.1
DECLINING_RATIO = 0.9


class PopularityCollector(BaseCollector[PopularityData]):
    """Measures adoption through download counts and their trend.

    Data sources:
    - npm: https://api.npmjs.org/downloads/point/{last-week,last-month}/{package}
    - npm dependents: the npmjs.com package page JSON (undocumented, best effort)
    - PyPI: https://pypistats.org/api/packages/{package}/recent

    Weekly downloads are required. The monthly figure and the dependent
    count are best effort and count as 0 when they fail.
    """

    name = "popularity"
    data_model = PopularityData

    NPM_DOWNLOADS_URL = "https://api.npmjs.org/downloads/point"
    NPM_WEBSITE_URL = "https://www.npmjs.com/package"
    PYPISTATS_URL = "https://pypistats.org/api/packages"

    async def _collect(self, package_name: str, version: str) -> PopularityData:
        if self.ecosystem == Ecosystem.PYPI:
            weekly, monthly = await self._fetch_pypi_downloads(package_name)
            dependents = 0
        else:
            weekly, monthly, dependents = await asyncio.gather(
                self._fetch_npm_downloads(package_name, "last-week"),
                self._fetch_npm_downloads(package_name, "last-month"),
                self._fetch_npm_dependent_count(package_name),
            )

        if weekly is None:
            raise CollectorError(self.source, f"Download counts unavailable for {package_name}")

        monthly = monthly or 0
        return PopularityData(
            package_name=package_name,
            weekly_downloads=weekly,
            monthly_downloads=monthly,
            trend=download_trend(weekly, monthly),
            dependent_count=dependents,
        )

    async def _fetch_npm_downloads(self, package_name: str, period: str) -> int | None:
        url = f"{self.NPM_DOWNLOADS_URL}/{period}/{encode_npm_name(package_name)}"
        data = await self._get_json_or_none(
            url,
            self.rate_limiters.downloads(self.ecosystem.value),
            headers={"Accept": "application/json"},
        )
        if not isinstance(data, dict):
            return None
        return int(data.get("downloads") or 0)

    async def _fetch_npm_dependent_count(self, package_name: str) -> int:
        url = f"{self.NPM_WEBSITE_URL}/{encode_npm_name(package_name)}"
        data = await self._get_json_or_none(
            url,
            self.rate_limiters.registry(self.ecosystem.value),
            headers={"X-Spiferack": "1"},
        )
        if not isinstance(data, dict):
            return 0
        return int((data.get("dependents") or {}).get("dependentsCount") or 0)

    async def _fetch_pypi_downloads(self, package_name: str) -> tuple[int | None, int | None]:
        url = f"{self.PYPISTATS_URL}/{urllib.parse.quote(package_name.lower(), safe='')}/recent"
        data = await self._get_json_or_none(url, self.rate_limiters.downloads(self.ecosystem.value))
        if not isinstance(data, dict):
            return None, None
        recent = data.get("data") or {}
        return int(recent.get("last_week") or 0), int(recent.get("last_month") or 0)


def download_trend(weekly: int, monthly: int) -> DownloadTrend:
    """Compare last week's downloads with the weekly average of the last month.

    Args:
        weekly: Downloads in the last week.
        monthly: Downloads in the last month.

    Returns:
        Trend direction. Stable when there is no monthly baseline.
    """
    weekly_average = monthly / 4
    if weekly_average <= 0:
        return DownloadTrend.STABLE

    ratio = weekly / weekly_average
    if ratio > RISING_RATIO:
        return DownloadTrend.RISING
    if ratio < DECLINING_RATIO:
        return DownloadTrend.DECLINING
    return DownloadTrend.STABLE
