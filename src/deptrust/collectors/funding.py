"""Funding and sponsorship signal collector."""

import logging
import os
import re
import urllib.parse

import httpx
import yaml

from deptrust.cache.store import CacheManager
from deptrust.collectors.base import (
    BaseCollector,
    extract_repository_url,
    parse_github_slug,
)
from deptrust.models.schemas import CollectorResult, CollectorStatus, Ecosystem, FundingData
from deptrust.utils.rate_limiter import RateLimiters

logger = logging.getLogger(__name__)

_GITHUB_USERNAME = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?$")

# FUNDING.yml platform keys and their profile URL prefixes
FUNDING_PLATFORMS = {
    "open_collective": "https://opencollective.com/",
    "ko_fi": "https://ko-fi.com/",
    "patreon": "https://patreon.com/",
    "liberapay": "https://liberapay.com/",
    "tidelift": "https://tidelift.com/funding/github/",
}

# PyPI project_urls labels that advertise funding
PYPI_FUNDING_LABELS = ("funding", "sponsor", "donate", "donation", "tidelift")

# OpenCollective reports budgets above this in cents
_CENTS_THRESHOLD = 1_000_000


class FundingCollector(BaseCollector[FundingData]):
    """Collects funding signals for a package.

    Data sources:
    - Registry funding field (npm ``funding``, PyPI funding project URLs)
    - Repository FUNDING.yml via the GitHub contents API
    - OpenCollective profile: https://opencollective.com/{slug}.json

    Most packages have no funding at all, so a failed lookup is reported
    as a successful result with every signal false.
    """

    name = "funding"
    data_model = FundingData

    GITHUB_URL = "https://api.github.com"
    OPENCOLLECTIVE_URL = "https://opencollective.com"

    def __init__(
        self,
        cache: CacheManager,
        ecosystem: Ecosystem = Ecosystem.NPM,
        client: httpx.AsyncClient | None = None,
        rate_limiters: RateLimiters | None = None,
        token: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(cache, ecosystem, client, rate_limiters, **kwargs)
        self._token = token or os.environ.get("GITHUB_TOKEN")

    async def collect(self, package_name: str, version: str) -> CollectorResult:
        result = await super().collect(package_name, version)
        if result.status == CollectorStatus.ERROR:
            logger.info(f"No funding data for {package_name}@{version}: {result.message}")
            return self.result_type.success(FundingData(package_name=package_name))
        return result

    async def _collect(self, package_name: str, version: str) -> FundingData:
        document = await self._fetch_registry_document(package_name)
        registry_urls = registry_funding_urls(document, self.ecosystem)
        slug = parse_github_slug(extract_repository_url(document, self.ecosystem))

        funding_yml = await self._fetch_funding_yml(*slug) if slug else None
        yml_data = parse_funding_yml(funding_yml)

        oc_slug = _first(yml_data.get("open_collective")) or _unscoped(package_name)
        profile = await self._fetch_open_collective(oc_slug)

        estimated = 0
        if profile and profile.get("yearlyBudget"):
            budget = profile["yearlyBudget"]
            estimated = round(budget / 100) if budget > _CENTS_THRESHOLD else budget

        urls = list(registry_urls)
        urls.extend(funding_yml_urls(yml_data))
        if profile and profile.get("slug"):
            urls.append(f"{self.OPENCOLLECTIVE_URL}/{profile['slug']}")

        return FundingData(
            package_name=package_name,
            has_sponsors=bool(funding_yml and funding_yml.strip()),
            has_open_collective=bool(profile and profile.get("isActive")),
            has_registry_funding=bool(registry_urls),
            open_collective_slug=profile.get("slug") if profile else None,
            open_collective_backers=(profile or {}).get("backersCount") or 0,
            estimated_annual_funding=estimated,
            funding_urls=list(dict.fromkeys(urls)),
        )

    async def _fetch_funding_yml(self, owner: str, repo: str) -> str | None:
        """Fetch the raw FUNDING.yml text, or None if absent."""
        headers = {
            "Accept": "application/vnd.github.raw+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        url = f"{self.GITHUB_URL}/repos/{owner}/{repo}/contents/.github/FUNDING.yml"
        try:
            response = await self._request("GET", url, self.rate_limiters.github, headers=headers)
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 404:
                logger.warning(f"GitHub API error {e.response.status_code}: {url}")
            return None
        except httpx.RequestError as e:
            logger.warning(f"GitHub request error for {url}: {e}")
            return None
        return response.text

    async def _fetch_open_collective(self, slug: str) -> dict | None:
        url = f"{self.OPENCOLLECTIVE_URL}/{urllib.parse.quote(slug, safe='')}.json"
        data = await self._get_json_or_none(url, self.rate_limiters.opencollective)
        return data if isinstance(data, dict) else None


def registry_funding_urls(document: dict, ecosystem: Ecosystem) -> list[str]:
    """Funding URLs declared in registry metadata.

    Args:
        document: npm packument or PyPI JSON document.
        ecosystem: Ecosystem the document came from.

    Returns:
        List of URLs, possibly empty.
    """
    if ecosystem == Ecosystem.PYPI:
        project_urls = (document.get("info") or {}).get("project_urls") or {}
        return [
            link
            for label, link in project_urls.items()
            if isinstance(link, str) and any(word in label.lower() for word in PYPI_FUNDING_LABELS)
        ]

    funding = document.get("funding")
    entries = funding if isinstance(funding, list) else [funding]
    urls = []
    for entry in entries:
        if isinstance(entry, str) and entry:
            urls.append(entry)
        elif isinstance(entry, dict) and entry.get("url"):
            urls.append(entry["url"])
    return urls


def parse_funding_yml(text: str | None) -> dict:
    """Parse FUNDING.yml content into a mapping. Invalid YAML gives {}."""
    if not text:
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.debug(f"Unparseable FUNDING.yml: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def funding_yml_urls(data: dict) -> list[str]:
    """Build profile URLs from parsed FUNDING.yml keys."""
    urls = []
    for username in _as_list(data.get("github")):
        if _GITHUB_USERNAME.match(username):
            urls.append(f"https://github.com/sponsors/{username}")
    for key, prefix in FUNDING_PLATFORMS.items():
        for handle in _as_list(data.get(key)):
            urls.append(f"{prefix}{handle}")
    for link in _as_list(data.get("custom")):
        if link.startswith(("http://", "https://")):
            urls.append(link)
    return urls


def _as_list(value: object) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return []


def _first(value: object) -> str | None:
    items = _as_list(value)
    return items[0] if items else None


def _unscoped(package_name: str) -> str:
    """Strip an npm scope: "@scope/name" -> "name"."""
    return re.sub(r"^@[^/]+/", "", package_name)
