"""Abstract base class for data collectors."""

import logging
import re
import urllib.parse
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from deptrust.cache.store import DEFAULT_TTL_SECONDS, CacheManager
from deptrust.models.schemas import CollectorResult, Ecosystem
from deptrust.utils.rate_limiter import RateLimiter, RateLimiters

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT", bound=BaseModel)

NPM_REGISTRY_URL = "https://registry.npmjs.org"
PYPI_URL = "https://pypi.org/pypi"

# Owner and repository names accepted by GitHub
_GITHUB_NAME = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9._-]*[a-zA-Z0-9])?$")
_GITHUB_SLUG = re.compile(r"github\.com[/:]([^/]+)/([^/#?]+)")

# PyPI project_urls labels that usually point at the source repository
PYPI_SOURCE_LABELS = (
    "source",
    "source code",
    "repository",
    "github",
    "code",
    "homepage",
    "home",
)
SOURCE_FORGES = ("github.com", "gitlab.com", "bitbucket.org")


class CollectorError(Exception):
    """Raised inside a collector when an upstream source cannot be used."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(message)


class PackageNotFoundError(CollectorError):
    """Raised when a package cannot be found in its registry."""

    def __init__(self, ecosystem: Ecosystem, name: str) -> None:
        self.ecosystem = ecosystem
        self.name = name
        super().__init__(ecosystem.value, f"Package '{name}' not found in {ecosystem.value}")


class BaseCollector(ABC, Generic[DataT]):
    """Base class for cache-aware collectors.

    Each collector wraps one upstream source and normalizes it into a fixed
    data model. ``collect`` never raises: cache hits return ``cached``,
    fresh data returns ``success`` and any upstream failure becomes an
    ``error`` result with no data.
    """

    name: ClassVar[str]
    data_model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        cache: CacheManager,
        ecosystem: Ecosystem = Ecosystem.NPM,
        client: httpx.AsyncClient | None = None,
        rate_limiters: RateLimiters | None = None,
        ttl: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        """Initialize the collector.

        Args:
            cache: Shared cache.
            ecosystem: Ecosystem the package belongs to.
            client: Optional httpx client. If not provided, creates one per request.
            rate_limiters: Shared per-source limiters. A private set is created if omitted.
            ttl: Cache TTL in seconds for collected data.
        """
        self.cache = cache
        self.ecosystem = Ecosystem(ecosystem)
        self._client = client
        self.rate_limiters = rate_limiters or RateLimiters()
        self.ttl = ttl

    @property
    def source(self) -> str:
        """Source name used in cache keys and logs."""
        if self.ecosystem == Ecosystem.NPM:
            return self.name
        return f"{self.ecosystem.value}-{self.name}"

    @property
    def result_type(self) -> type[CollectorResult]:
        return CollectorResult[self.data_model]

    def cache_key(self, package_name: str, version: str) -> str:
        return f"{self.source}:{package_name}@{version}"

    async def collect(self, package_name: str, version: str) -> CollectorResult:
        """Collect data for a package version.

        Args:
            package_name: Package name.
            version: Version string, or "latest".

        Returns:
            CollectorResult for this source.
        """
        cached = self.get_cached(package_name, version)
        if cached is not None:
            return cached

        try:
            data = await self._collect(package_name, version)
        except httpx.HTTPStatusError as e:
            message = f"{self.source}: HTTP {e.response.status_code} from {e.request.url}"
            logger.warning(message)
            return self.result_type.error(message)
        except httpx.RequestError as e:
            message = f"{self.source}: request failed: {e}"
            logger.warning(message)
            return self.result_type.error(message)
        except CollectorError as e:
            logger.warning(f"{self.source}: {e.message}")
            return self.result_type.error(e.message)
        except ValueError as e:
            # JSON decode and model validation errors
            message = f"{self.source}: invalid response: {e}"
            logger.warning(message)
            return self.result_type.error(message)
        except Exception as e:
            logger.exception(f"{self.source} failed for {package_name}@{version}")
            return self.result_type.error(f"{self.source}: {e}")

        self.set_cache(package_name, version, data)
        return self.result_type.success(data)

    @abstractmethod
    async def _collect(self, package_name: str, version: str) -> DataT:
        """Fetch and normalize data. May raise; ``collect`` handles errors."""
        ...

    # --- Cache helpers ---

    def get_cached(self, package_name: str, version: str) -> CollectorResult | None:
        """Return a ``cached`` result if a valid entry exists."""
        key = self.cache_key(package_name, version)
        value = self.cache.get(key)
        if value is None:
            logger.debug(f"Cache miss: {key}")
            return None
        try:
            data = self.data_model.model_validate(value)
        except ValidationError:
            logger.warning(f"Discarding malformed cache entry: {key}")
            return None
        logger.debug(f"Cache hit: {key}")
        stored_at = self.cache.timestamp_of(key)
        collected_at = datetime.fromisoformat(stored_at) if stored_at else None
        return self.result_type.cached(data, collected_at)

    def set_cache(self, package_name: str, version: str, data: BaseModel) -> None:
        key = self.cache_key(package_name, version)
        self.cache.set(key, data.model_dump(mode="json"), self.ttl)
        logger.debug(f"Cache set: {key} (ttl={self.ttl}s)")

    # --- HTTP helpers ---

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create an HTTP client."""
        if self._client is not None:
            return self._client
        return httpx.AsyncClient(timeout=30.0, follow_redirects=True)

    async def _request(
        self,
        method: str,
        url: str,
        limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request after taking a rate-limit token. Raises on non-2xx."""
        if limiter is not None:
            await limiter.acquire()
        client = await self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        finally:
            if self._client is None:
                await client.aclose()

    async def _get_json(
        self,
        url: str,
        limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> Any:
        response = await self._request("GET", url, limiter, **kwargs)
        return response.json()

    async def _get_json_or_none(
        self,
        url: str,
        limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> Any | None:
        """Fetch JSON for a best-effort sub-request.

        Returns:
            Decoded JSON, or None if the request failed for any upstream reason.
        """
        try:
            return await self._get_json(url, limiter, **kwargs)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug(f"{self.source}: not found: {url}")
            else:
                logger.warning(f"{self.source}: HTTP {e.response.status_code}: {url}")
            return None
        except httpx.RequestError as e:
            logger.warning(f"{self.source}: request error for {url}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"{self.source}: JSON decode error for {url}: {e}")
            return None

    async def _fetch_registry_document(self, package_name: str) -> dict:
        """Fetch the raw registry document (npm packument or PyPI JSON).

        Raises:
            PackageNotFoundError: If the registry has no such package.
        """
        if self.ecosystem == Ecosystem.PYPI:
            url = f"{PYPI_URL}/{urllib.parse.quote(package_name, safe='')}/json"
        else:
            url = f"{NPM_REGISTRY_URL}/{encode_npm_name(package_name)}"
        limiter = self.rate_limiters.registry(self.ecosystem.value)

        try:
            document = await self._get_json(url, limiter, headers={"Accept": "application/json"})
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise PackageNotFoundError(self.ecosystem, package_name) from e
            raise
        if not isinstance(document, dict):
            raise CollectorError(self.source, f"Unexpected registry response for {package_name}")
        return document


def encode_npm_name(name: str) -> str:
    """URL-encode an npm package name, keeping scoped names addressable."""
    return urllib.parse.quote(name, safe="@")


def normalize_repository_url(url: str | None) -> str | None:
    """Normalize git/ssh repository URLs to browsable https URLs.

    Args:
        url: Raw repository URL from package metadata.

    Returns:
        Normalized URL, or None if empty.
    """
    if not url:
        return None
    url = url.strip()
    if not url:
        return None

    # npm shorthand: "github:owner/repo" or "owner/repo"
    if url.startswith("github:"):
        url = f"https://github.com/{url[len('github:'):]}"
    elif re.match(r"^[\w.-]+/[\w.-]+$", url):
        url = f"https://github.com/{url}"

    url = re.sub(r"^git\+", "", url)
    url = re.sub(r"^git://", "https://", url)
    url = re.sub(r"^ssh://git@github\.com", "https://github.com", url)
    url = re.sub(r"^git@github\.com:", "https://github.com/", url)
    url = re.sub(r"\.git$", "", url)
    return url.rstrip("/")


def parse_github_slug(url: str | None) -> tuple[str, str] | None:
    """Extract (owner, repo) from a GitHub URL.

    Args:
        url: Repository URL in any common form.

    Returns:
        Owner and repository names, or None if not a valid GitHub URL.
    """
    normalized = normalize_repository_url(url)
    if not normalized:
        return None

    match = _GITHUB_SLUG.search(normalized)
    if not match:
        return None

    owner = match.group(1)
    repo = re.sub(r"\.git$", "", match.group(2))
    if not _GITHUB_NAME.match(owner) or not _GITHUB_NAME.match(repo):
        return None
    return owner, repo


def _is_forge_url(url: str) -> bool:
    return any(host in url for host in SOURCE_FORGES)


def extract_repository_url(document: dict, ecosystem: Ecosystem) -> str | None:
    """Find the source repository URL in a registry document.

    Args:
        document: npm packument or PyPI JSON document.
        ecosystem: Ecosystem the document came from.

    Returns:
        Normalized repository URL, or None.
    """
    if ecosystem == Ecosystem.PYPI:
        info = document.get("info") or {}
        project_urls = info.get("project_urls") or {}
        by_label = {
            label.lower().replace("_", " "): link
            for label, link in project_urls.items()
            if isinstance(link, str) and _is_forge_url(link)
        }

        for label in PYPI_SOURCE_LABELS:
            if label in by_label:
                return normalize_repository_url(by_label[label])
        if by_label:
            return normalize_repository_url(next(iter(by_label.values())))

        home_page = info.get("home_page")
        if isinstance(home_page, str) and _is_forge_url(home_page):
            return normalize_repository_url(home_page)
        return None

    repo = document.get("repository")
    if isinstance(repo, dict):
        repo = repo.get("url")
    if not isinstance(repo, str):
        return None
    return normalize_repository_url(repo)


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp from an API payload, or None if invalid."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
