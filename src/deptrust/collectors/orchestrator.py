"""Runs every collector for a package with bounded concurrency."""

import asyncio
import logging

import httpx

from deptrust.cache.store import CacheManager
from deptrust.collectors.base import BaseCollector
from deptrust.collectors.funding import FundingCollector
from deptrust.collectors.github import GitHubCollector
from deptrust.collectors.license import LicenseCollector
from deptrust.collectors.popularity import PopularityCollector
from deptrust.collectors.registry import RegistryCollector
from deptrust.collectors.security import SecurityCollector
from deptrust.models.schemas import CollectorResult, CollectorResults, Ecosystem, Settings
from deptrust.utils.rate_limiter import RateLimiters

logger = logging.getLogger(__name__)

# Result field -> collector class
COLLECTORS: dict[str, type[BaseCollector]] = {
    "registry": RegistryCollector,
    "github": GitHubCollector,
    "security": SecurityCollector,
    "funding": FundingCollector,
    "popularity": PopularityCollector,
    "license": LicenseCollector,
}

# Collectors that accept a GitHub token
_TOKEN_COLLECTORS = (GitHubCollector, FundingCollector)


class CollectorOrchestrator:
    """Coordinates all collectors and runs them in parallel.

    Every call to ``collect_all`` yields a result for all six sources. Each
    collector runs under its own timeout, so a slow or failing source only
    degrades its own slot. In offline mode no network request is made and
    only cached entries are returned.

    Example:
        orchestrator = CollectorOrchestrator(CacheManager())
        results = await orchestrator.collect_all("express", "4.18.2")
    """

    def __init__(
        self,
        cache: CacheManager,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        rate_limiters: RateLimiters | None = None,
        github_token: str | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            cache: Cache shared by all collectors.
            settings: Offline flag, concurrency, timeout and cache TTL.
            client: Optional shared httpx client passed to every collector.
            rate_limiters: Per-source limiters. Created if omitted.
            github_token: GitHub token. Defaults to ``settings.github_token``,
                then the GITHUB_TOKEN environment variable.
        """
        self.cache = cache
        self.settings = settings or Settings()
        self.client = client
        self.rate_limiters = rate_limiters or RateLimiters()
        self.github_token = github_token or self.settings.github_token
        self._collectors: dict[Ecosystem, dict[str, BaseCollector]] = {}

    @property
    def offline(self) -> bool:
        return self.settings.offline

    @property
    def timeout(self) -> float:
        return self.settings.collector_timeout

    def collectors_for(self, ecosystem: Ecosystem) -> dict[str, BaseCollector]:
        """Collector instances for an ecosystem, created on first use."""
        ecosystem = Ecosystem(ecosystem)
        if ecosystem not in self._collectors:
            collectors = {}
            for key, collector_cls in COLLECTORS.items():
                kwargs = {}
                if issubclass(collector_cls, _TOKEN_COLLECTORS):
                    kwargs["token"] = self.github_token
                collectors[key] = collector_cls(
                    self.cache,
                    ecosystem,
                    self.client,
                    self.rate_limiters,
                    ttl=self.settings.cache_ttl,
                    **kwargs,
                )
            self._collectors[ecosystem] = collectors
        return self._collectors[ecosystem]

    async def collect_all(
        self,
        package_name: str,
        version: str = "latest",
        ecosystem: Ecosystem = Ecosystem.NPM,
    ) -> CollectorResults:
        """Run all collectors for a package version.

        Args:
            package_name: Package name.
            version: Version string, or "latest".
            ecosystem: Ecosystem the package belongs to.

        Returns:
            One result per source.
        """
        ecosystem = Ecosystem(ecosystem)
        logger.info(
            f"Collecting data for {package_name}@{version} "
            f"(ecosystem={ecosystem.value}, offline={self.offline})"
        )

        semaphore = asyncio.Semaphore(self.settings.collector_concurrency)
        collectors = self.collectors_for(ecosystem)

        async def run(collector: BaseCollector) -> CollectorResult:
            async with semaphore:
                if self.offline:
                    result = self._offline_collect(collector, package_name, version)
                else:
                    result = await self._online_collect(collector, package_name, version)
            logger.info(f"[{collector.source}] {package_name}@{version} => {result.status.value}")
            return result

        results = await asyncio.gather(*(run(c) for c in collectors.values()))
        return CollectorResults(**dict(zip(collectors.keys(), results)))

    async def _online_collect(
        self,
        collector: BaseCollector,
        package_name: str,
        version: str,
    ) -> CollectorResult:
        try:
            return await asyncio.wait_for(collector.collect(package_name, version), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"[{collector.source}] {package_name}@{version} => timeout ({self.timeout:g}s)")
            return collector.result_type.error(f"Timeout after {self.timeout:g}s")
        except Exception as e:
            logger.error(f"Unhandled error in {collector.source}: {e}")
            return collector.result_type.error(str(e))

    def _offline_collect(
        self,
        collector: BaseCollector,
        package_name: str,
        version: str,
    ) -> CollectorResult:
        cached = collector.get_cached(package_name, version)
        if cached is not None:
            return cached
        return collector.result_type.offline()
