"""End-to-end trust analysis for packages and projects."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import httpx

from deptrust.analyzers.blast_radius import BlastRadiusCalculator, ImportGraph
from deptrust.analyzers.trend import TrendPredictor
from deptrust.analyzers.trust_score import DEFAULT_WEIGHTS, TrustScoreEngine
from deptrust.analyzers.typosquat import TyposquatDetector
from deptrust.analyzers.zombie import ZombieDetector
from deptrust.cache.store import CacheManager
from deptrust.collectors.orchestrator import CollectorOrchestrator
from deptrust.manifests import read_dependencies
from deptrust.models.schemas import (
    Dependency,
    DownloadTrend,
    Ecosystem,
    PackageReport,
    ProjectReport,
    Settings,
    TrustMetrics,
    ZombieResult,
    ZombieSeverity,
)
from deptrust.utils.rate_limiter import RateLimiters
from deptrust.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

NOTHING_TO_SCAN = "No supported manifest file found."


class TrustPipeline:
    """Orchestrates the full trust analysis.

    Pipeline stages per package:
    1. Collect data from all six sources
    2. Calculate the trust score
    3. Detect abandonment
    4. Check for typosquatting
    5. Predict the three-month trend
    6. Measure blast radius in the consuming project (if given)

    Use as an async context manager so all collectors share one HTTP client:

        async with TrustPipeline(settings) as pipeline:
            report = await pipeline.analyze_package("express")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: CacheManager | None = None,
        client: httpx.AsyncClient | None = None,
        rate_limiters: RateLimiters | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Analysis settings. Defaults to ``Settings()``.
            cache: Collector cache. Defaults to one at ``settings.cache_path``.
            client: Optional httpx client. If omitted, one is created on enter.
            rate_limiters: Per-source limiters shared by all collectors.
            now: Returns the current time. Used by the score, zombie and trend rules.

        Raises:
            ConfigError: If the configured weights are invalid.
        """
        self.settings = settings or Settings()
        self.cache = cache or CacheManager(self.settings.cache_path)
        self.rate_limiters = rate_limiters or RateLimiters()
        self.engine = TrustScoreEngine(self.settings.weights, now=now)
        self.zombie = ZombieDetector.from_threshold_days(self.settings.zombie_threshold_days, now=now)
        self.trend = TrendPredictor(now=now)
        self.blast_radius = BlastRadiusCalculator()
        self._typosquat: dict[Ecosystem, TyposquatDetector] = {}
        self._client = client
        self._owns_client = False
        self.orchestrator = self._build_orchestrator()

    def _build_orchestrator(self) -> CollectorOrchestrator:
        return CollectorOrchestrator(
            self.cache,
            settings=self.settings,
            client=self._client,
            rate_limiters=self.rate_limiters,
        )

    async def __aenter__(self) -> "TrustPipeline":
        """Set up the shared HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=30.0, follow_redirects=True)
            self._owns_client = True
            self.orchestrator = self._build_orchestrator()
        return self

    async def __aexit__(self, *args) -> None:
        """Close the HTTP client if this pipeline created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    def typosquat_detector(self, ecosystem: Ecosystem) -> TyposquatDetector:
        """Detector for an ecosystem's reference list, built on first use."""
        ecosystem = Ecosystem(ecosystem)
        if ecosystem not in self._typosquat:
            self._typosquat[ecosystem] = TyposquatDetector(ecosystem=ecosystem)
        return self._typosquat[ecosystem]

    def use_typosquat_detector(self, detector: TyposquatDetector, ecosystem: Ecosystem = Ecosystem.NPM) -> None:
        """Replace the detector for an ecosystem, e.g. one enriched from the registry."""
        self._typosquat[Ecosystem(ecosystem)] = detector

    async def analyze_package(
        self,
        package_name: str,
        version: str = "latest",
        ecosystem: Ecosystem = Ecosystem.NPM,
        project_dir: Path | str | None = None,
        graph: ImportGraph | None = None,
    ) -> PackageReport:
        """Run the full analysis on a single package.

        Args:
            package_name: Package name.
            version: Exact version or "latest".
            ecosystem: Package ecosystem.
            project_dir: Consuming project, for blast radius.
            graph: Prebuilt import graph of ``project_dir``.

        Returns:
            Complete PackageReport. ``blast_radius`` is None without a project.
        """
        ecosystem = Ecosystem(ecosystem)
        results = await self.orchestrator.collect_all(package_name, version, ecosystem)
        trust = self.engine.calculate(results)
        zombie = self.zombie.detect(results.registry.data, results.github.data)
        typosquat = self.typosquat_detector(ecosystem).check(package_name)
        outlook = self.trend.predict(results.registry.data, results.popularity.data, results.github.data)

        if graph is not None:
            blast_radius = graph.blast_radius(package_name)
        elif project_dir is not None:
            blast_radius = await self.blast_radius.calculate(package_name, project_dir)
        else:
            blast_radius = None

        popularity = results.popularity.data
        return PackageReport(
            package=package_name,
            version=version,
            ecosystem=ecosystem,
            trust_score=trust.trust_score,
            metrics=trust.metrics,
            insufficient_data=trust.insufficient_data,
            unavailable_metrics=trust.unavailable_metrics,
            zombie=zombie,
            typosquat=typosquat,
            blast_radius=blast_radius,
            trend=popularity.trend if popularity is not None else DownloadTrend.STABLE,
            outlook=outlook,
            sources=results.statuses(),
        )

    async def scan_project(
        self,
        project_dir: Path | str,
        dependencies: list[Dependency] | None = None,
    ) -> ProjectReport:
        """Analyze the direct dependencies of a project.

        Args:
            project_dir: Project root.
            dependencies: Dependencies to analyze. Read from the project's
                manifest when omitted.

        Returns:
            ProjectReport with per-package reports sorted by ascending score.

        Raises:
            ManifestError: If the project's manifest is malformed.
        """
        root = Path(project_dir)
        if dependencies is None:
            dependencies = read_dependencies(root)
        if dependencies is None:
            logger.info(f"No supported manifest in {root}")
            return ProjectReport(project_dir=str(root), nothing_to_scan=True, summary=NOTHING_TO_SCAN)

        ignored = set(self.settings.ignore)
        targets = [dep for dep in dependencies if dep.is_direct and dep.name not in ignored]
        logger.info(f"Scanning {len(targets)} direct dependencies in {root}")

        graph = await self.blast_radius.build_import_graph([dep.name for dep in targets], root)
        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def run(dep: Dependency) -> PackageReport:
            async with semaphore:
                try:
                    return await self.analyze_package(dep.name, dep.version, dep.ecosystem, graph=graph)
                except Exception as e:
                    logger.error(f"Failed to analyze {dep.name}@{dep.version}: {e}")
                    return self.fallback_report(dep, str(e))

        reports = await asyncio.gather(*(run(dep) for dep in targets))
        return self.build_project_report(root, list(reports))

    def build_project_report(self, project_dir: Path, reports: list[PackageReport]) -> ProjectReport:
        """Aggregate package reports into a project report."""
        reports = sorted(reports, key=lambda r: r.trust_score)
        overall = round_half_up(sum(r.trust_score for r in reports) / len(reports)) if reports else 0
        zombie_count = sum(1 for r in reports if r.zombie.is_zombie)
        below = [r.package for r in reports if r.trust_score < self.settings.min_trust_score]

        return ProjectReport(
            project_dir=str(project_dir),
            reports=reports,
            overall_score=overall,
            zombie_count=zombie_count,
            below_threshold=below,
            summary=(
                f"Scanned {len(reports)} direct dependencies. "
                f"Overall trust score: {overall}/100. "
                f"{zombie_count} zombie(s) detected."
            ),
        )

    def fallback_report(self, dep: Dependency, message: str) -> PackageReport:
        """Report for a package whose analysis failed outright."""
        return PackageReport(
            package=dep.name,
            version=dep.version,
            ecosystem=dep.ecosystem,
            trust_score=0,
            metrics=TrustMetrics(),
            insufficient_data=True,
            unavailable_metrics=list(DEFAULT_WEIGHTS),
            zombie=ZombieResult(
                is_zombie=False,
                severity=ZombieSeverity.NONE,
                reason=f"Analysis failed: {message}",
            ),
            typosquat=self.typosquat_detector(dep.ecosystem).check(dep.name),
            outlook=self.trend.predict(None, None, None),
        )
