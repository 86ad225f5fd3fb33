"""Tests for per-package reports and project scans."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from deptrust.analyzers.pipeline import NOTHING_TO_SCAN, TrustPipeline
from deptrust.collectors.orchestrator import COLLECTORS
from deptrust.models.schemas import (
    CollectorStatus,
    Dependency,
    DownloadTrend,
    Ecosystem,
    FundingData,
    LicenseData,
    LicenseRisk,
    PopularityData,
    RegistryData,
    RepoActivity,
    SecurityData,
    Settings,
    TrendDirection,
    ZombieSeverity,
)


def seed(cache, name: str, version: str, ecosystem: Ecosystem = Ecosystem.NPM, **data) -> None:
    """Store collector data in the cache as if it had been collected."""
    for source, value in data.items():
        COLLECTORS[source](cache, ecosystem).set_cache(name, version, value)


def seed_express(cache) -> None:
    seed(
        cache,
        "express",
        "4.18.2",
        registry=RegistryData(
            package_name="express",
            version="4.18.2",
            last_publish_date=datetime(2026, 5, 20, tzinfo=timezone.utc),
            deprecated="use alt instead",
        ),
        github=RepoActivity(owner="expressjs", repo="express", contributor_count=40, recent_commit_count=40),
        security=SecurityData(package_name="express", version="4.18.2"),
        funding=FundingData(package_name="express"),
        popularity=PopularityData(package_name="express", weekly_downloads=20_000_000, trend=DownloadTrend.RISING),
        license=LicenseData(package_name="express", version="4.18.2", spdx="MIT", risk=LicenseRisk.SAFE),
    )


@pytest.fixture
def offline_pipeline(cache, now: datetime) -> TrustPipeline:
    return TrustPipeline(Settings(offline=True, ignore=["left-pad"]), cache=cache, now=lambda: now)


class TestAnalyzePackage:
    """Tests for TrustPipeline.analyze_package."""

    @pytest.mark.asyncio
    async def test_report_from_cached_data(self, cache, offline_pipeline: TrustPipeline) -> None:
        seed_express(cache)

        report = await offline_pipeline.analyze_package("express", "4.18.2")

        assert report.trust_score == 93
        assert report.metrics.funding == 30
        assert report.insufficient_data is False
        assert report.zombie.is_zombie is True
        assert report.zombie.severity == ZombieSeverity.CRITICAL
        assert report.typosquat.is_risky is False
        assert report.blast_radius is None
        assert report.trend == DownloadTrend.RISING
        assert report.outlook.trend == TrendDirection.RISING
        assert report.outlook.confidence == 0.64
        assert report.outlook.risk_projection_3m == 3
        assert "deprecated" in report.outlook.reason
        assert set(report.sources.values()) == {CollectorStatus.CACHED}

    @pytest.mark.asyncio
    async def test_offline_without_cache(self, offline_pipeline: TrustPipeline) -> None:
        report = await offline_pipeline.analyze_package("expresss")

        assert report.trust_score == 0
        assert report.insufficient_data is True
        assert len(report.unavailable_metrics) == 6
        assert set(report.sources.values()) == {CollectorStatus.OFFLINE}
        assert report.outlook.trend == TrendDirection.UNKNOWN
        assert report.typosquat.is_risky is True
        assert "express" in report.typosquat.similar_names

    @pytest.mark.asyncio
    async def test_online_with_failing_sources(self, cache, make_client, now: datetime) -> None:
        async with TrustPipeline(Settings(), cache=cache, client=make_client({}), now=lambda: now) as pipeline:
            report = await pipeline.analyze_package("ghost-package", "1.0.0")

        assert report.sources["registry"] == CollectorStatus.ERROR
        assert report.sources["funding"] == CollectorStatus.SUCCESS
        assert report.sources["popularity"] == CollectorStatus.ERROR
        assert report.metrics.funding == 30
        assert report.metrics.popularity is None
        assert report.trust_score == 48
        assert report.insufficient_data is True

    @pytest.mark.asyncio
    async def test_pypi_package_uses_pypi_reference_list(self, offline_pipeline: TrustPipeline) -> None:
        report = await offline_pipeline.analyze_package("reqeusts", ecosystem=Ecosystem.PYPI)

        assert report.ecosystem == Ecosystem.PYPI
        assert "requests" in report.typosquat.similar_names

    @pytest.mark.asyncio
    async def test_blast_radius_for_project(self, tmp_path: Path, offline_pipeline: TrustPipeline) -> None:
        (tmp_path / "index.js").write_text("const express = require('express');\n", encoding="utf-8")

        report = await offline_pipeline.analyze_package("express", project_dir=tmp_path)

        assert report.blast_radius.affected_file_count == 1
        assert report.blast_radius.percentage == 100.0

    @pytest.mark.asyncio
    async def test_owns_client_only_when_created(self, cache, make_client) -> None:
        client = make_client({})
        async with TrustPipeline(Settings(), cache=cache, client=client):
            pass

        assert not client.is_closed

        pipeline = TrustPipeline(Settings(), cache=cache)
        async with pipeline:
            assert pipeline.orchestrator.client is not None
        assert pipeline._client is None


class TestScanProject:
    """Tests for TrustPipeline.scan_project."""

    @pytest.mark.asyncio
    async def test_no_manifest(self, tmp_path: Path, offline_pipeline: TrustPipeline) -> None:
        report = await offline_pipeline.scan_project(tmp_path)

        assert report.nothing_to_scan is True
        assert report.reports == []
        assert report.overall_score == 0
        assert report.summary == NOTHING_TO_SCAN

    @pytest.mark.asyncio
    async def test_scan_npm_project(self, tmp_path: Path, cache, offline_pipeline: TrustPipeline) -> None:
        seed_express(cache)
        manifest = {"dependencies": {"express": "4.18.2", "expresss": "^1.0.0"}, "devDependencies": {"left-pad": "1.3.0"}}
        (tmp_path / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "index.js").write_text("import express from 'express';\n", encoding="utf-8")

        report = await offline_pipeline.scan_project(tmp_path)

        assert [r.package for r in report.reports] == ["expresss", "express"]
        assert report.overall_score == 47
        assert report.zombie_count == 1
        assert report.below_threshold == ["expresss"]
        assert report.summary == "Scanned 2 direct dependencies. Overall trust score: 47/100. 1 zombie(s) detected."

        express = report.reports[1]
        assert express.version == "4.18.2"
        assert express.blast_radius.affected_file_paths == ["src/index.js"]
        assert report.reports[0].blast_radius.affected_file_count == 0

    @pytest.mark.asyncio
    async def test_skips_transitive_dependencies(self, tmp_path: Path, offline_pipeline: TrustPipeline) -> None:
        dependencies = [
            Dependency(name="express"),
            Dependency(name="body-parser", depth=1, is_direct=False, parent="express"),
            Dependency(name="left-pad"),
        ]

        report = await offline_pipeline.scan_project(tmp_path, dependencies)

        assert [r.package for r in report.reports] == ["express"]

    @pytest.mark.asyncio
    async def test_failed_analysis_gives_fallback_report(self, tmp_path: Path, offline_pipeline: TrustPipeline) -> None:
        async def explode(package_name, version="latest", ecosystem=Ecosystem.NPM):
            raise RuntimeError("boom")

        offline_pipeline.orchestrator.collect_all = explode

        report = await offline_pipeline.scan_project(tmp_path, [Dependency(name="express")])

        fallback = report.reports[0]
        assert fallback.trust_score == 0
        assert fallback.insufficient_data is True
        assert fallback.zombie.reason == "Analysis failed: boom"
        assert len(fallback.unavailable_metrics) == 6
        assert fallback.outlook.trend == TrendDirection.UNKNOWN

    @pytest.mark.asyncio
    async def test_empty_dependency_list(self, tmp_path: Path, offline_pipeline: TrustPipeline) -> None:
        report = await offline_pipeline.scan_project(tmp_path, [])

        assert report.nothing_to_scan is False
        assert report.overall_score == 0
        assert report.summary == "Scanned 0 direct dependencies. Overall trust score: 0/100. 0 zombie(s) detected."
