"""Tests for three-month trend prediction."""

from datetime import datetime, timezone

import pytest

from deptrust.analyzers.trend import TrendPredictor
from deptrust.models.schemas import (
    DownloadTrend,
    PopularityData,
    RegistryData,
    RepoActivity,
    TrendDirection,
)


def registry(
    published: datetime | None = None,
    versions: int = 20,
    deprecated: str | None = None,
) -> RegistryData:
    return RegistryData(
        package_name="pkg",
        version="1.0.0",
        last_publish_date=published,
        version_count=versions,
        deprecated=deprecated,
    )


def popularity(trend: DownloadTrend) -> PopularityData:
    return PopularityData(package_name="pkg", weekly_downloads=500_000, monthly_downloads=2_000_000, trend=trend)


def github(commits: int, stars: int = 0, forks: int = 0) -> RepoActivity:
    return RepoActivity(owner="o", repo="r", stars=stars, forks=forks, recent_commit_count=commits)


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def predictor(now: datetime) -> TrendPredictor:
    return TrendPredictor(now=lambda: now)


class TestTrendPredictor:
    """Tests for TrendPredictor.predict."""

    def test_rising_package(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(
            registry(published=utc(2026, 5, 25)),
            popularity(DownloadTrend.RISING),
            github(commits=50, stars=10_000, forks=5_000),
        )

        assert result.trend == TrendDirection.RISING
        assert result.confidence == 1.0
        assert result.risk_projection_3m == 5

    def test_declining_package(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(
            registry(published=utc(2024, 12, 1)),
            popularity(DownloadTrend.DECLINING),
            github(commits=0, stars=100, forks=5),
        )

        assert result.trend == TrendDirection.DECLINING
        assert result.risk_projection_3m == -15
        assert "No new version in 18 months, possibly abandoned" in result.reason
        assert "No commits in the last 30 days" in result.reason

    def test_stable_package(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(
            registry(published=utc(2026, 2, 1)),
            popularity(DownloadTrend.STABLE),
            github(commits=12),
        )

        assert result.trend == TrendDirection.STABLE
        assert result.risk_projection_3m == 0
        assert "Last publish 4 months ago" in result.reason

    def test_no_data_is_unknown(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(None, None, None)

        assert result.trend == TrendDirection.UNKNOWN
        assert result.confidence == 0
        assert result.risk_projection_3m == 0
        assert result.reason == "Insufficient data to determine trend"

    def test_deprecated_amplifies_decline(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(
            registry(deprecated="Use alternative-pkg instead"),
            popularity(DownloadTrend.DECLINING),
            github(commits=0),
        )

        assert result.trend == TrendDirection.DECLINING
        assert result.risk_projection_3m == -16
        assert "Package is marked as deprecated" in result.reason

    def test_few_signals_lower_confidence(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(None, None, github(commits=35, stars=100, forks=50))

        assert result.trend == TrendDirection.RISING
        assert result.confidence == 0.67
        assert result.risk_projection_3m == 3
        assert "fork-to-star" in result.reason

    def test_split_vote_lowers_confidence(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(None, popularity(DownloadTrend.RISING), github(commits=0))

        assert result.trend == TrendDirection.RISING
        assert result.confidence == 0.38
        assert result.risk_projection_3m == 2

    def test_mature_package(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(registry(published=utc(2026, 2, 1), versions=100), None, None)

        assert result.trend == TrendDirection.STABLE
        assert "Mature package with 100 versions" in result.reason

    def test_publish_gap_projects_decline(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(registry(published=utc(2025, 10, 1)), None, None)

        assert result.trend == TrendDirection.DECLINING
        assert result.confidence == 0.33
        assert result.risk_projection_3m == -3
        assert result.reason == "No new version in 8 months."

    @pytest.mark.parametrize(
        ("commits", "expected"),
        [
            (30, TrendDirection.RISING),
            (10, TrendDirection.STABLE),
            (1, TrendDirection.STABLE),
            (0, TrendDirection.DECLINING),
        ],
    )
    def test_commit_activity_thresholds(
        self, predictor: TrendPredictor, commits: int, expected: TrendDirection
    ) -> None:
        assert predictor.predict(None, None, github(commits=commits)).trend == expected

    def test_reason_joins_signals(self, predictor: TrendPredictor) -> None:
        result = predictor.predict(None, popularity(DownloadTrend.STABLE), github(commits=5))

        assert result.reason == "Downloads are stable. Low commit activity (5 commits in 30 days)."
