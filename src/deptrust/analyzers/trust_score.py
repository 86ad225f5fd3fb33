"""Weighted trust score over the six collector dimensions."""

from collections.abc import Callable
from datetime import datetime, timezone

from deptrust.config import ConfigError
from deptrust.models.schemas import (
    CollectorResults,
    FundingData,
    LicenseData,
    LicenseRisk,
    PopularityData,
    RegistryData,
    RepoActivity,
    SecurityData,
    TrustMetrics,
    TrustScoreResult,
)
from deptrust.utils.rounding import clamp, round_half_up

DEFAULT_WEIGHTS = {
    "security": 0.25,
    "maintainer": 0.25,
    "activity": 0.20,
    "popularity": 0.15,
    "funding": 0.10,
    "license": 0.05,
}

WEIGHT_TOLERANCE = 0.01
NEUTRAL_SCORE = 50

LICENSE_SCORES = {
    LicenseRisk.SAFE: 100,
    LicenseRisk.CAUTIOUS: 60,
    LicenseRisk.RISKY: 30,
    LicenseRisk.UNKNOWN: 10,
}

# (minimum weekly downloads, score), highest first
POPULARITY_TIERS = (
    (10_000_000, 100),
    (1_000_000, 90),
    (100_000, 75),
    (10_000, 60),
    (1_000, 40),
    (100, 25),
)


class TrustScoreEngine:
    """Calculates the composite trust score from collector results.

    Dimensions and default weights (total 1.0):
    - Security: 0.25
    - Maintainer: 0.25
    - Activity: 0.20
    - Popularity: 0.15
    - Funding: 0.10
    - License: 0.05

    A dimension whose collector produced no data is unavailable. Its weight
    is redistributed proportionally over the available dimensions, then the
    score is pulled toward 50 by the missing weight fraction.
    """

    def __init__(
        self,
        weights: dict[str, float] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            weights: Partial weight overrides merged over the defaults.
            now: Returns the current time. Used for publish recency.

        Raises:
            ConfigError: If a weight name is unknown or the weights do not sum to 1.0.
        """
        unknown = set(weights or {}) - set(DEFAULT_WEIGHTS)
        if unknown:
            raise ConfigError(f"Unknown trust score dimension(s): {', '.join(sorted(unknown))}")

        self.weights = {**DEFAULT_WEIGHTS, **(weights or {})}
        total = sum(self.weights.values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ConfigError(f"Trust score weights must sum to 1.0, got {total:.4f}")
        self._now = now or (lambda: datetime.now(timezone.utc))

    def calculate(self, results: CollectorResults) -> TrustScoreResult:
        """Calculate the trust score for one package.

        Args:
            results: Results of all six collectors.

        Returns:
            Score, per-dimension metrics and data availability.
        """
        metrics = TrustMetrics(
            security=self.security_score(results.security.data),
            maintainer=self.maintainer_score(results.github.data),
            activity=self.activity_score(results.registry.data, results.github.data),
            popularity=self.popularity_score(results.popularity.data),
            funding=self.funding_score(results.funding.data),
            license=self.license_score(results.license.data),
        )
        scores = metrics.model_dump()
        unavailable = [name for name in DEFAULT_WEIGHTS if scores[name] is None]

        return TrustScoreResult(
            trust_score=self.weighted_score(scores),
            metrics=metrics,
            insufficient_data=len(unavailable) >= 2,
            unavailable_metrics=unavailable,
        )

    def weighted_score(self, scores: dict[str, int | None]) -> int:
        """Combine dimension scores, redistributing unavailable weight.

        The weighted mean over available dimensions is computed first, then a
        single pull toward the midpoint proportional to the total missing weight.

        Args:
            scores: Dimension name to score, None when unavailable.

        Returns:
            Composite score in [0, 100]. 0 when nothing is available.
        """
        available = {name: s for name, s in scores.items() if s is not None}
        total_weight = sum(self.weights[name] for name in available)
        if not available or total_weight <= 0:
            return 0

        score = sum(s * self.weights[name] / total_weight for name, s in available.items())

        missing = 1 - total_weight
        if missing > 0:
            score -= (score - NEUTRAL_SCORE) * missing

        return int(clamp(round_half_up(score)))

    # --- Dimension scorers ---

    def security_score(self, data: SecurityData | None) -> int | None:
        if data is None:
            return None

        vulns = data.total_vulnerabilities
        # Popular packages accumulate advisories over time, so the penalty diminishes
        if vulns == 0:
            score = 100
        elif vulns == 1:
            score = 85
        elif vulns == 2:
            score = 72
        elif vulns == 3:
            score = 60
        elif vulns == 4:
            score = 50
        else:
            score = max(20, 100 - vulns * 12)

        patch_days = data.average_patch_days
        if vulns > 0 and patch_days is not None and patch_days > 0:
            if patch_days <= 7:
                score = min(100, score + 10)
            elif patch_days <= 30:
                score = min(100, score + 5)

        return int(clamp(score))

    def maintainer_score(self, data: RepoActivity | None) -> int | None:
        if data is None:
            return None

        if data.contributor_count <= 1:
            ceiling = 60
        elif data.contributor_count <= 5:
            ceiling = 80
        else:
            ceiling = 100

        score = ceiling
        commits = data.recent_commit_count
        if commits == 0:
            score -= 20
        elif commits < 5:
            score -= 10
        elif commits >= 20:
            score = min(ceiling, score + 5)

        return int(clamp(score))

    def activity_score(self, registry: RegistryData | None, github: RepoActivity | None) -> int | None:
        """Blend publish recency (60%) and commit volume (40%).

        Either source alone is used directly. Missing values inside an
        available source count as neutral (50).
        """
        if registry is None and github is None:
            return None

        publish_score = NEUTRAL_SCORE
        if registry is not None and registry.last_publish_date is not None:
            months = months_between(registry.last_publish_date, self._now())
            if months < 3:
                publish_score = 100
            elif months < 6:
                publish_score = 80
            elif months < 12:
                publish_score = 50
            elif months < 24:
                publish_score = 20
            else:
                publish_score = 0

        commit_score = NEUTRAL_SCORE
        if github is not None:
            commits = github.recent_commit_count
            if commits >= 30:
                commit_score = 100
            elif commits >= 15:
                commit_score = 80
            elif commits >= 5:
                commit_score = 60
            elif commits >= 1:
                commit_score = 40
            else:
                commit_score = 10

        if registry is not None and github is not None:
            return int(clamp(round_half_up(publish_score * 0.6 + commit_score * 0.4)))
        return int(clamp(publish_score if registry is not None else commit_score))

    def popularity_score(self, data: PopularityData | None) -> int | None:
        if data is None:
            return None
        for threshold, score in POPULARITY_TIERS:
            if data.weekly_downloads >= threshold:
                return score
        return 10

    def funding_score(self, data: FundingData | None) -> int | None:
        if data is None:
            return None
        if data.estimated_annual_funding >= 50_000:
            return 90
        if data.has_open_collective:
            return 70
        if data.has_sponsors:
            return 60
        if data.has_registry_funding:
            return 65
        return 30

    def license_score(self, data: LicenseData | None) -> int | None:
        if data is None:
            return None
        return LICENSE_SCORES[data.risk]


def months_between(start: datetime, end: datetime) -> float:
    """Calendar months from ``start`` to ``end``.

    A partial trailing month (end day before start day) counts as half.
    """
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    start = start.astimezone(timezone.utc)
    end = end.astimezone(timezone.utc)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        return months - 0.5
    return months
