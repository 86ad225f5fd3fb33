"""Three-month trajectory prediction from download, commit and release signals."""

from collections.abc import Callable
from datetime import datetime, timezone

from deptrust.analyzers.trust_score import months_between
from deptrust.models.schemas import (
    DownloadTrend,
    PopularityData,
    RegistryData,
    RepoActivity,
    TrendDirection,
    TrendPrediction,
)
from deptrust.utils.rounding import clamp, round_half_up

# Signals needed before confidence is no longer scaled down
HIGH_CONFIDENCE_SIGNALS = 3

PROJECTION_BY_TREND = {
    TrendDirection.RISING: 5,
    TrendDirection.STABLE: 0,
    TrendDirection.DECLINING: -10,
    TrendDirection.UNKNOWN: 0,
}

Signal = tuple[TrendDirection, float]


class TrendPredictor:
    """Predicts whether a package is rising, stable or declining.

    Each available signal votes for a direction with a weight:

    - Download trend: rising/declining 0.4, stable 0.3
    - Commits in the last 30 days: >=30 rising 0.3, >=10 stable 0.2,
      >=1 stable 0.15, none declining 0.3
    - Months since last publish: <2 rising 0.2, <6 stable 0.15,
      <12 declining 0.2, otherwise declining 0.3
    - More than 50 versions: stable 0.1
    - Deprecated: declining 0.5
    - Forks above 30% of stars: rising 0.1

    The heaviest direction wins. Confidence is its share of the total
    weight, scaled down when fewer than three signals are present.
    """

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(timezone.utc))

    def predict(
        self,
        registry: RegistryData | None,
        popularity: PopularityData | None,
        github: RepoActivity | None,
    ) -> TrendPrediction:
        """Predict the trajectory of a package.

        Args:
            registry: Registry metadata, or None if unavailable.
            popularity: Download statistics, or None if unavailable.
            github: Repository activity, or None if unavailable.

        Returns:
            TrendPrediction. With no signals at all the trend is ``unknown``
            with zero confidence and projection.
        """
        signals: list[Signal] = []
        reasons: list[str] = []

        def vote(direction: TrendDirection, weight: float, reason: str) -> None:
            signals.append((direction, weight))
            reasons.append(reason)

        if popularity is not None:
            if popularity.trend == DownloadTrend.RISING:
                vote(TrendDirection.RISING, 0.4, "Downloads are trending upward")
            elif popularity.trend == DownloadTrend.DECLINING:
                vote(TrendDirection.DECLINING, 0.4, "Downloads are trending downward")
            else:
                vote(TrendDirection.STABLE, 0.3, "Downloads are stable")

        if github is not None:
            commits = github.recent_commit_count
            if commits >= 30:
                vote(TrendDirection.RISING, 0.3, f"High commit activity ({commits} commits in 30 days)")
            elif commits >= 10:
                vote(TrendDirection.STABLE, 0.2, f"Moderate commit activity ({commits} commits in 30 days)")
            elif commits >= 1:
                vote(TrendDirection.STABLE, 0.15, f"Low commit activity ({commits} commits in 30 days)")
            else:
                vote(TrendDirection.DECLINING, 0.3, "No commits in the last 30 days")

        if registry is not None:
            if registry.last_publish_date is not None:
                months = months_between(registry.last_publish_date, self._now())
                rounded = round_half_up(months)
                if months < 2:
                    vote(TrendDirection.RISING, 0.2, "Recent version published within last 2 months")
                elif months < 6:
                    vote(TrendDirection.STABLE, 0.15, f"Last publish {rounded} months ago")
                elif months < 12:
                    vote(TrendDirection.DECLINING, 0.2, f"No new version in {rounded} months")
                else:
                    vote(
                        TrendDirection.DECLINING,
                        0.3,
                        f"No new version in {rounded} months, possibly abandoned",
                    )

            if registry.version_count > 50:
                vote(TrendDirection.STABLE, 0.1, f"Mature package with {registry.version_count} versions")

            if registry.deprecated is not None:
                vote(TrendDirection.DECLINING, 0.5, "Package is marked as deprecated")

        if github is not None and github.stars > 0 and github.forks / github.stars > 0.3:
            vote(TrendDirection.RISING, 0.1, "High fork-to-star ratio indicates active community")

        if not signals:
            return TrendPrediction(
                trend=TrendDirection.UNKNOWN,
                confidence=0,
                risk_projection_3m=0,
                reason="Insufficient data to determine trend",
            )

        trend, confidence = self._aggregate(signals)
        return TrendPrediction(
            trend=trend,
            confidence=round_half_up(confidence * 100) / 100,
            risk_projection_3m=round_half_up(self._projection(trend, confidence, signals)),
            reason=". ".join(reasons) + ".",
        )

    def _aggregate(self, signals: list[Signal]) -> tuple[TrendDirection, float]:
        votes = {
            TrendDirection.RISING: 0.0,
            TrendDirection.STABLE: 0.0,
            TrendDirection.DECLINING: 0.0,
        }
        for direction, weight in signals:
            votes[direction] += weight
        total = sum(votes.values())

        # Ties go to the earlier direction in the table above
        trend = max(votes, key=votes.get)
        dominance = votes[trend] / total if total > 0 else 0
        count_factor = min(len(signals) / HIGH_CONFIDENCE_SIGNALS, 1)
        return trend, min(dominance * count_factor, 1)

    def _projection(self, trend: TrendDirection, confidence: float, signals: list[Signal]) -> float:
        projection = PROJECTION_BY_TREND[trend] * confidence

        declining_weight = sum(weight for direction, weight in signals if direction == TrendDirection.DECLINING)
        if declining_weight > 0.5:
            projection -= round_half_up(declining_weight * 5)

        return clamp(projection, -20, 10)
