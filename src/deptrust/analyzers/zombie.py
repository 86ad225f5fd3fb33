"""Rule-based abandonment ("zombie") detection."""

from collections.abc import Callable
from datetime import datetime, timezone

from deptrust.analyzers.trust_score import months_between
from deptrust.models.schemas import RegistryData, RepoActivity, ZombieResult, ZombieSeverity
from deptrust.utils.rounding import round_half_up

DAYS_PER_MONTH = 30.4375


class ZombieDetector:
    """Detects whether a package shows signs of abandonment.

    Rules, first match wins:
    1. Deprecated (npm) or yanked (PyPI) release -> critical
    2. Zero contributors -> critical
    3. No commits in ``critical_months`` -> critical
    4. No commits and no publish in ``stale_months`` -> warning
    5. Only one of the two signals known, and it is stale -> warning
    """

    def __init__(
        self,
        stale_months: int = 12,
        critical_months: int = 24,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.stale_months = stale_months
        self.critical_months = critical_months
        self._now = now or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_threshold_days(cls, days: int, **kwargs) -> "ZombieDetector":
        """Build a detector whose stale threshold is given in days."""
        stale_months = max(1, round_half_up(days / DAYS_PER_MONTH))
        critical_months = max(stale_months, kwargs.pop("critical_months", 24))
        return cls(stale_months=stale_months, critical_months=critical_months, **kwargs)

    def detect(self, registry: RegistryData | None, github: RepoActivity | None) -> ZombieResult:
        """Classify a package from its registry and repository data.

        Args:
            registry: Registry metadata, or None if unavailable.
            github: Repository activity, or None if unavailable.

        Returns:
            ZombieResult. ``last_activity`` is the later of the last publish
            and last commit dates.
        """
        now = self._now()

        last_publish = registry.last_publish_date if registry is not None else None
        last_commit = github.last_commit_date if github is not None else None
        months_since_publish = months_between(last_publish, now) if last_publish else None
        months_since_commit = months_between(last_commit, now) if last_commit else None
        last_activity = _later(last_publish, last_commit)

        def zombie(severity: ZombieSeverity, reason: str) -> ZombieResult:
            return ZombieResult(
                is_zombie=True,
                severity=severity,
                last_activity=last_activity,
                reason=reason,
            )

        if registry is not None and registry.deprecated is not None:
            return zombie(ZombieSeverity.CRITICAL, "Package is marked as deprecated")

        if github is not None and github.contributor_count == 0:
            return zombie(ZombieSeverity.CRITICAL, "0 active maintainers/contributors")

        if months_since_commit is not None and months_since_commit >= self.critical_months:
            return zombie(
                ZombieSeverity.CRITICAL,
                f"No commits in {round_half_up(months_since_commit)} months, "
                f"last commit {last_commit.date().isoformat()}",
            )

        commit_stale = months_since_commit is not None and months_since_commit >= self.stale_months
        publish_stale = months_since_publish is not None and months_since_publish >= self.stale_months

        if commit_stale and publish_stale:
            return zombie(
                ZombieSeverity.WARNING,
                f"No commits in {round_half_up(months_since_commit)} months, "
                f"last publish {last_publish.date().isoformat()}",
            )

        if commit_stale and months_since_publish is None:
            return zombie(
                ZombieSeverity.WARNING,
                f"No commits in {round_half_up(months_since_commit)} months (registry data unavailable)",
            )

        if publish_stale and months_since_commit is None:
            return zombie(
                ZombieSeverity.WARNING,
                f"No publish in {round_half_up(months_since_publish)} months (GitHub data unavailable)",
            )

        return ZombieResult(
            is_zombie=False,
            severity=ZombieSeverity.NONE,
            last_activity=last_activity,
            reason="Package is actively maintained",
        )


def _later(a: datetime | None, b: datetime | None) -> datetime | None:
    if a is None:
        return b
    if b is None:
        return a
    return a if a >= b else b
