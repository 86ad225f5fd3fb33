"""Pydantic models for collected package signals and trust reports."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

DataT = TypeVar("DataT")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ecosystem(str, Enum):
    """Package ecosystems."""

    NPM = "npm"
    PYPI = "pypi"


class CollectorStatus(str, Enum):
    """Outcome of a single collector invocation."""

    SUCCESS = "success"
    CACHED = "cached"
    ERROR = "error"
    OFFLINE = "offline"


class LicenseRisk(str, Enum):
    """Risk class of a license for downstream consumers."""

    SAFE = "safe"  # Permissive
    CAUTIOUS = "cautious"  # Weak copyleft
    RISKY = "risky"  # Strong copyleft
    UNKNOWN = "unknown"


class DownloadTrend(str, Enum):
    """Direction of recent download volume."""

    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class TrendDirection(str, Enum):
    """Projected direction of a package's health."""

    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"
    UNKNOWN = "unknown"


class ZombieSeverity(str, Enum):
    """Severity of an abandonment finding."""

    NONE = "none"
    WARNING = "warning"
    CRITICAL = "critical"


# --- Collector Data Models ---


class RegistryData(BaseModel):
    """Package metadata from the package registry."""

    package_name: str
    version: str
    description: str = ""
    last_publish_date: datetime | None = None
    version_count: int = 0
    deprecated: str | None = None  # Deprecation message, None if not deprecated
    weekly_downloads: int = 0
    license: str | None = None
    repository_url: str | None = None


class RepoActivity(BaseModel):
    """Source repository activity from GitHub."""

    owner: str
    repo: str
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    updated_at: datetime | None = None
    archived: bool = False
    default_branch: str = "main"
    contributor_count: int = 0
    recent_commit_count: int = 0  # Commits in the last 30 days
    last_commit_date: datetime | None = None
    last_commit_sha: str | None = None
    has_funding_yml: bool = False


class SeverityCounts(BaseModel):
    """Vulnerability counts bucketed by severity."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    unknown: int = 0


class VulnerabilityEntry(BaseModel):
    """A single known vulnerability."""

    id: str
    summary: str = ""
    severity: str = "unknown"
    published: datetime | None = None


class SecurityData(BaseModel):
    """Known-vulnerability summary from OSV."""

    package_name: str
    version: str
    total_vulnerabilities: int = 0
    severity_counts: SeverityCounts = Field(default_factory=SeverityCounts)
    latest_vuln_date: datetime | None = None
    average_patch_days: int | None = None
    vulnerabilities: list[VulnerabilityEntry] = Field(default_factory=list)


class FundingData(BaseModel):
    """Funding and sponsorship signals."""

    package_name: str
    has_sponsors: bool = False
    has_open_collective: bool = False
    has_registry_funding: bool = False  # npm "funding" field or PyPI funding link
    open_collective_slug: str | None = None
    open_collective_backers: int = 0
    estimated_annual_funding: float = 0
    funding_urls: list[str] = Field(default_factory=list)


class PopularityData(BaseModel):
    """Download volume and trend."""

    package_name: str
    weekly_downloads: int = 0
    monthly_downloads: int = 0
    trend: DownloadTrend = DownloadTrend.STABLE
    dependent_count: int = 0


class LicenseData(BaseModel):
    """Declared license and its risk class."""

    package_name: str
    version: str
    raw: str | None = None
    spdx: str | None = None
    risk: LicenseRisk = LicenseRisk.UNKNOWN
    osi_approved: bool = False


# --- Collector Results ---


class CollectorResult(BaseModel, Generic[DataT]):
    """Tagged result of one collector.

    ``data`` is populated if and only if the status is ``success`` or ``cached``.
    """

    status: CollectorStatus
    data: DataT | None = None
    message: str | None = None
    collected_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _check_data_matches_status(self) -> "CollectorResult":
        has_data = self.status in (CollectorStatus.SUCCESS, CollectorStatus.CACHED)
        if has_data and self.data is None:
            raise ValueError(f"{self.status.value} result requires data")
        if not has_data and self.data is not None:
            raise ValueError(f"{self.status.value} result must not carry data")
        return self

    @property
    def available(self) -> bool:
        """Whether the result carries data."""
        return self.data is not None

    @classmethod
    def success(cls, data: DataT) -> "CollectorResult[DataT]":
        return cls(status=CollectorStatus.SUCCESS, data=data)

    @classmethod
    def cached(cls, data: DataT, collected_at: datetime | None = None) -> "CollectorResult[DataT]":
        return cls(
            status=CollectorStatus.CACHED,
            data=data,
            collected_at=collected_at or _utcnow(),
        )

    @classmethod
    def error(cls, message: str) -> "CollectorResult[DataT]":
        return cls(status=CollectorStatus.ERROR, message=message)

    @classmethod
    def offline(cls) -> "CollectorResult[DataT]":
        return cls(status=CollectorStatus.OFFLINE, message="No cached data available offline")


class CollectorResults(BaseModel):
    """Results for all six sources of one package."""

    registry: CollectorResult[RegistryData]
    github: CollectorResult[RepoActivity]
    security: CollectorResult[SecurityData]
    funding: CollectorResult[FundingData]
    popularity: CollectorResult[PopularityData]
    license: CollectorResult[LicenseData]

    def statuses(self) -> dict[str, CollectorStatus]:
        """Map of source name to result status."""
        return {name: getattr(self, name).status for name in type(self).model_fields}


# --- Analysis Models ---


class TrustMetrics(BaseModel):
    """Per-dimension scores. None marks an unavailable dimension."""

    security: int | None = Field(default=None, ge=0, le=100)
    maintainer: int | None = Field(default=None, ge=0, le=100)
    activity: int | None = Field(default=None, ge=0, le=100)
    popularity: int | None = Field(default=None, ge=0, le=100)
    funding: int | None = Field(default=None, ge=0, le=100)
    license: int | None = Field(default=None, ge=0, le=100)


class TrustScoreResult(BaseModel):
    """Composite trust score with its breakdown."""

    trust_score: int = Field(ge=0, le=100)
    metrics: TrustMetrics
    insufficient_data: bool = False
    unavailable_metrics: list[str] = Field(default_factory=list)


class ZombieResult(BaseModel):
    """Abandonment classification."""

    is_zombie: bool
    severity: ZombieSeverity
    last_activity: datetime | None = None
    reason: str


class TrendPrediction(BaseModel):
    """Weighted vote of download, commit and release signals."""

    trend: TrendDirection = TrendDirection.UNKNOWN
    confidence: float = Field(default=0, ge=0, le=1)
    risk_projection_3m: int = Field(default=0, ge=-20, le=10)  # Expected trust score change
    reason: str = ""


class TyposquatResult(BaseModel):
    """Name-similarity findings against well-known packages."""

    is_risky: bool
    similar_names: list[str] = Field(default_factory=list)
    min_distance: int = 0


class BlastRadiusResult(BaseModel):
    """Source files in a project that import a package."""

    affected_file_count: int = 0
    affected_file_paths: list[str] = Field(default_factory=list)
    percentage: float = 0


# --- Reports ---


class Dependency(BaseModel):
    """A dependency entry produced by a manifest reader."""

    name: str
    version: str = "latest"
    depth: int = 0
    is_direct: bool = True
    parent: str | None = None
    ecosystem: Ecosystem = Ecosystem.NPM


class PackageReport(BaseModel):
    """Full trust report for a single package."""

    package: str
    version: str
    ecosystem: Ecosystem
    trust_score: int = Field(ge=0, le=100)
    metrics: TrustMetrics
    insufficient_data: bool = False
    unavailable_metrics: list[str] = Field(default_factory=list)
    zombie: ZombieResult
    typosquat: TyposquatResult
    blast_radius: BlastRadiusResult | None = None
    trend: DownloadTrend = DownloadTrend.STABLE
    outlook: TrendPrediction | None = None
    sources: dict[str, CollectorStatus] = Field(default_factory=dict)
    analyzed_at: datetime = Field(default_factory=_utcnow)


class ProjectReport(BaseModel):
    """Trust reports for every direct dependency of a project."""

    project_dir: str
    reports: list[PackageReport] = Field(default_factory=list)
    overall_score: int = 0
    zombie_count: int = 0
    below_threshold: list[str] = Field(default_factory=list)
    nothing_to_scan: bool = False
    summary: str = ""


# --- Configuration ---


class Settings(BaseModel):
    """Runtime configuration for a scan."""

    min_trust_score: int = Field(default=50, ge=0, le=100)
    cache_ttl: int = Field(default=86_400, ge=0)  # Seconds
    cache_path: Path | None = None
    github_token: str | None = None
    ignore: list[str] = Field(default_factory=list)
    weights: dict[str, float] | None = None
    concurrency: int = Field(default=6, ge=1, le=20)  # Packages analyzed at once
    collector_concurrency: int = Field(default=10, ge=1)
    collector_timeout: float = Field(default=30.0, gt=0)
    offline: bool = False
    zombie_threshold_days: int = Field(default=365, ge=1)
