"""Data models and schemas."""

from deptrust.models.schemas import (
    CollectorResult,
    CollectorResults,
    CollectorStatus,
    Ecosystem,
    PackageReport,
    ProjectReport,
    Settings,
    TrendPrediction,
)

__all__ = [
    "CollectorResult",
    "CollectorResults",
    "CollectorStatus",
    "Ecosystem",
    "PackageReport",
    "ProjectReport",
    "Settings",
    "TrendPrediction",
]
