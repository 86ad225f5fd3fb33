"""Collectors for upstream package signals."""

from deptrust.collectors.base import BaseCollector, CollectorError, PackageNotFoundError
from deptrust.collectors.funding import FundingCollector
from deptrust.collectors.github import GitHubCollector
from deptrust.collectors.license import LicenseCollector
from deptrust.collectors.orchestrator import CollectorOrchestrator
from deptrust.collectors.popularity import PopularityCollector
from deptrust.collectors.registry import RegistryCollector
from deptrust.collectors.security import SecurityCollector

__all__ = [
    "BaseCollector",
    "CollectorError",
    "CollectorOrchestrator",
    "FundingCollector",
    "GitHubCollector",
    "LicenseCollector",
    "PackageNotFoundError",
    "PopularityCollector",
    "RegistryCollector",
    "SecurityCollector",
]
