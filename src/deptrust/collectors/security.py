"""OSV (Open Source Vulnerabilities) collector for known vulnerabilities."""

import logging

from deptrust.collectors.base import BaseCollector, parse_datetime
from deptrust.models.schemas import (
    Ecosystem,
    SecurityData,
    SeverityCounts,
    VulnerabilityEntry,
)
from deptrust.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Patch-time samples beyond ten years are treated as noise
MAX_PATCH_DAYS = 3650


class SecurityCollector(BaseCollector[SecurityData]):
    """Collects known vulnerabilities from the OSV database.

    OSV is a distributed vulnerability database for open source:
    https://osv.dev/

    No authentication required.
    """

    name = "security"
    data_model = SecurityData

    BASE_URL = "https://api.osv.dev/v1"

    # Map our ecosystem names to OSV ecosystem names
    ECOSYSTEM_MAP = {
        Ecosystem.NPM: "npm",
        Ecosystem.PYPI: "PyPI",
    }

    # Guard against runaway pagination
    MAX_PAGES = 10

    @property
    def osv_ecosystem(self) -> str:
        return self.ECOSYSTEM_MAP[self.ecosystem]

    async def _collect(self, package_name: str, version: str) -> SecurityData:
        vulns = await self._query(package_name, version)

        counts = SeverityCounts()
        entries = []
        for vuln in vulns:
            severity = parse_severity(vuln)
            setattr(counts, severity, getattr(counts, severity) + 1)
            entries.append(
                VulnerabilityEntry(
                    id=vuln.get("id", "UNKNOWN"),
                    summary=(vuln.get("summary") or vuln.get("details") or "")[:500],
                    severity=severity,
                    published=parse_datetime(vuln.get("published") or vuln.get("modified")),
                )
            )

        dates = [e.published for e in entries if e.published is not None]

        return SecurityData(
            package_name=package_name,
            version=version,
            total_vulnerabilities=len(vulns),
            severity_counts=counts,
            latest_vuln_date=max(dates) if dates else None,
            average_patch_days=average_patch_days(vulns),
            vulnerabilities=entries,
        )

    async def _query(self, package_name: str, version: str) -> list[dict]:
        """Query OSV for all vulnerabilities of a package.

        Args:
            package_name: Package name.
            version: Specific version, or "latest" to query every version.

        Returns:
            List of OSV vulnerability records.
        """
        body: dict = {"package": {"name": package_name, "ecosystem": self.osv_ecosystem}}
        if version and version != "latest":
            body["version"] = version

        vulns: list[dict] = []
        for _ in range(self.MAX_PAGES):
            response = await self._request(
                "POST",
                f"{self.BASE_URL}/query",
                self.rate_limiters.osv,
                json=body,
            )
            data = response.json()
            vulns.extend(data.get("vulns") or [])

            page_token = data.get("next_page_token")
            if not page_token:
                break
            body["page_token"] = page_token
        else:
            logger.warning(f"OSV results for {package_name} truncated after {self.MAX_PAGES} pages")

        return vulns


def cvss_to_severity(score: object) -> str:
    """Map a numeric CVSS base score to a severity bucket.

    CVSS vector strings do not carry the base score, so they map to "unknown".
    """
    if isinstance(score, str):
        if score.startswith("CVSS:"):
            return "unknown"
        try:
            numeric = float(score)
        except ValueError:
            return "unknown"
    elif isinstance(score, (int, float)):
        numeric = float(score)
    else:
        return "unknown"

    if numeric >= 9.0:
        return "critical"
    if numeric >= 7.0:
        return "high"
    if numeric >= 4.0:
        return "medium"
    if numeric > 0:
        return "low"
    return "unknown"


def parse_severity(vuln: dict) -> str:
    """Extract a severity bucket from an OSV record.

    Args:
        vuln: OSV vulnerability record.

    Returns:
        One of critical, high, medium, low or unknown.
    """
    for entry in vuln.get("severity") or []:
        level = cvss_to_severity(entry.get("score"))
        if level != "unknown":
            return level

    db_severity = (vuln.get("database_specific") or {}).get("severity")
    if isinstance(db_severity, str):
        normalized = db_severity.strip().lower()
        if normalized == "moderate":
            return "medium"
        if normalized in ("critical", "high", "medium", "low"):
            return normalized

    return "unknown"


def average_patch_days(vulns: list[dict]) -> int | None:
    """Estimate mean days from disclosure to fix.

    OSV affected ranges use version strings rather than dates, so the time
    from ``published`` to ``modified`` stands in for the patch delay.

    Returns:
        Rounded mean in days, or None if no record has usable dates.
    """
    samples = []
    for vuln in vulns:
        published = parse_datetime(vuln.get("published"))
        modified = parse_datetime(vuln.get("modified"))
        if published is None or modified is None:
            continue
        days = (modified - published).total_seconds() / 86_400
        if 0 < days < MAX_PATCH_DAYS:
            samples.append(days)

    if not samples:
        return None
    return round_half_up(sum(samples) / len(samples))
