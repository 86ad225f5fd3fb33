"""GitHub repository activity collector."""

import asyncio
import logging
import os
import re
from datetime import datetime, timedelta, timezone

import httpx

from deptrust.cache.store import CacheManager
from deptrust.collectors.base import (
    BaseCollector,
    CollectorError,
    extract_repository_url,
    parse_datetime,
    parse_github_slug,
)
from deptrust.models.schemas import Ecosystem, RepoActivity
from deptrust.utils.rate_limiter import RateLimiters

logger = logging.getLogger(__name__)

_LAST_PAGE = re.compile(r'[?&]page=(\d+)[^>]*>;\s*rel="last"')


class GitHubCollector(BaseCollector[RepoActivity]):
    """Collects maintainer and commit activity for a package's repository.

    The repository is found through the package's registry metadata. Works
    without a token, but a GitHub personal access token raises the API rate
    limit from 60 to 5000 requests per hour. Set GITHUB_TOKEN or pass
    ``token`` to the constructor.
    """

    name = "github"
    data_model = RepoActivity

    BASE_URL = "https://api.github.com"
    RECENT_COMMIT_DAYS = 30

    def __init__(
        self,
        cache: CacheManager,
        ecosystem: Ecosystem = Ecosystem.NPM,
        client: httpx.AsyncClient | None = None,
        rate_limiters: RateLimiters | None = None,
        token: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(cache, ecosystem, client, rate_limiters, **kwargs)
        self._token = token or os.environ.get("GITHUB_TOKEN")

        # Rate limit tracking from response headers
        self.rate_limit_remaining: int | None = None
        self.rate_limit_reset: datetime | None = None

    def _headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _update_rate_limits(self, response: httpx.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset = response.headers.get("X-RateLimit-Reset")
        if remaining is not None:
            self.rate_limit_remaining = int(remaining)
        if reset is not None:
            self.rate_limit_reset = datetime.fromtimestamp(int(reset), tz=timezone.utc)

    async def _fetch(self, path: str, params: dict | None = None) -> httpx.Response:
        """GET a GitHub API path. Raises on non-2xx."""
        response = await self._request(
            "GET",
            f"{self.BASE_URL}{path}",
            self.rate_limiters.github,
            params=params,
            headers=self._headers(),
        )
        self._update_rate_limits(response)
        return response

    async def _fetch_optional(self, path: str, params: dict | None = None) -> httpx.Response | None:
        """GET a GitHub API path, returning None on any failure."""
        try:
            return await self._fetch(path, params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 404:
                logger.warning(f"GitHub API error {e.response.status_code}: {path}")
            return None
        except httpx.RequestError as e:
            logger.warning(f"GitHub request error for {path}: {e}")
            return None

    async def resolve_repository(self, package_name: str) -> tuple[str, str] | None:
        """Find the GitHub (owner, repo) for a package via its registry metadata."""
        document = await self._fetch_registry_document(package_name)
        return parse_github_slug(extract_repository_url(document, self.ecosystem))

    async def _collect(self, package_name: str, version: str) -> RepoActivity:
        slug = await self.resolve_repository(package_name)
        if slug is None:
            raise CollectorError(self.source, f"No GitHub repository found for {package_name}")
        owner, repo = slug

        info, contributors, recent_commits, latest_commit, has_funding = await asyncio.gather(
            self._fetch_repo_info(owner, repo),
            self._count_items(f"/repos/{owner}/{repo}/contributors", {"per_page": 1, "anon": "true"}),
            self._count_items(
                f"/repos/{owner}/{repo}/commits",
                {"per_page": 1, "since": self._recent_since()},
            ),
            self._fetch_latest_commit(owner, repo),
            self._has_funding_yml(owner, repo),
        )

        last_commit_date = None
        last_commit_sha = None
        if latest_commit:
            commit = latest_commit.get("commit") or {}
            last_commit_date = parse_datetime((commit.get("committer") or {}).get("date"))
            last_commit_sha = latest_commit.get("sha")

        return RepoActivity(
            owner=owner,
            repo=repo,
            stars=info.get("stargazers_count") or 0,
            forks=info.get("forks_count") or 0,
            open_issues=info.get("open_issues_count") or 0,
            updated_at=parse_datetime(info.get("updated_at")),
            archived=bool(info.get("archived")),
            default_branch=info.get("default_branch") or "main",
            contributor_count=contributors,
            recent_commit_count=recent_commits,
            last_commit_date=last_commit_date,
            last_commit_sha=last_commit_sha,
            has_funding_yml=has_funding,
        )

    def _recent_since(self) -> str:
        since = datetime.now(timezone.utc) - timedelta(days=self.RECENT_COMMIT_DAYS)
        return since.strftime("%Y-%m-%dT%H:%M:%SZ")

    async def _fetch_repo_info(self, owner: str, repo: str) -> dict:
        """Fetch basic repository information. Failure fails the collector."""
        response = await self._fetch(f"/repos/{owner}/{repo}")
        return response.json()

    async def _count_items(self, path: str, params: dict) -> int:
        """Count items of a paginated list fetched one per page.

        With ``per_page=1`` the page number of the ``rel="last"`` link is the
        total count. Without a Link header everything fit on one page.
        """
        response = await self._fetch_optional(path, params)
        if response is None:
            return 0

        last_page = extract_last_page(response.headers.get("link"))
        if last_page is not None:
            return last_page
        try:
            body = response.json()
        except ValueError:
            return 0
        return len(body) if isinstance(body, list) else 0

    async def _fetch_latest_commit(self, owner: str, repo: str) -> dict | None:
        response = await self._fetch_optional(f"/repos/{owner}/{repo}/commits", {"per_page": 1})
        if response is None:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body[0] if isinstance(body, list) and body else None

    async def _has_funding_yml(self, owner: str, repo: str) -> bool:
        response = await self._fetch_optional(f"/repos/{owner}/{repo}/contents/.github/FUNDING.yml")
        return response is not None


def extract_last_page(link_header: str | None) -> int | None:
    """Page number of the ``rel="last"`` entry of a GitHub Link header."""
    if not link_header:
        return None
    match = _LAST_PAGE.search(link_header)
    return int(match.group(1)) if match else None
