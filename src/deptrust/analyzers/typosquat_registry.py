"""Fetches the most popular npm package names to extend the typosquat reference list.

Results are cached in ``~/.deptrust/popular-packages.json`` for seven days.
Any failure falls back to a stale cache, then to an empty list, so callers
can always rely on the built-in lists alone.
"""

import asyncio
import logging
import math
import time
from datetime import datetime, timezone
from pathlib import Path

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deptrust.cache.store import DEFAULT_CACHE_DIR

logger = logging.getLogger(__name__)

NPM_SEARCH_URL = "https://registry.npmjs.org/-/v1/search"
SEARCH_PARAMS = "text=boost-exact:false&popularity=1.0&quality=0.0&maintenance=0.0"
PAGE_SIZE = 250
DEFAULT_COUNT = 5000
DEFAULT_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60
PAGE_DELAY_SECONDS = 0.5
POPULAR_CACHE_PATH = DEFAULT_CACHE_DIR / "popular-packages.json"


class PopularPackagesCache(BaseModel):
    """On-disk shape of the popular-packages cache."""

    model_config = ConfigDict(populate_by_name=True)

    fetched_at: datetime = Field(alias="fetchedAt")
    packages: list[str]


def read_cache(path: Path) -> PopularPackagesCache | None:
    """Read the cache file, or None if missing or corrupt."""
    try:
        return PopularPackagesCache.model_validate_json(path.read_bytes())
    except FileNotFoundError:
        return None
    except (OSError, ValidationError) as e:
        logger.debug(f"Ignoring unreadable popular-packages cache {path}: {e}")
        return None


def write_cache(path: Path, packages: list[str]) -> None:
    """Write the cache file. Failures are logged and ignored."""
    data = PopularPackagesCache(fetched_at=datetime.now(timezone.utc), packages=packages)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Failed to write popular-packages cache {path}: {e}")


async def _fetch_page(client: httpx.AsyncClient, offset: int) -> list[str]:
    url = f"{NPM_SEARCH_URL}?{SEARCH_PARAMS}&size={PAGE_SIZE}&from={offset}"
    response = await client.get(url, headers={"Accept": "application/json"})
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected npm search response: {type(data).__name__}")
    names = []
    for obj in data.get("objects") or []:
        package = obj.get("package") if isinstance(obj, dict) else None
        if isinstance(package, dict) and package.get("name"):
            names.append(package["name"])
    return names


async def fetch_popular_packages(
    count: int = DEFAULT_COUNT,
    cache_ttl: int = DEFAULT_CACHE_TTL_SECONDS,
    cache_path: Path | None = None,
    client: httpx.AsyncClient | None = None,
    page_delay: float = PAGE_DELAY_SECONDS,
) -> list[str]:
    """Fetch the top ``count`` npm packages by popularity.

    Args:
        count: Number of names to fetch.
        cache_ttl: Seconds a cached list stays fresh.
        cache_path: Cache file location.
        client: Optional httpx client. If not provided, one is created.
        page_delay: Pause between page requests in seconds.

    Returns:
        Package names ordered by popularity. Empty if nothing could be fetched
        and no cache exists.
    """
    path = cache_path or POPULAR_CACHE_PATH
    cached = read_cache(path)
    if cached is not None:
        age = time.time() - cached.fetched_at.timestamp()
        if age < cache_ttl and cached.packages:
            logger.info(f"Using cached popular packages ({len(cached.packages)} packages)")
            return cached.packages
        logger.info("Popular packages cache expired, fetching fresh data")

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=30.0)
    total_pages = math.ceil(count / PAGE_SIZE)
    packages: list[str] = []
    seen: set[str] = set()
    try:
        for page in range(total_pages):
            logger.info(f"Fetching popular packages from npm (page {page + 1}/{total_pages})")
            names = await _fetch_page(http, page * PAGE_SIZE)
            for name in names:
                if name not in seen:
                    seen.add(name)
                    packages.append(name)

            if len(names) < PAGE_SIZE or len(packages) >= count:
                break
            if page < total_pages - 1:
                await asyncio.sleep(page_delay)
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.warning(f"Failed to fetch popular packages from npm: {e}")
        if cached is not None and cached.packages:
            logger.info(f"Returning stale cached data ({len(cached.packages)} packages)")
            return cached.packages
        return []
    finally:
        if owns_client:
            await http.aclose()

    packages = packages[:count]
    write_cache(path, packages)
    logger.info(f"Fetched and cached {len(packages)} popular packages from npm")
    return packages
