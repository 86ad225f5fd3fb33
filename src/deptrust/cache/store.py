"""TTL key/value cache persisted as a single JSON document."""

import logging
import os
import tempfile
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86_400
DEFAULT_CACHE_DIR = Path.home() / ".deptrust"
DEFAULT_CACHE_PATH = DEFAULT_CACHE_DIR / "cache.json"


class CacheEntry(BaseModel):
    """A stored value with its creation time (epoch seconds) and TTL."""

    value: Any
    created_at: int
    ttl: int


_STORE_ADAPTER = TypeAdapter(dict[str, CacheEntry])


class CacheManager:
    """Disk-backed cache shared by all collectors.

    Expiry is checked lazily on read: an entry is gone once
    ``now - created_at > ttl``. Every mutation rewrites the backing file.
    Loading a corrupt file yields an empty cache, and failed writes are
    logged and ignored so a broken cache never aborts a scan.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            path: Location of the JSON file. Defaults to ~/.deptrust/cache.json.
            clock: Returns the current epoch time in seconds.
        """
        self.path = Path(path) if path is not None else DEFAULT_CACHE_PATH
        self._clock = clock
        self._lock = threading.Lock()
        self._store: dict[str, CacheEntry] = self._load()

    def _now(self) -> int:
        return int(self._clock())

    def _is_expired(self, entry: CacheEntry, now: int) -> bool:
        return now - entry.created_at > entry.ttl

    def get(self, key: str) -> Any | None:
        """Return the value for ``key``, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._is_expired(entry, self._now()):
                del self._store[key]
                self._persist()
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        with self._lock:
            self._store[key] = CacheEntry(value=value, created_at=self._now(), ttl=ttl)
            self._persist()

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if it was present."""
        with self._lock:
            if self._store.pop(key, None) is None:
                return False
            self._persist()
            return True

    def clear(self) -> None:
        with self._lock:
            self._store = {}
            self._persist()

    def cleanup(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            now = self._now()
            expired = [k for k, e in self._store.items() if self._is_expired(e, now)]
            for key in expired:
                del self._store[key]
            if expired:
                self._persist()
            return len(expired)

    def age_of(self, key: str) -> str | None:
        """Human-readable age of an entry, e.g. ``"3 hours ago"``."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            age_seconds = self._now() - entry.created_at

        if age_seconds < 60:
            return "just now"

        minutes = age_seconds // 60
        if minutes < 60:
            return f"{minutes} minute{'' if minutes == 1 else 's'} ago"

        hours = minutes // 60
        if hours < 24:
            return f"{hours} hour{'' if hours == 1 else 's'} ago"

        days = hours // 24
        return f"{days} day{'' if days == 1 else 's'} ago"

    def timestamp_of(self, key: str) -> str | None:
        """ISO-8601 creation time of an entry."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            created = datetime.fromtimestamp(entry.created_at, tz=timezone.utc)
        return created.isoformat().replace("+00:00", "Z")

    def size(self) -> int:
        """Number of entries that have not expired."""
        with self._lock:
            now = self._now()
            return sum(1 for e in self._store.values() if not self._is_expired(e, now))

    def _load(self) -> dict[str, CacheEntry]:
        """Read the backing file. Missing or corrupt files give an empty store."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read cache file {self.path}: {e}")
            return {}

        try:
            return _STORE_ADAPTER.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt cache file {self.path}: {e.error_count()} error(s)")
            return {}

    def _persist(self) -> None:
        """Write the store to disk atomically. Failures are logged, never raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = _STORE_ADAPTER.dump_json(self._store)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".cache-", suffix=".json")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.warning(f"Failed to write cache file {self.path}: {e}")
