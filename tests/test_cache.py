"""Tests for the disk-backed TTL cache."""

from pathlib import Path

from deptrust.cache.store import CacheManager


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.time = start

    def __call__(self) -> float:
        return self.time


class TestCacheManager:
    """Tests for CacheManager."""

    def test_set_and_get(self, cache: CacheManager) -> None:
        cache.set("registry:express@4.18.2", {"version_count": 270})

        assert cache.get("registry:express@4.18.2") == {"version_count": 270}
        assert cache.has("registry:express@4.18.2")

    def test_missing_key(self, cache: CacheManager) -> None:
        assert cache.get("registry:nope@1.0.0") is None
        assert not cache.has("registry:nope@1.0.0")

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        CacheManager(path).set("security:lodash@latest", {"total_vulnerabilities": 3})

        assert CacheManager(path).get("security:lodash@latest") == {"total_vulnerabilities": 3}

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "cache.json"
        CacheManager(path).set("k", 1)

        assert path.is_file()

    def test_entry_expires_after_ttl(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = CacheManager(tmp_path / "cache.json", clock=clock)
        cache.set("k", "v", ttl=10)

        clock.time += 10
        assert cache.get("k") == "v"

        clock.time += 1
        assert cache.get("k") is None

    def test_expired_entry_is_removed_from_disk(self, tmp_path: Path) -> None:
        clock = FakeClock()
        path = tmp_path / "cache.json"
        cache = CacheManager(path, clock=clock)
        cache.set("k", "v", ttl=5)
        clock.time += 6

        cache.get("k")

        assert "k" not in path.read_text()

    def test_overwrite_resets_timestamp(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = CacheManager(tmp_path / "cache.json", clock=clock)
        cache.set("k", "old", ttl=10)
        clock.time += 8
        cache.set("k", "new", ttl=10)
        clock.time += 8

        assert cache.get("k") == "new"

    def test_delete(self, cache: CacheManager) -> None:
        cache.set("k", 1)

        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert cache.get("k") is None

    def test_clear(self, cache: CacheManager) -> None:
        cache.set("a", 1)
        cache.set("b", 2)

        cache.clear()

        assert cache.size() == 0

    def test_cleanup_removes_only_expired(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = CacheManager(tmp_path / "cache.json", clock=clock)
        cache.set("short", 1, ttl=5)
        cache.set("long", 2, ttl=500)
        clock.time += 60

        assert cache.cleanup() == 1
        assert cache.get("long") == 2
        assert cache.size() == 1

    def test_size_ignores_expired(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = CacheManager(tmp_path / "cache.json", clock=clock)
        cache.set("a", 1, ttl=5)
        cache.set("b", 2, ttl=100)
        clock.time += 10

        assert cache.size() == 1

    def test_corrupt_file_gives_empty_cache(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")

        cache = CacheManager(path)

        assert cache.size() == 0
        cache.set("k", 1)
        assert CacheManager(path).get("k") == 1

    def test_wrong_shape_gives_empty_cache(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text('{"k": {"value": 1}}', encoding="utf-8")

        assert CacheManager(path).size() == 0

    def test_write_failure_is_swallowed(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        cache = CacheManager(blocker / "cache.json")

        cache.set("k", 1)

        assert cache.get("k") == 1

    def test_age_of(self, tmp_path: Path) -> None:
        clock = FakeClock()
        cache = CacheManager(tmp_path / "cache.json", clock=clock)
        cache.set("k", 1)

        assert cache.age_of("k") == "just now"
        clock.time += 60
        assert cache.age_of("k") == "1 minute ago"
        clock.time += 3 * 3600
        assert cache.age_of("k") == "3 hours ago"
        clock.time += 2 * 86_400
        assert cache.age_of("k") == "2 days ago"
        assert cache.age_of("missing") is None

    def test_timestamp_of(self, tmp_path: Path) -> None:
        cache = CacheManager(tmp_path / "cache.json", clock=lambda: 0)
        cache.set("k", 1)

        assert cache.timestamp_of("k") == "1970-01-01T00:00:00Z"
