"""Persistent TTL cache."""

from deptrust.cache.store import CacheManager

__all__ = ["CacheManager"]
