"""Tests for running all collectors together."""

import asyncio
import time

import pytest

from deptrust.collectors.orchestrator import CollectorOrchestrator
from deptrust.collectors.registry import RegistryCollector
from deptrust.models.schemas import CollectorStatus, Ecosystem, RegistryData, Settings

SOURCES = ["registry", "github", "security", "funding", "popularity", "license"]


def install_slow_collectors(orchestrator: CollectorOrchestrator, delay: float) -> dict[str, int]:
    """Replace every npm collector with one that sleeps and tracks how many run at once."""
    state = {"active": 0, "peak": 0}

    for collector in orchestrator.collectors_for(Ecosystem.NPM).values():

        async def slow(package_name: str, version: str, collector=collector):
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            try:
                await asyncio.sleep(delay)
            finally:
                state["active"] -= 1
            return collector.result_type.error("slow")

        collector.collect = slow

    return state


class TestCollectorOrchestrator:
    """Tests for CollectorOrchestrator."""

    @pytest.mark.asyncio
    async def test_returns_every_source(self, cache, make_client) -> None:
        orchestrator = CollectorOrchestrator(cache, client=make_client({}))

        results = await orchestrator.collect_all("ghost-package", "1.0.0")

        statuses = results.statuses()
        assert list(statuses) == SOURCES
        assert statuses["registry"] == CollectorStatus.ERROR
        assert statuses["github"] == CollectorStatus.ERROR
        assert statuses["license"] == CollectorStatus.ERROR
        assert statuses["popularity"] == CollectorStatus.ERROR
        # Funding degrades to empty data instead of failing
        assert statuses["funding"] == CollectorStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_collector_concurrency_is_bounded(self, cache) -> None:
        orchestrator = CollectorOrchestrator(cache, settings=Settings(collector_concurrency=2))
        state = install_slow_collectors(orchestrator, delay=0.05)

        started = time.perf_counter()
        results = await orchestrator.collect_all("express", "4.18.2")
        elapsed = time.perf_counter() - started

        assert state["peak"] == 2
        assert len(results.statuses()) == 6
        # Six collectors two at a time take three rounds
        assert elapsed >= 0.14

    @pytest.mark.asyncio
    async def test_collectors_run_in_parallel(self, cache) -> None:
        orchestrator = CollectorOrchestrator(cache)
        state = install_slow_collectors(orchestrator, delay=0.1)

        started = time.perf_counter()
        await orchestrator.collect_all("express", "4.18.2")
        elapsed = time.perf_counter() - started

        assert state["peak"] == 6
        assert elapsed < 0.3

    @pytest.mark.asyncio
    async def test_slow_collector_times_out(self, cache, make_client) -> None:
        orchestrator = CollectorOrchestrator(
            cache,
            settings=Settings(collector_timeout=0.05),
            client=make_client({}),
        )

        async def hang(package_name: str, version: str):
            await asyncio.sleep(5)

        orchestrator.collectors_for(Ecosystem.NPM)["security"].collect = hang

        results = await orchestrator.collect_all("express", "4.18.2")

        assert results.security.status == CollectorStatus.ERROR
        assert results.security.message == "Timeout after 0.05s"
        assert results.funding.status == CollectorStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error(self, cache, make_client) -> None:
        orchestrator = CollectorOrchestrator(cache, client=make_client({}))

        async def explode(package_name: str, version: str):
            raise RuntimeError("boom")

        orchestrator.collectors_for(Ecosystem.NPM)["github"].collect = explode

        results = await orchestrator.collect_all("express", "4.18.2")

        assert results.github.status == CollectorStatus.ERROR
        assert results.github.message == "boom"
        assert len(results.statuses()) == 6

    @pytest.mark.asyncio
    async def test_offline_uses_cache_only(self, cache, make_client) -> None:
        client = make_client({})
        RegistryCollector(cache).set_cache(
            "express", "4.18.2", RegistryData(package_name="express", version="4.18.2", version_count=270)
        )
        orchestrator = CollectorOrchestrator(cache, settings=Settings(offline=True), client=client)

        results = await orchestrator.collect_all("express", "4.18.2")

        assert results.registry.status == CollectorStatus.CACHED
        assert results.registry.data.version_count == 270
        for source in SOURCES[1:]:
            result = getattr(results, source)
            assert result.status == CollectorStatus.OFFLINE
            assert result.data is None
        assert client.requests == []

    @pytest.mark.asyncio
    async def test_offline_keys_are_ecosystem_specific(self, cache, make_client) -> None:
        RegistryCollector(cache).set_cache("six", "latest", RegistryData(package_name="six", version="1.0.0"))
        orchestrator = CollectorOrchestrator(cache, settings=Settings(offline=True), client=make_client({}))

        results = await orchestrator.collect_all("six", "latest", Ecosystem.PYPI)

        assert results.registry.status == CollectorStatus.OFFLINE

    def test_collectors_share_settings(self, cache) -> None:
        orchestrator = CollectorOrchestrator(cache, settings=Settings(cache_ttl=60), github_token="ghp_x")

        collectors = orchestrator.collectors_for(Ecosystem.PYPI)

        assert set(collectors) == set(SOURCES)
        assert all(c.ttl == 60 for c in collectors.values())
        assert all(c.ecosystem == Ecosystem.PYPI for c in collectors.values())
        assert collectors["github"]._token == "ghp_x"
        assert collectors["funding"]._token == "ghp_x"
        assert orchestrator.collectors_for(Ecosystem.PYPI) is collectors
