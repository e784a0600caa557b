"""
Tests for the response cache.
"""

import pytest
from unittest.mock import AsyncMock

from config import APIError
from providers import ResponseCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestResponseCache:
    """Test suite for ResponseCache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return ResponseCache(clock=clock)

    @pytest.mark.asyncio
    async def test_hit_within_ttl(self, cache, clock):
        fetch = AsyncMock(return_value=["room"])

        first = await cache.get_or_fetch("prop", 900, fetch)
        clock.now += 899
        second = await cache.get_or_fetch("prop", 900, fetch)

        assert first == second == ["room"]
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self, cache, clock):
        fetch = AsyncMock(side_effect=[["old"], ["new"]])

        await cache.get_or_fetch("prop", 900, fetch)
        clock.now += 900
        result = await cache.get_or_fetch("prop", 900, fetch)

        assert result == ["new"]
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, cache):
        fetch = AsyncMock(side_effect=[APIError("500 - boom", status_code=500), ["room"]])

        with pytest.raises(APIError):
            await cache.get_or_fetch("prop", 900, fetch)
        assert len(cache) == 0

        assert await cache.get_or_fetch("prop", 900, fetch) == ["room"]

    @pytest.mark.asyncio
    async def test_keys_are_isolated(self, cache):
        await cache.get_or_fetch("a", 900, AsyncMock(return_value=1))
        await cache.get_or_fetch("b", 900, AsyncMock(return_value=2))

        assert await cache.get_or_fetch("a", 900, AsyncMock(return_value=99)) == 1
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self, cache):
        fetch = AsyncMock(side_effect=[1, 2, 3])

        await cache.get_or_fetch("a", 900, fetch)
        cache.invalidate("a")
        assert await cache.get_or_fetch("a", 900, fetch) == 2

        cache.clear()
        assert len(cache) == 0
        assert await cache.get_or_fetch("a", 900, fetch) == 3
