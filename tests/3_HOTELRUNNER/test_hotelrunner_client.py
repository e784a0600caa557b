"""
Tests for the HotelRunner HTTP client.
"""

import httpx
from datetime import datetime, timezone
import pytest

from config import APIError, RateLimitExceededError
from providers import RateLimiter, SupplierCredentials
from providers.hotelrunner import HotelRunnerHTTPClient

BASE_URL = "https://hotelrunner.test/api/v2/apps"


class TestHotelRunnerHTTPClient:
    """Test suite for HotelRunnerHTTPClient."""

    @pytest.fixture
    def credentials(self):
        return SupplierCredentials(token="secret-token", account_id="12345")

    @pytest.fixture
    def requests_seen(self):
        return []

    def make_client(self, requests_seen, response, rate_limiter=None):
        def handler(request):
            requests_seen.append(request)
            if callable(response):
                return response(request)
            # Fresh response per request; httpx binds each one to its request
            return httpx.Response(response.status_code, content=response.content, headers=response.headers)

        return HotelRunnerHTTPClient(
            base_url=BASE_URL,
            rate_limiter=rate_limiter,
            transport=httpx.MockTransport(handler)
        )

    @pytest.mark.asyncio
    async def test_auth_params_applied_after_caller_params(self, credentials, requests_seen):
        client = self.make_client(requests_seen, httpx.Response(200, json={"rooms": []}))

        async with client:
            await client.request("/rooms", credentials, params={"token": "spoofed", "hr_id": "1", "page": 2})

        query = requests_seen[0].url.params
        assert query["token"] == "secret-token"
        assert query["hr_id"] == "12345"
        assert query["page"] == "2"
        assert str(requests_seen[0].url).startswith(f"{BASE_URL}/rooms")

    @pytest.mark.asyncio
    async def test_get_rooms(self, credentials, requests_seen, sample_hr_rooms):
        client = self.make_client(requests_seen, httpx.Response(200, json={"rooms": sample_hr_rooms}))

        async with client:
            rooms = await client.get_rooms(credentials)

        assert rooms == sample_hr_rooms

    @pytest.mark.asyncio
    async def test_get_reservations_query(self, credentials, requests_seen):
        client = self.make_client(requests_seen, httpx.Response(200, json={"reservations": [{"hr_number": "R1"}]}))

        async with client:
            reservations = await client.get_reservations(
                credentials,
                reservation_number="R123456789",
                undelivered=False
            )

        query = requests_seen[0].url.params
        assert reservations == [{"hr_number": "R1"}]
        assert query["reservation_number"] == "R123456789"
        assert query["undelivered"] == "false"
        assert query["per_page"] == "50"
        assert "from_date" not in query

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_verbatim_body(self, credentials, requests_seen):
        client = self.make_client(requests_seen, httpx.Response(401, text="Invalid token"))

        async with client:
            with pytest.raises(APIError) as exc_info:
                await client.get_rooms(credentials)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "Invalid token"
        assert exc_info.value.details["status_code"] == 401

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, credentials, requests_seen):
        client = self.make_client(requests_seen, httpx.Response(200, text="<html>"))

        async with client:
            with pytest.raises(APIError):
                await client.get_rooms(credentials)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, credentials, requests_seen):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = self.make_client(requests_seen, fail)

        async with client:
            with pytest.raises(APIError):
                await client.get_rooms(credentials)

    @pytest.mark.asyncio
    async def test_rate_limited_without_io(self, credentials, requests_seen):
        fixed_now = datetime(2026, 3, 15, 10, 0, 30, tzinfo=timezone.utc)
        limiter = RateLimiter(per_day=250, per_minute=5, clock=lambda: fixed_now)
        client = self.make_client(requests_seen, httpx.Response(200, json={"rooms": []}), rate_limiter=limiter)

        async with client:
            for _ in range(5):
                await client.get_rooms(credentials)
            with pytest.raises(RateLimitExceededError) as exc_info:
                await client.get_rooms(credentials)

        assert len(requests_seen) == 5
        assert exc_info.value.details["reason"] == "RATE_LIMIT_EXCEEDED"

    def test_default_limits(self):
        client = HotelRunnerHTTPClient(base_url=BASE_URL)

        assert client.rate_limiter.per_day == 250
        assert client.rate_limiter.per_minute == 5
