"""
HTTP client for the HotelRunner REST API.
"""

import httpx
import json
from typing import Dict, Any, List, Optional
import structlog

from config import HOTELRUNNER_BASE_URL, APIError, RateLimitExceededError
from providers.rate_limiter import RateLimiter
from providers.registry import SupplierCredentials

logger = structlog.get_logger("eywa-mcp")

# Contractual HotelRunner limits per hr_id
HOTELRUNNER_PER_DAY = 250
HOTELRUNNER_PER_MINUTE = 5


class HotelRunnerHTTPClient:
    """HTTP client for HotelRunner API."""

    def __init__(
        self,
        base_url: str = HOTELRUNNER_BASE_URL,
        timeout: float = 30,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter or RateLimiter(
            per_day=HOTELRUNNER_PER_DAY,
            per_minute=HOTELRUNNER_PER_MINUTE,
            name="hotelrunner"
        )
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Cache-Control": "no-cache"
            }
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def request(
        self,
        endpoint: str,
        credentials: SupplierCredentials,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make one authenticated request to a HotelRunner endpoint.

        Args:
            endpoint: API endpoint path, e.g. ``/rooms``
            credentials: Token and hr_id of the property's account
            method: HTTP method
            params: Extra query parameters
            body: JSON body for non-GET requests

        Returns:
            Response data as dictionary

        Raises:
            RateLimitExceededError: If the account has no quota left; nothing is sent
            APIError: If the API call fails
        """
        if not self.rate_limiter.try_acquire(credentials.account_id):
            raise RateLimitExceededError(credentials.account_id)

        query: Dict[str, Any] = {}
        for key, value in (params or {}).items():
            if isinstance(value, bool):
                value = str(value).lower()
            query[key] = value
        # Auth parameters always win over caller parameters
        query["token"] = credentials.token
        query["hr_id"] = credentials.account_id

        url = f"{self.base_url}{endpoint}"

        # Log the request (without sensitive data)
        logger.info(
            "Making HotelRunner request",
            endpoint=endpoint,
            method=method,
            hr_id=credentials.account_id
        )

        try:
            response = await self._client.request(
                method,
                url,
                params=query,
                json=body if body is not None and method.upper() != "GET" else None
            )
        except httpx.TimeoutException:
            logger.error("Request timeout", endpoint=endpoint)
            raise APIError(f"Request timeout for endpoint: {endpoint}")
        except httpx.RequestError as e:
            logger.error("Request error", endpoint=endpoint, error=str(e))
            raise APIError(f"Request failed for endpoint {endpoint}: {e}")

        logger.info(
            "HotelRunner response received",
            endpoint=endpoint,
            status_code=response.status_code
        )

        if not 200 <= response.status_code < 300:
            raise APIError(
                f"{response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text
            )

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise APIError(f"Failed to parse JSON response: {e}", status_code=response.status_code, body=response.text)

    async def get_rooms(self, credentials: SupplierCredentials) -> List[Dict[str, Any]]:
        """Fetch the room and rate-plan catalog of one property."""
        result = await self.request("/rooms", credentials)
        return result.get("rooms", [])

    async def get_reservations(
        self,
        credentials: SupplierCredentials,
        reservation_number: Optional[str] = None,
        from_date: Optional[str] = None,
        undelivered: Optional[bool] = None,
        per_page: int = 50
    ) -> List[Dict[str, Any]]:
        """Fetch reservations, optionally narrowed by number, date or delivery flag."""
        params: Dict[str, Any] = {"per_page": per_page}
        if from_date:
            params["from_date"] = from_date
        if undelivered is not None:
            params["undelivered"] = undelivered
        if reservation_number:
            params["reservation_number"] = reservation_number

        result = await self.request("/reservations", credentials, params=params)
        return result.get("reservations", [])
