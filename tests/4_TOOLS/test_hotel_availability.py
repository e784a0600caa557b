"""
Tests for the hotel/availability tool.
"""

import pytest

from providers import ProviderType
from tools.hotel.availability import HotelAvailabilityHandler


class TestHotelAvailability:
    """Test suite for hotel/availability."""

    @pytest.fixture
    def handler(self, hotel_service, test_config):
        return HotelAvailabilityHandler(hotel_service, test_config)

    @pytest.fixture
    def arguments(self):
        return {
            "property_id": "prop_grand_hyatt_ist",
            "check_in": "2026-03-15",
            "check_out": "2026-03-18",
            "guests": 2
        }

    @pytest.mark.asyncio
    async def test_reference_rooms(self, handler, arguments):
        result = await handler.execute(arguments)

        assert result["status"] == "success"
        rooms = {r["roomId"]: r for r in result["roomsAvailable"]}
        deluxe = rooms["room_deluxe_king"]
        assert deluxe["rateId"] == "rate_bar"
        assert deluxe["rate"]["price"]["total"] == 627
        assert deluxe["rate"]["price"]["estimated"] is False
        assert deluxe["rate"]["cancellation"]["freeUntil"] == "2026-03-14T00:00:00Z"

    @pytest.mark.asyncio
    async def test_registered_hotelrunner_property(self, handler, arguments):
        arguments["property_id"] = "hr_cappadocia_cave"

        result = await handler.execute(arguments)

        assert result["status"] == "success"
        assert result["property"]["checkInTime"] == "14:00"
        assert all(r["rate"]["price"]["estimated"] for r in result["roomsAvailable"])

    @pytest.mark.asyncio
    async def test_unregistered_property_under_hotelrunner(self, hotel_service, test_config, arguments):
        hotel_service.router.config.default = ProviderType.HOTELRUNNER
        handler = HotelAvailabilityHandler(hotel_service, test_config)
        arguments["property_id"] = "hr_not_registered"

        result = await handler.execute(arguments)

        assert result["status"] == "error"
        assert result["error"]["code"] == "PROPERTY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_missing_property_id(self, handler, arguments):
        del arguments["property_id"]

        result = await handler.execute(arguments)

        assert result["error"]["code"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_same_day_checkout(self, handler, arguments):
        arguments["check_out"] = arguments["check_in"]

        result = await handler.execute(arguments)

        assert result["error"]["code"] == "INVALID_DATES"
