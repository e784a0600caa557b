"""
hotel/book - Booking Creation Tool

Creates a reservation for a room and rate returned by hotel/availability.
"""

from typing import Dict, Any
from mcp.types import Tool

from config import (
    ErrorSuggestion,
    ValidationError,
    validate_required_fields,
    sanitize_string,
    parse_positive_int
)
from models import Booking, BookingParams, Guest
from tools.base import ToolHandler, optional_str, validate_stay

GUEST_TITLES = ["Mr", "Mrs", "Ms", "Dr"]

# Tool definition
HOTEL_BOOK_TOOL = Tool(
    name="hotel/book",
    description="""
    Create a hotel booking reservation. Requires property_id, room_id, and
    rate_id from availability check.

    Example usage:
    "Book the Deluxe King Room at Grand Hyatt Istanbul for John Smith"
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "property_id": {
                "type": "string",
                "description": "Property identifier"
            },
            "room_id": {
                "type": "string",
                "description": "Room identifier from availability"
            },
            "rate_id": {
                "type": "string",
                "description": "Rate plan identifier from availability"
            },
            "check_in": {
                "type": "string",
                "description": "Check-in date"
            },
            "check_out": {
                "type": "string",
                "description": "Check-out date"
            },
            "guest": {
                "type": "object",
                "description": "Primary guest details",
                "properties": {
                    "title": {"type": "string", "enum": GUEST_TITLES},
                    "first_name": {"type": "string"},
                    "last_name": {"type": "string"},
                    "email": {"type": "string"},
                    "phone": {"type": "string"},
                    "country": {"type": "string", "description": "ISO country code"}
                },
                "required": ["first_name", "last_name", "email"]
            },
            "rooms_count": {
                "type": "integer",
                "description": "Number of rooms to book",
                "minimum": 1
            },
            "special_requests": {
                "type": "string",
                "description": "Special requests for the hotel"
            }
        },
        "required": ["property_id", "room_id", "rate_id", "check_in", "check_out", "guest"]
    }
)


class HotelBookHandler(ToolHandler):
    """Handler for the hotel/book tool."""

    name = "hotel/book"

    def _parse_guest(self, raw: Any) -> Guest:
        if not isinstance(raw, dict):
            raise ValidationError(
                "Guest first_name, last_name, and email are required",
                details={"missing_fields": ["guest"]}
            )

        missing = [f for f in ("first_name", "last_name", "email") if not raw.get(f)]
        if missing:
            raise ValidationError(
                "Guest first_name, last_name, and email are required",
                details={"missing_fields": [f"guest.{f}" for f in missing]}
            )

        title = optional_str(raw, "title")
        if title and title not in GUEST_TITLES:
            raise ValidationError(f"Invalid guest title '{title}'", details={"allowed": GUEST_TITLES})

        return Guest(
            first_name=sanitize_string(raw["first_name"], max_length=100),
            last_name=sanitize_string(raw["last_name"], max_length=100),
            email=sanitize_string(raw["email"], max_length=254),
            title=title,
            phone=optional_str(raw, "phone"),
            country=optional_str(raw, "country")
        )

    async def run(self, arguments: Dict[str, Any]) -> Booking:
        try:
            validate_required_fields(arguments, ["property_id", "room_id", "rate_id"])
        except ValidationError as e:
            e.suggestions = [ErrorSuggestion(action="Get available rooms first", tool="hotel/availability")]
            raise
        validate_required_fields(arguments, ["check_in", "check_out", "guest"])

        check_in, check_out = validate_stay(arguments, self.config)
        guest = self._parse_guest(arguments["guest"])

        params = BookingParams(
            property_id=sanitize_string(arguments["property_id"]),
            room_id=sanitize_string(arguments["room_id"]),
            rate_id=sanitize_string(arguments["rate_id"]),
            check_in=check_in,
            check_out=check_out,
            guest=guest,
            rooms_count=parse_positive_int(arguments.get("rooms_count", 1), "rooms_count"),
            special_requests=optional_str(arguments, "special_requests")
        )

        self.logger.info(
            "Creating booking",
            property_id=params.property_id,
            room_id=params.room_id,
            rate_id=params.rate_id
        )
        booking = await self.service.book(params)
        self.logger.info("Booking created", booking_id=booking.booking_id)
        return booking
