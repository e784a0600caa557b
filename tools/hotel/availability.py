"""
hotel/availability - Room Availability Tool

Returns the property details and every bookable room and rate for a stay.
"""

from typing import Dict, Any
from mcp.types import Tool

from config import ErrorCode, validate_required_fields, sanitize_string, parse_positive_int
from models import AvailabilityParams, AvailabilityResult
from tools.base import ToolHandler, optional_str, validate_stay

# Tool definition
HOTEL_AVAILABILITY_TOOL = Tool(
    name="hotel/availability",
    description="""
    Get detailed room availability and rates for a specific property.
    Use after search to see all room options.

    Returns room and rate identifiers to pass to hotel/book unchanged, the
    full price breakdown per stay, cancellation and payment policies.
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "property_id": {
                "type": "string",
                "description": "Property identifier from search results"
            },
            "check_in": {
                "type": "string",
                "description": "Check-in date in YYYY-MM-DD format"
            },
            "check_out": {
                "type": "string",
                "description": "Check-out date in YYYY-MM-DD format"
            },
            "guests": {
                "type": "integer",
                "description": "Number of guests",
                "minimum": 1
            },
            "rooms": {
                "type": "integer",
                "description": "Number of rooms (default: 1)",
                "minimum": 1
            },
            "currency": {
                "type": "string",
                "description": "Currency code (default: USD)"
            }
        },
        "required": ["property_id", "check_in", "check_out", "guests"]
    }
)


class HotelAvailabilityHandler(ToolHandler):
    """Handler for the hotel/availability tool."""

    name = "hotel/availability"

    async def run(self, arguments: Dict[str, Any]) -> AvailabilityResult:
        validate_required_fields(arguments, ["property_id", "check_in", "check_out", "guests"])

        property_id = sanitize_string(arguments["property_id"])
        check_in, check_out = validate_stay(arguments, self.config)
        currency = optional_str(arguments, "currency")

        params = AvailabilityParams(
            property_id=property_id,
            check_in=check_in,
            check_out=check_out,
            guests=parse_positive_int(arguments["guests"], "guests", ErrorCode.INVALID_GUESTS),
            rooms=parse_positive_int(arguments.get("rooms", 1), "rooms"),
            currency=currency.upper() if currency else None
        )

        self.logger.info("Checking availability", property_id=property_id, check_in=check_in, check_out=check_out)
        result = await self.service.availability(params)
        self.logger.info("Availability retrieved", property_id=property_id, rooms=len(result.rooms_available))
        return result
