"""
hotel/modify - Booking Modification Tool

Changes dates, room or guest count of an existing booking and reports the
resulting price difference.
"""

from typing import Dict, Any
from mcp.types import Tool

from config import (
    ErrorCode,
    validate_required_fields,
    sanitize_string,
    parse_date,
    parse_positive_int
)
from models import ModificationRequest, ModificationResult
from tools.base import ToolHandler, optional_str

# Tool definition
HOTEL_MODIFY_TOOL = Tool(
    name="hotel/modify",
    description="""
    Modify an existing booking (change dates, room type, or guest count).
    May incur price changes.
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "booking_id": {
                "type": "string",
                "description": "Booking ID to modify"
            },
            "property_id": {
                "type": "string",
                "description": "Property the booking belongs to, when known"
            },
            "new_check_in": {
                "type": "string",
                "description": "New check-in date"
            },
            "new_check_out": {
                "type": "string",
                "description": "New check-out date"
            },
            "new_room_id": {
                "type": "string",
                "description": "New room type ID"
            },
            "new_guests": {
                "type": "integer",
                "description": "Updated guest count",
                "minimum": 1
            },
            "additional_requests": {
                "type": "string",
                "description": "Additional special requests"
            }
        },
        "required": ["booking_id"]
    }
)


class HotelModifyHandler(ToolHandler):
    """Handler for the hotel/modify tool."""

    name = "hotel/modify"

    async def run(self, arguments: Dict[str, Any]) -> ModificationResult:
        validate_required_fields(arguments, ["booking_id"])
        booking_id = sanitize_string(arguments["booking_id"])

        new_check_in = arguments.get("new_check_in")
        new_check_out = arguments.get("new_check_out")
        new_guests = arguments.get("new_guests")

        modifications = ModificationRequest(
            new_check_in=parse_date(new_check_in, "new_check_in") if new_check_in else None,
            new_check_out=parse_date(new_check_out, "new_check_out") if new_check_out else None,
            new_room_id=optional_str(arguments, "new_room_id"),
            new_guests=(
                parse_positive_int(new_guests, "new_guests", ErrorCode.INVALID_GUESTS)
                if new_guests is not None else None
            ),
            additional_requests=optional_str(arguments, "additional_requests")
        )

        self.logger.info("Modifying booking", booking_id=booking_id)
        result = await self.service.modify(
            booking_id,
            modifications,
            property_id=optional_str(arguments, "property_id")
        )
        self.logger.info(
            "Booking modified",
            booking_id=booking_id,
            to_pay=result.price_difference.to_pay
        )
        return result
