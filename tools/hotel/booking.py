"""
hotel/booking - Booking Retrieval Tool
"""

from typing import Dict, Any
from mcp.types import Tool

from config import ValidationError
from models import Booking
from tools.base import ToolHandler, optional_str

# Tool definition
HOTEL_BOOKING_TOOL = Tool(
    name="hotel/booking",
    description="""
    Retrieve details of an existing booking by booking ID or confirmation number.
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "booking_id": {
                "type": "string",
                "description": "Eywa booking ID (e.g., EYW-2026-ABC123)"
            },
            "confirmation_number": {
                "type": "string",
                "description": "Hotel confirmation number"
            },
            "property_id": {
                "type": "string",
                "description": "Property the booking belongs to, when known"
            },
            "guest_email": {
                "type": "string",
                "description": "Guest email for verification"
            }
        }
    }
)


class HotelBookingHandler(ToolHandler):
    """Handler for the hotel/booking tool."""

    name = "hotel/booking"

    async def run(self, arguments: Dict[str, Any]) -> Booking:
        identifier = optional_str(arguments, "booking_id") or optional_str(arguments, "confirmation_number")
        if not identifier:
            raise ValidationError(
                "Either booking_id or confirmation_number is required",
                details={"missing_fields": ["booking_id", "confirmation_number"]}
            )
        property_id = optional_str(arguments, "property_id")

        self.logger.info("Retrieving booking", booking_id=identifier, property_id=property_id)
        return await self.service.retrieve(identifier, property_id=property_id)
