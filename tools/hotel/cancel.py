"""
hotel/cancel - Booking Cancellation Tool

Cancels a booking and reports the refund due under its cancellation policy.
"""

from typing import Dict, Any
from mcp.types import Tool

from config import validate_required_fields, sanitize_string
from models import CancellationResult
from tools.base import ToolHandler, optional_str

# Tool definition
HOTEL_CANCEL_TOOL = Tool(
    name="hotel/cancel",
    description="""
    Cancel a hotel booking. Returns refund information based on cancellation policy.

    Cancelled bookings cannot be reactivated.
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "booking_id": {
                "type": "string",
                "description": "Booking ID to cancel"
            },
            "property_id": {
                "type": "string",
                "description": "Property the booking belongs to, when known"
            },
            "reason": {
                "type": "string",
                "description": "Reason for cancellation",
                "maxLength": 500
            }
        },
        "required": ["booking_id"]
    }
)


class HotelCancelHandler(ToolHandler):
    """Handler for the hotel/cancel tool."""

    name = "hotel/cancel"

    async def run(self, arguments: Dict[str, Any]) -> CancellationResult:
        validate_required_fields(arguments, ["booking_id"])

        booking_id = sanitize_string(arguments["booking_id"])
        reason = arguments.get("reason")
        if reason is not None:
            reason = sanitize_string(reason, max_length=500) or None

        self.logger.info("Cancelling booking", booking_id=booking_id, has_reason=reason is not None)
        result = await self.service.cancel(
            booking_id,
            property_id=optional_str(arguments, "property_id"),
            reason=reason
        )
        self.logger.info("Booking cancelled", booking_id=booking_id, refund=result.refund.amount)
        return result
