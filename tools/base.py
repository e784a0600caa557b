"""
Shared plumbing for the hotel tool handlers.
"""

import json
from typing import Any, Dict, List, Optional

from mcp.types import TextContent

from config import (
    ErrorCode,
    EywaConfig,
    EywaError,
    format_error,
    logger,
    parse_date,
    ensure_not_past
)
from models import CanonicalModel
from providers import HotelService, calculate_nights


def error_envelope(code: ErrorCode, message: str) -> Dict[str, Any]:
    return {"status": "error", "error": {"code": code.value, "message": message}}


def to_text_content(payload: Dict[str, Any]) -> List[TextContent]:
    """Wrap a result or error envelope as the single MCP text block."""
    return [TextContent(type="text", text=json.dumps(payload))]


def validate_stay(
    arguments: Dict[str, Any],
    config: EywaConfig,
    check_in_field: str = "check_in",
    check_out_field: str = "check_out"
) -> tuple:
    """Parse a check-in/check-out pair and require at least one night."""
    check_in = parse_date(arguments.get(check_in_field), check_in_field)
    check_out = parse_date(arguments.get(check_out_field), check_out_field)
    if config.reject_past_checkin:
        ensure_not_past(check_in)
    # Raises INVALID_DATES when check-out is not after check-in
    calculate_nights(check_in, check_out)
    return check_in, check_out


def optional_str(arguments: Dict[str, Any], name: str) -> Optional[str]:
    value = arguments.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class ToolHandler:
    """Base handler: validates arguments, calls the service, serializes the outcome."""

    name: str = ""

    def __init__(self, service: HotelService, config: Optional[EywaConfig] = None):
        self.service = service
        self.config = config or EywaConfig()
        self.logger = logger.bind(tool=self.name)

    async def run(self, arguments: Dict[str, Any]) -> CanonicalModel:
        raise NotImplementedError

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the tool and return a JSON-ready dictionary.

        Every failure is returned as the canonical error envelope; nothing
        raises past this method.
        """
        try:
            result = await self.run(arguments or {})
            return result.to_dict()

        except EywaError as e:
            self.logger.error(
                "Tool failed",
                error_code=e.error_code.value,
                error=e.message
            )
            return format_error(e)

        except Exception as e:
            self.logger.exception("Unexpected error", error=str(e))
            return error_envelope(ErrorCode.INTERNAL_ERROR, str(e) or type(e).__name__)

    async def call(self, arguments: Dict[str, Any]) -> List[TextContent]:
        """MCP entry point for this tool."""
        return to_text_content(await self.execute(arguments))
