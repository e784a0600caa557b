"""
hotel/search - Hotel Search Tool

Searches properties for a destination and stay dates and returns canonical
property summaries with price summaries and availability status.
"""

from typing import Dict, Any, Optional
from mcp.types import Tool

from config import (
    ErrorCode,
    ValidationError,
    validate_required_fields,
    sanitize_string,
    parse_positive_int
)
from models import SearchFilters, SearchParams, SearchResult, SortBy
from tools.base import ToolHandler, optional_str, validate_stay

MAX_LIMIT = 100

# Tool definition
HOTEL_SEARCH_TOOL = Tool(
    name="hotel/search",
    description="""
    Search for hotels matching criteria. Returns a list of properties with
    summary info, prices, and availability status.

    Parameters:
    - destination (required): City, region, country, or property name
    - check_in / check_out (required): Stay dates in YYYY-MM-DD format
    - guests (required): Total number of guests
    - rooms, currency, filters, sort_by, limit, offset (optional)

    Example usage:
    "Find 5-star hotels in Istanbul from 2026-03-15 to 2026-03-18 for 2 guests"
    """,
    inputSchema={
        "type": "object",
        "properties": {
            "destination": {
                "type": "string",
                "description": "City, region, country, or property name to search"
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
                "description": "Total number of guests",
                "minimum": 1
            },
            "rooms": {
                "type": "integer",
                "description": "Number of rooms needed (default: 1)",
                "minimum": 1
            },
            "currency": {
                "type": "string",
                "description": "ISO 4217 currency code for prices (default: USD)"
            },
            "filters": {
                "type": "object",
                "description": "Optional search filters",
                "properties": {
                    "price_min": {"type": "number", "description": "Minimum price per night"},
                    "price_max": {"type": "number", "description": "Maximum price per night"},
                    "star_rating": {
                        "type": "array",
                        "items": {"type": "integer"},
                        "description": "Accepted star ratings (e.g., [4, 5])"
                    },
                    "amenities": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Required amenities (wifi, pool, parking, breakfast, spa, gym)"
                    },
                    "guest_rating_min": {
                        "type": "number",
                        "description": "Minimum guest rating (0-10)"
                    },
                    "refundable_only": {
                        "type": "boolean",
                        "description": "Only show refundable rates"
                    }
                }
            },
            "sort_by": {
                "type": "string",
                "enum": [s.value for s in SortBy],
                "description": "Sort order for results (distance keeps provider order)"
            },
            "limit": {
                "type": "integer",
                "description": "Maximum number of results (default: 20, max: 100)",
                "minimum": 1,
                "maximum": MAX_LIMIT
            },
            "offset": {
                "type": "integer",
                "description": "Number of results to skip (default: 0)",
                "minimum": 0
            }
        },
        "required": ["destination", "check_in", "check_out", "guests"]
    }
)


def _parse_filters(raw: Any) -> Optional[SearchFilters]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationError("filters must be an object")

    try:
        return SearchFilters(
            price_min=float(raw["price_min"]) if raw.get("price_min") is not None else None,
            price_max=float(raw["price_max"]) if raw.get("price_max") is not None else None,
            star_rating=[int(s) for s in raw["star_rating"]] if raw.get("star_rating") else None,
            amenities=[str(a) for a in raw["amenities"]] if raw.get("amenities") else None,
            guest_rating_min=float(raw["guest_rating_min"]) if raw.get("guest_rating_min") is not None else None,
            refundable_only=bool(raw.get("refundable_only", False))
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid search filters: {e}")


def _parse_sort(raw: Any) -> Optional[SortBy]:
    if raw is None:
        return None
    try:
        return SortBy(raw)
    except ValueError:
        raise ValidationError(
            f"Invalid sort_by '{raw}'",
            details={"allowed": [s.value for s in SortBy]}
        )


class HotelSearchHandler(ToolHandler):
    """Handler for the hotel/search tool."""

    name = "hotel/search"

    async def run(self, arguments: Dict[str, Any]) -> SearchResult:
        validate_required_fields(arguments, ["destination", "check_in", "check_out", "guests"])

        destination = sanitize_string(arguments["destination"], max_length=200)
        if not destination:
            raise ValidationError("destination must not be empty")
        check_in, check_out = validate_stay(arguments, self.config)
        guests = parse_positive_int(arguments["guests"], "guests", ErrorCode.INVALID_GUESTS)

        offset = arguments.get("offset", 0)
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            raise ValidationError("offset must be a non-negative integer")

        currency = optional_str(arguments, "currency")
        params = SearchParams(
            destination=destination,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            rooms=parse_positive_int(arguments.get("rooms", 1), "rooms"),
            currency=currency.upper() if currency else None,
            filters=_parse_filters(arguments.get("filters")),
            sort_by=_parse_sort(arguments.get("sort_by")),
            limit=min(parse_positive_int(arguments.get("limit", 20), "limit"), MAX_LIMIT),
            offset=offset
        )

        self.logger.info(
            "Searching hotels",
            destination=destination,
            check_in=check_in,
            check_out=check_out,
            guests=guests
        )
        result = await self.service.search(params)
        self.logger.info("Search completed", total_results=result.total_results)
        return result
