"""
Base classes and utilities for the Eywa MCP Server.
"""

import os
from datetime import datetime, date, timezone
from enum import Enum
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
import structlog
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger("eywa-mcp")

HOTELRUNNER_BASE_URL = "https://app.hotelrunner.com/api/v2/apps"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def parse_mapping(value: Optional[str]) -> List[tuple]:
    """Parse ``key=value,key=value`` into an ordered list of pairs."""
    pairs = []
    if not value:
        return pairs
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"Invalid mapping entry '{item}', expected key=value")
        key, _, val = item.partition("=")
        pairs.append((key.strip(), val.strip()))
    return pairs


@dataclass
class EywaConfig:
    """Configuration for the Eywa MCP server and its providers."""
    default_provider: str = "mock"
    destination_providers: List[tuple] = field(default_factory=list)
    property_providers: Dict[str, str] = field(default_factory=dict)
    properties_file: Optional[str] = None
    hotelrunner_base_url: str = HOTELRUNNER_BASE_URL
    hotelrunner_timeout: int = 30
    reject_past_checkin: bool = False
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'EywaConfig':
        """Create configuration from environment variables."""
        return cls(
            default_provider=os.getenv('EYWA_DEFAULT_PROVIDER', 'mock').strip().lower(),
            destination_providers=parse_mapping(os.getenv('EYWA_DESTINATION_PROVIDERS')),
            property_providers=dict(parse_mapping(os.getenv('EYWA_PROPERTY_PROVIDERS'))),
            properties_file=os.getenv('EYWA_PROPERTIES_FILE') or None,
            hotelrunner_base_url=os.getenv('HOTELRUNNER_API_BASE_URL', HOTELRUNNER_BASE_URL),
            hotelrunner_timeout=int(os.getenv('HOTELRUNNER_API_TIMEOUT', '30')),
            reject_past_checkin=_env_flag('EYWA_REJECT_PAST_CHECKIN'),
            debug=_env_flag('EYWA_DEBUG')
        )


class ErrorCode(str, Enum):
    """Closed set of canonical error codes."""
    INVALID_DATES = "INVALID_DATES"
    INVALID_GUESTS = "INVALID_GUESTS"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    RATE_EXPIRED = "RATE_EXPIRED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    MODIFICATION_NOT_ALLOWED = "MODIFICATION_NOT_ALLOWED"
    CANCELLATION_NOT_ALLOWED = "CANCELLATION_NOT_ALLOWED"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"


@dataclass
class ErrorSuggestion:
    """A follow-up operation the caller may try instead."""
    action: str
    tool: str
    params: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"action": self.action, "tool": self.tool}
        if self.params:
            data["params"] = dict(self.params)
        return data


class EywaError(Exception):
    """Base exception carrying a canonical error code."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[ErrorSuggestion]] = None
    ):
        self.message = message
        self.error_code = ErrorCode(error_code) if error_code else self.default_code
        self.details = details or {}
        self.suggestions = suggestions or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the canonical error envelope."""
        error: Dict[str, Any] = {
            "code": self.error_code.value,
            "message": self.message
        }
        if self.details:
            error["details"] = self.details
        if self.suggestions:
            error["suggestions"] = [s.to_dict() for s in self.suggestions]
        return {"status": "error", "error": error}


class ValidationError(EywaError):
    """Exception raised for input validation failures."""
    default_code = ErrorCode.INVALID_REQUEST


class ProviderError(EywaError):
    """Exception raised when a backing supplier fails."""
    default_code = ErrorCode.PROVIDER_ERROR


class APIError(ProviderError):
    """Exception raised for supplier HTTP call failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        if body is not None:
            details["body"] = body
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body


class RateLimitExceededError(ProviderError):
    """Exception raised when a supplier account has exhausted its call quota."""

    reason = "RATE_LIMIT_EXCEEDED"

    def __init__(self, account_id: str):
        super().__init__(
            f"{self.reason}: supplier account {account_id} is over its request quota",
            details={"reason": self.reason, "account_id": account_id}
        )
        self.account_id = account_id


def format_error(error: EywaError) -> Dict[str, Any]:
    """Format a canonical error envelope for MCP tools."""
    return error.to_dict()


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """Validate that all required fields are present in the data."""
    missing_fields = [
        name for name in required_fields
        if name not in data or data[name] is None or data[name] == ""
    ]

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing_fields)}",
            details={"missing_fields": missing_fields}
        )


def sanitize_string(value: Any, max_length: Optional[int] = None) -> str:
    """Sanitize and validate string input."""
    if not isinstance(value, str):
        raise ValidationError(f"Expected string, got {type(value).__name__}")

    # Remove leading/trailing whitespace
    value = value.strip()

    # Check length constraint
    if max_length and len(value) > max_length:
        raise ValidationError(f"String exceeds maximum length of {max_length} characters")

    return value


def parse_date(date_str: Any, field_name: str = "date") -> str:
    """Parse and validate a date string in YYYY-MM-DD (or ISO datetime) format."""
    if not isinstance(date_str, str):
        raise ValidationError(
            f"Invalid {field_name}: expected YYYY-MM-DD string",
            error_code=ErrorCode.INVALID_DATES
        )
    try:
        datetime.fromisoformat(date_str.strip())
        return date_str.strip()
    except ValueError:
        raise ValidationError(
            f"Invalid date format for {field_name}. Expected YYYY-MM-DD, got: {date_str}",
            error_code=ErrorCode.INVALID_DATES
        )


def parse_positive_int(value: Any, field_name: str, error_code: ErrorCode = ErrorCode.INVALID_REQUEST) -> int:
    """Coerce an integer argument and require it to be at least 1."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", error_code=error_code)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", error_code=error_code)
    if number != value and not (isinstance(value, str) and value.strip().isdigit()):
        raise ValidationError(f"{field_name} must be a whole number", error_code=error_code)
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1", error_code=error_code)
    return number


def ensure_not_past(check_in: str, today: Optional[date] = None) -> None:
    """Reject check-in dates before today."""
    today = today or datetime.now(timezone.utc).date()
    if datetime.fromisoformat(check_in).date() < today:
        raise ValidationError(
            "Check-in date cannot be in the past",
            error_code=ErrorCode.INVALID_DATES,
            details={"check_in": check_in, "today": today.isoformat()}
        )
