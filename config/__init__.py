"""
Configuration package initialization.
"""

from .base import (
    EywaConfig,
    ErrorCode,
    ErrorSuggestion,
    EywaError,
    ValidationError,
    ProviderError,
    APIError,
    RateLimitExceededError,
    HOTELRUNNER_BASE_URL,
    format_error,
    validate_required_fields,
    sanitize_string,
    parse_date,
    parse_positive_int,
    parse_mapping,
    ensure_not_past,
    logger
)

__all__ = [
    'EywaConfig',
    'ErrorCode',
    'ErrorSuggestion',
    'EywaError',
    'ValidationError',
    'ProviderError',
    'APIError',
    'RateLimitExceededError',
    'HOTELRUNNER_BASE_URL',
    'format_error',
    'validate_required_fields',
    'sanitize_string',
    'parse_date',
    'parse_positive_int',
    'parse_mapping',
    'ensure_not_past',
    'logger'
]
