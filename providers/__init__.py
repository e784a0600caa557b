"""
Hotel supplier providers, routing and shared infrastructure.
"""

from .base import BookingIdMatcher, HotelProvider, Operation, ProviderType, apply_search_filters
from .cache import ResponseCache
from .dates import calculate_nights, date_range, day_before
from .mock import MockProvider
from .rate_limiter import RateLimiter
from .registry import (
    PropertyLocation,
    PropertyRegistration,
    PropertyRegistry,
    SupplierCredentials,
    load_registrations
)
from .router import ProviderConfig, ProviderRouter
from .service import HotelService

__all__ = [
    'BookingIdMatcher',
    'HotelProvider',
    'Operation',
    'ProviderType',
    'apply_search_filters',
    'ResponseCache',
    'calculate_nights',
    'date_range',
    'day_before',
    'MockProvider',
    'RateLimiter',
    'PropertyLocation',
    'PropertyRegistration',
    'PropertyRegistry',
    'SupplierCredentials',
    'load_registrations',
    'ProviderConfig',
    'ProviderRouter',
    'HotelService'
]
