"""
HotelRunner channel-manager integration.
"""

from .client import HotelRunnerHTTPClient, HOTELRUNNER_PER_DAY, HOTELRUNNER_PER_MINUTE
from .provider import HotelRunnerProvider, ROOMS_CACHE_TTL

__all__ = [
    'HotelRunnerHTTPClient',
    'HotelRunnerProvider',
    'HOTELRUNNER_PER_DAY',
    'HOTELRUNNER_PER_MINUTE',
    'ROOMS_CACHE_TTL'
]
