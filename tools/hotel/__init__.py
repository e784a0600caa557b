"""
Hotel Booking Tools

This package contains the search, availability, booking, retrieval,
cancellation and modification tools.
"""

from .search import HOTEL_SEARCH_TOOL, HotelSearchHandler
from .availability import HOTEL_AVAILABILITY_TOOL, HotelAvailabilityHandler
from .book import HOTEL_BOOK_TOOL, HotelBookHandler
from .booking import HOTEL_BOOKING_TOOL, HotelBookingHandler
from .cancel import HOTEL_CANCEL_TOOL, HotelCancelHandler
from .modify import HOTEL_MODIFY_TOOL, HotelModifyHandler

__all__ = [
    "HOTEL_SEARCH_TOOL", "HotelSearchHandler",
    "HOTEL_AVAILABILITY_TOOL", "HotelAvailabilityHandler",
    "HOTEL_BOOK_TOOL", "HotelBookHandler",
    "HOTEL_BOOKING_TOOL", "HotelBookingHandler",
    "HOTEL_CANCEL_TOOL", "HotelCancelHandler",
    "HOTEL_MODIFY_TOOL", "HotelModifyHandler"
]
