"""
Provider interface shared by every supplier adapter.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from models import (
    AvailabilityParams,
    AvailabilityResult,
    Booking,
    BookingParams,
    CancellationResult,
    CancellationType,
    ModificationRequest,
    ModificationResult,
    PropertySummary,
    SearchFilters,
    SearchParams,
    SearchResult,
    SortBy,
)


class ProviderType(str, Enum):
    """Closed set of backing providers."""
    MOCK = "mock"
    HOTELRUNNER = "hotelrunner"


class Operation(str, Enum):
    SEARCH = "search"
    AVAILABILITY = "availability"
    BOOK = "book"
    RETRIEVE = "retrieve"
    CANCEL = "cancel"
    MODIFY = "modify"


@dataclass(frozen=True)
class BookingIdMatcher:
    """Recognizes booking identifiers issued by one provider."""
    pattern: str
    priority: int = 0
    _regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", re.compile(self.pattern))

    def matches(self, booking_id: str) -> bool:
        return bool(self._regex.search(booking_id))


class HotelProvider(ABC):
    """Capability set every provider implements.

    Implementations return canonical entities and raise ``EywaError`` for
    every failure; no supplier exception escapes these methods.
    """

    provider_type: ProviderType
    booking_id_matchers: Tuple[BookingIdMatcher, ...] = ()

    @abstractmethod
    async def search(self, params: SearchParams) -> SearchResult:
        ...

    @abstractmethod
    async def availability(self, params: AvailabilityParams) -> AvailabilityResult:
        ...

    @abstractmethod
    async def book(self, params: BookingParams) -> Booking:
        ...

    @abstractmethod
    async def retrieve(self, booking_id: str, property_id: Optional[str] = None) -> Booking:
        ...

    @abstractmethod
    async def cancel(
        self,
        booking_id: str,
        property_id: Optional[str] = None,
        reason: Optional[str] = None
    ) -> CancellationResult:
        ...

    @abstractmethod
    async def modify(
        self,
        booking_id: str,
        modifications: ModificationRequest,
        property_id: Optional[str] = None
    ) -> ModificationResult:
        ...

    async def aclose(self) -> None:
        """Release network resources held by the provider."""


def apply_search_filters(
    results: List[PropertySummary],
    filters: Optional[SearchFilters],
    sort_by: Optional[SortBy] = None
) -> List[PropertySummary]:
    """Filter and sort property summaries the same way for every provider.

    ``SortBy.DISTANCE`` leaves results in provider order: search requests
    carry no reference point to measure from.
    """
    filtered = list(results)

    if filters:
        if filters.star_rating:
            filtered = [r for r in filtered if r.star_rating in filters.star_rating]
        if filters.price_min is not None:
            filtered = [r for r in filtered if r.price_summary.per_night_avg >= filters.price_min]
        if filters.price_max is not None:
            filtered = [r for r in filtered if r.price_summary.per_night_avg <= filters.price_max]
        if filters.guest_rating_min is not None:
            filtered = [r for r in filtered if r.guest_rating >= filters.guest_rating_min]
        if filters.amenities:
            wanted = {a.lower() for a in filters.amenities}
            filtered = [r for r in filtered if wanted <= {a.lower() for a in r.amenities}]
        if filters.refundable_only:
            filtered = [
                r for r in filtered
                if r.room_preview.cancellation != CancellationType.NON_REFUNDABLE
            ]

    if sort_by == SortBy.PRICE_ASC:
        filtered.sort(key=lambda r: r.price_summary.per_night_avg)
    elif sort_by == SortBy.PRICE_DESC:
        filtered.sort(key=lambda r: r.price_summary.per_night_avg, reverse=True)
    elif sort_by == SortBy.RATING:
        filtered.sort(key=lambda r: r.guest_rating, reverse=True)

    return filtered
