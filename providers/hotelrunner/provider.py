"""
HotelRunner provider.

HotelRunner is a channel manager: it exposes room catalogs and reservations
delivered from booking channels, but cannot originate, cancel or modify
bookings itself. Those operations fail with PROVIDER_ERROR and point the
caller at an operation that does work.
"""

import time
from typing import Any, Dict, List, Optional

from config import (
    ErrorCode,
    ErrorSuggestion,
    EywaError,
    ProviderError,
    ValidationError,
    logger
)
from models import (
    AvailabilityParams,
    AvailabilityResult,
    Booking,
    BookingParams,
    CancellationResult,
    ModificationRequest,
    ModificationResult,
    SearchParams,
    SearchResult,
)
from providers.base import BookingIdMatcher, HotelProvider, ProviderType, apply_search_filters
from providers.cache import ResponseCache
from providers.dates import date_range
from providers.registry import PropertyRegistration, PropertyRegistry
from .client import HotelRunnerHTTPClient
from .normalizer import is_sellable, map_property, map_property_summary, map_reservation, map_room

ROOMS_CACHE_TTL = 15 * 60  # seconds


def _property_not_found(property_id: str) -> EywaError:
    return EywaError(
        f"Property not found: {property_id}",
        error_code=ErrorCode.PROPERTY_NOT_FOUND,
        details={"property_id": property_id}
    )


class HotelRunnerProvider(HotelProvider):
    """Adapter for properties connected through HotelRunner."""

    provider_type = ProviderType.HOTELRUNNER
    # HotelRunner reservation numbers: R followed by 9 digits
    booking_id_matchers = (BookingIdMatcher(r"^R\d{9}$", priority=10),)

    def __init__(
        self,
        registry: PropertyRegistry,
        client: Optional[HotelRunnerHTTPClient] = None,
        cache: Optional[ResponseCache] = None
    ):
        self.registry = registry
        self.client = client or HotelRunnerHTTPClient()
        self.cache = cache or ResponseCache(name="hotelrunner_rooms")
        self.logger = logger.bind(provider="hotelrunner")

    async def aclose(self) -> None:
        await self.client.close()

    async def _get_rooms(self, registration: PropertyRegistration) -> List[Dict[str, Any]]:
        return await self.cache.get_or_fetch(
            registration.property_id,
            ROOMS_CACHE_TTL,
            lambda: self.client.get_rooms(registration.credentials)
        )

    def _require_property(self, property_id: str) -> PropertyRegistration:
        registration = self.registry.lookup(property_id)
        if registration is None:
            raise _property_not_found(property_id)
        return registration

    async def search(self, params: SearchParams) -> SearchResult:
        """Search registered properties; HotelRunner has no search API."""
        dates = date_range(params.check_in, params.check_out)
        dest = params.destination.lower()

        matching = [
            p for p in self.registry.list_all()
            if dest in p.location.city.lower()
            or dest in p.location.country.lower()
            or dest in p.name.lower()
        ]

        results = []
        for registration in matching:
            try:
                rooms = await self._get_rooms(registration)
            except ProviderError as e:
                self.logger.error(
                    "Failed to fetch rooms, skipping property",
                    property_id=registration.property_id,
                    error=e.message
                )
                continue

            sellable = [r for r in rooms if is_sellable(r)]
            if not sellable:
                continue
            results.append(map_property_summary(registration, sellable[0], dates.nights))

        results = apply_search_filters(results, params.filters, params.sort_by)
        page = results[params.offset:params.offset + params.limit]

        return SearchResult(
            search_id=f"hr_{int(time.time() * 1000)}",
            destination=params.destination,
            dates=dates,
            total_results=len(results),
            results=page
        )

    async def availability(self, params: AvailabilityParams) -> AvailabilityResult:
        registration = self._require_property(params.property_id)
        dates = date_range(params.check_in, params.check_out)

        try:
            hr_rooms = await self._get_rooms(registration)
        except ProviderError as e:
            raise ProviderError(f"HotelRunner API error: {e.message}", details=e.details) from e

        # Placeholder prices are labelled in the property's own currency.
        rooms = [
            map_room(r, dates.nights, registration.currency)
            for r in hr_rooms if is_sellable(r)
        ]

        return AvailabilityResult(
            property_id=params.property_id,
            property=map_property(registration),
            dates=dates,
            rooms_available=rooms
        )

    async def list_reservations(
        self,
        property_id: str,
        from_date: Optional[str] = None,
        undelivered: Optional[bool] = None,
        reservation_number: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Raw reservation records for one registered property."""
        registration = self._require_property(property_id)
        try:
            return await self.client.get_reservations(
                registration.credentials,
                reservation_number=reservation_number,
                from_date=from_date,
                undelivered=undelivered
            )
        except ProviderError as e:
            raise ProviderError(f"HotelRunner API error: {e.message}", details=e.details) from e

    async def retrieve(self, booking_id: str, property_id: Optional[str] = None) -> Booking:
        if property_id:
            candidates = [self._require_property(property_id)]
        else:
            candidates = self.registry.list_all()

        failures = {}
        for registration in candidates:
            try:
                reservations = await self.client.get_reservations(
                    registration.credentials,
                    reservation_number=booking_id,
                    undelivered=False
                )
            except ProviderError as e:
                self.logger.error(
                    "Reservation lookup failed",
                    property_id=registration.property_id,
                    error=e.message
                )
                failures[registration.property_id] = e.message
                continue

            if reservations:
                try:
                    return map_reservation(reservations[0], registration)
                except (KeyError, TypeError, ValueError, ValidationError) as e:
                    raise ProviderError(
                        f"HotelRunner returned an unreadable reservation: {e}",
                        details={"booking_id": booking_id, "property_id": registration.property_id}
                    ) from e

        if failures:
            raise ProviderError(
                f"HotelRunner API error while looking up booking {booking_id}",
                details={"failures": failures}
            )

        raise EywaError(
            f"Booking not found: {booking_id}",
            error_code=ErrorCode.BOOKING_NOT_FOUND,
            details={"booking_id": booking_id}
        )

    async def book(self, params: BookingParams) -> Booking:
        raise ProviderError(
            "HotelRunner does not support direct booking creation. Bookings must be made "
            "through connected OTA channels or the property's direct booking engine.",
            details={"property_id": params.property_id},
            suggestions=[
                ErrorSuggestion(
                    action="Use the property's direct booking URL",
                    tool="hotel/availability",
                    params={"property_id": params.property_id, "includeBookingUrl": True}
                )
            ]
        )

    async def cancel(
        self,
        booking_id: str,
        property_id: Optional[str] = None,
        reason: Optional[str] = None
    ) -> CancellationResult:
        if property_id:
            self._require_property(property_id)

        raise ProviderError(
            "HotelRunner does not support cancellation through its API. Cancel through the "
            "channel the booking was made on.",
            details={"booking_id": booking_id},
            suggestions=[
                ErrorSuggestion(
                    action="Check the booking status and originating channel",
                    tool="hotel/booking",
                    params={"booking_id": booking_id}
                )
            ]
        )

    async def modify(
        self,
        booking_id: str,
        modifications: ModificationRequest,
        property_id: Optional[str] = None
    ) -> ModificationResult:
        if property_id:
            self._require_property(property_id)

        raise ProviderError(
            "HotelRunner does not support booking modification through its API. Modify the "
            "booking through the channel it was made on.",
            details={"booking_id": booking_id},
            suggestions=[
                ErrorSuggestion(
                    action="Check the booking status and originating channel",
                    tool="hotel/booking",
                    params={"booking_id": booking_id}
                )
            ]
        )
