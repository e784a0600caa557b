"""
Reference provider.

A deterministic in-process supplier used as the default backend. It serves a
fixed catalog with fixed nightly prices so every other provider's output can
be checked against the same canonical shapes. Bookings created here live in
memory for the lifetime of the provider instance.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from config import ErrorCode, ErrorSuggestion, EywaError, logger
from models import (
    Address,
    AvailabilityParams,
    AvailabilityResult,
    AvailabilityStatus,
    Bed,
    BoardType,
    Booking,
    BookingCancellationPolicy,
    BookingDocuments,
    BookingGuest,
    BookingParams,
    BookingPrice,
    BookingProperty,
    BookingRoom,
    BookingStatus,
    CancellationPolicy,
    CancellationResult,
    CancellationType,
    ContactInfo,
    Coordinates,
    DateRange,
    ModificationRequest,
    ModificationResult,
    PaymentPolicy,
    PaymentType,
    PenaltyAfter,
    Price,
    PriceDifference,
    PriceSummary,
    Property,
    PropertyImages,
    PropertyPolicies,
    PropertySummary,
    Rate,
    Refund,
    Room,
    RoomPreview,
    SearchFacets,
    SearchParams,
    SearchResult,
    Tax,
)
from providers.base import BookingIdMatcher, HotelProvider, ProviderType, apply_search_filters
from providers.dates import calculate_nights, date_range, day_before

DEFAULT_CURRENCY = "USD"
SUMMARY_TAX_RATE = 0.13


@dataclass(frozen=True)
class CatalogHotel:
    property_id: str
    brand: str
    star_rating: int
    guest_rating: float
    guest_reviews_count: int
    coordinates: Coordinates
    thumbnail: str
    gallery: List[str]
    amenities: List[str]
    nightly: int
    taxes_included: bool
    preview: RoomPreview
    badges: List[str]
    availability: AvailabilityStatus


@dataclass(frozen=True)
class CatalogRoom:
    room_id: str
    rate_id: str
    name: str
    description: str
    beds: List[Bed]
    max_guests: int
    size_sqm: int
    view: str
    amenities: List[str]
    image: str
    rate_name: str
    board: BoardType
    refundable: bool
    payment: PaymentType
    payment_methods: List[str]
    nightly: int
    city_tax_rate: float
    remaining: int
    vat_rate: float = 0.08


HOTELS = [
    CatalogHotel(
        property_id="prop_grand_hyatt_ist",
        brand="Grand Hyatt",
        star_rating=5,
        guest_rating=9.1,
        guest_reviews_count=2847,
        coordinates=Coordinates(lat=41.0451, lng=28.9947),
        thumbnail="https://example.com/grand-hyatt-thumb.jpg",
        gallery=["https://example.com/grand-hyatt-1.jpg"],
        amenities=["wifi", "pool", "spa", "gym", "restaurant", "parking"],
        nightly=185,
        taxes_included=False,
        preview=RoomPreview(
            name="Deluxe King Room",
            beds="1 King",
            max_guests=2,
            breakfast_included=True,
            cancellation=CancellationType.FREE_UNTIL_24H
        ),
        badges=["top_rated", "free_cancellation"],
        availability=AvailabilityStatus.AVAILABLE
    ),
    CatalogHotel(
        property_id="prop_hilton_ist",
        brand="Hilton",
        star_rating=5,
        guest_rating=8.8,
        guest_reviews_count=3421,
        coordinates=Coordinates(lat=41.0391, lng=28.9956),
        thumbnail="https://example.com/hilton-thumb.jpg",
        gallery=["https://example.com/hilton-1.jpg"],
        amenities=["wifi", "pool", "gym", "restaurant", "parking", "business_center"],
        nightly=165,
        taxes_included=False,
        preview=RoomPreview(
            name="Executive Room",
            beds="1 King or 2 Twin",
            max_guests=2,
            breakfast_included=False,
            cancellation=CancellationType.FREE_UNTIL_48H
        ),
        badges=["free_cancellation"],
        availability=AvailabilityStatus.AVAILABLE
    ),
    CatalogHotel(
        property_id="prop_boutique_ist",
        brand="Boutique Hotel",
        star_rating=4,
        guest_rating=9.3,
        guest_reviews_count=892,
        coordinates=Coordinates(lat=41.0082, lng=28.9784),
        thumbnail="https://example.com/boutique-thumb.jpg",
        gallery=["https://example.com/boutique-1.jpg"],
        amenities=["wifi", "restaurant", "bar", "concierge"],
        nightly=95,
        taxes_included=True,
        preview=RoomPreview(
            name="Superior Double",
            beds="1 Queen",
            max_guests=2,
            breakfast_included=True,
            cancellation=CancellationType.NON_REFUNDABLE
        ),
        badges=["top_rated", "great_value"],
        availability=AvailabilityStatus.LIMITED
    ),
]

ROOMS = [
    CatalogRoom(
        room_id="room_deluxe_king",
        rate_id="rate_bar",
        name="Deluxe King Room",
        description="45 sqm room with city view, king bed, marble bathroom",
        beds=[Bed(type="king", count=1)],
        max_guests=2,
        size_sqm=45,
        view="city",
        amenities=["wifi", "minibar", "safe", "tv", "air_conditioning", "room_service"],
        image="https://example.com/deluxe-king.jpg",
        rate_name="Best Available Rate",
        board=BoardType.BREAKFAST_INCLUDED,
        refundable=True,
        payment=PaymentType.PAY_NOW,
        payment_methods=["credit_card"],
        nightly=185,
        city_tax_rate=0.05,
        remaining=3
    ),
    CatalogRoom(
        room_id="room_grand_suite",
        rate_id="rate_suite",
        name="Grand Suite",
        description="85 sqm suite with Bosphorus view, separate living area",
        beds=[Bed(type="king", count=1), Bed(type="sofa_bed", count=1)],
        max_guests=3,
        size_sqm=85,
        view="bosphorus",
        amenities=["wifi", "minibar", "safe", "tv", "air_conditioning", "room_service", "lounge_access", "butler"],
        image="https://example.com/grand-suite.jpg",
        rate_name="Suite Special",
        board=BoardType.HALF_BOARD,
        refundable=False,
        payment=PaymentType.PAY_AT_HOTEL,
        payment_methods=["credit_card", "cash"],
        nightly=420,
        city_tax_rate=0.04,
        remaining=1
    ),
]

ROOMS_BY_ID: Dict[str, CatalogRoom] = {room.room_id: room for room in ROOMS}

PROPERTY_NAME = "Grand Hyatt Istanbul"
PROPERTY_ADDRESS = "Taskisla Caddesi No:1, Istanbul"
PROPERTY_PHONE = "+90 212 368 1234"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def room_price(room: CatalogRoom, nights: int, currency: str = DEFAULT_CURRENCY) -> Price:
    subtotal = room.nightly * nights
    taxes = [
        Tax(name="VAT", amount=round(subtotal * room.vat_rate), included=False),
        Tax(name="City Tax", amount=round(subtotal * room.city_tax_rate), included=False),
    ]
    return Price.build(currency, [room.nightly] * nights, taxes=taxes)


def _summary(hotel: CatalogHotel, destination: str, nights: int, currency: str) -> PropertySummary:
    total = hotel.nightly * nights
    if hotel.taxes_included:
        price = PriceSummary(
            currency=currency,
            per_night_avg=hotel.nightly,
            total=total,
            taxes_included=True,
            grand_total=total
        )
    else:
        taxes = round(total * SUMMARY_TAX_RATE)
        price = PriceSummary(
            currency=currency,
            per_night_avg=hotel.nightly,
            total=total,
            taxes_included=False,
            taxes_fees=taxes,
            grand_total=total + taxes
        )

    return PropertySummary(
        property_id=hotel.property_id,
        name=f"{hotel.brand} {destination}",
        star_rating=hotel.star_rating,
        guest_rating=hotel.guest_rating,
        guest_reviews_count=hotel.guest_reviews_count,
        address=Address(city=destination, country="TR", coordinates=hotel.coordinates),
        images=PropertyImages(thumbnail=hotel.thumbnail, gallery=list(hotel.gallery)),
        amenities=list(hotel.amenities),
        price_summary=price,
        room_preview=hotel.preview,
        badges=list(hotel.badges),
        availability_status=hotel.availability
    )


def _facets(results: List[PropertySummary]) -> SearchFacets:
    prices = [r.price_summary.per_night_avg for r in results]
    stars: Dict[str, int] = {}
    amenities: Dict[str, int] = {}
    for result in results:
        key = str(int(result.star_rating))
        stars[key] = stars.get(key, 0) + 1
        for amenity in result.amenities:
            amenities[amenity] = amenities.get(amenity, 0) + 1
    return SearchFacets(
        price_range={"min": min(prices), "max": max(prices)} if prices else {"min": 0, "max": 0},
        star_ratings=stars,
        amenities=amenities
    )


def _room(room: CatalogRoom, check_in: str, nights: int, currency: str) -> Room:
    price = room_price(room, nights, currency)
    if room.refundable:
        cancellation = CancellationPolicy(
            type=CancellationType.FREE_CANCELLATION,
            free_until=day_before(check_in),
            penalty_after=PenaltyAfter(type="first_night", amount=room.nightly)
        )
    else:
        cancellation = CancellationPolicy(type=CancellationType.NON_REFUNDABLE)

    return Room(
        room_id=room.room_id,
        rate_id=room.rate_id,
        name=room.name,
        description=room.description,
        beds=list(room.beds),
        max_guests=room.max_guests,
        size_sqm=room.size_sqm,
        view=room.view,
        amenities=list(room.amenities),
        images=[room.image],
        rate=Rate(
            name=room.rate_name,
            board=room.board,
            cancellation=cancellation,
            payment=PaymentPolicy(type=room.payment, methods=list(room.payment_methods)),
            price=price
        ),
        remaining_rooms=room.remaining
    )


def _property(property_id: str) -> Property:
    return Property(
        property_id=property_id,
        name=PROPERTY_NAME,
        star_rating=5,
        guest_rating=9.1,
        guest_reviews_count=2847,
        description="Luxury 5-star hotel in the heart of Istanbul with stunning Bosphorus views.",
        address=Address(
            street="Taskisla Caddesi No:1",
            city="Istanbul",
            region="Beyoglu",
            country="TR",
            postal_code="34437",
            coordinates=Coordinates(lat=41.0451, lng=28.9947)
        ),
        check_in_time="15:00",
        check_out_time="12:00",
        images=["https://example.com/grand-hyatt-1.jpg"],
        amenities=["wifi", "pool", "spa", "gym", "restaurant", "parking"],
        policies=PropertyPolicies(
            children="Children of all ages welcome",
            pets="Pets not allowed",
            smoking="Non-smoking property"
        ),
        contact=ContactInfo(phone=PROPERTY_PHONE, email="istanbul.grand@hyatt.com")
    )


def _booking_not_found(booking_id: str) -> EywaError:
    return EywaError(
        f"Booking not found: {booking_id}",
        error_code=ErrorCode.BOOKING_NOT_FOUND,
        details={"booking_id": booking_id}
    )


def _sample_booking(identifier: str) -> Booking:
    """Fixed booking returned for reference identifiers not created in-process."""
    return Booking(
        status=BookingStatus.CONFIRMED,
        booking_id=identifier if identifier.startswith("EYW-") else f"EYW-2026-{identifier[3:]}",
        confirmation_number=identifier if identifier.startswith("HY-") else f"HY-{identifier[9:]}",
        property=BookingProperty(
            id="prop_grand_hyatt_ist",
            name=PROPERTY_NAME,
            address=PROPERTY_ADDRESS,
            phone=PROPERTY_PHONE
        ),
        dates=DateRange(check_in="2026-03-15", check_out="2026-03-18", nights=3),
        room=BookingRoom(name="Deluxe King Room", board=BoardType.BREAKFAST_INCLUDED, guests=2),
        guest=BookingGuest(name="Mr John Smith", email="john.smith@example.com"),
        price=BookingPrice(currency=DEFAULT_CURRENCY, total=627, paid=627),
        cancellation_policy=BookingCancellationPolicy(
            free_until="2026-03-14T15:00:00Z",
            refund_if_cancelled_now=627
        ),
        created_at="2026-02-24T10:00:00Z",
        updated_at="2026-02-24T10:00:00Z"
    )


@dataclass
class _BookingStore:
    by_id: Dict[str, Booking] = field(default_factory=dict)
    by_confirmation: Dict[str, str] = field(default_factory=dict)
    rooms_count: Dict[str, int] = field(default_factory=dict)

    def put(self, booking: Booking, rooms_count: Optional[int] = None) -> None:
        self.by_id[booking.booking_id] = booking
        self.by_confirmation[booking.confirmation_number] = booking.booking_id
        if rooms_count is not None:
            self.rooms_count[booking.booking_id] = rooms_count

    def rooms_for(self, booking_id: str) -> int:
        return self.rooms_count.get(booking_id, 1)

    def get(self, identifier: str) -> Optional[Booking]:
        booking_id = self.by_confirmation.get(identifier, identifier)
        return self.by_id.get(booking_id)


class MockProvider(HotelProvider):
    """Deterministic reference supplier."""

    provider_type = ProviderType.MOCK
    booking_id_matchers = (BookingIdMatcher(r"^(EYW-|HY-)", priority=0),)

    def __init__(self):
        self._bookings = _BookingStore()
        self.logger = logger.bind(provider="mock")

    async def search(self, params: SearchParams) -> SearchResult:
        dates = date_range(params.check_in, params.check_out)
        currency = params.currency or DEFAULT_CURRENCY

        results = [_summary(h, params.destination, dates.nights, currency) for h in HOTELS]
        results = apply_search_filters(results, params.filters, params.sort_by)

        return SearchResult(
            search_id=f"srch_{uuid.uuid4().hex[:8]}",
            destination=params.destination,
            dates=dates,
            total_results=len(results),
            results=results[params.offset:params.offset + params.limit],
            facets=_facets(results)
        )

    async def availability(self, params: AvailabilityParams) -> AvailabilityResult:
        dates = date_range(params.check_in, params.check_out)
        currency = params.currency or DEFAULT_CURRENCY

        return AvailabilityResult(
            property_id=params.property_id,
            property=_property(params.property_id),
            dates=dates,
            rooms_available=[_room(r, params.check_in, dates.nights, currency) for r in ROOMS]
        )

    def _catalog_room(self, room_id: str) -> CatalogRoom:
        room = ROOMS_BY_ID.get(room_id)
        if room is None:
            raise EywaError(
                f"Room not available: {room_id}",
                error_code=ErrorCode.ROOM_UNAVAILABLE,
                details={"room_id": room_id, "available_rooms": sorted(ROOMS_BY_ID)},
                suggestions=[ErrorSuggestion(action="Get available rooms first", tool="hotel/availability")]
            )
        return room

    async def book(self, params: BookingParams) -> Booking:
        room = self._catalog_room(params.room_id)
        if params.rate_id != room.rate_id:
            raise EywaError(
                f"Rate {params.rate_id} is no longer offered for {room.room_id}",
                error_code=ErrorCode.RATE_EXPIRED,
                details={"room_id": room.room_id, "rate_id": params.rate_id},
                suggestions=[
                    ErrorSuggestion(
                        action="Refresh rates for this property",
                        tool="hotel/availability",
                        params={"property_id": params.property_id}
                    )
                ]
            )

        dates = date_range(params.check_in, params.check_out)
        price = room_price(room, dates.nights)
        total = price.total * params.rooms_count
        paid = total if room.payment == PaymentType.PAY_NOW else 0
        now = _now()

        booking = Booking(
            status=BookingStatus.CONFIRMED,
            booking_id=f"EYW-{now[:4]}-{uuid.uuid4().hex[:8].upper()}",
            confirmation_number=f"HY-{uuid.uuid4().int % 10**9:09d}",
            property=BookingProperty(
                id=params.property_id,
                name=PROPERTY_NAME,
                address=PROPERTY_ADDRESS,
                phone=PROPERTY_PHONE
            ),
            dates=dates,
            room=BookingRoom(name=room.name, board=room.board, guests=1),
            guest=BookingGuest(name=params.guest.full_name, email=params.guest.email),
            price=BookingPrice(currency=DEFAULT_CURRENCY, total=total, paid=paid),
            cancellation_policy=BookingCancellationPolicy(
                free_until=day_before(params.check_in) if room.refundable else None,
                refund_if_cancelled_now=paid if room.refundable else 0
            ),
            documents=BookingDocuments(
                confirmation_pdf="https://example.com/confirmation.pdf",
                invoice_pdf="https://example.com/invoice.pdf"
            ),
            created_at=now,
            updated_at=now
        )
        self._bookings.put(booking, rooms_count=params.rooms_count)
        self.logger.info("Booking created", booking_id=booking.booking_id, room_id=room.room_id)
        return booking

    async def retrieve(self, booking_id: str, property_id: Optional[str] = None) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is not None:
            return booking
        if booking_id.startswith(("EYW-", "HY-")):
            return _sample_booking(booking_id)
        raise _booking_not_found(booking_id)

    async def cancel(
        self,
        booking_id: str,
        property_id: Optional[str] = None,
        reason: Optional[str] = None
    ) -> CancellationResult:
        booking = await self.retrieve(booking_id)
        if booking.status == BookingStatus.CANCELLED:
            raise EywaError(
                f"Booking {booking.booking_id} is already cancelled",
                error_code=ErrorCode.CANCELLATION_NOT_ALLOWED,
                details={"booking_id": booking.booking_id}
            )

        refund = booking.cancellation_policy.refund_if_cancelled_now
        now = _now()
        booking.status = BookingStatus.CANCELLED
        booking.cancellation_policy = BookingCancellationPolicy(refund_if_cancelled_now=0)
        booking.updated_at = now
        self._bookings.put(booking)

        return CancellationResult(
            booking_id=booking.booking_id,
            cancellation_id=f"CXL_{uuid.uuid4().hex[:8]}",
            refund=Refund(
                amount=refund,
                currency=booking.price.currency,
                method="original_payment",
                estimated_days=5
            ),
            reason=reason,
            cancelled_at=now
        )

    async def modify(
        self,
        booking_id: str,
        modifications: ModificationRequest,
        property_id: Optional[str] = None
    ) -> ModificationResult:
        booking = await self.retrieve(booking_id)
        if booking.status == BookingStatus.CANCELLED:
            raise EywaError(
                f"Booking {booking.booking_id} is cancelled and cannot be modified",
                error_code=ErrorCode.MODIFICATION_NOT_ALLOWED,
                details={"booking_id": booking.booking_id}
            )

        current_room = next((r for r in ROOMS if r.name == booking.room.name), ROOMS[0])
        room = self._catalog_room(modifications.new_room_id) if modifications.new_room_id else current_room

        guests = modifications.new_guests or booking.room.guests
        if guests > room.max_guests:
            raise EywaError(
                f"{room.name} holds at most {room.max_guests} guests",
                error_code=ErrorCode.INVALID_GUESTS,
                details={"room_id": room.room_id, "max_guests": room.max_guests, "requested": guests}
            )

        check_in = modifications.new_check_in or booking.dates.check_in
        check_out = modifications.new_check_out or booking.dates.check_out
        nights = calculate_nights(check_in, check_out)

        changes: Dict[str, Dict[str, object]] = {}
        if check_in != booking.dates.check_in:
            changes["checkIn"] = {"from": booking.dates.check_in, "to": check_in}
        if check_out != booking.dates.check_out:
            changes["checkOut"] = {"from": booking.dates.check_out, "to": check_out}
        if room.name != booking.room.name:
            changes["room"] = {"from": booking.room.name, "to": room.name}
        if guests != booking.room.guests:
            changes["guests"] = {"from": booking.room.guests, "to": guests}
        if modifications.additional_requests:
            changes["specialRequests"] = {"from": None, "to": modifications.additional_requests}

        original = booking.price.total
        rooms_count = self._bookings.rooms_for(booking.booking_id)
        new_total = room_price(room, nights, booking.price.currency).total * rooms_count
        to_pay = round(new_total - original, 2)
        now = _now()

        booking.status = BookingStatus.MODIFIED
        booking.dates = DateRange(check_in=check_in, check_out=check_out, nights=nights)
        booking.room = BookingRoom(name=room.name, board=room.board, guests=guests)
        booking.price = BookingPrice(currency=booking.price.currency, total=new_total, paid=booking.price.paid)
        booking.updated_at = now
        self._bookings.put(booking)

        return ModificationResult(
            booking_id=booking.booking_id,
            changes=changes,
            price_difference=PriceDifference(
                currency=booking.price.currency,
                original=original,
                new=new_total,
                to_pay=to_pay
            ),
            payment_required=to_pay > 0,
            updated_at=now
        )
