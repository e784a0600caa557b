"""
Mapping from HotelRunner records to canonical entities.

HotelRunner is a channel manager: its room catalog carries no prices,
amenities or imagery. Where a field has no HotelRunner source the mapping
emits the documented placeholder below rather than inventing data:

* price: ``estimated_price`` (flat nightly amount plus an estimated tax line),
  always tagged ``estimated=True``
* currency: the property's registered currency; a currency requested by the
  caller is not applied because no conversion is performed
* beds: one double bed
* board: room only; payment: pay now by credit card
* check-in / check-out times: ``DEFAULT_CHECK_IN_TIME`` / ``DEFAULT_CHECK_OUT_TIME``
* star and guest ratings: 0 (unknown)
"""

from typing import Any, Dict, List

from models import (
    Address,
    AvailabilityStatus,
    Bed,
    BoardType,
    Booking,
    BookingCancellationPolicy,
    BookingGuest,
    BookingPrice,
    BookingProperty,
    BookingRoom,
    BookingStatus,
    CancellationPolicy,
    CancellationType,
    PaymentPolicy,
    PaymentType,
    Price,
    PriceSummary,
    Property,
    PropertySummary,
    Rate,
    Room,
    RoomPreview,
    Tax,
)
from providers.dates import date_range
from providers.registry import PropertyRegistration

NON_REFUNDABLE_PREFIX = "NR:"

ESTIMATED_NIGHTLY_PRICE = 100.0
ESTIMATED_TAX_RATE = 0.10
ESTIMATED_TAX_NAME = "Estimated taxes"

DEFAULT_CHECK_IN_TIME = "14:00"
DEFAULT_CHECK_OUT_TIME = "12:00"

# Every HotelRunner reservation state maps to exactly one canonical status.
RESERVATION_STATE_MAP: Dict[str, BookingStatus] = {
    "reserved": BookingStatus.PENDING,
    "confirmed": BookingStatus.CONFIRMED,
    "canceled": BookingStatus.CANCELLED,
}


def is_non_refundable(rate_code: str) -> bool:
    return (rate_code or "").startswith(NON_REFUNDABLE_PREFIX)


def is_sellable(hr_room: Dict[str, Any]) -> bool:
    """Rooms sold online that are not master (parent) rate plans."""
    return bool(hr_room.get("sell_online")) and not hr_room.get("is_master")


def _cancellation_type(rate_code: str) -> CancellationType:
    if is_non_refundable(rate_code):
        return CancellationType.NON_REFUNDABLE
    return CancellationType.FREE_CANCELLATION


def estimated_price(nights: int, currency: str) -> Price:
    """Placeholder stay price used wherever HotelRunner gives no rate."""
    per_night = [ESTIMATED_NIGHTLY_PRICE] * nights
    subtotal = ESTIMATED_NIGHTLY_PRICE * nights
    taxes = [Tax(name=ESTIMATED_TAX_NAME, amount=round(subtotal * ESTIMATED_TAX_RATE, 2), included=False)]
    return Price.build(currency, per_night, taxes=taxes, estimated=True)


def estimated_price_summary(nights: int, currency: str) -> PriceSummary:
    price = estimated_price(nights, currency)
    return PriceSummary(
        currency=currency,
        per_night_avg=ESTIMATED_NIGHTLY_PRICE,
        total=price.subtotal,
        taxes_included=False,
        taxes_fees=round(price.total - price.subtotal, 2),
        grand_total=price.total,
        estimated=True
    )


def map_room(hr_room: Dict[str, Any], nights: int, currency: str) -> Room:
    rate_code = hr_room.get("rate_code", "")
    non_refundable = is_non_refundable(rate_code)
    name = hr_room.get("name", "")

    return Room(
        room_id=hr_room.get("inv_code", ""),
        rate_id=rate_code,
        name=name,
        description=hr_room.get("description") or name,
        beds=[Bed(type="double", count=1)],
        max_guests=int(hr_room.get("room_capacity") or 0),
        rate=Rate(
            name="Non-Refundable Rate" if non_refundable else "Standard Rate",
            board=BoardType.ROOM_ONLY,
            cancellation=CancellationPolicy(type=_cancellation_type(rate_code)),
            payment=PaymentPolicy(type=PaymentType.PAY_NOW, methods=["credit_card"]),
            price=estimated_price(nights, currency)
        )
    )


def map_room_preview(hr_room: Dict[str, Any]) -> RoomPreview:
    return RoomPreview(
        name=hr_room.get("name", ""),
        beds=f"Max {hr_room.get('adult_capacity', 0)} adults",
        max_guests=int(hr_room.get("room_capacity") or 0),
        breakfast_included=False,
        cancellation=_cancellation_type(hr_room.get("rate_code", ""))
    )


def _address(registration: PropertyRegistration) -> Address:
    return Address(
        city=registration.location.city,
        country=registration.location.country,
        coordinates=registration.location.coordinates
    )


def map_property(registration: PropertyRegistration) -> Property:
    return Property(
        property_id=registration.property_id,
        name=registration.name,
        star_rating=0,
        guest_rating=0,
        guest_reviews_count=0,
        description="",
        address=_address(registration),
        check_in_time=DEFAULT_CHECK_IN_TIME,
        check_out_time=DEFAULT_CHECK_OUT_TIME
    )


def map_property_summary(
    registration: PropertyRegistration,
    preview_room: Dict[str, Any],
    nights: int
) -> PropertySummary:
    return PropertySummary(
        property_id=registration.property_id,
        name=registration.name,
        star_rating=0,
        guest_rating=0,
        guest_reviews_count=0,
        address=_address(registration),
        price_summary=estimated_price_summary(nights, registration.currency),
        room_preview=map_room_preview(preview_room),
        availability_status=AvailabilityStatus.AVAILABLE
    )


def map_reservation_state(state: str) -> BookingStatus:
    """Unknown states map to pending, the most conservative status."""
    return RESERVATION_STATE_MAP.get((state or "").lower(), BookingStatus.PENDING)


def map_reservation(res: Dict[str, Any], registration: PropertyRegistration) -> Booking:
    """Map a HotelRunner reservation to a booking.

    The refund snapshot reads ``non_refundable`` from the first reservation
    room. A reservation without room records is treated as fully refundable.
    """
    rooms: List[Dict[str, Any]] = res.get("rooms") or []
    room = rooms[0] if rooms else None
    total = float(res.get("total") or 0)
    paid = float(res.get("paid_amount") or 0)
    address = res.get("address") or {}
    location = registration.location

    refund = 0.0 if room and room.get("non_refundable") else total

    return Booking(
        status=map_reservation_state(res.get("state", "")),
        booking_id=res["hr_number"],
        confirmation_number=res.get("provider_number") or res["hr_number"],
        property=BookingProperty(
            id=registration.property_id,
            name=registration.name,
            address=f"{location.city}, {location.country}"
        ),
        dates=date_range(res["checkin_date"], res["checkout_date"]),
        room=BookingRoom(
            name=(room or {}).get("name") or "Room",
            board=BoardType.ROOM_ONLY,
            guests=int((room or {}).get("total_guest") or 1)
        ),
        guest=BookingGuest(name=res.get("guest", ""), email=address.get("email", "")),
        price=BookingPrice(currency=res.get("currency") or registration.currency, total=total, paid=paid),
        cancellation_policy=BookingCancellationPolicy(refund_if_cancelled_now=refund),
        created_at=res.get("completed_at", ""),
        updated_at=res.get("updated_at", "")
    )
