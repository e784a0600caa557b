"""
Tests for HotelRunner to canonical mapping.
"""

import pytest

from models import BookingStatus, CancellationType
from providers.hotelrunner.normalizer import (
    ESTIMATED_NIGHTLY_PRICE,
    estimated_price,
    estimated_price_summary,
    is_non_refundable,
    is_sellable,
    map_property,
    map_property_summary,
    map_reservation,
    map_reservation_state,
    map_room
)


class TestEstimatedPricing:
    """Test suite for placeholder pricing."""

    def test_estimated_price(self):
        price = estimated_price(3, "TRY")

        assert price.per_night == [100.0, 100.0, 100.0]
        assert price.subtotal == 300.0
        assert len(price.taxes) == 1
        assert price.taxes[0].amount == 30.0
        assert price.taxes[0].included is False
        assert price.total == 330.0
        assert price.estimated is True
        assert price.currency == "TRY"

    def test_estimated_summary(self):
        summary = estimated_price_summary(2, "EUR")

        assert summary.per_night_avg == ESTIMATED_NIGHTLY_PRICE
        assert summary.total == 200.0
        assert summary.taxes_fees == 20.0
        assert summary.grand_total == 220.0
        assert summary.estimated is True


class TestRoomMapping:
    """Test suite for room mapping."""

    def test_refundability_from_rate_code(self):
        assert is_non_refundable("NR:BAR") is True
        assert is_non_refundable("BAR") is False
        assert is_non_refundable("") is False

    def test_sellable_excludes_master_and_offline(self, sample_hr_rooms):
        sellable = [r for r in sample_hr_rooms if is_sellable(r)]

        assert [r["rate_code"] for r in sellable] == ["BAR", "NR:BAR"]
        assert all(r["inv_code"] == "HR:CAVE_DBL" for r in sellable)

    def test_map_room(self, sample_hr_rooms):
        room = map_room(sample_hr_rooms[1], 3, "TRY")

        assert room.room_id == "HR:CAVE_DBL"
        assert room.rate_id == "BAR"
        assert room.description == "Carved stone room with valley view"
        assert room.max_guests == 2
        assert room.beds[0].type == "double"
        assert room.rate.name == "Standard Rate"
        assert room.rate.cancellation.type == CancellationType.FREE_CANCELLATION
        assert room.rate.price.estimated is True
        assert len(room.rate.price.per_night) == 3

    def test_map_non_refundable_room(self, sample_hr_rooms):
        room = map_room(sample_hr_rooms[2], 1, "TRY")

        assert room.rate_id == "NR:BAR"
        assert room.rate.name == "Non-Refundable Rate"
        assert room.rate.cancellation.type == CancellationType.NON_REFUNDABLE
        assert room.description == "Cave Double Room"


class TestPropertyMapping:
    """Test suite for property mapping."""

    def test_property_defaults(self, sample_registration):
        prop = map_property(sample_registration)

        assert prop.property_id == "hr_cappadocia_cave"
        assert prop.check_in_time == "14:00"
        assert prop.check_out_time == "12:00"
        assert prop.star_rating == 0
        assert prop.address.city == "Goreme"

    def test_property_summary(self, sample_registration, sample_hr_rooms):
        summary = map_property_summary(sample_registration, sample_hr_rooms[1], 3)

        assert summary.price_summary.currency == "TRY"
        assert summary.price_summary.total == summary.price_summary.per_night_avg * 3
        assert summary.room_preview.beds == "Max 2 adults"
        assert summary.availability_status.value == "available"


class TestReservationMapping:
    """Test suite for reservation mapping."""

    @pytest.mark.parametrize("state,expected", [
        ("reserved", BookingStatus.PENDING),
        ("confirmed", BookingStatus.CONFIRMED),
        ("canceled", BookingStatus.CANCELLED),
        ("CONFIRMED", BookingStatus.CONFIRMED),
        ("no_show", BookingStatus.PENDING),
        ("", BookingStatus.PENDING),
    ])
    def test_state_table(self, state, expected):
        assert map_reservation_state(state) == expected

    def test_map_reservation(self, sample_hr_reservation, sample_registration):
        booking = map_reservation(sample_hr_reservation, sample_registration)

        assert booking.booking_id == "R123456789"
        assert booking.confirmation_number == "BDC-99887766"
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.dates.nights == 3
        assert booking.room.guests == 2
        assert booking.guest.email == "ayse@example.com"
        assert booking.price.currency == "EUR"
        assert booking.price.balance_due == 300.0
        assert booking.cancellation_policy.refund_if_cancelled_now == 450.0
        assert booking.property.address == "Goreme, Turkey"

    def test_non_refundable_reservation_refunds_nothing(self, sample_hr_reservation, sample_registration):
        sample_hr_reservation["rooms"][0]["non_refundable"] = True

        booking = map_reservation(sample_hr_reservation, sample_registration)

        assert booking.cancellation_policy.refund_if_cancelled_now == 0

    def test_reservation_without_rooms_is_refundable(self, sample_hr_reservation, sample_registration):
        sample_hr_reservation["rooms"] = []
        sample_hr_reservation["provider_number"] = None

        booking = map_reservation(sample_hr_reservation, sample_registration)

        assert booking.cancellation_policy.refund_if_cancelled_now == 450.0
        assert booking.confirmation_number == "R123456789"
        assert booking.room.name == "Room"
        assert booking.room.guests == 1
