"""
Canonical hotel entities.

Every provider produces these shapes. Field names are snake_case in Python and
serialize to camelCase through ``to_dict()``; ``None`` optionals are omitted.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Dict, Any, List


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def _serialize(value: Any) -> Any:
    if isinstance(value, CanonicalModel):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    return value


class CanonicalModel:
    """Mixin giving dataclasses a JSON-ready camelCase ``to_dict``."""

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[_camel(f.name)] = _serialize(value)
        return data


# ==========================================
# ENUMERATIONS
# ==========================================

class BoardType(str, Enum):
    ROOM_ONLY = "room_only"
    BREAKFAST_INCLUDED = "breakfast_included"
    HALF_BOARD = "half_board"
    FULL_BOARD = "full_board"
    ALL_INCLUSIVE = "all_inclusive"


class CancellationType(str, Enum):
    FREE_CANCELLATION = "free_cancellation"
    FREE_UNTIL_24H = "free_until_24h"
    FREE_UNTIL_48H = "free_until_48h"
    FREE_UNTIL_7D = "free_until_7d"
    PARTIAL_REFUND = "partial_refund"
    NON_REFUNDABLE = "non_refundable"


class PaymentType(str, Enum):
    PAY_NOW = "pay_now"
    PAY_AT_HOTEL = "pay_at_hotel"
    DEPOSIT = "deposit"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    MODIFIED = "modified"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class SortBy(str, Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING = "rating"
    DISTANCE = "distance"


# ==========================================
# SHARED VALUE OBJECTS
# ==========================================

@dataclass
class Coordinates(CanonicalModel):
    lat: float
    lng: float


@dataclass
class Address(CanonicalModel):
    city: str
    country: str
    street: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass
class DateRange(CanonicalModel):
    check_in: str
    check_out: str
    nights: int


@dataclass
class Tax(CanonicalModel):
    name: str
    amount: float
    included: bool


@dataclass
class Fee(CanonicalModel):
    name: str
    amount: float
    type: str  # per_night | per_stay | per_person


@dataclass
class Price(CanonicalModel):
    """Full stay price.

    ``total`` equals ``subtotal`` plus every non-included tax and every fee.
    ``estimated`` marks placeholder pricing that no supplier confirmed.
    """
    currency: str
    per_night: List[float]
    subtotal: float
    taxes: List[Tax] = field(default_factory=list)
    fees: List[Fee] = field(default_factory=list)
    total: float = 0.0
    estimated: bool = False

    @classmethod
    def build(
        cls,
        currency: str,
        per_night: List[float],
        taxes: Optional[List[Tax]] = None,
        fees: Optional[List[Fee]] = None,
        estimated: bool = False
    ) -> 'Price':
        """Create a price whose subtotal and total follow from its components."""
        taxes = taxes or []
        fees = fees or []
        subtotal = round(sum(per_night), 2)
        extra = sum(t.amount for t in taxes if not t.included) + sum(f.amount for f in fees)
        return cls(
            currency=currency,
            per_night=list(per_night),
            subtotal=subtotal,
            taxes=taxes,
            fees=fees,
            total=round(subtotal + extra, 2),
            estimated=estimated
        )


@dataclass
class PriceSummary(CanonicalModel):
    currency: str
    per_night_avg: float
    total: float
    taxes_included: bool
    grand_total: float
    taxes_fees: Optional[float] = None
    estimated: bool = False


# ==========================================
# ROOMS & RATES
# ==========================================

@dataclass
class Bed(CanonicalModel):
    type: str  # single | double | queen | king | sofa_bed | bunk
    count: int


@dataclass
class PenaltyAfter(CanonicalModel):
    type: str  # first_night | percentage | fixed
    amount: float


@dataclass
class CancellationPolicy(CanonicalModel):
    type: CancellationType
    free_until: Optional[str] = None
    penalty_after: Optional[PenaltyAfter] = None


@dataclass
class PaymentPolicy(CanonicalModel):
    type: PaymentType
    methods: List[str]
    deposit_amount: Optional[float] = None


@dataclass
class Rate(CanonicalModel):
    name: str
    board: BoardType
    cancellation: CancellationPolicy
    payment: PaymentPolicy
    price: Price


@dataclass
class Room(CanonicalModel):
    room_id: str
    rate_id: str
    name: str
    description: str
    beds: List[Bed]
    max_guests: int
    rate: Rate
    amenities: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    size_sqm: Optional[float] = None
    view: Optional[str] = None
    remaining_rooms: Optional[int] = None


@dataclass
class RoomPreview(CanonicalModel):
    name: str
    beds: str
    max_guests: int
    breakfast_included: bool
    cancellation: CancellationType


# ==========================================
# PROPERTIES
# ==========================================

@dataclass
class PropertyImages(CanonicalModel):
    thumbnail: str = ""
    gallery: List[str] = field(default_factory=list)


@dataclass
class PropertySummary(CanonicalModel):
    property_id: str
    name: str
    star_rating: float
    guest_rating: float
    guest_reviews_count: int
    address: Address
    price_summary: PriceSummary
    room_preview: RoomPreview
    availability_status: AvailabilityStatus
    images: PropertyImages = field(default_factory=PropertyImages)
    amenities: List[str] = field(default_factory=list)
    badges: List[str] = field(default_factory=list)


@dataclass
class PropertyPolicies(CanonicalModel):
    children: Optional[str] = None
    pets: Optional[str] = None
    smoking: Optional[str] = None
    cancellation: Optional[str] = None


@dataclass
class ContactInfo(CanonicalModel):
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass
class Property(CanonicalModel):
    property_id: str
    name: str
    star_rating: float
    guest_rating: float
    guest_reviews_count: int
    description: str
    address: Address
    check_in_time: str
    check_out_time: str
    images: List[str] = field(default_factory=list)
    amenities: List[str] = field(default_factory=list)
    policies: PropertyPolicies = field(default_factory=PropertyPolicies)
    contact: ContactInfo = field(default_factory=ContactInfo)


# ==========================================
# BOOKINGS
# ==========================================

@dataclass
class BookingProperty(CanonicalModel):
    id: str
    name: str
    address: str
    phone: Optional[str] = None


@dataclass
class BookingRoom(CanonicalModel):
    name: str
    board: BoardType
    guests: int


@dataclass
class BookingGuest(CanonicalModel):
    name: str
    email: str


@dataclass
class BookingPrice(CanonicalModel):
    currency: str
    total: float
    paid: float
    balance_due: float = 0.0

    def __post_init__(self):
        self.balance_due = round(self.total - self.paid, 2)


@dataclass
class BookingCancellationPolicy(CanonicalModel):
    refund_if_cancelled_now: float
    free_until: Optional[str] = None


@dataclass
class BookingDocuments(CanonicalModel):
    confirmation_pdf: Optional[str] = None
    invoice_pdf: Optional[str] = None


@dataclass
class Booking(CanonicalModel):
    status: BookingStatus
    booking_id: str
    confirmation_number: str
    property: BookingProperty
    dates: DateRange
    room: BookingRoom
    guest: BookingGuest
    price: BookingPrice
    cancellation_policy: BookingCancellationPolicy
    created_at: str
    updated_at: str
    documents: Optional[BookingDocuments] = None


# ==========================================
# OPERATION RESULTS
# ==========================================

@dataclass
class SearchFacets(CanonicalModel):
    price_range: Dict[str, float]
    star_ratings: Dict[str, int]
    amenities: Dict[str, int]


@dataclass
class SearchResult(CanonicalModel):
    search_id: str
    destination: str
    dates: DateRange
    total_results: int
    results: List[PropertySummary]
    facets: Optional[SearchFacets] = None
    status: str = "success"


@dataclass
class AvailabilityResult(CanonicalModel):
    property_id: str
    property: Property
    dates: DateRange
    rooms_available: List[Room]
    status: str = "success"


@dataclass
class Refund(CanonicalModel):
    amount: float
    currency: str
    method: str
    estimated_days: int


@dataclass
class CancellationResult(CanonicalModel):
    booking_id: str
    cancellation_id: str
    refund: Refund
    cancelled_at: str
    reason: Optional[str] = None
    status: str = "cancelled"


@dataclass
class PriceDifference(CanonicalModel):
    currency: str
    original: float
    new: float
    to_pay: float


@dataclass
class ModificationResult(CanonicalModel):
    booking_id: str
    changes: Dict[str, Dict[str, Any]]
    price_difference: PriceDifference
    payment_required: bool
    updated_at: str
    status: str = "modified"


# ==========================================
# REQUEST PARAMETERS
# ==========================================

@dataclass
class SearchFilters:
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    star_rating: Optional[List[int]] = None
    amenities: Optional[List[str]] = None
    guest_rating_min: Optional[float] = None
    refundable_only: bool = False


@dataclass
class SearchParams:
    destination: str
    check_in: str
    check_out: str
    guests: int
    rooms: int = 1
    currency: Optional[str] = None
    filters: Optional[SearchFilters] = None
    sort_by: Optional[SortBy] = None
    limit: int = 20
    offset: int = 0


@dataclass
class AvailabilityParams:
    property_id: str
    check_in: str
    check_out: str
    guests: int
    rooms: int = 1
    currency: Optional[str] = None


@dataclass
class Guest:
    first_name: str
    last_name: str
    email: str
    title: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.title, self.first_name, self.last_name) if part)


@dataclass
class BookingParams:
    property_id: str
    room_id: str
    rate_id: str
    check_in: str
    check_out: str
    guest: Guest
    rooms_count: int = 1
    special_requests: Optional[str] = None


@dataclass
class ModificationRequest:
    new_check_in: Optional[str] = None
    new_check_out: Optional[str] = None
    new_room_id: Optional[str] = None
    new_guests: Optional[int] = None
    additional_requests: Optional[str] = None
