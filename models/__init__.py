"""
Canonical domain model package initialization.
"""

from .hotel import (
    CanonicalModel,
    BoardType,
    CancellationType,
    PaymentType,
    AvailabilityStatus,
    BookingStatus,
    SortBy,
    Coordinates,
    Address,
    DateRange,
    Tax,
    Fee,
    Price,
    PriceSummary,
    Bed,
    PenaltyAfter,
    CancellationPolicy,
    PaymentPolicy,
    Rate,
    Room,
    RoomPreview,
    PropertyImages,
    PropertySummary,
    PropertyPolicies,
    ContactInfo,
    Property,
    BookingProperty,
    BookingRoom,
    BookingGuest,
    BookingPrice,
    BookingCancellationPolicy,
    BookingDocuments,
    Booking,
    SearchFacets,
    SearchResult,
    AvailabilityResult,
    Refund,
    CancellationResult,
    PriceDifference,
    ModificationResult,
    SearchFilters,
    SearchParams,
    AvailabilityParams,
    Guest,
    BookingParams,
    ModificationRequest
)

__all__ = [
    'CanonicalModel',
    'BoardType',
    'CancellationType',
    'PaymentType',
    'AvailabilityStatus',
    'BookingStatus',
    'SortBy',
    'Coordinates',
    'Address',
    'DateRange',
    'Tax',
    'Fee',
    'Price',
    'PriceSummary',
    'Bed',
    'PenaltyAfter',
    'CancellationPolicy',
    'PaymentPolicy',
    'Rate',
    'Room',
    'RoomPreview',
    'PropertyImages',
    'PropertySummary',
    'PropertyPolicies',
    'ContactInfo',
    'Property',
    'BookingProperty',
    'BookingRoom',
    'BookingGuest',
    'BookingPrice',
    'BookingCancellationPolicy',
    'BookingDocuments',
    'Booking',
    'SearchFacets',
    'SearchResult',
    'AvailabilityResult',
    'Refund',
    'CancellationResult',
    'PriceDifference',
    'ModificationResult',
    'SearchFilters',
    'SearchParams',
    'AvailabilityParams',
    'Guest',
    'BookingParams',
    'ModificationRequest'
]
