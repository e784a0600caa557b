"""
Provider routing.

Resolution order for ``route``: explicit property assignment, then the first
destination rule whose pattern occurs in the destination, then the default.
Routing never fails; anything unresolved lands on the default provider.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config import EywaConfig, logger
from .base import BookingIdMatcher, Operation, ProviderType


@dataclass
class ProviderConfig:
    default: ProviderType = ProviderType.MOCK
    destinations: List[Tuple[str, ProviderType]] = field(default_factory=list)
    properties: Dict[str, ProviderType] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: EywaConfig) -> 'ProviderConfig':
        """Build routing tables from server configuration.

        Raises:
            ValueError: If a provider name is not a known provider
        """
        return cls(
            default=ProviderType(config.default_provider),
            destinations=[(pattern, ProviderType(name.lower())) for pattern, name in config.destination_providers],
            properties={pid: ProviderType(name.lower()) for pid, name in config.property_providers.items()}
        )


class ProviderRouter:
    """Decides which provider services each request."""

    def __init__(self, config: Optional[ProviderConfig] = None):
        self.config = config or ProviderConfig()
        self._matchers: List[Tuple[BookingIdMatcher, ProviderType]] = []
        self.logger = logger.bind(component="router")

    def assign_property(self, property_id: str, provider: ProviderType) -> None:
        self.config.properties[property_id] = provider

    def add_destination_rule(self, pattern: str, provider: ProviderType) -> None:
        self.config.destinations.append((pattern, provider))

    def register_matcher(self, matcher: BookingIdMatcher, provider: ProviderType) -> None:
        self._matchers.append((matcher, provider))
        self._matchers.sort(key=lambda item: item[0].priority, reverse=True)

    def _by_property(self, property_id: Optional[str]) -> Optional[ProviderType]:
        if property_id:
            return self.config.properties.get(property_id)
        return None

    def route(
        self,
        operation: Operation,
        destination: Optional[str] = None,
        property_id: Optional[str] = None
    ) -> ProviderType:
        provider = self._by_property(property_id)
        reason = "property"

        if provider is None and destination:
            dest = destination.lower()
            for pattern, candidate in self.config.destinations:
                if pattern.lower() in dest:
                    provider, reason = candidate, "destination"
                    break

        if provider is None:
            provider, reason = self.config.default, "default"

        self.logger.debug(
            "Request routed",
            operation=operation.value,
            provider=provider.value,
            reason=reason,
            destination=destination,
            property_id=property_id
        )
        return provider

    def route_booking(
        self,
        operation: Operation,
        booking_id: str,
        property_id: Optional[str] = None
    ) -> ProviderType:
        """Route an operation on an existing booking.

        An explicit property assignment wins, then the highest priority
        booking-id matcher, then the default provider.
        """
        provider = self._by_property(property_id)
        if provider is not None:
            return provider

        for matcher, candidate in self._matchers:
            if matcher.matches(booking_id):
                self.logger.debug(
                    "Booking routed by identifier format",
                    operation=operation.value,
                    provider=candidate.value,
                    pattern=matcher.pattern
                )
                return candidate

        return self.config.default
