"""
Dispatch facade tying the router to the provider implementations.
"""

from typing import Dict, Optional

from config import EywaConfig, ProviderError, logger
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
from .base import HotelProvider, Operation, ProviderType
from .hotelrunner import HotelRunnerHTTPClient, HotelRunnerProvider
from .mock import MockProvider
from .registry import PropertyRegistration, PropertyRegistry, load_registrations
from .router import ProviderConfig, ProviderRouter


class HotelService:
    """Routes each logical operation to the provider that serves it."""

    def __init__(
        self,
        router: ProviderRouter,
        registry: PropertyRegistry,
        providers: Dict[ProviderType, HotelProvider]
    ):
        self.router = router
        self.registry = registry
        self.providers = providers
        self.logger = logger.bind(component="hotel_service")

        for provider_type, provider in providers.items():
            for matcher in provider.booking_id_matchers:
                router.register_matcher(matcher, provider_type)

    @classmethod
    def from_config(
        cls,
        config: EywaConfig,
        client: Optional[HotelRunnerHTTPClient] = None
    ) -> 'HotelService':
        """Build the service, its providers and registry from configuration.

        Raises:
            ValueError: If the configuration names an unknown provider
        """
        router = ProviderRouter(ProviderConfig.from_config(config))
        registry = PropertyRegistry()
        client = client or HotelRunnerHTTPClient(
            base_url=config.hotelrunner_base_url,
            timeout=config.hotelrunner_timeout
        )
        service = cls(
            router=router,
            registry=registry,
            providers={
                ProviderType.MOCK: MockProvider(),
                ProviderType.HOTELRUNNER: HotelRunnerProvider(registry, client=client),
            }
        )

        if config.properties_file:
            registrations = load_registrations(config.properties_file)
            for registration in registrations:
                # Explicit property routing from the environment takes precedence
                provider = router.config.properties.get(registration.property_id, ProviderType.HOTELRUNNER)
                service.register_property(registration, provider)
            service.logger.info(
                "Loaded property registrations",
                path=config.properties_file,
                count=len(registrations)
            )

        return service

    def register_property(
        self,
        registration: PropertyRegistration,
        provider: ProviderType = ProviderType.HOTELRUNNER
    ) -> None:
        """Register a property and pin it to its provider in one step."""
        self.registry.register(registration)
        self.router.assign_property(registration.property_id, provider)

    def provider_for(self, provider_type: ProviderType) -> HotelProvider:
        try:
            return self.providers[provider_type]
        except KeyError:
            raise ProviderError(
                f"Provider '{provider_type.value}' is not configured",
                details={"provider": provider_type.value}
            )

    async def search(self, params: SearchParams) -> SearchResult:
        provider_type = self.router.route(Operation.SEARCH, destination=params.destination)
        return await self.provider_for(provider_type).search(params)

    async def availability(self, params: AvailabilityParams) -> AvailabilityResult:
        provider_type = self.router.route(Operation.AVAILABILITY, property_id=params.property_id)
        return await self.provider_for(provider_type).availability(params)

    async def book(self, params: BookingParams) -> Booking:
        provider_type = self.router.route(Operation.BOOK, property_id=params.property_id)
        return await self.provider_for(provider_type).book(params)

    async def retrieve(self, booking_id: str, property_id: Optional[str] = None) -> Booking:
        provider_type = self.router.route_booking(Operation.RETRIEVE, booking_id, property_id)
        return await self.provider_for(provider_type).retrieve(booking_id, property_id=property_id)

    async def cancel(
        self,
        booking_id: str,
        property_id: Optional[str] = None,
        reason: Optional[str] = None
    ) -> CancellationResult:
        provider_type = self.router.route_booking(Operation.CANCEL, booking_id, property_id)
        return await self.provider_for(provider_type).cancel(booking_id, property_id=property_id, reason=reason)

    async def modify(
        self,
        booking_id: str,
        modifications: ModificationRequest,
        property_id: Optional[str] = None
    ) -> ModificationResult:
        provider_type = self.router.route_booking(Operation.MODIFY, booking_id, property_id)
        return await self.provider_for(provider_type).modify(booking_id, modifications, property_id=property_id)

    async def aclose(self) -> None:
        for provider in self.providers.values():
            await provider.aclose()
