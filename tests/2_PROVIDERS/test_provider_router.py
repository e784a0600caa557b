"""
Tests for provider routing.
"""

import pytest

from config import EywaConfig
from providers import (
    BookingIdMatcher,
    HotelProvider,
    MockProvider,
    Operation,
    ProviderConfig,
    ProviderRouter,
    ProviderType
)
from providers.hotelrunner import HotelRunnerProvider


class TestProviderRouter:
    """Test suite for ProviderRouter."""

    @pytest.fixture
    def router(self):
        router = ProviderRouter(ProviderConfig(
            default=ProviderType.MOCK,
            destinations=[("cappadocia", ProviderType.HOTELRUNNER), ("goreme", ProviderType.MOCK)]
        ))
        router.register_matcher(BookingIdMatcher(r"^(EYW-|HY-)", priority=0), ProviderType.MOCK)
        router.register_matcher(BookingIdMatcher(r"^R\d{9}$", priority=10), ProviderType.HOTELRUNNER)
        return router

    def test_default_when_nothing_matches(self, router):
        assert router.route(Operation.SEARCH, destination="Istanbul") == ProviderType.MOCK
        assert router.route(Operation.SEARCH) == ProviderType.MOCK

    def test_destination_rule_is_case_insensitive_substring(self, router):
        assert router.route(Operation.SEARCH, destination="Goreme, CAPPADOCIA") == ProviderType.HOTELRUNNER

    def test_first_destination_rule_wins(self):
        router = ProviderRouter(ProviderConfig(
            destinations=[("istanbul", ProviderType.HOTELRUNNER), ("istan", ProviderType.MOCK)]
        ))

        assert router.route(Operation.SEARCH, destination="Istanbul") == ProviderType.HOTELRUNNER

    def test_property_assignment_beats_destination(self, router):
        router.assign_property("prop_x", ProviderType.MOCK)

        provider = router.route(Operation.AVAILABILITY, destination="Cappadocia", property_id="prop_x")

        assert provider == ProviderType.MOCK

    def test_unassigned_property_falls_back_to_default(self, router):
        assert router.route(Operation.AVAILABILITY, property_id="unknown") == ProviderType.MOCK

    def test_add_destination_rule(self, router):
        router.add_destination_rule("bodrum", ProviderType.HOTELRUNNER)

        assert router.route(Operation.SEARCH, destination="Bodrum") == ProviderType.HOTELRUNNER

    def test_route_booking_by_identifier_format(self, router):
        assert router.route_booking(Operation.RETRIEVE, "R123456789") == ProviderType.HOTELRUNNER
        assert router.route_booking(Operation.RETRIEVE, "EYW-2026-ABC123") == ProviderType.MOCK
        assert router.route_booking(Operation.CANCEL, "R12345") == ProviderType.MOCK

    def test_route_booking_prefers_property_assignment(self, router):
        router.assign_property("hr_prop", ProviderType.HOTELRUNNER)

        assert router.route_booking(Operation.RETRIEVE, "EYW-2026-ABC123", "hr_prop") == ProviderType.HOTELRUNNER

    def test_higher_priority_matcher_wins(self):
        router = ProviderRouter()
        router.register_matcher(BookingIdMatcher(r"^R", priority=0), ProviderType.MOCK)
        router.register_matcher(BookingIdMatcher(r"^R\d+$", priority=5), ProviderType.HOTELRUNNER)

        assert router.route_booking(Operation.MODIFY, "R42") == ProviderType.HOTELRUNNER

    def test_config_from_environment_values(self):
        config = EywaConfig(
            default_provider="hotelrunner",
            destination_providers=[("istanbul", "mock")],
            property_providers={"p1": "HotelRunner"}
        )

        provider_config = ProviderConfig.from_config(config)

        assert provider_config.default == ProviderType.HOTELRUNNER
        assert provider_config.destinations == [("istanbul", ProviderType.MOCK)]
        assert provider_config.properties == {"p1": ProviderType.HOTELRUNNER}

    def test_unknown_provider_name_rejected(self):
        with pytest.raises(ValueError):
            ProviderConfig.from_config(EywaConfig(default_provider="expedia"))


class TestBookingIdMatchers:
    """Test suite for the matchers each provider declares."""

    def test_declared_matchers_are_immutable(self):
        assert HotelProvider.booking_id_matchers == ()
        assert isinstance(MockProvider.booking_id_matchers, tuple)
        assert isinstance(HotelRunnerProvider.booking_id_matchers, tuple)

    def test_providers_do_not_share_matchers(self):
        mock_patterns = [m.pattern for m in MockProvider.booking_id_matchers]
        hotelrunner_patterns = [m.pattern for m in HotelRunnerProvider.booking_id_matchers]

        assert mock_patterns == [r"^(EYW-|HY-)"]
        assert hotelrunner_patterns == [r"^R\d{9}$"]
