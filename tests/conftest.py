"""
Test configuration and fixtures.
"""

import httpx
import pytest
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Configure test environment variables
os.environ.setdefault('EYWA_DEFAULT_PROVIDER', 'mock')
os.environ.setdefault('HOTELRUNNER_API_BASE_URL', 'https://hotelrunner.test/api/v2/apps')
os.environ.setdefault('HOTELRUNNER_API_TIMEOUT', '5')
os.environ.setdefault('EYWA_REJECT_PAST_CHECKIN', 'false')

from config import EywaConfig  # noqa: E402
from models import Coordinates  # noqa: E402
from providers import (  # noqa: E402
    HotelService,
    PropertyLocation,
    PropertyRegistration,
    PropertyRegistry,
    ProviderType
)
from providers.hotelrunner import HotelRunnerHTTPClient  # noqa: E402


@pytest.fixture
def test_config():
    """Provide test configuration."""
    return EywaConfig(
        hotelrunner_base_url='https://hotelrunner.test/api/v2/apps',
        hotelrunner_timeout=5
    )


@pytest.fixture
def sample_registration():
    """A HotelRunner property registered under account 12345."""
    return PropertyRegistration(
        property_id="hr_cappadocia_cave",
        account_id="12345",
        token="secret-token",
        name="Cappadocia Cave Suites",
        currency="TRY",
        timezone="Europe/Istanbul",
        location=PropertyLocation(
            city="Goreme",
            country="Turkey",
            coordinates=Coordinates(lat=38.6431, lng=34.8289)
        )
    )


@pytest.fixture
def registry(sample_registration):
    registry = PropertyRegistry()
    registry.register(sample_registration)
    return registry


@pytest.fixture
def sample_hr_rooms():
    """Room catalog as returned by HotelRunner ``/rooms``."""
    return [
        {
            "inv_code": "HR:MASTER",
            "rate_code": "BAR",
            "name": "Master Plan",
            "sell_online": True,
            "is_master": True,
            "room_capacity": 2,
            "adult_capacity": 2
        },
        {
            "inv_code": "HR:CAVE_DBL",
            "rate_code": "BAR",
            "name": "Cave Double Room",
            "description": "Carved stone room with valley view",
            "sell_online": True,
            "is_master": False,
            "room_capacity": 2,
            "adult_capacity": 2
        },
        {
            "inv_code": "HR:CAVE_DBL",
            "rate_code": "NR:BAR",
            "name": "Cave Double Room",
            "sell_online": True,
            "is_master": False,
            "room_capacity": 2,
            "adult_capacity": 2
        },
        {
            "inv_code": "HR:OFFLINE",
            "rate_code": "BAR",
            "name": "Offline Room",
            "sell_online": False,
            "is_master": False,
            "room_capacity": 4,
            "adult_capacity": 3
        }
    ]


@pytest.fixture
def sample_hr_reservation():
    """Reservation record as returned by HotelRunner ``/reservations``."""
    return {
        "hr_number": "R123456789",
        "provider_number": "BDC-99887766",
        "state": "confirmed",
        "checkin_date": "2026-05-10",
        "checkout_date": "2026-05-13",
        "guest": "Ayse Yilmaz",
        "address": {"email": "ayse@example.com"},
        "total": 450.0,
        "paid_amount": 150.0,
        "currency": "EUR",
        "completed_at": "2026-04-01T09:00:00Z",
        "updated_at": "2026-04-02T10:00:00Z",
        "rooms": [
            {"name": "Cave Double Room", "total_guest": 2, "non_refundable": False}
        ]
    }


@pytest.fixture
def hotelrunner_transport(sample_hr_rooms, sample_hr_reservation):
    """Mock HotelRunner API serving the sample room catalog and reservation."""
    def handler(request):
        if request.url.path.endswith("/rooms"):
            return httpx.Response(200, json={"rooms": sample_hr_rooms})
        number = request.url.params.get("reservation_number")
        found = [sample_hr_reservation] if number == sample_hr_reservation["hr_number"] else []
        return httpx.Response(200, json={"reservations": found})

    return httpx.MockTransport(handler)


@pytest.fixture
def hotel_service(test_config, sample_registration, hotelrunner_transport):
    """Service with both providers; the sample property is pinned to HotelRunner."""
    client = HotelRunnerHTTPClient(
        base_url=test_config.hotelrunner_base_url,
        transport=hotelrunner_transport
    )
    service = HotelService.from_config(test_config, client=client)
    service.register_property(sample_registration, ProviderType.HOTELRUNNER)
    return service
