"""
Tests for the error taxonomy, argument helpers and environment configuration.
"""

import pytest
from datetime import date

from config import (
    APIError,
    ErrorCode,
    ErrorSuggestion,
    EywaConfig,
    EywaError,
    ProviderError,
    RateLimitExceededError,
    ValidationError,
    ensure_not_past,
    parse_date,
    parse_mapping,
    parse_positive_int,
    validate_required_fields
)


class TestErrorEnvelope:
    """Test suite for canonical error serialization."""

    def test_envelope_shape(self):
        error = EywaError(
            "Booking not found: X",
            error_code=ErrorCode.BOOKING_NOT_FOUND,
            details={"booking_id": "X"},
            suggestions=[ErrorSuggestion(action="Search again", tool="hotel/search")]
        )

        envelope = error.to_dict()

        assert envelope["status"] == "error"
        assert envelope["error"]["code"] == "BOOKING_NOT_FOUND"
        assert envelope["error"]["message"] == "Booking not found: X"
        assert envelope["error"]["details"] == {"booking_id": "X"}
        assert envelope["error"]["suggestions"] == [{"action": "Search again", "tool": "hotel/search"}]

    def test_empty_details_and_suggestions_are_omitted(self):
        envelope = EywaError("boom").to_dict()

        assert envelope["error"] == {"code": "INTERNAL_ERROR", "message": "boom"}

    def test_default_codes(self):
        assert ValidationError("x").error_code == ErrorCode.INVALID_REQUEST
        assert ProviderError("x").error_code == ErrorCode.PROVIDER_ERROR
        assert APIError("x", status_code=500, body="oops").error_code == ErrorCode.PROVIDER_ERROR

    def test_api_error_keeps_status_and_body(self):
        error = APIError("503 - down", status_code=503, body="down")

        assert error.details == {"status_code": 503, "body": "down"}

    def test_rate_limit_error_reason(self):
        error = RateLimitExceededError("12345")

        assert isinstance(error, ProviderError)
        assert error.details["reason"] == "RATE_LIMIT_EXCEEDED"
        assert error.details["account_id"] == "12345"
        assert "RATE_LIMIT_EXCEEDED" in error.message


class TestArgumentHelpers:
    """Test suite for argument validation helpers."""

    def test_missing_fields_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_required_fields({"a": 1, "b": "", "c": None}, ["a", "b", "c", "d"])

        assert exc_info.value.error_code == ErrorCode.INVALID_REQUEST
        assert exc_info.value.details["missing_fields"] == ["b", "c", "d"]

    def test_parse_date_accepts_date_and_datetime(self):
        assert parse_date("2026-03-15") == "2026-03-15"
        assert parse_date(" 2026-03-15T14:00:00 ") == "2026-03-15T14:00:00"

    @pytest.mark.parametrize("value", ["15/03/2026", "2026-13-01", "", 20260315, None])
    def test_parse_date_rejects_malformed(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_date(value, "check_in")

        assert exc_info.value.error_code == ErrorCode.INVALID_DATES

    def test_parse_positive_int(self):
        assert parse_positive_int(2, "guests") == 2
        assert parse_positive_int("3", "guests") == 3

    @pytest.mark.parametrize("value", [0, -1, 1.5, True, "two"])
    def test_parse_positive_int_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_positive_int(value, "guests", ErrorCode.INVALID_GUESTS)

        assert exc_info.value.error_code == ErrorCode.INVALID_GUESTS

    def test_ensure_not_past(self):
        ensure_not_past("2026-03-15", today=date(2026, 3, 15))

        with pytest.raises(ValidationError) as exc_info:
            ensure_not_past("2026-03-14", today=date(2026, 3, 15))
        assert exc_info.value.error_code == ErrorCode.INVALID_DATES


class TestEywaConfig:
    """Test suite for environment configuration."""

    def test_parse_mapping_preserves_order(self):
        assert parse_mapping("istanbul=mock, cappadocia=hotelrunner") == [
            ("istanbul", "mock"),
            ("cappadocia", "hotelrunner")
        ]
        assert parse_mapping(None) == []

    def test_parse_mapping_rejects_bad_entry(self):
        with pytest.raises(ValueError):
            parse_mapping("istanbul")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EYWA_DEFAULT_PROVIDER", "HotelRunner")
        monkeypatch.setenv("EYWA_DESTINATION_PROVIDERS", "goreme=hotelrunner")
        monkeypatch.setenv("EYWA_PROPERTY_PROVIDERS", "prop_a=mock")
        monkeypatch.setenv("EYWA_PROPERTIES_FILE", "/tmp/properties.json")
        monkeypatch.setenv("HOTELRUNNER_API_TIMEOUT", "12")
        monkeypatch.setenv("EYWA_REJECT_PAST_CHECKIN", "yes")
        monkeypatch.setenv("EYWA_DEBUG", "0")

        config = EywaConfig.from_env()

        assert config.default_provider == "hotelrunner"
        assert config.destination_providers == [("goreme", "hotelrunner")]
        assert config.property_providers == {"prop_a": "mock"}
        assert config.properties_file == "/tmp/properties.json"
        assert config.hotelrunner_timeout == 12
        assert config.reject_past_checkin is True
        assert config.debug is False
