"""Unit tests for the Braiins error hierarchy."""

import pytest

from braiins_mcp.api.exceptions import (
    BraiinsAPIError,
    BraiinsError,
    ConfigError,
    ErrorCode,
    NetworkError,
    RequestTimeoutError,
    ValidationError,
    is_braiins_error,
    to_braiins_error,
)


class TestBraiinsError:
    """Test suite for the base error."""

    def test_defaults(self):
        error = BraiinsError("boom")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.status_code == 500
        assert str(error) == "boom"

    def test_to_dict_without_details(self):
        assert BraiinsError("boom").to_dict() == {
            "error": True,
            "code": "INTERNAL_ERROR",
            "message": "boom",
        }

    def test_to_dict_with_details(self):
        error = ValidationError("bad input", {"field": "workerId"})

        assert error.to_dict() == {
            "error": True,
            "code": "VALIDATION_ERROR",
            "message": "bad input",
            "details": {"field": "workerId"},
        }


class TestSubclasses:
    """Test suite for typed error subclasses."""

    @pytest.mark.parametrize(
        "error,code,status",
        [
            (ValidationError("x"), ErrorCode.VALIDATION_ERROR, 400),
            (NetworkError("x"), ErrorCode.NETWORK_ERROR, 503),
            (RequestTimeoutError("x"), ErrorCode.TIMEOUT_ERROR, 504),
            (ConfigError("x"), ErrorCode.CONFIG_ERROR, 500),
        ],
    )
    def test_codes_and_statuses(self, error, code, status):
        assert error.code == code
        assert error.status_code == status

    def test_timeout_is_network_error(self):
        assert isinstance(RequestTimeoutError("x"), NetworkError)

    def test_timeout_payload(self):
        payload = RequestTimeoutError("slow", {"url": "/pool/stats"}).to_dict()

        assert payload == {
            "error": True,
            "code": "TIMEOUT_ERROR",
            "message": "slow",
            "details": {"url": "/pool/stats"},
        }

    def test_network_error_accepts_code_and_status(self):
        error = NetworkError("x", code=ErrorCode.TIMEOUT_ERROR, status_code=504)

        assert error.code == ErrorCode.TIMEOUT_ERROR
        assert error.status_code == 504


class TestFromHttpStatus:
    """Test suite for BraiinsAPIError.from_http_status."""

    @pytest.mark.parametrize(
        "status,code",
        [
            (400, ErrorCode.BAD_REQUEST),
            (401, ErrorCode.UNAUTHORIZED),
            (403, ErrorCode.FORBIDDEN),
            (404, ErrorCode.NOT_FOUND),
            (429, ErrorCode.RATE_LIMITED),
            (500, ErrorCode.API_ERROR),
            (502, ErrorCode.API_ERROR),
            (503, ErrorCode.API_ERROR),
            (504, ErrorCode.TIMEOUT_ERROR),
        ],
    )
    def test_status_mapping(self, status, code):
        error = BraiinsAPIError.from_http_status(status)

        assert error.code == code
        assert error.original_status == status
        assert error.status_code == status

    def test_unknown_status(self):
        error = BraiinsAPIError.from_http_status(418)

        assert error.code == ErrorCode.API_ERROR
        assert "418" in error.message

    def test_upstream_message_overrides_default(self):
        error = BraiinsAPIError.from_http_status(401, "Token expired")

        assert error.message == "Token expired"

    def test_details_kept(self):
        error = BraiinsAPIError.from_http_status(404, details={"url": "/workers/x"})

        assert error.details == {"url": "/workers/x"}


class TestHelpers:
    """Test suite for is_braiins_error and to_braiins_error."""

    def test_is_braiins_error(self):
        assert is_braiins_error(NetworkError("x")) is True
        assert is_braiins_error(ValueError("x")) is False

    def test_braiins_error_passes_through(self):
        error = NetworkError("down")

        assert to_braiins_error(error) is error

    def test_foreign_error_wrapped(self):
        error = to_braiins_error(KeyError("missing"))

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {"original_error": "KeyError"}

    def test_empty_message_gets_default(self):
        error = to_braiins_error(RuntimeError())

        assert error.message == "An unknown error occurred"
