"""
Tests for the exception hierarchy
"""
import pytest

from tezwallet.exceptions import (
    APIError,
    DivisionByZeroError,
    InvalidNetworkConfigError,
    InvalidTokenConfigurationError,
    MalformedAmountError,
    RateLimitError,
    TezWalletError,
)


class TestHierarchy:
    """Tests for base classes and payloads."""

    @pytest.mark.parametrize(
        "exc,builtin",
        [
            (MalformedAmountError("bad"), ValueError),
            (DivisionByZeroError("zero"), ZeroDivisionError),
            (InvalidTokenConfigurationError("bad"), ValueError),
            (InvalidNetworkConfigError("bad"), ValueError),
        ],
    )
    def test_input_errors_match_builtins(self, exc, builtin):
        """Input errors should also be catchable as the matching builtin."""
        assert isinstance(exc, TezWalletError)
        assert isinstance(exc, builtin)

    def test_to_dict(self):
        """Should expose code, message and details."""
        exc = InvalidNetworkConfigError("node_url is not a valid URL", field="node_url", value="x")
        assert exc.to_dict() == {
            "error": "INVALID_NETWORK_CONFIG",
            "message": "node_url is not a valid URL",
            "details": {"field": "node_url", "value": "x"},
        }
        assert str(exc) == "[INVALID_NETWORK_CONFIG] node_url is not a valid URL"

    def test_to_dict_without_details(self):
        """Should omit empty details."""
        assert DivisionByZeroError("zero").to_dict() == {
            "error": "DIVISION_BY_ZERO",
            "message": "zero",
        }


class TestAPIError:
    """Tests for building APIError from service responses."""

    def test_node_error_list(self):
        """Should keep node RPC error lists as details."""
        body = [{"kind": "temporary", "id": "failure"}]
        exc = APIError.from_response(500, body)
        assert exc.error_code == "RPC_ERROR"
        assert exc.details == {"errors": body}

    def test_nested_error_object(self):
        """Should read code and message from an error object."""
        exc = APIError.from_response(404, {"error": {"code": "NOT_FOUND", "message": "no account"}})
        assert exc.status_code == 404
        assert exc.error_code == "NOT_FOUND"
        assert exc.message == "no account"

    def test_detail_string(self):
        """Should use plain detail strings as the message."""
        exc = APIError.from_response(502, {"detail": "Bad Gateway"})
        assert exc.message == "Bad Gateway"
        assert exc.error_code == "API_ERROR"

    def test_rate_limit(self):
        """Should carry the retry delay."""
        exc = RateLimitError("slow down", retry_after=3)
        assert isinstance(exc, APIError)
        assert exc.status_code == 429
        assert exc.retry_after == 3
        assert exc.error_code == "RATE_LIMIT_EXCEEDED"

    @pytest.mark.parametrize("body", [{"error": None}, {"error": 42}, {"detail": ["x"]}])
    def test_unstructured_error_values(self, body):
        """Should fall back to the raw body when the error value is not an object."""
        exc = APIError.from_response(500, body)
        assert exc.status_code == 500
        assert exc.message == str(body)

    def test_null_message(self):
        """Should not carry a null message."""
        exc = APIError.from_response(400, {"error": {"code": "BAD", "message": None}})
        assert exc.message == "Unknown error"
        assert exc.error_code == "BAD"
