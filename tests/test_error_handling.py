"""Tests for error conversion and the error handling service."""

from unittest.mock import patch

import httpx
import pytest
from hypothesis import given, strategies as st

from rawg_compare.services.errors import (
    AppError,
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    describe_http_error,
    get_error_service,
)


URL = "https://api.rawg.io/api/games"


def status_error(status_code: int, params: dict[str, str] | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL, params=params)
    response = httpx.Response(status_code, request=request)
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        return e
    raise AssertionError(f"{status_code} did not raise")


class TestErrorConversion:
    """Raw exceptions become the two recoverable fetch failures."""

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            httpx.RemoteProtocolError("peer closed connection"),
        ],
    )
    def test_transport_errors_become_network_errors(self, error: Exception) -> None:
        converted = ErrorHandlingService().convert_error(error, {"url": URL})

        assert isinstance(converted, NetworkError)
        assert converted.category is ErrorCategory.NETWORK
        assert converted.recoverable
        assert converted.url == URL
        assert converted.original_error is error

    @pytest.mark.parametrize("status_code", [401, 404, 429, 500, 503])
    def test_status_errors_keep_status_code(self, status_code: int) -> None:
        converted = ErrorHandlingService().convert_error(status_error(status_code))

        assert isinstance(converted, NetworkError)
        assert converted.status_code == status_code
        assert f"Status: {status_code}" in (converted.technical_details or "")

    def test_unauthorized_suggests_checking_key(self) -> None:
        converted = ErrorHandlingService().convert_error(status_error(401))
        assert any("RAWG_API_KEY" in action for action in converted.suggested_actions)

    def test_app_errors_pass_through(self) -> None:
        error = DecodeError("bad body")
        assert ErrorHandlingService().convert_error(error) is error

    def test_unknown_errors_are_unexpected(self) -> None:
        converted = ErrorHandlingService().convert_error(RuntimeError("boom"))

        assert type(converted) is AppError
        assert converted.category is ErrorCategory.UNEXPECTED
        assert converted.technical_details == "RuntimeError: boom"


class TestErrorHandlingService:
    """Tests for logging what went wrong."""

    def test_handle_error_logs_technical_details(self) -> None:
        service = ErrorHandlingService()

        with patch("rawg_compare.services.errors.log") as mock_logger:
            friendly = service.handle_error(
                httpx.ConnectError("connection refused"),
                operation="find_game",
                component="CompareApp",
                context={"url": URL},
            )

        assert friendly.category is ErrorCategory.NETWORK
        assert mock_logger.error.called
        kwargs = mock_logger.error.call_args.kwargs
        assert kwargs["operation"] == "find_game"
        assert kwargs["component"] == "CompareApp"
        assert "ConnectError" in kwargs["technical_details"]

    def test_decode_errors_logged_as_warnings(self) -> None:
        service = ErrorHandlingService()

        with patch("rawg_compare.services.errors.log") as mock_logger:
            service.handle_error(DecodeError("bad body"), operation="find_game", component="CompareApp")

        assert mock_logger.warning.called
        assert not mock_logger.error.called

    def test_status_error_details_omit_query_string(self) -> None:
        error = status_error(401, params={"key": "secret-key", "search": "portal"})
        service = ErrorHandlingService()

        with patch("rawg_compare.services.errors.log") as mock_logger:
            friendly = service.handle_error(error, operation="find_game", component="CompareApp", context={"url": URL})

        assert "secret-key" not in (friendly.technical_details or "")
        assert "secret-key" not in str(mock_logger.mock_calls)
        assert "401 Unauthorized" in (friendly.technical_details or "")

    def test_global_service_is_shared(self) -> None:
        assert get_error_service() is get_error_service()


class TestConfigurationError:
    """The missing credential is the only fatal error."""

    def test_is_critical_and_not_recoverable(self) -> None:
        error = ConfigurationError("RAWG_API_KEY not found", setting="RAWG_API_KEY")

        assert error.severity is ErrorSeverity.CRITICAL
        assert not error.recoverable
        assert any("RAWG_API_KEY" in action for action in error.suggested_actions)


class TestDescribeHttpError:
    """Error descriptions never carry the request's query string."""

    def test_status_error(self) -> None:
        error = status_error(503, params={"key": "secret-key"})
        assert describe_http_error(error) == "HTTPStatusError: 503 Service Unavailable"

    def test_transport_error_with_url(self) -> None:
        error = httpx.ConnectError(f"cannot connect to {URL}?key=secret-key&search=halo")
        assert describe_http_error(error) == f"ConnectError: cannot connect to {URL}"

    def test_transport_error_without_message(self) -> None:
        assert describe_http_error(httpx.ReadTimeout("")) == "ReadTimeout"

    @given(st.text(min_size=1, max_size=40, alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"))))
    def test_any_key_is_dropped(self, api_key: str) -> None:
        error = httpx.ConnectError(f"failed: {URL}?key={api_key}")
        assert describe_http_error(error) == f"ConnectError: failed: {URL}"
