"""Unit tests for transport error categories and structured events."""

from __future__ import annotations

import httpx
import pytest

from ghrepo.transport.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from ghrepo.transport.observability import (
    ErrorCategory,
    TransportEventLogger,
    TransportEventType,
    categorize_error,
)
from tests.helpers.femtologging_capture import capture_femto_logs


class TestCategorizeError:
    """Tests for error categorization."""

    @pytest.mark.parametrize("status", [500, 502, 503, 429])
    def test_server_errors_and_rate_limits_are_transient(self, status: int) -> None:
        """5xx and 429 responses are worth retrying later."""
        exc = GitHubAPIError.http_error("GET", "/x", status)
        assert categorize_error(exc) == ErrorCategory.TRANSIENT

    def test_not_found(self) -> None:
        """404 responses get their own category."""
        exc = GitHubAPIError.http_error("GET", "/x", 404)
        assert categorize_error(exc) == ErrorCategory.NOT_FOUND

    def test_other_4xx_is_client_error(self) -> None:
        """Remaining 4xx responses are client errors."""
        exc = GitHubAPIError.http_error("PATCH", "/x", 422, "Validation Failed")
        assert categorize_error(exc) == ErrorCategory.CLIENT_ERROR

    def test_network_error(self) -> None:
        """Requests without a response are network errors."""
        exc = GitHubAPIError.network_error("GET", "/x", httpx.ReadTimeout("slow"))
        assert categorize_error(exc) == ErrorCategory.NETWORK

    def test_shape_error_is_schema_drift(self) -> None:
        """Undecodable bodies indicate schema drift."""
        exc = GitHubResponseShapeError.undecodable("/x", "Expected `str`")
        assert categorize_error(exc) == ErrorCategory.SCHEMA_DRIFT

    def test_config_error(self) -> None:
        """Configuration errors are classified accordingly."""
        assert categorize_error(GitHubConfigError.missing_token()) == (
            ErrorCategory.CONFIGURATION
        )

    def test_unknown_exception(self) -> None:
        """Unknown exception types default to unknown category."""
        assert categorize_error(RuntimeError("?")) == ErrorCategory.UNKNOWN


def test_http_error_message_truncates_body() -> None:
    """Only a preview of large bodies lands in the message."""
    body = "x" * 1000
    exc = GitHubAPIError.http_error("GET", "/x", 500, body)

    assert exc.body == body
    assert len(str(exc)) < len(body)


class TestTransportEventLogger:
    """Tests for structured transport events."""

    def test_request_completed_is_debug(self) -> None:
        """Successful requests log method, URL, status and duration."""
        with capture_femto_logs("ghrepo.transport.observability") as capture:
            TransportEventLogger().log_request_completed("GET", "/repos/o/r", 200, 0.25)

        capture.wait_for_count(1)
        record = capture.records[0]
        assert record.level == "DEBUG"
        assert TransportEventType.REQUEST_COMPLETED in record.message
        assert "status=200" in record.message
        assert "duration_seconds=0.250" in record.message

    def test_request_failed_is_error_with_category(self) -> None:
        """Failures carry the error type, category and exception."""
        error = GitHubAPIError.http_error("DELETE", "/repos/o/r", 403)
        with capture_femto_logs("ghrepo.transport.observability") as capture:
            TransportEventLogger().log_request_failed("DELETE", "/repos/o/r", error)

        capture.wait_for_count(1)
        record = capture.records[0]
        assert record.level == "ERROR"
        assert TransportEventType.REQUEST_FAILED in record.message
        assert "status=403" in record.message
        assert "error_type=GitHubAPIError" in record.message
        assert "error_category=client_error" in record.message
        assert record.exc_info is not None

    def test_page_fetched_reports_item_count(self) -> None:
        """Page events report the item count and whether more follow."""
        with capture_femto_logs("ghrepo.transport.observability") as capture:
            TransportEventLogger().log_page_fetched(
                "/repos/o/r/commits", 30, has_next=True
            )

        capture.wait_for_count(1)
        record = capture.records[0]
        assert TransportEventType.PAGE_FETCHED in record.message
        assert "items=30" in record.message
        assert "has_next=True" in record.message
