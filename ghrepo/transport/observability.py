"""Structured log events and error categories for GitHub transport calls.

Every event is a single femtologging line prefixed with its event type, so
log aggregators can filter on ``[transport.request.failed]`` and friends.
"""

from __future__ import annotations

import enum

from ghrepo.logging import get_logger, log_debug, log_error

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError

logger = get_logger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500
_HTTP_TOO_MANY_REQUESTS = 429


class TransportEventType(enum.StrEnum):
    """Structured log event types for transport observability."""

    REQUEST_COMPLETED = "transport.request.completed"
    REQUEST_FAILED = "transport.request.failed"
    PAGE_FETCHED = "transport.page.fetched"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in logs and alerts."""

    TRANSIENT = "transient"
    NETWORK = "network"
    NOT_FOUND = "not_found"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


def _categorize_api_error(exc: GitHubAPIError) -> ErrorCategory:
    status = exc.status_code
    if status is None:
        return ErrorCategory.NETWORK
    if status >= _HTTP_SERVER_ERROR_THRESHOLD or status == _HTTP_TOO_MANY_REQUESTS:
        return ErrorCategory.TRANSIENT
    if exc.is_not_found:
        return ErrorCategory.NOT_FOUND
    return ErrorCategory.CLIENT_ERROR


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception raised by a transport call."""
    if isinstance(exc, GitHubAPIError):
        return _categorize_api_error(exc)
    if isinstance(exc, GitHubResponseShapeError):
        return ErrorCategory.SCHEMA_DRIFT
    if isinstance(exc, GitHubConfigError):
        return ErrorCategory.CONFIGURATION
    return ErrorCategory.UNKNOWN


class TransportEventLogger:
    """Emit structured transport events via femtologging.

    Successful requests and pages are logged at DEBUG, failures at ERROR.
    """

    def log_request_completed(
        self, method: str, url: str, status_code: int, duration_s: float
    ) -> None:
        """Log a request that produced a 2xx response."""
        log_debug(
            logger,
            "[%s] method=%s url=%s status=%d duration_seconds=%.3f",
            TransportEventType.REQUEST_COMPLETED,
            method,
            url,
            status_code,
            duration_s,
        )

    def log_request_failed(self, method: str, url: str, error: BaseException) -> None:
        """Log a failed request with its error category."""
        status = getattr(error, "status_code", None)
        log_error(
            logger,
            "[%s] method=%s url=%s status=%s error_type=%s error_category=%s",
            TransportEventType.REQUEST_FAILED,
            method,
            url,
            status,
            type(error).__name__,
            categorize_error(error),
            exc_info=error,
        )

    def log_page_fetched(self, url: str, item_count: int, *, has_next: bool) -> None:
        """Log one page of a paginated endpoint."""
        log_debug(
            logger,
            "[%s] url=%s items=%d has_next=%s",
            TransportEventType.PAGE_FETCHED,
            url,
            item_count,
            has_next,
        )
