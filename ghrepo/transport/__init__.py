"""GitHub REST transport: HTTP session, decoding, pagination links, paths."""

from __future__ import annotations

from .client import GitHubTransport
from .config import GitHubTransportConfig
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .observability import (
    ErrorCategory,
    TransportEventLogger,
    TransportEventType,
    categorize_error,
)
from .paths import make_url, repo_url

__all__ = [
    "ErrorCategory",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubResponseShapeError",
    "GitHubTransport",
    "GitHubTransportConfig",
    "TransportEventLogger",
    "TransportEventType",
    "categorize_error",
    "make_url",
    "repo_url",
]
