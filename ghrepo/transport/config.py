"""Configuration for the GitHub REST transport.

Usage
-----
>>> config = GitHubTransportConfig(token="ghp_example")
>>> config.base_url
'https://api.github.com'

Or load from the environment (``GHREPO_GITHUB_TOKEN`` is required):

>>> config = GitHubTransportConfig.from_env()  # doctest: +SKIP

"""

from __future__ import annotations

import dataclasses
import math
import os

from ghrepo.common.env import (
    parse_non_negative_float,
    parse_positive_int,
    read_str,
)

from .errors import GitHubConfigError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_FORK_POLL_ATTEMPTS = 10
DEFAULT_FORK_POLL_DELAY_S = 3.0
# GitHub caps per_page at 100 for every list endpoint.
MAX_PAGE_SIZE = 100


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubTransportConfig:
    """Settings for :class:`~ghrepo.transport.client.GitHubTransport`.

    Attributes
    ----------
    token
        Bearer token sent with every request.
    base_url
        REST API root, without a trailing slash.
    timeout_s
        Connection and read timeout in seconds.
    user_agent
        ``User-Agent`` header; GitHub rejects requests without one.
    page_size
        ``per_page`` value for the first request of a paged endpoint.
    login
        Authenticated login, when known up front. When ``None`` the transport
        asks ``GET /user`` the first time the identity is needed.
    fork_poll_attempts
        Lookups made after a fork-to-organisation request before giving up.
    fork_poll_delay_s
        Seconds between two of those lookups.

    """

    token: str
    base_url: str = DEFAULT_API_URL
    timeout_s: float = 20.0
    user_agent: str = "ghrepo/0.1"
    page_size: int = 30
    login: str | None = None
    fork_poll_attempts: int = DEFAULT_FORK_POLL_ATTEMPTS
    fork_poll_delay_s: float = DEFAULT_FORK_POLL_DELAY_S

    def __post_init__(self) -> None:
        """Reject page sizes GitHub would clamp and unusable poll budgets."""
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise GitHubConfigError.invalid_setting("page_size", str(self.page_size))
        if self.fork_poll_attempts < 1:
            raise GitHubConfigError.invalid_setting(
                "fork_poll_attempts", str(self.fork_poll_attempts)
            )
        if not (math.isfinite(self.fork_poll_delay_s) and self.fork_poll_delay_s >= 0):
            raise GitHubConfigError.invalid_setting(
                "fork_poll_delay_s", str(self.fork_poll_delay_s)
            )

    @classmethod
    def from_env(cls) -> GitHubTransportConfig:
        """Build configuration from ``GHREPO_*`` environment variables.

        Reads ``GHREPO_GITHUB_TOKEN`` (required), ``GHREPO_GITHUB_API_URL``,
        ``GHREPO_GITHUB_LOGIN``, ``GHREPO_PAGE_SIZE``, ``GHREPO_HTTP_TIMEOUT``,
        ``GHREPO_FORK_POLL_ATTEMPTS`` and ``GHREPO_FORK_POLL_DELAY``.
        """
        token = os.environ.get("GHREPO_GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()
        try:
            page_size = parse_positive_int("GHREPO_PAGE_SIZE", 30)
            timeout_s = parse_non_negative_float("GHREPO_HTTP_TIMEOUT", 20.0)
            fork_poll_attempts = parse_positive_int(
                "GHREPO_FORK_POLL_ATTEMPTS", DEFAULT_FORK_POLL_ATTEMPTS
            )
            fork_poll_delay_s = parse_non_negative_float(
                "GHREPO_FORK_POLL_DELAY", DEFAULT_FORK_POLL_DELAY_S
            )
        except ValueError as exc:
            raise GitHubConfigError(str(exc)) from exc
        base_url = read_str("GHREPO_GITHUB_API_URL", DEFAULT_API_URL)
        return cls(
            token=token,
            base_url=(base_url or DEFAULT_API_URL).rstrip("/"),
            timeout_s=timeout_s,
            page_size=page_size,
            login=read_str("GHREPO_GITHUB_LOGIN"),
            fork_poll_attempts=fork_poll_attempts,
            fork_poll_delay_s=fork_poll_delay_s,
        )
