"""Errors raised by the GitHub REST transport."""

from __future__ import annotations

_BODY_PREVIEW_LIMIT = 200


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns a non-2xx response or the request fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialise with a message, optional HTTP status code and raw body."""
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        """Return True when GitHub answered 404."""
        return self.status_code == 404  # noqa: PLR2004

    @classmethod
    def http_error(
        cls, method: str, url: str, status_code: int, body: str = ""
    ) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        preview = body[:_BODY_PREVIEW_LIMIT]
        return cls(
            f"GitHub {method} {url} returned HTTP {status_code}: {preview}",
            status_code=status_code,
            body=body,
        )

    @classmethod
    def network_error(cls, method: str, url: str, exc: BaseException) -> GitHubAPIError:
        """Return an error for requests that never produced a response."""
        return cls(f"GitHub {method} {url} failed: {exc}")


class GitHubResponseShapeError(RuntimeError):
    """Raised when a response body does not decode into the expected record."""

    @classmethod
    def undecodable(cls, url: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a body that failed typed decoding."""
        return cls(f"GitHub response from {url} has unexpected shape: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when transport configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("GHREPO_GITHUB_TOKEN is required for GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_setting(cls, name: str, value: str) -> GitHubConfigError:
        """Return an error for an environment setting that cannot be parsed."""
        return cls(f"Invalid value for {name}: {value!r}")
