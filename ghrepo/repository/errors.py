"""Errors raised by repository operations."""

from __future__ import annotations


class RepositoryError(RuntimeError):
    """Base class for repository facade errors."""


class NotAuthorizedForOwnerError(RepositoryError):
    """Raised before sending a request that only the owner may make."""

    def __init__(self, owner: str, login: str) -> None:
        """Initialise with the repository owner and the authenticated login."""
        self.owner = owner
        self.login = login
        super().__init__(
            f"Operation not applicable to a repository owned by someone else: "
            f"{owner} (authenticated as {login})"
        )


class ForkNotVisibleError(RepositoryError):
    """Raised when a fork never showed up in the target organisation."""

    def __init__(self, owner: str, name: str, organization: str, attempts: int) -> None:
        """Initialise with the forked repository and target organisation."""
        self.owner = owner
        self.name = name
        self.organization = organization
        self.attempts = attempts
        super().__init__(
            f"Repository:{owner}:{name} was forked into {organization} but the "
            f"new repository was not visible after {attempts} lookups"
        )


class ForkPollInterruptedError(InterruptedError):
    """Raised when waiting for a fork is cancelled between lookups."""

    def __init__(self, organization: str, name: str, attempt: int) -> None:
        """Initialise with the poll target and the last attempt made."""
        self.organization = organization
        self.name = name
        self.attempt = attempt
        super().__init__(
            f"Interrupted while waiting for {organization}/{name} "
            f"after attempt {attempt}"
        )


class PostCommitHookError(RepositoryError):
    """Raised by the legacy post-commit hook view when GitHub calls fail."""

    @classmethod
    def retrieving(cls) -> PostCommitHookError:
        """Return an error for a failed hook listing."""
        return cls("Failed to retrieve post-commit hooks")

    @classmethod
    def updating(cls) -> PostCommitHookError:
        """Return an error for a failed hook creation or deletion."""
        return cls("Failed to update post-commit hooks")
