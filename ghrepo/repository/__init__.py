"""Repository facade, organisations and fork polling."""

from __future__ import annotations

from .config import ForkPollConfig
from .errors import (
    ForkNotVisibleError,
    ForkPollInterruptedError,
    NotAuthorizedForOwnerError,
    PostCommitHookError,
    RepositoryError,
)
from .facade import Repository, RepositoryEventType, find_repository
from .forking import ForkEventType, poll_for_fork
from .legacy_hooks import PostCommitHooks
from .organization import Organization

__all__ = [
    "ForkEventType",
    "ForkNotVisibleError",
    "ForkPollConfig",
    "ForkPollInterruptedError",
    "NotAuthorizedForOwnerError",
    "Organization",
    "PostCommitHookError",
    "PostCommitHooks",
    "Repository",
    "RepositoryError",
    "RepositoryEventType",
    "find_repository",
    "poll_for_fork",
]
