"""Bound, lazily paginated client objects for GitHub repositories."""

from __future__ import annotations

from .client import GitHubClient
from .repository import Organization, Repository
from .transport import GitHubTransport, GitHubTransportConfig

__all__ = [
    "GitHubClient",
    "GitHubTransport",
    "GitHubTransportConfig",
    "Organization",
    "Repository",
]
