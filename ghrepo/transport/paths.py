"""Endpoint path builder.

Every REST path is assembled here so that owner logins, repository names,
branch names and SHAs are escaped the same way everywhere.
"""

from __future__ import annotations

from urllib.parse import quote


def make_url(*parts: str | int) -> str:
    """Render an API path from raw segments, escaping each one.

    Examples
    --------
    >>> make_url("repos", "octo", "reef", "commits", "abc123")
    '/repos/octo/reef/commits/abc123'
    >>> make_url("repos", "octo", "my repo", "branches", "feature/x")
    '/repos/octo/my%20repo/branches/feature%2Fx'

    """
    if not parts:
        msg = "make_url requires at least one path segment"
        raise ValueError(msg)
    segments: list[str] = []
    for part in parts:
        text = str(part)
        if not text:
            msg = f"Empty path segment in {parts!r}"
            raise ValueError(msg)
        segments.append(quote(text, safe=""))
    return "/" + "/".join(segments)


def repo_url(owner: str, name: str, *parts: str | int) -> str:
    """Render a path below ``/repos/{owner}/{name}``."""
    return make_url("repos", owner, name, *parts)
