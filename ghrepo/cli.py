"""Read-only command line for inspecting one GitHub repository.

Credentials and endpoints come from the ``GHREPO_*`` environment variables
described in :meth:`ghrepo.transport.GitHubTransportConfig.from_env`.
"""

from __future__ import annotations

import itertools
import os
import sys
import typing as typ

from cyclopts import App, Parameter

from ghrepo.client import GitHubClient
from ghrepo.logging import configure_logging, get_logger, log_warning
from ghrepo.resources import IssueState
from ghrepo.transport import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)

logger = get_logger(__name__)

_REPORTED_ERRORS = (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    ValueError,
)

app = App(
    name="ghrepo",
    help="Inspect a GitHub repository from the command line",
    version="0.1.0",
)


def _open_client() -> GitHubClient:
    return GitHubClient.from_env()


def _setup_logging() -> None:
    raw_level = os.environ.get("GHREPO_LOG_LEVEL")
    _, invalid = configure_logging(raw_level)
    if invalid and raw_level:
        log_warning(logger, "Invalid GHREPO_LOG_LEVEL %r; using INFO", raw_level)


def _fail(exc: Exception) -> int:
    print(f"error: {exc}", file=sys.stderr)
    return 1


@app.command
def show(slug: str) -> int:
    """Print repository metadata.

    Args:
        slug: Repository as ``owner/name``.

    Returns:
        Exit code (0 for success, 1 when GitHub or configuration fails).

    """
    try:
        with _open_client() as github:
            repo = github.get_repository_by_slug(slug)
            print(repo.full_name)
            print(f"  description: {repo.description or '-'}")
            print(f"  homepage:    {repo.homepage or '-'}")
            print(f"  language:    {repo.language or '-'}")
            print(f"  branch:      {repo.master_branch or '-'}")
            print(f"  private:     {repo.is_private}")
            print(f"  fork:        {repo.is_fork}")
            print(f"  clone:       {repo.http_transport_url}")
    except _REPORTED_ERRORS as exc:
        return _fail(exc)
    return 0


@app.command
def branches(slug: str) -> int:
    """List branches in name order with their head SHAs.

    Args:
        slug: Repository as ``owner/name``.

    """
    try:
        with _open_client() as github:
            repo = github.get_repository_by_slug(slug)
            for name, branch in repo.get_branches().items():
                print(f"{name}\t{branch.sha}")
    except _REPORTED_ERRORS as exc:
        return _fail(exc)
    return 0


@app.command
def commits(
    slug: str,
    *,
    limit: typ.Annotated[int, Parameter(env_var="GHREPO_COMMIT_LIMIT")] = 20,
) -> int:
    """List the newest commits, fetching only the pages needed.

    Args:
        slug: Repository as ``owner/name``.
        limit: Maximum number of commits to print.

    """
    try:
        with _open_client() as github:
            repo = github.get_repository_by_slug(slug)
            for commit in itertools.islice(repo.list_commits(), max(limit, 0)):
                summary = commit.message.splitlines()[0] if commit.message else ""
                print(f"{commit.sha[:12]}\t{summary}")
    except _REPORTED_ERRORS as exc:
        return _fail(exc)
    return 0


@app.command
def milestones(slug: str) -> int:
    """List open milestones in number order.

    Args:
        slug: Repository as ``owner/name``.

    """
    try:
        with _open_client() as github:
            repo = github.get_repository_by_slug(slug)
            for number, milestone in repo.get_milestones().items():
                print(f"{number}\t{milestone.state}\t{milestone.title}")
    except _REPORTED_ERRORS as exc:
        return _fail(exc)
    return 0


@app.command
def pulls(slug: str, *, state: IssueState = IssueState.OPEN) -> int:
    """List pull requests in the given state.

    Args:
        slug: Repository as ``owner/name``.
        state: ``open``, ``closed`` or ``all``.

    """
    try:
        with _open_client() as github:
            repo = github.get_repository_by_slug(slug)
            for pull in repo.get_pull_requests(state):
                print(f"#{pull.number}\t{pull.state}\t{pull.title}")
    except _REPORTED_ERRORS as exc:
        return _fail(exc)
    return 0


def main() -> int:
    """Entry point for the CLI."""
    _setup_logging()
    return app()


if __name__ == "__main__":
    sys.exit(main())
