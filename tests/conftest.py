"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from ghrepo.client import GitHubClient
from tests.helpers import github_payloads as payloads
from tests.helpers.fake_github import FakeGitHub

if typ.TYPE_CHECKING:
    from ghrepo.repository import Repository
    from ghrepo.transport import GitHubTransport


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Return an empty fake GitHub API."""
    return FakeGitHub()


@pytest.fixture
def transport(fake_github: FakeGitHub) -> typ.Iterator[GitHubTransport]:
    """Yield a transport authenticated as ``octo`` against the fake API."""
    with fake_github.transport() as github_transport:
        yield github_transport


@pytest.fixture
def client(transport: GitHubTransport) -> GitHubClient:
    """Return a root client over the fake transport."""
    return GitHubClient(transport)


@pytest.fixture
def repo(fake_github: FakeGitHub, client: GitHubClient) -> Repository:
    """Return ``octo/reef`` fetched through the fake API."""
    fake_github.add("GET", "/repos/octo/reef", payloads.repository())
    return client.get_repository("octo", "reef")
