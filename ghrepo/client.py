"""Root client: the way in to repositories, users and organisations.

Usage
-----
>>> from ghrepo import GitHubClient
>>> with GitHubClient.from_env() as github:  # doctest: +SKIP
...     repo = github.get_repository("octo", "reef")
...     for commit in repo.list_commits():
...         print(commit.sha)

"""

from __future__ import annotations

import typing as typ

from ghrepo.binding import BindingContext, bind
from ghrepo.common.slug import parse_repo_slug
from ghrepo.logging import get_logger, log_info
from ghrepo.repository import Organization, Repository
from ghrepo.resources import User
from ghrepo.resources.records import OrganizationRecord, RepositoryRecord, UserRecord
from ghrepo.transport import GitHubTransport, GitHubTransportConfig, make_url, repo_url

if typ.TYPE_CHECKING:
    import httpx

logger = get_logger(__name__)


class GitHubClient:
    """Look up and create GitHub resources over one transport.

    Everything returned is already bound, so its methods can reach GitHub
    without further setup.
    """

    def __init__(self, transport: GitHubTransport) -> None:
        """Wrap ``transport``; the client closes it on :meth:`close`.

        The authenticated login is settled here, asking ``GET /user`` when
        the configuration does not name it, so owner-only checks on the
        repositories this client returns never need a request of their own.
        """
        self._transport = transport
        self._context = BindingContext(transport=transport)
        self._login = transport.authenticated_login

    @classmethod
    def from_config(
        cls,
        config: GitHubTransportConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> GitHubClient:
        """Build a client and its transport from ``config``."""
        transport = GitHubTransport(config, http_client=http_client)
        try:
            return cls(transport)
        except Exception:
            transport.close()
            raise

    @classmethod
    def from_env(cls) -> GitHubClient:
        """Build a client from ``GHREPO_*`` environment variables.

        Raises
        ------
        GitHubConfigError
            If ``GHREPO_GITHUB_TOKEN`` is missing or a setting is unusable.

        """
        return cls.from_config(GitHubTransportConfig.from_env())

    @property
    def transport(self) -> GitHubTransport:
        """Return the transport shared by every resource from this client."""
        return self._transport

    @property
    def login(self) -> str:
        """Return the authenticated login."""
        return self._login

    def get_repository(self, owner: str, name: str) -> Repository:
        """Fetch ``owner/name``.

        Raises
        ------
        GitHubAPIError
            If the repository does not exist or is not visible to the token.

        """
        record = self._transport.fetch_one(repo_url(owner, name), RepositoryRecord)
        return bind(Repository(record), self._context)

    def get_repository_by_slug(self, slug: str) -> Repository:
        """Fetch a repository given as ``owner/name``."""
        owner, name = parse_repo_slug(slug)
        return self.get_repository(owner, name)

    def get_user(self, login: str) -> User:
        """Fetch the profile of ``login``."""
        record = self._transport.fetch_one(make_url("users", login), UserRecord)
        return bind(User(record), self._context)

    def get_myself(self) -> User:
        """Fetch the profile of the authenticated user."""
        record = self._transport.fetch_one("/user", UserRecord)
        return bind(User(record), self._context)

    def get_organization(self, login: str) -> Organization:
        """Fetch organisation ``login``."""
        record = self._transport.fetch_one(make_url("orgs", login), OrganizationRecord)
        return bind(Organization(record), self._context)

    def create_repository(
        self,
        name: str,
        *,
        description: str | None = None,
        homepage: str | None = None,
        private: bool = False,
    ) -> Repository:
        """Create a repository owned by the authenticated user."""
        fields: dict[str, object] = {"name": name, "private": private}
        if description is not None:
            fields["description"] = description
        if homepage is not None:
            fields["homepage"] = homepage
        record = self._transport.send(
            "/user/repos", "POST", fields, record_type=RepositoryRecord
        )
        log_info(logger, "Created repository %s/%s", record.owner.login, record.name)
        return bind(Repository(record), self._context)

    def close(self) -> None:
        """Close the underlying transport."""
        self._transport.close()

    def __enter__(self) -> typ.Self:
        """Return the client for use in a ``with`` block."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close the transport on exit."""
        self.close()
