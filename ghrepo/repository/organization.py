"""Organisations, as far as repository lookups need them."""

from __future__ import annotations

import typing as typ

from ghrepo.binding import BoundResource, bound_cursor
from ghrepo.resources.records import OrganizationRecord, RepositoryRecord
from ghrepo.transport.paths import make_url

from .facade import Repository, find_repository

if typ.TYPE_CHECKING:
    from ghrepo.paging import PagedCursor


class Organization(BoundResource[OrganizationRecord]):
    """A GitHub organisation."""

    __slots__ = ()

    @classmethod
    def for_login(cls, login: str) -> Organization:
        """Return an unbound organisation known only by login."""
        return cls(OrganizationRecord(login=login))

    @property
    def login(self) -> str:
        """Return the organisation login."""
        return self.record.login

    @property
    def name(self) -> str | None:
        """Return the display name, if set."""
        return self.record.name

    def get_repository(self, name: str) -> Repository | None:
        """Look up ``name`` in this organisation; ``None`` when it is absent."""
        return find_repository(self.context, self.login, name)

    def list_repositories(self) -> PagedCursor[Repository]:
        """List the organisation's repositories."""
        return bound_cursor(
            self.context.without_repository(),
            make_url("orgs", self.login, "repos"),
            RepositoryRecord,
            Repository,
        )

    def __repr__(self) -> str:
        """Return a debug representation naming the organisation."""
        return f"Organization({self.login!r})"
