"""Users, owner stubs and teams.

GitHub embeds abbreviated accounts (login, id, type) in most payloads. Those
become :class:`OwnerRef`, the known-key-only form. :meth:`OwnerRef.resolve`
makes the network call for the full profile and returns a :class:`User`.
Reading an ``OwnerRef`` never fetches anything by itself.
"""

from __future__ import annotations

from ghrepo.binding import BoundResource, bind
from ghrepo.transport.paths import make_url

from .records import OwnerRecord, TeamRecord, UserRecord


class OwnerRef(BoundResource[OwnerRecord]):
    """Account known only by login until :meth:`resolve` is called."""

    __slots__ = ()

    @classmethod
    def for_login(cls, login: str) -> OwnerRef:
        """Return an unbound stub for ``login``."""
        return cls(OwnerRecord(login=login))

    @property
    def login(self) -> str:
        """Return the account login."""
        return self.record.login

    @property
    def is_organization(self) -> bool:
        """Return True when GitHub marked the account as an organisation."""
        return self.record.type == "Organization"

    def resolve(self) -> User:
        """Fetch the full profile with ``GET /users/{login}``."""
        context = self.context.without_repository()
        record = self.transport.fetch_one(make_url("users", self.login), UserRecord)
        return bind(User(record), context)

    def __eq__(self, other: object) -> bool:
        """Compare stubs by login."""
        if not isinstance(other, OwnerRef):
            return NotImplemented
        return self.login == other.login

    def __hash__(self) -> int:
        """Hash by login."""
        return hash(("owner", self.login))

    def __repr__(self) -> str:
        """Return a debug representation naming the login."""
        return f"OwnerRef({self.login!r})"


class User(BoundResource[UserRecord]):
    """Fully resolved GitHub account."""

    __slots__ = ()

    @property
    def login(self) -> str:
        """Return the account login."""
        return self.record.login

    @property
    def name(self) -> str | None:
        """Return the display name, if set."""
        return self.record.name

    @property
    def email(self) -> str | None:
        """Return the public e-mail address, if set."""
        return self.record.email

    @property
    def html_url(self) -> str | None:
        """Return the profile page URL."""
        return self.record.html_url

    def as_ref(self) -> OwnerRef:
        """Return the key-only form of this user."""
        ref = OwnerRef(OwnerRecord(login=self.login, id=self.record.id))
        if self.is_bound:
            bind(ref, self.context)
        return ref

    def __eq__(self, other: object) -> bool:
        """Compare users by login."""
        if not isinstance(other, User):
            return NotImplemented
        return self.login == other.login

    def __hash__(self) -> int:
        """Hash by login."""
        return hash(("user", self.login))

    def __repr__(self) -> str:
        """Return a debug representation naming the login."""
        return f"User({self.login!r})"


class Team(BoundResource[TeamRecord]):
    """Team granted access to a repository."""

    __slots__ = ()

    @property
    def id(self) -> int:
        """Return the numeric team id."""
        return self.record.id

    @property
    def name(self) -> str:
        """Return the team name."""
        return self.record.name

    @property
    def permission(self) -> str | None:
        """Return the permission the team holds on the repository."""
        return self.record.permission

    def __eq__(self, other: object) -> bool:
        """Compare teams by id."""
        if not isinstance(other, Team):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash by id."""
        return hash(("team", self.id))


def owner_ref(record: OwnerRecord | None) -> OwnerRef | None:
    """Wrap an optional embedded account record."""
    return OwnerRef(record) if record is not None else None
