"""Pull requests and issues."""

from __future__ import annotations

import collections.abc as cabc
import enum
import typing as typ

from ghrepo.binding import BoundResource

from .records import IssueRecord, PullRequestRecord
from .users import OwnerRef, owner_ref

if typ.TYPE_CHECKING:
    import datetime as dt

    from ghrepo.repository.facade import Repository


class IssueState(enum.StrEnum):
    """State filter accepted by the issues and pulls list endpoints."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class PullRequest(BoundResource[PullRequestRecord]):
    """A pull request; ``user`` is an owner stub until resolved."""

    __slots__ = ("_user",)

    def __init__(self, record: PullRequestRecord) -> None:
        """Wrap ``record`` and its author stub."""
        super().__init__(record)
        self._user = owner_ref(record.user)

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the author stub."""
        return [self._user] if self._user is not None else []

    @property
    def number(self) -> int:
        """Return the pull request number."""
        return self.record.number

    @property
    def title(self) -> str:
        """Return the title."""
        return self.record.title

    @property
    def state(self) -> str:
        """Return ``"open"`` or ``"closed"``."""
        return self.record.state

    @property
    def body(self) -> str | None:
        """Return the description text."""
        return self.record.body

    @property
    def html_url(self) -> str | None:
        """Return the web URL."""
        return self.record.html_url

    @property
    def user(self) -> OwnerRef | None:
        """Return the author stub."""
        return self._user

    @property
    def head_ref(self) -> str | None:
        """Return the name of the branch being merged."""
        return self.record.head.ref if self.record.head else None

    @property
    def base_ref(self) -> str | None:
        """Return the name of the branch merged into."""
        return self.record.base.ref if self.record.base else None

    @property
    def merged_at(self) -> dt.datetime | None:
        """Return when the pull request was merged, if it was."""
        return self.record.merged_at

    @property
    def is_merged(self) -> bool:
        """Return True when the pull request has been merged."""
        return self.record.merged_at is not None

    @property
    def repository(self) -> Repository:
        """Return the repository the pull request targets."""
        return self.context.require_repository(self)

    def __repr__(self) -> str:
        """Return a debug representation naming the pull request."""
        return f"PullRequest({self.number}, {self.title!r})"


class Issue(BoundResource[IssueRecord]):
    """An issue; ``user`` is an owner stub until resolved."""

    __slots__ = ("_user",)

    def __init__(self, record: IssueRecord) -> None:
        """Wrap ``record`` and its author stub."""
        super().__init__(record)
        self._user = owner_ref(record.user)

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the author stub."""
        return [self._user] if self._user is not None else []

    @property
    def number(self) -> int:
        """Return the issue number."""
        return self.record.number

    @property
    def title(self) -> str:
        """Return the title."""
        return self.record.title

    @property
    def state(self) -> str:
        """Return ``"open"`` or ``"closed"``."""
        return self.record.state

    @property
    def user(self) -> OwnerRef | None:
        """Return the author stub."""
        return self._user

    @property
    def labels(self) -> list[str]:
        """Return label names."""
        return [label.name for label in self.record.labels]

    @property
    def is_pull_request(self) -> bool:
        """Return True for pull requests surfaced by the issues endpoint."""
        return self.record.pull_request is not None

    @property
    def repository(self) -> Repository:
        """Return the repository the issue belongs to."""
        return self.context.require_repository(self)

    def __repr__(self) -> str:
        """Return a debug representation naming the issue."""
        return f"Issue({self.number}, {self.title!r})"
