"""Repository hooks."""

from __future__ import annotations

import enum
import typing as typ

from ghrepo.binding import BoundResource
from ghrepo.transport.paths import repo_url

from .records import HookRecord

if typ.TYPE_CHECKING:
    from ghrepo.repository.facade import Repository

WEB_HOOK_NAME = "web"


class HookEvent(enum.StrEnum):
    """Events a repository hook can subscribe to."""

    COMMIT_COMMENT = "commit_comment"
    CREATE = "create"
    DELETE = "delete"
    DEPLOYMENT = "deployment"
    FORK = "fork"
    GOLLUM = "gollum"
    ISSUE_COMMENT = "issue_comment"
    ISSUES = "issues"
    MEMBER = "member"
    PUBLIC = "public"
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PUSH = "push"
    RELEASE = "release"
    STATUS = "status"
    WATCH = "watch"


class Hook(BoundResource[HookRecord]):
    """A hook configured on a repository."""

    __slots__ = ()

    @property
    def id(self) -> int:
        """Return the numeric hook id."""
        return self.record.id

    @property
    def name(self) -> str:
        """Return the hook type name, ``"web"`` for webhooks."""
        return self.record.name

    @property
    def active(self) -> bool:
        """Return True when GitHub delivers events to the hook."""
        return self.record.active

    @property
    def events(self) -> list[str]:
        """Return the subscribed event names."""
        return list(self.record.events)

    @property
    def config(self) -> dict[str, typ.Any]:
        """Return a copy of the hook configuration mapping."""
        return dict(self.record.config)

    @property
    def url(self) -> str | None:
        """Return the delivery URL of a webhook."""
        value = self.record.config.get("url")
        return str(value) if value is not None else None

    @property
    def is_web_hook(self) -> bool:
        """Return True for ``web`` hooks."""
        return self.name == WEB_HOOK_NAME

    @property
    def repository(self) -> Repository:
        """Return the repository the hook belongs to."""
        return self.context.require_repository(self)

    def delete(self) -> None:
        """Delete the hook."""
        repository = self.repository
        self.transport.send(
            repo_url(repository.owner_login, repository.name, "hooks", self.id),
            "DELETE",
        )

    def __repr__(self) -> str:
        """Return a debug representation naming the hook."""
        return f"Hook({self.id}, {self.name!r})"
