"""Commits and commit comments."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ghrepo.binding import BoundResource, bind, bound_cursor
from ghrepo.transport.paths import repo_url

from .records import (
    CommitCommentRecord,
    CommitFileRecord,
    CommitRecord,
    CommitStatsRecord,
)
from .users import OwnerRef, owner_ref

if typ.TYPE_CHECKING:
    import datetime as dt

    from ghrepo.paging import PagedCursor
    from ghrepo.repository.facade import Repository


class Commit(BoundResource[CommitRecord]):
    """A commit belonging to one repository.

    ``author`` and ``committer`` are GitHub accounts and may be ``None`` when
    the git identity is not linked to any account; the raw git identities are
    available as :attr:`author_name` and :attr:`author_email`.
    """

    __slots__ = ("_author", "_committer")

    def __init__(self, record: CommitRecord) -> None:
        """Wrap ``record`` and its embedded account stubs."""
        super().__init__(record)
        self._author = owner_ref(record.author)
        self._committer = owner_ref(record.committer)

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the author and committer stubs."""
        return [ref for ref in (self._author, self._committer) if ref is not None]

    @property
    def sha(self) -> str:
        """Return the full commit SHA."""
        return self.record.sha

    @property
    def message(self) -> str:
        """Return the commit message."""
        return self.record.commit.message

    @property
    def html_url(self) -> str | None:
        """Return the web URL of the commit."""
        return self.record.html_url

    @property
    def author(self) -> OwnerRef | None:
        """Return the GitHub account that authored the commit."""
        return self._author

    @property
    def committer(self) -> OwnerRef | None:
        """Return the GitHub account that committed the change."""
        return self._committer

    @property
    def author_name(self) -> str | None:
        """Return the git author name."""
        git_author = self.record.commit.author
        return git_author.name if git_author else None

    @property
    def author_email(self) -> str | None:
        """Return the git author e-mail."""
        git_author = self.record.commit.author
        return git_author.email if git_author else None

    @property
    def authored_at(self) -> dt.datetime | None:
        """Return the git author timestamp."""
        git_author = self.record.commit.author
        return git_author.date if git_author else None

    @property
    def parent_shas(self) -> list[str]:
        """Return the SHAs of the parent commits."""
        return [parent.sha for parent in self.record.parents]

    @property
    def stats(self) -> CommitStatsRecord | None:
        """Return line statistics; only single-commit lookups include them."""
        return self.record.stats

    @property
    def files(self) -> list[CommitFileRecord]:
        """Return touched files; only single-commit lookups include them."""
        return list(self.record.files)

    @property
    def repository(self) -> Repository:
        """Return the repository this commit was fetched from."""
        return self.context.require_repository(self)

    def get_parents(self) -> list[Commit]:
        """Return the parent commits through the repository commit cache."""
        repository = self.repository
        return [repository.get_commit(sha) for sha in self.parent_shas]

    def list_comments(self) -> PagedCursor[CommitComment]:
        """List comments on this commit."""
        return bound_cursor(
            self.context,
            self._comments_path(),
            CommitCommentRecord,
            CommitComment,
        )

    def create_comment(
        self,
        body: str,
        *,
        path: str | None = None,
        line: int | None = None,
        position: int | None = None,
    ) -> CommitComment:
        """Comment on this commit, optionally on a specific file line."""
        fields: dict[str, object] = {"body": body}
        if path is not None:
            fields["path"] = path
        if line is not None:
            fields["line"] = line
        if position is not None:
            fields["position"] = position
        record = self.transport.send(
            self._comments_path(),
            "POST",
            fields,
            record_type=CommitCommentRecord,
        )
        return bind(CommitComment(record), self.context)

    def _comments_path(self) -> str:
        repository = self.repository
        return repo_url(
            repository.owner_login, repository.name, "commits", self.sha, "comments"
        )

    def __repr__(self) -> str:
        """Return a debug representation naming the SHA."""
        return f"Commit({self.sha!r})"


class CommitComment(BoundResource[CommitCommentRecord]):
    """Comment left on a commit."""

    __slots__ = ("_user",)

    def __init__(self, record: CommitCommentRecord) -> None:
        """Wrap ``record`` and its author stub."""
        super().__init__(record)
        self._user = owner_ref(record.user)

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the comment author stub."""
        return [self._user] if self._user is not None else []

    @property
    def id(self) -> int:
        """Return the numeric comment id."""
        return self.record.id

    @property
    def body(self) -> str:
        """Return the comment text."""
        return self.record.body

    @property
    def commit_sha(self) -> str:
        """Return the SHA of the commented commit."""
        return self.record.commit_id

    @property
    def path(self) -> str | None:
        """Return the file path for line comments."""
        return self.record.path

    @property
    def line(self) -> int | None:
        """Return the line number for line comments."""
        return self.record.line

    @property
    def user(self) -> OwnerRef | None:
        """Return the comment author."""
        return self._user

    def get_commit(self) -> Commit:
        """Return the commented commit through the repository commit cache."""
        return self.context.require_repository(self).get_commit(self.commit_sha)

    def delete(self) -> None:
        """Delete this comment."""
        repository = self.context.require_repository(self)
        self.transport.send(
            repo_url(repository.owner_login, repository.name, "comments", self.id),
            "DELETE",
        )
