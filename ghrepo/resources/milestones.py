"""Repository milestones."""

from __future__ import annotations

import collections.abc as cabc
import enum
import typing as typ

from ghrepo.binding import BoundResource
from ghrepo.transport.paths import repo_url

from .records import MilestoneRecord
from .users import OwnerRef, owner_ref

if typ.TYPE_CHECKING:
    import datetime as dt

    from ghrepo.repository.facade import Repository


class MilestoneState(enum.StrEnum):
    """Milestone states accepted by the milestones API."""

    OPEN = "open"
    CLOSED = "closed"


class Milestone(BoundResource[MilestoneRecord]):
    """A milestone, identified within its repository by number.

    Milestones can be edited on GitHub after they are cached here; the
    repository cache keeps the first snapshot it saw.
    """

    __slots__ = ("_creator",)

    def __init__(self, record: MilestoneRecord) -> None:
        """Wrap ``record`` and its creator stub."""
        super().__init__(record)
        self._creator = owner_ref(record.creator)

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the creator stub."""
        return [self._creator] if self._creator is not None else []

    @property
    def number(self) -> int:
        """Return the milestone number."""
        return self.record.number

    @property
    def title(self) -> str:
        """Return the milestone title."""
        return self.record.title

    @property
    def description(self) -> str | None:
        """Return the milestone description."""
        return self.record.description

    @property
    def state(self) -> MilestoneState:
        """Return whether the milestone is open or closed."""
        return MilestoneState(self.record.state)

    @property
    def open_issues(self) -> int:
        """Return the number of open issues in the milestone."""
        return self.record.open_issues

    @property
    def closed_issues(self) -> int:
        """Return the number of closed issues in the milestone."""
        return self.record.closed_issues

    @property
    def due_on(self) -> dt.datetime | None:
        """Return the due date, if one is set."""
        return self.record.due_on

    @property
    def creator(self) -> OwnerRef | None:
        """Return the account that created the milestone."""
        return self._creator

    @property
    def repository(self) -> Repository:
        """Return the repository owning this milestone."""
        return self.context.require_repository(self)

    def close(self) -> None:
        """Mark the milestone closed. The local snapshot is not updated."""
        self._edit({"state": MilestoneState.CLOSED.value})

    def reopen(self) -> None:
        """Mark the milestone open again. The local snapshot is not updated."""
        self._edit({"state": MilestoneState.OPEN.value})

    def delete(self) -> None:
        """Delete the milestone."""
        self.transport.send(self._path(), "DELETE")

    def _edit(self, fields: dict[str, object]) -> None:
        self.transport.send(self._path(), "PATCH", fields)

    def _path(self) -> str:
        repository = self.repository
        return repo_url(
            repository.owner_login, repository.name, "milestones", self.number
        )

    def __repr__(self) -> str:
        """Return a debug representation naming the milestone."""
        return f"Milestone({self.number}, {self.title!r})"
