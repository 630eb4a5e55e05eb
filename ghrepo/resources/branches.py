"""Repository branches."""

from __future__ import annotations

import typing as typ

from ghrepo.binding import BoundResource

from .records import BranchRecord

if typ.TYPE_CHECKING:
    from .commits import Commit


class Branch(BoundResource[BranchRecord]):
    """A branch head as listed by ``/repos/{owner}/{name}/branches``."""

    __slots__ = ()

    @property
    def name(self) -> str:
        """Return the branch name."""
        return self.record.name

    @property
    def sha(self) -> str:
        """Return the SHA the branch points at."""
        return self.record.commit.sha

    @property
    def protected(self) -> bool:
        """Return True when branch protection is enabled."""
        return self.record.protected

    def get_commit(self) -> Commit:
        """Return the head commit through the repository commit cache."""
        return self.context.require_repository(self).get_commit(self.sha)

    def __repr__(self) -> str:
        """Return a debug representation naming the branch."""
        return f"Branch({self.name!r}, sha={self.sha!r})"
