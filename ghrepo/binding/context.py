"""Owning context and the binder protocol.

Records decoded from GitHub are plain data. Wrapping one in a
:class:`BoundResource` gives it methods, but those methods only work once
:func:`bind` has attached a :class:`BindingContext` (the transport, plus the
owning repository where there is one). Binding walks nested resources too, so
the owner stub inside a pull request is usable as soon as the pull request is.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ

from .errors import ResourceAlreadyBoundError, UnboundResourceError

if typ.TYPE_CHECKING:
    from ghrepo.repository.facade import Repository
    from ghrepo.transport.client import GitHubTransport


@dataclasses.dataclass(frozen=True, slots=True)
class BindingContext:
    """Transport handle plus the repository a resource belongs to."""

    transport: GitHubTransport
    repository: Repository | None = None

    def require_repository(self, resource: object) -> Repository:
        """Return the owning repository or fail for repository-less contexts."""
        if self.repository is None:
            raise UnboundResourceError(resource, needs="owning repository")
        return self.repository

    def without_repository(self) -> BindingContext:
        """Return a context carrying only the transport."""
        if self.repository is None:
            return self
        return BindingContext(transport=self.transport)


class BoundResource[R]:
    """Wrapper pairing one decoded record with its owning context."""

    __slots__ = ("_context", "_record")

    def __init__(self, record: R) -> None:
        """Wrap ``record``; the resource starts unbound."""
        self._record = record
        self._context: BindingContext | None = None

    @property
    def record(self) -> R:
        """Return the decoded record backing this resource."""
        return self._record

    @property
    def is_bound(self) -> bool:
        """Return True once :func:`bind` has run."""
        return self._context is not None

    @property
    def context(self) -> BindingContext:
        """Return the owning context or raise :class:`UnboundResourceError`."""
        if self._context is None:
            raise UnboundResourceError(self)
        return self._context

    @property
    def transport(self) -> GitHubTransport:
        """Return the transport from the owning context."""
        return self.context.transport

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield resources embedded in this one that need the same context."""
        return ()


def _same_owner(current: BindingContext, other: BindingContext) -> bool:
    return (
        current.transport is other.transport
        and current.repository is other.repository
    )


def bind[B: BoundResource[typ.Any]](resource: B, context: BindingContext) -> B:
    """Attach ``context`` to ``resource`` and its nested resources.

    Returns the same object. Binding again to a context with the same
    transport and the same repository object changes nothing; anything else
    raises :class:`ResourceAlreadyBoundError`. Repositories are compared by
    identity, since two snapshots of one repository have separate caches.
    """
    current = resource._context  # noqa: SLF001
    if current is not None and not _same_owner(current, context):
        raise ResourceAlreadyBoundError(resource)
    resource._context = context  # noqa: SLF001
    for nested in resource.nested_resources():
        bind(nested, context)
    return resource


def bind_all[B: BoundResource[typ.Any]](
    resources: cabc.Iterable[B], context: BindingContext
) -> list[B]:
    """Bind every resource in ``resources`` and return them as a list."""
    return [bind(resource, context) for resource in resources]


def page_binder(
    context: BindingContext,
) -> cabc.Callable[[cabc.Sequence[BoundResource[typ.Any]]], None]:
    """Return a paged-cursor hook that binds a whole page to ``context``."""

    def _bind_page(items: cabc.Sequence[BoundResource[typ.Any]]) -> None:
        for item in items:
            bind(item, context)

    return _bind_page
