"""Glue between the transport, paged cursors and the binder."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ghrepo.paging import PagedCursor

from .context import BindingContext, BoundResource, page_binder

if typ.TYPE_CHECKING:
    from ghrepo.paging import Page
    from ghrepo.transport.client import QueryParams


def bound_cursor[R, B: BoundResource[typ.Any]](
    context: BindingContext,
    path: str,
    record_type: type[R],
    wrap: cabc.Callable[[R], B],
    *,
    params: QueryParams | None = None,
) -> PagedCursor[B]:
    """Return a cursor over ``path`` yielding resources bound to ``context``.

    Each page is decoded into ``record_type``, wrapped with ``wrap`` and then
    bound as a whole by the cursor's page hook.
    """
    transport = context.transport

    def _fetch(locator: str | None) -> Page[B]:
        page = transport.fetch_page(path, record_type, locator, params=params)
        return page.map(wrap)

    return PagedCursor(_fetch, bind_page=page_binder(context))


def drain_bound[R, B: BoundResource[typ.Any]](
    context: BindingContext,
    path: str,
    record_type: type[R],
    wrap: cabc.Callable[[R], B],
    *,
    params: QueryParams | None = None,
) -> list[B]:
    """Fetch every page of ``path`` and return all bound resources."""
    return list(bound_cursor(context, path, record_type, wrap, params=params))
