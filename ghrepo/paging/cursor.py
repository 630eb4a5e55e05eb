"""Lazy, forward-only iteration over paginated GitHub collections.

A :class:`PagedCursor` holds at most one page of items. It asks for page
``N + 1`` only when page ``N`` is used up, and it runs the binding hook once
per fetched page before any item from that page leaves the cursor. Tying the
hook to the fetch, not to item access, means an item can never be handed out
without its owning context.

Usage
-----
>>> cursor = PagedCursor(fetch, bind_page=bind_all)  # doctest: +SKIP
>>> while cursor.has_next():  # doctest: +SKIP
...     commit = next(cursor)

Cursors are also plain iterators, so ``for commit in cursor`` and
``list(cursor)`` work. They are not restartable; ask the owning ``list_*``
method for a fresh cursor to iterate again.
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import typing as typ

from .errors import CursorFailedError

if typ.TYPE_CHECKING:
    from .page import Page

type PageFetcher[T] = cabc.Callable[[str | None], Page[T]]
type PageBinder[T] = cabc.Callable[[cabc.Sequence[T]], None]


class PagedCursor[T](cabc.Iterator[T]):
    """Forward-only iterator that fetches pages on demand.

    Parameters
    ----------
    fetch_page
        Callable taking a locator and returning one :class:`Page`. The first
        call receives ``initial_locator``; later calls receive the
        ``next_locator`` of the previous page.
    initial_locator
        Locator of the first page. ``None`` asks the fetcher for its default
        first page.
    bind_page
        Hook run once per fetched page, before any of its items is returned.

    """

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        *,
        initial_locator: str | None = None,
        bind_page: PageBinder[T],
    ) -> None:
        """Prepare the cursor; nothing is fetched until first use."""
        self._fetch_page = fetch_page
        self._bind_page = bind_page
        self._buffer: collections.deque[T] = collections.deque()
        self._locator = initial_locator
        self._started = False
        self._exhausted = False
        self._failure: BaseException | None = None
        self._pages_fetched = 0

    @property
    def pages_fetched(self) -> int:
        """Return how many pages have been retrieved so far."""
        return self._pages_fetched

    @property
    def exhausted(self) -> bool:
        """Return True once the final page has been fetched and drained."""
        return self._exhausted

    def has_next(self) -> bool:
        """Return True if another item is available.

        When the buffer is empty but a further page exists, that page is
        fetched and bound now. Empty intermediate pages are skipped.
        """
        self._raise_if_failed()
        if self._buffer:
            return True
        self._replenish()
        return bool(self._buffer)

    def __next__(self) -> T:
        """Return the next bound item or raise :class:`StopIteration`."""
        if not self.has_next():
            raise StopIteration
        return self._buffer.popleft()

    def __iter__(self) -> typ.Self:
        """Return the cursor itself; it is single-pass."""
        return self

    def _has_more_pages(self) -> bool:
        if self._exhausted:
            return False
        return not self._started or self._locator is not None

    def _replenish(self) -> None:
        while not self._buffer and self._has_more_pages():
            try:
                page = self._fetch_page(self._locator)
            except Exception as exc:
                self._fail(exc)
                raise
            self._started = True
            self._pages_fetched += 1
            self._locator = page.next_locator
            try:
                self._bind_page(page.items)
            except Exception as exc:
                self._fail(exc)
                raise
            self._buffer.extend(page.items)
        if not self._buffer and not self._has_more_pages():
            self._exhausted = True

    def _fail(self, exc: BaseException) -> None:
        self._failure = exc
        self._buffer.clear()
        self._locator = None

    def _raise_if_failed(self) -> None:
        if self._failure is not None:
            raise CursorFailedError.after(self._failure) from self._failure
