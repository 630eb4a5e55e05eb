"""A single page of a paginated GitHub collection."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class Page[T]:
    """Ordered page items plus the locator of the following page.

    ``next_locator`` is the absolute URL GitHub advertised with
    ``Link: <...>; rel="next"``. It is ``None`` on the last page.
    """

    items: tuple[T, ...]
    next_locator: str | None = None

    @property
    def is_last(self) -> bool:
        """Return True when no further page exists."""
        return self.next_locator is None

    def map[U](self, convert: cabc.Callable[[T], U]) -> Page[U]:
        """Return a page with every item converted, keeping the locator."""
        return Page(
            items=tuple(convert(item) for item in self.items),
            next_locator=self.next_locator,
        )

    def __len__(self) -> int:
        """Return the number of items on this page."""
        return len(self.items)
