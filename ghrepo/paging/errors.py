"""Errors raised by paged cursors."""

from __future__ import annotations


class CursorFailedError(RuntimeError):
    """Raised when a cursor is used again after a page fetch failed."""

    @classmethod
    def after(cls, cause: BaseException) -> CursorFailedError:
        """Return an error naming the failure that broke the cursor."""
        return cls(
            f"Paged cursor is unusable after an earlier failure: "
            f"{type(cause).__name__}: {cause}"
        )
