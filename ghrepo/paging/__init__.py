"""Paged cursor over multi-page GitHub list endpoints."""

from __future__ import annotations

from .cursor import PageBinder, PagedCursor, PageFetcher
from .errors import CursorFailedError
from .page import Page

__all__ = [
    "CursorFailedError",
    "Page",
    "PageBinder",
    "PageFetcher",
    "PagedCursor",
]
