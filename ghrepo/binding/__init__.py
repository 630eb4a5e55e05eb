"""Binder protocol and per-repository resource cache."""

from __future__ import annotations

from .cache import ResourceCache
from .context import BindingContext, BoundResource, bind, bind_all, page_binder
from .errors import BindingError, ResourceAlreadyBoundError, UnboundResourceError
from .paged import bound_cursor, drain_bound

__all__ = [
    "BindingContext",
    "BindingError",
    "BoundResource",
    "ResourceAlreadyBoundError",
    "ResourceCache",
    "UnboundResourceError",
    "bind",
    "bind_all",
    "bound_cursor",
    "drain_bound",
    "page_binder",
]
