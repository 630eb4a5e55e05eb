"""Per-repository cache of bound singleton resources.

Entries are keyed by a natural key (commit SHA, milestone number), inserted
once on first access and never replaced or evicted. A lock per cache turns
``get`` into an atomic compute-if-absent, so two threads missing the same key
trigger a single fetch.
"""

from __future__ import annotations

import collections.abc as cabc
import threading
import typing as typ

from .context import BindingContext, BoundResource, bind


class ResourceCache[K, V: BoundResource[typ.Any]]:
    """Natural-key cache that fetches, binds and stores on a miss.

    Parameters
    ----------
    context
        Context every cached resource is bound to.
    load
        Callable fetching the unbound resource for a key. Called at most once
        per key for the lifetime of the cache.

    """

    def __init__(
        self,
        context: BindingContext,
        load: cabc.Callable[[K], V],
    ) -> None:
        """Create an empty cache bound to ``context``."""
        self._context = context
        self._load = load
        self._entries: dict[K, V] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> V:
        """Return the cached resource for ``key``, loading it on a miss."""
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            resource = bind(self._load(key), self._context)
            self._entries[key] = resource
            return resource

    def peek(self, key: K) -> V | None:
        """Return the cached resource for ``key`` without fetching."""
        with self._lock:
            return self._entries.get(key)

    def keys(self) -> list[K]:
        """Return the cached keys in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        """Return True when ``key`` has been loaded."""
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        """Return the number of cached entries."""
        with self._lock:
            return len(self._entries)
