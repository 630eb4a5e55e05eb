"""Unit tests for binding contexts, the binder and the resource cache."""

from __future__ import annotations

import threading
import typing as typ

import pytest

from ghrepo.binding import (
    BindingContext,
    ResourceAlreadyBoundError,
    ResourceCache,
    UnboundResourceError,
    bind,
    bind_all,
    page_binder,
)
from ghrepo.resources import Commit, OwnerRef
from ghrepo.resources.records import CommitRecord, OwnerRecord

if typ.TYPE_CHECKING:
    from ghrepo.repository import Repository
    from ghrepo.transport import GitHubTransport


def _commit(sha: str = "abc123", author: str | None = "octo") -> Commit:
    author_record = OwnerRecord(login=author) if author else None
    return Commit(CommitRecord(sha=sha, author=author_record, committer=author_record))


class TestBind:
    """Tests for bind() and BoundResource."""

    def test_unbound_resource_has_no_context(self) -> None:
        """Touching the context of an unbound resource fails loudly."""
        commit = _commit()

        assert not commit.is_bound
        with pytest.raises(UnboundResourceError, match="Commit"):
            _ = commit.context

    def test_bind_returns_same_object_and_binds_nested(
        self, transport: GitHubTransport
    ) -> None:
        """Binding attaches the context to the resource and its owner stubs."""
        context = BindingContext(transport=transport)
        commit = _commit()

        bound = bind(commit, context)

        assert bound is commit
        assert commit.context is context
        assert commit.author is not None
        assert commit.author.context is context
        assert commit.committer is not None
        assert commit.committer.is_bound

    def test_rebinding_to_equal_context_is_a_no_op(
        self, transport: GitHubTransport
    ) -> None:
        """Binding twice with an equal context changes nothing."""
        commit = _commit()
        bind(commit, BindingContext(transport=transport))

        bind(commit, BindingContext(transport=transport))

        assert commit.context == BindingContext(transport=transport)

    def test_binding_to_another_context_is_refused(
        self, transport: GitHubTransport, repo: Repository
    ) -> None:
        """A resource belongs to exactly one context."""
        commit = bind(_commit(), BindingContext(transport=transport))

        with pytest.raises(ResourceAlreadyBoundError, match="Commit"):
            bind(commit, repo.child_context)

    def test_refreshed_snapshot_is_a_different_owner(self, repo: Repository) -> None:
        """An equal repository object does not share its bindings."""
        commit = bind(_commit(), repo.child_context)
        fresh = repo.refresh()

        assert fresh == repo
        with pytest.raises(ResourceAlreadyBoundError):
            bind(commit, fresh.child_context)
        assert commit.context.repository is repo

    def test_require_repository_without_repository(
        self, transport: GitHubTransport
    ) -> None:
        """Repository-scoped operations need a repository in the context."""
        commit = bind(_commit(), BindingContext(transport=transport))

        with pytest.raises(UnboundResourceError, match="owning repository"):
            _ = commit.repository

    def test_without_repository_drops_only_the_repository(
        self, repo: Repository
    ) -> None:
        """Stripping the repository keeps the transport."""
        stripped = repo.child_context.without_repository()

        assert stripped.repository is None
        assert stripped.transport is repo.transport
        assert stripped.without_repository() is stripped

    def test_bind_all_and_page_binder(self, transport: GitHubTransport) -> None:
        """Bulk helpers bind every element."""
        context = BindingContext(transport=transport)
        first, second, third = _commit("a"), _commit("b", None), _commit("c")

        assert bind_all([first, second], context) == [first, second]
        page_binder(context)([third])

        assert all(commit.is_bound for commit in (first, second, third))


class TestResourceCache:
    """Tests for the natural-key resource cache."""

    @pytest.fixture
    def context(self, transport: GitHubTransport) -> BindingContext:
        """Return a transport-only context."""
        return BindingContext(transport=transport)

    def test_get_loads_once_and_returns_same_object(
        self, context: BindingContext
    ) -> None:
        """The second lookup is served from the cache."""
        loads: list[str] = []

        def _load(sha: str) -> Commit:
            loads.append(sha)
            return _commit(sha)

        cache: ResourceCache[str, Commit] = ResourceCache(context, _load)

        first = cache.get("abc123")
        second = cache.get("abc123")

        assert first is second
        assert loads == ["abc123"]
        assert first.context is context

    def test_state_queries_do_not_load(self, context: BindingContext) -> None:
        """peek, membership and length never call the loader."""
        cache: ResourceCache[str, Commit] = ResourceCache(context, _commit)

        assert cache.peek("abc123") is None
        assert "abc123" not in cache
        assert len(cache) == 0

        loaded = cache.get("abc123")

        assert cache.peek("abc123") is loaded
        assert "abc123" in cache
        assert cache.keys() == ["abc123"]
        assert len(cache) == 1

    def test_concurrent_first_access_loads_once(
        self, context: BindingContext
    ) -> None:
        """Threads missing the same key trigger a single load."""
        loads: list[str] = []
        started = threading.Barrier(4)

        def _load(sha: str) -> Commit:
            loads.append(sha)
            return _commit(sha)

        cache: ResourceCache[str, Commit] = ResourceCache(context, _load)
        results: list[Commit] = []

        def _worker() -> None:
            started.wait()
            results.append(cache.get("abc123"))

        threads = [threading.Thread(target=_worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert loads == ["abc123"]
        assert len({id(result) for result in results}) == 1

    def test_loader_failure_caches_nothing(self, context: BindingContext) -> None:
        """A failed load leaves the key absent so a later call retries."""
        attempts: list[str] = []

        def _load(sha: str) -> Commit:
            attempts.append(sha)
            if len(attempts) == 1:
                msg = "transient"
                raise RuntimeError(msg)
            return _commit(sha)

        cache: ResourceCache[str, Commit] = ResourceCache(context, _load)

        with pytest.raises(RuntimeError, match="transient"):
            cache.get("abc123")
        assert "abc123" not in cache

        assert cache.get("abc123").sha == "abc123"

    def test_loader_result_bound_elsewhere_is_rejected(
        self, context: BindingContext, repo: Repository
    ) -> None:
        """Entries always carry the cache's own context."""
        foreign = bind(_commit(), repo.child_context)
        cache: ResourceCache[str, Commit] = ResourceCache(context, lambda _: foreign)

        with pytest.raises(ResourceAlreadyBoundError):
            cache.get("abc123")
        assert len(cache) == 0


def test_owner_refs_compare_by_login() -> None:
    """Owner stubs are equal when the login matches."""
    assert OwnerRef.for_login("octo") == OwnerRef(OwnerRecord(login="octo", id=1))
    assert len({OwnerRef.for_login("octo"), OwnerRef.for_login("octo")}) == 1
