"""Deprecated set-like view of a repository's webhook URLs.

Older callers treated post-commit hooks as a live set of URLs. This wrapper
keeps that shape for them. Nothing is cached: every call lists the hooks
again, so the view always reflects GitHub rather than a local copy.
"""

from __future__ import annotations

import builtins
import typing as typ

from ghrepo.transport.errors import GitHubAPIError

from .errors import PostCommitHookError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ghrepo.resources import Hook

    from .facade import Repository


class PostCommitHooks:
    """Webhook URLs of one repository.

    Failures from GitHub surface as :class:`PostCommitHookError`, chained to
    the underlying :class:`~ghrepo.transport.errors.GitHubAPIError`.
    """

    __slots__ = ("_repository",)

    def __init__(self, repository: Repository) -> None:
        """Create a view over ``repository``'s webhooks."""
        self._repository = repository

    def list(self) -> builtins.list[str]:
        """Return the delivery URLs of every webhook."""
        return [hook.url for hook in self._web_hooks() if hook.url is not None]

    def add(self, url: str) -> bool:
        """Create a webhook delivering to ``url``."""
        try:
            self._repository.create_web_hook(url)
        except GitHubAPIError as exc:
            raise PostCommitHookError.updating() from exc
        return True

    def remove(self, url: str) -> bool:
        """Delete the webhook delivering to ``url``; False if there is none."""
        for hook in self._web_hooks():
            if hook.url == url:
                try:
                    hook.delete()
                except GitHubAPIError as exc:
                    raise PostCommitHookError.updating() from exc
                return True
        return False

    def _web_hooks(self) -> builtins.list[Hook]:
        try:
            hooks = self._repository.get_hooks()
        except GitHubAPIError as exc:
            raise PostCommitHookError.retrieving() from exc
        return [hook for hook in hooks if hook.is_web_hook]

    def __iter__(self) -> cabc.Iterator[str]:
        """Iterate over the current webhook URLs."""
        return iter(self.list())

    def __len__(self) -> int:
        """Return the current number of webhook URLs."""
        return len(self.list())

    def __contains__(self, url: object) -> bool:
        """Return True when a webhook delivers to ``url``."""
        return url in self.list()
