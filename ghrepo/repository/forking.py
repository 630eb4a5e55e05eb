"""Bounded polling for asynchronously created forks.

GitHub answers a fork request before the fork exists. The only way to hand
the new repository back is to look it up until it appears. This is the one
retry loop in ghrepo: a fixed number of lookups with a fixed delay between
them, no backoff.
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import time
import typing as typ

from ghrepo.common.slug import repo_slug
from ghrepo.logging import get_logger, log_debug, log_error, log_info

from .errors import ForkNotVisibleError, ForkPollInterruptedError

if typ.TYPE_CHECKING:
    import threading

    from .config import ForkPollConfig

logger = get_logger(__name__)

type Sleeper = cabc.Callable[[float], None]


class ForkEventType(enum.StrEnum):
    """Structured log event types for fork polling."""

    POLL = "repository.fork.poll"
    VISIBLE = "repository.fork.visible"
    EXHAUSTED = "repository.fork.exhausted"


def _wait(
    delay_s: float,
    *,
    sleep: Sleeper | None,
    cancel: threading.Event | None,
) -> bool:
    """Wait ``delay_s`` seconds; return True if ``cancel`` fired.

    An injected ``sleep`` always runs; ``cancel`` is then checked once it
    returns. Without one, a ``cancel`` event is waited on directly so that
    setting it cuts the delay short.
    """
    if sleep is not None:
        sleep(delay_s)
        return cancel is not None and cancel.is_set()
    if cancel is not None:
        return cancel.wait(delay_s)
    time.sleep(delay_s)
    return False


def poll_for_fork[R](  # noqa: PLR0913
    lookup: cabc.Callable[[], R | None],
    *,
    owner: str,
    name: str,
    organization: str,
    config: ForkPollConfig,
    sleep: Sleeper | None = None,
    cancel: threading.Event | None = None,
) -> R:
    """Call ``lookup`` until it returns a repository or the budget runs out.

    Parameters
    ----------
    lookup
        Returns the forked repository, or ``None`` while it is not visible.
        Errors other than "not found" should propagate from it unchanged.
    owner
        Owner of the repository that was forked.
    name
        Name of the forked repository; the fork keeps it.
    organization
        Login of the organisation receiving the fork.
    config
        Attempt count and delay between attempts.
    sleep
        Delay function; tests pass a recorder. Defaults to
        :func:`time.sleep`, or to waiting on ``cancel`` when one is given.
    cancel
        Optional event. With the default delay, setting it ends the wait
        early; with an injected ``sleep`` it is checked after each delay.
        Either way the poll stops with :class:`ForkPollInterruptedError`.

    Raises
    ------
    ForkNotVisibleError
        If every lookup came back empty.
    ForkPollInterruptedError
        If ``cancel`` was set while waiting between lookups.

    """
    source = repo_slug(owner, name)
    for attempt in range(1, config.attempts + 1):
        log_debug(
            logger,
            "[%s] source=%s organization=%s attempt=%d max_attempts=%d",
            ForkEventType.POLL,
            source,
            organization,
            attempt,
            config.attempts,
        )
        found = lookup()
        if found is not None:
            log_info(
                logger,
                "[%s] source=%s organization=%s attempt=%d",
                ForkEventType.VISIBLE,
                source,
                organization,
                attempt,
            )
            return found
        if attempt < config.attempts and _wait(
            config.delay_s, sleep=sleep, cancel=cancel
        ):
            raise ForkPollInterruptedError(organization, name, attempt)

    log_error(
        logger,
        "[%s] source=%s organization=%s attempts=%d",
        ForkEventType.EXHAUSTED,
        source,
        organization,
        config.attempts,
    )
    raise ForkNotVisibleError(owner, name, organization, config.attempts)
