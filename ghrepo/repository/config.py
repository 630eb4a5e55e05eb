"""Configuration for repository operations.

GitHub creates forks asynchronously, so ``Repository.fork_to`` polls the
target organisation. The defaults (10 lookups, 3 seconds apart) are what the
service has historically needed; both are overridable per call or through
``GHREPO_FORK_POLL_ATTEMPTS`` and ``GHREPO_FORK_POLL_DELAY``.

>>> ForkPollConfig().attempts
10

"""

from __future__ import annotations

import dataclasses as dc
import math
import typing as typ

from ghrepo.transport.config import (
    DEFAULT_FORK_POLL_ATTEMPTS,
    DEFAULT_FORK_POLL_DELAY_S,
)

if typ.TYPE_CHECKING:
    from ghrepo.transport.config import GitHubTransportConfig


@dc.dataclass(frozen=True, slots=True)
class ForkPollConfig:
    """Bounded fixed-delay polling used after a fork request.

    Attributes
    ----------
    attempts
        Number of lookups made before giving up. Must be positive.
    delay_s
        Seconds slept between two consecutive lookups.

    """

    attempts: int = DEFAULT_FORK_POLL_ATTEMPTS
    delay_s: float = DEFAULT_FORK_POLL_DELAY_S

    def __post_init__(self) -> None:
        """Validate the polling budget."""
        if self.attempts < 1:
            msg = f"attempts must be positive, got: {self.attempts}"
            raise ValueError(msg)
        if not (math.isfinite(self.delay_s) and self.delay_s >= 0):
            msg = f"delay_s must be a finite, non-negative number, got: {self.delay_s}"
            raise ValueError(msg)

    @classmethod
    def from_transport_config(cls, config: GitHubTransportConfig) -> ForkPollConfig:
        """Take the polling budget configured on the transport."""
        return cls(attempts=config.fork_poll_attempts, delay_s=config.fork_poll_delay_s)
