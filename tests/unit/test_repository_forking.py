"""Unit tests for fork polling and Repository.fork_to."""

from __future__ import annotations

import math
import threading
import typing as typ

import pytest

from ghrepo.client import GitHubClient
from ghrepo.repository import (
    ForkEventType,
    ForkNotVisibleError,
    ForkPollConfig,
    ForkPollInterruptedError,
    Organization,
    poll_for_fork,
)
from ghrepo.transport import GitHubAPIError, GitHubTransportConfig
from tests.helpers import github_payloads as payloads
from tests.helpers.femtologging_capture import capture_femto_logs

if typ.TYPE_CHECKING:
    from ghrepo.repository import Repository
    from tests.helpers.fake_github import FakeGitHub


class _Lookups:
    """Return ``None`` until ``visible_on`` lookups have been made."""

    def __init__(self, visible_on: int | None) -> None:
        self.visible_on = visible_on
        self.calls = 0

    def __call__(self) -> str | None:
        self.calls += 1
        if self.visible_on is not None and self.calls >= self.visible_on:
            return "fork"
        return None


def _poll(lookup: _Lookups, sleeps: list[float], **config: typ.Any) -> str:
    return poll_for_fork(
        lookup,
        owner="nemo",
        name="reef",
        organization="reef-org",
        config=ForkPollConfig(**config),
        sleep=sleeps.append,
    )


class TestPollForFork:
    """Tests for the polling loop itself."""

    def test_first_hit_returns_without_sleeping(self) -> None:
        """A fork that is already visible costs one lookup."""
        lookup, sleeps = _Lookups(1), []

        assert _poll(lookup, sleeps) == "fork"
        assert lookup.calls == 1
        assert sleeps == []

    def test_third_attempt_stops_polling(self) -> None:
        """Success on attempt 3 of 10 returns at once."""
        lookup, sleeps = _Lookups(3), []

        assert _poll(lookup, sleeps) == "fork"
        assert lookup.calls == 3
        assert sleeps == [3.0, 3.0]

    def test_exhaustion_names_everything(self) -> None:
        """Running out of attempts raises with repository and organisation."""
        lookup, sleeps = _Lookups(None), []

        with pytest.raises(ForkNotVisibleError) as excinfo:
            _poll(lookup, sleeps)

        assert lookup.calls == 10
        assert len(sleeps) == 9
        message = str(excinfo.value)
        assert "Repository:nemo:reef" in message
        assert "reef-org" in message
        assert excinfo.value.attempts == 10

    def test_budget_is_configurable(self) -> None:
        """Attempts and delay come from the configuration."""
        lookup, sleeps = _Lookups(None), []

        with pytest.raises(ForkNotVisibleError):
            _poll(lookup, sleeps, attempts=2, delay_s=0.5)

        assert lookup.calls == 2
        assert sleeps == [0.5]

    def test_cancel_interrupts_the_wait(self) -> None:
        """A set cancel event surfaces as an interruption, not a return."""
        cancel = threading.Event()
        cancel.set()
        lookup = _Lookups(None)

        with pytest.raises(ForkPollInterruptedError) as excinfo:
            poll_for_fork(
                lookup,
                owner="nemo",
                name="reef",
                organization="reef-org",
                config=ForkPollConfig(delay_s=0),
                cancel=cancel,
            )

        assert isinstance(excinfo.value, InterruptedError)
        assert excinfo.value.attempt == 1
        assert lookup.calls == 1

    def test_injected_sleep_runs_alongside_cancel(self) -> None:
        """A cancel event does not bypass the injected delay function."""
        cancel = threading.Event()
        lookup, sleeps = _Lookups(3), []

        result = poll_for_fork(
            lookup,
            owner="nemo",
            name="reef",
            organization="reef-org",
            config=ForkPollConfig(),
            sleep=sleeps.append,
            cancel=cancel,
        )

        assert result == "fork"
        assert sleeps == [3.0, 3.0]

    def test_cancel_set_during_injected_sleep_interrupts(self) -> None:
        """Cancel is checked once the injected delay returns."""
        cancel = threading.Event()
        sleeps: list[float] = []

        def _sleep(delay_s: float) -> None:
            sleeps.append(delay_s)
            cancel.set()

        with pytest.raises(ForkPollInterruptedError) as excinfo:
            poll_for_fork(
                _Lookups(None),
                owner="nemo",
                name="reef",
                organization="reef-org",
                config=ForkPollConfig(),
                sleep=_sleep,
                cancel=cancel,
            )

        assert sleeps == [3.0]
        assert excinfo.value.attempt == 1

    def test_lookup_errors_propagate(self) -> None:
        """Only empty lookups are retried."""

        def _broken() -> str | None:
            raise GitHubAPIError.http_error("GET", "/repos/reef-org/reef", 500)

        with pytest.raises(GitHubAPIError):
            poll_for_fork(
                _broken,
                owner="nemo",
                name="reef",
                organization="reef-org",
                config=ForkPollConfig(),
                sleep=lambda _: None,
            )

    def test_logs_poll_and_visibility(self) -> None:
        """Each lookup and the final hit are logged."""
        with capture_femto_logs("ghrepo.repository.forking") as capture:
            _poll(_Lookups(2), [])

        capture.wait_for_count(3)
        polls = capture.messages_containing(ForkEventType.POLL)
        visible = capture.messages_containing(ForkEventType.VISIBLE)
        assert [record.level for record in polls] == ["DEBUG", "DEBUG"]
        assert "attempt=2" in visible[0].message
        assert "source=nemo/reef" in visible[0].message


class TestForkPollConfig:
    """Tests for ForkPollConfig."""

    @pytest.mark.parametrize(
        ("attempts", "delay_s"),
        [(0, 1.0), (-1, 1.0), (3, -0.1), (3, math.nan), (3, math.inf)],
    )
    def test_rejects_unusable_budgets(self, attempts: int, delay_s: float) -> None:
        """At least one attempt and a non-negative delay are required."""
        with pytest.raises(ValueError, match="must"):
            ForkPollConfig(attempts=attempts, delay_s=delay_s)

    def test_from_transport_config(self) -> None:
        """The transport configuration carries the polling budget."""
        config = GitHubTransportConfig(
            token="t", fork_poll_attempts=4, fork_poll_delay_s=0.25
        )

        assert ForkPollConfig.from_transport_config(config) == ForkPollConfig(
            attempts=4, delay_s=0.25
        )


class TestForkTo:
    """Tests for Repository.fork_to against the fake API."""

    @pytest.fixture
    def source(self, fake_github: FakeGitHub, client: GitHubClient) -> Repository:
        """Return ``nemo/reef``, which octo will fork."""
        fake_github.add("GET", "/repos/nemo/reef", payloads.repository("nemo", "reef"))
        fake_github.add("POST", "/repos/nemo/reef/forks", status=202)
        return client.get_repository("nemo", "reef")

    def test_polls_until_the_fork_appears(
        self, fake_github: FakeGitHub, source: Repository
    ) -> None:
        """Two 404s then a hit: three lookups, two sleeps."""
        path = "/repos/reef-org/reef"
        fake_github.add("GET", path, {"message": "Not Found"}, status=404)
        fake_github.add("GET", path, {"message": "Not Found"}, status=404)
        fake_github.add("GET", path, payloads.repository("reef-org", "reef"))
        sleeps: list[float] = []

        fork = source.fork_to(Organization.for_login("reef-org"), sleep=sleeps.append)

        assert str(fork) == "Repository:reef-org:reef"
        assert fork.is_bound
        assert len(fake_github.calls("GET", path)) == 3
        assert sleeps == [3.0, 3.0]
        (request,) = fake_github.calls("POST", "/repos/nemo/reef/forks")
        assert request.body == {"organization": "reef-org"}

    def test_uses_the_transport_poll_budget(self, fake_github: FakeGitHub) -> None:
        """Without an explicit budget the transport settings apply."""
        fake_github.add("GET", "/repos/nemo/reef", payloads.repository("nemo", "reef"))
        fake_github.add("POST", "/repos/nemo/reef/forks", status=202)
        sleeps: list[float] = []

        with fake_github.transport(
            fork_poll_attempts=2, fork_poll_delay_s=0.1
        ) as transport:
            source = GitHubClient(transport).get_repository("nemo", "reef")
            with pytest.raises(ForkNotVisibleError):
                source.fork_to("reef-org", sleep=sleeps.append)

        assert len(fake_github.calls("GET", "/repos/reef-org/reef")) == 2
        assert sleeps == [0.1]

    def test_explicit_budget_wins(
        self, fake_github: FakeGitHub, source: Repository
    ) -> None:
        """A per-call budget overrides configuration."""
        sleeps: list[float] = []

        with pytest.raises(ForkNotVisibleError, match="reef-org"):
            source.fork_to(
                "reef-org",
                poll=ForkPollConfig(attempts=1, delay_s=0),
                sleep=sleeps.append,
            )

        assert len(fake_github.calls("GET", "/repos/reef-org/reef")) == 1
        assert sleeps == []
