"""Repository facade.

:class:`Repository` is the entry point for everything below
``/repos/{owner}/{name}``. Collections come back as paged cursors (or drained
lists and sorted maps where callers want them whole); commits and milestones
are served from per-repository caches; mutations send exactly one write
request per call and leave the local snapshot alone. Call
:meth:`Repository.refresh` for a fresh snapshot.
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import threading
import typing as typ
import warnings
from urllib.parse import urlsplit

from ghrepo.binding import (
    BindingContext,
    BoundResource,
    ResourceCache,
    bind,
    bound_cursor,
    drain_bound,
)
from ghrepo.logging import get_logger, log_info
from ghrepo.resources import (
    WEB_HOOK_NAME,
    Branch,
    Commit,
    CommitComment,
    Hook,
    HookEvent,
    Issue,
    IssueState,
    Milestone,
    OwnerRef,
    PullRequest,
    Team,
    User,
)
from ghrepo.resources.records import (
    BranchRecord,
    CommitCommentRecord,
    CommitRecord,
    HookRecord,
    IssueRecord,
    MilestoneRecord,
    PermissionsRecord,
    PullRequestRecord,
    RepositoryRecord,
    TeamRecord,
    UserRecord,
)
from ghrepo.transport.errors import GitHubAPIError
from ghrepo.transport.paths import repo_url

from .config import ForkPollConfig
from .errors import NotAuthorizedForOwnerError
from .forking import Sleeper, poll_for_fork
from .legacy_hooks import PostCommitHooks

if typ.TYPE_CHECKING:
    import datetime as dt

    from ghrepo.paging import PagedCursor

    from .organization import Organization

logger = get_logger(__name__)

_DEFAULT_WEB_HOST = "github.com"


class RepositoryEventType(enum.StrEnum):
    """Structured log event types for repository mutations."""

    EDITED = "repository.edited"
    DELETED = "repository.deleted"
    COLLABORATORS_CHANGED = "repository.collaborators.changed"
    FORK_REQUESTED = "repository.fork.requested"


def find_repository(
    context: BindingContext, owner: str, name: str
) -> Repository | None:
    """Fetch ``owner/name`` bound to ``context``; ``None`` on a 404."""
    try:
        record = context.transport.fetch_one(repo_url(owner, name), RepositoryRecord)
    except GitHubAPIError as exc:
        if exc.is_not_found:
            return None
        raise
    return bind(Repository(record), context.without_repository())


class Repository(BoundResource[RepositoryRecord]):
    """A GitHub repository snapshot plus the operations on it.

    Two repositories are equal when they share owner login and name; nothing
    else in the snapshot takes part in equality or hashing.

    Resources handed out by a repository are bound to a child context whose
    ``repository`` is this object, which is how a :class:`Commit` finds its
    way back to :meth:`get_commit` for its parents.
    """

    __slots__ = (
        "_child_context",
        "_commits",
        "_init_lock",
        "_milestones",
        "_owner",
    )

    def __init__(self, record: RepositoryRecord) -> None:
        """Wrap ``record``; the owner stub shares the repository's context."""
        super().__init__(record)
        self._owner = OwnerRef(record.owner)
        self._child_context: BindingContext | None = None
        self._commits: ResourceCache[str, Commit] | None = None
        self._milestones: ResourceCache[int, Milestone] | None = None
        self._init_lock = threading.Lock()

    def nested_resources(self) -> cabc.Iterable[BoundResource[typ.Any]]:
        """Yield the owner stub."""
        return [self._owner]

    # -- identity -------------------------------------------------------

    @property
    def owner(self) -> OwnerRef:
        """Return the owner stub; call :meth:`get_owner` for the profile."""
        return self._owner

    @property
    def owner_login(self) -> str:
        """Return the owner login."""
        return self._owner.login

    @property
    def name(self) -> str:
        """Return the repository name without the owner."""
        return self.record.name

    @property
    def full_name(self) -> str:
        """Return ``owner/name``."""
        return self.record.full_name or f"{self.owner_login}/{self.name}"

    def __eq__(self, other: object) -> bool:
        """Compare repositories by owner login and name."""
        if not isinstance(other, Repository):
            return NotImplemented
        return (self.owner_login, self.name) == (other.owner_login, other.name)

    def __hash__(self) -> int:
        """Hash by owner login and name."""
        return hash(("repository", self.owner_login, self.name))

    def __str__(self) -> str:
        """Return ``Repository:<owner>:<name>``."""
        return f"Repository:{self.owner_login}:{self.name}"

    def __repr__(self) -> str:
        """Return a debug representation naming the repository."""
        return f"Repository({self.owner_login!r}, {self.name!r})"

    # -- snapshot fields ------------------------------------------------

    @property
    def description(self) -> str | None:
        """Return the description at snapshot time."""
        return self.record.description

    @property
    def homepage(self) -> str | None:
        """Return the homepage URL at snapshot time."""
        return self.record.homepage

    @property
    def url(self) -> str | None:
        """Return the API URL of the repository."""
        return self.record.url

    @property
    def html_url(self) -> str | None:
        """Return the web URL of the repository."""
        return self.record.html_url

    @property
    def git_transport_url(self) -> str:
        """Return the read-only ``git://`` clone URL."""
        return f"git://{self._web_host()}/{self.owner_login}/{self.name}.git"

    @property
    def http_transport_url(self) -> str:
        """Return the HTTPS clone URL."""
        return f"https://{self._web_host()}/{self.owner_login}/{self.name}.git"

    @property
    def language(self) -> str | None:
        """Return the primary language GitHub detected."""
        return self.record.language

    @property
    def has_issues(self) -> bool:
        """Return True when the issue tracker is enabled."""
        return self.record.has_issues

    @property
    def has_wiki(self) -> bool:
        """Return True when the wiki is enabled."""
        return self.record.has_wiki

    @property
    def has_downloads(self) -> bool:
        """Return True when downloads are enabled."""
        return self.record.has_downloads

    @property
    def is_fork(self) -> bool:
        """Return True when the repository is a fork."""
        return self.record.fork

    @property
    def is_private(self) -> bool:
        """Return True for private repositories."""
        return self.record.private

    @property
    def watchers(self) -> int:
        """Return the watcher count."""
        return self.record.watchers

    @property
    def forks(self) -> int:
        """Return the fork count."""
        return self.record.forks

    @property
    def open_issues(self) -> int:
        """Return the open issue count."""
        return self.record.open_issues

    @property
    def size(self) -> int:
        """Return the repository size in kilobytes."""
        return self.record.size

    @property
    def master_branch(self) -> str | None:
        """Return the default branch name."""
        return self.record.default_branch or self.record.master_branch

    @property
    def created_at(self) -> dt.datetime | None:
        """Return the creation time."""
        return self.record.created_at

    @property
    def pushed_at(self) -> dt.datetime | None:
        """Return the time of the last push."""
        return self.record.pushed_at

    @property
    def permissions(self) -> PermissionsRecord | None:
        """Return the authenticated user's permissions, when GitHub sent them."""
        return self.record.permissions

    @property
    def has_pull_access(self) -> bool:
        """Return True when the authenticated user may pull."""
        permissions = self.record.permissions
        return permissions is not None and permissions.pull

    @property
    def has_push_access(self) -> bool:
        """Return True when the authenticated user may push."""
        permissions = self.record.permissions
        return permissions is not None and permissions.push

    @property
    def has_admin_access(self) -> bool:
        """Return True when the authenticated user administers the repository."""
        permissions = self.record.permissions
        return permissions is not None and permissions.admin

    def _web_host(self) -> str:
        if self.html_url:
            host = urlsplit(self.html_url).netloc
            if host:
                return host
        return _DEFAULT_WEB_HOST

    # -- context and caches ----------------------------------------------

    @property
    def child_context(self) -> BindingContext:
        """Return the context resources of this repository are bound to."""
        with self._init_lock:
            if self._child_context is None:
                self._child_context = BindingContext(
                    transport=self.transport, repository=self
                )
            return self._child_context

    def _commit_cache(self) -> ResourceCache[str, Commit]:
        context = self.child_context
        with self._init_lock:
            if self._commits is None:
                self._commits = ResourceCache(context, self._load_commit)
            return self._commits

    def _milestone_cache(self) -> ResourceCache[int, Milestone]:
        context = self.child_context
        with self._init_lock:
            if self._milestones is None:
                self._milestones = ResourceCache(context, self._load_milestone)
            return self._milestones

    def _load_commit(self, sha: str) -> Commit:
        record = self.transport.fetch_one(self._path("commits", sha), CommitRecord)
        return Commit(record)

    def _load_milestone(self, number: int) -> Milestone:
        record = self.transport.fetch_one(
            self._path("milestones", number), MilestoneRecord
        )
        return Milestone(record)

    def _path(self, *parts: str | int) -> str:
        return repo_url(self.owner_login, self.name, *parts)

    # -- commits ---------------------------------------------------------

    def list_commits(self) -> PagedCursor[Commit]:
        """List commits, newest first, one page at a time."""
        return bound_cursor(
            self.child_context, self._path("commits"), CommitRecord, Commit
        )

    def list_commit_comments(self) -> PagedCursor[CommitComment]:
        """List commit comments across the whole repository."""
        return bound_cursor(
            self.child_context,
            self._path("comments"),
            CommitCommentRecord,
            CommitComment,
        )

    def get_commit(self, sha: str) -> Commit:
        """Return the commit ``sha``, fetched at most once per repository."""
        return self._commit_cache().get(sha)

    # -- branches and milestones -----------------------------------------

    def get_branches(self) -> dict[str, Branch]:
        """Return every branch keyed by name, in name order."""
        branches = drain_bound(
            self.child_context, self._path("branches"), BranchRecord, Branch
        )
        return {branch.name: branch for branch in sorted(branches, key=_branch_name)}

    def get_milestones(self) -> dict[int, Milestone]:
        """Return every open milestone keyed by number, in number order."""
        milestones = drain_bound(
            self.child_context, self._path("milestones"), MilestoneRecord, Milestone
        )
        return {
            milestone.number: milestone
            for milestone in sorted(milestones, key=_milestone_number)
        }

    def get_milestone(self, number: int) -> Milestone:
        """Return milestone ``number``, fetched at most once per repository."""
        return self._milestone_cache().get(number)

    def create_milestone(
        self, title: str, description: str | None = None
    ) -> Milestone:
        """Create a milestone and return it bound to this repository."""
        fields: dict[str, object] = {"title": title}
        if description is not None:
            fields["description"] = description
        record = self.transport.send(
            self._path("milestones"), "POST", fields, record_type=MilestoneRecord
        )
        return bind(Milestone(record), self.child_context)

    # -- pull requests and issues ----------------------------------------

    def get_pull_request(self, number: int) -> PullRequest:
        """Return pull request ``number``."""
        record = self.transport.fetch_one(
            self._path("pulls", number), PullRequestRecord
        )
        return bind(PullRequest(record), self.child_context)

    def get_pull_requests(
        self, state: IssueState = IssueState.OPEN
    ) -> list[PullRequest]:
        """Return every pull request in ``state``."""
        return drain_bound(
            self.child_context,
            self._path("pulls"),
            PullRequestRecord,
            PullRequest,
            params={"state": IssueState(state).value},
        )

    def get_issues(self, state: IssueState = IssueState.OPEN) -> list[Issue]:
        """Return every issue in ``state``, pull requests included."""
        return drain_bound(
            self.child_context,
            self._path("issues"),
            IssueRecord,
            Issue,
            params={"state": IssueState(state).value},
        )

    # -- hooks -----------------------------------------------------------

    def get_hooks(self) -> list[Hook]:
        """Return the currently configured hooks."""
        return drain_bound(self.child_context, self._path("hooks"), HookRecord, Hook)

    def get_hook(self, hook_id: int) -> Hook:
        """Return hook ``hook_id``."""
        record = self.transport.fetch_one(self._path("hooks", hook_id), HookRecord)
        return bind(Hook(record), self.child_context)

    def create_hook(
        self,
        name: str,
        config: cabc.Mapping[str, str],
        events: cabc.Iterable[HookEvent | str] | None = None,
        *,
        active: bool = True,
    ) -> Hook:
        """Create a hook.

        Parameters
        ----------
        name
            Hook type, ``"web"`` for webhooks.
        config
            Hook configuration; webhooks need at least ``url``.
        events
            Events to subscribe to. ``None`` leaves the choice to GitHub,
            which subscribes new hooks to ``push`` only.
        active
            Whether GitHub should deliver events right away.

        """
        fields: dict[str, object] = {
            "name": name,
            "active": active,
            "config": dict(config),
        }
        if events is not None:
            fields["events"] = [HookEvent(event).value for event in events]
        record = self.transport.send(
            self._path("hooks"), "POST", fields, record_type=HookRecord
        )
        return bind(Hook(record), self.child_context)

    def create_web_hook(
        self, url: str, events: cabc.Iterable[HookEvent | str] | None = None
    ) -> Hook:
        """Create an active webhook delivering to ``url``."""
        return self.create_hook(WEB_HOOK_NAME, {"url": url}, events)

    @property
    def post_commit_hooks(self) -> PostCommitHooks:
        """Return the live view of webhook URLs.

        .. deprecated:: 0.1
           Use :meth:`get_hooks`, :meth:`create_web_hook` and
           :meth:`Hook.delete` instead.
        """
        warnings.warn(
            "Repository.post_commit_hooks is deprecated; use get_hooks(), "
            "create_web_hook() and Hook.delete() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return PostCommitHooks(self)

    # -- people ----------------------------------------------------------

    def get_collaborators(self) -> set[User]:
        """Return the users with push access."""
        return set(
            drain_bound(
                self.context.without_repository(),
                self._path("collaborators"),
                UserRecord,
                User,
            )
        )

    def get_collaborator_names(self) -> set[str]:
        """Return the logins of the users with push access."""
        records = self.transport.fetch_all(self._path("collaborators"), UserRecord)
        return {record.login for record in records}

    def get_teams(self) -> frozenset[Team]:
        """Return the teams with access to the repository."""
        teams = drain_bound(
            self.context.without_repository(), self._path("teams"), TeamRecord, Team
        )
        return frozenset(teams)

    def get_owner(self) -> User:
        """Fetch the owner's full profile."""
        return self._owner.resolve()

    def add_collaborators(self, *users: User | OwnerRef | str) -> None:
        """Grant push access; only the owner may do this."""
        self._modify_collaborators(users, "PUT")

    def remove_collaborators(self, *users: User | OwnerRef | str) -> None:
        """Revoke push access; only the owner may do this."""
        self._modify_collaborators(users, "DELETE")

    def _modify_collaborators(
        self, users: cabc.Iterable[User | OwnerRef | str], method: str
    ) -> None:
        self._verify_mine()
        logins = [user if isinstance(user, str) else user.login for user in users]
        for login in logins:
            self.transport.send(self._path("collaborators", login), method)
        log_info(
            logger,
            "[%s] repository=%s method=%s logins=%s",
            RepositoryEventType.COLLABORATORS_CHANGED,
            self.full_name,
            method,
            ",".join(logins),
        )

    def _verify_mine(self) -> None:
        login = self.transport.authenticated_login
        # GitHub logins are case-insensitive.
        if login.casefold() != self.owner_login.casefold():
            raise NotAuthorizedForOwnerError(self.owner_login, login)

    # -- edits -----------------------------------------------------------

    def rename_to(self, name: str) -> None:
        """Rename the repository. This object keeps the old name."""
        self._edit("name", name)

    def set_description(self, value: str) -> None:
        """Replace the description."""
        self._edit("description", value)

    def set_homepage(self, value: str) -> None:
        """Replace the homepage URL."""
        self._edit("homepage", value)

    def enable_issue_tracker(self, value: bool) -> None:  # noqa: FBT001
        """Turn the issue tracker on or off."""
        self._edit("has_issues", value)

    def enable_wiki(self, value: bool) -> None:  # noqa: FBT001
        """Turn the wiki on or off."""
        self._edit("has_wiki", value)

    def enable_downloads(self, value: bool) -> None:  # noqa: FBT001
        """Turn downloads on or off."""
        self._edit("has_downloads", value)

    def _edit(self, key: str, value: str | bool) -> None:
        # The edit endpoint requires the name even when it is unchanged.
        fields: dict[str, object] = {"name": self.name}
        fields[key] = value
        self.transport.send(self._path(), "PATCH", fields)
        log_info(
            logger,
            "[%s] repository=%s field=%s",
            RepositoryEventType.EDITED,
            self.full_name,
            key,
        )

    def delete(self) -> None:
        """Delete the repository on GitHub."""
        self.transport.send(self._path(), "DELETE")
        log_info(
            logger, "[%s] repository=%s", RepositoryEventType.DELETED, self.full_name
        )

    def refresh(self) -> Repository:
        """Fetch a new snapshot of this repository.

        The returned object is a different instance with its own caches.
        """
        record = self.transport.fetch_one(self._path(), RepositoryRecord)
        return bind(Repository(record), self.context.without_repository())

    # -- forks -----------------------------------------------------------

    def fork(self) -> Repository:
        """Fork into the authenticated user's account and return the fork."""
        record = self.transport.send(
            self._path("forks"), "POST", record_type=RepositoryRecord
        )
        log_info(
            logger,
            "[%s] source=%s target=%s",
            RepositoryEventType.FORK_REQUESTED,
            self.full_name,
            record.owner.login,
        )
        return bind(Repository(record), self.context.without_repository())

    def fork_to(
        self,
        organization: Organization | str,
        *,
        poll: ForkPollConfig | None = None,
        sleep: Sleeper | None = None,
        cancel: threading.Event | None = None,
    ) -> Repository:
        """Fork into ``organization`` and wait until the fork is visible.

        GitHub creates forks asynchronously, so after the fork request the
        organisation is asked for a repository of the same name until one
        appears or the polling budget runs out.

        ``sleep`` and ``cancel`` are passed to :func:`poll_for_fork`: an
        injected ``sleep`` always runs and ``cancel`` is checked after it,
        otherwise ``cancel`` is waited on so that setting it ends the delay.

        Raises
        ------
        ForkNotVisibleError
            If the fork never appeared within ``poll.attempts`` lookups.
        ForkPollInterruptedError
            If ``cancel`` was set while waiting between lookups.

        """
        org_login = (
            organization if isinstance(organization, str) else organization.login
        )
        self.transport.send(self._path("forks"), "POST", {"organization": org_login})
        log_info(
            logger,
            "[%s] source=%s target=%s",
            RepositoryEventType.FORK_REQUESTED,
            self.full_name,
            org_login,
        )
        lookup_context = self.context.without_repository()
        return poll_for_fork(
            lambda: find_repository(lookup_context, org_login, self.name),
            owner=self.owner_login,
            name=self.name,
            organization=org_login,
            config=poll or ForkPollConfig.from_transport_config(self.transport.config),
            sleep=sleep,
            cancel=cancel,
        )


def _branch_name(branch: Branch) -> str:
    return branch.name


def _milestone_number(milestone: Milestone) -> int:
    return milestone.number
