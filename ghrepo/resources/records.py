"""Typed records decoded from GitHub REST JSON bodies.

Records are frozen msgspec structs holding only the fields ghrepo reads.
Unknown JSON keys are ignored, so GitHub adding fields never breaks decoding.
Records carry no context; :mod:`ghrepo.resources` wraps them into bound
resources.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import msgspec


class OwnerRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Abbreviated user or organisation embedded in other payloads.

    Attributes
    ----------
    login : str
        Account login, the natural key of a user.
    id : int, optional
        Numeric account id.
    type : str, optional
        ``"User"``, ``"Organization"`` or ``"Bot"``.

    """

    login: str
    id: int | None = None
    type: str | None = None
    html_url: str | None = None


class UserRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Full user profile from ``GET /users/{login}``."""

    login: str
    id: int | None = None
    type: str | None = None
    name: str | None = None
    email: str | None = None
    company: str | None = None
    location: str | None = None
    blog: str | None = None
    html_url: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: dt.datetime | None = None


class OrganizationRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Organisation profile from ``GET /orgs/{login}``."""

    login: str
    id: int | None = None
    name: str | None = None
    description: str | None = None
    html_url: str | None = None
    public_repos: int = 0


class PermissionsRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Access the authenticated user has on a repository."""

    pull: bool = False
    push: bool = False
    admin: bool = False


class RepositoryRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Repository metadata snapshot from ``GET /repos/{owner}/{name}``.

    ``master_branch`` is the legacy spelling of ``default_branch``; both are
    kept and :attr:`Repository.master_branch` prefers the modern one.
    """

    name: str
    owner: OwnerRecord
    full_name: str | None = None
    description: str | None = None
    homepage: str | None = None
    url: str | None = None
    html_url: str | None = None
    language: str | None = None
    has_issues: bool = False
    has_wiki: bool = False
    has_downloads: bool = False
    fork: bool = False
    private: bool = False
    watchers: int = 0
    forks: int = 0
    open_issues: int = 0
    size: int = 0
    default_branch: str | None = None
    master_branch: str | None = None
    created_at: dt.datetime | None = None
    pushed_at: dt.datetime | None = None
    permissions: PermissionsRecord | None = None


class GitActorRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Git author or committer identity stored in a commit object."""

    name: str | None = None
    email: str | None = None
    date: dt.datetime | None = None


class GitCommitRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Git-level commit data nested under ``commit`` in REST payloads."""

    message: str = ""
    author: GitActorRecord | None = None
    committer: GitActorRecord | None = None
    comment_count: int = 0


class CommitParentRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Parent pointer of a commit."""

    sha: str
    url: str | None = None


class CommitStatsRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Line statistics, present only on single-commit responses."""

    additions: int = 0
    deletions: int = 0
    total: int = 0


class CommitFileRecord(msgspec.Struct, kw_only=True, frozen=True):
    """File touched by a commit, present only on single-commit responses."""

    filename: str
    status: str | None = None
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None


class CommitRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Commit from ``/repos/{owner}/{name}/commits``."""

    sha: str
    commit: GitCommitRecord = msgspec.field(default_factory=GitCommitRecord)
    url: str | None = None
    html_url: str | None = None
    author: OwnerRecord | None = None
    committer: OwnerRecord | None = None
    parents: list[CommitParentRecord] = msgspec.field(default_factory=list)
    stats: CommitStatsRecord | None = None
    files: list[CommitFileRecord] = msgspec.field(default_factory=list)


class CommitCommentRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Comment attached to a commit."""

    id: int
    commit_id: str
    body: str = ""
    path: str | None = None
    line: int | None = None
    position: int | None = None
    user: OwnerRecord | None = None
    html_url: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class BranchCommitRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Head commit pointer of a branch."""

    sha: str
    url: str | None = None


class BranchRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Branch from ``/repos/{owner}/{name}/branches``."""

    name: str
    commit: BranchCommitRecord
    protected: bool = False


class MilestoneRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Milestone from ``/repos/{owner}/{name}/milestones``."""

    number: int
    title: str
    id: int | None = None
    description: str | None = None
    state: str = "open"
    open_issues: int = 0
    closed_issues: int = 0
    creator: OwnerRecord | None = None
    html_url: str | None = None
    due_on: dt.datetime | None = None
    created_at: dt.datetime | None = None
    closed_at: dt.datetime | None = None


class HookRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Repository hook from ``/repos/{owner}/{name}/hooks``."""

    id: int
    name: str
    active: bool = True
    events: list[str] = msgspec.field(default_factory=list)
    config: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    url: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class PullRequestRefRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Head or base reference of a pull request."""

    ref: str
    sha: str
    label: str | None = None


class PullRequestRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Pull request from ``/repos/{owner}/{name}/pulls``."""

    number: int
    title: str
    state: str
    id: int | None = None
    body: str | None = None
    html_url: str | None = None
    user: OwnerRecord | None = None
    head: PullRequestRefRecord | None = None
    base: PullRequestRefRecord | None = None
    draft: bool = False
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    closed_at: dt.datetime | None = None
    merged_at: dt.datetime | None = None


class LabelRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Issue label."""

    name: str
    color: str | None = None


class IssueRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Issue from ``/repos/{owner}/{name}/issues``.

    GitHub lists pull requests on the issues endpoint too; those carry a
    ``pull_request`` object.
    """

    number: int
    title: str
    state: str
    id: int | None = None
    body: str | None = None
    html_url: str | None = None
    user: OwnerRecord | None = None
    labels: list[LabelRecord] = msgspec.field(default_factory=list)
    comments: int = 0
    pull_request: dict[str, typ.Any] | None = None
    created_at: dt.datetime | None = None
    closed_at: dt.datetime | None = None


class TeamRecord(msgspec.Struct, kw_only=True, frozen=True):
    """Team with access to a repository."""

    id: int
    name: str
    slug: str | None = None
    permission: str | None = None
    description: str | None = None
