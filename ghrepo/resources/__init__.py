"""Bound resources wrapping decoded GitHub records."""

from __future__ import annotations

from .branches import Branch
from .commits import Commit, CommitComment
from .hooks import WEB_HOOK_NAME, Hook, HookEvent
from .milestones import Milestone, MilestoneState
from .pulls import Issue, IssueState, PullRequest
from .users import OwnerRef, Team, User, owner_ref

__all__ = [
    "WEB_HOOK_NAME",
    "Branch",
    "Commit",
    "CommitComment",
    "Hook",
    "HookEvent",
    "Issue",
    "IssueState",
    "Milestone",
    "MilestoneState",
    "OwnerRef",
    "PullRequest",
    "Team",
    "User",
    "owner_ref",
]
