"""Immutable snapshot of a sprint and everything hanging off it.

The repository layer builds these from ORM rows; the metrics functions only
ever read them, so a report never triggers a lazy database query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class UserRef:
    id: int
    username: str
    name: str = ""


@dataclass(frozen=True)
class StatusRef:
    id: int
    slug: str
    name: str
    color: str = ""
    is_closed: bool = False


@dataclass(frozen=True)
class IssueTypeRef:
    id: int
    slug: str
    title: str
    color: str = ""


@dataclass(frozen=True)
class StatusChangeEvent:
    """A timestamped status change on an issue."""

    id: int
    issue_id: int
    status: StatusRef | None = None
    user: UserRef | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class IssueNode:
    id: int
    title: str
    position: int = 0
    type: IssueTypeRef | None = None
    status: StatusRef | None = None
    effort: float | None = None
    members: tuple[UserRef, ...] = ()
    events: tuple[StatusChangeEvent, ...] = ()


@dataclass(frozen=True)
class FileChange:
    filename: str
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class CommitNode:
    sha: str
    message: str = ""
    files: tuple[FileChange, ...] = ()


@dataclass(frozen=True)
class PullRequestNode:
    number: int
    title: str
    state: str = "open"
    url: str = ""
    branch: str = ""


@dataclass(frozen=True)
class BranchNode:
    id: int
    name: str
    commits: tuple[CommitNode, ...] = ()
    pull_requests: tuple[PullRequestNode, ...] = ()


@dataclass(frozen=True)
class CommentNode:
    id: int
    body: str
    user: UserRef | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SprintGraph:
    """A sprint with its issues, branches and comments pre-loaded.

    ``issues`` are in position order and ``comments`` newest first, matching
    the ordering of the corresponding model relations.
    """

    id: int
    slug: str = ""
    title: str = ""
    date_start: date | None = None
    date_finish: date | None = None
    is_private: bool = False
    state: int = 0
    position: int = 0
    issues: tuple[IssueNode, ...] = field(default_factory=tuple)
    branches: tuple[BranchNode, ...] = field(default_factory=tuple)
    comments: tuple[CommentNode, ...] = field(default_factory=tuple)
