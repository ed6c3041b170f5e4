"""Load a sprint and its related rows into an immutable :class:`SprintGraph`."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db.models import Prefetch

from scrum.graph import (
    BranchNode,
    CommentNode,
    CommitNode,
    FileChange,
    IssueNode,
    IssueTypeRef,
    PullRequestNode,
    SprintGraph,
    StatusChangeEvent,
    StatusRef,
    UserRef,
)
from scrum.models import (
    Branch,
    Comment,
    Commit,
    Issue,
    IssueStatusChange,
    Sprint,
)

logger = logging.getLogger("scrum.repository")


class SprintNotFound(LookupError):
    """Raised when no live sprint matches the lookup."""

    def __init__(self, lookup: dict) -> None:
        self.lookup = lookup
        detail = ", ".join(f"{key}={value!r}" for key, value in lookup.items())
        super().__init__(f"Sprint not found: {detail}")


def _user(user) -> UserRef | None:
    if user is None:
        return None
    name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return UserRef(id=user.pk, username=user.get_username(), name=name)


def _status(status) -> StatusRef | None:
    if status is None:
        return None
    return StatusRef(
        id=status.pk,
        slug=status.slug,
        name=status.name,
        color=status.color,
        is_closed=status.is_closed,
    )


def _issue_type(issue_type) -> IssueTypeRef | None:
    if issue_type is None:
        return None
    return IssueTypeRef(id=issue_type.pk, slug=issue_type.slug, title=issue_type.title, color=issue_type.color)


def _issue(issue: Issue) -> IssueNode:
    return IssueNode(
        id=issue.pk,
        title=issue.title,
        position=issue.position,
        type=_issue_type(issue.type),
        status=_status(issue.status),
        effort=float(issue.effort.effort) if issue.effort is not None else None,
        members=tuple(_user(user) for user in issue.members.all()),
        events=tuple(
            StatusChangeEvent(
                id=change.pk,
                issue_id=issue.pk,
                status=_status(change.status),
                user=_user(change.user),
                created_at=change.created_at,
            )
            for change in issue.status_changes.all()
        ),
    )


def _branch(branch: Branch) -> BranchNode:
    return BranchNode(
        id=branch.pk,
        name=branch.name,
        commits=tuple(
            CommitNode(
                sha=commit.sha,
                message=commit.message,
                files=tuple(
                    FileChange(filename=f.filename, additions=f.additions, deletions=f.deletions)
                    for f in commit.files.all()
                ),
            )
            for commit in branch.commits.all()
        ),
        pull_requests=tuple(
            PullRequestNode(number=pr.number, title=pr.title, state=pr.state, url=pr.url, branch=branch.name)
            for pr in branch.pull_requests.all()
        ),
    )


def to_graph(sprint: Sprint) -> SprintGraph:
    """Convert a prefetched :class:`Sprint` into a :class:`SprintGraph`.

    Reads only the relations already in the prefetch cache of ``sprint``;
    callers that skip :meth:`SprintGraphLoader.queryset` pay one query per
    relation instead.
    """
    return SprintGraph(
        id=sprint.pk,
        slug=sprint.slug or "",
        title=sprint.title,
        date_start=sprint.date_start,
        date_finish=sprint.date_finish,
        is_private=sprint.is_private,
        state=sprint.state,
        position=sprint.position,
        issues=tuple(_issue(issue) for issue in sprint.issues.all()),
        branches=tuple(_branch(branch) for branch in sprint.branches.all()),
        comments=tuple(
            CommentNode(id=c.pk, body=c.body, user=_user(c.user), created_at=c.created_at)
            for c in sprint.comments.all()
        ),
    )


class SprintGraphLoader:
    """Read-only access to fully populated sprint graphs."""

    def queryset(self):
        """Live sprints with every relation the metrics need prefetched."""
        user_model = get_user_model()
        issues = (
            Issue.objects.select_related("type", "status", "effort")
            .prefetch_related(
                Prefetch("members", queryset=user_model.objects.order_by("pk")),
                Prefetch(
                    "status_changes",
                    queryset=IssueStatusChange.objects.select_related("status", "user").order_by("id"),
                ),
            )
            .order_by("position", "id")
        )
        branches = Branch.objects.order_by("id").prefetch_related(
            Prefetch("commits", queryset=Commit.objects.order_by("id").prefetch_related("files")),
            "pull_requests",
        )
        comments = Comment.objects.select_related("user").order_by("-created_at", "-id")

        return Sprint.objects.prefetch_related(
            Prefetch("issues", queryset=issues),
            Prefetch("branches", queryset=branches),
            Prefetch("comments", queryset=comments),
        )

    def _get(self, **lookup) -> SprintGraph:
        try:
            sprint = self.queryset().get(**lookup)
        except Sprint.DoesNotExist:
            logger.info("Sprint lookup failed: %s", lookup)
            raise SprintNotFound(lookup) from None

        graph = to_graph(sprint)
        logger.debug(
            "Loaded sprint %s: %d issues, %d branches",
            graph.slug, len(graph.issues), len(graph.branches),
        )
        return graph

    def by_slug(self, slug: str) -> SprintGraph:
        return self._get(slug=slug)

    def by_id(self, sprint_id: int) -> SprintGraph:
        return self._get(pk=sprint_id)
