"""Shared fixtures for GitScrum tests."""

from datetime import date, datetime, timezone

import pytest

from scrum.graph import (
    BranchNode,
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

BUG = IssueTypeRef(id=1, slug="bug", title="Bug", color="#ff0000")
FEATURE = IssueTypeRef(id=2, slug="feature", title="Feature", color="#00ff00")
TODO = StatusRef(id=1, slug="todo", name="To Do")
DONE = StatusRef(id=2, slug="done", name="Done", is_closed=True)


def at(day: int, hour: int = 0) -> datetime:
    """An aware timestamp in January 2024."""
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def sample_sprint():
    """Three issues (bug 3, bug 5, feature 2) over the week of 2024-01-01."""
    return SprintGraph(
        id=1,
        slug="sprint-1",
        title="Sprint 1",
        date_start=date(2024, 1, 1),
        date_finish=date(2024, 1, 7),
        issues=(
            IssueNode(id=10, title="Crash on login", position=1, type=BUG, status=TODO, effort=3.0),
            IssueNode(id=11, title="Add export", position=2, type=FEATURE, status=DONE, effort=2.0),
            IssueNode(id=12, title="Wrong totals", position=3, type=BUG, status=TODO, effort=5.0),
        ),
    )


@pytest.fixture
def empty_sprint():
    """A sprint with no issues, branches or dates."""
    return SprintGraph(id=2, slug="empty")


@pytest.fixture
def code_sprint():
    """A sprint with three branches: commits + PRs, PRs only, nothing."""
    return SprintGraph(
        id=3,
        slug="code",
        branches=(
            BranchNode(
                id=1,
                name="feature/login",
                commits=(
                    CommitNode(sha="a1", files=(FileChange("app.py", 10, 2), FileChange("README.md", 5, 0))),
                    CommitNode(sha="a2", files=(FileChange("app.py", 7, 1),)),
                ),
                pull_requests=(PullRequestNode(number=4, title="Login", branch="feature/login"),),
            ),
            BranchNode(
                id=2,
                name="fix/totals",
                pull_requests=(
                    PullRequestNode(number=5, title="Totals", branch="fix/totals"),
                    PullRequestNode(number=6, title="Totals again", state="closed", branch="fix/totals"),
                ),
            ),
            BranchNode(id=3, name="spike"),
        ),
    )


@pytest.fixture
def make_event():
    """Factory for status-change events."""
    counter = iter(range(1, 10_000))

    def _make(issue_id: int, created_at, status=DONE, user=None):
        return StatusChangeEvent(
            id=next(counter),
            issue_id=issue_id,
            status=status,
            user=user,
            created_at=created_at,
        )

    return _make


@pytest.fixture
def users():
    return [UserRef(id=i, username=f"user{i}") for i in range(1, 6)]


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def db_sprint(db, django_user_model):
    """A persisted sprint with typed, estimated issues, history and a branch."""
    from scrum.models import (
        Branch,
        Comment,
        Commit,
        CommitFile,
        ConfigEffort,
        ConfigIssueType,
        ConfigStatus,
        Issue,
        IssueStatusChange,
        PullRequest,
        Sprint,
    )

    alice = django_user_model.objects.create_user(username="alice", password="x")
    bob = django_user_model.objects.create_user(username="bob", password="x")

    bug = ConfigIssueType.objects.create(slug="bug", title="Bug", color="#ff0000")
    feature = ConfigIssueType.objects.create(slug="feature", title="Feature", color="#00ff00")
    todo = ConfigStatus.objects.create(type="issue", slug="todo", name="To Do", position=1)
    done = ConfigStatus.objects.create(type="issue", slug="done", name="Done", position=2, is_closed=True)
    three = ConfigEffort.objects.create(title="3", effort=3)
    five = ConfigEffort.objects.create(title="5", effort=5)
    two = ConfigEffort.objects.create(title="2", effort=2)

    sprint = Sprint.objects.create(
        slug="sprint-1",
        title="Sprint 1",
        date_start=date(2024, 1, 1),
        date_finish=date(2024, 1, 7),
    )
    # Created out of position order on purpose.
    second = Issue.objects.create(sprint=sprint, title="Add export", position=2, type=feature, status=done, effort=two)
    first = Issue.objects.create(sprint=sprint, title="Crash on login", position=1, type=bug, status=todo, effort=three)
    third = Issue.objects.create(sprint=sprint, title="Wrong totals", position=3, type=bug, status=todo, effort=five)
    first.members.add(alice)
    second.members.add(alice, bob)

    IssueStatusChange.objects.create(issue=first, status=todo, user=alice, created_at=at(2))
    IssueStatusChange.objects.create(issue=second, status=done, user=bob, created_at=at(4))
    IssueStatusChange.objects.create(issue=third, status=todo, created_at=at(3))

    branch = Branch.objects.create(sprint=sprint, name="feature/login")
    commit = Commit.objects.create(branch=branch, sha="a" * 40, message="Fix login")
    CommitFile.objects.create(commit=commit, filename="app.py", additions=12, deletions=3)
    CommitFile.objects.create(commit=commit, filename="README.md", additions=4)
    PullRequest.objects.create(branch=branch, number=7, title="Login fix", url="https://github.com/acme/app/pull/7")
    Branch.objects.create(sprint=sprint, name="spike")

    Comment.objects.create(commentable=sprint, user=alice, body="Kickoff", created_at=at(1))
    Comment.objects.create(commentable=sprint, user=bob, body="Wrap-up", created_at=at(7))

    return sprint
