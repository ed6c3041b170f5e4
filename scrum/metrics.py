"""Derived sprint metrics computed over a pre-loaded :class:`SprintGraph`.

Every function here is a read-only projection of the graph it is given: no
database access, no mutation, no state kept between calls. Functions that
produce user-facing text take a ``translate`` callable so the caller decides
the language.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal

from django.utils.translation import gettext

from scrum import workdays
from scrum.graph import (
    IssueNode,
    PullRequestNode,
    SprintGraph,
    StatusChangeEvent,
    UserRef,
)

Translator = Callable[[str], str]

ACTIVITY_LIMIT = 15
MEMBER_LIMIT = 3


def _round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Timebox
# ---------------------------------------------------------------------------

def working_days(sprint: SprintGraph, start=None) -> int:
    """Weekdays from ``start`` (default: the sprint start) to the sprint finish."""
    begin = sprint.date_start if start is None else start
    return workdays.working_days(begin, sprint.date_finish)


def weeks(sprint: SprintGraph, start=None) -> int:
    begin = sprint.date_start if start is None else start
    return workdays.weeks(begin, sprint.date_finish)


def visibility(sprint, translate: Translator = gettext) -> str:
    return translate("Private") if sprint.is_private else translate("Public")


def timebox(sprint, translate: Translator = gettext) -> str:
    """Render the sprint dates as ``"<start> to <finish>"``.

    An unset date renders as an empty string rather than failing.
    """
    start = workdays.as_date(sprint.date_start)
    finish = workdays.as_date(sprint.date_finish)
    start_text = start.isoformat() if start is not None else ""
    finish_text = finish.isoformat() if finish is not None else ""
    return f"{start_text} {translate('to')} {finish_text}"


# ---------------------------------------------------------------------------
# Code activity
# ---------------------------------------------------------------------------

def total_additions(sprint: SprintGraph) -> int:
    """Sum of line additions across every file of every commit on every branch."""
    return sum(
        change.additions
        for branch in sprint.branches
        for commit in branch.commits
        for change in commit.files
    )


def total_pull_requests(sprint: SprintGraph) -> int:
    return sum(len(branch.pull_requests) for branch in sprint.branches)


def pull_requests(sprint: SprintGraph) -> list[tuple[PullRequestNode, ...]]:
    """Pull requests grouped per branch, skipping branches that have none."""
    return [branch.pull_requests for branch in sprint.branches if len(branch.pull_requests) > 0]


# ---------------------------------------------------------------------------
# Effort
# ---------------------------------------------------------------------------

def get_effort(sprint: SprintGraph) -> float:
    """Total effort of the sprint; issues without an effort count as zero."""
    return sum(issue.effort for issue in sprint.issues if issue.effort is not None)


def get_effort_avg(sprint: SprintGraph) -> float:
    """Mean effort of the estimated issues, rounded half-up to 2 decimals.

    Returns 0.0 when no issue carries an effort value.
    """
    values = [issue.effort for issue in sprint.issues if issue.effort is not None]
    if not values:
        return 0.0
    return _round2(sum(values) / len(values))


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

def activities(sprint: SprintGraph, limit: int = ACTIVITY_LIMIT) -> list[StatusChangeEvent]:
    """Most recent status changes across the sprint's issues, newest first.

    Events sharing a timestamp keep their traversal order (issues by
    position, then each issue's events as stored). Events without a
    timestamp go last.
    """
    timed: list[StatusChangeEvent] = []
    untimed: list[StatusChangeEvent] = []
    for issue in sprint.issues:
        for event in issue.events:
            if event.created_at is None:
                untimed.append(event)
            else:
                timed.append(event)

    ordered = sorted(timed, key=lambda event: event.created_at, reverse=True) + untimed
    return ordered[:limit]


def issue_types(sprint: SprintGraph) -> list[dict]:
    """Issue count per issue type, largest group first."""
    groups: dict[str, list[IssueNode]] = {}
    for issue in sprint.issues:
        slug = issue.type.slug if issue.type is not None else ""
        groups.setdefault(slug, []).append(issue)

    rows = []
    for slug, issues in groups.items():
        first = issues[0].type
        rows.append({
            "sprint": sprint.slug,
            "slug": slug,
            "title": first.title if first is not None else None,
            "color": first.color if first is not None else None,
            "total": len(issues),
        })

    return sorted(rows, key=lambda row: row["total"], reverse=True)


def issue_status(sprint: SprintGraph) -> dict[str, list[IssueNode]]:
    """Group issues by the slug of their current status."""
    groups: dict[str, list[IssueNode]] = {}
    for issue in sprint.issues:
        slug = issue.status.slug if issue.status is not None else ""
        groups.setdefault(slug, []).append(issue)
    return groups


def issue_members(sprint: SprintGraph, limit: int = MEMBER_LIMIT) -> list[UserRef]:
    """First ``limit`` distinct users assigned to the sprint's issues."""
    seen: set[int] = set()
    members: list[UserRef] = []
    for issue in sprint.issues:
        for user in issue.members:
            if user.id in seen:
                continue
            seen.add(user.id)
            members.append(user)
            if len(members) == limit:
                return members
    return members


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def _user_dict(user: UserRef | None) -> dict | None:
    if user is None:
        return None
    return {"id": user.id, "username": user.username, "name": user.name}


def _event_dict(event: StatusChangeEvent) -> dict:
    return {
        "id": event.id,
        "issue_id": event.issue_id,
        "status": event.status.slug if event.status is not None else None,
        "user": _user_dict(event.user),
        "created_at": event.created_at.isoformat() if event.created_at is not None else None,
    }


def serialize_activities(events: list[StatusChangeEvent]) -> list[dict]:
    return [_event_dict(event) for event in events]


def sprint_report(
    sprint: SprintGraph,
    translate: Translator = gettext,
    activity_limit: int = ACTIVITY_LIMIT,
) -> dict:
    """Collect every sprint metric into one JSON-ready dict.

    Args:
        sprint: A fully loaded sprint graph.
        translate: Translation function for the visibility and timebox labels.
        activity_limit: Maximum number of activity entries.

    Returns:
        A dict of plain values (strings, numbers, lists and dicts).
    """
    start = workdays.as_date(sprint.date_start)
    finish = workdays.as_date(sprint.date_finish)

    return {
        "id": sprint.id,
        "slug": sprint.slug,
        "title": sprint.title,
        "state": sprint.state,
        "visibility": visibility(sprint, translate),
        "timebox": timebox(sprint, translate),
        "date_start": start.isoformat() if start is not None else None,
        "date_finish": finish.isoformat() if finish is not None else None,
        "working_days": working_days(sprint),
        "weeks": weeks(sprint),
        "issues": len(sprint.issues),
        "effort": {
            "total": get_effort(sprint),
            "average": get_effort_avg(sprint),
        },
        "issue_types": issue_types(sprint),
        "issue_status": {
            slug: [{"id": issue.id, "title": issue.title} for issue in issues]
            for slug, issues in issue_status(sprint).items()
        },
        "members": [_user_dict(user) for user in issue_members(sprint)],
        "activities": serialize_activities(activities(sprint, activity_limit)),
        "additions": total_additions(sprint),
        "pull_requests": {
            "total": total_pull_requests(sprint),
            "branches": [
                [
                    {"number": pr.number, "title": pr.title, "state": pr.state, "url": pr.url, "branch": pr.branch}
                    for pr in prs
                ]
                for prs in pull_requests(sprint)
            ],
        },
        "comments": len(sprint.comments),
    }
