"""Tests for the sprint metrics computed over in-memory graphs."""

from dataclasses import replace
from datetime import date

import pytest

from conftest import BUG, DONE, FEATURE, TODO, at
from scrum import metrics
from scrum.graph import IssueNode, SprintGraph


class TestTimebox:
    """Working days, weeks, visibility and timebox text."""

    def test_working_days_and_weeks(self, sample_sprint):
        assert metrics.working_days(sample_sprint) == 5
        assert metrics.weeks(sample_sprint) == 1

    def test_working_days_from_explicit_start(self, sample_sprint):
        """An explicit start replaces the sprint start; the end stays put."""
        assert metrics.working_days(sample_sprint, date(2024, 1, 4)) == 2

    def test_working_days_finish_before_start(self, sample_sprint):
        sprint = replace(sample_sprint, date_finish=date(2023, 12, 1))
        assert metrics.working_days(sprint) == 0

    def test_visibility_uses_translation(self, sample_sprint):
        translate = {"Public": "Público", "Private": "Privado"}.get
        assert metrics.visibility(sample_sprint, translate) == "Público"
        assert metrics.visibility(replace(sample_sprint, is_private=True), translate) == "Privado"

    def test_timebox(self, sample_sprint):
        assert metrics.timebox(sample_sprint, str.upper) == "2024-01-01 TO 2024-01-07"

    def test_timebox_with_unset_dates(self, empty_sprint):
        """Unset dates render empty rather than failing."""
        assert metrics.timebox(empty_sprint, lambda text: text) == " to "
        sprint = replace(empty_sprint, date_finish=date(2024, 1, 7))
        assert metrics.timebox(sprint, lambda text: text) == " to 2024-01-07"


class TestCodeActivity:
    """Additions and pull request rollups."""

    def test_total_additions(self, code_sprint):
        assert metrics.total_additions(code_sprint) == 22

    def test_total_pull_requests(self, code_sprint):
        assert metrics.total_pull_requests(code_sprint) == 3

    def test_pull_requests_skip_branches_without_any(self, code_sprint):
        groups = metrics.pull_requests(code_sprint)
        assert [[pr.number for pr in group] for group in groups] == [[4], [5, 6]]

    def test_no_branches(self, empty_sprint):
        assert metrics.total_additions(empty_sprint) == 0
        assert metrics.total_pull_requests(empty_sprint) == 0
        assert metrics.pull_requests(empty_sprint) == []

    def test_branches_without_commits(self, code_sprint):
        sprint = replace(code_sprint, branches=code_sprint.branches[1:])
        assert metrics.total_additions(sprint) == 0


class TestEffort:
    """Effort totals and averages."""

    def test_sum_and_average(self, sample_sprint):
        assert metrics.get_effort(sample_sprint) == 10
        assert metrics.get_effort_avg(sample_sprint) == 3.33

    def test_average_matches_sum_over_count(self, sample_sprint):
        expected = round(metrics.get_effort(sample_sprint) / len(sample_sprint.issues), 2)
        assert metrics.get_effort_avg(sample_sprint) == expected

    def test_no_issues(self, empty_sprint):
        """The average of nothing is 0 rather than a division error."""
        assert metrics.get_effort(empty_sprint) == 0
        assert metrics.get_effort_avg(empty_sprint) == 0.0

    def test_unestimated_issues(self, sample_sprint):
        """Issues without effort add nothing and stay out of the average."""
        extra = IssueNode(id=99, title="Unestimated", position=4)
        sprint = replace(sample_sprint, issues=sample_sprint.issues + (extra,))
        assert metrics.get_effort(sprint) == 10
        assert metrics.get_effort_avg(sprint) == 3.33

    def test_average_rounds_half_up(self):
        sprint = SprintGraph(
            id=1,
            issues=(IssueNode(id=1, title="a", effort=1.0), IssueNode(id=2, title="b", effort=0.125)),
        )
        # 1.125 / 2 = 0.5625 -> 0.56; 0.125 alone -> 0.13
        assert metrics.get_effort_avg(sprint) == 0.56
        assert metrics.get_effort_avg(replace(sprint, issues=sprint.issues[1:])) == 0.13


class TestActivities:
    """The capped, newest-first activity feed."""

    def test_newest_first(self, sample_sprint, make_event):
        first, second, third = sample_sprint.issues
        issues = (
            replace(first, events=(make_event(10, at(2)), make_event(10, at(5)))),
            replace(second, events=(make_event(11, at(3)),)),
            third,
        )
        feed = metrics.activities(replace(sample_sprint, issues=issues))
        assert [event.created_at for event in feed] == [at(5), at(3), at(2)]

    def test_capped_at_fifteen(self, sample_sprint, make_event):
        first = replace(
            sample_sprint.issues[0],
            events=tuple(make_event(10, at(1, hour)) for hour in range(20)),
        )
        feed = metrics.activities(replace(sample_sprint, issues=(first,)))
        assert len(feed) == 15
        assert feed[0].created_at == at(1, 19)
        assert all(a.created_at >= b.created_at for a, b in zip(feed, feed[1:]))

    def test_custom_limit(self, sample_sprint, make_event):
        first = replace(sample_sprint.issues[0], events=tuple(make_event(10, at(d)) for d in range(1, 6)))
        assert len(metrics.activities(replace(sample_sprint, issues=(first,)), limit=2)) == 2

    def test_ties_keep_traversal_order(self, sample_sprint, make_event):
        """Equal timestamps stay in issue-position then stored order."""
        first, second, _ = sample_sprint.issues
        a = make_event(10, at(3))
        b = make_event(10, at(3))
        c = make_event(11, at(3))
        issues = (replace(first, events=(a, b)), replace(second, events=(c,)))
        feed = metrics.activities(replace(sample_sprint, issues=issues))
        assert [event.id for event in feed] == [a.id, b.id, c.id]

    def test_untimed_events_go_last(self, sample_sprint, make_event):
        untimed = make_event(10, None)
        timed = make_event(10, at(1))
        first = replace(sample_sprint.issues[0], events=(untimed, timed))
        feed = metrics.activities(replace(sample_sprint, issues=(first,)))
        assert feed == [timed, untimed]

    def test_no_events(self, empty_sprint):
        assert metrics.activities(empty_sprint) == []


class TestIssueBreakdowns:
    """Issue type histogram, status grouping and members."""

    def test_issue_types(self, sample_sprint):
        assert metrics.issue_types(sample_sprint) == [
            {"sprint": "sprint-1", "slug": "bug", "title": "Bug", "color": "#ff0000", "total": 2},
            {"sprint": "sprint-1", "slug": "feature", "title": "Feature", "color": "#00ff00", "total": 1},
        ]

    def test_issue_types_totals_cover_every_issue(self, sample_sprint):
        untyped = IssueNode(id=50, title="Untyped", position=9)
        sprint = replace(sample_sprint, issues=sample_sprint.issues + (untyped,))
        rows = metrics.issue_types(sprint)
        assert sum(row["total"] for row in rows) == len(sprint.issues)
        assert rows[-1]["slug"] == ""
        assert rows[-1]["title"] is None

    def test_issue_types_ties_keep_encounter_order(self):
        sprint = SprintGraph(
            id=1,
            slug="s",
            issues=(
                IssueNode(id=1, title="f", type=FEATURE),
                IssueNode(id=2, title="b", type=BUG),
            ),
        )
        assert [row["slug"] for row in metrics.issue_types(sprint)] == ["feature", "bug"]

    def test_issue_status(self, sample_sprint):
        groups = metrics.issue_status(sample_sprint)
        assert list(groups) == ["todo", "done"]
        assert [issue.id for issue in groups["todo"]] == [10, 12]
        assert [issue.id for issue in groups["done"]] == [11]

    def test_issue_status_without_status(self):
        sprint = SprintGraph(id=1, issues=(IssueNode(id=1, title="x"), IssueNode(id=2, title="y", status=TODO)))
        assert {slug: len(issues) for slug, issues in metrics.issue_status(sprint).items()} == {"": 1, "todo": 1}

    def test_issue_members_unique_and_capped(self, sample_sprint, users):
        u1, u2, u3, u4, _ = users
        first, second, third = sample_sprint.issues
        issues = (
            replace(first, members=(u2, u1)),
            replace(second, members=(u1, u3)),
            replace(third, members=(u4,)),
        )
        members = metrics.issue_members(replace(sample_sprint, issues=issues))
        assert members == [u2, u1, u3]

    def test_issue_members_empty(self, empty_sprint):
        assert metrics.issue_members(empty_sprint) == []


class TestPurity:
    """Metrics leave the graph untouched and give the same answer twice."""

    def test_repeated_report_is_identical(self, sample_sprint, make_event):
        first = replace(sample_sprint.issues[0], events=(make_event(10, at(2)),))
        sprint = replace(sample_sprint, issues=(first,) + sample_sprint.issues[1:])
        snapshot = replace(sprint)
        translate = lambda text: text  # noqa: E731
        assert metrics.sprint_report(sprint, translate) == metrics.sprint_report(sprint, translate)
        assert sprint == snapshot


class TestSprintReport:
    """The combined report dict."""

    def test_report_fields(self, sample_sprint):
        report = metrics.sprint_report(sample_sprint, lambda text: text)
        assert report["slug"] == "sprint-1"
        assert report["visibility"] == "Public"
        assert report["timebox"] == "2024-01-01 to 2024-01-07"
        assert report["date_start"] == "2024-01-01"
        assert report["working_days"] == 5
        assert report["weeks"] == 1
        assert report["issues"] == 3
        assert report["effort"] == {"total": 10, "average": 3.33}
        assert [row["slug"] for row in report["issue_types"]] == ["bug", "feature"]
        assert report["issue_status"]["done"] == [{"id": 11, "title": "Add export"}]
        assert report["additions"] == 0
        assert report["pull_requests"] == {"total": 0, "branches": []}
        assert report["activities"] == []
        assert report["comments"] == 0

    def test_report_code_section(self, code_sprint):
        report = metrics.sprint_report(code_sprint, lambda text: text)
        assert report["additions"] == 22
        assert report["pull_requests"]["total"] == 3
        assert report["pull_requests"]["branches"][1][1]["state"] == "closed"
        assert report["date_start"] is None

    def test_report_serializes_activity(self, sample_sprint, make_event, users):
        first = replace(sample_sprint.issues[0], events=(make_event(10, at(2), status=DONE, user=users[0]),))
        sprint = replace(sample_sprint, issues=(first,))
        [event] = metrics.sprint_report(sprint, lambda text: text)["activities"]
        assert event["issue_id"] == 10
        assert event["status"] == "done"
        assert event["user"]["username"] == "user1"
        assert event["created_at"] == "2024-01-02T00:00:00+00:00"

    @pytest.mark.parametrize("limit", [0, 1])
    def test_report_activity_limit(self, sample_sprint, make_event, limit):
        first = replace(sample_sprint.issues[0], events=(make_event(10, at(2)), make_event(10, at(3))))
        report = metrics.sprint_report(replace(sample_sprint, issues=(first,)), str, activity_limit=limit)
        assert len(report["activities"]) == limit
