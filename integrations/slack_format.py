"""Slack Block Kit message formatting helpers."""

from __future__ import annotations

STATUS_EMOJI = {
    "open": ":large_blue_circle:",
    "todo": ":clipboard:",
    "in-progress": ":hourglass_flowing_sand:",
    "in-review": ":eyes:",
    "done": ":white_check_mark:",
    "closed": ":white_check_mark:",
    "blocked": ":no_entry_sign:",
}

MAX_ACTIVITIES_SHOWN = 5


def format_report_unavailable(slug: str, reason: str) -> list[dict]:
    """Blocks explaining why the report for ``slug`` was not posted."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f":warning: No sprint report for `{slug}`: {reason}"},
        },
        {
            "type": "context",
            "elements": [
                {"type": "mrkdwn", "text": f"Check the slug with `manage.py sprint_report {slug}`."},
            ],
        },
    ]


def _status_line(issue_status: dict[str, list[dict]]) -> str:
    lines = []
    for slug, issues in issue_status.items():
        emoji = STATUS_EMOJI.get(slug, ":grey_question:")
        label = slug.replace("-", " ").title() if slug else "No status"
        lines.append(f"{emoji} {label}: *{len(issues)}*")
    return "  |  ".join(lines) if lines else "No issues in this sprint."


def _types_line(issue_types: list[dict]) -> str:
    parts = [f"{row['title'] or 'Untyped'}: *{row['total']}*" for row in issue_types]
    return "  |  ".join(parts) if parts else "No issues in this sprint."


def format_sprint_report(report: dict) -> list[dict]:
    """Format a sprint report as Block Kit blocks.

    Args:
        report: The dict produced by ``scrum.metrics.sprint_report``.

    Returns:
        A list of Block Kit block dicts.
    """
    effort = report["effort"]
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f":runner: {report['title']}",
                "emoji": True,
            },
        },
        {
            "type": "context",
            "elements": [
                {"type": "mrkdwn", "text": f"{report['timebox']}  ·  {report['visibility']}"},
            ],
        },
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": f"*Working days:* {report['working_days']}"},
                {"type": "mrkdwn", "text": f"*Weeks:* {report['weeks']}"},
                {"type": "mrkdwn", "text": f"*Issues:* {report['issues']}"},
                {"type": "mrkdwn", "text": f"*Effort:* {effort['total']:g} (avg {effort['average']:g})"},
                {"type": "mrkdwn", "text": f"*Additions:* {report['additions']}"},
                {"type": "mrkdwn", "text": f"*Pull requests:* {report['pull_requests']['total']}"},
            ],
        },
        {"type": "divider"},
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"*By status*\n{_status_line(report['issue_status'])}"},
        },
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"*By type*\n{_types_line(report['issue_types'])}"},
        },
    ]

    recent = report["activities"][:MAX_ACTIVITIES_SHOWN]
    if recent:
        lines = []
        for event in recent:
            who = event["user"]["username"] if event["user"] else "someone"
            status = event["status"] or "no status"
            lines.append(f"• Issue {event['issue_id']} moved to *{status}* by {who}")
        blocks.append({
            "type": "section",
            "text": {"type": "mrkdwn", "text": "*Recent activity*\n" + "\n".join(lines)},
        })

    return blocks
