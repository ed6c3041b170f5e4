"""Management command to post a sprint report to Slack.

Meant for cron at the end of a sprint, e.g.:
    0 18 * * 5 cd /srv/gitscrum && venv/bin/python manage.py post_sprint_report sprint-42
"""

import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.translation import gettext
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from integrations.slack_format import format_report_unavailable, format_sprint_report
from scrum.metrics import sprint_report
from scrum.repository import SprintGraphLoader, SprintNotFound

logger = logging.getLogger("scrum.management.post_sprint_report")


class Command(BaseCommand):
    help = "Post the metrics report for a sprint to a Slack channel."

    def add_arguments(self, parser):
        parser.add_argument("slug", help="Slug of the sprint")
        parser.add_argument(
            "--channel",
            default=None,
            help="Slack channel (defaults to SPRINT_REPORT_SLACK_CHANNEL)",
        )

    def handle(self, *args, **options):
        channel = options["channel"] or settings.SPRINT_REPORT_SLACK_CHANNEL
        if not channel:
            raise CommandError("No Slack channel given and SPRINT_REPORT_SLACK_CHANNEL is not set.")
        if not settings.SLACK_BOT_TOKEN:
            raise CommandError("SLACK_BOT_TOKEN is not set.")

        client = WebClient(token=settings.SLACK_BOT_TOKEN)
        slug = options["slug"]

        try:
            graph = SprintGraphLoader().by_slug(slug)
        except SprintNotFound as e:
            self._post_unavailable(client, channel, slug, "sprint not found")
            raise CommandError(str(e)) from e

        report = sprint_report(graph, gettext, activity_limit=settings.SPRINT_ACTIVITY_LIMIT)
        blocks = format_sprint_report(report)

        try:
            client.chat_postMessage(
                channel=channel,
                blocks=blocks,
                text=f"Sprint report: {report['title']}",
            )
        except SlackApiError as e:
            logger.exception("Failed to post report for sprint %s", graph.slug)
            raise CommandError(f"Failed to post report for {graph.slug}.") from e

        self.stdout.write(self.style.SUCCESS(f"Posted report for sprint: {report['title']}"))

    def _post_unavailable(self, client, channel, slug, reason):
        """Tell the channel why the scheduled report is missing."""
        try:
            client.chat_postMessage(
                channel=channel,
                blocks=format_report_unavailable(slug, reason),
                text=f"No sprint report for {slug}: {reason}",
            )
        except SlackApiError:
            logger.exception("Failed to post unavailable notice for sprint %s to %s", slug, channel)
