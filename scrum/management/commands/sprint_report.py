"""Management command to print a sprint report as JSON."""

import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.translation import gettext

from scrum.metrics import sprint_report
from scrum.repository import SprintGraphLoader, SprintNotFound


class Command(BaseCommand):
    help = "Print the metrics report for a sprint as JSON."

    def add_arguments(self, parser):
        parser.add_argument("slug", help="Slug of the sprint")
        parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default 2)")

    def handle(self, *args, **options):
        try:
            graph = SprintGraphLoader().by_slug(options["slug"])
        except SprintNotFound as e:
            raise CommandError(str(e)) from e

        report = sprint_report(graph, gettext, activity_limit=settings.SPRINT_ACTIVITY_LIMIT)
        self.stdout.write(json.dumps(report, indent=options["indent"]))
