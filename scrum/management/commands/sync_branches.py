"""Management command to import GitHub branches into a sprint."""

from django.core.management.base import BaseCommand, CommandError

from integrations.github import GitHubAPIError
from scrum.models import Sprint
from scrum.sync import sync_sprint_branches


class Command(BaseCommand):
    help = "Import commits and pull requests for GitHub branches into a sprint."

    def add_arguments(self, parser):
        parser.add_argument("slug", help="Slug of the sprint")
        parser.add_argument("repo", help="GitHub repository as owner/repo")
        parser.add_argument("branches", nargs="+", help="Branch names to import")

    def handle(self, *args, **options):
        sprint = Sprint.objects.filter(slug=options["slug"]).first()
        if sprint is None:
            raise CommandError(f"Sprint not found: slug={options['slug']!r}")

        try:
            results = sync_sprint_branches(sprint.pk, options["repo"], options["branches"])
        except GitHubAPIError as e:
            raise CommandError(str(e)) from e

        for result in results:
            self.stdout.write(
                f"{result['branch']}: {result['commits_created']} new commits, "
                f"{result['pull_requests']} pull requests"
            )
