"""Celery background tasks for sprint reports and GitHub sync."""

import logging

from celery import shared_task
from django.conf import settings
from django.utils.translation import gettext

from integrations.github import GitHubAPIError
from scrum.metrics import sprint_report
from scrum.repository import SprintGraphLoader
from scrum.sync import sync_sprint_branches

logger = logging.getLogger("scrum.tasks")


@shared_task
def build_sprint_report(sprint_id: int) -> dict:
    """Load a sprint and compute its report.

    Args:
        sprint_id: Primary key of the Sprint record.

    Returns:
        The JSON-ready report dict.
    """
    graph = SprintGraphLoader().by_id(sprint_id)
    return sprint_report(graph, gettext, activity_limit=settings.SPRINT_ACTIVITY_LIMIT)


@shared_task
def sync_branches(sprint_id: int, repo_name: str, branches: list[str]) -> list[dict]:
    """Synchronise GitHub branches, commits and pull requests for a sprint.

    Args:
        sprint_id: Primary key of the Sprint record.
        repo_name: GitHub repository in ``owner/repo`` format.
        branches: Branch names to import.

    Returns:
        One summary dict per branch.
    """
    try:
        return sync_sprint_branches(sprint_id, repo_name, branches)
    except GitHubAPIError:
        logger.exception("GitHub sync failed for sprint %s (%s)", sprint_id, repo_name)
        raise
