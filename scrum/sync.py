"""Import branches, commits and pull requests from GitHub into a sprint."""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils.dateparse import parse_datetime

from integrations.github import GitHubClient
from scrum.models import Branch, Commit, CommitFile, PullRequest, Sprint
from scrum.repository import SprintNotFound

logger = logging.getLogger("scrum.sync")


def _commit_fields(detail: dict) -> dict:
    commit = detail.get("commit") or {}
    author = commit.get("author") or {}
    committed_at = author.get("date")
    return {
        "message": commit.get("message", ""),
        "author_name": author.get("name", ""),
        "committed_at": parse_datetime(committed_at) if committed_at else None,
    }


def sync_branch(sprint: Sprint, repo: str, branch_name: str, client: GitHubClient) -> dict:
    """Bring one branch of ``repo`` up to date under ``sprint``.

    Commits already stored for the branch are skipped; pull requests are
    upserted by number. All GitHub calls happen before anything is written.

    Returns:
        A dict with keys ``branch``, ``commits_created`` and ``pull_requests``.
    """
    branch = Branch.objects.filter(sprint=sprint, name=branch_name).first()
    known = set(branch.commits.values_list("sha", flat=True)) if branch is not None else set()

    new_commits = [
        client.get_commit(repo, item["sha"])
        for item in client.list_commits(repo, branch_name)
        if item["sha"] not in known
    ]
    pulls = client.list_pull_requests(repo, branch_name)

    created = 0
    with transaction.atomic():
        # Another sync of the same branch may have written rows since the lookup.
        branch, _ = Branch.objects.get_or_create(sprint=sprint, name=branch_name)

        for detail in new_commits:
            commit, is_new = Commit.objects.get_or_create(
                branch=branch, sha=detail["sha"], defaults=_commit_fields(detail),
            )
            if not is_new:
                continue
            created += 1
            CommitFile.objects.bulk_create([
                CommitFile(
                    commit=commit,
                    filename=f.get("filename", ""),
                    status=f.get("status", ""),
                    additions=f.get("additions", 0),
                    deletions=f.get("deletions", 0),
                )
                for f in detail.get("files") or []
            ])

        for pr in pulls:
            created_at = pr.get("created_at")
            PullRequest.objects.update_or_create(
                branch=branch,
                number=pr["number"],
                defaults={
                    "title": pr.get("title", ""),
                    "state": pr.get("state", "open"),
                    "url": pr.get("html_url", ""),
                    "created_at": parse_datetime(created_at) if created_at else None,
                },
            )

    logger.info(
        "Synced %s@%s into sprint %s: %d new commits, %d pull requests",
        repo, branch_name, sprint.slug, created, len(pulls),
    )
    return {"branch": branch_name, "commits_created": created, "pull_requests": len(pulls)}


def sync_sprint_branches(
    sprint_id: int,
    repo: str,
    branches: list[str],
    client: GitHubClient | None = None,
) -> list[dict]:
    """Sync several branches of ``repo`` into the sprint with id ``sprint_id``.

    Raises:
        SprintNotFound: If the sprint does not exist or was soft-deleted.
        GitHubAPIError: If any GitHub call fails.
    """
    try:
        sprint = Sprint.objects.get(pk=sprint_id)
    except Sprint.DoesNotExist:
        raise SprintNotFound({"pk": sprint_id}) from None

    client = client or GitHubClient()
    return [sync_branch(sprint, repo, name, client) for name in branches]
