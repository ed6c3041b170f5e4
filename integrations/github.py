"""GitHub API client for branches, commits and pull requests."""

from __future__ import annotations

import logging

import httpx
from django.conf import settings

logger = logging.getLogger("integrations.github")


class GitHubAPIError(Exception):
    """Raised when the GitHub API returns a non-2xx response or is unreachable."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"GitHub API error {status_code}: {detail}")


class GitHubClient:
    """Read branches, commits and pull requests through the GitHub REST API."""

    def __init__(self, token: str | None = None, base_url: str | None = None, timeout: float = 10) -> None:
        self.token = settings.GITHUB_API_TOKEN if token is None else token
        self.base_url = (settings.GITHUB_API_URL if base_url is None else base_url).rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, url: str, params: dict | None = None) -> httpx.Response:
        try:
            response = httpx.get(url, headers=self._headers(), params=params, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.warning("GitHub request to %s failed: %s", url, e)
            raise GitHubAPIError(0, str(e)) from e

        if response.status_code != 200:
            raise GitHubAPIError(response.status_code, response.text)
        return response

    def _get(self, path: str, params: dict | None = None):
        """GET ``path`` and return the decoded JSON body.

        Raises:
            GitHubAPIError: On connection failure or a non-2xx status.
        """
        return self._request(f"{self.base_url}{path}", params).json()

    def _get_all(self, path: str, params: dict | None = None) -> list[dict]:
        """GET a list endpoint, following ``Link: rel="next"`` until the last page."""
        response = self._request(f"{self.base_url}{path}", params)
        items = list(response.json())
        next_link = response.links.get("next")
        while next_link:
            # The next URL already carries the query string.
            response = self._request(next_link["url"])
            items.extend(response.json())
            next_link = response.links.get("next")
        return items

    def list_commits(self, repo: str, branch: str, per_page: int = 100) -> list[dict]:
        """List every commit reachable from ``branch``, newest first."""
        return self._get_all(f"/repos/{repo}/commits", params={"sha": branch, "per_page": per_page})

    def get_commit(self, repo: str, sha: str) -> dict:
        """Fetch one commit including its ``files`` with per-file line counts."""
        return self._get(f"/repos/{repo}/commits/{sha}")

    def list_pull_requests(self, repo: str, branch: str, state: str = "all") -> list[dict]:
        """Pull requests whose head is ``branch`` in the repository owner's namespace."""
        owner = repo.split("/", 1)[0]
        return self._get_all(
            f"/repos/{repo}/pulls",
            params={"head": f"{owner}:{branch}", "state": state, "per_page": 100},
        )
