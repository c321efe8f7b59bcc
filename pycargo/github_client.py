"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints and repository URLs
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

Git operations (branch, remote, push) are handled by the pipeline steps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from pycargo import __version__
from pycargo.errors import GitHubError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteRepoDescriptor:
    owner: str
    name: str
    private: bool
    remote_url: str

    @property
    def html_url(self) -> str:
        return self.remote_url.removesuffix(".git")


def build_remote_url(owner: str, name: str, host: str = "https://github.com") -> str:
    """Return the HTTPS clone URL, e.g. https://github.com/owner/name.git."""
    owner = owner.strip()
    name = name.strip()
    if not owner:
        raise GitHubError("Cannot build a remote URL without an owner (git user.name is empty)")
    if not name:
        raise GitHubError("Cannot build a remote URL without a repository name")
    return f"{host.rstrip('/')}/{owner}/{name}.git"


class GitHubClient:
    def __init__(
        self,
        token: str,
        api_base: str = "https://api.github.com",
        session: requests.Session | None = None,
    ) -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"pycargo/{__version__}",
        }

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        logger.debug("%s %s", method, url)
        try:
            r = self._session.request(method, url, headers=self._headers(), json=json_body, timeout=30)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if not 200 <= r.status_code < 300:
            raise GitHubError(
                f"GitHub API error {r.status_code} {method} {path}: {r.text}",
                status=r.status_code,
                body=r.text,
            )
        if r.status_code == 204 or not r.content:
            return None
        try:
            return r.json()
        except ValueError:
            return None

    def create_repo(self, *, name: str, private: bool) -> dict[str, Any] | None:
        """
        Create a repository owned by the authenticated user.

        Sends exactly `{"name": ..., "private": ...}`; any non-2xx response
        raises GitHubError carrying the response body verbatim.
        """
        return self._request("POST", "/user/repos", json_body={"name": name, "private": private})
