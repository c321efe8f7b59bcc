from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from pycargo.errors import GitHubError
from pycargo.github_client import GitHubClient, RemoteRepoDescriptor, build_remote_url


def _session(status: int, text: str = "", payload: dict | None = None) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    response = MagicMock(status_code=status, text=text, content=text.encode("utf-8"))
    response.json.return_value = payload
    session.request.return_value = response
    return session


def test_create_repo_posts_name_and_visibility() -> None:
    session = _session(201, '{"name": "demo"}', {"name": "demo"})
    client = GitHubClient("tkn", session=session)

    assert client.create_repo(name="demo", private=True) == {"name": "demo"}

    args, kwargs = session.request.call_args
    assert args == ("POST", "https://api.github.com/user/repos")
    assert kwargs["json"] == {"name": "demo", "private": True}
    assert kwargs["headers"]["Authorization"] == "Bearer tkn"
    assert kwargs["headers"]["Accept"] == "application/vnd.github+json"


def test_custom_api_base() -> None:
    session = _session(201, "{}", {})
    GitHubClient("tkn", api_base="https://ghe.example.com/api/v3/", session=session).create_repo(
        name="demo", private=False
    )

    assert session.request.call_args[0][1] == "https://ghe.example.com/api/v3/user/repos"


def test_error_response_body_is_surfaced_verbatim() -> None:
    body = '{"message":"Bad credentials","documentation_url":"https://docs.github.com/rest"}'
    client = GitHubClient("tkn", session=_session(401, body))

    with pytest.raises(GitHubError) as excinfo:
        client.create_repo(name="demo", private=False)

    assert excinfo.value.status == 401
    assert excinfo.value.body == body
    assert body in str(excinfo.value)


def test_transport_failure() -> None:
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("offline")

    with pytest.raises(GitHubError, match="offline"):
        GitHubClient("tkn", session=session).create_repo(name="demo", private=False)


def test_empty_token_rejected() -> None:
    with pytest.raises(GitHubError):
        GitHubClient("  ")


def test_build_remote_url() -> None:
    assert build_remote_url("octocat", "demo") == "https://github.com/octocat/demo.git"
    assert build_remote_url(" octocat ", "demo", "https://git.example.com/") == "https://git.example.com/octocat/demo.git"


@pytest.mark.parametrize("owner, name", [("", "demo"), ("octocat", " ")])
def test_build_remote_url_requires_owner_and_name(owner: str, name: str) -> None:
    with pytest.raises(GitHubError):
        build_remote_url(owner, name)


def test_descriptor_html_url() -> None:
    remote = RemoteRepoDescriptor(
        owner="octocat", name="demo", private=False, remote_url="https://github.com/octocat/demo.git"
    )

    assert remote.html_url == "https://github.com/octocat/demo"
