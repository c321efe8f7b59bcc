from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from pycargo.config import BootstrapRequest, Settings
from pycargo.errors import ProcessExitError, PyCargoError
from pycargo.pipeline import BootstrapPipeline
from pycargo.process import ExecutionResult

GITIGNORE_BODY = b"__pycache__/\n.venv/\n"
LICENSE_BODY = b"Apache License\nVersion 2.0, January 2004\n"


class FakeRunner:
    """Records every invocation; fails those registered in `failures`."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.failures: dict[tuple[str, ...], PyCargoError] = {}
        self.stdout: dict[tuple[str, ...], str] = {}

    def fail(self, program: str, *args: str, error: PyCargoError | None = None) -> None:
        self.failures[(program, *args)] = error or ProcessExitError(program, list(args), 1, "boom")

    def execute(self, program: str, args: list[str]) -> ExecutionResult:
        self.calls.append((program, list(args)))
        for prefix, error in self.failures.items():
            if (program, *args)[: len(prefix)] == prefix:
                raise error
        return ExecutionResult(success=True, returncode=0, stdout=self.stdout.get((program, *args), ""))

    def commands(self, program: str | None = None) -> list[list[str]]:
        return [[p, *a] for p, a in self.calls if program is None or p == program]


class FakeFetcher:
    def __init__(self, bodies: dict[str, bytes | Exception] | None = None) -> None:
        settings = Settings()
        self.bodies: dict[str, bytes | Exception] = {
            settings.gitignore_url: GITIGNORE_BODY,
            settings.license_url: LICENSE_BODY,
        }
        self.bodies.update(bodies or {})
        self.urls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        body = self.bodies[url]
        if isinstance(body, Exception):
            raise body
        return body


class FakeIdentityStore:
    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.values.get(key) or None

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.values[key] = value


class ScriptedPrompt:
    def __init__(self, answers: list[str] | None = None) -> None:
        self.answers = list(answers or [])
        self.asked: list[str] = []

    def request_value(self, key: str, label: str) -> str:
        self.asked.append(key)
        return self.answers.pop(0)


class FakeGitHubClient:
    def __init__(self, error: PyCargoError | None = None) -> None:
        self.error = error
        self.created: list[dict[str, Any]] = []
        self.tokens: list[str] = []

    def factory(self, token: str, api_base: str) -> "FakeGitHubClient":
        self.tokens.append(token)
        return self

    def create_repo(self, *, name: str, private: bool) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        self.created.append({"name": name, "private": private})
        return {"name": name, "private": private}


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def section(self, title: str) -> None:
        self.events.append(("section", title))

    def step_started(self, step) -> None:
        self.events.append(("started", step.key))

    def step_finished(self, step, result) -> None:
        self.events.append(("finished", step.key))

    def step_failed(self, step, error) -> None:
        self.events.append(("failed", step.key))

    def pause(self) -> None:
        self.events.append(("pause",))

    def note(self, text: str) -> None:
        self.events.append(("note", text))


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # The pipeline changes into the project directory; monkeypatch restores cwd afterwards.
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def identity() -> FakeIdentityStore:
    return FakeIdentityStore({"user.name": "octocat", "user.email": "octocat@example.com"})


@pytest.fixture
def prompt() -> ScriptedPrompt:
    return ScriptedPrompt()


@pytest.fixture
def github() -> FakeGitHubClient:
    return FakeGitHubClient()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_pipeline(
    runner: FakeRunner,
    fetcher: FakeFetcher,
    identity: FakeIdentityStore,
    prompt: ScriptedPrompt,
    github: FakeGitHubClient,
    observer: RecordingObserver,
) -> Callable[..., BootstrapPipeline]:
    def _make(**overrides: Any) -> BootstrapPipeline:
        kwargs: dict[str, Any] = {
            "runner": runner,
            "fetcher": fetcher,
            "identity": identity,
            "prompt": prompt,
            "observer": observer,
            "github_client_factory": github.factory,
            "settings": Settings(),
        }
        kwargs.update(overrides)
        return BootstrapPipeline(**kwargs)

    return _make


def make_request(name: str = "demo", setup: str = "basic", **kwargs: Any) -> BootstrapRequest:
    return BootstrapRequest(project_name=name, setup_template=setup, **kwargs)
