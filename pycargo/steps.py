"""
steps.py

Responsibility: The individual bootstrap steps.

Each step is a small class with a `run(ctx) -> StepResult` method. A step that
cannot do its job raises a `PyCargoError` (or lets an `OSError` from file I/O
escape); the pipeline turns that into a failed, fatal `StepResult` and stops.
Steps never undo what earlier steps did.

Steps work relative to the current working directory: `DirectoryCreation`
changes into the new project and nothing changes back.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar

from pycargo.config import BootstrapRequest, Settings
from pycargo.errors import ConfigError, PreconditionError, ProcessError
from pycargo.fetcher import ContentFetcher
from pycargo.github_client import GitHubClient, RemoteRepoDescriptor, build_remote_url
from pycargo.identity import REQUIRED_IDENTITY_KEYS, IdentityStore, PromptSource
from pycargo.observer import PipelineObserver
from pycargo.process import ProcessRunner
from pycargo.templates import get_template

logger = logging.getLogger(__name__)

SECTION_PROJECT = "📁 Project Setup"
SECTION_ENVIRONMENT = "🚀 Environment Setup"
SECTION_DOWNLOADS = "📦 File Downloads"
SECTION_GIT = "🔧 Git Setup"
SECTION_GITHUB = "🐙 GitHub"

VENV_DIR = ".venv"


@dataclass(frozen=True)
class StepResult:
    ok: bool
    message: str
    fatal: bool = False
    skipped: bool = False


@dataclass
class BootstrapContext:
    """Everything a step may use. Owned by the pipeline for one run."""

    request: BootstrapRequest
    settings: Settings
    runner: ProcessRunner
    fetcher: ContentFetcher
    identity: IdentityStore
    prompt: PromptSource
    observer: PipelineObserver
    github_client_factory: Callable[[str, str], GitHubClient]
    project_dir: Path | None = None
    remote: RemoteRepoDescriptor | None = None


class Step:
    name: ClassVar[str] = "step"
    section: ClassVar[str | None] = SECTION_PROJECT
    label: str = ""

    @property
    def key(self) -> str:
        return self.name

    def run(self, ctx: BootstrapContext) -> StepResult:
        raise NotImplementedError


def _done(message: str) -> StepResult:
    return StepResult(ok=True, message=message)


def activation_command() -> str:
    if os.name == "nt":
        return rf"{VENV_DIR}\Scripts\activate"
    return f"source {VENV_DIR}/bin/activate"


class PreflightCheck(Step):
    name = "preflight"
    label = "Checking project directory"

    def run(self, ctx: BootstrapContext) -> StepResult:
        target = ctx.request.project_name
        if os.path.lexists(target):
            raise PreconditionError(f"Directory '{target}' already exists")
        return _done(f"Directory '{target}' is available")


class IdentityCheck(Step):
    name = "identity-check"

    def __init__(self, key: str, prompt_label: str) -> None:
        self.identity_key = key
        self.prompt_label = prompt_label
        self.label = f"Checking git config for {key}"

    @property
    def key(self) -> str:
        return f"{self.name}[{self.identity_key}]"

    def run(self, ctx: BootstrapContext) -> StepResult:
        if ctx.identity.get(self.identity_key):
            return _done(f"Git {self.identity_key} already configured")

        ctx.observer.pause()
        value = ctx.prompt.request_value(self.identity_key, self.prompt_label)
        ctx.identity.set(self.identity_key, value)
        return _done(f"Git {self.identity_key} configured")


class DependencyAvailabilityCheck(Step):
    name = "uv-check"
    label = "Checking uv installation"

    def run(self, ctx: BootstrapContext) -> StepResult:
        try:
            ctx.runner.execute("uv", ["--version"])
        except ProcessError as e:
            logger.debug("uv probe failed: %s", e)
            ctx.observer.note("uv not found. Installing uv...")
            ctx.runner.execute("pip", ["install", "uv"])
            return _done("uv installed")
        return _done("uv is already installed")


class DirectoryCreation(Step):
    name = "create-directory"
    label = "Creating project directory"

    def run(self, ctx: BootstrapContext) -> StepResult:
        target = Path(ctx.request.project_name)
        try:
            target.mkdir()
        except FileExistsError as e:
            raise PreconditionError(f"Directory '{target}' already exists") from e
        ctx.project_dir = target.resolve()
        os.chdir(ctx.project_dir)
        logger.debug("Working directory is now %s", ctx.project_dir)
        return _done(f"Created project directory: {ctx.request.project_name}")


class EnvironmentInit(Step):
    name = "environment-init"
    label = "Initializing uv"
    section = SECTION_ENVIRONMENT

    def run(self, ctx: BootstrapContext) -> StepResult:
        ctx.runner.execute("uv", ["init", "."])
        ctx.runner.execute("uv", ["venv", VENV_DIR])
        return _done("Initialized project with uv and created virtual environment")


class ManifestWrite(Step):
    name = "manifest-write"
    label = "Writing requirements file"
    section = SECTION_ENVIRONMENT

    def run(self, ctx: BootstrapContext) -> StepResult:
        template = get_template(ctx.request.setup_template)
        filename = ctx.settings.manifest_filename
        # Bytes, so the template text lands unchanged on every platform.
        Path(filename).write_bytes(template.content.encode("utf-8"))
        return _done(f"Created {filename} from the {template.id} template")


class DependencyInstall(Step):
    name = "dependency-install"
    label = "Installing requirements"
    section = SECTION_ENVIRONMENT

    def run(self, ctx: BootstrapContext) -> StepResult:
        if get_template(ctx.request.setup_template).is_blank:
            return StepResult(ok=True, message="Blank setup: no requirements to install", skipped=True)
        ctx.runner.execute("uv", ["add", "-r", ctx.settings.manifest_filename])
        ctx.runner.execute("uv", ["sync"])
        return _done("Installed requirements")


class AssetRetrieval(Step):
    name = "download"
    section = SECTION_DOWNLOADS

    def __init__(self, url_for: Callable[[Settings], str], filename: str) -> None:
        self.url_for = url_for
        self.filename = filename
        self.label = f"Downloading {filename}"

    @property
    def key(self) -> str:
        return f"{self.name}[{self.filename}]"

    def run(self, ctx: BootstrapContext) -> StepResult:
        body = ctx.fetcher.fetch(self.url_for(ctx.settings))
        Path(self.filename).write_bytes(body)
        return _done(f"Downloaded {self.filename}")


class RepositoryInit(Step):
    name = "git-init"
    label = "Initializing Git repository"
    section = SECTION_GIT

    def run(self, ctx: BootstrapContext) -> StepResult:
        autocrlf = "true" if os.name == "nt" else "input"
        for args in (
            ["init"],
            ["config", "core.autocrlf", autocrlf],
            ["add", "."],
            ["commit", "-m", "Initial commit"],
        ):
            ctx.runner.execute("git", args)
        return _done("Git repository initialized and committed")


class RemoteIntegration(Step):
    name = "github"
    label = "Creating GitHub repository"
    section = SECTION_GITHUB

    def run(self, ctx: BootstrapContext) -> StepResult:
        req = ctx.request
        token = (req.github_token or "").strip()
        if not token:
            raise ConfigError("GITHUB_TOKEN environment variable is not set")
        repo_name = req.remote_repo_name or req.project_name

        client = ctx.github_client_factory(token, ctx.settings.github_api_base)
        client.create_repo(name=repo_name, private=req.is_private)

        branch = ctx.settings.default_branch
        ctx.runner.execute("git", ["branch", "-M", branch])

        owner = ctx.identity.get("user.name") or ""
        remote_url = build_remote_url(owner, repo_name, ctx.settings.github_host)
        ctx.runner.execute("git", ["remote", "add", "origin", remote_url])
        ctx.runner.execute("git", ["push", "-u", "origin", branch])

        ctx.remote = RemoteRepoDescriptor(owner=owner, name=repo_name, private=req.is_private, remote_url=remote_url)
        return _done(f"GitHub repository created: {ctx.remote.html_url}")


class Completion(Step):
    name = "complete"
    label = "Finishing"
    section = None

    def run(self, ctx: BootstrapContext) -> StepResult:
        ctx.observer.note(f"To activate the virtual environment, run: {activation_command()}")
        if ctx.remote is not None:
            ctx.observer.note(f"Repository: {ctx.remote.html_url}")
        return _done("Setup Completed 🐍")


def build_steps(request: BootstrapRequest) -> list[Step]:
    """The ordered step list for `request`."""
    steps: list[Step] = [PreflightCheck()]
    steps.extend(IdentityCheck(key, label) for key, label in REQUIRED_IDENTITY_KEYS)
    steps.extend(
        [
            DependencyAvailabilityCheck(),
            DirectoryCreation(),
            EnvironmentInit(),
            ManifestWrite(),
            DependencyInstall(),
            AssetRetrieval(lambda s: s.gitignore_url, ".gitignore"),
            AssetRetrieval(lambda s: s.license_url, "LICENSE"),
            RepositoryInit(),
        ]
    )
    if request.github:
        steps.append(RemoteIntegration())
    steps.append(Completion())
    return steps
