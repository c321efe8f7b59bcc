"""
pipeline.py

Responsibility: Run the bootstrap steps in order and decide when to stop.

High-level flow (see `steps.build_steps`):
1) Preflight: the project directory must not exist
2) Git identity (user.name, user.email), prompting when unset
3) uv availability (self-install through pip when missing)
4) Create the project directory and change into it
5) uv init + venv, write the requirements file, install it (unless blank)
6) Download .gitignore and LICENSE
7) git init + initial commit
8) (Optional) Create the GitHub repo and push
9) Report how to activate the environment

The first failing step ends the run. Nothing already done is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from pycargo.config import BootstrapRequest, Settings
from pycargo.errors import PyCargoError
from pycargo.fetcher import ContentFetcher
from pycargo.github_client import GitHubClient, RemoteRepoDescriptor
from pycargo.identity import GitIdentityStore, IdentityStore, PromptSource, StdinPromptSource
from pycargo.observer import NullObserver, PipelineObserver
from pycargo.process import ProcessRunner, SubprocessRunner
from pycargo.steps import BootstrapContext, Step, StepResult, build_steps

logger = logging.getLogger(__name__)


@dataclass
class PipelineOutcome:
    ok: bool
    results: dict[str, StepResult] = field(default_factory=dict)
    failed_step: str | None = None
    error: BaseException | None = None
    remote: RemoteRepoDescriptor | None = None

    @property
    def failure_message(self) -> str:
        if self.ok:
            return ""
        if self.error is not None:
            return f"[{self.failed_step}] {self.error}"
        return f"[{self.failed_step}] {self.results[self.failed_step].message}"


class BootstrapPipeline:
    def __init__(
        self,
        *,
        runner: ProcessRunner | None = None,
        fetcher: ContentFetcher | None = None,
        identity: IdentityStore | None = None,
        prompt: PromptSource | None = None,
        observer: PipelineObserver | None = None,
        github_client_factory: Callable[[str, str], GitHubClient] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.runner = runner or SubprocessRunner()
        self.fetcher = fetcher or ContentFetcher()
        self.identity = identity or GitIdentityStore(self.runner)
        self.prompt = prompt or StdinPromptSource()
        self.observer = observer or NullObserver()
        self.github_client_factory = github_client_factory or (
            lambda token, api_base: GitHubClient(token, api_base=api_base)
        )
        self.settings = settings or Settings()

    def run(self, request: BootstrapRequest, steps: list[Step] | None = None) -> PipelineOutcome:
        ctx = BootstrapContext(
            request=request,
            settings=self.settings,
            runner=self.runner,
            fetcher=self.fetcher,
            identity=self.identity,
            prompt=self.prompt,
            observer=self.observer,
            github_client_factory=self.github_client_factory,
        )
        outcome = PipelineOutcome(ok=False)
        logger.debug("Bootstrapping %r", request)

        section: str | None = None
        for step in steps if steps is not None else build_steps(request):
            if step.section is not None and step.section != section:
                section = step.section
                self.observer.section(section)

            self.observer.step_started(step)
            try:
                result = step.run(ctx)
            except (PyCargoError, OSError) as e:
                self.observer.step_failed(step, e)
                logger.debug("Step %s failed", step.key, exc_info=True)
                outcome.results[step.key] = StepResult(ok=False, message=str(e), fatal=True)
                outcome.failed_step = step.key
                outcome.error = e
                outcome.remote = ctx.remote
                return outcome

            self.observer.step_finished(step, result)
            outcome.results[step.key] = result
            if not result.ok:
                # There are no non-fatal failures.
                outcome.failed_step = step.key
                outcome.remote = ctx.remote
                return outcome

        outcome.ok = True
        outcome.remote = ctx.remote
        return outcome
