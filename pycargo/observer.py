"""
observer.py

Responsibility: Render pipeline progress on the terminal.

Observers only watch: the pipeline never reads anything back from them, so a
rendering problem can't change which steps run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from rich.console import Console
from rich.markup import escape
from rich.status import Status

if TYPE_CHECKING:
    from pycargo.steps import Step, StepResult


class PipelineObserver(Protocol):
    def section(self, title: str) -> None: ...

    def step_started(self, step: "Step") -> None: ...

    def step_finished(self, step: "Step", result: "StepResult") -> None: ...

    def step_failed(self, step: "Step", error: BaseException) -> None: ...

    def pause(self) -> None:
        """Stop any live rendering (e.g. before prompting on stdin)."""
        ...

    def note(self, text: str) -> None: ...


class NullObserver:
    def section(self, title: str) -> None:
        pass

    def step_started(self, step: "Step") -> None:
        pass

    def step_finished(self, step: "Step", result: "StepResult") -> None:
        pass

    def step_failed(self, step: "Step", error: BaseException) -> None:
        pass

    def pause(self) -> None:
        pass

    def note(self, text: str) -> None:
        pass


class RichObserver:
    """Spinner while a step runs, then one coloured status line per step."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._status: Status | None = None

    def section(self, title: str) -> None:
        self._console.print(f"\n[bold blue]=== {title} ===[/bold blue]")

    def step_started(self, step: "Step") -> None:
        self.pause()
        self._status = self._console.status(f"{escape(step.label)}...", spinner="dots")
        self._status.start()

    def step_finished(self, step: "Step", result: "StepResult") -> None:
        self.pause()
        if result.skipped:
            self._console.print(f"[yellow]- {escape(result.message)}[/yellow]")
        else:
            self._console.print(f"[green]✅ {escape(result.message)}[/green]")

    def step_failed(self, step: "Step", error: BaseException) -> None:
        self.pause()
        self._console.print(f"[red]❌ {escape(step.label)} failed[/red]")

    def pause(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def note(self, text: str) -> None:
        self._console.print(f"[yellow]{escape(text)}[/yellow]")
