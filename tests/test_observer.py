from __future__ import annotations

import io

from rich.console import Console

from pycargo.observer import RichObserver
from pycargo.steps import PreflightCheck, StepResult


def _observer() -> tuple[RichObserver, io.StringIO]:
    out = io.StringIO()
    return RichObserver(Console(file=out, force_terminal=False, width=120)), out


def test_prints_sections_and_step_results() -> None:
    observer, out = _observer()
    step = PreflightCheck()

    observer.section("📁 Project Setup")
    observer.step_started(step)
    observer.step_finished(step, StepResult(ok=True, message="Directory 'demo' is available"))
    observer.step_finished(step, StepResult(ok=True, message="Blank setup: nothing to do", skipped=True))

    text = out.getvalue()
    assert "=== 📁 Project Setup ===" in text
    assert "✅ Directory 'demo' is available" in text
    assert "- Blank setup: nothing to do" in text


def test_failure_and_notes_keep_brackets_literal() -> None:
    observer, out = _observer()
    step = PreflightCheck()

    observer.step_started(step)
    observer.step_failed(step, RuntimeError("nope"))
    observer.note("[red]not markup[/red]")

    text = out.getvalue()
    assert "❌ Checking project directory failed" in text
    assert "[red]not markup[/red]" in text


def test_pause_is_idempotent() -> None:
    observer, _out = _observer()

    observer.step_started(PreflightCheck())
    observer.pause()
    observer.pause()
