"""
identity.py

Responsibility: Global git identity (user.name / user.email) and the interactive
prompt used to fill it in when missing.

Both are small protocols so the pipeline never reaches for ambient global state
or stdin directly.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from pycargo.errors import InteractiveInputError, ProcessExitError
from pycargo.process import ProcessRunner

logger = logging.getLogger(__name__)

REQUIRED_IDENTITY_KEYS: tuple[tuple[str, str], ...] = (
    ("user.name", "name"),
    ("user.email", "email"),
)


class IdentityStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class PromptSource(Protocol):
    def request_value(self, key: str, label: str) -> str: ...


class GitIdentityStore:
    """Reads and writes `git config --global`."""

    def __init__(self, runner: ProcessRunner) -> None:
        self._runner = runner

    def get(self, key: str) -> str | None:
        try:
            result = self._runner.execute("git", ["config", "--global", "--get", key])
        except ProcessExitError as e:
            # git exits 1 when the key is simply not set.
            if e.returncode == 1:
                return None
            raise
        value = result.stdout.strip()
        return value or None

    def set(self, key: str, value: str) -> None:
        logger.debug("Setting global git %s", key)
        self._runner.execute("git", ["config", "--global", key, value])


class StdinPromptSource:
    def __init__(self, input_fn: Callable[[str], str] = input) -> None:
        self._input = input_fn

    def request_value(self, key: str, label: str) -> str:
        try:
            raw = self._input(f"Git {key} is not configured. Please enter your {label}: ")
        except (EOFError, KeyboardInterrupt) as e:
            raise InteractiveInputError(f"No value entered for git {key}") from e
        value = raw.strip()
        if not value:
            raise InteractiveInputError(f"No value entered for git {key}")
        return value
