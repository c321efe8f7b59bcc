"""
process.py

Responsibility: Run external programs (uv, pip, git) and report how they exited.

The pipeline only talks to the `ProcessRunner` protocol, so tests (or a
containerized transport) can substitute their own runner. No timeout is
applied: a call blocks until the program exits.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from pycargo.errors import ProcessExitError, ProcessSpawnError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    success: bool
    returncode: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner(Protocol):
    def execute(self, program: str, args: Sequence[str]) -> ExecutionResult:
        """
        Run `program` with `args` in the current working directory and wait.

        Raises ProcessSpawnError if the program cannot be started and
        ProcessExitError (with captured stderr) on a non-zero exit.
        """
        ...


class SubprocessRunner:
    def __init__(self, *, cwd: Path | None = None, env: dict[str, str] | None = None) -> None:
        self._cwd = cwd
        self._env = env

    def execute(self, program: str, args: Sequence[str]) -> ExecutionResult:
        cmd = [program, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self._cwd) if self._cwd else None,
                env=self._env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise ProcessSpawnError(program, args, e.strerror or str(e)) from e

        if proc.returncode != 0:
            logger.debug("%s exited with %d", program, proc.returncode)
            raise ProcessExitError(program, args, proc.returncode, proc.stderr or "")

        return ExecutionResult(success=True, returncode=0, stdout=proc.stdout or "", stderr=proc.stderr or "")
