"""
errors.py

Responsibility: The exception taxonomy shared by every pycargo module.

Every failure that stops a bootstrap run is a `PyCargoError`. The CLI maps
`ConfigError` to exit code 2 and everything else to exit code 1.
"""

from __future__ import annotations

from typing import Sequence


class PyCargoError(RuntimeError):
    pass


class ConfigError(PyCargoError):
    """Invalid or missing input, detected before any side effect."""


class PreconditionError(PyCargoError):
    """The target project directory already exists."""


class InteractiveInputError(PyCargoError):
    """A required value could not be read from the user."""


class ProcessError(PyCargoError):
    pass


class ProcessSpawnError(ProcessError):
    def __init__(self, program: str, args: Sequence[str], reason: str) -> None:
        self.program = program
        self.argv = list(args)
        super().__init__(f"Failed to execute: {_cmdline(program, args)} ({reason})")


class ProcessExitError(ProcessError):
    def __init__(self, program: str, args: Sequence[str], returncode: int, stderr: str) -> None:
        self.program = program
        self.argv = list(args)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed: {_cmdline(program, args)}\nError Output: {stderr.strip()}")


class NetworkError(PyCargoError):
    pass


class FetchError(NetworkError):
    pass


class HttpFetchError(FetchError):
    def __init__(self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"HTTP error {status} while downloading {url}")


class TransportFetchError(FetchError):
    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to download {url}: {reason}")


class GitHubError(NetworkError):
    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(message)


def _cmdline(program: str, args: Sequence[str]) -> str:
    return " ".join([program, *args])
