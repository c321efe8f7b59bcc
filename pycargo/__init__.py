"""
pycargo package

This package implements pycargo as a CLI-first project bootstrapper.

Key responsibilities are split across modules:
- `config.py`: settings file loading and validation of CLI input into a `BootstrapRequest`
- `templates.py`: the built-in dependency manifest templates
- `process.py`: running external programs (uv, pip, git)
- `fetcher.py`: downloading the .gitignore and LICENSE documents
- `github_client.py`: isolated GitHub REST API interactions (repo creation)
- `identity.py`: global git identity and interactive prompting
- `steps.py` / `pipeline.py`: the ordered bootstrap steps and their orchestration
- `observer.py`: terminal rendering of pipeline progress
- `cli.py`: CLI entrypoint (parse -> resolve -> run pipeline)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
