"""
cli.py

Responsibility: CLI entrypoint for pycargo.

High-level flow (single command `new`):
1) Load settings (YAML, optional)
2) Resolve CLI arguments + environment -> `BootstrapRequest` (no side effects)
3) Run the bootstrap pipeline, rendering progress with rich

This module should orchestrate behavior but keep concerns isolated:
- Input validation: `config.py`
- Step sequencing: `pipeline.py` / `steps.py`
- Terminal rendering: `observer.py`
"""

from __future__ import annotations

import argparse
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from pycargo import __version__
from pycargo.config import Settings, load_settings, resolve
from pycargo.errors import ConfigError
from pycargo.observer import RichObserver
from pycargo.pipeline import BootstrapPipeline
from pycargo.templates import TEMPLATE_IDS

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def _make_pipeline(settings: Settings, console: Console) -> BootstrapPipeline:
    return BootstrapPipeline(settings=settings, observer=RichObserver(console))


def new_cmd(args: argparse.Namespace) -> int:
    console = Console()
    err_console = Console(stderr=True)
    _configure_logging(bool(args.verbose), err_console)

    try:
        settings = load_settings(args.config)
        request = resolve(
            project_name=args.name,
            setup=args.setup,
            github=bool(args.github),
            github_repo_name=args.github_repo_name,
            private=bool(args.private),
            env=os.environ,
            settings=settings,
        )
    except ConfigError as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        return EXIT_CONFIG

    outcome = _make_pipeline(settings, console).run(request)
    if not outcome.ok:
        err_console.print(f"[red]error:[/red] {escape(outcome.failure_message)}")
        return EXIT_FAILED
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pycargo", description="pycargo - bootstrap a Python project with uv and git")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    n = sub.add_parser("new", help="Create a project directory, uv environment and initial git commit")
    n.add_argument("name", help="Name of the project directory")
    n.add_argument(
        "-s",
        "--setup",
        default=None,
        metavar="{" + ",".join(TEMPLATE_IDS) + "}",
        help="Requirements template (default: advanced, or `default_setup` from the config file)",
    )
    n.add_argument("-g", "--github", action="store_true", help="Create a GitHub repository and push to it")
    n.add_argument("--github-repo-name", default=None, help="GitHub repository name (default: project name)")
    n.add_argument("-p", "--private", action="store_true", help="Make the GitHub repository private")
    n.add_argument("--config", default=None, help="Path to a YAML config file (or set env PYCARGO_CONFIG)")
    n.add_argument("-v", "--verbose", action="store_true", help="Log commands and requests")

    n.set_defaults(func=new_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
