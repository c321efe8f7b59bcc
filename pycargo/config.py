"""
config.py

Responsibility: Turn user input into a validated, typed `BootstrapRequest`.

Two inputs are handled here:
- An optional YAML settings file that overrides download URLs, GitHub endpoints
  and defaults (`Settings`).
- The parsed CLI arguments plus the process environment (`resolve`).

Nothing in this module touches the filesystem beyond reading the settings file,
so a ConfigError never leaves a half-created project behind.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from pycargo.errors import ConfigError
from pycargo.templates import TEMPLATE_IDS, is_known_template

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"
CONFIG_ENV_VAR = "PYCARGO_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/pycargo/config.yaml")


@dataclass(frozen=True)
class Settings:
    """Tunable endpoints and defaults; every field may be overridden from YAML."""

    gitignore_url: str = "https://raw.githubusercontent.com/github/gitignore/main/Python.gitignore"
    license_url: str = "https://www.apache.org/licenses/LICENSE-2.0.txt"
    github_api_base: str = "https://api.github.com"
    github_host: str = "https://github.com"
    default_branch: str = "main"
    default_setup: str = "advanced"
    manifest_filename: str = "requirements.txt"


@dataclass(frozen=True)
class BootstrapRequest:
    """Validated parameters for a single bootstrap run."""

    project_name: str
    setup_template: str
    github: bool = False
    remote_repo_name: str | None = None
    is_private: bool = False
    github_token: str | None = field(default=None, repr=False)


def load_settings(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
    """
    Load `Settings` from YAML.

    Lookup order: explicit `path`, then $PYCARGO_CONFIG, then
    ~/.config/pycargo/config.yaml. Only an explicitly named file must exist.
    """
    env = os.environ if env is None else env
    explicit = path or env.get(CONFIG_ENV_VAR)
    cfg_path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH.expanduser()

    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Config file does not exist: {cfg_path}")
        return Settings()

    logger.debug("Loading settings from %s", cfg_path)
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {cfg_path}: {e}") from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping/object at the top level: {cfg_path}")
    return settings_from_mapping(data)


def settings_from_mapping(data: Mapping[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    overrides: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        text = str(value).strip()
        if not text:
            raise ConfigError(f"Config key `{key}` must not be empty")
        overrides[key] = text

    settings = replace(Settings(), **overrides)
    if not is_known_template(settings.default_setup):
        raise ConfigError(f"Config key `default_setup` must be one of: {', '.join(TEMPLATE_IDS)}")
    return settings


def resolve(
    *,
    project_name: str,
    setup: str | None,
    github: bool = False,
    github_repo_name: str | None = None,
    private: bool = False,
    env: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> BootstrapRequest:
    """
    Validate raw CLI values into a `BootstrapRequest`. Pure: no side effects.

    Raises ConfigError for an unusable project name, an unknown setup template,
    or a GitHub request without a GITHUB_TOKEN.
    """
    env = os.environ if env is None else env
    settings = settings or Settings()

    name = (project_name or "").strip()
    if not name:
        raise ConfigError("Project name must not be empty")
    if name in (".", "..") or any(sep in name for sep in ("/", os.sep, os.altsep) if sep):
        raise ConfigError(f"Project name must be a single path segment: {name!r}")

    template = (setup or settings.default_setup).strip()
    if not is_known_template(template):
        raise ConfigError(
            f"Invalid setup type {template!r}. Use one of: {', '.join(TEMPLATE_IDS)}"
        )

    remote_repo_name: str | None = None
    token: str | None = None
    if github:
        if github_repo_name is not None and not github_repo_name.strip():
            raise ConfigError("GitHub repository name must not be empty")
        remote_repo_name = (github_repo_name or name).strip()
        token = (env.get(TOKEN_ENV_VAR) or "").strip()
        if not token:
            raise ConfigError(f"{TOKEN_ENV_VAR} environment variable is not set")

    return BootstrapRequest(
        project_name=name,
        setup_template=template,
        github=github,
        remote_repo_name=remote_repo_name,
        is_private=private,
        github_token=token,
    )
