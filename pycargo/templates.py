"""
templates.py

Responsibility: The fixed set of dependency manifest templates.

The template texts ship inside the package (`pycargo/manifests/*.txt`) and are
read once per process. `blank` has no file: its manifest is empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

from pycargo.errors import ConfigError

BLANK = "blank"

# Template id -> package data file name (None means empty content).
_TEMPLATE_FILES: dict[str, str | None] = {
    "basic": "basic.txt",
    "advanced": "advanced.txt",
    "data-science": "datascience.txt",
    BLANK: None,
}

TEMPLATE_IDS: tuple[str, ...] = tuple(_TEMPLATE_FILES)


@dataclass(frozen=True)
class ManifestTemplate:
    id: str
    content: str

    @property
    def is_blank(self) -> bool:
        return self.content == ""


def is_known_template(template_id: str) -> bool:
    return template_id in _TEMPLATE_FILES


@lru_cache(maxsize=None)
def get_template(template_id: str) -> ManifestTemplate:
    """
    Return the manifest template for `template_id`.

    Raises ConfigError for ids outside TEMPLATE_IDS.
    """
    if template_id not in _TEMPLATE_FILES:
        raise ConfigError(f"Invalid setup type {template_id!r}. Use {_choices()}")

    filename = _TEMPLATE_FILES[template_id]
    if filename is None:
        return ManifestTemplate(id=template_id, content="")

    content = resources.files("pycargo.manifests").joinpath(filename).read_text(encoding="utf-8")
    return ManifestTemplate(id=template_id, content=content)


def _choices() -> str:
    quoted = [f"'{t}'" for t in TEMPLATE_IDS]
    return ", ".join(quoted[:-1]) + f", or {quoted[-1]}"
