"""Config file and site root discovery.

A site root is the nearest ancestor of the working directory that holds
either ``blogctl.toml`` or a ``content/`` directory, so the scripts work
from any subdirectory of the site, with or without a config file.

``BLOGCTL_CONFIG`` and ``--config`` override the config lookup.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "blogctl.toml"
CONFIG_ENV_VAR = "BLOGCTL_CONFIG"
CONTENT_MARKER = "content"


def _ancestors(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Locate blogctl.toml: ``BLOGCTL_CONFIG`` first, then walk up from *start*.

    An env var pointing at a missing file means "no config", not "keep looking".
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _ancestors(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_site_root(start: Path | None = None) -> Path | None:
    """Nearest ancestor of *start* holding blogctl.toml or a content/ dir."""
    for directory in _ancestors(start):
        if (directory / CONFIG_FILENAME).is_file() or (directory / CONTENT_MARKER).is_dir():
            return directory
    return None
