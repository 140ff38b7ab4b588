"""Locate and read the ``todoapp.toml`` policy file.

An explicit ``--config`` path wins, then ``TODOAPP_CONFIG``, then the first
``todoapp.toml`` found walking up from the working directory.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

import click
from pydantic import ValidationError

from todoapp.config.models import TodoConfig

CONFIG_FILENAME = "todoapp.toml"
CONFIG_ENV_VAR = "TODOAPP_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``todoapp.toml`` at or above *start*, or None.

    A set ``TODOAPP_CONFIG`` short-circuits the search; if it names a
    missing file no config is used at all.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(config_path: str | None, start: Path | None = None) -> Path | None:
    """Pick the config file for one CLI invocation.

    An explicit *config_path* that does not exist means "no file", it never
    falls back to discovery.
    """
    if config_path:
        path = Path(config_path)
        return path if path.is_file() else None
    return find_config(start)


def read_config(path: Path) -> TodoConfig:
    """Parse and validate *path*; errors name the offending file."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
    try:
        return TodoConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(err["msg"] for err in exc.errors())
        raise click.ClickException(f"Invalid config in {path}: {problems}") from exc
