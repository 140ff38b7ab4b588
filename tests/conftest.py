"""Shared pytest fixtures for todoapp tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from todoapp.domain.lifecycle import TodoStatusTransitionPolicy
from todoapp.domain.permissions import UserPermissionPolicy
from todoapp.services.registry import PolicyRegistry


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and app logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("todoapp")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def transition_policy() -> TodoStatusTransitionPolicy:
    """Transition policy with the default rule table."""
    return TodoStatusTransitionPolicy()


@pytest.fixture
def permission_policy() -> UserPermissionPolicy:
    """Permission policy with the default role table."""
    return UserPermissionPolicy()


@pytest.fixture
def registry() -> PolicyRegistry:
    """Registry holding fresh default policies."""
    return PolicyRegistry()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config discovery leaking in.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on CLI test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TODOAPP_CONFIG", raising=False)
    for var in ("TODOAPP_JSON_OUTPUT", "TODOAPP_QUIET", "TODOAPP_VERBOSE", "TODOAPP_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
