"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from todoapp.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["validate", "--examples"], ["todoctl validate title", "todo-id 007"]),
    (["status", "--examples"], ["todoctl status list", "todoctl status check"]),
    (["status", "check", "--examples"], ["--approval", "--emergency"]),
    (["status", "list", "--examples"], ["todoctl status list COMPLETED"]),
    (["perm", "--examples"], ["todoctl perm list", "todoctl perm check"]),
    (["perm", "check", "--examples"], ["VIEW_AUDIT_LOGS"]),
    (["perm", "list", "--examples"], ["todoctl -v perm list ADMIN"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    ("args", "keywords"),
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_not_in_help_body(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["status", "check", "--help"])
    assert "--examples" in result.output
    assert "todoctl status check DELETED TODO --emergency" not in result.output
