"""Command group: inspect the todo status transition rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from todoapp.commands._base import TodoGroup
from todoapp.services.policy import PolicyService

if TYPE_CHECKING:
    from todoapp.commands._context import AppContext

_STATUS_EXAMPLES = """\
  todoctl status list
  todoctl status list in_progress
  todoctl status check TODO IN_PROGRESS
  todoctl status check IN_PROGRESS COMPLETED --approval
  todoctl status check COMPLETED TODO --emergency"""


@click.group(cls=TodoGroup, examples=_STATUS_EXAMPLES)
@click.pass_obj
def status(app: AppContext) -> None:
    """Query the status transition policy."""


@status.command(
    examples="""\
  todoctl status check TODO COMPLETED
  todoctl status check IN_PROGRESS COMPLETED
  todoctl status check IN_PROGRESS COMPLETED --approval
  todoctl status check DELETED TODO --emergency
  todoctl -q status check todo deleted"""
)
@click.argument("from_code", metavar="FROM")
@click.argument("to_code", metavar="TO")
@click.option(
    "--approval/--no-approval",
    default=False,
    help="Whether the change has been approved.",
)
@click.option("--emergency", is_flag=True, help="Evaluate as an emergency override.")
@click.pass_obj
def check(app: AppContext, from_code: str, to_code: str, approval: bool, emergency: bool) -> None:
    """Check whether a todo may move from FROM to TO."""
    svc = PolicyService(app.registry)
    app.emit(svc.check_transition(from_code, to_code, approval=approval, emergency=emergency))


@status.command(
    name="list",
    examples="""\
  todoctl status list
  todoctl status list COMPLETED
  todoctl --json status list""",
)
@click.argument("from_code", metavar="[FROM]", required=False)
@click.pass_obj
def list_cmd(app: AppContext, from_code: str | None) -> None:
    """List allowed transitions, for one status or all of them."""
    app.emit(PolicyService(app.registry).list_transitions(from_code))
