"""Command group: inspect role permissions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from todoapp.commands._base import TodoGroup
from todoapp.services.policy import PolicyService

if TYPE_CHECKING:
    from todoapp.commands._context import AppContext

_PERM_EXAMPLES = """\
  todoctl perm list
  todoctl perm list MODERATOR
  todoctl perm check USER DELETE_ALL_TODOS
  todoctl -q perm check admin view_system_logs"""


@click.group(cls=TodoGroup, examples=_PERM_EXAMPLES)
@click.pass_obj
def perm(app: AppContext) -> None:
    """Query the role permission policy."""


@perm.command(
    examples="""\
  todoctl perm check USER CREATE_TODO
  todoctl perm check MODERATOR VIEW_AUDIT_LOGS
  todoctl --json perm check SUPER_ADMIN BACKUP_RESTORE"""
)
@click.argument("role")
@click.argument("permission")
@click.pass_obj
def check(app: AppContext, role: str, permission: str) -> None:
    """Check whether ROLE holds PERMISSION."""
    app.emit(PolicyService(app.registry).check_permission(role, permission))


@perm.command(
    name="list",
    examples="""\
  todoctl perm list
  todoctl -v perm list ADMIN
  todoctl --json perm list USER""",
)
@click.argument("role", required=False)
@click.pass_obj
def list_cmd(app: AppContext, role: str | None) -> None:
    """List the permissions of ROLE, or of every role."""
    app.emit(PolicyService(app.registry).list_permissions(role))
