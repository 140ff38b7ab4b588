"""Command: validate raw input against the value-object rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from todoapp.commands._base import TodoCommand
from todoapp.services.validation import VALIDATION_KINDS

if TYPE_CHECKING:
    from todoapp.commands._context import AppContext


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl validate title "Buy milk"
  todoctl -q validate title "  Buy milk  "
  todoctl validate description ""
  todoctl validate username taro_yamada
  todoctl validate todo-id 007
  todoctl --json validate user-id 0""",
)
@click.argument("kind", type=click.Choice(VALIDATION_KINDS))
@click.argument("value")
@click.pass_obj
def validate(app: AppContext, kind: str, value: str) -> None:
    """Validate VALUE as a KIND and print the normalized result."""
    from todoapp.services.validation import ValidationService

    app.emit(ValidationService(app.registry).validate(kind, value))
