"""Subcommand modules for todoctl.

register_commands() imports command modules lazily so ``todoctl --help``
stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    # --- Groups ---
    from todoapp.commands.perm import perm
    from todoapp.commands.status import status

    cli.add_command(status)
    cli.add_command(perm)

    # --- Standalone commands ---
    from todoapp.commands.validate import validate

    cli.add_command(validate)
