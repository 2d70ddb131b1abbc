"""The ``help`` command."""

from __future__ import annotations

from typing import Annotated

import click
import typer

from cluster_shell.cli.commands.base import get_shell
from cluster_shell.core.table import Cell

# Handled by the prompt loop rather than by a command
SHELL_BUILTINS = (
    ("exit", "Leave the shell (also quit or Ctrl-D)"),
    ("<number>", "Select that row of the last listing (same as enter)"),
)


def register_help_command(app: typer.Typer) -> None:
    """Register ``help``, which lists commands or shows one command's usage."""

    @app.command("help")
    def help_(
        ctx: typer.Context,
        command: Annotated[str | None, typer.Argument(help="Command to show help for")] = None,
    ) -> None:
        """List the available commands, or show the options of one of them."""
        shell = get_shell(ctx)
        root = ctx.find_root()
        group = root.command
        if not isinstance(group, click.Group):
            return

        if command:
            target = group.get_command(root, command)
            if target is None:
                shell.renderer.emit_error(f"no such command: {command}")
                raise typer.Exit(1)
            sub_ctx = click.Context(target, info_name=command, parent=root)
            usage = target.get_help(sub_ctx)
            if usage.strip():
                shell.renderer.emit_text(usage)
            return

        rows = []
        for name in group.list_commands(root):
            cmd = group.get_command(root, name)
            if cmd is None or cmd.hidden:
                continue
            rows.append((Cell.plain(name), Cell.plain(cmd.get_short_help_str(limit=72))))
        rows.extend((Cell.plain(name), Cell.plain(text)) for name, text in SHELL_BUILTINS)
        shell.renderer.emit_table(("Command", "Description"), rows, numbered=False)
        shell.renderer.emit_text("Run 'help COMMAND' or 'COMMAND --help' for options.", style="dim")
