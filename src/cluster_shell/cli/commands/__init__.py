"""Shell command modules and the Typer app that dispatches to them."""

import typer

from cluster_shell.cli.commands.help import register_help_command
from cluster_shell.cli.commands.inspection import register_inspect_commands
from cluster_shell.cli.commands.listing import register_list_commands
from cluster_shell.cli.commands.navigation import register_navigation_commands


def build_app() -> typer.Typer:
    """Build the Typer app every line typed at the prompt is dispatched to."""
    app = typer.Typer(
        name="cluster-shell",
        help="Interactive Kubernetes cluster shell",
        add_completion=False,
        pretty_exceptions_enable=False,
    )
    register_list_commands(app)
    register_navigation_commands(app)
    register_inspect_commands(app)
    register_help_command(app)
    return app


__all__ = [
    "build_app",
    "register_help_command",
    "register_inspect_commands",
    "register_list_commands",
    "register_navigation_commands",
]
