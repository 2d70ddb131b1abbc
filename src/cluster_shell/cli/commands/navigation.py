"""Navigation commands: namespace, context and selection state."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from cluster_shell.cli.commands.base import get_shell, handle_shell_error
from cluster_shell.core.environment import selection_summary
from cluster_shell.core.errors import ShellError
from cluster_shell.core.table import Cell, SemanticColor
from cluster_shell.integrations.kubernetes.exceptions import KubernetesError

ALL_NAMESPACES = "<all>"

CONTEXT_HEADERS = ("Name", "Cluster", "Namespace")


def register_navigation_commands(app: typer.Typer) -> None:
    """Register commands that move around the cluster and the selection."""

    @app.command("namespace")
    def namespace(
        ctx: typer.Context,
        name: Annotated[str | None, typer.Argument(help="Namespace to switch to")] = None,
        clear: Annotated[
            bool,
            typer.Option("--clear", "-c", help="Unset the namespace (list across all)"),
        ] = False,
    ) -> None:
        """Set the namespace list commands are scoped to, or print it.

        Examples:
            namespace kube-system
            namespace --clear
        """
        shell = get_shell(ctx)
        if clear:
            shell.env.set_namespace(None)
        elif name:
            shell.env.set_namespace(name)
        else:
            shell.renderer.emit_text(shell.env.namespace or ALL_NAMESPACES)

    @app.command("context")
    def context(
        ctx: typer.Context,
        name: Annotated[str | None, typer.Argument(help="Context to switch to")] = None,
    ) -> None:
        """Switch to another kubeconfig context, or print the current one.

        Switching drops the current selection and resets the namespace to
        the one configured on the new context.
        """
        shell = get_shell(ctx)
        if not name:
            shell.renderer.emit_text(shell.env.context or "none")
            return

        try:
            client = shell.get_client()
            active = client.switch_context(name)
            shell.env.set_context(active, client.context_namespace())
        except KubernetesError as e:
            handle_shell_error(e, shell.renderer)
        shell.renderer.emit_text(f"Switched to context {active}", style="green")

    @app.command("contexts")
    def contexts(ctx: typer.Context) -> None:
        """List the contexts in the kubeconfig; the active one is highlighted."""
        shell = get_shell(ctx)
        try:
            available = shell.get_client().list_contexts()
        except KubernetesError as e:
            handle_shell_error(e, shell.renderer)

        shell.env.set_contexts([entry["name"] for entry in available])
        rows = []
        for entry in available:
            active = entry["name"] == shell.env.context
            rows.append(
                (
                    Cell.styled(entry["name"], SemanticColor.SUCCESS if active else None),
                    Cell.plain(entry["cluster"]),
                    Cell.plain(entry["namespace"] or ""),
                )
            )
        shell.renderer.emit_table(CONTEXT_HEADERS, rows, numbered=False)

    @app.command("enter")
    def enter(
        ctx: typer.Context,
        target: Annotated[
            str, typer.Argument(help="Index or name of an object in the last listing")
        ],
    ) -> None:
        """Select one object of the last listing.

        Typing a bare number at the prompt does the same thing.

        Examples:
            enter 3
            enter web-0
            enter default/web-0
        """
        shell = get_shell(ctx)
        try:
            shell.env.enter(target)
        except ShellError as e:
            handle_shell_error(e, shell.renderer)

    @app.command("clear")
    def clear(ctx: typer.Context) -> None:
        """Drop the current selection."""
        get_shell(ctx).env.clear()

    @app.command("up")
    def up(ctx: typer.Context) -> None:
        """Drop the current selection (same as clear)."""
        get_shell(ctx).env.clear()

    @app.command("env")
    def env(ctx: typer.Context) -> None:
        """Show the current context, namespace and selection."""
        shell = get_shell(ctx)
        current = shell.env
        shell.renderer.emit_markup(
            f"[bold]Context:[/bold]   {escape(current.context or 'none')}"
        )
        shell.renderer.emit_markup(
            f"[bold]Namespace:[/bold] {escape(current.namespace or ALL_NAMESPACES)}"
        )
        shell.renderer.emit_markup(
            f"[bold]Selection:[/bold] {escape(selection_summary(current.selection))}"
        )
