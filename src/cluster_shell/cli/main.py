"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
from rich.console import Console

from cluster_shell import __version__
from cluster_shell.cli.output import ConsoleRenderer
from cluster_shell.cli.shell import ClientProvider, Shell, build_shell_context
from cluster_shell.core.config import load_config
from cluster_shell.core.environment import Environment
from cluster_shell.core.errors import ConfigError
from cluster_shell.integrations.kubernetes.exceptions import KubernetesConnectionError
from cluster_shell.logging.config import configure_logging
from cluster_shell.resources import build_registry

app = typer.Typer(
    name="cluster-shell",
    help="Interactive shell for exploring Kubernetes clusters.",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cluster-shell version {__version__}")
        raise typer.Exit()


def start_environment(provider: ClientProvider, env: Environment) -> None:
    """Adopt the client's context, namespace and known contexts.

    Connection problems are logged and left for the first command to report.
    """
    try:
        client = provider.client()
    except KubernetesConnectionError as e:
        logger.warning("started_without_cluster", error=e.message)
        return

    contexts = [entry["name"] for entry in client.list_contexts()]
    env.set_contexts(contexts)
    env.set_context(client.get_current_context(), client.default_namespace)
    logger.info("shell_started", context=env.context, namespace=env.namespace)


@app.command()
def main(
    context: str | None = typer.Option(
        None,
        "--context",
        "-c",
        help="Kubeconfig context (or configured cluster) to start in.",
    ),
    namespace: str | None = typer.Option(
        None,
        "--namespace",
        "-n",
        help="Namespace to start in.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        help="Path to the shell configuration file.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
) -> None:
    """Interactive Kubernetes cluster shell."""
    configure_logging(verbose=verbose, debug=debug)

    try:
        shell_config = load_config(config_file)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from None

    overrides = {
        key: value
        for key, value in (("active_cluster", context), ("namespace", namespace))
        if value
    }
    client_config = shell_config.kubernetes.model_copy(update=overrides)

    env = Environment(build_registry(), shell_config)
    provider = ClientProvider(client_config)
    start_environment(provider, env)

    shell = Shell(
        build_shell_context(env, provider, ConsoleRenderer(console)),
        history_file=Path(shell_config.history_file),
    )
    try:
        shell.run()
    finally:
        provider.close()


if __name__ == "__main__":
    app()
