"""Base utilities for shell commands.

Provides the per-session :class:`ShellContext`, common Typer options and
user-facing error reporting shared by every command.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, NoReturn

import typer

from cluster_shell.core.errors import ConfigError, MultiOperationError, OperationError, ShellError
from cluster_shell.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesContextError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
)

if TYPE_CHECKING:
    from cluster_shell.cli.output import ConsoleRenderer
    from cluster_shell.core.environment import Environment
    from cluster_shell.integrations.kubernetes.client import KubernetesClient
    from cluster_shell.services.kubernetes import ResourceManager


@dataclass
class ShellContext:
    """What every command receives through ``ctx.obj``."""

    env: Environment
    renderer: ConsoleRenderer
    get_client: Callable[[], KubernetesClient]
    get_manager: Callable[[], ResourceManager]


def get_shell(ctx: typer.Context) -> ShellContext:
    shell = ctx.find_object(ShellContext)
    if shell is None:
        raise RuntimeError("shell commands must be invoked with a ShellContext")
    return shell


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

RegexOption = Annotated[
    str | None,
    typer.Option(
        "--regex",
        "-r",
        help="Only list objects whose name matches this regular expression",
    ),
]

SortOption = Annotated[
    str | None,
    typer.Option(
        "--sort",
        "-s",
        help="Sort by this column (any base or extra column flag)",
    ),
]

ShowOption = Annotated[
    list[str] | None,
    typer.Option(
        "--show",
        "-S",
        help="Show extra columns (repeat or comma separate; 'all' for every one)",
    ),
]

ReverseOption = Annotated[
    bool,
    typer.Option(
        "--reverse",
        "-R",
        help="Reverse the order of the returned list",
    ),
]

LabelsOption = Annotated[
    bool,
    typer.Option(
        "--labels",
        "-L",
        help="Include labels in output (same as --show labels)",
    ),
]

LabelSelectorOption = Annotated[
    str | None,
    typer.Option(
        "--label",
        "-l",
        help="Label selector (e.g., 'app=nginx,tier=frontend')",
    ),
]

RangeOption = Annotated[
    str | None,
    typer.Option(
        "--range",
        "-r",
        help="Only act on these members of the selection, e.g. '2-4,7'",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_shell_error(error: ShellError | KubernetesError, renderer: ConsoleRenderer) -> NoReturn:
    """Report an error to the user and end the current command.

    Raises:
        typer.Exit: Always exits the command with code 1; the shell keeps running.
    """
    if isinstance(error, KubernetesContextError):
        renderer.emit_error(
            error.message,
            hint=f"Available contexts: {', '.join(error.available)}" if error.available else None,
        )
    elif isinstance(error, KubernetesConnectionError):
        renderer.emit_error(
            f"Cannot connect to Kubernetes cluster: {error.message}",
            hint="Hint: Check that your kubeconfig is valid and the cluster is reachable.",
        )
        if error.original_error:
            renderer.emit_text(f"  Cause: {error.original_error}")
    elif isinstance(error, KubernetesAuthError):
        renderer.emit_error(
            f"Authentication/authorization failed: {error.message}",
            hint="Hint: Check your credentials, token, or RBAC permissions.",
        )
    elif isinstance(error, KubernetesNotFoundError):
        renderer.emit_error(f"Resource not found: {error.message}")
    elif isinstance(error, KubernetesTimeoutError):
        renderer.emit_error(
            f"Request timed out: {error.message}",
            hint="Hint: Try increasing the timeout with CLUSTER_SHELL_TIMEOUT.",
        )
    elif isinstance(error, KubernetesError):
        renderer.emit_error(str(error))
    elif isinstance(error, ConfigError):
        renderer.emit_error(error.message)
    elif isinstance(error, MultiOperationError):
        renderer.emit_error(error.message)
        for failure in error.failures:
            renderer.emit_text(f"  {failure}", style="red")
    elif isinstance(error, OperationError):
        renderer.emit_error(str(error))
    else:
        renderer.emit_error(error.message)

    raise typer.Exit(1)
