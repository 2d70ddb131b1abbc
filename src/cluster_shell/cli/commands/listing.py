"""List commands, one per resource kind.

Every command runs the same pipeline with its kind's definition; the listed
objects become the shell's new selection.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

import typer

from cluster_shell.cli.commands.base import (
    LabelSelectorOption,
    LabelsOption,
    RegexOption,
    ReverseOption,
    ShowOption,
    SortOption,
    get_shell,
    handle_shell_error,
)
from cluster_shell.core.environment import SingleSelection
from cluster_shell.core.errors import ShellError
from cluster_shell.core.kobj import ObjType
from cluster_shell.core.pipeline import ListOptions, run_list
from cluster_shell.integrations.kubernetes.exceptions import KubernetesError
from cluster_shell.resources import RESOURCES, ResourceDefinition

NodeOption = Annotated[
    str | None,
    typer.Option(
        "--node",
        "-n",
        help="Only fetch pods on the specified node",
    ),
]


def build_list_options(
    regex: str | None,
    sort: str | None,
    show: list[str] | None,
    reverse: bool,
    labels: bool,
) -> ListOptions:
    """Fold the raw flags of a list command into :class:`ListOptions`."""
    requested = list(show or [])
    if labels:
        requested.append("labels")
    return ListOptions(sort=sort, regex=regex, reverse=reverse, show=tuple(requested))


def run_list_command(
    ctx: typer.Context,
    definition: ResourceDefinition,
    options: ListOptions,
    *,
    label_selector: str | None = None,
    field_selector: str | None = None,
) -> None:
    """Fetch, tabulate and select the objects of one kind."""
    shell = get_shell(ctx)
    env = shell.env

    def fetch() -> list[object]:
        return shell.get_manager().list(
            definition.kind,
            env.namespace,
            label_selector=label_selector,
            field_selector=field_selector,
        )

    try:
        result = run_list(definition, options, env.registry, fetch)
    except (ShellError, KubernetesError) as e:
        handle_shell_error(e, shell.renderer)

    env.select_many(result.objects)
    shell.renderer.emit_table(result.headers, [row.cells for row in result.rows])


def _help_text(definition: ResourceDefinition) -> str:
    return (
        f"{definition.help}.\n\n"
        f"Columns: {', '.join(definition.column_flags)}.\n\n"
        f"Extra columns: {', '.join(definition.extra_column_flags)}."
    )


def _register(
    app: typer.Typer, definition: ResourceDefinition, command: Callable[..., None]
) -> None:
    help_text = _help_text(definition)
    app.command(definition.command, help=help_text)(command)
    for alias in definition.aliases:
        app.command(alias, help=help_text, hidden=True)(command)


def _register_pods(app: typer.Typer, definition: ResourceDefinition) -> None:
    def list_pods(
        ctx: typer.Context,
        regex: RegexOption = None,
        sort: SortOption = None,
        show: ShowOption = None,
        reverse: ReverseOption = False,
        labels: LabelsOption = False,
        label_selector: LabelSelectorOption = None,
        node: NodeOption = None,
    ) -> None:
        selection = get_shell(ctx).env.selection
        field_selector = None
        if node:
            field_selector = f"spec.nodeName={node}"
        elif isinstance(selection, SingleSelection) and selection.obj.is_type(ObjType.NODE):
            field_selector = f"spec.nodeName={selection.obj.name}"

        run_list_command(
            ctx,
            definition,
            build_list_options(regex, sort, show, reverse, labels),
            label_selector=label_selector,
            field_selector=field_selector,
        )

    _register(app, definition, list_pods)


def _register_generic(app: typer.Typer, definition: ResourceDefinition) -> None:
    def list_resources(
        ctx: typer.Context,
        regex: RegexOption = None,
        sort: SortOption = None,
        show: ShowOption = None,
        reverse: ReverseOption = False,
        labels: LabelsOption = False,
        label_selector: LabelSelectorOption = None,
    ) -> None:
        run_list_command(
            ctx,
            definition,
            build_list_options(regex, sort, show, reverse, labels),
            label_selector=label_selector,
        )

    _register(app, definition, list_resources)


def register_list_commands(app: typer.Typer) -> None:
    """Register a list command (plus aliases) for every resource kind."""
    for definition in RESOURCES:
        if definition.kind is ObjType.POD:
            _register_pods(app, definition)
        else:
            _register_generic(app, definition)
