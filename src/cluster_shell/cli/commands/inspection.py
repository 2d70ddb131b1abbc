"""Commands that act on each selected object: describe and containers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Annotated, Any

import typer
import yaml
from rich.text import Text

from cluster_shell.cli.commands.base import RangeOption, ShellContext, get_shell, handle_shell_error
from cluster_shell.core.errors import OperationError, ShellError
from cluster_shell.core.kobj import KObj
from cluster_shell.core.metadata import format_timestamp, parse_timestamp, safe_get
from cluster_shell.integrations.kubernetes.exceptions import KubernetesError

if TYPE_CHECKING:
    from cluster_shell.services.kubernetes import ResourceManager

NONE_TEXT = "<none>"
LABEL_WIDTH = 12


def _field(label: str, value: object, indent: int = 2) -> Text:
    return Text(f"{' ' * indent}{label + ':':<{LABEL_WIDTH}}{value}")


def _timestamp(value: Any) -> str:
    parsed = parse_timestamp(value)
    return format_timestamp(parsed) if parsed else "<unknown>"


def state_lines(state: Any) -> list[Text]:
    """Describe a container state: which phase it is in and why."""
    running = safe_get(state, "running")
    terminated = safe_get(state, "terminated")
    waiting = safe_get(state, "waiting")

    if state is None:
        return [_field("State", "Unknown")]

    if running is not None:
        started = safe_get(running, "started_at")
        lines = [Text.assemble(_field("State", ""), ("Running", "green"))]
        lines.append(_field("started at", _timestamp(started) if started else "unknown", 4))
        return lines

    if terminated is not None:
        return [
            Text.assemble(_field("State", ""), ("Terminated", "red")),
            _field("at", _timestamp(safe_get(terminated, "finished_at")), 4),
            _field("code", safe_get(terminated, "exit_code"), 4),
            _field("message", safe_get(terminated, "message", default="no message"), 4),
            _field("reason", safe_get(terminated, "reason", default="no reason"), 4),
        ]

    if waiting is not None:
        return [
            Text.assemble(_field("State", ""), ("Waiting", "yellow")),
            _field("message", safe_get(waiting, "message", default="no message"), 4),
            _field("reason", safe_get(waiting, "reason", default="no reason"), 4),
        ]

    return [Text.assemble(_field("State", ""), ("Waiting", "yellow"), " (reason unknown)")]


def _quantities(title: str, values: Mapping[str, str] | None) -> list[Text]:
    lines = [Text(f"    {title}:")]
    if not values:
        lines.append(Text(f"      {NONE_TEXT}"))
    for resource, quantity in sorted((values or {}).items()):
        lines.append(_field(resource, quantity, 6))
    return lines


def _mount_lines(container_spec: Any) -> list[Text]:
    mounts = safe_get(container_spec, "volume_mounts") or []
    lines = [Text("  Volumes:")]
    if not mounts:
        lines.append(Text("    No Volumes"))
    for mount in mounts:
        lines.append(Text(f"   {mount.name}"))
        lines.append(_field("Path", mount.mount_path, 4))
        lines.append(_field("Sub-Path", mount.sub_path or NONE_TEXT, 4))
        lines.append(_field("Read-Only", bool(mount.read_only), 4))
    return lines


def container_lines(pod: Any, *, volumes: bool = False) -> list[Text]:
    """Per-container report for one pod; empty when the pod has no statuses."""
    statuses = safe_get(pod, "status", "container_statuses") or []
    specs = {spec.name: spec for spec in safe_get(pod, "spec", "containers", default=[])}

    lines: list[Text] = []
    for status in statuses:
        lines.append(Text.assemble("Name:", " " * (LABEL_WIDTH - 3), (status.name, "bold")))
        lines.append(_field("ID", status.container_id or NONE_TEXT))
        lines.append(_field("Image", status.image))
        lines.extend(state_lines(status.state))
        lines.append(_field("Ready", status.ready))
        lines.append(_field("Restarts", status.restart_count))

        container_spec = specs.get(status.name)
        if container_spec is not None:
            lines.append(Text("  Resources:"))
            resources = safe_get(container_spec, "resources")
            if resources is None:
                lines.append(Text("    <Unknown>"))
            else:
                lines.extend(_quantities("Requests", resources.requests))
                lines.extend(_quantities("Limits", resources.limits))
            if volumes:
                lines.extend(_mount_lines(container_spec))
        lines.append(Text(""))
    return lines


def _apply(
    shell: ShellContext,
    build: Callable[[ResourceManager], Callable[[KObj], None]],
    range_spec: str | None,
) -> None:
    try:
        operation = build(shell.get_manager())
        outcome = shell.env.apply_to_selection(operation, range_spec)
    except (ShellError, KubernetesError) as e:
        handle_shell_error(e, shell.renderer)

    if outcome.aborted:
        shell.renderer.emit_text(
            f"Interrupted: skipped {len(outcome.skipped)} remaining objects", style="yellow"
        )


def register_inspect_commands(app: typer.Typer) -> None:
    """Register commands that run once per selected object."""

    @app.command("describe")
    def describe(ctx: typer.Context, range_spec: RangeOption = None) -> None:
        """Print the full definition of each selected object as YAML.

        Examples:
            describe
            describe -r 1-3
        """
        shell = get_shell(ctx)

        def build(manager: ResourceManager) -> Callable[[KObj], None]:
            def describe_one(obj: KObj) -> None:
                data = manager.to_dict(manager.read(obj))
                shell.renderer.emit_text(f"# {obj.describe()}", style="bold")
                shell.renderer.emit_text(
                    yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip()
                )

            return describe_one

        _apply(shell, build, range_spec)

    def containers(
        ctx: typer.Context,
        volumes: Annotated[
            bool,
            typer.Option("--volumes", "-v", help="Show the volume mounts of each container"),
        ] = False,
        range_spec: RangeOption = None,
    ) -> None:
        """Print the containers of each selected pod.

        Shows state, readiness, restarts and resource requests and limits.

        Examples:
            containers
            containers -v -r 2
        """
        shell = get_shell(ctx)

        def build(manager: ResourceManager) -> Callable[[KObj], None]:
            def show_containers(obj: KObj) -> None:
                if not obj.is_pod:
                    raise OperationError(obj, "containers only applies to pods")
                lines = container_lines(manager.read(obj), volumes=volumes)
                if not lines:
                    raise OperationError(obj, "no container info returned from the API server")
                shell.renderer.emit_text(f"# {obj.describe()}", style="bold")
                for line in lines:
                    shell.renderer.emit(line)

            return show_containers

        _apply(shell, build, range_spec)

    app.command("containers")(containers)
    app.command("conts", hidden=True)(containers)
