"""Shared fixtures for shell command tests."""

from __future__ import annotations

import io
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
import typer
from click.testing import Result
from rich.console import Console
from typer.testing import CliRunner

from cluster_shell.cli.commands import build_app
from cluster_shell.cli.commands.base import ShellContext
from cluster_shell.cli.output import ConsoleRenderer
from cluster_shell.core.environment import Environment
from cluster_shell.resources import build_registry


@pytest.fixture
def output() -> io.StringIO:
    """Buffer the renderer's console writes to."""
    return io.StringIO()


@pytest.fixture
def renderer(output: io.StringIO) -> ConsoleRenderer:
    """Renderer printing plain text to ``output``."""
    return ConsoleRenderer(Console(file=output, width=200, highlight=False, color_system=None))


@pytest.fixture
def env() -> Environment:
    return Environment(build_registry(), context="kind-dev", namespace="default")


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock Kubernetes client."""
    mock_client = MagicMock()
    mock_client.default_namespace = "default"
    return mock_client


@pytest.fixture
def mock_manager() -> MagicMock:
    """Create a mock ResourceManager."""
    return MagicMock()


@pytest.fixture
def shell_context(
    env: Environment,
    renderer: ConsoleRenderer,
    mock_client: MagicMock,
    mock_manager: MagicMock,
) -> ShellContext:
    return ShellContext(
        env=env,
        renderer=renderer,
        get_client=lambda: mock_client,
        get_manager=lambda: mock_manager,
    )


@pytest.fixture
def app() -> typer.Typer:
    return build_app()


@pytest.fixture
def invoke(
    cli_runner: CliRunner, app: typer.Typer, shell_context: ShellContext
) -> Callable[..., Result]:
    """Run one shell command line against ``shell_context``."""

    def _invoke(*args: str) -> Result:
        return cli_runner.invoke(app, list(args), obj=shell_context)

    return _invoke
