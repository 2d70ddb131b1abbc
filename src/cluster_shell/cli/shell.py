"""The interactive prompt loop.

Each line is split with :mod:`shlex` and dispatched to the Typer app built
by :func:`~cluster_shell.cli.commands.build_app`, with the session's
:class:`ShellContext` as the click context object. Commands report their own
errors and exit with a non-zero code; the loop only stops on ``exit``,
``quit`` or end of input.
"""

from __future__ import annotations

import shlex
from pathlib import Path

import click
import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, InMemoryHistory

from cluster_shell.cli.commands import build_app
from cluster_shell.cli.commands.base import ShellContext
from cluster_shell.cli.completion import EXIT_WORDS, ShellCompleter, command_specs
from cluster_shell.cli.output import ConsoleRenderer
from cluster_shell.core.environment import Environment, selection_summary
from cluster_shell.integrations.kubernetes.client import KubernetesClient
from cluster_shell.integrations.kubernetes.config import KubernetesClientConfig
from cluster_shell.logging import get_logger
from cluster_shell.services.kubernetes import ResourceManager


PROG_NAME = "cluster-shell"


class ClientProvider:
    """Creates the Kubernetes client on first use and keeps it.

    A cluster that is unreachable at startup does not stop the shell: every
    command that needs the client tries again.
    """

    def __init__(self, client_config: KubernetesClientConfig) -> None:
        self._config = client_config
        self._client: KubernetesClient | None = None
        self._manager: ResourceManager | None = None

    def client(self) -> KubernetesClient:
        if self._client is None:
            self._client = KubernetesClient(self._config)
        return self._client

    def manager(self) -> ResourceManager:
        if self._manager is None:
            self._manager = ResourceManager(self.client())
        return self._manager

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._manager = None


def build_shell_context(
    env: Environment,
    provider: ClientProvider,
    renderer: ConsoleRenderer | None = None,
) -> ShellContext:
    return ShellContext(
        env=env,
        renderer=renderer or ConsoleRenderer(),
        get_client=provider.client,
        get_manager=provider.manager,
    )


class Shell:
    """Reads lines from the user and runs them as commands."""

    def __init__(
        self,
        shell_context: ShellContext,
        *,
        history_file: Path | None = None,
        session: PromptSession[str] | None = None,
    ) -> None:
        self.context = shell_context
        self.command = typer.main.get_command(build_app())
        if not isinstance(self.command, click.Group):
            raise TypeError("shell app must be a command group")
        self.specs = command_specs(self.command)
        self._history_file = history_file
        self._session = session
        self._log = get_logger(__name__, component="shell")

    @property
    def env(self) -> Environment:
        return self.context.env

    def prompt_fragments(self) -> FormattedText:
        """``[context][namespace][selection] > `` with each part coloured."""
        env = self.env
        return FormattedText(
            [
                ("", "["),
                ("ansired", env.context or "none"),
                ("", "]["),
                ("ansigreen", env.namespace or "none"),
                ("", "]["),
                ("ansiyellow", selection_summary(env.selection)),
                ("", "] > "),
            ]
        )

    def execute(self, line: str) -> bool:
        """Run one line; returns False when the shell should exit."""
        line = line.strip()
        if not line or line.startswith("#"):
            return True

        try:
            args = shlex.split(line)
        except ValueError as e:
            self.context.renderer.emit_error(f"cannot parse command: {e}")
            return True

        if args[0] in EXIT_WORDS:
            return False
        if len(args) == 1 and args[0].isascii() and args[0].isdigit():
            args = ["enter", args[0]]

        self._log.debug("executing_command", args=args)
        try:
            self.command.main(
                args,
                prog_name=PROG_NAME,
                standalone_mode=False,
                obj=self.context,
            )
        except click.exceptions.Abort:
            self.context.renderer.emit_text("Aborted", style="yellow")
        except click.ClickException as e:
            self.context.renderer.emit_error(e.format_message())
            if isinstance(e, click.UsageError) and e.ctx is not None:
                self.context.renderer.emit_text(
                    f"Try '{e.ctx.info_name} --help' for help.", style="dim"
                )
        except KeyboardInterrupt:
            self.context.renderer.emit_text("Interrupted", style="yellow")
        except Exception as e:
            self._log.exception("command_failed", line=line)
            self.context.renderer.emit_error(f"unexpected error: {e}")
        return True

    def _build_session(self) -> PromptSession[str]:
        history: FileHistory | InMemoryHistory
        if self._history_file is not None:
            self._history_file.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(self._history_file))
        else:
            history = InMemoryHistory()
        return PromptSession(
            history=history,
            completer=ShellCompleter(self.specs, self.env.snapshot),
            complete_while_typing=False,
        )

    def run(self) -> int:
        """Prompt until ``exit``, ``quit`` or Ctrl-D."""
        if self._session is None:
            self._session = self._build_session()

        while True:
            try:
                line = self._session.prompt(self.prompt_fragments)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not self.execute(line):
                break

        self._log.debug("shell_exiting")
        return 0
