"""Tab completion for the prompt.

:func:`complete` is a pure function of the line typed so far, the command
table and an :class:`EnvironmentSnapshot`; :class:`ShellCompleter` adapts it
to prompt_toolkit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import click
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from cluster_shell.core.environment import EnvironmentSnapshot
from cluster_shell.core.kobj import ObjType
from cluster_shell.core.pipeline import SHOW_ALL
from cluster_shell.resources import get_definition

EXIT_WORDS = ("exit", "quit")

SORT_FLAGS = ("--sort", "-s")
SHOW_FLAGS = ("--show", "-S")


@dataclass(frozen=True)
class CommandSpec:
    """What completion needs to know about one command."""

    name: str
    options: tuple[str, ...] = ()
    sort_columns: tuple[str, ...] = ()
    show_columns: tuple[str, ...] = ()


def command_specs(group: click.Group) -> dict[str, CommandSpec]:
    """Collect option names and column flags for every command in ``group``."""
    specs: dict[str, CommandSpec] = {}
    for name, command in group.commands.items():
        options: list[str] = []
        for param in command.params:
            if isinstance(param, click.Option):
                options.extend(param.opts)
        options.append("--help")

        definition = get_definition(name)
        if definition is None:
            specs[name] = CommandSpec(name, tuple(options))
            continue
        specs[name] = CommandSpec(
            name,
            tuple(options),
            sort_columns=(*definition.column_flags, *definition.extra_column_flags),
            show_columns=(*definition.extra_column_flags, SHOW_ALL),
        )
    return specs


def _matching(word: str, candidates: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for candidate in candidates:
        if candidate.startswith(word):
            seen.setdefault(candidate, None)
    return list(seen)


def _split(line: str) -> tuple[list[str], str]:
    """Split into the finished words and the word under the cursor."""
    words = line.split()
    if not words or line[-1].isspace():
        return words, ""
    return words[:-1], words[-1]


def _object_names(snapshot: EnvironmentSnapshot) -> list[str]:
    return [obj.name for obj in snapshot.last_listing]


def _namespaces(snapshot: EnvironmentSnapshot) -> list[str]:
    names = [obj.name for obj in snapshot.last_listing if obj.is_type(ObjType.NAMESPACE)]
    names.extend(obj.namespace for obj in snapshot.last_listing if obj.namespace)
    return sorted(set(names))


def complete(
    line: str,
    snapshot: EnvironmentSnapshot,
    specs: Mapping[str, CommandSpec],
) -> list[str]:
    """Candidates that replace the word under the cursor at the end of ``line``."""
    words, word = _split(line)

    if not words:
        return sorted(_matching(word, [*specs, *EXIT_WORDS]))

    spec = specs.get(words[0])
    if spec is None:
        return []

    previous = words[-1]
    if previous in SORT_FLAGS and len(words) > 1:
        return _matching(word, spec.sort_columns)
    if previous in SHOW_FLAGS and len(words) > 1:
        head, _, tail = word.rpartition(",")
        prefix = f"{head}," if head else ""
        return [prefix + column for column in _matching(tail, spec.show_columns)]
    if word.startswith("-"):
        return _matching(word, spec.options)

    if spec.name == "enter":
        numbers = [str(index) for index in range(1, len(snapshot.last_listing) + 1)]
        return _matching(word, [*numbers, *_object_names(snapshot)])
    if spec.name == "context":
        return _matching(word, snapshot.contexts)
    if spec.name == "namespace":
        return _matching(word, _namespaces(snapshot))
    if spec.name == "help":
        return sorted(_matching(word, specs))
    return []


class ShellCompleter(Completer):
    """prompt_toolkit completer backed by :func:`complete`."""

    def __init__(
        self,
        specs: Mapping[str, CommandSpec],
        snapshot: Callable[[], EnvironmentSnapshot],
    ) -> None:
        self._specs = specs
        self._snapshot = snapshot

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        _, word = _split(text)
        for candidate in complete(text, self._snapshot(), self._specs):
            yield Completion(candidate, start_position=-len(word))
