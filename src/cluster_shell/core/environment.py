"""Navigation state of the shell: context, namespace and current selection.

One :class:`Environment` is created when the shell starts and handed to
every command. It changes only between commands: a successful list replaces
the selection with the listed objects, ``enter`` narrows it to one object and
``clear`` drops it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import structlog

from cluster_shell.core.config import ShellConfig
from cluster_shell.core.errors import ConfigError, MultiOperationError, OperationError
from cluster_shell.core.extractors import ExtractorRegistry
from cluster_shell.core.kobj import KObj
from cluster_shell.core.ranges import parse_range_spec
from cluster_shell.integrations.kubernetes.exceptions import KubernetesError

logger = structlog.get_logger()

Operation = Callable[[KObj], None]


@dataclass(frozen=True)
class NoSelection:
    def __len__(self) -> int:
        return 0


@dataclass(frozen=True)
class SingleSelection:
    obj: KObj

    def __len__(self) -> int:
        return 1


@dataclass(frozen=True)
class ManySelection:
    objs: tuple[KObj, ...] = ()

    def __len__(self) -> int:
        return len(self.objs)


Selection = NoSelection | SingleSelection | ManySelection


def selection_summary(selection: Selection) -> str:
    """Short description of a selection for prompts and ``env``."""
    if isinstance(selection, SingleSelection):
        return selection.obj.describe()
    if isinstance(selection, ManySelection):
        count = len(selection.objs)
        kinds = {obj.typ for obj in selection.objs}
        noun = kinds.pop().kind_name if len(kinds) == 1 else "object"
        return f"{count} {noun}{'' if count == 1 else 's'}"
    return "none"


@dataclass(frozen=True)
class ApplyOutcome:
    """Which selected objects an operation ran on, and which it never reached."""

    applied: tuple[KObj, ...] = ()
    skipped: tuple[KObj, ...] = ()

    @property
    def aborted(self) -> bool:
        return bool(self.skipped)


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Read-only view of the environment for completion and prompts."""

    context: str | None
    namespace: str | None
    selection: Selection
    contexts: tuple[str, ...] = ()
    last_listing: tuple[KObj, ...] = field(default=())


class Environment:
    """Process-wide navigation state, mutated only at command boundaries."""

    def __init__(
        self,
        registry: ExtractorRegistry,
        config: ShellConfig | None = None,
        *,
        context: str | None = None,
        namespace: str | None = None,
        contexts: Sequence[str] = (),
    ) -> None:
        self.registry = registry
        self.config = config or ShellConfig()
        self._context = context
        self._namespace = namespace
        self._contexts = tuple(contexts)
        self._selection: Selection = NoSelection()
        self._last_listing: tuple[KObj, ...] = ()

    # =========================================================================
    # Context and Namespace
    # =========================================================================

    @property
    def context(self) -> str | None:
        return self._context

    @property
    def namespace(self) -> str | None:
        return self._namespace

    @property
    def contexts(self) -> tuple[str, ...]:
        return self._contexts

    def set_namespace(self, namespace: str | None) -> None:
        """Set the namespace list commands are scoped to; None means all."""
        self._namespace = namespace or None
        logger.info("namespace_changed", namespace=self._namespace)

    def set_context(self, context: str, namespace: str | None = None) -> None:
        """Move to another cluster context.

        Objects selected in the old context mean nothing in the new one, so
        the selection and last listing are dropped.
        """
        self._context = context
        self._namespace = namespace or None
        self._selection = NoSelection()
        self._last_listing = ()
        logger.info("context_changed", context=context, namespace=self._namespace)

    def set_contexts(self, contexts: Sequence[str]) -> None:
        self._contexts = tuple(contexts)

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def last_listing(self) -> tuple[KObj, ...]:
        return self._last_listing

    def select_many(self, objs: Sequence[KObj]) -> None:
        """Adopt the rows of a list command, in display order."""
        self._last_listing = tuple(objs)
        self._selection = ManySelection(self._last_listing)
        logger.debug("selection_changed", selection="many", count=len(objs))

    def select_single(self, obj: KObj) -> None:
        self._selection = SingleSelection(obj)
        logger.debug("selection_changed", selection="single", object=obj.describe())

    def clear(self) -> None:
        self._selection = NoSelection()
        logger.debug("selection_changed", selection="none")

    def enter(self, target: str) -> KObj:
        """Select one object of the last listing by 1-based index or name.

        ``namespace/name`` disambiguates objects that share a name.

        Raises:
            ConfigError: If nothing was listed or no object matches.
        """
        listing = self._last_listing
        if not listing:
            raise ConfigError("nothing to select from: run a list command first")

        target = target.strip()
        if target.isascii() and target.isdigit():
            index = int(target)
            if index < 1 or index > len(listing):
                raise ConfigError(
                    f"index {index} out of range: last listing has {len(listing)} objects"
                )
            obj = listing[index - 1]
        else:
            namespace, _, name = target.rpartition("/")
            matches = [
                candidate
                for candidate in listing
                if candidate.name == name and (not namespace or candidate.namespace == namespace)
            ]
            if not matches:
                raise ConfigError(f"no object named '{target}' in the last listing")
            obj = matches[0]

        self.select_single(obj)
        return obj

    def apply_to_selection(
        self,
        operation: Operation,
        range_spec: str | None = None,
        *,
        abort: Callable[[], bool] | None = None,
    ) -> ApplyOutcome:
        """Run ``operation`` on the selected objects, one at a time, in order.

        A single selection ignores ``range_spec``. For a many selection the
        spec picks members by 1-based index; without one every member is
        used. A failing member does not stop the others. ``abort`` (and
        Ctrl-C) are honoured between members only.

        Raises:
            ConfigError: If nothing is selected or ``range_spec`` is malformed;
                raised before ``operation`` runs at all.
            OperationError: If the single selected object failed.
            MultiOperationError: If any member of a many selection failed.
        """
        targets = self._targets(range_spec)
        applied: list[KObj] = []
        failures: list[OperationError] = []
        skipped: tuple[KObj, ...] = ()

        for position, obj in enumerate(targets):
            if position and abort is not None and abort():
                skipped = targets[position:]
                break
            try:
                operation(obj)
            except OperationError as e:
                failure = e
            except KubernetesError as e:
                failure = OperationError(obj, str(e), cause=e)
            except KeyboardInterrupt:
                failure = OperationError(obj, "interrupted")
                skipped = targets[position + 1 :]
            else:
                applied.append(obj)
                continue

            logger.warning("apply_member_failed", object=obj.describe(), error=failure.message)
            failures.append(failure)
            if skipped:
                break

        if skipped:
            logger.info("apply_aborted", skipped=len(skipped))

        if failures:
            if isinstance(self._selection, SingleSelection):
                raise failures[0]
            raise MultiOperationError(failures, attempted=len(targets) - len(skipped))
        return ApplyOutcome(tuple(applied), skipped)

    def _targets(self, range_spec: str | None) -> tuple[KObj, ...]:
        selection = self._selection
        if isinstance(selection, SingleSelection):
            return (selection.obj,)
        if isinstance(selection, ManySelection):
            if not range_spec:
                return selection.objs
            indices = parse_range_spec(
                range_spec, len(selection.objs), self.config.range_separator
            )
            return tuple(selection.objs[index] for index in indices)
        raise ConfigError("no objects selected: list or enter something first")

    def snapshot(self) -> EnvironmentSnapshot:
        return EnvironmentSnapshot(
            context=self._context,
            namespace=self._namespace,
            selection=self._selection,
            contexts=self._contexts,
            last_listing=self._last_listing,
        )
