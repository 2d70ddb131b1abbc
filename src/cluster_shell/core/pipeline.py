"""The generic list pipeline.

Every listing command goes through here with its own resource definition:

1. validate the request (show/sort/filter) into a :class:`ListPlan`
   before anything is fetched,
2. fetch the raw records,
3. project each record to a :class:`KObj` and a row of cells,
4. filter rows by name, sort, reverse,
5. hand back the ordered rows for the environment and the renderer.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from cluster_shell.core.errors import ConfigError
from cluster_shell.core.extractors import ExtractorRegistry
from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.core.metadata import creation_time, format_age, labels_text
from cluster_shell.core.sorting import PreSort, SortFunc, SortKey, resolve, unknown_column
from cluster_shell.core.table import Cell, Column

logger = structlog.get_logger()

# Columns every kind can render straight from object metadata
METADATA_COLUMNS = frozenset({"Name", "Namespace", "Age", "Labels"})

SHOW_ALL = "all"


class ListSpec(Protocol):
    """What the pipeline needs to know about one resource kind."""

    @property
    def kind(self) -> ObjType: ...

    @property
    def columns(self) -> Sequence[Column]: ...

    @property
    def extra_columns(self) -> Sequence[Column]: ...

    @property
    def pre_sorts(self) -> Mapping[str, SortKey]: ...

    def to_kobj(self, record: Any) -> KObj: ...


class ListOptions(BaseModel):
    """Pre-parsed list flags."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sort: str | None = None
    regex: str | None = None
    reverse: bool = False
    show: tuple[str, ...] = ()

    @field_validator("show", mode="before")
    @classmethod
    def split_show(cls, v: Iterable[str] | str | None) -> tuple[str, ...]:
        """Accept repeated and comma separated values alike."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        flags: list[str] = []
        for value in v:
            flags.extend(part.strip().lower() for part in value.split(",") if part.strip())
        return tuple(flags)


@dataclass(frozen=True)
class ListRow:
    obj: KObj
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class ListResult:
    """Ordered output of one list command."""

    headers: tuple[str, ...]
    rows: tuple[ListRow, ...]

    @property
    def objects(self) -> list[KObj]:
        return [row.obj for row in self.rows]

    def column_values(self, header: str) -> list[str]:
        index = self.headers.index(header)
        return [row.cells[index].value for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ListPlan:
    """A validated list request, ready to run against fetched records."""

    spec: ListSpec
    registry: ExtractorRegistry
    columns: tuple[Column, ...]
    sort: SortFunc | None
    pattern: re.Pattern[str] | None
    reverse: bool

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(column.display_name for column in self.columns)

    def execute(self, records: Iterable[Any], now: datetime | None = None) -> ListResult:
        """Project, filter, sort and reverse ``records``."""
        now = now or datetime.now(UTC)
        projected: list[tuple[Any, ListRow]] = []
        for record in records:
            obj = self.spec.to_kobj(record)
            projected.append((record, ListRow(obj, self._project(record, obj, now))))

        if self.pattern is not None:
            projected = [item for item in projected if self.pattern.search(item[1].obj.name)]

        if isinstance(self.sort, PreSort):
            key = self.sort.key
            projected.sort(key=lambda item: key(item[0]))
        elif self.sort is not None:
            index = self.columns.index(self.sort.column)
            projected.sort(key=lambda item: item[1].cells[index].value)

        rows = [row for _, row in projected]
        if self.reverse:
            rows.reverse()
        return ListResult(self.headers, tuple(rows))

    def _project(self, record: Any, obj: KObj, now: datetime) -> tuple[Cell, ...]:
        return tuple(self._cell(column, record, obj, now) for column in self.columns)

    def _cell(self, column: Column, record: Any, obj: KObj, now: datetime) -> Cell:
        name = column.display_name
        extractor = self.registry.lookup(self.spec.kind, name)
        if extractor is not None:
            cell = extractor(record)
        elif name == "Name":
            cell = Cell.plain(obj.name)
        elif name == "Namespace":
            cell = Cell.plain(obj.namespace) if obj.namespace else None
        elif name == "Age":
            created = creation_time(record)
            cell = Cell.plain(format_age(created, now)) if created else None
        elif name == "Labels":
            text = labels_text(record)
            cell = Cell.plain(text) if text else None
        else:
            cell = None
        return cell if cell is not None else Cell.placeholder()


def _renderable(spec: ListSpec, registry: ExtractorRegistry, column: Column) -> bool:
    return (
        column.display_name in METADATA_COLUMNS
        or registry.lookup(spec.kind, column.display_name) is not None
    )


def plan_list(spec: ListSpec, options: ListOptions, registry: ExtractorRegistry) -> ListPlan:
    """Validate ``options`` against ``spec`` and work out the columns to show.

    Raises:
        ConfigError: For an unknown show/sort column, a column with no way to
            render it, or an invalid filter pattern.
    """
    extra_by_flag = {column.flag: column for column in spec.extra_columns}

    requested: set[str] = set()
    for flag in options.show:
        if flag == SHOW_ALL:
            requested.update(extra_by_flag)
            continue
        column = extra_by_flag.get(flag)
        if column is None or not _renderable(spec, registry, column):
            raise unknown_column(flag, spec.kind)
        requested.add(flag)

    sort: SortFunc | None = None
    if options.sort:
        sort = resolve(
            options.sort,
            spec.columns,
            spec.extra_columns,
            kind=spec.kind,
            pre_sorts=spec.pre_sorts,
        )
        if not isinstance(sort, PreSort) and not _renderable(spec, registry, sort.column):
            raise unknown_column(options.sort, spec.kind)
        if sort.column.flag in extra_by_flag:
            requested.add(sort.column.flag)

    pattern = None
    if options.regex:
        try:
            pattern = re.compile(options.regex)
        except re.error as e:
            raise ConfigError(f"invalid filter pattern '{options.regex}': {e}") from e

    effective = (
        *spec.columns,
        *(column for column in spec.extra_columns if column.flag in requested),
    )
    return ListPlan(
        spec=spec,
        registry=registry,
        columns=effective,
        sort=sort,
        pattern=pattern,
        reverse=options.reverse,
    )


def run_list(
    spec: ListSpec,
    options: ListOptions,
    registry: ExtractorRegistry,
    fetch: Callable[[], Iterable[Any]],
    now: datetime | None = None,
) -> ListResult:
    """Validate, fetch and build the table for one list command.

    Validation happens before ``fetch`` is called. Errors raised by ``fetch``
    propagate unchanged and no partial result is produced.
    """
    plan = plan_list(spec, options, registry)
    records = list(fetch())
    result = plan.execute(records, now=now)
    logger.debug(
        "listed_resources",
        kind=str(spec.kind),
        fetched=len(records),
        rows=len(result),
        sort=options.sort,
        reverse=options.reverse,
    )
    return result
