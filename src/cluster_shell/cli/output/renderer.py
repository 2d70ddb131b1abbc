"""Renderer sink: turns semantic cells into terminal output."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console, RenderableType
from rich.style import Style
from rich.text import Text

from cluster_shell.cli.output.table import Table
from cluster_shell.core.table import Cell, SemanticColor

SEMANTIC_STYLES: dict[SemanticColor, str | None] = {
    SemanticColor.SUCCESS: "green",
    SemanticColor.WARN: "yellow",
    SemanticColor.DANGER: "red",
    SemanticColor.INFO: "cyan",
    SemanticColor.DEFAULT: None,
}


def cell_style(cell: Cell) -> Style:
    return Style(
        color=SEMANTIC_STYLES.get(cell.foreground) if cell.foreground else None,
        bgcolor=SEMANTIC_STYLES.get(cell.background) if cell.background else None,
    )


class ConsoleRenderer:
    """Prints tables of cells and lines of text to a rich console."""

    def __init__(self, console: Console | None = None, *, show_index: bool = True) -> None:
        self.console = console or Console(highlight=False)
        self.show_index = show_index

    def emit_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Cell]],
        *,
        title: str | None = None,
        numbered: bool | None = None,
    ) -> None:
        """Print ``rows`` under ``headers``, numbered from 1 for range specs.

        ``numbered`` overrides the renderer's ``show_index`` for one table.
        """
        numbered = self.show_index if numbered is None else numbered
        table = Table(title=title)
        if numbered:
            table.add_column("#", justify="right", no_wrap=True, style="dim")
        for header in headers:
            table.add_column(header)
        for number, row in enumerate(rows, start=1):
            cells = [Text(cell.value, style=cell_style(cell)) for cell in row]
            if numbered:
                cells.insert(0, Text(str(number)))
            table.add_row(*cells)
        self.console.print(table)

    def emit_text(self, line: str = "", style: str | None = None) -> None:
        """Print one line verbatim (no markup interpretation)."""
        self.console.print(Text(line, style=style or ""))

    def emit_markup(self, markup: str) -> None:
        """Print one line of rich markup."""
        self.console.print(markup)

    def emit_error(self, message: str, hint: str | None = None) -> None:
        self.console.print(Text.assemble(("Error: ", "bold red"), message))
        if hint:
            self.console.print(Text(hint, style="dim"))

    def emit(self, renderable: RenderableType) -> None:
        """Print any rich renderable, e.g. pre-styled :class:`Text`."""
        self.console.print(renderable)
