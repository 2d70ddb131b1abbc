"""Table class used for every listing the shell prints.

Wraps Rich's Table with the compact look of a terminal listing: no outer
border, a rule under the header, and columns that fold long text instead
of truncating it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from rich import box
from rich.table import Table as RichTable

if TYPE_CHECKING:
    from rich.console import ConsoleRenderable, RichCast

OverflowMethod = Literal["fold", "crop", "ellipsis", "ignore"]


class Table(RichTable):
    """Rich Table with the shell's listing defaults.

    Usage:
        from cluster_shell.cli.output import Table

        table = Table()
        table.add_column("Name")  # Will wrap long text by default
        table.add_column("#", no_wrap=True)
        table.add_row("web-0", "1")
    """

    def __init__(self, *headers: Any, **kwargs: Any) -> None:
        kwargs.setdefault("box", box.SIMPLE_HEAD)
        kwargs.setdefault("show_edge", False)
        kwargs.setdefault("pad_edge", False)
        kwargs.setdefault("header_style", "bold")
        super().__init__(*headers, **kwargs)

    def add_column(
        self,
        header: ConsoleRenderable | RichCast | str = "",
        footer: ConsoleRenderable | RichCast | str = "",
        *,
        overflow: OverflowMethod = "fold",
        **kwargs: Any,
    ) -> None:
        """Add a column with overflow="fold" by default."""
        super().add_column(header, footer, overflow=overflow, **kwargs)
