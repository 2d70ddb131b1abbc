"""Centralized shell output.

Commands never write to the terminal directly; they hand rows of cells and
lines of text to a :class:`ConsoleRenderer`.

Usage:
    from cluster_shell.cli.output import ConsoleRenderer

    renderer = ConsoleRenderer()
    renderer.emit_table(["Name", "Status"], [[Cell.plain("web-0"), status_cell]])
"""

from cluster_shell.cli.output.renderer import SEMANTIC_STYLES, ConsoleRenderer
from cluster_shell.cli.output.table import Table

__all__ = ["SEMANTIC_STYLES", "ConsoleRenderer", "Table"]
