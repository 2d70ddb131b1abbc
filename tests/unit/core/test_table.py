"""Unit tests for the cell and column model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cluster_shell.core.table import Cell, Column, SemanticColor, columns


@pytest.mark.unit
class TestCell:
    """Tests for Cell construction."""

    def test_plain_has_no_styling(self) -> None:
        cell = Cell.plain("2/3")

        assert cell.value == "2/3"
        assert cell.foreground is None
        assert cell.background is None

    def test_plain_converts_to_text(self) -> None:
        assert Cell.plain(5).value == "5"

    def test_styled_keeps_semantics(self) -> None:
        cell = Cell.styled("Running", SemanticColor.SUCCESS, SemanticColor.DEFAULT)

        assert cell.value == "Running"
        assert cell.foreground is SemanticColor.SUCCESS
        assert cell.background is SemanticColor.DEFAULT

    def test_placeholder_is_empty(self) -> None:
        assert Cell.placeholder() == Cell(value="")

    def test_str_is_value(self) -> None:
        assert str(Cell.styled("Failed", SemanticColor.DANGER)) == "Failed"

    def test_cells_are_immutable(self) -> None:
        cell = Cell.plain("a")
        with pytest.raises(ValidationError):
            cell.value = "b"  # type: ignore[misc]


@pytest.mark.unit
class TestColumns:
    """Tests for column descriptors."""

    def test_columns_keeps_order(self) -> None:
        result = columns(("name", "Name"), ("age", "Age"))

        assert result == (Column("name", "Name"), Column("age", "Age"))
        assert result[1].display_name == "Age"
        assert result[0].flag == "name"
