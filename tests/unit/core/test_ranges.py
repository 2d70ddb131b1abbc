"""Unit tests for range spec parsing."""

from __future__ import annotations

import pytest

from cluster_shell.core.errors import ConfigError
from cluster_shell.core.ranges import parse_range_spec


@pytest.mark.unit
class TestParseRangeSpec:
    """Tests for parse_range_spec."""

    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            ("1", [0]),
            ("2-3", [1, 2]),
            ("2-4,7", [1, 2, 3, 6]),
            ("3,1", [2, 0]),
            ("2,2", [1, 1]),
            (" 1 - 2 , 5 ", [0, 1, 4]),
            ("4-4", [3]),
        ],
    )
    def test_valid_specs(self, spec: str, expected: list[int]) -> None:
        assert parse_range_spec(spec, 7) == expected

    def test_custom_separator(self) -> None:
        assert parse_range_spec("1;3-4", 5, separator=";") == [0, 2, 3]

    @pytest.mark.parametrize("spec", ["0", "8", "6-8", "0-2"])
    def test_out_of_bounds(self, spec: str) -> None:
        with pytest.raises(ConfigError, match="out of range"):
            parse_range_spec(spec, 7)

    @pytest.mark.parametrize("spec", ["a", "1-b", "1-2-3", "-1", "2-", "1.5", "²", "1-²"])
    def test_non_numeric(self, spec: str) -> None:
        with pytest.raises(ConfigError, match="invalid range"):
            parse_range_spec(spec, 7)

    @pytest.mark.parametrize("spec", ["", "1,,2", "1,"])
    def test_empty_token(self, spec: str) -> None:
        with pytest.raises(ConfigError, match="empty range"):
            parse_range_spec(spec, 7)

    def test_reversed_range(self) -> None:
        with pytest.raises(ConfigError, match="ends before it starts"):
            parse_range_spec("4-2", 7)

    def test_empty_selection_rejects_everything(self) -> None:
        with pytest.raises(ConfigError):
            parse_range_spec("1", 0)
