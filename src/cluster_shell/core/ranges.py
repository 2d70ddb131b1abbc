"""Parsing of range specs such as ``2-4,7`` against a selection."""

from __future__ import annotations

from cluster_shell.core.errors import ConfigError

DEFAULT_SEPARATOR = ","


def parse_range_spec(spec: str, size: int, separator: str = DEFAULT_SEPARATOR) -> list[int]:
    """Turn a 1-based inclusive range spec into zero-based indices.

    Tokens are split on ``separator``; each is ``N`` or ``A-B`` with
    ``A <= B``. Indices come back in the order written, duplicates kept.

    Raises:
        ConfigError: On an empty or non-numeric token, a reversed range, or
            an index outside ``1..size``.
    """
    indices: list[int] = []
    for raw in spec.split(separator):
        token = raw.strip()
        if not token:
            raise ConfigError(f"empty range in '{spec}'")
        start_text, sep, end_text = token.partition("-")
        start = _parse_index(start_text, token)
        end = _parse_index(end_text, token) if sep else start
        if end < start:
            raise ConfigError(f"range '{token}' ends before it starts")
        for index in (start, end):
            if index < 1 or index > size:
                raise ConfigError(
                    f"index {index} out of range: selection has {size} "
                    f"object{'s' if size != 1 else ''}"
                )
        indices.extend(range(start - 1, end))
    return indices


def _parse_index(text: str, token: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise ConfigError(f"invalid range '{token}': expected N or A-B")
    return int(text)
