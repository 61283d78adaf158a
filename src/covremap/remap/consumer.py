"""Bias-aware lookups over a decoded source map.

Mapping segments are decoded by the ``sourcemap`` library. This module only
answers "which original position does this generated position come from",
restricted to the generated line being queried:

- ``Bias.GREATEST_LOWER_BOUND``: the segment with the greatest column at or
  before the queried column. A segment starting exactly at the column is
  returned for itself, so this is the default lookup. When several segments
  share that column, the one with the lowest original position wins.
- ``Bias.LEAST_UPPER_BOUND``: the segment with the smallest column at or
  after the queried column.

Lines are 1-based and columns 0-based on both sides, as in Istanbul data.
"""

from __future__ import annotations

import bisect
import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import sourcemap

from covremap.core.errors import CoverageError
from covremap.coverage.models import Position


class Bias(Enum):
    GREATEST_LOWER_BOUND = "glb"
    LEAST_UPPER_BOUND = "lub"


@dataclass(frozen=True, slots=True)
class OriginalPosition:
    """Result of a lookup. All fields are None when nothing maps."""

    source: str | None = None
    line: int | None = None
    column: int | None = None
    name: str | None = None

    @property
    def resolved(self) -> bool:
        return self.line is not None

    def to_position(self) -> Position:
        return Position(line=self.line, column=self.column)


UNRESOLVED = OriginalPosition()


def _token_order(token: Any) -> tuple[Any, ...]:
    # Segments without a source sort after those with one on the same column
    return (
        token.dst_col,
        token.src is None,
        token.src or "",
        token.src_line or 0,
        token.src_col or 0,
    )


class SourceMapConsumer:
    """Query interface over one decoded source map."""

    def __init__(self, index: Any) -> None:
        # generated line (0-based) -> (sorted columns, tokens in the same order)
        self._lines: dict[int, tuple[list[int], list[Any]]] = {}
        by_line: dict[int, list[Any]] = {}
        for token in index:
            by_line.setdefault(token.dst_line, []).append(token)
        for dst_line, tokens in by_line.items():
            tokens.sort(key=_token_order)
            self._lines[dst_line] = ([t.dst_col for t in tokens], tokens)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], *, path: str = "<source map>") -> SourceMapConsumer:
        """Decode a Source Map v3 document.

        Raises:
            CoverageError: If the document cannot be decoded.
        """
        try:
            index = sourcemap.loads(json.dumps(dict(raw)))
        except (sourcemap.SourceMapDecodeError, LookupError, TypeError, ValueError) as e:
            raise CoverageError.invalid_source_map(path, str(e)) from e
        return cls(index)

    def original_position_for(
        self,
        line: int | None,
        column: int | None,
        bias: Bias = Bias.GREATEST_LOWER_BOUND,
    ) -> OriginalPosition:
        if not isinstance(line, int) or not isinstance(column, int) or line < 1:
            return UNRESOLVED

        entry = self._lines.get(line - 1)
        if entry is None:
            return UNRESOLVED
        columns, tokens = entry

        if bias is Bias.LEAST_UPPER_BOUND:
            idx = bisect.bisect_left(columns, column)
            if idx == len(tokens):
                return UNRESOLVED
        else:
            idx = bisect.bisect_right(columns, column) - 1
            if idx < 0:
                return UNRESOLVED
            # first of the segments sharing this column
            idx = bisect.bisect_left(columns, columns[idx])

        token = tokens[idx]
        if token.src is None:
            return UNRESOLVED
        return OriginalPosition(
            source=token.src,
            line=token.src_line + 1,
            column=token.src_col,
            name=token.name,
        )

    def resolve(self, position: Position, bias: Bias = Bias.GREATEST_LOWER_BOUND) -> Position:
        """Translate a generated position into its original position."""
        return self.original_position_for(position.line, position.column, bias).to_position()
