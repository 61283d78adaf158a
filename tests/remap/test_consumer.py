"""Tests for bias-aware source map lookups."""

from collections.abc import Callable
from typing import Any

import pytest

from covremap.core.errors import CoverageError, ErrorCode
from covremap.coverage.models import Position
from covremap.remap.consumer import UNRESOLVED, Bias, SourceMapConsumer


@pytest.fixture
def consumer(source_map_factory: Callable[..., dict[str, Any]]) -> SourceMapConsumer:
    # Generated line 1: col 0 -> 1:0, col 4 -> 3:1
    # Generated line 2: no mappings
    # Generated line 3: col 6 -> 6:2
    raw = source_map_factory(
        [
            [(0, 0, 0, 0), (4, 0, 2, 1)],
            [],
            [(6, 0, 5, 2)],
        ]
    )
    return SourceMapConsumer.from_dict(raw)


class TestGreatestLowerBound:
    def test_exact_segment_start_resolves_to_itself(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(1, 4)
        assert (pos.source, pos.line, pos.column) == ("original.js", 3, 1)

    def test_column_inside_segment_resolves_to_segment(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(1, 9)
        assert (pos.line, pos.column) == (3, 1)

    def test_column_between_segments_uses_preceding(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(1, 2)
        assert (pos.line, pos.column) == (1, 0)

    def test_column_before_first_segment_is_unresolved(self, consumer: SourceMapConsumer) -> None:
        assert consumer.original_position_for(3, 2) == UNRESOLVED

    def test_shared_column_resolves_to_lowest_original_position(
        self, source_map_factory: Callable[..., dict[str, Any]]
    ) -> None:
        consumer = SourceMapConsumer.from_dict(source_map_factory([[(0, 0, 5, 0), (0, 0, 0, 0)]]))

        assert consumer.resolve(Position(1, 0)) == Position(1, 0)
        assert consumer.resolve(Position(1, 3)) == Position(1, 0)

    def test_line_without_mappings_is_unresolved(self, consumer: SourceMapConsumer) -> None:
        assert consumer.original_position_for(2, 0) == UNRESOLVED

    def test_line_past_end_is_unresolved(self, consumer: SourceMapConsumer) -> None:
        assert consumer.original_position_for(40, 0) == UNRESOLVED


class TestLeastUpperBound:
    def test_uses_following_segment(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(1, 2, Bias.LEAST_UPPER_BOUND)
        assert (pos.line, pos.column) == (3, 1)

    def test_exact_column_matches(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(3, 6, Bias.LEAST_UPPER_BOUND)
        assert (pos.line, pos.column) == (6, 2)

    def test_column_zero_finds_first_segment_of_line(self, consumer: SourceMapConsumer) -> None:
        pos = consumer.original_position_for(3, 0, Bias.LEAST_UPPER_BOUND)
        assert pos.line == 6

    def test_does_not_cross_generated_lines(self, consumer: SourceMapConsumer) -> None:
        assert consumer.original_position_for(1, 5, Bias.LEAST_UPPER_BOUND) == UNRESOLVED
        assert consumer.original_position_for(2, 0, Bias.LEAST_UPPER_BOUND) == UNRESOLVED


class TestInvalidQueries:
    @pytest.mark.parametrize(
        ("line", "column"),
        [(0, 0), (-3, 0), (None, 0), (1, None)],
    )
    def test_unusable_positions_are_unresolved(
        self, consumer: SourceMapConsumer, line: int | None, column: int | None
    ) -> None:
        result = consumer.original_position_for(line, column)
        assert not result.resolved
        assert result.to_position() == Position(None, None)


class TestResolve:
    def test_resolve_returns_position(self, source_map_factory: Callable[..., Any]) -> None:
        lines: list[list[tuple[int, ...]]] = [[] for _ in range(9)]
        lines.append([(4, 0, 2, 1)])
        consumer = SourceMapConsumer.from_dict(source_map_factory(lines))

        assert consumer.resolve(Position(10, 4)) == Position(3, 1)


class TestFromDict:
    def test_undecodable_map_raises_coverage_error(
        self, source_map_factory: Callable[..., dict[str, Any]]
    ) -> None:
        # Segment points at source index 5 of a one-source map
        raw = source_map_factory([[(0, 5, 0, 0)]], sources=("a.js",))

        with pytest.raises(CoverageError) as exc_info:
            SourceMapConsumer.from_dict(raw, path="/src/a.js")

        assert exc_info.value.code == ErrorCode.COVERAGE_INVALID_SOURCE_MAP
        assert exc_info.value.details["path"] == "/src/a.js"
