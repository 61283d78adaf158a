"""Derived line data and coverage summaries.

``add_derived_info`` adds the ``l`` (line hits) map reporters expect.
Summaries follow Istanbul's totals convention: an item carrying ``skip``
counts as covered, and is also counted in ``skipped`` when it was never hit.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from covremap.coverage.models import (
    CoverageData,
    CoverageSummary,
    CoverageTotals,
    FileCoverageData,
)


def percent(covered: int, total: int) -> float:
    """Percentage rounded down to two decimals after adding half a hundredth."""
    if total <= 0:
        return 100.0
    return math.floor((1000 * 100 * covered / total + 5) / 10) / 100


def add_derived_info(file_coverage: FileCoverageData) -> None:
    """Add the ``l`` line map in place. No-op when already present."""
    if "l" in file_coverage:
        return

    statement_map = file_coverage.get("statementMap", {})
    line_map: dict[str, int] = {}
    for stmt_id, count in file_coverage.get("s", {}).items():
        statement = statement_map.get(stmt_id, {})
        line = (statement.get("start") or {}).get("line")
        if count == 0 and statement.get("skip"):
            count = 1
        key = "null" if line is None else str(line)
        if key not in line_map or line_map[key] < count:
            line_map[key] = count
    file_coverage["l"] = line_map


def _simple_totals(
    counters: Mapping[str, int],
    item_map: Mapping[str, Any] | None = None,
) -> CoverageTotals:
    total = covered = skipped = 0
    for item_id, count in counters.items():
        hit = bool(count)
        skip = bool(item_map and item_map.get(item_id, {}).get("skip"))
        total += 1
        if hit or skip:
            covered += 1
        if not hit and skip:
            skipped += 1
    return CoverageTotals(total, covered, skipped, percent(covered, total))


def _branch_totals(file_coverage: FileCoverageData) -> CoverageTotals:
    branch_map = file_coverage.get("branchMap", {})
    total = covered = skipped = 0
    for branch_id, counts in file_coverage.get("b", {}).items():
        locations = branch_map.get(branch_id, {}).get("locations") or []
        for idx, count in enumerate(counts):
            hit = count > 0
            skip = idx < len(locations) and bool(locations[idx].get("skip"))
            if hit or skip:
                covered += 1
            if not hit and skip:
                skipped += 1
        total += len(counts)
    return CoverageTotals(total, covered, skipped, percent(covered, total))


def summarize_file_coverage(file_coverage: FileCoverageData) -> CoverageSummary:
    """Compute line/statement/function/branch totals for one file.

    Adds derived line data to ``file_coverage`` when missing.
    """
    add_derived_info(file_coverage)
    return CoverageSummary(
        lines=_simple_totals(file_coverage["l"]),
        statements=_simple_totals(file_coverage.get("s", {}), file_coverage.get("statementMap")),
        functions=_simple_totals(file_coverage.get("f", {}), file_coverage.get("fnMap")),
        branches=_branch_totals(file_coverage),
    )


def _merge_totals(totals: Iterable[CoverageTotals]) -> CoverageTotals:
    total = covered = skipped = 0
    for t in totals:
        total += t.total
        covered += t.covered
        skipped += t.skipped
    return CoverageTotals(total, covered, skipped, percent(covered, total))


def merge_summaries(summaries: Iterable[CoverageSummary]) -> CoverageSummary:
    """Add up per-file summaries."""
    summaries = list(summaries)
    return CoverageSummary(
        lines=_merge_totals(s.lines for s in summaries),
        statements=_merge_totals(s.statements for s in summaries),
        functions=_merge_totals(s.functions for s in summaries),
        branches=_merge_totals(s.branches for s in summaries),
    )


def summarize_coverage(coverage: CoverageData) -> CoverageSummary:
    """Summary across every file of a coverage object."""
    return merge_summaries(summarize_file_coverage(fc) for fc in coverage.values())
