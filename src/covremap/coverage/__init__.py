"""Istanbul coverage records: model, merging, summaries and I/O.

Usage:
    from covremap.coverage import load_coverage, merge_coverage, summarize_coverage

    merged = merge_coverage(load_coverage(a), load_coverage(b))
    print(summarize_coverage(merged).lines.pct)
"""

from covremap.coverage.io import dump_coverage, load_coverage, validate_file_coverage
from covremap.coverage.merge import MergeFunction, merge_coverage, merge_file_coverage
from covremap.coverage.models import (
    CoverageData,
    CoverageSummary,
    CoverageTotals,
    FileCoverageData,
    LineField,
    LocationDescriptor,
    LocationsField,
    PointField,
    Position,
    Span,
    SpanField,
)
from covremap.coverage.summary import (
    add_derived_info,
    merge_summaries,
    percent,
    summarize_coverage,
    summarize_file_coverage,
)

__all__ = [
    # Models
    "CoverageData",
    "CoverageSummary",
    "CoverageTotals",
    "FileCoverageData",
    "LineField",
    "LocationDescriptor",
    "LocationsField",
    "PointField",
    "Position",
    "Span",
    "SpanField",
    # Merge
    "MergeFunction",
    "merge_coverage",
    "merge_file_coverage",
    # Summary
    "add_derived_info",
    "merge_summaries",
    "percent",
    "summarize_coverage",
    "summarize_file_coverage",
    # I/O
    "dump_coverage",
    "load_coverage",
    "validate_file_coverage",
]
