"""Merging of same-file coverage records.

Execution counters are additive across runs:

- s[id] = new.s[id] + existing.s[id]
- f[id] = new.f[id] + existing.f[id]
- b[id][i] = new.b[id][i] + existing.b[id][i]

Structural maps are taken from the new record, which is still in the
coordinate space it was instrumented in. The collector translates the merged
result afterwards, so translated maps of the existing record are never
translated twice.
"""

import copy
from collections.abc import Callable

from covremap.core.errors import CoverageError
from covremap.coverage.models import FileCoverageData

MergeFunction = Callable[[FileCoverageData, FileCoverageData], FileCoverageData]


def merge_file_coverage(new: FileCoverageData, existing: FileCoverageData) -> FileCoverageData:
    """Merge two FileCoverage records for the same file.

    Args:
        new: Record just added (its structural maps are kept).
        existing: Record already accumulated.

    Returns:
        A new record with summed counters. Derived line data (``l``) is dropped.

    Raises:
        CoverageError: If the records describe different files or their
            counters are not congruent.
    """
    path = new.get("path")
    if path != existing.get("path"):
        raise CoverageError.merge_incompatible(
            str(path), f"path mismatch with {existing.get('path')!r}"
        )

    result = copy.deepcopy(new)
    result.pop("l", None)

    for key in ("s", "f"):
        counters = result.setdefault(key, {})
        for item_id, hits in existing.get(key, {}).items():
            if item_id not in counters:
                raise CoverageError.merge_incompatible(
                    str(path), f"{key}[{item_id}] missing from new record"
                )
            counters[item_id] += hits

    branches = result.setdefault("b", {})
    for branch_id, hits in existing.get("b", {}).items():
        merged = branches.get(branch_id)
        if merged is None:
            raise CoverageError.merge_incompatible(
                str(path), f"b[{branch_id}] missing from new record"
            )
        if len(merged) != len(hits):
            raise CoverageError.merge_incompatible(
                str(path),
                f"b[{branch_id}] has {len(merged)} locations, existing has {len(hits)}",
            )
        branches[branch_id] = [a + b for a, b in zip(merged, hits, strict=True)]

    return result


def merge_coverage(*coverages: dict[str, FileCoverageData]) -> dict[str, FileCoverageData]:
    """Merge whole coverage objects without source map translation.

    Files present in one object only are copied as-is.
    """
    merged: dict[str, FileCoverageData] = {}
    for coverage in coverages:
        for path, file_coverage in coverage.items():
            if path in merged:
                merged[path] = merge_file_coverage(file_coverage, merged[path])
            else:
                merged[path] = copy.deepcopy(file_coverage)
    return merged
