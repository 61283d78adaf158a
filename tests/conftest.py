"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides builders for source maps and Istanbul coverage records.
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covremap modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covremap"):
        del sys.modules[module_name]

_B64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# One generated line: list of segments. A segment is (generated_column,) or
# (generated_column, source_index, original_line, original_column), all 0-based.
Segment = tuple[int, ...]


def _vlq(value: int) -> str:
    v = ((-value) << 1) | 1 if value < 0 else value << 1
    out = ""
    while True:
        digit = v & 31
        v >>= 5
        if v:
            digit |= 32
        out += _B64[digit]
        if not v:
            return out


def encode_mappings(lines: Sequence[Sequence[Segment]]) -> str:
    src_idx = src_line = src_col = 0
    encoded_lines = []
    for segments in lines:
        gen_col = 0
        encoded = []
        for seg in segments:
            parts = [_vlq(seg[0] - gen_col)]
            gen_col = seg[0]
            if len(seg) == 4:
                parts.append(_vlq(seg[1] - src_idx))
                parts.append(_vlq(seg[2] - src_line))
                parts.append(_vlq(seg[3] - src_col))
                src_idx, src_line, src_col = seg[1], seg[2], seg[3]
            encoded.append("".join(parts))
        encoded_lines.append(",".join(encoded))
    return ";".join(encoded_lines)


def build_source_map(
    lines: Sequence[Sequence[Segment]],
    sources: Sequence[str] = ("original.js",),
) -> dict[str, Any]:
    return {
        "version": 3,
        "file": "compiled.js",
        "sources": list(sources),
        "names": [],
        "mappings": encode_mappings(lines),
    }


@pytest.fixture
def source_map_factory() -> Callable[..., dict[str, Any]]:
    """Build a Source Map v3 document from per-line segments."""
    return build_source_map


def build_file_coverage(
    path: str,
    *,
    statements: int = 2,
    hits: Sequence[int] | None = None,
    functions: int = 1,
    branches: int = 1,
) -> dict[str, Any]:
    """Istanbul record with one statement per line starting at line 1."""
    hits = list(hits) if hits is not None else [1] * statements
    return {
        "path": path,
        "statementMap": {
            str(i): {
                "start": {"line": i + 1, "column": 0},
                "end": {"line": i + 1, "column": 10},
            }
            for i in range(statements)
        },
        "s": {str(i): hits[i] for i in range(statements)},
        "fnMap": {
            str(i): {
                "name": f"fn{i}",
                "line": i + 1,
                "loc": {"start": {"line": i + 1, "column": 0}, "end": {"line": i + 1, "column": 10}},
            }
            for i in range(functions)
        },
        "f": {str(i): 1 for i in range(functions)},
        "branchMap": {
            str(i): {
                "line": i + 1,
                "type": "if",
                "locations": [
                    {"start": {"line": i + 1, "column": 0}, "end": {"line": i + 1, "column": 5}},
                    {"start": {"line": i + 1, "column": 6}, "end": {"line": i + 1, "column": 10}},
                ],
            }
            for i in range(branches)
        },
        "b": {str(i): [1, 0] for i in range(branches)},
    }


@pytest.fixture
def coverage_factory() -> Callable[..., dict[str, Any]]:
    """Build an Istanbul file coverage record."""
    return build_file_coverage
