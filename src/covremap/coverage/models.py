"""Istanbul coverage data model.

File coverage records stay in the Istanbul ``coverage-final.json`` shape so
they interoperate with external reporters:

{
  "/path/to/file.js": {
    "path": "/path/to/file.js",
    "statementMap": { "0": {"start": {"line": 1, "column": 0}, "end": ...}, ... },
    "s": { "0": 1, ... },
    "branchMap": { "0": {"type": "if", "line": 5, "locations": [...]}, ... },
    "b": { "0": [1, 0], ... },
    "fnMap": { "0": {"name": "foo", "line": 1, "loc": {...}}, ... },
    "f": { "0": 1, ... }
  }
}

Location descriptors are parsed into frozen tagged fields for translation and
written back with ``to_dict``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

FileCoverageData = dict[str, Any]
CoverageData = dict[str, FileCoverageData]

STRUCTURE_KEYS = ("fnMap", "branchMap", "statementMap")
COUNTER_KEYS = ("s", "f", "b")

POINT_KEYS = ("start", "end")
SPAN_KEYS = ("loc", "decl")


@dataclass(frozen=True, slots=True)
class Position:
    """Line/column position. Line is 1-based, column 0-based; None when unresolved."""

    line: int | None
    column: int | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Position:
        return cls(line=data.get("line"), column=data.get("column"))

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True, slots=True)
class Span:
    """A start/end pair, optionally marked as skipped."""

    start: Position
    end: Position
    skip: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Span:
        return cls(
            start=Position.from_dict(data.get("start") or {}),
            end=Position.from_dict(data.get("end") or {}),
            skip=bool(data.get("skip", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"start": self.start.to_dict(), "end": self.end.to_dict()}
        if self.skip:
            result["skip"] = True
        return result


@dataclass(frozen=True, slots=True)
class PointField:
    """``start`` or ``end``: a single position."""

    key: str
    position: Position


@dataclass(frozen=True, slots=True)
class SpanField:
    """``loc`` or ``decl``: a start/end span."""

    key: str
    span: Span


@dataclass(frozen=True, slots=True)
class LineField:
    """Bare ``line`` marker used by function and branch declarations."""

    line: Any


@dataclass(frozen=True, slots=True)
class LocationsField:
    """Branch alternatives, one span per arm."""

    spans: tuple[Span, ...]


DescriptorField = PointField | SpanField | LineField | LocationsField


@dataclass(frozen=True, slots=True)
class LocationDescriptor:
    """Where one function, branch or statement was instrumented.

    ``fields`` holds the positional parts present in the source dict, in
    their original order. ``extra`` keeps every other key (``name``,
    ``type``, ...) untouched.
    """

    fields: tuple[DescriptorField, ...]
    skip: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LocationDescriptor:
        fields: list[DescriptorField] = []
        extra: dict[str, Any] = {}
        for key, value in data.items():
            if key in POINT_KEYS and isinstance(value, Mapping):
                fields.append(PointField(key, Position.from_dict(value)))
            elif key in SPAN_KEYS and isinstance(value, Mapping):
                fields.append(SpanField(key, Span.from_dict(value)))
            elif key == "line":
                fields.append(LineField(value))
            elif key == "locations" and isinstance(value, list):
                fields.append(LocationsField(tuple(Span.from_dict(loc) for loc in value)))
            elif key != "skip":
                extra[key] = value
        return cls(fields=tuple(fields), skip=bool(data.get("skip", False)), extra=extra)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        for part in self.fields:
            if isinstance(part, PointField):
                result[part.key] = part.position.to_dict()
            elif isinstance(part, SpanField):
                result[part.key] = part.span.to_dict()
            elif isinstance(part, LineField):
                result["line"] = part.line
            else:
                result["locations"] = [span.to_dict() for span in part.spans]
        if self.skip:
            result["skip"] = True
        return result

    def get(self, key: str) -> DescriptorField | None:
        """Return the field stored under ``key``, if present."""
        for part in self.fields:
            if _field_key(part) == key:
                return part
        return None

    @property
    def is_unresolved(self) -> bool:
        """True when the line, start, loc.start or a branch start has no original line."""
        line = self.get("line")
        if isinstance(line, LineField) and line.line is None:
            return True
        start = self.get("start")
        if isinstance(start, PointField) and start.position.line is None:
            return True
        loc = self.get("loc")
        if isinstance(loc, SpanField) and loc.span.start.line is None:
            return True
        locations = self.get("locations")
        return isinstance(locations, LocationsField) and any(
            span.start.line is None for span in locations.spans
        )


def _field_key(part: DescriptorField) -> str:
    if isinstance(part, (PointField, SpanField)):
        return part.key
    if isinstance(part, LineField):
        return "line"
    return "locations"


def parse_descriptor_map(data: Mapping[str, Any]) -> dict[str, LocationDescriptor]:
    """Parse a ``fnMap``/``branchMap``/``statementMap`` into descriptors."""
    return {key: LocationDescriptor.from_dict(value) for key, value in data.items()}


def dump_descriptor_map(descriptors: Mapping[str, LocationDescriptor]) -> dict[str, Any]:
    return {key: descriptor.to_dict() for key, descriptor in descriptors.items()}


@dataclass(frozen=True, slots=True)
class CoverageTotals:
    """Totals for one coverage metric."""

    total: int
    covered: int
    skipped: int
    pct: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "covered": self.covered,
            "skipped": self.skipped,
            "pct": self.pct,
        }


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage statistics for a file or a whole coverage object."""

    lines: CoverageTotals
    statements: CoverageTotals
    functions: CoverageTotals
    branches: CoverageTotals

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": self.lines.to_dict(),
            "statements": self.statements.to_dict(),
            "functions": self.functions.to_dict(),
            "branches": self.branches.to_dict(),
        }
