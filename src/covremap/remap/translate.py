"""Translation of coverage coordinates from compiled code to original source.

Every descriptor of ``fnMap``, ``branchMap`` and ``statementMap`` is rewritten:

- ``start``/``end`` and the ends of ``loc``/``decl`` use the default lookup.
- ``line`` (when > 0) is looked up at column 0 with the least-upper-bound
  bias and only the resulting line is kept.
- each span of ``locations`` uses the default lookup; when its start does not
  resolve, start and end are retried once one column earlier with the
  least-upper-bound bias. Compiled branch boundaries are sometimes emitted one
  column past their mapping segment.

Descriptors whose line, start, loc start or any branch start cannot be
resolved are marked ``skip`` so reporters can leave them out. Compilers emit
helper statements that have no mapping segment, so this is expected, not an
error.

All functions return new objects; input records are never mutated.
"""

from collections.abc import Mapping
from typing import Any

from covremap.coverage.models import (
    STRUCTURE_KEYS,
    DescriptorField,
    FileCoverageData,
    LineField,
    LocationDescriptor,
    LocationsField,
    PointField,
    Position,
    Span,
    SpanField,
    dump_descriptor_map,
    parse_descriptor_map,
)
from covremap.remap.consumer import Bias, SourceMapConsumer


def _translate_span(span: Span, consumer: SourceMapConsumer) -> Span:
    return Span(
        start=consumer.resolve(span.start),
        end=consumer.resolve(span.end),
        skip=span.skip,
    )


def _translate_branch_span(span: Span, consumer: SourceMapConsumer) -> Span:
    mapped = _translate_span(span, consumer)
    if mapped.start.line is not None:
        return mapped
    return Span(
        start=consumer.resolve(_shift_left(span.start), Bias.LEAST_UPPER_BOUND),
        end=consumer.resolve(_shift_left(span.end), Bias.LEAST_UPPER_BOUND),
        skip=span.skip,
    )


def _shift_left(position: Position) -> Position:
    if not isinstance(position.column, int):
        return position
    return Position(line=position.line, column=max(position.column - 1, 0))


def _translate_line(line: Any, consumer: SourceMapConsumer) -> Any:
    # bool is an int subclass but never a line number
    if not isinstance(line, int) or isinstance(line, bool) or line <= 0:
        return line
    return consumer.original_position_for(line, 0, Bias.LEAST_UPPER_BOUND).line


def _translate_field(part: DescriptorField, consumer: SourceMapConsumer) -> DescriptorField:
    if isinstance(part, PointField):
        return PointField(part.key, consumer.resolve(part.position))
    if isinstance(part, SpanField):
        return SpanField(part.key, _translate_span(part.span, consumer))
    if isinstance(part, LineField):
        return LineField(_translate_line(part.line, consumer))
    return LocationsField(tuple(_translate_branch_span(s, consumer) for s in part.spans))


def translate_descriptor(
    descriptor: LocationDescriptor,
    consumer: SourceMapConsumer,
) -> LocationDescriptor:
    """Translate one descriptor and mark it skipped when it did not resolve."""
    translated = LocationDescriptor(
        fields=tuple(_translate_field(part, consumer) for part in descriptor.fields),
        skip=descriptor.skip,
        extra=descriptor.extra,
    )
    if not translated.skip and translated.is_unresolved:
        translated = LocationDescriptor(
            fields=translated.fields,
            skip=True,
            extra=translated.extra,
        )
    return translated


def translate_descriptor_map(
    descriptors: Mapping[str, LocationDescriptor],
    consumer: SourceMapConsumer,
) -> dict[str, LocationDescriptor]:
    return {key: translate_descriptor(d, consumer) for key, d in descriptors.items()}


def translate_file_coverage(
    file_coverage: FileCoverageData,
    consumer: SourceMapConsumer,
) -> FileCoverageData:
    """Return a copy of ``file_coverage`` with structural maps in original coordinates.

    Counters and other keys are shared with the input, which is not modified.
    Derived line data (``l``) is dropped since it is keyed by generated lines.
    """
    result = dict(file_coverage)
    result.pop("l", None)
    for name in STRUCTURE_KEYS:
        if name not in file_coverage:
            continue
        descriptors = parse_descriptor_map(file_coverage[name])
        result[name] = dump_descriptor_map(translate_descriptor_map(descriptors, consumer))
    return result


def count_skipped(file_coverage: FileCoverageData) -> int:
    """Number of descriptors marked skip across the structural maps."""
    return sum(
        1
        for name in STRUCTURE_KEYS
        for descriptor in file_coverage.get(name, {}).values()
        if descriptor.get("skip")
    )
