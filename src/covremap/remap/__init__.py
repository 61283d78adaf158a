"""Source-map lookups and coverage coordinate translation."""

from covremap.remap.consumer import UNRESOLVED, Bias, OriginalPosition, SourceMapConsumer
from covremap.remap.translate import (
    count_skipped,
    translate_descriptor,
    translate_descriptor_map,
    translate_file_coverage,
)

__all__ = [
    "Bias",
    "OriginalPosition",
    "SourceMapConsumer",
    "UNRESOLVED",
    "count_skipped",
    "translate_descriptor",
    "translate_descriptor_map",
    "translate_file_coverage",
]
