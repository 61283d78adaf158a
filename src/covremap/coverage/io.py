"""Reading, writing and validating coverage documents."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from covremap.core.errors import CoverageError
from covremap.coverage.models import STRUCTURE_KEYS, CoverageData


def validate_file_coverage(key: str, file_coverage: Any) -> None:
    """Check the minimal shape the collector relies on.

    Raises:
        CoverageError: If the record is not a mapping, has no ``path`` or a
            structural map is not a mapping.
    """
    if not isinstance(file_coverage, Mapping):
        raise CoverageError.invalid_record(key, "record is not an object")
    if not file_coverage.get("path"):
        raise CoverageError.invalid_record(key, "missing 'path'")
    for name in STRUCTURE_KEYS:
        if not isinstance(file_coverage.get(name, {}), Mapping):
            raise CoverageError.invalid_record(key, f"'{name}' is not an object")


def load_coverage(path: Path) -> CoverageData:
    """Load a ``coverage-final.json`` style document."""
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CoverageError.invalid_document(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise CoverageError.invalid_document(str(path), "top-level value must be an object")
    for key, file_coverage in data.items():
        validate_file_coverage(key, file_coverage)
    return data


def dump_coverage(coverage: CoverageData, path: Path | None = None) -> str:
    """Serialize coverage to JSON, writing it to ``path`` when given."""
    text = json.dumps(coverage, indent=2, sort_keys=False)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
    return text
