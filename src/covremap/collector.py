"""Accumulation of coverage objects across test runs.

The collector merges overlapping coverage for the same file without
double-counting structure: adding the same coverage object twice yields the
same maps with doubled execution counts. Records for files with a registered
source map are translated into original-source coordinates as they are
merged.

Processing happens in memory by default. Pass a ``TmpStore`` (or any other
``Store``) to keep intermediate records out of memory for large runs.

``get_final_coverage`` is a convenience for data that fits into memory.
Reporters should iterate ``files()`` and call ``file_coverage_for`` instead.

Usage::

    with Collector() as collector:
        for path in coverage_files:
            # each object may overlap with the others
            collector.add(load_coverage(path))

        for file in collector.files():
            file_coverage = collector.file_coverage_for(file)
"""

from __future__ import annotations

from types import TracebackType

import structlog

from covremap.compiler.registry import SourceMapRegistry
from covremap.core.errors import UnknownFileError
from covremap.coverage.io import validate_file_coverage
from covremap.coverage.merge import MergeFunction, merge_file_coverage
from covremap.coverage.models import CoverageData, FileCoverageData
from covremap.coverage.summary import add_derived_info
from covremap.remap.translate import count_skipped, translate_file_coverage
from covremap.store.base import Store
from covremap.store.memory import MemoryStore

log = structlog.get_logger(__name__)


class Collector:
    """Merges coverage objects into one record per file."""

    def __init__(
        self,
        store: Store | None = None,
        *,
        merge: MergeFunction | None = None,
        registry: SourceMapRegistry | None = None,
    ) -> None:
        self.store = store if store is not None else MemoryStore()
        self.merge = merge if merge is not None else merge_file_coverage
        self.registry = registry if registry is not None else SourceMapRegistry.default()

    def _translate(self, file_coverage: FileCoverageData) -> FileCoverageData:
        path = file_coverage.get("path")
        consumer = self.registry.consumer_for(path) if path else None
        if consumer is None:
            return file_coverage

        translated = translate_file_coverage(file_coverage, consumer)
        skipped = count_skipped(translated)
        log.debug("coverage_translated", path=path, skipped=skipped)
        return translated

    def add(self, coverage: CoverageData, test_name: str | None = None) -> None:
        """Add a coverage object from one test run.

        Args:
            coverage: File path to file coverage mapping.
            test_name: Name of the test that produced ``coverage``. Logged only.

        Raises:
            CoverageError: If a record is malformed or cannot be merged.
                Files processed earlier in the same call stay written.
        """
        for key, file_coverage in coverage.items():
            validate_file_coverage(key, file_coverage)
            if self.store.has_key(key):
                merged = self.merge(file_coverage, self.store.get_object(key))
                self.store.set_object(key, self._translate(merged))
            else:
                self.store.set_object(key, self._translate(file_coverage))
        log.debug("coverage_added", files=len(coverage), test_name=test_name)

    def files(self) -> list[str]:
        """File paths for which coverage has been added."""
        return self.store.keys()

    def file_coverage_for(self, file_name: str) -> FileCoverageData:
        """Coverage for one file, with derived line data.

        Raises:
            UnknownFileError: If ``file_name`` is not one of ``files()``.
        """
        if not self.store.has_key(file_name):
            raise UnknownFileError.for_path(file_name)
        file_coverage = self.store.get_object(file_name)
        add_derived_info(file_coverage)
        return file_coverage

    def get_final_coverage(self) -> CoverageData:
        """Coverage for every file, in the same shape as the objects passed to ``add``."""
        return {file: self.file_coverage_for(file) for file in self.files()}

    def dispose(self) -> None:
        """Release the store's resources."""
        self.store.dispose()

    def __enter__(self) -> Collector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()
