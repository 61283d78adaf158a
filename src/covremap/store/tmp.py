"""Disk-backed store for large coverage runs.

Each record is written as JSON to its own file inside a private temporary
directory. File names are derived from the key hash; the key to file mapping
is kept in memory, so any path is a valid key.
"""

from __future__ import annotations

import hashlib
import json
import shutil
import tempfile
from pathlib import Path

import structlog

from covremap.core.errors import StoreError
from covremap.coverage.models import FileCoverageData
from covremap.store.base import Store

log = structlog.get_logger(__name__)


class TmpStore(Store):
    """Store that keeps one JSON file per record in a temp directory."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        if base_dir is not None:
            Path(base_dir).mkdir(parents=True, exist_ok=True)
        self.root: Path | None = Path(tempfile.mkdtemp(prefix="covremap-", dir=base_dir))
        self._files: dict[str, Path] = {}

    def _require_root(self) -> Path:
        if self.root is None:
            raise StoreError.disposed(type(self).__name__)
        return self.root

    def _file_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8"), usedforsecurity=False).hexdigest()
        return self._require_root() / f"{digest}.json"

    def has_key(self, key: str) -> bool:
        return key in self._files

    def keys(self) -> list[str]:
        return list(self._files)

    def get_object(self, key: str) -> FileCoverageData:
        self._require_root()
        path = self._files[key]
        with path.open(encoding="utf-8") as f:
            data: FileCoverageData = json.load(f)
        return data

    def set_object(self, key: str, value: FileCoverageData) -> None:
        path = self._file_for(key)
        path.write_text(json.dumps(value), encoding="utf-8")
        self._files[key] = path

    def dispose(self) -> None:
        if self.root is None:
            return
        shutil.rmtree(self.root, ignore_errors=True)
        log.debug("store_disposed", root=str(self.root), records=len(self._files))
        self.root = None
        self._files.clear()
