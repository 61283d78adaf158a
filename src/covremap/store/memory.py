"""In-memory store, the collector default."""

import copy

from covremap.coverage.models import FileCoverageData
from covremap.store.base import Store


class MemoryStore(Store):
    """Keeps deep copies of records in a dict."""

    def __init__(self) -> None:
        self._data: dict[str, FileCoverageData] = {}

    def has_key(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)

    def get_object(self, key: str) -> FileCoverageData:
        return copy.deepcopy(self._data[key])

    def set_object(self, key: str, value: FileCoverageData) -> None:
        self._data[key] = copy.deepcopy(value)

    def dispose(self) -> None:
        self._data.clear()
