"""Registry of source maps keyed by file path.

The compiler cache writes to it after each transform and the collector reads
from it while translating. Pass the same instance to both; components built
without one share ``SourceMapRegistry.default()``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar

from covremap.remap.consumer import SourceMapConsumer


class SourceMapRegistry:
    """Mapping of file path to Source Map v3 document. Entries are never evicted."""

    _default: ClassVar[SourceMapRegistry | None] = None

    def __init__(self) -> None:
        self._maps: dict[str, dict[str, Any]] = {}
        self._consumers: dict[str, SourceMapConsumer] = {}

    @classmethod
    def default(cls) -> SourceMapRegistry:
        """Process-wide registry used when none is injected."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    def register(self, path: str, source_map: Mapping[str, Any]) -> None:
        self._maps[path] = dict(source_map)
        self._consumers.pop(path, None)

    def get(self, path: str) -> dict[str, Any] | None:
        return self._maps.get(path)

    def consumer_for(self, path: str) -> SourceMapConsumer | None:
        """Decoded consumer for ``path``, built on first use."""
        consumer = self._consumers.get(path)
        if consumer is None:
            raw = self._maps.get(path)
            if raw is None:
                return None
            consumer = SourceMapConsumer.from_dict(raw, path=path)
            self._consumers[path] = consumer
        return consumer

    def __contains__(self, path: object) -> bool:
        return path in self._maps

    def __iter__(self) -> Iterator[str]:
        return iter(self._maps)

    def __len__(self) -> int:
        return len(self._maps)
