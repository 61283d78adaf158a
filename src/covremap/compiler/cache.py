"""Compile-once cache that publishes source maps.

Usage::

    registry = SourceMapRegistry()
    cache = CompilerCache(BabelCompiler(), registry=registry)
    code = cache.transform("/repo/src/app.jsx")   # compiles, registers the map
    code = cache.transform("/repo/src/app.jsx")   # cached, map registered again
"""

from __future__ import annotations

from pathlib import Path

import structlog

from covremap.compiler.babel import BabelCompiler
from covremap.compiler.base import CompileOptions, CompileResult, Compiler
from covremap.compiler.registry import SourceMapRegistry

log = structlog.get_logger(__name__)


class CompilerCache:
    """Caches compile results per path for the lifetime of the instance.

    Failed compiles are not cached.
    """

    def __init__(
        self,
        compiler: Compiler | None = None,
        *,
        registry: SourceMapRegistry | None = None,
        options: CompileOptions | None = None,
    ) -> None:
        self.compiler: Compiler = compiler if compiler is not None else BabelCompiler()
        self.registry = registry if registry is not None else SourceMapRegistry.default()
        self.options = options if options is not None else CompileOptions()
        self._results: dict[str, CompileResult] = {}

    def transform(self, file_path: str | Path) -> str:
        """Return compiled code for ``file_path`` and register its source map."""
        key = str(file_path)
        result = self._results.get(key)
        if result is None:
            result = self.compiler.compile(Path(key), self.options)
            self._results[key] = result
            log.debug("compiled", path=key, code_bytes=len(result.code))
        else:
            log.debug("compile_cache_hit", path=key)

        # Registered on every call so the registry is populated whatever the call order
        self.registry.register(key, result.source_map)
        return result.code

    def cached_paths(self) -> list[str]:
        return list(self._results)

    def clear(self) -> None:
        """Forget cached results. Registered source maps stay."""
        self._results.clear()
