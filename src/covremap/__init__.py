"""covremap - merge Istanbul coverage across runs, in original source coordinates."""

from covremap.collector import Collector
from covremap.compiler import (
    BabelCompiler,
    CompileOptions,
    CompileResult,
    CompilerCache,
    SourceMapRegistry,
)
from covremap.store import MemoryStore, Store, TmpStore, create_store

__version__ = "0.1.0"

__all__ = [
    "BabelCompiler",
    "Collector",
    "CompileOptions",
    "CompileResult",
    "CompilerCache",
    "MemoryStore",
    "SourceMapRegistry",
    "Store",
    "TmpStore",
    "create_store",
]
