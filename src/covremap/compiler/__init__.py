"""Compile-and-capture: transpile once, publish source maps."""

from covremap.compiler.babel import BabelCompiler, split_inline_source_map
from covremap.compiler.base import CompileOptions, CompileResult, Compiler
from covremap.compiler.cache import CompilerCache
from covremap.compiler.registry import SourceMapRegistry

__all__ = [
    "BabelCompiler",
    "CompileOptions",
    "CompileResult",
    "Compiler",
    "CompilerCache",
    "SourceMapRegistry",
    "split_inline_source_map",
]
