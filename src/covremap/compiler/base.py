"""Compiler protocol and the fixed compile options."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from covremap.config.models import CompilerConfig


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Options every file is compiled with.

    Compilation is assumed deterministic for a given path and these options.
    """

    source_maps: bool = True
    module_format: str = "commonjs"
    ast: bool = False
    presets: tuple[str, ...] = ("@babel/preset-env",)
    auxiliary_comment: str = "istanbul ignore next"
    allow_jsx: bool = True

    @classmethod
    def from_config(cls, config: CompilerConfig) -> CompileOptions:
        return cls(
            module_format=config.module_format,
            presets=tuple(config.presets),
            auxiliary_comment=config.auxiliary_comment,
            allow_jsx=config.allow_jsx,
        )


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Compiled code and the Source Map v3 document describing it."""

    code: str
    source_map: dict[str, Any] = field(default_factory=dict)


class Compiler(Protocol):
    """Protocol for the opaque transpile step."""

    def compile(self, path: Path, options: CompileOptions) -> CompileResult:
        """Compile one file.

        Raises:
            CompileError: If the file cannot be compiled.
        """
        ...
