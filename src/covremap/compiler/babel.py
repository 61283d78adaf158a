"""Babel command-line compiler.

Runs the Babel CLI once per file with inline source maps, then splits the
trailing ``sourceMappingURL`` data comment off the generated code.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from covremap.compiler.base import CompileOptions, CompileResult
from covremap.core.errors import CompileError

if TYPE_CHECKING:
    from covremap.config.models import CompilerConfig

log = structlog.get_logger(__name__)

DEFAULT_COMMAND = ("npx", "babel")
JSX_PRESET = "@babel/preset-react"
COMMONJS_PLUGIN = "@babel/plugin-transform-modules-commonjs"

_INLINE_MAP_RE = re.compile(
    r"\n?//[#@] sourceMappingURL=data:application/json;(?:charset=[\w-]+;)?base64,"
    r"(?P<payload>[A-Za-z0-9+/=]+)\s*$"
)


def split_inline_source_map(output: str) -> tuple[str, dict[str, Any] | None]:
    """Split compiled output into (code, source map or None)."""
    match = _INLINE_MAP_RE.search(output)
    if match is None:
        return output, None
    try:
        decoded = base64.b64decode(match.group("payload"), validate=True)
        source_map = json.loads(decoded)
    except (binascii.Error, ValueError):
        return output, None
    if not isinstance(source_map, dict):
        return output, None
    return output[: match.start()], source_map


class BabelCompiler:
    """Compiles files by invoking the Babel CLI."""

    def __init__(
        self,
        command: Sequence[str] | None = None,
        *,
        timeout_sec: float = 60.0,
    ) -> None:
        self.command = list(command or DEFAULT_COMMAND)
        self.timeout_sec = timeout_sec

    @classmethod
    def from_config(cls, config: CompilerConfig) -> BabelCompiler:
        return cls(config.command, timeout_sec=config.timeout_sec)

    def build_command(self, path: Path, options: CompileOptions) -> list[str]:
        cmd = [*self.command, str(path)]
        if options.source_maps:
            cmd.extend(["--source-maps", "inline"])
        if options.auxiliary_comment:
            cmd.extend(["--auxiliary-comment-before", options.auxiliary_comment])

        presets = list(options.presets)
        if options.allow_jsx and JSX_PRESET not in presets:
            presets.append(JSX_PRESET)
        if presets:
            cmd.extend(["--presets", ",".join(presets)])
        if options.module_format == "commonjs":
            cmd.extend(["--plugins", COMMONJS_PLUGIN])
        return cmd

    def compile(self, path: Path, options: CompileOptions) -> CompileResult:
        if not path.is_file():
            raise CompileError.file_not_found(str(path))

        cmd = self.build_command(path, options)
        log.debug("babel_invoke", path=str(path), cmd=cmd)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CompileError.timeout(str(path), self.timeout_sec) from e
        except OSError as e:
            raise CompileError.compiler_unavailable(self.command[0], str(e)) from e

        if result.returncode != 0:
            raise CompileError.failed(str(path), result.returncode, result.stderr)

        code, source_map = split_inline_source_map(result.stdout)
        if options.source_maps and source_map is None:
            raise CompileError.missing_source_map(str(path))
        return CompileResult(code=code, source_map=source_map or {})
