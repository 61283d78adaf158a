"""covremap error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Compile
- 4xxx: Coverage
- 5xxx: Store
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Compile (3xxx)
    COMPILE_FAILED = 3001
    COMPILE_FILE_NOT_FOUND = 3002
    COMPILER_UNAVAILABLE = 3003
    COMPILE_TIMEOUT = 3004
    COMPILE_MISSING_SOURCE_MAP = 3005

    # Coverage (4xxx)
    COVERAGE_MERGE_INCOMPATIBLE = 4001
    COVERAGE_UNKNOWN_FILE = 4002
    COVERAGE_INVALID_RECORD = 4003
    COVERAGE_INVALID_DOCUMENT = 4004
    COVERAGE_INVALID_SOURCE_MAP = 4005

    # Store (5xxx)
    STORE_DISPOSED = 5001


@dataclass(frozen=True, slots=True)
class CovRemapError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'COMPILE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovRemapError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class CompileError(CovRemapError):
    """Errors raised while compiling a source file.

    Never cached by the compiler cache: the next transform retries.
    """

    @classmethod
    def failed(cls, path: str, returncode: int, stderr: str) -> "CompileError":
        return cls(
            code=ErrorCode.COMPILE_FAILED,
            message=f"Compilation of {path} failed with exit code {returncode}",
            details={"path": path, "returncode": returncode, "stderr": stderr.strip()},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "CompileError":
        return cls(
            code=ErrorCode.COMPILE_FILE_NOT_FOUND,
            message=f"Source file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def compiler_unavailable(cls, command: str, reason: str) -> "CompileError":
        return cls(
            code=ErrorCode.COMPILER_UNAVAILABLE,
            message=f"Compiler '{command}' could not be started: {reason}",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def timeout(cls, path: str, timeout_sec: float) -> "CompileError":
        return cls(
            code=ErrorCode.COMPILE_TIMEOUT,
            message=f"Compilation of {path} timed out after {timeout_sec}s",
            retryable=True,
            details={"path": path, "timeout_sec": timeout_sec},
        )

    @classmethod
    def missing_source_map(cls, path: str) -> "CompileError":
        return cls(
            code=ErrorCode.COMPILE_MISSING_SOURCE_MAP,
            message=f"Compiler output for {path} carries no inline source map",
            details={"path": path},
        )


class CoverageError(CovRemapError):
    """Coverage data errors."""

    @classmethod
    def merge_incompatible(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_MERGE_INCOMPATIBLE,
            message=f"Cannot merge coverage for {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_record(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_INVALID_RECORD,
            message=f"Invalid file coverage for {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_document(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_INVALID_DOCUMENT,
            message=f"Failed to read coverage document {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_source_map(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_INVALID_SOURCE_MAP,
            message=f"Source map for {path} cannot be decoded: {reason}",
            details={"path": path, "reason": reason},
        )


class UnknownFileError(CoverageError, LookupError):
    """Coverage requested for a path that was never added."""

    @classmethod
    def for_path(cls, path: str) -> "UnknownFileError":
        return cls(
            code=ErrorCode.COVERAGE_UNKNOWN_FILE,
            message=f"No coverage collected for {path}",
            details={"path": path},
        )


class StoreError(CovRemapError):
    """Store lifecycle errors."""

    @classmethod
    def disposed(cls, store: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_DISPOSED,
            message=f"{store} has already been disposed",
            details={"store": store},
        )
