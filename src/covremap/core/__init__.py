"""Core module exports."""

from covremap.core.errors import (
    CompileError,
    ConfigError,
    CoverageError,
    CovRemapError,
    ErrorCode,
    StoreError,
    UnknownFileError,
)
from covremap.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "CovRemapError",
    "CompileError",
    "ConfigError",
    "CoverageError",
    "ErrorCode",
    "StoreError",
    "UnknownFileError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
