"""Config module exports."""

from covremap.config.loader import CovRemapSettings, load_config
from covremap.config.models import (
    CollectorConfig,
    CompilerConfig,
    CovRemapConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "CovRemapConfig",
    "CovRemapSettings",
    "CollectorConfig",
    "CompilerConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
