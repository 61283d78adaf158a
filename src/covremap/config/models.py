"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVREMAP__SECTION__KEY)
3. Repo YAML (.covremap/config.yaml)
4. Global YAML (~/.config/covremap/config.yaml)
5. Built-in defaults (this file)

Examples:
    COVREMAP__LOGGING__LEVEL=DEBUG
    COVREMAP__COMPILER__TIMEOUT_SEC=120
    COVREMAP__COLLECTOR__STORE=tmp
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
StoreKind = Literal["memory", "tmp"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVREMAP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every translated file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CompilerConfig(BaseModel):
    """Babel invocation used by the compiler cache.

    Env vars:
        COVREMAP__COMPILER__TIMEOUT_SEC: Per-file compile timeout
        COVREMAP__COMPILER__AUXILIARY_COMMENT: Comment placed before generated code
    """

    command: list[str] = Field(
        default_factory=lambda: ["npx", "babel"],
        description="Executable and leading arguments of the Babel CLI.",
    )
    module_format: Literal["commonjs", "preserve"] = Field(
        default="commonjs",
        description="Module format of the compiled output.",
    )
    presets: list[str] = Field(
        default_factory=lambda: ["@babel/preset-env"],
        description="Babel presets fixing the target language level.",
    )
    auxiliary_comment: str = Field(
        default="istanbul ignore next",
        description="Comment inserted before generated helper code so the "
        "instrumentor excludes it from coverage.",
    )
    allow_jsx: bool = Field(
        default=True,
        description="Accept non-standard syntax (JSX).",
    )
    timeout_sec: float = Field(
        default=60.0,
        description="Per-file compile timeout.",
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Compiler command must not be empty")
        return v

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class CollectorConfig(BaseModel):
    """Collector storage configuration.

    Env vars:
        COVREMAP__COLLECTOR__STORE: memory or tmp
        COVREMAP__COLLECTOR__TMP_DIR: Parent directory for the tmp store
    """

    store: StoreKind = Field(
        default="memory",
        description="Store backend. 'tmp' keeps records on disk for large runs.",
    )
    tmp_dir: str | None = Field(
        default=None,
        description="Parent directory for tmp store files. Default: system temp dir.",
    )


class CovRemapConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
