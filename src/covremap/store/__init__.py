"""Pluggable stores for file coverage records."""

from pathlib import Path

from covremap.core.errors import ConfigError
from covremap.store.base import Store
from covremap.store.memory import MemoryStore
from covremap.store.tmp import TmpStore

STORE_KINDS = ("memory", "tmp")


def create_store(kind: str = "memory", *, tmp_dir: str | Path | None = None) -> Store:
    """Build a store by name.

    Raises:
        ConfigError: If ``kind`` is not a known store.
    """
    if kind == "memory":
        return MemoryStore()
    if kind == "tmp":
        return TmpStore(tmp_dir)
    raise ConfigError.invalid_value(
        "collector.store", kind, f"expected one of {', '.join(STORE_KINDS)}"
    )


__all__ = [
    "STORE_KINDS",
    "MemoryStore",
    "Store",
    "TmpStore",
    "create_store",
]
