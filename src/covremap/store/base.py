"""Store interface for file coverage records."""

from abc import ABC, abstractmethod
from types import TracebackType

from covremap.coverage.models import FileCoverageData


class Store(ABC):
    """Key-value persistence for file coverage records, keyed by file path.

    ``get_object`` returns a copy: mutating it never changes the stored record.
    """

    @abstractmethod
    def has_key(self, key: str) -> bool: ...

    @abstractmethod
    def keys(self) -> list[str]: ...

    @abstractmethod
    def get_object(self, key: str) -> FileCoverageData:
        """Return the record for ``key``.

        Raises:
            KeyError: If ``key`` was never set.
        """

    @abstractmethod
    def set_object(self, key: str, value: FileCoverageData) -> None: ...

    @abstractmethod
    def dispose(self) -> None:
        """Release the store's resources. Safe to call more than once."""

    def __enter__(self) -> "Store":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()
